"""logic/combat/attacks.py — Melee resolution.

``perform_attack()`` is the single attack pipeline for humans and AI
alike.  Knockback only moves fighters; lives are lost exclusively by
ringing out (see ``logic.match.eliminate_from_round``).
"""

from __future__ import annotations
import math
import random
from core.ecs import World
from core.tuning import get as _tun
from components import (
    Body, Facing, Fighter, HitFlash, Position, Status, Velocity, center,
)
from components.dev_log import log_to
from logic.particles import EffectEmitter


# ── Helpers ──────────────────────────────────────────────────────────

def attack_point(world: World, eid: int) -> tuple[float, float]:
    """Point in front of *eid* where its swing connects."""
    cx, cy = center(world.get(eid, Position), world.get(eid, Body))
    reach = _tun("combat.melee", "attack_range", 55.0)
    return cx + world.get(eid, Facing).sign * reach, cy


def get_hit_targets(world: World, eid: int) -> list[int]:
    """Alive fighters (other than *eid*) whose center is within reach
    of the attack point, in roster order."""
    ax, ay = attack_point(world, eid)
    reach = (_tun("combat.melee", "attack_range", 55.0)
             + _tun("combat.melee", "hit_tolerance", 10.0))
    hits = []
    for tid, fighter, pos, body in world.query(Fighter, Position, Body):
        if tid == eid or not fighter.alive:
            continue
        tx, ty = center(pos, body)
        if math.hypot(tx - ax, ty - ay) < reach:
            hits.append(tid)
    return hits


def apply_knockback(world: World, attacker_eid: int, target_eid: int) -> None:
    """Shove *target_eid* away from the attacker's center.

    The push direction comes from relative horizontal position only;
    the attacker's facing plays no part.
    """
    strength = world.get(attacker_eid, Fighter).profile.strength
    acx, _ = center(world.get(attacker_eid, Position), world.get(attacker_eid, Body))
    tcx, _ = center(world.get(target_eid, Position), world.get(target_eid, Body))
    direction = 1 if tcx > acx else -1
    vel = world.get(target_eid, Velocity)
    vel.x += direction * strength * _tun("combat.melee", "knockback_mult", 1.5)
    vel.y -= strength * _tun("combat.melee", "lift_mult", 0.9)
    world.get(target_eid, HitFlash).remaining = _tun("combat.melee", "hit_flash", 20.0)


# ── Attack pipeline ──────────────────────────────────────────────────

def perform_attack(world: World, eid: int,
                   effects: EffectEmitter | None = None, *,
                   jitter: bool = False) -> list[int]:
    """Swing for *eid*.  Returns the ids that were hit.

    A swing while the attack cooldown is still running, or from a
    fighter that is stunned or out of the round, changes nothing.
    *jitter* (AI swings) stretches the recovery window by a random
    0–19 frames drawn from the match RNG.
    """
    fighter = world.get(eid, Fighter)
    status = world.get(eid, Status)
    if (fighter is None or not fighter.alive or status.stunned
            or status.attack_cd > 0):
        return []

    cooldown = _tun("combat.melee", "attack_cooldown", 25.0)
    if jitter:
        spread = int(_tun("combat.melee", "ai_cooldown_jitter", 20))
        rng = world.res(random.Random) or random
        cooldown += rng.randint(0, spread - 1)
    status.attack_cd = cooldown

    ax, ay = attack_point(world, eid)
    if effects is not None:
        effects.preset("swing", ax, ay, fighter.profile.color)

    hits = get_hit_targets(world, eid)
    for tid in hits:
        apply_knockback(world, eid, tid)
        if effects is not None:
            tx, ty = center(world.get(tid, Position), world.get(tid, Body))
            effects.preset("ai_hit" if jitter else "hit", tx, ty,
                           fighter.profile.color)

    if hits:
        log_to(world, eid, "combat", f"hit {', '.join(f'e{t}' for t in hits)}",
               details={"targets": hits, "cooldown": cooldown})
    return hits
