"""logic/combat/abilities.py — Special abilities.

Each ``AbilityKind`` maps to one resolver plus a small parameter
record read from ``[ability.<kind>]`` in tuning.toml.  Adding an
ability means adding a params dataclass, a resolver and a table row.

Every use is instantaneous and restarts the shared recharge window.
No ability ever touches lives.
"""

from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import Callable
from core.ecs import World
from core.tuning import get as _tun, section_dict as _tun_sec
from components import (
    AbilityKind, Body, Facing, Fighter, HitFlash, Position, Status,
    Velocity, center,
)
from components.dev_log import log_to
from logic.particles import EffectEmitter


# ── Parameters ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class DashParams:
    impulse_mult: float = 5.0


@dataclass(frozen=True)
class ShockwaveParams:
    radius: float = 150.0
    force: float = 15.0
    lift: float = 5.0


@dataclass(frozen=True)
class StunBlastParams:
    radius: float = 160.0
    duration: float = 120.0


@dataclass(frozen=True)
class DecoyParams:
    lifetime: float = 180.0
    fade_frames: float = 120.0
    hop_mult: float = 3.0
    jump_mult: float = 0.8


def load_params(kind: AbilityKind):
    """Params for *kind* with any tuning.toml overrides applied."""
    params_cls = _ABILITY_TABLE[kind][0]
    overrides = _tun_sec(f"ability.{kind.value}")
    known = {k: float(v) for k, v in overrides.items()
             if k in params_cls.__dataclass_fields__}
    return params_cls(**known)


# ── Shared ───────────────────────────────────────────────────────────

def _others_within(world: World, eid: int, radius: float):
    """Yield ``(tid, distance, dx, dy)`` for alive fighters within
    *radius* of *eid*'s center.  ``dx, dy`` is the unit direction
    from *eid* to the target."""
    ux, uy = center(world.get(eid, Position), world.get(eid, Body))
    for tid, fighter, pos, body in world.query(Fighter, Position, Body):
        if tid == eid or not fighter.alive:
            continue
        tx, ty = center(pos, body)
        d = math.hypot(tx - ux, ty - uy)
        if d < radius:
            a = math.atan2(ty - uy, tx - ux)
            yield tid, d, math.cos(a), math.sin(a)


def _flash(world: World, tid: int) -> None:
    world.get(tid, HitFlash).remaining = _tun("combat.melee", "hit_flash", 20.0)


# ── Resolvers ────────────────────────────────────────────────────────

def _dash(world: World, eid: int, p: DashParams,
          effects: EffectEmitter | None) -> list[int]:
    fighter = world.get(eid, Fighter)
    world.get(eid, Velocity).x += (world.get(eid, Facing).sign
                                   * fighter.profile.speed * p.impulse_mult)
    if effects is not None:
        cx, cy = center(world.get(eid, Position), world.get(eid, Body))
        effects.preset("dash", cx, cy, fighter.profile.color)
    return []


def _shockwave(world: World, eid: int, p: ShockwaveParams,
               effects: EffectEmitter | None) -> list[int]:
    """Radial push with linear falloff: full force at the center,
    nothing at the radius."""
    hit = []
    for tid, d, dx, dy in _others_within(world, eid, p.radius):
        force = (p.radius - d) / p.radius * p.force
        vel = world.get(tid, Velocity)
        vel.x += dx * force
        vel.y += dy * force - p.lift
        _flash(world, tid)
        hit.append(tid)

    if effects is not None:
        pos = world.get(eid, Position)
        body = world.get(eid, Body)
        sw = _tun_sec("particles.shockwave")
        effects.ring(pos.x + body.width / 2, pos.y + body.height,
                     world.get(eid, Fighter).profile.color,
                     count=int(sw.get("count", 24)),
                     speed_x=float(sw.get("speed_x", 8.0)),
                     speed_y=float(sw.get("speed_y", 3.0)),
                     lift=2.0,
                     life=float(sw.get("life", 25.0)),
                     size=float(sw.get("size", 6.0)))
    return hit


def _stun_blast(world: World, eid: int, p: StunBlastParams,
                effects: EffectEmitter | None) -> list[int]:
    color = world.get(eid, Fighter).profile.color
    hit = []
    for tid, _d, _dx, _dy in _others_within(world, eid, p.radius):
        world.get(tid, Status).stun = p.duration
        _flash(world, tid)
        hit.append(tid)
        if effects is not None:
            tx, ty = center(world.get(tid, Position), world.get(tid, Body))
            effects.preset("stun", tx, ty, color)

    if effects is not None:
        st = _tun_sec("particles.stun")
        ring_color = tuple(st.get("color", color))
        cx, cy = center(world.get(eid, Position), world.get(eid, Body))
        effects.ring(cx, cy, ring_color,
                     count=int(st.get("ring_count", 16)),
                     speed_x=float(st.get("ring_speed", 6.0)),
                     life=float(st.get("ring_life", 30.0)),
                     size=float(st.get("ring_size", 5.0)))
    return hit


def _decoy(world: World, eid: int, p: DecoyParams,
           effects: EffectEmitter | None) -> list[int]:
    """Leave a cosmetic clone and hop away in a random direction.

    The clone is purely visual: AI perception never sees it.
    """
    fighter = world.get(eid, Fighter)
    cx, cy = center(world.get(eid, Position), world.get(eid, Body))
    if effects is not None:
        effects.spawn_decoy(cx, cy, fighter.profile.color,
                            p.lifetime, p.fade_frames)
        effects.preset("decoy", cx, cy, fighter.profile.color)

    rng = world.res(random.Random) or random
    direction = 1 if rng.random() > 0.5 else -1
    vel = world.get(eid, Velocity)
    vel.x += direction * fighter.profile.speed * p.hop_mult
    vel.y = _tun("physics", "jump_force", -14.0) * p.jump_mult
    return []


_ABILITY_TABLE: dict[AbilityKind, tuple[type, Callable]] = {
    AbilityKind.DASH:       (DashParams, _dash),
    AbilityKind.SHOCKWAVE:  (ShockwaveParams, _shockwave),
    AbilityKind.STUN_BLAST: (StunBlastParams, _stun_blast),
    AbilityKind.DECOY:      (DecoyParams, _decoy),
}


# ── Entry point ──────────────────────────────────────────────────────

def use_ability(world: World, eid: int,
                effects: EffectEmitter | None = None) -> bool:
    """Fire *eid*'s special ability.

    Returns False (and changes nothing) while the recharge window is
    running or the fighter is stunned or out of the round.
    """
    fighter = world.get(eid, Fighter)
    status = world.get(eid, Status)
    if (fighter is None or not fighter.alive or status.stunned
            or status.ability_cd > 0):
        return False

    kind = fighter.profile.ability
    status.ability_cd = _tun("ability", "cooldown", 480.0)
    _params_cls, resolver = _ABILITY_TABLE[kind]
    hit = resolver(world, eid, load_params(kind), effects)

    log_to(world, eid, "ability", f"{fighter.profile.ability_name or kind.value}",
           details={"kind": kind.value, "targets": hit})
    return True
