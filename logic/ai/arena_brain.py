"""logic/ai/arena_brain.py — Arena opponent FSM.

States: roam → chase / attack / flee (re-chosen on a randomised timer)

    decision timer ≤ 0
        near a main-platform edge and coin flip  → flee
        nearest opponent within attack_distance  → attack
        otherwise                                → chase

``chase`` and ``attack`` share movement: steer toward the target and
swing when it is within reach.  ``flee`` steers back toward the middle
of the main platform, ``roam`` drifts.  Swings and abilities are only
*requested* via intents; the combat step resolves them after physics.

Aggression (strength / ``max_strength``) scales how often the brain
jumps while closing in.
"""

from __future__ import annotations
import random
from core.ecs import World
from core.events import EventBus, AttackIntent, AbilityIntent
from core.tuning import get as _tun
from components import Body, Brain, Facing, Fighter, Position, Status, Velocity, center
from components.dev_log import log_to
from logic.ai.brains import register_brain
from logic.ai.perception import (
    acquire_target, edge_flags, fighter_distance,
)
from logic.ai.steering import clamp_speed, jump, push_toward


# ── Decisions ────────────────────────────────────────────────────────

def choose_state(rng: random.Random, near_edge: bool, distance: float) -> str:
    """Pick the next behaviour state."""
    if near_edge and rng.random() < _tun("ai", "flee_chance", 0.5):
        return "flee"
    if distance < _tun("ai", "attack_distance", 120.0):
        return "attack"
    return "chase"


def _decide(world: World, eid: int, brain: Brain, target: int,
            rng: random.Random, near_edge: bool) -> None:
    base = int(_tun("ai", "decision_base", 30))
    spread = int(_tun("ai", "decision_spread", 30))
    brain.timer = base + rng.randint(0, spread - 1)

    distance = fighter_distance(world, eid, target)
    new_state = choose_state(rng, near_edge, distance)
    if new_state != brain.state:
        log_to(world, eid, "ai", f"{brain.state} → {new_state}",
               details={"target": target, "dist": round(distance, 1)})
        brain.state = new_state


# ── Behaviours ───────────────────────────────────────────────────────

def _engage(world: World, eid: int, target: int, rng: random.Random,
            fighter: Fighter, vel: Velocity, body: Body) -> None:
    """Shared chase / attack movement."""
    status = world.get(eid, Status)
    speed = fighter.profile.speed
    cx, _ = center(world.get(eid, Position), body)
    tcx, _ = center(world.get(target, Position), world.get(target, Body))
    direction = 1 if tcx > cx else -1
    push_toward(vel, world.get(eid, Facing), direction, speed,
                _tun("ai", "chase_accel", 0.15))

    bus = world.res(EventBus)
    reach = (_tun("combat.melee", "attack_range", 55.0)
             + _tun("ai", "reach_bonus", 20.0))
    if fighter_distance(world, eid, target) < reach and status.attack_cd <= 0:
        bus.emit(AttackIntent(attacker_eid=eid, jitter=True))

    aggression = fighter.profile.strength / _tun("ai", "max_strength", 8.0)
    if body.grounded and rng.random() < _tun("ai", "jump_chance", 0.02) * aggression:
        jump(vel, body)

    if status.ability_cd <= 0 and rng.random() < _tun("ai", "ability_chance", 0.005):
        bus.emit(AbilityIntent(user_eid=eid))


def _flee(world: World, eid: int, rng: random.Random, fighter: Fighter,
          vel: Velocity, body: Body, near_left: bool, near_right: bool) -> None:
    safe_dir = 1 if near_left else -1
    push_toward(vel, world.get(eid, Facing), safe_dir, fighter.profile.speed,
                _tun("ai", "flee_accel", 0.2))
    if (body.grounded and (near_left or near_right)
            and rng.random() < _tun("ai", "cornered_jump_chance", 0.05)):
        jump(vel, body)


def _roam(rng: random.Random, fighter: Fighter, vel: Velocity, body: Body) -> None:
    if rng.random() < _tun("ai", "roam_nudge_chance", 0.03):
        vel.x += (rng.random() - 0.5) * fighter.profile.speed * _tun("ai", "roam_nudge", 0.4)
    if body.grounded and rng.random() < _tun("ai", "roam_jump_chance", 0.01):
        jump(vel, body, _tun("ai", "roam_jump_mult", 0.8))


# ── Brain ────────────────────────────────────────────────────────────

def arena_brain(world: World, eid: int, brain: Brain, dt: float) -> None:
    """One tick of the arena FSM for *eid*.

    Callers skip stunned and eliminated fighters.
    """
    fighter = world.get(eid, Fighter)
    vel = world.get(eid, Velocity)
    body = world.get(eid, Body)
    rng = world.res(random.Random) or random

    brain.timer = max(0.0, brain.timer - dt)

    target = acquire_target(world, eid, brain)
    if target is None:
        return

    near_left, near_right = edge_flags(world, eid)

    if brain.timer <= 0:
        _decide(world, eid, brain, target, rng, near_left or near_right)

    if brain.state in ("chase", "attack"):
        _engage(world, eid, target, rng, fighter, vel, body)
    elif brain.state == "flee":
        _flee(world, eid, rng, fighter, vel, body, near_left, near_right)
    else:
        _roam(rng, fighter, vel, body)

    clamp_speed(vel, fighter.profile.speed)


register_brain("arena", arena_brain)
