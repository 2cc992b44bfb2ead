"""logic/tick.py — System tick orchestration.

Houses the per-frame system pipeline plus the tiny single-purpose
systems (input, timers) that don't warrant their own files.

Pipeline order, every tick while the round is playing::

    AI brains → human input → movement / ring-out
      → combat intents → timers → effects → round check
      → lifecycle events

Usage::

    from logic.tick import tick_systems
    tick_systems(world, delta_ms, {1: ActionFlags(move_right=True)})
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Mapping

from components import (
    ActionFlags, Body, Facing, Fighter, GameClock, HitFlash, MatchState,
    Status, Velocity, PLAYING,
)
from core.constants import MAX_FRAME_MS, REFERENCE_FRAME_MS
from core.events import EventBus, AttackIntent, AbilityIntent
from core.tuning import get as _tun
from logic.ai.brains import tick_ai
from logic.ai.steering import clamp_speed, jump
from logic.match import evaluate_round
from logic.movement import movement_system
from logic.particles import EffectEmitter

if TYPE_CHECKING:
    from core.ecs import World


def normalise_delta(delta_ms: float) -> tuple[float, float]:
    """Clamp a wall-clock delta and return ``(dt_frames, seconds)``."""
    max_ms = _tun("physics", "max_frame_ms", MAX_FRAME_MS)
    ref_ms = _tun("physics", "reference_frame_ms", REFERENCE_FRAME_MS)
    clamped = min(max(delta_ms, 0.0), max_ms)
    return clamped / ref_ms, clamped / 1000.0


# ── Tiny per-frame systems ───────────────────────────────────────────

def input_system(world: "World", inputs: Mapping[int, ActionFlags] | None) -> None:
    """Apply per-slot action flags to the human fighters.

    Stunned or eliminated fighters ignore their input completely.
    Swings and abilities become intents, resolved after physics.
    """
    if not inputs:
        return
    bus = world.res(EventBus)
    accel = _tun("fighter", "walk_accel", 0.35)
    for eid, fighter, status, vel, body in world.query(Fighter, Status, Velocity, Body):
        if not fighter.is_human or not fighter.alive or status.stunned:
            continue
        flags = inputs.get(fighter.slot)
        if flags is None:
            continue

        speed = fighter.profile.speed
        facing = world.get(eid, Facing)
        if flags.move_left:
            vel.x -= speed * accel
            facing.direction = "left"
        if flags.move_right:
            vel.x += speed * accel
            facing.direction = "right"
        if flags.jump:
            jump(vel, body)
        clamp_speed(vel, speed)

        if flags.attack and status.attack_cd <= 0:
            bus.emit(AttackIntent(attacker_eid=eid))
        if flags.use_ability and status.ability_cd <= 0:
            bus.emit(AbilityIntent(user_eid=eid))


def timer_system(world: "World", dt: float, seconds: float) -> None:
    """Decay status timers (frames) and the round timer (seconds).

    Everything is floored at zero.
    """
    for _eid, status, flash in world.query(Status, HitFlash):
        status.stun = max(0.0, status.stun - dt)
        status.attack_cd = max(0.0, status.attack_cd - dt)
        status.ability_cd = max(0.0, status.ability_cd - dt)
        flash.remaining = max(0.0, flash.remaining - dt)

    ms = world.res(MatchState)
    ms.timer = max(0.0, ms.timer - seconds)


# ── Pipeline ─────────────────────────────────────────────────────────

def tick_systems(world: "World", delta_ms: float,
                 inputs: Mapping[int, ActionFlags] | None = None,
                 *, skip_brains: bool = False) -> None:
    """Run every gameplay system for one frame.

    Parameters
    ----------
    world : World
        A world built by ``logic.entity_factory.new_match``.
    delta_ms : float
        Wall-clock milliseconds since the previous tick.  Clamped to
        ``max_frame_ms`` before being normalised to reference frames.
    inputs : Mapping[int, ActionFlags]
        Action flags per human slot (1–3).  Missing slots are idle.
    skip_brains : bool
        Skip AI brain ticks (useful in tests).
    """
    dt, seconds = normalise_delta(delta_ms)

    clock = world.res(GameClock)
    if clock:
        clock.time += seconds

    effects = world.res(EffectEmitter)
    ms = world.res(MatchState)
    if ms.phase != PLAYING:
        # Frozen between rounds; leftover particles still settle.
        if effects:
            effects.update(dt)
        return

    # Intents
    if not skip_brains:
        tick_ai(world, dt)
    input_system(world, inputs)

    # Physics + ring-out
    movement_system(world, dt, effects)

    # Combat / abilities
    bus = world.res(EventBus)
    if bus:
        bus.drain(only=(AttackIntent, AbilityIntent))

    timer_system(world, dt, seconds)

    if effects:
        effects.update(dt)

    evaluate_round(world)

    # Lifecycle notifications (eliminations, round / match end)
    if bus:
        bus.drain()
