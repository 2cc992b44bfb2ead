"""logic/ai/perception.py — Targeting and arena-awareness helpers.

Used by brain implementations to find opponents and to notice when
they are about to walk off the main platform.  Decoys are cosmetic
and never show up here.
"""

from __future__ import annotations
import math
from core.ecs import World
from core.tuning import get as _tun
from components import Arena, Body, Brain, Fighter, Position, center
from components.dev_log import log_to


def fighter_distance(world: World, a: int, b: int) -> float:
    """Center-to-center distance between two fighters."""
    ax, ay = center(world.get(a, Position), world.get(a, Body))
    bx, by = center(world.get(b, Position), world.get(b, Body))
    return math.hypot(bx - ax, by - ay)


def is_valid_target(world: World, eid: int, tid: int | None) -> bool:
    """True if *tid* is another fighter that is still in the round."""
    if tid is None or tid == eid:
        return False
    fighter = world.get(tid, Fighter)
    return fighter is not None and fighter.alive


def nearest_opponent(world: World, eid: int) -> int | None:
    """Closest living opponent, or None.  Ties go to the earlier id."""
    best, best_d = None, math.inf
    for tid, fighter in world.query(Fighter):
        if tid == eid or not fighter.alive:
            continue
        d = fighter_distance(world, eid, tid)
        if d < best_d:
            best, best_d = tid, d
    return best


def acquire_target(world: World, eid: int, brain: Brain) -> int | None:
    """Re-select the nearest living opponent and cache it on *brain*.

    Runs every tick, so steering always follows whoever is closest.  A
    cached id whose fighter has been rung out is logged as it is
    replaced.
    """
    cached = brain.target
    brain.target = nearest_opponent(world, eid)
    if cached is not None and not is_valid_target(world, eid, cached):
        log_to(world, eid, "ai", f"target e{cached} gone → {brain.target}")
    return brain.target


def edge_flags(world: World, eid: int) -> tuple[bool, bool]:
    """``(near_left, near_right)`` relative to the main platform.

    A fighter counts as near an edge when its box is within
    ``[ai] edge_margin`` px of that end.
    """
    plat = world.res(Arena).main_platform
    pos = world.get(eid, Position)
    body = world.get(eid, Body)
    margin = _tun("ai", "edge_margin", 50.0)
    near_left = pos.x < plat.x + margin
    near_right = pos.x + body.width > plat.x + plat.width - margin
    return near_left, near_right
