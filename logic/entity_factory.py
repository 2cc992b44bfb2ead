"""logic/entity_factory.py — Match construction.

``new_match()`` validates a roster, builds the World resources and
spawns one entity per fighter.  Every configuration problem is raised
here as ``RosterError`` so nothing invalid ever reaches a tick.

Roster rules
------------
- 1–3 human picks, no duplicates, every id a known profile
- AI opponents fill up to ``max(humans + 1, 3)`` fighters, drawn from
  the unpicked profiles in match-RNG shuffled order
- at least one platform, one of them flagged ``is_main``
"""

from __future__ import annotations
import random
from typing import Iterable, Sequence
from core.ecs import World
from core.constants import MAX_HUMANS, MIN_FIGHTERS
from core.data import load_profiles, default_platforms
from core.events import EventBus
from core.tuning import get as _tun
from components import (
    Arena, Body, Brain, CharacterProfile, DevLog, Facing, Fighter,
    GameClock, HitFlash, Identity, MatchState, Platform, Position,
    Status, Velocity,
)
from logic.combat.handlers import install_combat_handlers
from logic.match import place_fighters
from logic.particles import EffectEmitter


class RosterError(ValueError):
    """An invalid roster or stage, rejected before the match starts."""


# ── Validation ───────────────────────────────────────────────────────

def validate_roster(picks: Sequence[str], profiles: dict[str, CharacterProfile],
                    platforms: Sequence[Platform]) -> None:
    if not picks:
        raise RosterError("at least one human player is required")
    if len(picks) > MAX_HUMANS:
        raise RosterError(f"at most {MAX_HUMANS} human players, got {len(picks)}")
    if len(set(picks)) != len(picks):
        raise RosterError(f"duplicate character picks: {list(picks)}")
    unknown = [p for p in picks if p not in profiles]
    if unknown:
        raise RosterError(f"unknown characters: {unknown}")
    if not platforms:
        raise RosterError("the arena needs at least one platform")
    if not any(p.is_main for p in platforms):
        raise RosterError("the arena needs a main platform")


def ai_count(humans: int) -> int:
    """AI opponents for *humans* players (always at least one)."""
    return max(humans + 1, MIN_FIGHTERS) - humans


# ── Spawning ─────────────────────────────────────────────────────────

def spawn_fighter(world: World, profile: CharacterProfile, *, slot: int,
                  start: int, name: str) -> int:
    """Create one fighter entity with its full component set."""
    eid = world.spawn()
    world.add(eid, Identity(name=name, kind="human" if slot > 0 else "ai"))
    world.add(eid, Fighter(profile=profile, slot=slot,
                           lives=int(_tun("fighter", "lives", 3)),
                           start=start))
    world.add(eid, Position())
    world.add(eid, Velocity())
    world.add(eid, Body(width=_tun("fighter", "width", 46.0),
                        height=_tun("fighter", "height", 50.0)))
    world.add(eid, Facing())
    world.add(eid, Status())
    world.add(eid, HitFlash())
    if slot == 0:
        world.add(eid, Brain())
    return eid


def new_match(picks: Sequence[str], *,
              profiles: dict[str, CharacterProfile] | None = None,
              platforms: Iterable[Platform] | None = None,
              seed: int | None = None,
              width: float | None = None,
              height: float | None = None) -> World:
    """Build a ready-to-tick World for the given human *picks*.

    Raises ``RosterError`` for any invalid configuration.  *seed*
    fixes the gameplay RNG (AI picks, AI decisions, cooldown jitter)
    and the cosmetic effect RNG.
    """
    if profiles is None:
        profiles = load_profiles()
    platforms = tuple(default_platforms() if platforms is None else platforms)
    picks = list(picks)
    validate_roster(picks, profiles, platforms)

    rng = random.Random(seed)
    world = World()
    world.set_res(rng)
    world.set_res(Arena(width=_tun("arena", "width", 900.0) if width is None else width,
                        height=_tun("arena", "height", 520.0) if height is None else height,
                        platforms=platforms))
    world.set_res(EventBus())
    world.set_res(DevLog())
    world.set_res(GameClock())
    world.set_res(EffectEmitter(rng=random.Random(rng.random())))

    roster: list[int] = []
    for idx, pick in enumerate(picks):
        roster.append(spawn_fighter(world, profiles[pick], slot=idx + 1,
                                    start=len(roster), name=f"player{idx + 1}"))

    pool = [p for pid, p in profiles.items() if pid not in picks]
    rng.shuffle(pool)
    for idx, profile in enumerate(pool[:ai_count(len(picks))]):
        roster.append(spawn_fighter(world, profile, slot=0,
                                    start=len(roster), name=f"ai{idx + 1}"))

    world.set_res(MatchState(roster=roster, wins=[0] * len(roster),
                             timer=float(_tun("match", "round_seconds", 60.0))))
    place_fighters(world)
    install_combat_handlers(world)

    names = ", ".join(world.get(e, Fighter).profile.id for e in roster)
    print(f"[MATCH] new match: {names} (seed={seed})")
    return world
