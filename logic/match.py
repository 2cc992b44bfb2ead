"""logic/match.py — Round / match state machine.

    playing ──(timer 0 | ≤1 alive)──▶ roundEnd ──next_round()──▶ playing
                                          │
                                          └──(a counter hits 2)──▶ gameOver

``evaluate_round`` runs at the end of every tick; ``resolve_round``
scores the round and decides whether the match is over in the same
call.  ``next_round`` is the external entry point the UI calls once
the round-end pause has elapsed.

Ring-out elimination lives here too: it is the only way a fighter
loses a life, and it feeds the ``≤1 alive`` trigger.
"""

from __future__ import annotations

from core.ecs import World
from core.events import EventBus, FighterEliminated, RoundEnded, MatchEnded
from core.tuning import get as _tun, section_dict as _tun_sec
from components import (
    Arena, Body, Brain, Facing, Fighter, HitFlash, MatchState, Position,
    Status, Velocity, PLAYING, ROUND_END, GAME_OVER,
)
from components.dev_log import log_to
from logic.particles import EffectEmitter

_DEFAULT_STARTS = [200.0, 350.0, 520.0, 680.0]


# ── Queries ──────────────────────────────────────────────────────────

def fighters_in_order(world: World) -> list[tuple[int, Fighter]]:
    """``(eid, Fighter)`` pairs in roster (slot) order."""
    ms = world.res(MatchState)
    return [(eid, world.get(eid, Fighter)) for eid in ms.roster]


def alive_ids(world: World) -> list[int]:
    return [eid for eid, f in fighters_in_order(world) if f.alive]


# ── Ring-out ─────────────────────────────────────────────────────────

def eliminate_from_round(world: World, eid: int,
                         effects: EffectEmitter | None = None) -> None:
    """Knock *eid* out of the current round and take one life.

    The body is parked below the stage so the renderer has somewhere
    to put it; nothing simulates it until the next round.
    """
    fighter = world.get(eid, Fighter)
    if fighter is None or not fighter.alive:
        return
    pos = world.get(eid, Position)
    vel = world.get(eid, Velocity)
    body = world.get(eid, Body)
    arena = world.res(Arena)

    fighter.alive = False
    vel.x = 0.0
    vel.y = 0.0
    fighter.lives = max(0, fighter.lives - 1)
    pos.y = arena.height + _tun("arena", "offstage_drop", 100.0)

    if effects is not None:
        ro = _tun_sec("particles.ring_out")
        effects.ring(pos.x + body.width / 2, arena.height - 10,
                     fighter.profile.color,
                     count=int(ro.get("count", 20)),
                     speed_x=float(ro.get("speed", 6.0)),
                     lift=float(ro.get("lift", 4.0)),
                     life=float(ro.get("life", 40.0)),
                     size=5.0, size_jitter=4.0)

    bus = world.res(EventBus)
    if bus is not None:
        bus.emit(FighterEliminated(eid=eid, lives=fighter.lives))
    log_to(world, eid, "round", f"ring-out ({fighter.lives} lives left)")
    print(f"[ROUND] e{eid} rang out — {fighter.lives} lives left")


# ── Resolution ───────────────────────────────────────────────────────

def pick_round_winner(world: World) -> int | None:
    """Winner id for the current round, or None for a draw.

    Several survivors (timer expiry) are ranked by lives; on a tie the
    earliest fighter in roster order keeps the win.
    """
    survivors = [(eid, f) for eid, f in fighters_in_order(world) if f.alive]
    if not survivors:
        return None
    if len(survivors) == 1:
        return survivors[0][0]
    winner, best = None, -1
    for eid, f in survivors:
        if f.lives > best:
            winner, best = eid, f.lives
    return winner


def resolve_round(world: World) -> int | None:
    """Score the round, move to roundEnd and check for a match winner.

    Returns the round winner id (None on a draw).  Does nothing unless
    the match is currently playing.
    """
    ms = world.res(MatchState)
    if ms.phase != PLAYING:
        return ms.round_winner

    winner = pick_round_winner(world)
    if winner is not None:
        ms.wins[ms.roster.index(winner)] += 1

    ms.round_winner = winner
    ms.phase = ROUND_END
    bus = world.res(EventBus)
    wins = tuple(ms.wins)
    print(f"[ROUND] round {ms.round} → "
          f"{'draw' if winner is None else f'e{winner}'} wins={list(wins)}")
    if bus is not None:
        bus.emit(RoundEnded(winner_id=winner, wins=wins, round=ms.round))

    needed = int(_tun("match", "wins_needed", 2))
    for idx, count in enumerate(ms.wins):
        if count >= needed:
            ms.match_winner = ms.roster[idx]
            ms.phase = GAME_OVER
            print(f"[MATCH] e{ms.match_winner} takes the match {list(wins)}")
            if bus is not None:
                bus.emit(MatchEnded(winner_id=ms.match_winner, wins=wins))
            break
    return winner


def evaluate_round(world: World) -> bool:
    """End-of-tick check.  Returns True if the round was resolved."""
    ms = world.res(MatchState)
    if ms.phase != PLAYING:
        return False
    if ms.timer <= 0 or len(alive_ids(world)) <= 1:
        resolve_round(world)
        return True
    return False


# ── Round setup ──────────────────────────────────────────────────────

def place_fighters(world: World) -> None:
    """Put every fighter on its start mark with fresh per-round state.

    Lives and win counters are left untouched.
    """
    arena = world.res(Arena)
    ground = arena.main_platform
    starts = list(_tun("arena", "start_x", _DEFAULT_STARTS))
    for eid, fighter in fighters_in_order(world):
        pos = world.get(eid, Position)
        vel = world.get(eid, Velocity)
        body = world.get(eid, Body)
        pos.x = starts[fighter.start % len(starts)] - body.width / 2
        pos.y = ground.y - body.height
        vel.x = 0.0
        vel.y = 0.0
        body.grounded = False
        world.get(eid, Facing).direction = "right" if fighter.start == 0 else "left"
        fighter.alive = True
        world.get(eid, Status).reset()
        world.get(eid, HitFlash).remaining = 0.0
        brain = world.get(eid, Brain)
        if brain is not None:
            brain.reset()


def next_round(world: World) -> None:
    """Advance a finished round to a fresh one.

    Raises ``ValueError`` unless the phase is roundEnd — a match that
    reached gameOver never starts another round.
    """
    ms = world.res(MatchState)
    if ms.phase != ROUND_END:
        raise ValueError(f"next_round() needs phase {ROUND_END!r}, got {ms.phase!r}")
    ms.round += 1
    ms.timer = float(_tun("match", "round_seconds", 60.0))
    ms.phase = PLAYING
    ms.round_winner = None
    effects = world.res(EffectEmitter)
    if effects is not None:
        effects.clear()
    place_fighters(world)
    print(f"[ROUND] round {ms.round} begins")
