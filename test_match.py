"""test_match.py — Round resolution, match end and round restart.

Run:  python test_match.py     (or: pytest test_match.py)
"""
from __future__ import annotations
import sys, traceback

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from core.events import EventBus
from components import (
    Brain, Facing, Fighter, HitFlash, MatchState, Position, Status,
    Velocity, PLAYING, ROUND_END, GAME_OVER,
)
from logic.entity_factory import new_match
from logic.match import (
    eliminate_from_round, evaluate_round, next_round, pick_round_winner,
    resolve_round,
)
from logic.particles import EffectEmitter
from logic.tick import tick_systems


def _world(seed: int = 2):
    w = new_match(["heavy-brawler"], seed=seed)
    return w, w.res(MatchState)


def _events(w, name):
    seen = []
    w.res(EventBus).subscribe(name, seen.append)
    return seen


def test_timer_expiry_most_lives_wins():
    w, ms = _world()
    h, a, o = ms.roster
    w.get(h, Fighter).lives = 1
    w.get(o, Fighter).lives = 2
    ms.timer = 0.005
    rounds = _events(w, "RoundEnded")

    tick_systems(w, 16.67, skip_brains=True)

    assert ms.timer == 0
    assert ms.phase == ROUND_END
    assert ms.round_winner == a
    assert ms.wins == [0, 1, 0]
    assert len(rounds) == 1
    assert rounds[0].winner_id == a and rounds[0].wins == (0, 1, 0)


def test_lives_tie_goes_to_roster_order():
    w, ms = _world()
    h, a, o = ms.roster
    w.get(h, Fighter).lives = 1
    assert pick_round_winner(w) == a
    w.get(o, Fighter).lives = 3
    assert pick_round_winner(w) == a


def test_last_fighter_standing_wins():
    w, ms = _world()
    h, a, o = ms.roster
    w.get(o, Fighter).lives = 1
    eliminate_from_round(w, h)
    assert evaluate_round(w) is False
    eliminate_from_round(w, a)
    assert evaluate_round(w) is True
    assert ms.round_winner == o
    assert ms.wins == [0, 0, 1]


def test_draw_awards_nothing_and_cannot_end_match():
    w, ms = _world()
    ms.wins = [1, 1, 1]
    rounds = _events(w, "RoundEnded")
    matches = _events(w, "MatchEnded")
    for eid in ms.roster:
        eliminate_from_round(w, eid)
    assert resolve_round(w) is None
    w.res(EventBus).drain()

    assert ms.wins == [1, 1, 1]
    assert ms.phase == ROUND_END
    assert ms.match_winner is None
    assert rounds[0].winner_id is None
    assert matches == []


def test_second_win_ends_match_in_same_call():
    w, ms = _world()
    h, a, o = ms.roster
    ms.wins = [1, 0, 0]
    matches = _events(w, "MatchEnded")
    eliminate_from_round(w, a)
    eliminate_from_round(w, o)

    assert resolve_round(w) == h
    assert ms.wins == [2, 0, 0]
    assert ms.phase == GAME_OVER
    assert ms.match_winner == h
    w.res(EventBus).drain()
    assert [m.winner_id for m in matches] == [h]

    # terminal: no more rounds, no re-scoring
    try:
        next_round(w)
    except ValueError:
        pass
    else:
        raise AssertionError("next_round() after gameOver must raise")
    assert evaluate_round(w) is False
    assert ms.wins == [2, 0, 0]


def test_wins_increase_by_exactly_one():
    w, ms = _world()
    h, a, o = ms.roster
    eliminate_from_round(w, h)
    eliminate_from_round(w, o)
    resolve_round(w)
    resolve_round(w)        # already resolved: no double count
    assert ms.wins == [0, 1, 0]


def test_next_round_requires_round_end():
    w, ms = _world()
    assert ms.phase == PLAYING
    try:
        next_round(w)
    except ValueError:
        pass
    else:
        raise AssertionError("next_round() while playing must raise")


def test_next_round_resets_round_state_only():
    w, ms = _world()
    h, a, o = ms.roster
    w.get(a, Status).ability_cd = 300.0
    w.get(h, Status).stun = 40.0
    w.get(h, HitFlash).remaining = 12.0
    w.get(o, Brain).state = "flee"
    w.get(h, Velocity).x = 9.0
    w.res(EffectEmitter).burst(100, 100, (255, 0, 0), count=5)
    eliminate_from_round(w, a)
    eliminate_from_round(w, o)
    evaluate_round(w)
    ms.timer = 12.0

    next_round(w)

    assert ms.phase == PLAYING and ms.round == 2
    assert ms.timer == 60.0
    assert ms.round_winner is None
    assert ms.wins == [1, 0, 0]
    assert [w.get(e, Fighter).lives for e in ms.roster] == [3, 2, 2]
    assert all(w.get(e, Fighter).alive for e in ms.roster)
    assert w.get(a, Status).ability_cd == 0
    assert w.get(h, Status).stun == 0
    assert w.get(h, HitFlash).remaining == 0
    assert w.get(h, Velocity).x == 0
    assert w.get(o, Brain).state == "roam"
    assert w.res(EffectEmitter).count == 0

    assert [w.get(e, Position).x for e in ms.roster] == [177.0, 327.0, 497.0]
    assert all(w.get(e, Position).y == 310.0 for e in ms.roster)
    assert [w.get(e, Facing).direction for e in ms.roster] == ["right", "left", "left"]


def test_frozen_between_rounds():
    w, ms = _world()
    h, a, o = ms.roster
    eliminate_from_round(w, a)
    eliminate_from_round(w, o)
    evaluate_round(w)
    y = w.get(h, Position).y
    timer = ms.timer
    tick_systems(w, 16.67, skip_brains=True)
    assert w.get(h, Position).y == y
    assert ms.timer == timer


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    tests = [(n, f) for n, f in list(globals().items())
             if n.startswith("test_") and callable(f)]
    failed = 0
    for name, fn in tests:
        try:
            fn()
            print(f"  [PASS] {name}")
        except Exception:
            failed += 1
            print(f"  [FAIL] {name}")
            traceback.print_exc()
    print(f"\n  Match Tests: {len(tests) - failed} passed, {failed} failed")
    sys.exit(1 if failed else 0)
