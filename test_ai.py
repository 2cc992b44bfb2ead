"""test_ai.py — Arena opponent FSM, perception and stun suppression.

Run:  python test_ai.py     (or: pytest test_ai.py)

Brains are ticked directly with a forced state and a non-zero decision
timer wherever a test needs to avoid the random re-decision.
"""
from __future__ import annotations
import sys, traceback

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from core.events import EventBus, AttackIntent
from components import (
    ActionFlags, Body, Brain, Facing, Fighter, MatchState, Position,
    Status, Velocity,
)
from components.dev_log import DevLog
from logic.ai.arena_brain import arena_brain
from logic.ai.brains import get_brain, registered_names, tick_ai
from logic.ai.perception import edge_flags, nearest_opponent
from logic.entity_factory import new_match
from logic.tick import tick_systems


def _arena(human_x: float, ai_x: float, other_x: float, seed: int = 11):
    """Human (Heavy Brawler) plus two AIs standing on the main platform."""
    w = new_match(["heavy-brawler"], seed=seed)
    h, a, o = w.res(MatchState).roster
    for eid, x in ((h, human_x), (a, ai_x), (o, other_x)):
        w.get(eid, Position).x = x
        w.get(eid, Position).y = 310.0
        w.get(eid, Body).grounded = True
    return w, h, a, o


def test_arena_brain_is_registered():
    assert "arena" in registered_names()
    assert get_brain("arena") is arena_brain


def test_decision_picks_attack_when_close():
    w, h, a, o = _arena(450.0, 400.0, 650.0)
    brain = w.get(a, Brain)
    arena_brain(w, a, brain, 1.0)
    assert brain.state == "attack"
    assert brain.target == h
    assert 30 <= brain.timer <= 59
    assert w.res(DevLog).for_cat("ai")


def test_decision_picks_chase_when_far():
    w, h, a, o = _arena(550.0, 300.0, 620.0)
    brain = w.get(a, Brain)
    arena_brain(w, a, brain, 1.0)
    assert brain.state == "chase"
    assert w.get(a, Facing).direction == "right"
    assert w.get(a, Velocity).x > 0


def test_decision_timer_counts_down_between_decisions():
    w, h, a, o = _arena(550.0, 300.0, 620.0)
    brain = w.get(a, Brain)
    brain.timer = 10.0
    arena_brain(w, a, brain, 2.5)
    assert brain.timer == 7.5
    assert brain.state == "roam"


def test_attack_state_emits_jittered_intent():
    w, h, a, o = _arena(450.0, 400.0, 650.0)
    brain = w.get(a, Brain)
    brain.state, brain.timer = "attack", 10.0
    arena_brain(w, a, brain, 1.0)
    intents = w.res(EventBus).pending(AttackIntent)
    assert [(i.attacker_eid, i.jitter) for i in intents] == [(a, True)]


def test_no_intent_while_cooling_down():
    w, h, a, o = _arena(450.0, 400.0, 650.0)
    brain = w.get(a, Brain)
    brain.state, brain.timer = "attack", 10.0
    w.get(a, Status).attack_cd = 5.0
    arena_brain(w, a, brain, 1.0)
    assert w.res(EventBus).pending(AttackIntent) == []


def test_stale_target_is_reselected():
    w, h, a, o = _arena(450.0, 400.0, 650.0)
    brain = w.get(a, Brain)
    brain.state, brain.timer, brain.target = "chase", 10.0, o
    w.get(o, Fighter).alive = False
    arena_brain(w, a, brain, 1.0)
    assert brain.target == h


def test_chase_follows_nearest_opponent_not_cached_one():
    w, h, a, o = _arena(300.0, 400.0, 700.0)
    brain = w.get(a, Brain)
    brain.state, brain.timer, brain.target = "chase", 40.0, o
    arena_brain(w, a, brain, 1.0)
    assert brain.target == h
    assert w.get(a, Velocity).x < 0
    assert w.get(a, Facing).direction == "left"


def test_swing_aims_at_nearest_opponent_in_reach():
    w, h, a, o = _arena(450.0, 400.0, 700.0)
    brain = w.get(a, Brain)
    brain.state, brain.timer, brain.target = "chase", 40.0, o
    arena_brain(w, a, brain, 1.0)
    intents = w.res(EventBus).pending(AttackIntent)
    assert [(i.attacker_eid, i.jitter) for i in intents] == [(a, True)]


def test_flee_steers_away_from_edge():
    w, h, a, o = _arena(450.0, 160.0, 650.0)
    assert edge_flags(w, a) == (True, False)
    brain = w.get(a, Brain)
    brain.state, brain.timer = "flee", 10.0
    arena_brain(w, a, brain, 1.0)
    assert w.get(a, Velocity).x > 0
    assert w.get(a, Facing).direction == "right"


def test_edge_flags_right_side():
    w, h, a, o = _arena(450.0, 690.0, 300.0)
    assert edge_flags(w, a) == (False, True)
    w.get(a, Position).x = 400.0
    assert edge_flags(w, a) == (False, False)


def test_speed_is_clamped_after_ai():
    w, h, a, o = _arena(450.0, 400.0, 650.0)
    brain = w.get(a, Brain)
    brain.state, brain.timer = "roam", 10.0
    w.get(a, Velocity).x = 100.0
    arena_brain(w, a, brain, 1.0)
    assert w.get(a, Velocity).x == w.get(a, Fighter).profile.speed


def test_nearest_opponent_skips_eliminated():
    w, h, a, o = _arena(450.0, 400.0, 650.0)
    assert nearest_opponent(w, a) == h
    w.get(h, Fighter).alive = False
    assert nearest_opponent(w, a) == o
    w.get(o, Fighter).alive = False
    assert nearest_opponent(w, a) is None


def test_no_opponents_left_means_no_action():
    w, h, a, o = _arena(450.0, 400.0, 650.0)
    w.get(h, Fighter).alive = False
    w.get(o, Fighter).alive = False
    brain = w.get(a, Brain)
    arena_brain(w, a, brain, 1.0)
    assert w.get(a, Velocity).x == 0
    assert brain.state == "roam"


def test_stun_suppresses_ai_but_not_gravity():
    w, h, a, o = _arena(450.0, 400.0, 650.0)
    # airborne, clear of every ledge
    w.get(a, Position).x, w.get(a, Position).y = 580.0, 100.0
    w.get(a, Body).grounded = False
    w.get(a, Status).stun = 100.0
    w.get(o, Status).stun = 100.0
    brain = w.get(a, Brain)

    tick_ai(w, 1.0)
    assert brain.state == "roam" and brain.timer == 0.0
    assert w.get(a, Velocity).x == 0
    assert w.res(EventBus).pending() == []

    tick_systems(w, 16.67)
    assert w.get(a, Velocity).x == 0
    assert w.get(a, Velocity).y > 0
    assert w.get(a, Position).y > 100.0
    assert abs(w.get(a, Status).stun - 99.0) < 1e-9


def test_stun_suppresses_human_input():
    w, h, a, o = _arena(300.0, 580.0, 650.0)
    for eid in (a, o):
        w.get(eid, Status).stun = 100.0
    w.get(h, Status).stun = 100.0
    w.get(h, Position).y = 100.0
    w.get(h, Body).grounded = False
    flags = {1: ActionFlags(move_right=True, jump=True, attack=True,
                            use_ability=True)}

    tick_systems(w, 16.67, flags)
    assert w.get(h, Velocity).x == 0
    assert w.get(h, Velocity).y > 0
    assert w.get(h, Status).ability_cd == 0
    assert w.get(h, Status).attack_cd == 0


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
    print(f"\n  AI Tests: {len(tests) - failed} passed, {failed} failed")
    sys.exit(1 if failed else 0)
