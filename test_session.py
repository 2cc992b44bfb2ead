"""test_session.py — Match construction, session driver, snapshots and input.

Run:  python test_session.py     (or: pytest test_session.py)
"""
from __future__ import annotations
import sys, traceback
import dataclasses
from pathlib import Path
from types import SimpleNamespace

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

import pygame
from core.data import load_profiles, default_platforms
from core.events import EventBus, RoundEnded
from components import (
    ActionFlags, Body, Brain, Facing, Fighter, Identity, MatchState, Platform,
    Position, Velocity, ROUND_END, GAME_OVER,
)
from logic.entity_factory import RosterError, new_match
from logic.input_manager import InputManager
from logic.session import MatchSession


def _quiet_session(seed: int = 8) -> MatchSession:
    """Session whose AI opponents stand still."""
    session = MatchSession.start(["heavy-brawler"], seed=seed)
    for _eid, brain in session.world.query(Brain):
        brain.active = False
    return session


def _raises(exc_type, fn, *args, **kw):
    try:
        fn(*args, **kw)
    except exc_type:
        return True
    return False


# ── Content ──────────────────────────────────────────────────────────

def test_profiles_load_from_toml():
    profiles = load_profiles()
    assert list(profiles) == ["speed-runner", "heavy-brawler",
                              "puzzle-genius", "trickster"]
    brawler = profiles["heavy-brawler"]
    assert brawler.strength == 8 and brawler.speed == 3.5
    assert brawler.ability_name == "Ground Slam"
    assert brawler.color == (255, 107, 107)


def test_default_stage_has_main_platform_first():
    plats = default_platforms()
    assert plats[0].is_main
    assert sum(p.is_main for p in plats) == 1


# ── Roster validation ────────────────────────────────────────────────

def test_invalid_rosters_are_rejected():
    assert _raises(RosterError, new_match, [])
    assert _raises(RosterError, new_match, ["trickster", "trickster"])
    assert _raises(RosterError, new_match, ["nobody"])
    assert _raises(RosterError, new_match,
                   ["speed-runner", "heavy-brawler", "puzzle-genius", "trickster"])
    assert _raises(RosterError, new_match, ["trickster"], platforms=())
    assert _raises(RosterError, new_match, ["trickster"],
                   platforms=[Platform(0, 300, 900, 20)])
    # still a ValueError for callers that don't know the subclass
    assert _raises(ValueError, new_match, [])


def test_ai_fills_to_minimum_roster():
    for picks, total in ((["trickster"], 3),
                         (["trickster", "speed-runner"], 3),
                         (["trickster", "speed-runner", "puzzle-genius"], 4)):
        w = new_match(picks, seed=4)
        roster = w.res(MatchState).roster
        assert len(roster) == total
        fighters = [w.get(e, Fighter) for e in roster]
        humans = [f for f in fighters if f.is_human]
        ais = [f for f in fighters if not f.is_human]
        assert [f.profile.id for f in humans] == picks
        assert [f.slot for f in humans] == list(range(1, len(picks) + 1))
        assert ais, "at least one AI opponent"
        ids = [f.profile.id for f in fighters]
        assert len(set(ids)) == len(ids)


def test_names_and_slots():
    w = new_match(["trickster", "speed-runner"], seed=4)
    roster = w.res(MatchState).roster
    names = [w.get(e, Identity).name for e in roster]
    assert names == ["player1", "player2", "ai1"]
    assert w.res(MatchState).wins == [0, 0, 0]


def test_seed_fixes_ai_picks():
    def ai_ids(seed):
        w = new_match(["trickster"], seed=seed)
        return [w.get(e, Fighter).profile.id for e in w.res(MatchState).roster]
    assert ai_ids(21) == ai_ids(21)


# ── Session ──────────────────────────────────────────────────────────

def test_snapshot_is_frozen_and_detached():
    session = MatchSession.start(["heavy-brawler"], seed=8)
    snap = session.advance(16.67)
    view = snap.fighters[0]
    assert _raises(dataclasses.FrozenInstanceError, setattr, view, "x", 0.0)
    assert len(snap.platforms) == 4
    assert snap.match.phase == "playing"

    eid = view.eid
    session.world.get(eid, Position).x = -999.0
    assert session.snapshot().fighter(eid).x != -999.0


def test_human_input_moves_and_jumps():
    session = _quiet_session()
    eid = session.match.roster[0]
    session.advance(16.67)                        # settle onto the ground
    assert session.world.get(eid, Body).grounded

    snap = session.advance(16.67, {1: ActionFlags(move_right=True)})
    assert snap.fighter(eid).vx > 0
    assert snap.fighter(eid).facing == "right"

    snap = session.advance(16.67, {1: ActionFlags(move_left=True, jump=True)})
    assert snap.fighter(eid).vy < 0
    assert snap.fighter(eid).facing == "left"
    # no double jump while airborne
    vy = session.world.get(eid, Velocity).y
    session.advance(16.67, {1: ActionFlags(jump=True)})
    assert session.world.get(eid, Velocity).y > vy


def test_input_speed_is_clamped():
    session = _quiet_session()
    eid = session.match.roster[0]
    for _ in range(40):
        session.advance(16.67, {1: ActionFlags(move_right=True)})
        assert abs(session.world.get(eid, Velocity).x) <= 3.5


def test_same_seed_same_match():
    def run(seed):
        session = MatchSession.start(["speed-runner"], seed=seed)
        for _ in range(240):
            snap = session.advance(16.67)
        return snap.fighters, snap.match
    assert run(99) == run(99)


def test_cancel_stops_ticks_and_releases_handlers():
    session = MatchSession.start(["heavy-brawler"], seed=8)
    seen = []
    session.subscribe("RoundEnded", seen.append)
    session.advance(16.67)
    session.cancel()
    assert session.cancelled

    ticks = session.ticks
    timer = session.match.timer
    session.advance(16.67)
    assert session.ticks == ticks and session.match.timer == timer

    bus = session.world.res(EventBus)
    bus.emit(RoundEnded(winner_id=None))
    bus.drain()
    assert seen == []


def test_full_match_reaches_game_over():
    session = MatchSession.start(["heavy-brawler"], seed=13)
    notified = []
    session.subscribe("MatchEnded", notified.append)
    for _ in range(20):
        while session.match.phase not in (ROUND_END, GAME_OVER):
            snap = session.advance(50.0)
            for f in snap.fighters:
                assert 0 <= f.lives <= 3
                assert min(f.stun, f.attack_cd, f.ability_cd, f.hit_flash) >= 0
        if session.match.phase == GAME_OVER:
            break
        session.next_round()
    ms = session.match
    assert ms.phase == GAME_OVER
    assert max(ms.wins) == 2
    assert ms.wins.count(2) == 1
    assert notified and notified[0].winner_id == ms.match_winner


# ── Input manager ────────────────────────────────────────────────────

def test_input_manager_maps_slots():
    im = InputManager()
    im.feed(SimpleNamespace(type=pygame.KEYDOWN, key=pygame.K_LEFT))
    im.feed(SimpleNamespace(type=pygame.KEYDOWN, key=pygame.K_w))
    im.feed(SimpleNamespace(type=pygame.KEYDOWN, key=pygame.K_o))
    acts = im.actions()
    assert acts[1] == ActionFlags(move_left=True)
    assert acts[2] == ActionFlags(jump=True)
    assert acts[3] == ActionFlags(attack=True)

    im.feed(SimpleNamespace(type=pygame.KEYUP, key=pygame.K_LEFT))
    assert im.actions()[1] == ActionFlags()
    im.feed(SimpleNamespace(type=pygame.KEYDOWN, key=pygame.K_SPACE))
    assert im.actions()[1].jump
    im.release_all()
    assert all(a == ActionFlags() for a in im.actions().values())


def test_unbound_slots_are_ignored():
    session = _quiet_session()
    eid = session.match.roster[0]
    session.advance(16.67, {3: ActionFlags(move_right=True)})
    assert session.world.get(eid, Facing).direction == "right"
    assert session.world.get(eid, Velocity).x == 0


def test_tables_ship_inside_data_package():
    import data
    from core import tuning
    pkg_dir = Path(data.__file__).resolve().parent
    assert tuning.default_path() == pkg_dir / "tuning.toml"
    assert tuning.default_path().is_file()
    assert (pkg_dir / "characters.toml").is_file()
    assert list(load_profiles()) == ["speed-runner", "heavy-brawler",
                                     "puzzle-genius", "trickster"]


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
    print(f"\n  Session Tests: {len(tests) - failed} passed, {failed} failed")
    sys.exit(1 if failed else 0)
