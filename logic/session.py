"""logic/session.py — Match session (tick driver).

Owns the World between frames.  Scenes and tests never tick the world
directly; they call ``advance()`` with the frame delta and the current
per-slot action flags, then read ``snapshot()``.

    session = MatchSession.start(["speed-runner"], seed=7)
    session.subscribe("RoundEnded", on_round_end)
    while not session.cancelled:
        snap = session.advance(16.67, inputs)

``cancel()`` stops the session for good: further ``advance()`` calls
are no-ops and every subscription made through the session is
released.
"""

from __future__ import annotations
from typing import Callable, Mapping, Sequence
from core.ecs import World
from core.events import EventBus
from components import ActionFlags, MatchState
from logic.entity_factory import new_match
from logic.match import next_round
from logic.snapshot import Snapshot, build_snapshot
from logic.tick import tick_systems


class MatchSession:
    """A single match from construction to cancellation."""

    def __init__(self, world: World):
        self.world = world
        self.cancelled = False
        self.ticks = 0
        self._subs: list[tuple[str, Callable]] = []
        self._snapshot: Snapshot = build_snapshot(world)

    @classmethod
    def start(cls, picks: Sequence[str], **kw) -> "MatchSession":
        """Validate the roster and build a fresh session (see ``new_match``)."""
        return cls(new_match(picks, **kw))

    # ── State ────────────────────────────────────────────────────────

    @property
    def match(self) -> MatchState:
        return self.world.res(MatchState)

    def snapshot(self) -> Snapshot:
        """Most recently published snapshot."""
        return self._snapshot

    # ── Ticking ──────────────────────────────────────────────────────

    def advance(self, delta_ms: float,
                inputs: Mapping[int, ActionFlags] | None = None) -> Snapshot:
        """Run one tick and publish a new snapshot."""
        if self.cancelled:
            return self._snapshot
        tick_systems(self.world, delta_ms, inputs)
        self.ticks += 1
        self._snapshot = build_snapshot(self.world)
        return self._snapshot

    def next_round(self) -> Snapshot:
        """Start the next round.  Raises ``ValueError`` outside roundEnd."""
        next_round(self.world)
        self._snapshot = build_snapshot(self.world)
        return self._snapshot

    # ── Notifications ────────────────────────────────────────────────

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Subscribe to a lifecycle event (``RoundEnded``, ``MatchEnded``,
        ``FighterEliminated``); released again by ``cancel()``."""
        self.world.res(EventBus).subscribe(event_type, handler)
        self._subs.append((event_type, handler))

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        bus = self.world.res(EventBus)
        for event_type, handler in self._subs:
            bus.unsubscribe(event_type, handler)
        self._subs.clear()
        bus.clear()
        print(f"[MATCH] session cancelled after {self.ticks} ticks "
              f"events={bus.stats()}")
