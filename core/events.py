"""core/events.py — Lightweight event bus.

Decouples systems that need to *signal* something from systems that
*react* to it.  The bus lives as an ECS resource::

    from core.events import EventBus
    bus = world.res(EventBus)
    bus.emit(RoundEnded(winner_id=3, wins=(0, 1, 0), round=1))

Consumers subscribe with a callable::

    bus.subscribe("RoundEnded", my_handler)

And the tick pipeline drains at fixed points of every tick::

    bus.drain()          # calls all handlers for pending events

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends).
  - ``drain()`` processes all queued events in FIFO order.
  - Handlers may emit new events; those are processed in the same drain.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable
from collections import defaultdict


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class AttackIntent:
    """A fighter wants to swing — the combat step resolves it."""
    attacker_eid: int = 0
    jitter: bool = False        # AI swings get a randomised recovery


@dataclass
class AbilityIntent:
    """A fighter wants to fire its special ability."""
    user_eid: int = 0


@dataclass
class FighterEliminated:
    """A fighter fell out of the arena."""
    eid: int = 0
    lives: int = 0


@dataclass
class RoundEnded:
    """Round resolved.  ``winner_id`` is None on a draw."""
    winner_id: int | None = None
    wins: tuple[int, ...] = ()
    round: int = 1


@dataclass
class MatchEnded:
    """A fighter reached the match-win threshold."""
    winner_id: int | None = None
    wins: tuple[int, ...] = ()


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Fire-and-forget event bus stored as an ECS resource."""

    def __init__(self):
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable]] = defaultdict(list)
        self._stats: dict[str, int] = defaultdict(int)

    # ── Public API ───────────────────────────────────────────────────

    def emit(self, event) -> None:
        """Queue an event for processing on next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register *handler* to receive events of *event_type*.

        *event_type* is the class name, e.g. ``"RoundEnded"``.
        """
        self._subs[event_type].append(handler)

    def unsubscribe(self, event_type: str, handler: Callable) -> None:
        """Remove *handler*; unknown handlers are ignored."""
        handlers = self._subs.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def drain(self, only: tuple[type, ...] | None = None) -> int:
        """Process queued events.  Returns number processed.

        With *only*, just events of those types are delivered and the
        rest stay queued (in order) for a later drain.
        """
        processed = 0
        safety = 1000  # prevent infinite loops
        while self._queue and safety > 0:
            if only is None:
                batch = self._queue[:]
                self._queue.clear()
            else:
                batch = [e for e in self._queue if isinstance(e, only)]
                if not batch:
                    break
                self._queue = [e for e in self._queue if not isinstance(e, only)]
            for event in batch:
                name = type(event).__name__
                self._stats[name] += 1
                for handler in list(self._subs.get(name, [])):
                    try:
                        handler(event)
                    except Exception as exc:
                        print(f"[EVENT] handler error for {name}: {exc}")
                        import traceback; traceback.print_exc()
            processed += len(batch)
            safety -= 1
        return processed

    def pending(self, event_type: type | None = None) -> list[Any]:
        """Copy of the queue, optionally filtered by event class."""
        if event_type is None:
            return list(self._queue)
        return [e for e in self._queue if isinstance(e, event_type)]

    def clear(self) -> None:
        """Discard all pending events."""
        self._queue.clear()

    def stats(self) -> dict[str, int]:
        """Return cumulative event counts by type."""
        return dict(self._stats)

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._subs)})"
