"""components.ai — Arena opponent brain state."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Brain:
    """Per-fighter AI controller state.

    ``state``  — current behaviour: roam, chase, attack or flee.
    ``timer``  — frames until the next decision (counts down by dt).
    ``target`` — entity id of the nearest living opponent, refreshed
                 every tick, or ``None``.
    ``kind``   — registry key of the brain function that drives it.
    ``active`` — brains only run while True.
    """
    kind: str = "arena"
    state: str = "roam"
    timer: float = 0.0
    target: int | None = None
    active: bool = True

    def reset(self) -> None:
        """Fresh per-round state."""
        self.state = "roam"
        self.timer = 0.0
        self.target = None
