"""components.rendering — Visual identity and display feedback."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Identity:
    name: str = "unnamed"      # "player1", "ai2", …
    kind: str = "ai"           # "human" or "ai"


@dataclass
class HitFlash:
    """Brief visual feedback when a fighter is struck.

    Frames remaining; read by the renderer only.
    """
    remaining: float = 0.0
