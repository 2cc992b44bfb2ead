"""components.spatial — Position, movement, and collision shapes.

All coordinates and dimensions are in pixels.  ``Position`` is the
top-left corner of the fighter's box; y grows downward, so a negative
``Velocity.y`` is upward.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Position:
    x: float = 0.0        # px
    y: float = 0.0        # px


@dataclass
class Velocity:
    x: float = 0.0        # px / frame
    y: float = 0.0        # px / frame


@dataclass
class Body:
    """Fixed-size box used for landing, hits and ring-out.

    ``grounded`` is recomputed by the movement system every tick —
    it is only True on ticks where the body rests on a platform.
    """
    width: float = 46.0   # px
    height: float = 50.0  # px
    grounded: bool = False


@dataclass
class Facing:
    """Which way a fighter faces: 'right' or 'left'.

    Drives the forward attack point and the dash direction.
    """
    direction: str = "right"

    @property
    def sign(self) -> int:
        return 1 if self.direction == "right" else -1

    def set_sign(self, sign: float) -> None:
        self.direction = "right" if sign > 0 else "left"


def center(pos: Position, body: Body) -> tuple[float, float]:
    """Center point of a fighter's box."""
    return pos.x + body.width / 2, pos.y + body.height / 2
