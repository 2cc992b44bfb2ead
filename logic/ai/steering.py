"""logic/ai/steering.py — AI movement helpers.

Velocity-producing functions used by brain implementations.  They only
nudge ``Velocity``; the movement system does the integrating.
"""

from __future__ import annotations
from core.tuning import get as _tun
from components import Body, Facing, Velocity


def push_toward(vel: Velocity, facing: Facing, direction: int,
                speed: float, accel: float) -> None:
    """Accelerate horizontally along *direction* (±1) and face that way."""
    vel.x += direction * speed * accel
    facing.set_sign(direction)


def jump(vel: Velocity, body: Body, mult: float = 1.0) -> bool:
    """Jump if standing on something.  Returns True if it jumped."""
    if not body.grounded:
        return False
    vel.y = _tun("physics", "jump_force", -14.0) * mult
    body.grounded = False
    return True


def clamp_speed(vel: Velocity, speed: float) -> None:
    """Cap horizontal speed to ± *speed*."""
    vel.x = max(-speed, min(speed, vel.x))
