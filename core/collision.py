"""core/collision.py — Low-level AABB / platform collision primitives.

These live in ``core/`` (not ``logic/``) because both the movement
system and the AI edge heuristics need them.  Everything here is pure
arithmetic on floats; no ECS access.
"""

from __future__ import annotations
from components.resources import Platform


def lands_on(x: float, y: float, w: float, h: float, vy: float,
             plat: Platform, *, tolerance: float = 5.0,
             inset: float = 5.0) -> bool:
    """Return True if a box that just moved by ``vy`` lands on *plat*.

    Parameters
    ----------
    x, y : float
        Top-left corner of the box *after* integration.
    w, h : float
        Box size.
    vy : float
        Vertical velocity this tick; the previous bottom edge is
        ``y + h - vy``.
    tolerance : float
        How far below the platform top the previous bottom may sit and
        still count as coming from above.
    inset : float
        Horizontal margin trimmed off both platform ends so a sliver of
        overlap at the very edge does not hold the box up.
    """
    if vy < 0:
        return False
    bottom = y + h
    prev_bottom = bottom - vy
    if bottom < plat.y or prev_bottom > plat.y + tolerance:
        return False
    return x + w > plat.x + inset and x < plat.x + plat.width - inset


def first_landing(x: float, y: float, w: float, h: float, vy: float,
                  platforms, **kw) -> Platform | None:
    """First platform in iteration order that *x, y* lands on, or None."""
    for plat in platforms:
        if lands_on(x, y, w, h, vy, plat, **kw):
            return plat
    return None


def clamp_to_walls(x: float, vx: float, w: float, arena_w: float,
                   restitution: float = 0.5) -> tuple[float, float]:
    """Soft side walls: clamp *x*, reflect *vx* scaled by *restitution*."""
    if x < 0:
        return 0.0, abs(vx) * restitution
    if x + w > arena_w:
        return arena_w - w, -abs(vx) * restitution
    return x, vx
