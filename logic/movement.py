"""logic/movement.py — Physics / movement system.

Integrates every alive fighter, lands it on platforms, bounces it off
the side walls and rings it out when it drops below the stage.

Per fighter, in order:

  1. grounded := False (never carried over between ticks)
  2. gravity, clamped to the max fall speed
  3. multiplicative friction on vx
  4. position += velocity * dt
  5. first platform landed on (iteration order) snaps the fighter
  6. soft side walls
  7. ring-out below ``arena.height + fall_margin``
"""

from __future__ import annotations
from core.ecs import World
from core.collision import first_landing, clamp_to_walls
from core.tuning import get as _tun
from components import Arena, Body, Fighter, Position, Velocity
from logic.match import eliminate_from_round
from logic.particles import EffectEmitter


def movement_system(world: World, dt: float,
                    effects: EffectEmitter | None = None) -> None:
    """Advance physics for one tick of normalised length *dt*.

    Stunned fighters are integrated like everyone else; only their
    inputs are suppressed upstream.
    """
    arena = world.res(Arena)
    gravity = _tun("physics", "gravity", 0.55)
    max_fall = _tun("physics", "max_fall_speed", 18.0)
    friction = _tun("physics", "friction", 0.82)
    tolerance = _tun("physics", "landing_tolerance", 5.0)
    inset = _tun("physics", "edge_inset", 5.0)
    restitution = _tun("physics", "wall_restitution", 0.5)
    fall_line = arena.height + _tun("arena", "fall_margin", 20.0)

    for eid, fighter, pos, vel, body in world.query(Fighter, Position, Velocity, Body):
        if not fighter.alive:
            continue

        body.grounded = False

        vel.y = min(vel.y + gravity * dt, max_fall)
        vel.x *= friction

        pos.x += vel.x * dt
        pos.y += vel.y * dt

        plat = first_landing(pos.x, pos.y, body.width, body.height, vel.y * dt,
                             arena.platforms, tolerance=tolerance, inset=inset)
        if plat is not None:
            pos.y = plat.y - body.height
            vel.y = 0.0
            body.grounded = True

        pos.x, vel.x = clamp_to_walls(pos.x, vel.x, body.width, arena.width,
                                      restitution)

        if pos.y > fall_line:
            eliminate_from_round(world, eid, effects)
