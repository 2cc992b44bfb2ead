"""logic/particles.py — Effect emitter (particles + decoys)

Every descriptor here is gameplay-inert: nothing in the simulation
reads them back, the renderer only draws them from the snapshot.

Usage:
    effects = EffectEmitter(rng=random.Random(seed))
    world.set_res(effects)

    # Resolvers receive the emitter explicitly:
    perform_attack(world, eid, effects)

    # Once per tick, after combat:
    effects.update(dt)

The emitter owns its own RNG so cosmetic randomness never shifts the
gameplay random stream.
"""

from __future__ import annotations
import random
import math
from core.tuning import get as _tun, section_dict as _tun_sec


class Particle:
    __slots__ = ("x", "y", "vx", "vy", "life", "max_life", "color", "size")

    def __init__(
        self,
        x: float, y: float,
        vx: float, vy: float,
        life: float,
        color: tuple[int, int, int],
        size: float = 4.0,
        max_life: float | None = None,
    ):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.life = life
        self.max_life = life if max_life is None else max_life
        self.color = color
        self.size = size


class Decoy:
    """Cosmetic clone left behind by the Trickster."""
    __slots__ = ("x", "y", "life", "color", "alpha", "fade")

    def __init__(self, x: float, y: float, life: float,
                 color: tuple[int, int, int], fade: float = 120.0):
        self.x = x
        self.y = y
        self.life = life
        self.color = color
        self.fade = fade
        self.alpha = 1.0


class EffectEmitter:
    """Owns all live particles and decoys.  Stored as a world resource."""

    def __init__(self, max_particles: int | None = None,
                 rng: random.Random | None = None):
        if max_particles is None:
            max_particles = int(_tun("particles", "max_particles", 600))
        self._particles: list[Particle] = []
        self._decoys: list[Decoy] = []
        self._max = max_particles
        self.rng = rng or random.Random()

    @property
    def count(self) -> int:
        return len(self._particles)

    @property
    def particles(self) -> list[Particle]:
        """Public read-only access to the live particle list."""
        return self._particles

    @property
    def decoys(self) -> list[Decoy]:
        return self._decoys

    # ── emitters ─────────────────────────────────────────────────────

    def emit(self, p: Particle):
        """Add a single particle (low-level)."""
        if len(self._particles) < self._max:
            self._particles.append(p)

    def burst(self, x: float, y: float, color: tuple[int, int, int],
              count: int = 8, force: float = 5.0):
        """Scatter *count* particles outward with a slight upward kick.

        Directions are spread evenly around the circle with a little
        jitter; speed is *force* scaled by 0.5–1.5.
        """
        rng = self.rng
        for i in range(count):
            a = (math.pi * 2 * i) / count + rng.random() * 0.5
            self.emit(Particle(
                x=x, y=y,
                vx=math.cos(a) * force * (0.5 + rng.random()),
                vy=math.sin(a) * force * (0.5 + rng.random()) - 2,
                life=30 + rng.random() * 20,
                max_life=50.0,
                color=color,
                size=3 + rng.random() * 4,
            ))

    def ring(self, x: float, y: float, color: tuple[int, int, int], *,
             count: int, speed_x: float, speed_y: float | None = None,
             lift: float = 0.0, life: float = 30.0, size: float = 5.0,
             size_jitter: float = 0.0):
        """Evenly spaced ring of particles (shockwaves, blasts, ring-outs)."""
        if speed_y is None:
            speed_y = speed_x
        for i in range(count):
            a = (i / count) * math.pi * 2
            self.emit(Particle(
                x=x, y=y,
                vx=math.cos(a) * speed_x,
                vy=math.sin(a) * speed_y - lift,
                life=life,
                color=color,
                size=size + self.rng.random() * size_jitter,
            ))

    def preset(self, name: str, x: float, y: float,
               color: tuple[int, int, int]):
        """Burst using the ``[particles.<name>]`` tuning table."""
        ps = _tun_sec(f"particles.{name}")
        if "color" in ps:
            color = tuple(ps["color"])
        self.burst(x, y, color,
                   count=int(ps.get("count", 8)),
                   force=float(ps.get("force", 5.0)))

    def spawn_decoy(self, x: float, y: float, color: tuple[int, int, int],
                    lifetime: float, fade: float = 120.0) -> Decoy:
        d = Decoy(x, y, lifetime, color, fade)
        self._decoys.append(d)
        return d

    # ── tick ─────────────────────────────────────────────────────────

    def update(self, dt: float):
        """Advance and expire every descriptor by the normalised step."""
        gravity = _tun("particles", "gravity", 0.15)
        alive: list[Particle] = []
        for p in self._particles:
            p.x += p.vx * dt
            p.y += p.vy * dt
            p.vy += gravity * dt
            p.life -= dt
            if p.life > 0:
                alive.append(p)
        self._particles = alive

        decoys: list[Decoy] = []
        for d in self._decoys:
            d.life -= dt
            if d.life > 0:
                d.alpha = min(1.0, d.life / d.fade)
                decoys.append(d)
        self._decoys = decoys

    def clear(self):
        """Remove every particle and decoy immediately."""
        self._particles.clear()
        self._decoys.clear()
