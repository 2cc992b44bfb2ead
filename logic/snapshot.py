"""logic/snapshot.py — Read-only per-tick view for renderers.

``build_snapshot()`` copies everything a renderer or HUD needs out of
the World into frozen dataclasses.  Nothing in a snapshot aliases live
simulation state, so a renderer can hold on to one across ticks.
"""

from __future__ import annotations
from dataclasses import dataclass
from core.ecs import World
from components import (
    Arena, Body, CharacterProfile, Facing, Fighter, HitFlash, Identity,
    MatchState, Position, Status, Velocity,
)
from components.ai import Brain
from logic.particles import EffectEmitter


@dataclass(frozen=True)
class FighterView:
    eid: int
    name: str
    profile: CharacterProfile
    slot: int
    x: float
    y: float
    vx: float
    vy: float
    width: float
    height: float
    facing: str
    grounded: bool
    alive: bool
    lives: int
    stun: float
    attack_cd: float
    ability_cd: float
    hit_flash: float
    ai_state: str | None = None


@dataclass(frozen=True)
class PlatformView:
    x: float
    y: float
    width: float
    height: float
    is_main: bool


@dataclass(frozen=True)
class ParticleView:
    x: float
    y: float
    life: float
    max_life: float
    color: tuple[int, int, int]
    size: float


@dataclass(frozen=True)
class DecoyView:
    x: float
    y: float
    alpha: float
    color: tuple[int, int, int]


@dataclass(frozen=True)
class MatchView:
    round: int
    timer: float
    phase: str
    wins: tuple[int, ...]
    round_winner: int | None
    match_winner: int | None


@dataclass(frozen=True)
class Snapshot:
    fighters: tuple[FighterView, ...]
    platforms: tuple[PlatformView, ...]
    particles: tuple[ParticleView, ...]
    decoys: tuple[DecoyView, ...]
    match: MatchView

    def fighter(self, eid: int) -> FighterView | None:
        for f in self.fighters:
            if f.eid == eid:
                return f
        return None


def build_snapshot(world: World) -> Snapshot:
    ms = world.res(MatchState)
    arena = world.res(Arena)

    fighters = []
    for eid in ms.roster:
        fighter = world.get(eid, Fighter)
        pos = world.get(eid, Position)
        vel = world.get(eid, Velocity)
        body = world.get(eid, Body)
        status = world.get(eid, Status)
        fighters.append(FighterView(
            eid=eid,
            name=world.get(eid, Identity).name,
            profile=fighter.profile,
            slot=fighter.slot,
            x=pos.x, y=pos.y, vx=vel.x, vy=vel.y,
            width=body.width, height=body.height,
            facing=world.get(eid, Facing).direction,
            grounded=body.grounded,
            alive=fighter.alive,
            lives=fighter.lives,
            stun=status.stun,
            attack_cd=status.attack_cd,
            ability_cd=status.ability_cd,
            hit_flash=world.get(eid, HitFlash).remaining,
            ai_state=world.get(eid, Brain).state if world.has(eid, Brain) else None,
        ))

    platforms = tuple(PlatformView(p.x, p.y, p.width, p.height, p.is_main)
                      for p in arena.platforms)

    effects = world.res(EffectEmitter)
    particles: tuple[ParticleView, ...] = ()
    decoys: tuple[DecoyView, ...] = ()
    if effects is not None:
        particles = tuple(ParticleView(p.x, p.y, p.life, p.max_life, p.color, p.size)
                          for p in effects.particles)
        decoys = tuple(DecoyView(d.x, d.y, d.alpha, d.color) for d in effects.decoys)

    return Snapshot(
        fighters=tuple(fighters),
        platforms=platforms,
        particles=particles,
        decoys=decoys,
        match=MatchView(round=ms.round, timer=ms.timer, phase=ms.phase,
                        wins=tuple(ms.wins), round_winner=ms.round_winner,
                        match_winner=ms.match_winner),
    )
