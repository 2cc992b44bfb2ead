"""components.fighter — Character templates and per-fighter combat state."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class AbilityKind(Enum):
    """Discriminant for the special-ability dispatch table."""
    DASH = "dash"
    SHOCKWAVE = "shockwave"
    STUN_BLAST = "stun_blast"
    DECOY = "decoy"


@dataclass(frozen=True)
class CharacterProfile:
    """Immutable character template shared by every fighter that picks it.

    ``speed``    — max horizontal speed (px / frame).
    ``strength`` — melee knockback scale; also the AI aggression source.
    """
    id: str
    name: str
    speed: float
    strength: float
    ability: AbilityKind
    ability_name: str = ""
    ability_desc: str = ""
    color: tuple[int, int, int] = (255, 255, 255)


@dataclass
class Fighter:
    """A combatant in the arena.

    ``slot``  — 1–3 for a human controller, 0 for the AI.
    ``lives`` — ring-outs left (0–3); persists across rounds.
    ``alive`` — still in the current round.
    ``start`` — index into the arena start layout.
    """
    profile: CharacterProfile
    slot: int = 0
    lives: int = 3
    alive: bool = True
    start: int = 0

    @property
    def is_human(self) -> bool:
        return self.slot > 0


@dataclass
class Status:
    """Countdown timers in frames.  Never negative."""
    stun: float = 0.0
    attack_cd: float = 0.0
    ability_cd: float = 0.0

    @property
    def stunned(self) -> bool:
        return self.stun > 0

    def reset(self) -> None:
        self.stun = 0.0
        self.attack_cd = 0.0
        self.ability_cd = 0.0
