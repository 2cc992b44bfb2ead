"""components.resources — World-level singletons (not per-entity)."""

from __future__ import annotations
from dataclasses import dataclass, field


PLAYING = "playing"
ROUND_END = "roundEnd"
GAME_OVER = "gameOver"


@dataclass
class GameClock:
    """Accumulated simulation time in seconds (clamped deltas).

    Stamps DevLog entries; gameplay never reads it.
    """
    time: float = 0.0


@dataclass(frozen=True)
class Platform:
    """Static axis-aligned rectangle.

    ``is_main`` marks the ground platform; physics ignores it, the AI
    uses it for edge avoidance.
    """
    x: float
    y: float
    width: float
    height: float
    is_main: bool = False


@dataclass
class Arena:
    """Static stage: bounds plus the platform list in landing order."""
    width: float = 900.0
    height: float = 520.0
    platforms: tuple[Platform, ...] = ()

    @property
    def main_platform(self) -> Platform | None:
        for plat in self.platforms:
            if plat.is_main:
                return plat
        return None


@dataclass
class MatchState:
    """Round / match progress.

    ``roster`` holds fighter ids in slot order; ``wins`` is parallel
    to it.  ``phase`` is one of PLAYING, ROUND_END, GAME_OVER.
    """
    roster: list[int] = field(default_factory=list)
    wins: list[int] = field(default_factory=list)
    round: int = 1
    timer: float = 60.0              # seconds
    phase: str = PLAYING
    round_winner: int | None = None
    match_winner: int | None = None


@dataclass(frozen=True)
class ActionFlags:
    """Abstract per-slot input for one tick."""
    move_left: bool = False
    move_right: bool = False
    jump: bool = False
    attack: bool = False
    use_ability: bool = False
