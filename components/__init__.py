"""components — ECS component dataclasses, organised by domain.

Submodules
----------
spatial        Position, Velocity, Body, Facing
rendering      Identity, HitFlash
fighter        AbilityKind, CharacterProfile, Fighter, Status
ai             Brain
resources      GameClock, Platform, Arena, MatchState, ActionFlags
dev_log        DevLog

All public names are re-exported here so systems can simply do
``from components import Position``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import Position, Velocity, Body, Facing, center

# ── Rendering ────────────────────────────────────────────────────────
from components.rendering import Identity, HitFlash

# ── Fighters ─────────────────────────────────────────────────────────
from components.fighter import AbilityKind, CharacterProfile, Fighter, Status

# ── AI ───────────────────────────────────────────────────────────────
from components.ai import Brain

# ── World resources / singletons ─────────────────────────────────────
from components.resources import (
    GameClock, Platform, Arena, MatchState, ActionFlags,
    PLAYING, ROUND_END, GAME_OVER,
)

# ── Diagnostics ──────────────────────────────────────────────────────
from components.dev_log import DevLog

__all__ = [
    # spatial
    "Position", "Velocity", "Body", "Facing", "center",
    # rendering
    "Identity", "HitFlash",
    # fighters
    "AbilityKind", "CharacterProfile", "Fighter", "Status",
    # ai
    "Brain",
    # resources
    "GameClock", "Platform", "Arena", "MatchState", "ActionFlags",
    "PLAYING", "ROUND_END", "GAME_OVER",
    # diagnostics
    "DevLog",
]
