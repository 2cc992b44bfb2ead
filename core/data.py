"""
core/data.py — TOML → content loader

Reads the static content files (character roster, stage layout) and
turns them into immutable component templates.

You define your components in components/.
You define your game content in .toml files.
This file connects them.

Usage:
    profiles = load_profiles()                 # {id: CharacterProfile}
    platforms = default_platforms()            # main platform first
"""

from __future__ import annotations
try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib
from pathlib import Path
from dataclasses import fields

from components import AbilityKind, CharacterProfile, Platform


_ROOT = Path(__file__).resolve().parent.parent


def load_profiles(path: str | Path | None = None) -> dict[str, CharacterProfile]:
    """Load ``data/characters.toml``.

    Each top-level table becomes one profile keyed by the table name;
    file order is preserved.  An unknown ``ability`` value raises
    ``ValueError`` so bad content never reaches a running match.
    """
    path = _ROOT / "data" / "characters.toml" if path is None else Path(path)
    with open(path, "rb") as f:
        data = tomllib.load(f)

    profiles: dict[str, CharacterProfile] = {}
    for char_id, section in data.items():
        if not isinstance(section, dict):
            continue
        try:
            kind = AbilityKind(section.get("ability", ""))
        except ValueError:
            raise ValueError(
                f"character '{char_id}': unknown ability "
                f"{section.get('ability')!r}") from None
        kwargs = dict(section)
        kwargs["ability"] = kind
        if "color" in kwargs:
            kwargs["color"] = tuple(kwargs["color"])
        profiles[char_id] = _build_component(CharacterProfile,
                                             {"id": char_id, **kwargs})

    print(f"[DATA] Loaded {len(profiles)} characters from {path}")
    return profiles


def default_platforms() -> tuple[Platform, ...]:
    """The carnival stage: ground first, then the floating ledges."""
    return (
        Platform(150.0, 360.0, 600.0, 30.0, is_main=True),
        Platform(100.0, 260.0, 160.0, 20.0),
        Platform(640.0, 260.0, 160.0, 20.0),
        Platform(360.0, 190.0, 180.0, 20.0),
    )


def _build_component(comp_type: type, kwargs: dict):
    """Build a dataclass instance, skipping unknown fields."""
    valid = {f.name for f in fields(comp_type)}
    return comp_type(**{k: v for k, v in kwargs.items() if k in valid})
