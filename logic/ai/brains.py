"""logic/ai/brains.py — Brain registry and AI runner.

Public API
----------
``register_brain(name, fn)``  — add a brain to the registry
``get_brain(name)``           — look up a brain by name
``registered_names()``        — list all registered brain names
``tick_ai(world, dt)``        — tick every active brain

Brain implementations register themselves at import time via
``register_brain``.  Import order matters: this module must be
importable before the brain modules that call ``register_brain``.
"""

from __future__ import annotations
from typing import Callable
from core.ecs import World
from components import Brain, Fighter, Status
from components.dev_log import log_to

# ── Registry ─────────────────────────────────────────────────────────

_registry: dict[str, Callable] = {}


def register_brain(name: str, fn: Callable) -> None:
    """Register *fn* as the brain tick function for *name*."""
    _registry[name] = fn


def get_brain(name: str) -> Callable | None:
    """Return the brain function for *name*, or ``None``."""
    return _registry.get(name)


def registered_names() -> list[str]:
    """Return a sorted list of all registered brain names."""
    return sorted(_registry.keys())


# ── Runner ───────────────────────────────────────────────────────────

def tick_ai(world: World, dt: float):
    """Execute brains for every AI fighter still in the round.

    Stunned fighters are skipped entirely: no timer decay, no target
    upkeep, no intents.
    """
    for eid, brain, fighter, status in world.query(Brain, Fighter, Status):
        if not brain.active or not fighter.alive or status.stunned:
            continue

        fn = get_brain(brain.kind)
        if fn:
            try:
                fn(world, eid, brain, dt)
            except Exception as exc:
                import traceback; traceback.print_exc()
                log_to(world, eid, "error", f"brain '{brain.kind}' crash: {exc}")


# ── Side-effect imports: trigger register_brain() calls ──────────────
from logic.ai import arena_brain as _arena_brain                    # noqa: F401, E402
