"""logic/input_manager.py — Key bindings → per-slot action flags.

Sits between raw pygame events and the simulation.  The scene feeds in
raw events; the manager tracks which bound keys are held and turns
them into one ``ActionFlags`` per human slot.  The simulation never
sees a keycode.

Usage (in arena_scene):

    self.input = InputManager()
    for event in events:
        self.input.feed(event)
    session.advance(delta_ms, self.input.actions())
"""

from __future__ import annotations
import pygame
from components import ActionFlags


# ── Default key bindings ────────────────────────────────────────────
# slot → action → keys.  Every action is held (continuous); cooldowns
# gate repeats inside the simulation.

_SLOT_BINDS: dict[int, dict[str, list[int]]] = {
    1: {
        "move_left":   [pygame.K_LEFT],
        "move_right":  [pygame.K_RIGHT],
        "jump":        [pygame.K_UP, pygame.K_SPACE],
        "attack":      [pygame.K_e],
        "use_ability": [pygame.K_q],
    },
    2: {
        "move_left":   [pygame.K_a],
        "move_right":  [pygame.K_d],
        "jump":        [pygame.K_w],
        "attack":      [pygame.K_f],
        "use_ability": [pygame.K_g],
    },
    3: {
        "move_left":   [pygame.K_j],
        "move_right":  [pygame.K_l],
        "jump":        [pygame.K_i],
        "attack":      [pygame.K_o],
        "use_ability": [pygame.K_p],
    },
}


class InputManager:
    """Held-key tracker for up to three local players.

    Call ``feed(event)`` for each pygame event, then ``actions()``
    once per tick.
    """

    def __init__(self, binds: dict[int, dict[str, list[int]]] | None = None):
        self.binds = binds if binds is not None else _SLOT_BINDS
        self._held: set[int] = set()

    def feed(self, event) -> None:
        """Feed a raw pygame event.  Only KEYDOWN / KEYUP matter."""
        if event.type == pygame.KEYDOWN:
            self._held.add(event.key)
        elif event.type == pygame.KEYUP:
            self._held.discard(event.key)

    def release_all(self) -> None:
        """Forget every held key (focus loss, scene change)."""
        self._held.clear()

    def held(self, slot: int, action: str) -> bool:
        keys = self.binds.get(slot, {}).get(action, ())
        return any(k in self._held for k in keys)

    def actions(self) -> dict[int, ActionFlags]:
        """Current ``ActionFlags`` for every bound slot."""
        return {
            slot: ActionFlags(
                move_left=self.held(slot, "move_left"),
                move_right=self.held(slot, "move_right"),
                jump=self.held(slot, "jump"),
                attack=self.held(slot, "attack"),
                use_ability=self.held(slot, "use_ability"),
            )
            for slot in self.binds
        }
