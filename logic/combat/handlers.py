"""logic/combat/handlers.py — Intent → resolver wiring.

The AI and the input step only *emit* ``AttackIntent`` /
``AbilityIntent``; the tick pipeline drains those after physics, which
lands them here.  Keeping one path means an AI swing and a human swing
are resolved by exactly the same code.
"""

from __future__ import annotations
from core.ecs import World
from core.events import EventBus, AttackIntent, AbilityIntent
from logic.particles import EffectEmitter
from logic.combat.attacks import perform_attack
from logic.combat.abilities import use_ability


def install_combat_handlers(world: World) -> list[tuple[str, object]]:
    """Subscribe the intent handlers on the world's bus.

    Returns the ``(event name, handler)`` pairs so a caller can
    unsubscribe them again.
    """
    bus = world.res(EventBus)

    def on_attack(ev: AttackIntent):
        perform_attack(world, ev.attacker_eid, world.res(EffectEmitter),
                       jitter=ev.jitter)

    def on_ability(ev: AbilityIntent):
        use_ability(world, ev.user_eid, world.res(EffectEmitter))

    subs = [("AttackIntent", on_attack), ("AbilityIntent", on_ability)]
    for name, handler in subs:
        bus.subscribe(name, handler)
    return subs
