"""logic/combat — Combat subpackage.

Modules
-------
attacks      — perform_attack, attack_point, get_hit_targets, apply_knockback
abilities    — use_ability + the AbilityKind dispatch table
handlers     — install_combat_handlers (AttackIntent / AbilityIntent)

Public symbols are re-exported here for ``from logic.combat import X``.
"""

# ── attacks ──────────────────────────────────────────────────────────
from logic.combat.attacks import (                   # noqa: F401
    apply_knockback,
    attack_point,
    get_hit_targets,
    perform_attack,
)

# ── abilities ────────────────────────────────────────────────────────
from logic.combat.abilities import (                 # noqa: F401
    DashParams,
    DecoyParams,
    ShockwaveParams,
    StunBlastParams,
    load_params,
    use_ability,
)

# ── wiring ───────────────────────────────────────────────────────────
from logic.combat.handlers import install_combat_handlers  # noqa: F401
