"""logic — Game systems package.

Subpackages
-----------
combat/     — melee attacks, special abilities, intent handlers
ai/         — brain registry, arena opponent FSM, perception, steering

Top-level modules
-----------------
tick            — per-frame system orchestrator (+ input & timer systems)
movement        — physics / platform landing / ring-out
match           — round / match state machine
entity_factory  — roster validation + match construction
session         — MatchSession tick driver
snapshot        — frozen per-tick view for renderers
input_manager   — pygame keys → per-slot action flags
particles       — effect emitter (particles, decoys)
"""
