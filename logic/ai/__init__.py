"""logic/ai — AI subpackage.

Modules
-------
brains       — brain registry + tick_ai dispatcher
arena_brain  — roam / chase / attack / flee FSM for arena opponents
perception   — target acquisition, distance and edge awareness
steering     — velocity helpers (push, jump, speed clamp)
"""
