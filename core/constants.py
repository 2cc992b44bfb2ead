"""core/constants.py — Shared constants used across the codebase.

Centralises the few numbers that are structural rather than tuning
(tuning lives in ``data/tuning.toml``).

Unit System
-----------
    Distance / position     px
    Velocity                px per reference frame
    Timers (status, AI)     reference frames
    Round timer             s

A *reference frame* is one tick at ``REFERENCE_FPS``.  The tick
pipeline turns the wall-clock delta into a normalised step::

    dt = min(delta_ms, MAX_FRAME_MS) / REFERENCE_FRAME_MS

so a 60 Hz display advances by 1.0 per tick and a 120 Hz display by
~0.5, keeping gameplay speed independent of refresh rate.
"""

REFERENCE_FPS = 60
REFERENCE_FRAME_MS = 16.67
MAX_FRAME_MS = 50.0

# Human slots the input layer can drive.
HUMAN_SLOTS = (1, 2, 3)
MAX_HUMANS = len(HUMAN_SLOTS)
MIN_FIGHTERS = 3

# Window / debug-view size (matches the default arena).
VIEW_W = 900
VIEW_H = 520
