"""logic/beam_fsm.py — Per-beam lifecycle state machine.

States
------
  SHOOT   progress climbs 0 → 1 over shoot_duration, opacity stays 1
  FADE    progress frozen at 1, opacity falls 1 → 0 over fade_duration
  IDLE    terminal; ``active`` is False and the manager drops the beam

Transitions
-----------
  SHOOT → FADE    progress reached 1          (timer resets to 0)
  FADE  → IDLE    opacity reached 0           (active = False)

A static beam (direction 0) is born in FADE with progress 1.

``step_beam`` only advances the phase; particles are ticked separately
by the manager so they keep moving through the fade.
"""

from __future__ import annotations

from components.beam import Beam, Phase


def phase_fraction(timer: float, duration: float) -> float:
    """timer / duration clamped to [0, 1]; non-positive durations are instant."""
    if duration <= 0:
        return 1.0
    return max(0.0, min(1.0, timer / duration))


def step_beam(beam: Beam, dt: float) -> Phase | None:
    """Advance *beam* by *dt* ms.  Returns the new phase on a transition."""
    if not beam.active or beam.phase is Phase.IDLE:
        return None

    beam.timer += max(0.0, dt)
    cfg = beam.config

    if beam.phase is Phase.SHOOT:
        beam.progress = phase_fraction(beam.timer, cfg.shoot_duration)
        if beam.progress >= 1:
            beam.phase = Phase.FADE
            beam.timer = 0.0
            return Phase.FADE

    elif beam.phase is Phase.FADE:
        beam.opacity = 1 - phase_fraction(beam.timer, cfg.fade_duration)
        if beam.opacity <= 0:
            beam.opacity = 0.0
            beam.phase = Phase.IDLE
            beam.active = False
            return Phase.IDLE

    return None
