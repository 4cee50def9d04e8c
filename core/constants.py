"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.

Unit System
-----------
All beam geometry is measured in **surface units** (canvas pixels on the
virtual render surface).  Time is measured in **milliseconds**:

    Distance / position     px      (surface units)
    Duration / age / life   ms      (milliseconds)
    Particle velocity       px/frame  (fixed per-frame displacement)
    Opacity / progress      —       (fraction 0..1)
    Angles                  rad     (radians)

The host loop (``core.app``) ticks in seconds; the beam scene converts
with ``MS_PER_SECOND`` before handing ``dt`` to the manager.
"""

# ── Display ──────────────────────────────────────────────────────────
SCREEN_W = 960
SCREEN_H = 640
FPS = 60
BG_COLOR = (6, 8, 18)

MS_PER_SECOND = 1000.0

# ── Beam defaults (overridden by data/tuning.toml [beams]) ───────────
DEFAULT_BEAM_STYLE = "solid"
DEFAULT_SHOOT_MS = 800.0
DEFAULT_FADE_MS = 800.0
DEFAULT_BEAM_COLOR = "#00ffff"
DEFAULT_GLOW_COLOR = "#00ffff"
DEFAULT_GLOW_SIZE = 24.0
DEFAULT_BEAM_WIDTH = 4.0
DEFAULT_TIP_SIZE = 24.0
DEFAULT_TIP_STYLE = "arrow"

# ── Particle defaults (overridden by [beams.particles]) ──────────────
DEFAULT_PARTICLE_COLOR = "#fff"
DEFAULT_PARTICLE_GLOW = "#00ffff"
DEFAULT_PARTICLE_SIZE = 6.0
DEFAULT_PARTICLE_SPEED = 3.0
DEFAULT_PARTICLE_LIFE = 600.0
DEFAULT_PARTICLE_RATE = 0.8

# ── Geometry constants ───────────────────────────────────────────────
DASH_PATTERN = (16.0, 8.0)          # on / off
CRACKLE_SPACING = 8.0               # px between crackling vertices
CRACKLE_JITTER = 1.5                # × beam_width
TAZER_SPACING = 12.0
TAZER_JITTER = 4.0                  # × beam_width
TAZER_BIAS = 0.3                    # × tazer jitter, alternating sign
PULSE_SPEED = 3.0
PULSE_AMOUNT = 0.6
CHARGED_COUNT = 4
CHARGED_SPREAD = 0.8                # × beam_width
CHARGED_STROKE = 0.3                # × beam_width
PLASMA_LAYERS = ((3.0, 0.3), (1.8, 0.6), (0.8, 1.0))   # (width ×, alpha ×)
PLASMA_CORE_COLOR = "#ffffff"
DISRUPTOR_FRAGMENTS = 3
DISRUPTOR_SEPARATION = 2.0          # × beam_width
DISRUPTOR_SEGMENTS = 8
DISRUPTOR_MERGE_CHANCE = 0.3
DISRUPTOR_PULL = 0.7

# ── Tip ──────────────────────────────────────────────────────────────
TIP_ALPHA = 0.9                     # × beam opacity
TIP_GLOW = 1.5                      # × glow_size
TIP_CIRCLE_RADIUS = 0.6             # × tip_size
TIP_ARROW_BACK = 0.4                # × tip_size behind the tip point
TIP_ARROW_HALF_WIDTH = 0.3          # × tip_size

# ── Particles ────────────────────────────────────────────────────────
PARTICLE_CANDIDATES = 5             # candidates = floor(rate × this)
PARTICLE_MIN_ALPHA = 0.01
PARTICLE_TRAIL_GLOW = 3.0           # × size
PARTICLE_DOT_GLOW = 4.0             # × size
