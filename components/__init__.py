"""components — Plain data records for beams and their particles.

Submodules
----------
beam      Phase, BeamStyle, TipStyle, ParticleConfig, BeamConfig, Beam
particle  Particle

All public names are re-exported here so code can simply do
``from components import Beam``.
"""

from components.particle import Particle
from components.beam import (
    Phase, BeamStyle, TipStyle, ParticleConfig, BeamConfig, Beam,
)

__all__ = [
    "Particle",
    "Phase", "BeamStyle", "TipStyle", "ParticleConfig", "BeamConfig", "Beam",
]
