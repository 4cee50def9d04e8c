"""components.beam — Beam configuration and runtime state.

Configuration (``BeamConfig`` / ``ParticleConfig``) is frozen: it is
resolved once when a beam is added and shared freely between beams.
Everything that changes per frame lives on ``Beam`` itself.

Style names arrive as strings (options, TOML) and are folded into the
closed ``BeamStyle`` / ``TipStyle`` sets here; anything unrecognised
becomes the documented fallback.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any

from components.particle import Particle
from core import constants as C
from core.tuning import overlay

Point = tuple[float, float]


class Phase(Enum):
    SHOOT = "shoot"     # extending from tail to tip
    FADE = "fade"       # fully extended, dimming
    IDLE = "idle"       # terminal — removed on the next update


class BeamStyle(Enum):
    SOLID = "solid"
    DASHED = "dashed"
    CRACKLING = "crackling"
    TAZER = "tazer"
    PULSING = "pulsing"
    CHARGED = "charged"
    PLASMA = "plasma"
    DISRUPTOR = "disruptor"

    @classmethod
    def parse(cls, value) -> BeamStyle:
        """Map a name (or member) to a style; unknown names → SOLID."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.SOLID


class TipStyle(Enum):
    ARROW = "arrow"
    CIRCLE = "circle"

    @classmethod
    def parse(cls, value) -> TipStyle:
        """Map a name (or member) to a tip style; unknown names → ARROW."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.ARROW


def _point(value) -> Point | None:
    if value is None:
        return None
    x, y = value
    return (float(x), float(y))


@dataclass(frozen=True)
class ParticleConfig:
    color: Any = C.DEFAULT_PARTICLE_COLOR
    glow_color: Any = C.DEFAULT_PARTICLE_GLOW
    size: float = C.DEFAULT_PARTICLE_SIZE
    speed: float = C.DEFAULT_PARTICLE_SPEED
    life: float = C.DEFAULT_PARTICLE_LIFE     # ms
    fade: bool = True
    rate: float = C.DEFAULT_PARTICLE_RATE     # 0..1

    @classmethod
    def option_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}

    def merged(self, options: dict | None) -> ParticleConfig:
        """Return a copy with every recognised key of *options* applied."""
        if not options:
            return self
        known = {k: v for k, v in options.items() if k in self.option_names()}
        return replace(self, **known)


@dataclass(frozen=True)
class BeamConfig:
    """Immutable appearance and timing of one beam."""
    beam_style: BeamStyle = BeamStyle.SOLID
    coords1: Point | None = None
    coords2: Point | None = None
    shoot_duration: float = C.DEFAULT_SHOOT_MS
    fade_duration: float = C.DEFAULT_FADE_MS
    beam_color: Any = C.DEFAULT_BEAM_COLOR
    glow_color: Any = C.DEFAULT_GLOW_COLOR
    tip_color: Any = None                   # None → glow_color
    glow_size: float = C.DEFAULT_GLOW_SIZE
    beam_width: float = C.DEFAULT_BEAM_WIDTH
    tip_size: float = C.DEFAULT_TIP_SIZE
    tip_style: TipStyle = TipStyle.ARROW
    particles: ParticleConfig = field(default_factory=ParticleConfig)

    @classmethod
    def option_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}

    @classmethod
    def from_tuning(cls) -> BeamConfig:
        """Defaults from ``[beams]`` / ``[beams.particles]`` in tuning.toml."""
        base = cls()
        top = overlay("beams", {
            "beam_style": base.beam_style.value,
            "shoot_duration": base.shoot_duration,
            "fade_duration": base.fade_duration,
            "beam_color": base.beam_color,
            "glow_color": base.glow_color,
            "tip_color": base.tip_color,
            "glow_size": base.glow_size,
            "beam_width": base.beam_width,
            "tip_size": base.tip_size,
            "tip_style": base.tip_style.value,
        })
        parts = overlay("beams.particles", {
            f.name: getattr(base.particles, f.name)
            for f in fields(ParticleConfig)
        })
        top["particles"] = parts
        return base.merged(top)

    def merged(self, options: dict | None) -> BeamConfig:
        """Return a new config with *options* laid over this one.

        The nested ``particles`` table is merged key-by-key; unknown keys
        are ignored (callers report them via ``unknown_options``).
        """
        if not options:
            return self
        changes: dict[str, Any] = {}
        for key, value in options.items():
            if key not in self.option_names():
                continue
            if key == "beam_style":
                value = BeamStyle.parse(value)
            elif key == "tip_style":
                value = TipStyle.parse(value)
            elif key in ("coords1", "coords2"):
                value = _point(value)
            elif key == "particles" and not isinstance(value, ParticleConfig):
                value = self.particles.merged(value)
            elif key in ("shoot_duration", "fade_duration", "glow_size",
                         "beam_width", "tip_size"):
                value = float(value)
            changes[key] = value
        return replace(self, **changes)

    @classmethod
    def unknown_options(cls, options: dict | None) -> list[str]:
        if not options:
            return []
        bad = [k for k in options if k not in cls.option_names()]
        sub = options.get("particles")
        if isinstance(sub, dict):
            bad += [f"particles.{k}" for k in sub
                    if k not in ParticleConfig.option_names()]
        return bad

    @property
    def resolved_tip_color(self):
        return self.tip_color if self.tip_color is not None else self.glow_color


@dataclass(eq=False)
class Beam:
    """One directional effect instance and its mutable runtime state."""
    id: int
    direction: float
    config: BeamConfig
    active: bool = True
    phase: Phase = Phase.SHOOT
    progress: float = 0.0
    opacity: float = 1.0
    timer: float = 0.0                        # ms in the current phase
    particles: list[Particle] = field(default_factory=list)

    @classmethod
    def create(cls, beam_id: int, direction: float, config: BeamConfig) -> Beam:
        """A static beam (direction 0) starts fully extended, fading."""
        if direction == 0:
            return cls(beam_id, direction, config,
                       phase=Phase.FADE, progress=1.0)
        return cls(beam_id, direction, config)

    @property
    def is_static(self) -> bool:
        return self.direction == 0

    @property
    def style(self) -> BeamStyle:
        return self.config.beam_style

    def endpoints(self) -> tuple[Point, Point]:
        """(tail, head): coords1→coords2 unless the direction is negative."""
        a = self.config.coords1 or (0.0, 0.0)
        b = self.config.coords2 or (0.0, 0.0)
        return (b, a) if self.direction < 0 else (a, b)

    def tip(self) -> Point:
        """Leading end of the beam at the current progress."""
        (x0, y0), (x1, y1) = self.endpoints()
        return (x0 + (x1 - x0) * self.progress,
                y0 + (y1 - y0) * self.progress)

    def __repr__(self) -> str:
        return (f"Beam(id={self.id}, {self.phase.value}, "
                f"progress={self.progress:.2f}, opacity={self.opacity:.2f}, "
                f"particles={len(self.particles)})")
