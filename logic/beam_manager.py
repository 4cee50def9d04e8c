"""logic/beam_manager.py — Owns every live beam.

Usage:
    manager = BeamManager(canvas, {"beam_style": "plasma"})

    # Fire from anywhere:
    bid = manager.add_laser(1, {"coords2": (400, 120)})
    manager.add_laser(-1, beam_width=6)          # kwargs work too
    manager.fire()                               # pure defaults

    # Each frame (host contract: update before render):
    manager.update(dt_ms)
    manager.render()

Option layering, lowest first: built-in constants, ``data/tuning.toml``
``[beams]``, constructor options, ``add_laser`` options.  The resolved
``BeamConfig`` is frozen; only the beam's runtime fields ever change.

When an ``EventBus`` is supplied, lifecycle notices (``BeamAdded``,
``BeamFading``, ``BeamExpired``, ``BeamRemoved``) are queued on it.
"""

from __future__ import annotations
import itertools
import random

from components.beam import Beam, BeamConfig, Phase
from core.canvas import Canvas
from core.events import BeamAdded, BeamExpired, BeamFading, BeamRemoved, EventBus
from logic.beam_fsm import step_beam
from logic.beam_styles import beam_strokes, draw_strokes
from logic.particles import draw_particles, emit_particles, update_particles
from logic.tips import draw_tip, tip_visible


class BeamManager:
    """Beam collection: identity, per-frame update and render."""

    def __init__(self, canvas: Canvas | None, options: dict | None = None, *,
                 rng: random.Random | None = None,
                 bus: EventBus | None = None):
        self.canvas = canvas
        self.rng = rng if rng is not None else random.Random()
        self.bus = bus
        self._beams: list[Beam] = []
        self._ids = itertools.count(1)

        midline = {}
        if canvas is not None:
            mid = canvas.height / 2
            midline = {"coords1": (0, mid), "coords2": (canvas.width, mid)}
        self._warn_unknown(options)
        self.defaults = BeamConfig.from_tuning().merged(midline).merged(options)
        if self.defaults.coords1 is None or self.defaults.coords2 is None:
            print("[BEAMS] no canvas and no coords1/coords2 given; "
                  "beams will have zero length")

    # ── Read access ──────────────────────────────────────────────────

    @property
    def lasers(self) -> list[Beam]:
        """Live beams in insertion order (do not mutate)."""
        return self._beams

    @property
    def count(self) -> int:
        return len(self._beams)

    def get(self, beam_id: int) -> Beam | None:
        for beam in self._beams:
            if beam.id == beam_id:
                return beam
        return None

    def get_active_laser_count(self) -> int:
        return sum(1 for b in self._beams if b.active)

    # ── Lifecycle ────────────────────────────────────────────────────

    def fire(self, direction: float = 1) -> int:
        """Fire a beam with the manager's defaults only."""
        return self.add_laser(direction)

    def add_laser(self, direction: float = 1, options: dict | None = None,
                  **kwargs) -> int:
        """Create a beam and return its id.

        Only the sign of *direction* matters: positive runs
        coords1 → coords2, negative runs back, zero is a static beam that
        appears fully extended and only fades.
        """
        if kwargs:
            options = {**(options or {}), **kwargs}
        self._warn_unknown(options)
        config = self.defaults.merged(options)
        beam = Beam.create(next(self._ids), direction, config)
        self._beams.append(beam)
        self._emit(BeamAdded(beam.id, direction, config.beam_style.value))
        return beam.id

    def remove_laser(self, beam_id: int) -> bool:
        for i, beam in enumerate(self._beams):
            if beam.id == beam_id:
                del self._beams[i]
                self._emit(BeamRemoved(beam_id))
                return True
        return False

    def clear_all_lasers(self) -> None:
        for beam in self._beams:
            self._emit(BeamRemoved(beam.id, reason="cleared"))
        self._beams = []

    def destroy(self) -> None:
        """Drop every beam and particle and let go of the canvas."""
        for beam in self._beams:
            beam.particles.clear()
        n = len(self._beams)
        self._beams = []
        self.canvas = None
        print(f"[BEAMS] destroyed manager ({n} beams released)")

    # ── Tick / draw ──────────────────────────────────────────────────

    def update(self, dt: float) -> None:
        """Advance every beam by *dt* ms, newest first.

        Beams that went inactive on an earlier frame are dropped here.
        """
        for i in range(len(self._beams) - 1, -1, -1):
            beam = self._beams[i]
            if not beam.active:
                del self._beams[i]
                continue
            changed = step_beam(beam, dt)
            if changed is Phase.FADE:
                self._emit(BeamFading(beam.id))
            elif changed is Phase.IDLE:
                self._emit(BeamExpired(beam.id, len(beam.particles)))
            update_particles(beam, dt)

    def render(self) -> None:
        canvas = self.canvas
        if canvas is None:
            return
        for beam in self._beams:
            if beam.active:
                self._render_beam(canvas, beam)

    def _render_beam(self, canvas: Canvas, beam: Beam) -> None:
        cfg = beam.config
        tail, head = beam.endpoints()
        tip = beam.tip()

        canvas.save()
        canvas.global_alpha = beam.opacity
        canvas.shadow_color = cfg.glow_color
        canvas.shadow_blur = cfg.glow_size
        canvas.line_cap = "round"
        canvas.line_width = cfg.beam_width
        canvas.stroke_style = cfg.beam_color

        strokes = beam_strokes(cfg.beam_style, tail, tip, cfg, beam.timer, self.rng)
        draw_strokes(canvas, strokes, beam.opacity)
        canvas.shadow_blur = 0

        if tip_visible(beam):
            draw_tip(canvas, beam, tip, tail, head)
        if beam.phase is Phase.SHOOT:
            emit_particles(beam, tip[0], tip[1], self.rng)
        draw_particles(canvas, beam)
        canvas.restore()

    # ── Internals ────────────────────────────────────────────────────

    def _emit(self, event) -> None:
        if self.bus is not None:
            self.bus.emit(event)

    @staticmethod
    def _warn_unknown(options: dict | None) -> None:
        bad = BeamConfig.unknown_options(options)
        if bad:
            print(f"[BEAMS] ignoring unknown option(s): {', '.join(bad)}")

    def __repr__(self) -> str:
        return (f"BeamManager(beams={len(self._beams)}, "
                f"active={self.get_active_laser_count()})")
