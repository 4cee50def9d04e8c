"""scenes/beam_scene.py — Interactive beam sandbox.

LMB fires from the emitter to the cursor, RMB fires the same beam in
reverse (cursor → emitter).  SPACE drops a static beam across the
midline.  1–8 pick the style, T toggles the tip, C clears, D tears the
manager down and builds a fresh one, F5 reloads data/tuning.toml.
"""

from __future__ import annotations
import pygame
from components.beam import BeamStyle, TipStyle
from core import tuning
from core.app import App
from core.constants import BG_COLOR, MS_PER_SECOND
from core.events import EventBus
from core.scene import Scene
from core.surface_canvas import SurfaceCanvas
from logic.beam_manager import BeamManager

_STYLES = list(BeamStyle)
_STYLE_KEYS = {getattr(pygame, f"K_{i + 1}"): s for i, s in enumerate(_STYLES)}


class BeamScene(Scene):
    name = "Beams"

    def __init__(self, options: dict | None = None):
        self._options = dict(options or {})
        self._style = BeamStyle.SOLID
        self._tip = TipStyle.ARROW
        self.bus = EventBus()
        self.manager: BeamManager | None = None
        self._log: list[str] = []
        self.bus.subscribe("BeamAdded", self._on_added)
        self.bus.subscribe("BeamExpired", self._on_expired)
        self.bus.subscribe("BeamRemoved", self._on_removed)

    # ── lifecycle ────────────────────────────────────────────────────

    def on_enter(self, app: App):
        if self.manager is None:
            self._build(app)

    def on_exit(self, app: App):
        if self.manager is not None:
            self.manager.destroy()
            self.manager = None

    def _build(self, app: App):
        canvas = SurfaceCanvas(app.render_surface)
        self.manager = BeamManager(canvas, self._options, bus=self.bus)

    def _emitter(self, app: App) -> tuple[float, float]:
        return (80.0, app.render_surface.get_height() / 2)

    # ── input ────────────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event, app: App):
        if self.manager is None:
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 3):
            direction = 1 if event.button == 1 else -1
            self.manager.add_laser(direction, {
                "coords1": self._emitter(app),
                "coords2": event.pos,
                "beam_style": self._style,
                "tip_style": self._tip,
            })
        elif event.type == pygame.KEYDOWN:
            if event.key in _STYLE_KEYS:
                self._style = _STYLE_KEYS[event.key]
            elif event.key == pygame.K_SPACE:
                self.manager.add_laser(0, beam_style=self._style)
            elif event.key == pygame.K_t:
                self._tip = (TipStyle.CIRCLE if self._tip is TipStyle.ARROW
                             else TipStyle.ARROW)
            elif event.key == pygame.K_c:
                self.manager.clear_all_lasers()
            elif event.key == pygame.K_d:
                self.manager.destroy()
                self._build(app)
            elif event.key == pygame.K_F5:
                tuning.reload()
                self.manager.destroy()
                self._build(app)

    # ── tick / draw ──────────────────────────────────────────────────

    def update(self, dt: float, app: App):
        if self.manager is not None:
            self.manager.update(dt * MS_PER_SECOND)
        self.bus.drain()

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill(BG_COLOR)
        ex, ey = self._emitter(app)
        pygame.draw.circle(surface, (80, 80, 100), (int(ex), int(ey)), 10)
        if self.manager is None:
            return
        self.manager.render()

        sparks = sum(len(b.particles) for b in self.manager.lasers)
        app.draw_text(surface,
                      f"style [{_STYLES.index(self._style) + 1}] {self._style.value}"
                      f"  tip [T] {self._tip.value}"
                      f"  beams {self.manager.get_active_laser_count()}"
                      f"  sparks {sparks}", 8, 8)
        app.draw_text(surface,
                      "LMB fire  RMB reverse  SPACE static  C clear  D rebuild  F5 tuning",
                      8, 26, color=(150, 150, 170), font=app.font_sm)
        for i, line in enumerate(self._log[-5:]):
            app.draw_text(surface, line, 8, surface.get_height() - 90 + i * 16,
                          color=(120, 200, 200), font=app.font_sm)

    # ── event handlers ───────────────────────────────────────────────

    def _note(self, text: str):
        self._log.append(text)
        del self._log[:-20]

    def _on_added(self, ev):
        self._note(f"+ beam {ev.beam_id} {ev.style} dir={ev.direction:+g}")

    def _on_expired(self, ev):
        self._note(f"  beam {ev.beam_id} faded ({ev.particles_left} sparks in flight)")

    def _on_removed(self, ev):
        self._note(f"- beam {ev.beam_id} {ev.reason}")
