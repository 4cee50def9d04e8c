"""core/surface_canvas.py — pygame rasteriser for the Canvas API.

pygame's draw module has no global alpha, shadows or dashes, so they
are emulated here:

  - Alpha:  every paint call draws onto a small SRCALPHA layer sized to
            the shape's bounding box, then blits it onto the target.
  - Glow:   ``shadow_blur`` becomes a few widened, translucent passes in
            ``shadow_color`` drawn under the shape.
  - Dashes: polylines are split into on/off runs on the CPU.
  - Caps:   round caps/joins are discs at every vertex.
"""

from __future__ import annotations
import math
import pygame
from core.canvas import Canvas, DrawState, Point, Subpath, Color

_GLOW_PASSES = 3
_GLOW_ALPHA = 0.35


def parse_color(value: Color) -> tuple[int, int, int, int]:
    """Accept ``#rgb``, ``#rrggbb``, ``#rrggbbaa``, names or RGB(A) tuples."""
    if isinstance(value, (tuple, list)):
        if len(value) == 3:
            r, g, b = value
            return (int(r), int(g), int(b), 255)
        r, g, b, a = value[:4]
        return (int(r), int(g), int(b), int(a))
    text = str(value).strip()
    if text.startswith("#") and len(text) in (4, 5):
        text = "#" + "".join(ch * 2 for ch in text[1:])
    c = pygame.Color(text)
    return (c.r, c.g, c.b, c.a)


def dash_polyline(points: list[Point],
                  pattern: tuple[float, ...]) -> list[list[Point]]:
    """Split a polyline into the visible runs of an on/off *pattern*."""
    if not pattern or sum(pattern) <= 0 or len(points) < 2:
        return [list(points)]
    if len(pattern) % 2:
        pattern = pattern * 2
    runs: list[list[Point]] = []
    idx = 0
    left = pattern[0]
    on = True
    current: list[Point] = [points[0]]
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        seg = math.hypot(x1 - x0, y1 - y0)
        pos = 0.0
        while seg - pos > left:
            pos += left
            t = pos / seg
            p = (x0 + (x1 - x0) * t, y0 + (y1 - y0) * t)
            if on:
                current.append(p)
                runs.append(current)
            else:
                current = [p]
            on = not on
            idx = (idx + 1) % len(pattern)
            left = pattern[idx]
        left -= seg - pos
        if on:
            current.append((x1, y1))
    if on and len(current) > 1:
        runs.append(current)
    return runs


class SurfaceCanvas(Canvas):
    """Canvas that paints straight onto a ``pygame.Surface``."""

    def __init__(self, surface: pygame.Surface):
        super().__init__()
        self.surface = surface

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    # ── Layer helper ─────────────────────────────────────────────────

    def _layer(self, points: list[Point], pad: float):
        """Return (layer, ox, oy) covering *points* ± *pad*, or None."""
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        pad = int(math.ceil(pad)) + 2
        box = pygame.Rect(int(min(xs)) - pad, int(min(ys)) - pad,
                          int(max(xs) - min(xs)) + pad * 2 + 1,
                          int(max(ys) - min(ys)) + pad * 2 + 1)
        box = box.clip(self.surface.get_rect())
        if box.width <= 0 or box.height <= 0:
            return None
        return pygame.Surface(box.size, pygame.SRCALPHA), box.x, box.y

    def _paint_lines(self, runs: list[list[Point]], width: float,
                     rgba: tuple[int, int, int, int], round_cap: bool):
        flat = [p for run in runs for p in run]
        if not flat or rgba[3] <= 0:
            return
        got = self._layer(flat, width / 2)
        if got is None:
            return
        layer, ox, oy = got
        w = max(1, int(round(width)))
        for run in runs:
            local = [(x - ox, y - oy) for x, y in run]
            for a, b in zip(local, local[1:]):
                pygame.draw.line(layer, rgba, a, b, w)
            if round_cap and w > 2:
                for p in local:
                    pygame.draw.circle(layer, rgba, p, w / 2)
        self.surface.blit(layer, (ox, oy))

    def _paint_polygon(self, points: list[Point],
                       rgba: tuple[int, int, int, int]):
        if len(points) < 3 or rgba[3] <= 0:
            return
        got = self._layer(points, 1)
        if got is None:
            return
        layer, ox, oy = got
        pygame.draw.polygon(layer, rgba, [(x - ox, y - oy) for x, y in points])
        self.surface.blit(layer, (ox, oy))

    @staticmethod
    def _with_alpha(color: Color, alpha: float) -> tuple[int, int, int, int]:
        r, g, b, a = parse_color(color)
        return (r, g, b, max(0, min(255, int(a * alpha))))

    def _glow_runs(self, runs, base_width: float, state: DrawState):
        if state.shadow_blur <= 0:
            return
        for i in range(_GLOW_PASSES, 0, -1):
            spread = state.shadow_blur * i / _GLOW_PASSES
            alpha = state.global_alpha * _GLOW_ALPHA / i
            self._paint_lines(runs, base_width + spread,
                              self._with_alpha(state.shadow_color, alpha),
                              True)

    # ── Paint ────────────────────────────────────────────────────────

    def _stroke(self, path: list[Subpath], state: DrawState) -> None:
        runs: list[list[Point]] = []
        for sp in path:
            pts = list(sp.points)
            if sp.closed and len(pts) > 1:
                pts.append(pts[0])
            if len(pts) == 1:
                pts.append(pts[0])
            runs.extend(dash_polyline(pts, state.line_dash))
        if not runs:
            return
        self._glow_runs(runs, state.line_width, state)
        self._paint_lines(runs, state.line_width,
                          self._with_alpha(state.stroke_style, state.global_alpha),
                          state.line_cap == "round")

    def _fill(self, path: list[Subpath], state: DrawState) -> None:
        for sp in path:
            pts = list(sp.points)
            if state.shadow_blur > 0 and len(pts) > 1:
                self._glow_runs([pts + [pts[0]]], 0.0, state)
            self._paint_polygon(
                pts, self._with_alpha(state.fill_style, state.global_alpha))
