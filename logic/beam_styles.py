"""logic/beam_styles.py — Procedural beam geometry.

Each generator turns a tail point, the current tip point and a beam's
config into one or more ``Stroke`` polylines.  Generators never touch
a canvas and keep no state between frames; the stochastic ones draw
every random number from the ``rng`` they are handed, so a seeded
``random.Random`` gives repeatable geometry.

    strokes = beam_strokes(BeamStyle.TAZER, tail, tip, cfg, timer, rng)
    draw_strokes(canvas, strokes, opacity)

``draw_strokes`` expects the caller to have set the beam's base stroke
state (colour, width, glow, round caps) already; a stroke only
overrides what it names.
"""

from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import Any, Callable

from components.beam import BeamConfig, BeamStyle, Point
from core import constants as C
from core.canvas import Canvas


@dataclass
class Stroke:
    points: list[Point]
    width: float
    alpha: float = 1.0             # × beam opacity
    color: Any = None              # None → beam colour
    dash: tuple[float, ...] = ()


Generator = Callable[[Point, Point, BeamConfig, float, random.Random], list[Stroke]]


def _lerp(a: Point, b: Point, t: float) -> Point:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def _jagged(tail: Point, tip: Point, spacing: float, amount: float,
            rng: random.Random, bias: float = 0.0) -> list[Point]:
    """Subdivide tail→tip every *spacing* px and jitter interior vertices.

    The first and last vertex are always exactly *tail* and *tip*.
    """
    dist = math.hypot(tip[0] - tail[0], tip[1] - tail[1])
    segments = int(dist // spacing)
    pts = [tail]
    for i in range(1, segments):
        bx, by = _lerp(tail, tip, i / segments)
        zig = (1 if i % 2 == 0 else -1) * bias
        pts.append((bx + (rng.random() - 0.5) * amount + zig,
                    by + (rng.random() - 0.5) * amount + zig))
    pts.append(tip)
    return pts


# ── Generators ───────────────────────────────────────────────────────

def solid(tail, tip, cfg, timer, rng) -> list[Stroke]:
    return [Stroke([tail, tip], cfg.beam_width)]


def dashed(tail, tip, cfg, timer, rng) -> list[Stroke]:
    return [Stroke([tail, tip], cfg.beam_width, dash=C.DASH_PATTERN)]


def crackling(tail, tip, cfg, timer, rng) -> list[Stroke]:
    amount = cfg.beam_width * C.CRACKLE_JITTER
    return [Stroke(_jagged(tail, tip, C.CRACKLE_SPACING, amount, rng),
                   cfg.beam_width)]


def tazer(tail, tip, cfg, timer, rng) -> list[Stroke]:
    amount = cfg.beam_width * C.TAZER_JITTER
    pts = _jagged(tail, tip, C.TAZER_SPACING, amount, rng,
                  bias=amount * C.TAZER_BIAS)
    return [Stroke(pts, cfg.beam_width)]


def pulsing(tail, tip, cfg, timer, rng) -> list[Stroke]:
    """Width breathes with the beam's own phase timer, not wall clock."""
    pulse = math.sin(timer * C.PULSE_SPEED * 0.01) * C.PULSE_AMOUNT + 1
    return [Stroke([tail, tip], cfg.beam_width * pulse)]


def charged(tail, tip, cfg, timer, rng) -> list[Stroke]:
    spread = cfg.beam_width * C.CHARGED_SPREAD
    width = cfg.beam_width * C.CHARGED_STROKE
    out = []
    for i in range(C.CHARGED_COUNT):
        angle = i / C.CHARGED_COUNT * math.tau
        ox, oy = math.cos(angle) * spread, math.sin(angle) * spread
        out.append(Stroke([(tail[0] + ox, tail[1] + oy),
                           (tip[0] + ox, tip[1] + oy)], width))
    return out


def plasma(tail, tip, cfg, timer, rng) -> list[Stroke]:
    """Wide dim halo → narrow bright core (core forced to white)."""
    out = []
    last = len(C.PLASMA_LAYERS) - 1
    for i, (wmul, amul) in enumerate(C.PLASMA_LAYERS):
        color = C.PLASMA_CORE_COLOR if i == last else None
        out.append(Stroke([tail, tip], cfg.beam_width * wmul, amul, color))
    return out


def disruptor(tail, tip, cfg, timer, rng) -> list[Stroke]:
    """Three parallel fragments that randomly re-merge toward the centre."""
    n = C.DISRUPTOR_FRAGMENTS
    dx, dy = tip[0] - tail[0], tip[1] - tail[1]
    length = math.hypot(dx, dy)
    if length > 0:
        px, py = -dy / length, dx / length
    else:
        px = py = 0.0
    sep = cfg.beam_width * C.DISRUPTOR_SEPARATION
    pull = C.DISRUPTOR_PULL
    out = []
    for i in range(n):
        off = (i - (n - 1) / 2) * sep
        start = (tail[0] + px * off, tail[1] + py * off)
        end = (tip[0] + px * off, tip[1] + py * off)
        pts = [start]
        for j in range(1, C.DISRUPTOR_SEGMENTS + 1):
            t = j / C.DISRUPTOR_SEGMENTS
            x, y = _lerp(start, end, t)
            if rng.random() < C.DISRUPTOR_MERGE_CHANCE:
                cx, cy = _lerp(tail, tip, t)
                x = x * (1 - pull) + cx * pull
                y = y * (1 - pull) + cy * pull
            pts.append((x, y))
        out.append(Stroke(pts, cfg.beam_width / n))
    return out


GENERATORS: dict[BeamStyle, Generator] = {
    BeamStyle.SOLID: solid,
    BeamStyle.DASHED: dashed,
    BeamStyle.CRACKLING: crackling,
    BeamStyle.TAZER: tazer,
    BeamStyle.PULSING: pulsing,
    BeamStyle.CHARGED: charged,
    BeamStyle.PLASMA: plasma,
    BeamStyle.DISRUPTOR: disruptor,
}


def beam_strokes(style, tail: Point, tip: Point, cfg: BeamConfig,
                 timer: float, rng: random.Random) -> list[Stroke]:
    """Dispatch to the generator for *style*; anything unknown draws solid."""
    gen = GENERATORS.get(BeamStyle.parse(style), solid)
    return gen(tail, tip, cfg, timer, rng)


def draw_strokes(canvas: Canvas, strokes: list[Stroke], opacity: float) -> None:
    for s in strokes:
        if len(s.points) < 2:
            continue
        canvas.save()
        canvas.line_width = s.width
        canvas.global_alpha = opacity * s.alpha
        if s.color is not None:
            canvas.stroke_style = s.color
        if s.dash:
            canvas.set_line_dash(s.dash)
        canvas.begin_path()
        canvas.move_to(*s.points[0])
        for x, y in s.points[1:]:
            canvas.line_to(x, y)
        canvas.stroke()
        canvas.restore()
