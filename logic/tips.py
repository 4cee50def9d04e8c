"""logic/tips.py — Beam tip marker (arrow head or disc)."""

from __future__ import annotations
import math

from components.beam import Beam, Phase, Point, TipStyle
from core import constants as C
from core.canvas import Canvas


def tip_visible(beam: Beam) -> bool:
    """Tips only show while a moving beam is still shooting."""
    return beam.phase is Phase.SHOOT and not beam.is_static


def draw_tip(canvas: Canvas, beam: Beam, tip: Point,
             tail: Point, head: Point) -> None:
    """Draw the tip at *tip*, oriented along the full tail→head axis."""
    cfg = beam.config
    color = cfg.resolved_tip_color
    size = cfg.tip_size

    canvas.save()
    canvas.global_alpha = beam.opacity * C.TIP_ALPHA
    canvas.fill_style = color
    canvas.shadow_color = color
    canvas.shadow_blur = cfg.glow_size * C.TIP_GLOW

    if cfg.tip_style is TipStyle.CIRCLE:
        canvas.begin_path()
        canvas.arc(tip[0], tip[1], size * C.TIP_CIRCLE_RADIUS, 0, math.tau)
        canvas.fill()
    else:
        angle = math.atan2(head[1] - tail[1], head[0] - tail[0])
        canvas.translate(tip[0], tip[1])
        canvas.rotate(angle)
        canvas.begin_path()
        canvas.move_to(size, 0)
        canvas.line_to(-size * C.TIP_ARROW_BACK, -size * C.TIP_ARROW_HALF_WIDTH)
        canvas.line_to(-size * C.TIP_ARROW_BACK, size * C.TIP_ARROW_HALF_WIDTH)
        canvas.close_path()
        canvas.fill()

    canvas.restore()
