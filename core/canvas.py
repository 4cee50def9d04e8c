"""core/canvas.py — Immediate-mode 2D drawing surface.

The beam renderer only ever talks to a ``Canvas``.  It mirrors the
familiar HTML-canvas model: a current drawing *state* (alpha, widths,
colours, shadow, dash, transform) with a save/restore stack, and a
*path* built with move/line/arc calls, then stroked or filled.

    canvas.save()
    canvas.global_alpha = 0.5
    canvas.stroke_style = "#00ffff"
    canvas.begin_path()
    canvas.move_to(0, 0)
    canvas.line_to(100, 40)
    canvas.stroke()
    canvas.restore()

Subclasses implement ``_stroke`` / ``_fill`` (and report their size).
Path points are transformed to surface space as they are added, so
backends never see the transform.

Backends
--------
RecordingCanvas   headless; records every stroke/fill as a ``DrawOp``
SurfaceCanvas     pygame rasteriser (see ``core/surface_canvas.py``)
"""

from __future__ import annotations
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace

Point = tuple[float, float]
Color = str | tuple

_IDENTITY = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


@dataclass
class DrawState:
    """Everything ``save()`` / ``restore()`` snapshots."""
    global_alpha: float = 1.0
    line_width: float = 1.0
    line_cap: str = "butt"              # "butt" | "round" | "square"
    stroke_style: Color = "#000"
    fill_style: Color = "#000"
    shadow_color: Color = (0, 0, 0, 0)
    shadow_blur: float = 0.0
    line_dash: tuple[float, ...] = ()
    # affine (a, b, c, d, e, f):  x' = a·x + c·y + e,  y' = b·x + d·y + f
    transform: tuple[float, ...] = _IDENTITY

    def copy(self) -> DrawState:
        return replace(self)


@dataclass
class Subpath:
    points: list[Point] = field(default_factory=list)
    closed: bool = False


class _StateAttr:
    """Expose a ``DrawState`` field as a plain canvas attribute."""

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return getattr(obj.state, self.name)

    def __set__(self, obj, value):
        setattr(obj.state, self.name, value)


class Canvas(ABC):
    """Abstract drawing surface.  Only ``_stroke``/``_fill`` touch pixels."""

    global_alpha = _StateAttr()
    line_width = _StateAttr()
    line_cap = _StateAttr()
    stroke_style = _StateAttr()
    fill_style = _StateAttr()
    shadow_color = _StateAttr()
    shadow_blur = _StateAttr()

    def __init__(self):
        self.state = DrawState()
        self._stack: list[DrawState] = []
        self._path: list[Subpath] = []

    # ── Size ─────────────────────────────────────────────────────────

    @property
    @abstractmethod
    def width(self) -> int:
        ...

    @property
    @abstractmethod
    def height(self) -> int:
        ...

    # ── State stack ──────────────────────────────────────────────────

    def save(self) -> None:
        self._stack.append(self.state.copy())

    def restore(self) -> None:
        if self._stack:
            self.state = self._stack.pop()

    def set_line_dash(self, pattern) -> None:
        self.state.line_dash = tuple(float(v) for v in pattern)

    def get_line_dash(self) -> tuple[float, ...]:
        return self.state.line_dash

    # ── Transform ────────────────────────────────────────────────────

    def translate(self, tx: float, ty: float) -> None:
        a, b, c, d, e, f = self.state.transform
        self.state.transform = (a, b, c, d,
                                a * tx + c * ty + e,
                                b * tx + d * ty + f)

    def rotate(self, angle: float) -> None:
        a, b, c, d, e, f = self.state.transform
        cs, sn = math.cos(angle), math.sin(angle)
        self.state.transform = (a * cs + c * sn, b * cs + d * sn,
                                -a * sn + c * cs, -b * sn + d * cs,
                                e, f)

    def reset_transform(self) -> None:
        self.state.transform = _IDENTITY

    def _apply(self, x: float, y: float) -> Point:
        a, b, c, d, e, f = self.state.transform
        return (a * x + c * y + e, b * x + d * y + f)

    # ── Path building ────────────────────────────────────────────────

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x: float, y: float) -> None:
        self._path.append(Subpath([self._apply(x, y)]))

    def line_to(self, x: float, y: float) -> None:
        if not self._path:
            self.move_to(x, y)
            return
        self._path[-1].points.append(self._apply(x, y))

    def close_path(self) -> None:
        if self._path:
            self._path[-1].closed = True

    def arc(self, cx: float, cy: float, radius: float,
            start: float = 0.0, end: float = math.tau,
            segments: int | None = None) -> None:
        """Append a polygonal arc (joined to the current point, if any)."""
        if segments is None:
            segments = max(12, min(64, int(radius)))
        sweep = end - start
        for i in range(segments + 1):
            a = start + sweep * i / segments
            self.line_to(cx + math.cos(a) * radius, cy + math.sin(a) * radius)

    @property
    def path(self) -> list[Subpath]:
        return self._path

    # ── Paint ────────────────────────────────────────────────────────

    def stroke(self) -> None:
        if self._path:
            self._stroke(self._path, self.state.copy())

    def fill(self) -> None:
        if self._path:
            self._fill(self._path, self.state.copy())

    @abstractmethod
    def _stroke(self, path: list[Subpath], state: DrawState) -> None:
        ...

    @abstractmethod
    def _fill(self, path: list[Subpath], state: DrawState) -> None:
        ...


# ═══════════════════════════════════════════════════════════════════
#  Headless backend
# ═══════════════════════════════════════════════════════════════════

@dataclass
class DrawOp:
    """One recorded paint call."""
    kind: str                               # "stroke" | "fill"
    subpaths: list[tuple[Point, ...]]
    state: DrawState

    @property
    def points(self) -> tuple[Point, ...]:
        """All points of every subpath, flattened."""
        return tuple(p for sp in self.subpaths for p in sp)


class RecordingCanvas(Canvas):
    """Canvas that records paint calls instead of rasterising them."""

    def __init__(self, width: int = 800, height: int = 600):
        super().__init__()
        self._w = width
        self._h = height
        self.ops: list[DrawOp] = []

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    def _record(self, kind: str, path: list[Subpath], state: DrawState):
        self.ops.append(DrawOp(kind, [tuple(sp.points) for sp in path], state))

    def _stroke(self, path, state):
        self._record("stroke", path, state)

    def _fill(self, path, state):
        self._record("fill", path, state)

    def strokes(self) -> list[DrawOp]:
        return [op for op in self.ops if op.kind == "stroke"]

    def fills(self) -> list[DrawOp]:
        return [op for op in self.ops if op.kind == "fill"]

    def clear(self) -> None:
        self.ops.clear()
