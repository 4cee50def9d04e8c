"""test_beam_styles.py — Headless tests for beam geometry, tips and render.

Every generator is called directly with a seeded RNG; the full render
path is checked against a RecordingCanvas.

Run: python test_beam_styles.py
"""
from __future__ import annotations
import math, random, sys, traceback

from core import tuning
tuning.load()

from components import Beam, BeamConfig, BeamStyle, Phase, TipStyle
from core.canvas import RecordingCanvas
from logic.beam_manager import BeamManager
from logic.beam_styles import GENERATORS, Stroke, beam_strokes, draw_strokes
from logic.tips import draw_tip, tip_visible

# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    print(f"  [FAIL] {label}")
    if detail:
        for line in detail.strip().splitlines():
            print(f"         {line}")


class _Const(random.Random):
    """RNG whose random() always returns the same value."""
    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def _close(a, b, eps: float = 1e-9) -> bool:
    return abs(a[0] - b[0]) < eps and abs(a[1] - b[1]) < eps


CFG = BeamConfig(beam_width=4.0)
TAIL = (10.0, 20.0)
TIP = (310.0, 220.0)


# ════════════════════════════════════════════════════════════════════════
#  1 — Straight styles
# ════════════════════════════════════════════════════════════════════════

def test_straight_styles():
    print("\n=== 1: Straight styles ===")
    rng = random.Random(3)

    (s,) = beam_strokes(BeamStyle.SOLID, TAIL, TIP, CFG, 0, rng)
    assert s.points == [TAIL, TIP] and s.width == 4 and not s.dash
    ok("solid: one segment at beam width")

    (s,) = beam_strokes(BeamStyle.DASHED, TAIL, TIP, CFG, 0, rng)
    assert s.points == [TAIL, TIP] and s.dash == (16.0, 8.0)
    ok("dashed: 16 on / 8 off")

    (s,) = beam_strokes(BeamStyle.PULSING, TAIL, TIP, CFG, 0, rng)
    assert s.width == 4
    peak = (math.pi / 2) / 0.03
    (s,) = beam_strokes(BeamStyle.PULSING, TAIL, TIP, CFG, peak, rng)
    assert abs(s.width - 4 * 1.6) < 1e-9, s.width
    trough = (3 * math.pi / 2) / 0.03
    (s,) = beam_strokes(BeamStyle.PULSING, TAIL, TIP, CFG, trough, rng)
    assert abs(s.width - 4 * 0.4) < 1e-9, s.width
    ok("pulsing: width = w·(1 + 0.6·sin(0.03·timer))")

    strokes = beam_strokes(BeamStyle.CHARGED, TAIL, TIP, CFG, 0, rng)
    assert len(strokes) == 4
    offsets = [(3.2, 0.0), (0.0, 3.2), (-3.2, 0.0), (0.0, -3.2)]
    for st, (ox, oy) in zip(strokes, offsets):
        assert abs(st.width - 1.2) < 1e-9
        assert _close(st.points[0], (TAIL[0] + ox, TAIL[1] + oy))
        assert _close(st.points[1], (TIP[0] + ox, TIP[1] + oy))
    ok("charged: four parallel strokes at radius 0.8w, width 0.3w")

    strokes = beam_strokes(BeamStyle.PLASMA, TAIL, TIP, CFG, 0, rng)
    assert [round(st.width, 6) for st in strokes] == [12.0, 7.2, 3.2]
    assert [st.alpha for st in strokes] == [0.3, 0.6, 1.0]
    assert strokes[0].color is None and strokes[1].color is None
    assert strokes[2].color == "#ffffff"
    assert all(st.points == [TAIL, TIP] for st in strokes)
    ok("plasma: 3w/1.8w/0.8w at 0.3/0.6/1.0 alpha, white core")

    (s,) = beam_strokes("no-such-style", TAIL, TIP, CFG, 0, rng)
    assert s.points == [TAIL, TIP] and not s.dash
    assert set(GENERATORS) == set(BeamStyle)
    ok("unknown style falls back to solid; every style has a generator")


# ════════════════════════════════════════════════════════════════════════
#  2 — Jittered styles
# ════════════════════════════════════════════════════════════════════════

def test_jittered_styles():
    print("\n=== 2: Crackling / tazer ===")
    rng = random.Random(11)
    tips = [TIP, TAIL, (15.0, 20.0), (10.0, 500.0), (-200.0, -40.5)]
    for style in (BeamStyle.CRACKLING, BeamStyle.TAZER):
        for tip in tips:
            for _ in range(25):
                (s,) = beam_strokes(style, TAIL, tip, CFG, 0, rng)
                assert s.points[0] == TAIL, (style, s.points[0])
                assert s.points[-1] == tip, (style, s.points[-1])
    ok("first/last vertices are exactly tail and tip, every call")

    length = math.hypot(TIP[0] - TAIL[0], TIP[1] - TAIL[1])   # ≈ 360.6
    (s,) = beam_strokes(BeamStyle.CRACKLING, TAIL, TIP, CFG, 0, rng)
    assert len(s.points) == int(length // 8) + 1, len(s.points)
    (s,) = beam_strokes(BeamStyle.TAZER, TAIL, TIP, CFG, 0, rng)
    assert len(s.points) == int(length // 12) + 1, len(s.points)
    ok("vertex spacing ≈ 8 px (crackling) and ≈ 12 px (tazer)")

    straight = (TAIL, (210.0, 20.0))
    (s,) = beam_strokes(BeamStyle.CRACKLING, *straight, CFG, 0, random.Random(5))
    worst = max(abs(y - 20.0) for _, y in s.points)
    assert 0 < worst <= 3.0, worst
    ok("crackling jitter bounded by ±0.75w")

    (s,) = beam_strokes(BeamStyle.TAZER, *straight, CFG, 0, _Const(0.5))
    ys = [y - 20.0 for _, y in s.points[1:-1]]
    assert all(abs(abs(v) - 4.8) < 1e-9 for v in ys), ys
    assert all(ys[i] * ys[i + 1] < 0 for i in range(len(ys) - 1))
    ok("tazer bias alternates ±0.3 × jitter")

    a = beam_strokes(BeamStyle.CRACKLING, TAIL, TIP, CFG, 0, random.Random(42))
    b = beam_strokes(BeamStyle.CRACKLING, TAIL, TIP, CFG, 0, random.Random(42))
    c = beam_strokes(BeamStyle.CRACKLING, TAIL, TIP, CFG, 0, random.Random(43))
    assert a[0].points == b[0].points and a[0].points != c[0].points
    ok("seeded RNG gives repeatable geometry")


def test_disruptor():
    print("\n=== 3: Disruptor ===")
    tail, tip = (0.0, 0.0), (160.0, 0.0)

    strokes = beam_strokes(BeamStyle.DISRUPTOR, tail, tip, CFG, 0, _Const(0.99))
    assert len(strokes) == 3
    for st, off in zip(strokes, (-8.0, 0.0, 8.0)):
        assert len(st.points) == 9
        assert abs(st.width - 4 / 3) < 1e-9
        assert all(abs(y - off) < 1e-9 for _, y in st.points), st.points
    ok("no merges: three tracks offset ±2w, 8 segments each")

    strokes = beam_strokes(BeamStyle.DISRUPTOR, tail, tip, CFG, 0, _Const(0.0))
    top = strokes[0].points
    assert top[0] == (0.0, -8.0)
    assert all(abs(y + 8.0 * 0.3) < 1e-9 for _, y in top[1:]), top
    ok("merge pulls a vertex 70% toward the centreline")

    strokes = beam_strokes(BeamStyle.DISRUPTOR, tail, tail, CFG, 0, random.Random(1))
    assert all(p == tail for st in strokes for p in st.points)
    ok("zero-length beam does not divide by zero")


# ════════════════════════════════════════════════════════════════════════
#  4 — Tip renderer
# ════════════════════════════════════════════════════════════════════════

def test_tips():
    print("\n=== 4: Tips ===")
    cfg = BeamConfig(tip_size=20.0, glow_size=10.0, glow_color="#0f0")
    beam = Beam.create(1, 1, cfg)
    beam.opacity = 0.5
    canvas = RecordingCanvas()
    draw_tip(canvas, beam, (100.0, 100.0), (0.0, 100.0), (200.0, 100.0))
    (op,) = canvas.fills()
    assert _close(op.points[0], (120.0, 100.0))
    assert _close(op.points[1], (92.0, 94.0))
    assert _close(op.points[2], (92.0, 106.0))
    assert abs(op.state.global_alpha - 0.45) < 1e-9
    assert op.state.shadow_blur == 15.0
    assert op.state.fill_style == "#0f0"
    ok("arrow: apex tip_size ahead, 0.3 half-width, 0.9 alpha, 1.5 glow")

    canvas = RecordingCanvas()
    draw_tip(canvas, beam, (50.0, 50.0), (50.0, 0.0), (50.0, 400.0))
    (op,) = canvas.fills()
    assert _close(op.points[0], (50.0, 70.0), 1e-6)
    ok("arrow rotates along the tail → head axis")
    assert canvas.state.transform == (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)
    ok("tip leaves the canvas transform untouched")

    circ = Beam.create(2, 1, BeamConfig(tip_size=20.0, tip_style=TipStyle.CIRCLE))
    canvas = RecordingCanvas()
    draw_tip(canvas, circ, (30.0, 40.0), (0.0, 0.0), (1.0, 0.0))
    (op,) = canvas.fills()
    assert all(abs(math.hypot(x - 30, y - 40) - 12.0) < 1e-9 for x, y in op.points)
    ok("circle: disc of radius 0.6 × tip_size")

    assert tip_visible(Beam.create(3, 1, cfg))
    assert not tip_visible(Beam.create(4, 0, cfg))
    fading = Beam.create(5, -1, cfg)
    fading.phase = Phase.FADE
    assert not tip_visible(fading)
    ok("tip only while shooting and direction ≠ 0")


# ════════════════════════════════════════════════════════════════════════
#  5 — Full render pass
# ════════════════════════════════════════════════════════════════════════

def test_render_pass():
    print("\n=== 5: Render pass ===")
    canvas = RecordingCanvas(800, 600)
    m = BeamManager(canvas, {"particles": {"rate": 0}}, rng=random.Random(2))
    bid = m.add_laser(1)
    m.update(400)
    m.render()
    (beam_op,) = canvas.strokes()
    assert beam_op.points == ((0.0, 300.0), (400.0, 300.0))
    st = beam_op.state
    assert st.line_width == 4 and st.line_cap == "round"
    assert st.stroke_style == "#00ffff" and st.shadow_blur == 24
    assert st.global_alpha == 1
    (tip_op,) = canvas.fills()
    assert _close(tip_op.points[0], (424.0, 300.0))
    ok("shooting beam: stroke to the tip plus arrow head")

    canvas.clear()
    m.add_laser(-1)
    m.render()
    strokes = canvas.strokes()
    assert strokes[1].points == ((800.0, 300.0), (800.0, 300.0))
    ok("reverse beam starts at coords2")

    canvas.clear()
    m.clear_all_lasers()
    m.add_laser(1, beam_style="plasma")
    m.update(800)          # → fade
    m.update(400)          # opacity 0.5
    m.render()
    alphas = [round(op.state.global_alpha, 6) for op in canvas.strokes()]
    assert alphas == [0.15, 0.3, 0.5], alphas
    assert canvas.fills() == []
    ok("fading plasma: layer alpha × opacity, no tip")

    canvas.clear()
    m.clear_all_lasers()
    m.add_laser(0, beam_style="charged")
    m.render()
    assert len(canvas.strokes()) == 4 and canvas.fills() == []
    ok("static beam: full length, no tip")

    canvas.clear()
    m.clear_all_lasers()
    for style in BeamStyle:
        m.add_laser(1, beam_style=style)
    m.update(200)
    m.render()
    assert len(canvas.strokes()) >= len(BeamStyle)
    assert canvas.get_line_dash() == ()
    assert canvas.state.global_alpha == 1
    ok("all eight styles render; canvas state restored afterwards")

    canvas.clear()
    m.clear_all_lasers()
    m.add_laser(1, {"particles": {"rate": 1.0}})
    m.update(100)
    m.render()
    beam = m.lasers[0]
    assert len(beam.particles) == 5
    assert len(canvas.ops) == 1 + 1 + 5
    ok("shoot render emits sparks at the tip and draws them")

    strokes = beam_strokes(BeamStyle.SOLID, (0.0, 0.0), (5.0, 5.0), CFG, 0, random.Random())
    canvas.clear()
    draw_strokes(canvas, strokes + [Stroke([(1.0, 1.0)], 2.0)], 0.7)
    assert len(canvas.strokes()) == 1
    ok("draw_strokes skips degenerate single-point strokes")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Straight styles", test_straight_styles),
        ("Jittered styles", test_jittered_styles),
        ("Disruptor", test_disruptor),
        ("Tips", test_tips),
        ("Render pass", test_render_pass),
    ]

    for name, fn in sections:
        try:
            fn()
        except Exception:
            fail(name, traceback.format_exc())

    print(f"\n{'=' * 50}")
    print(f"  {_passed} passed, {_failed} failed")
    print(f"{'=' * 50}")
    sys.exit(1 if _failed else 0)
