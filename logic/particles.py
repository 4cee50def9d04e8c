"""logic/particles.py — Per-beam spark system.

Every beam owns its own particle list.  The manager drives three steps:

    emit_particles(beam, tip_x, tip_y, rng)   # render(), shoot phase only
    update_particles(beam, dt)                # update(), every phase
    draw_particles(canvas, beam)              # render(), every phase

Motion is a fixed per-frame displacement (``x += vx``): velocity is not
scaled by ``dt``, so spark speed follows the frame rate.
"""

from __future__ import annotations
import math
import random

from components.beam import Beam
from components.particle import Particle
from core import constants as C
from core.canvas import Canvas


# ── emitters ─────────────────────────────────────────────────────────

def emit_particles(beam: Beam, x: float, y: float,
                   rng: random.Random) -> int:
    """Spawn sparks at (x, y).  Returns how many were added.

    ``floor(rate × 5)`` candidates each survive with probability
    ``rate``, so a higher rate raises both the count and the odds.
    """
    pc = beam.config.particles
    jitter = beam.config.beam_width * 0.5
    added = 0
    for _ in range(int(pc.rate * C.PARTICLE_CANDIDATES)):
        if rng.random() >= pc.rate:
            continue
        angle = rng.random() * math.tau
        speed = pc.speed * (1 + rng.random() * 2)
        beam.particles.append(Particle(
            x=x + (rng.random() - 0.5) * jitter,
            y=y + (rng.random() - 0.5) * jitter,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            life=pc.life * (0.5 + rng.random() * 0.5),
            size=pc.size * (0.3 + rng.random() * 0.4),
            length=8 + rng.random() * 12,
            color=pc.color,
            glow_color=pc.glow_color,
            fade=pc.fade,
            trail=rng.random() > 0.5,
        ))
        added += 1
    return added


# ── tick / draw ──────────────────────────────────────────────────────

def update_particles(beam: Beam, dt: float) -> None:
    """Move, age, then drop every particle that reached its life."""
    alive: list[Particle] = []
    for p in beam.particles:
        p.x += p.vx
        p.y += p.vy
        p.age += dt
        if p.age < p.life:
            alive.append(p)
    beam.particles = alive


def particle_alpha(p: Particle, opacity: float = 1.0) -> float:
    base = 1 - p.age / p.life if p.fade and p.life > 0 else 1.0
    return base * opacity


def draw_particles(canvas: Canvas, beam: Beam) -> None:
    for p in beam.particles:
        if p.expired:
            continue
        alpha = particle_alpha(p, beam.opacity)
        if alpha <= C.PARTICLE_MIN_ALPHA:
            continue

        canvas.save()
        canvas.global_alpha = alpha
        canvas.shadow_color = p.glow_color
        if p.trail:
            canvas.stroke_style = p.glow_color
            canvas.shadow_blur = p.size * C.PARTICLE_TRAIL_GLOW
            canvas.line_width = p.size * 0.5
            canvas.line_cap = "round"
            scale = p.length / 10
            canvas.begin_path()
            canvas.move_to(p.x, p.y)
            canvas.line_to(p.x - p.vx * scale, p.y - p.vy * scale)
            canvas.stroke()
        else:
            canvas.shadow_blur = p.size * C.PARTICLE_DOT_GLOW
            canvas.fill_style = p.color
            canvas.begin_path()
            canvas.arc(p.x, p.y, p.size, 0, math.tau)
            canvas.fill()
        canvas.restore()
