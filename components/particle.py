"""components.particle — Spark / trail fragment owned by one beam.

Positions are surface pixels, velocity is pixels per frame, ``age`` and
``life`` are milliseconds.
"""

from __future__ import annotations


class Particle:
    __slots__ = ("x", "y", "vx", "vy", "age", "life", "size", "length",
                 "color", "glow_color", "fade", "trail")

    def __init__(
        self,
        x: float, y: float,
        vx: float, vy: float,
        life: float,
        color,
        glow_color,
        size: float = 2.0,
        length: float = 10.0,
        fade: bool = True,
        trail: bool = False,
        age: float = 0.0,
    ):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.age = age
        self.life = life
        self.size = size
        self.length = length
        self.color = color
        self.glow_color = glow_color
        self.fade = fade
        self.trail = trail

    @property
    def expired(self) -> bool:
        return self.age >= self.life

    def __repr__(self) -> str:
        kind = "trail" if self.trail else "dot"
        return (f"Particle({kind} @ {self.x:.1f},{self.y:.1f} "
                f"age={self.age:.0f}/{self.life:.0f})")
