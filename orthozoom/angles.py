"""
Angular Math

Degree-based trigonometry and a small immutable 2D vector used by the
gesture solver. Everything here is pure: no state, no side effects.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterator


def sind(deg: float) -> float:
    return math.sin(math.radians(deg))


def cosd(deg: float) -> float:
    return math.cos(math.radians(deg))


def safe_asind(v: float) -> float:
    """
    Arcsine in degrees, tolerant to rounding.

    The argument is divided by max(1, |v|) first, so 1.0000001 gives 90
    instead of NaN. A NaN argument stays NaN.
    """
    return math.degrees(math.asin(v / max(1.0, abs(v))))


def mod(a: float, n: float) -> float:
    """Floored modulo, result in [0, n)."""
    return (a % n + n) % n


def angle_diff(a: float, b: float) -> float:
    """Signed difference a-b wrapped into [-180, 180)."""
    return mod(a - b + 180.0, 360.0) - 180.0


def sign(x: float) -> float:
    if x > 0: return 1.0
    if x < 0: return -1.0
    return x   # keeps 0.0 / -0.0 / NaN


@dataclass(frozen=True, slots=True)
class Vec2:
    """Screen-space vector (y grows downwards)."""
    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    @property
    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def minus(self, other) -> "Vec2":
        ox, oy = other
        return Vec2(self.x - ox, self.y - oy)

    def times(self, factor: float) -> "Vec2":
        return Vec2(self.x * factor, self.y * factor)

    def rotate(self, deg: float) -> "Vec2":
        # same orientation convention as the projection's roll angle
        c, s = cosd(-deg), sind(-deg)
        return Vec2(self.x * c - self.y * s,
                    self.x * s + self.y * c)
