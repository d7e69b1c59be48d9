"""
ProjectionViewState — single source of truth for the globe view.

Holds the projection parameters mutated by gesture callbacks. Radius and
centre are derived on every read: scale, translate and forced scale change
every frame during a gesture, so nothing here is cached.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple

from .config import INITIAL_SCALE, WIDTH, HEIGHT
from .orthographic import OrthographicProjection


@dataclass
class ProjectionViewState:
    rotation: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    scale: float = INITIAL_SCALE            # radius relative to half the extent
    translate: List[float] = field(default_factory=lambda: [0.0, 0.0])
    extent: List[float] = field(default_factory=lambda: [float(WIDTH), float(HEIGHT)])
    forced_scale: float = 1.0               # transient, ≥ 1

    def __post_init__(self):
        self.rotation  = [float(a) for a in self.rotation]
        self.translate = [float(t) for t in self.translate]
        self.extent    = [float(e) for e in self.extent]
        if len(self.rotation) != 3:
            raise ValueError(f"rotation needs 3 angles, got {self.rotation}")
        if not self.scale > 0:
            raise ValueError(f"scale must be positive, got {self.scale}")
        if len(self.extent) != 2 or min(self.extent) <= 0:
            raise ValueError(f"Invalid extent: {self.extent}")
        if not self.forced_scale >= 1.0:
            raise ValueError(f"forced_scale must be >= 1, got {self.forced_scale}")

    # ── Derived ──────────────────────────────────────────────────────────

    def radius(self) -> float:
        """Sphere radius in pixels before forced scaling."""
        return min(self.extent) / 2.0 * self.scale

    def center(self) -> Tuple[float, float]:
        r = self.radius() * self.forced_scale
        return (self.extent[0] / 2.0 + self.translate[0] * r,
                self.extent[1] / 2.0 + self.translate[1] * r)

    def projection(self) -> OrthographicProjection:
        return OrthographicProjection(
            rotate=self.rotation,
            scale=self.radius() * self.forced_scale,
            translate=self.center(),
            clip_extent=((0.0, 0.0), tuple(self.extent)),
        )

    # ── Commit helpers ───────────────────────────────────────────────────

    def snapshot(self) -> dict:
        return {
            "rotation": list(self.rotation),
            "scale": self.scale,
            "translate": list(self.translate),
            "extent": list(self.extent),
            "forced_scale": self.forced_scale,
        }

    def restore(self, snap: dict):
        self.rotation     = list(snap["rotation"])
        self.scale        = snap["scale"]
        self.translate    = list(snap["translate"])
        self.extent       = list(snap["extent"])
        self.forced_scale = snap["forced_scale"]

    def set_extent(self, width: float, height: float):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid extent: {width}x{height}")
        self.extent = [float(width), float(height)]

    def reset(self, rotation, scale: float, translate=(0.0, 0.0)):
        """Back to a configured view; the extent is kept."""
        if not scale > 0:
            raise ValueError(f"scale must be positive, got {scale}")
        self.rotation     = [float(a) for a in rotation]
        self.scale        = float(scale)
        self.translate    = [float(t) for t in translate]
        self.forced_scale = 1.0
