"""
Globe configuration

Tunables for the gesture solver and the pygame front end. Defaults are
module constants so screens and tests can refer to them directly.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Tuple

# Window settings
WIDTH, HEIGHT = 960, 720
FPS = 60

# Solver
EPSILON       = 1e-6    # reach clamp, avoids division by zero
POLE_EPSILON  = 1e-4    # cos(lat) below this → pan instead of rotate (~0.006°)

# View defaults
INITIAL_SCALE = 0.96    # sphere radius relative to half the smaller extent
SCALE_EXTENT  = (0.05, 50.0)

# Input
WHEEL_STEP = 0.25       # log2 zoom per wheel notch
PINCH_GAIN = 2.0        # k multiplier per unit of normalised pinch distance

SCALE_MODES = ("direct", "ratio", "fold")


@dataclass
class GlobeConfig:
    """All tunables in one place."""
    epsilon: float = EPSILON
    pole_epsilon: float = POLE_EPSILON

    initial_rotation: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    initial_scale: float = INITIAL_SCALE
    initial_translate: Tuple[float, float] = (0.0, 0.0)

    scale_extent: Tuple[float, float] = SCALE_EXTENT
    # direct: scale follows k;  ratio: scale = k * scale/k at start;
    # fold:   no separate forced multiplier, minimum folded into scale
    scale_mode: str = "direct"

    wheel_step: float = WHEEL_STEP
    pinch_gain: float = PINCH_GAIN

    width: int = WIDTH
    height: int = HEIGHT
    fps: int = FPS
    graticule_step: Tuple[float, float] = field(default=(10.0, 10.0))

    def validate(self) -> "GlobeConfig":
        if not self.epsilon > 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if not self.pole_epsilon > 0:
            raise ValueError(f"pole_epsilon must be positive, got {self.pole_epsilon}")
        if not self.initial_scale > 0:
            raise ValueError(f"initial_scale must be positive, got {self.initial_scale}")
        lo, hi = self.scale_extent
        if not 0 < lo <= hi:
            raise ValueError(f"Invalid scale_extent: {self.scale_extent}")
        if self.scale_mode not in SCALE_MODES:
            raise ValueError(f"Unknown scale mode: {self.scale_mode} "
                             f"(expected one of {', '.join(SCALE_MODES)})")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid window size: {self.width}x{self.height}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        return self

    def to_dict(self) -> dict:
        return asdict(self)
