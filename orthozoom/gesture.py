"""
Gesture Session

Per-gesture memory captured when the user presses / starts pinching:
the geographic point under the pointer and how far (horizontally, on the
unit sphere) that latitude can reach from the polar axis.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .angles import angle_diff, cosd, mod
from .config import EPSILON
from .view_state import ProjectionViewState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GestureSession:
    anchor_lon: float
    anchor_lat: float
    # cos(anchor_lat), raised to epsilon: used as a divisor
    reach: float
    # scale / k at start, for hosts that drive scale through a zoom ratio
    base_scale_ratio: Optional[float] = None

    @property
    def anchor(self):
        return self.anchor_lon, self.anchor_lat


def start_gesture(state: ProjectionViewState,
                  pointer: Sequence[float],
                  *,
                  source_event: Any,
                  k: Optional[float] = None,
                  epsilon: float = EPSILON) -> Optional[GestureSession]:
    """
    Capture the anchor under `pointer` and prepare `state` for the gesture.

    Returns None without touching the state for programmatic starts
    (source_event is None) or when the pointer is off the sphere.
    """
    if source_event is None:
        return None

    lonlat = state.projection().unproject(*pointer)
    if lonlat is None:
        logger.debug("Gesture start outside the sphere at %s, ignored", tuple(pointer))
        return None
    lon, lat = lonlat

    # Rotate the nearest pole into the centre: the pole distance of any
    # point is then just the cosine of its latitude.
    reach = max(cosd(lat), epsilon)

    # Grabbing the far side of the reference meridian: roll the globe
    # upside down and spin it half a turn so the solver keeps working on
    # the near hemisphere. Mirroring the tilt keeps the picture identical.
    if abs(angle_diff(lon, -state.rotation[0])) > 90.0:
        r0, r1, r2 = state.rotation
        state.rotation = [r0 - 180.0, 180.0 - r1, mod(r2 + 180.0, 360.0)]
        logger.debug("Antipodal grab at lon=%.3f, rotation flipped to %s",
                     lon, state.rotation)

    state.scale *= state.forced_scale
    state.forced_scale = 1.0

    ratio = state.scale / k if k else None
    session = GestureSession(anchor_lon=lon, anchor_lat=lat,
                             reach=reach, base_scale_ratio=ratio)
    logger.debug("Gesture session %s", session)
    return session
