"""
Orthographic Projection

Sphere seen from infinitely far away. The visible hemisphere maps onto a
disk of radius `scale` pixels centred at `translate`.

Rotation triple (degrees), applied in this order:
  - rotate[0]  spin about the polar axis (added to longitude)
  - rotate[1]  tilt of the polar axis towards / away from the viewer
  - rotate[2]  roll about the viewing axis

Screen +X = right, screen +Y = down. Longitude/latitude pairs are always
(lon, lat) in degrees, lon in [-180, 180).
"""

from __future__ import annotations
import math
from typing import Optional, Sequence, Tuple

import numpy as np

# Points this close behind the rim are still drawn (clip angle 90° + ε)
RIM_EPS = 1e-9

# Inverse accepts a normalised radius up to 1 + this before giving up
INVERT_TOL = 1e-9


def wrap_lon(lon: float) -> float:
    return (lon + 180.0) % 360.0 - 180.0


class OrthographicProjection:
    """Forward and inverse orthographic projection with a 3-axis rotation."""

    def __init__(self,
                 rotate: Sequence[float] = (0.0, 0.0, 0.0),
                 scale: float = 250.0,
                 translate: Sequence[float] = (480.0, 250.0),
                 clip_extent: Optional[Sequence[Sequence[float]]] = None):
        r = list(rotate) + [0.0] * (3 - len(rotate))
        self.rotate    = (float(r[0]), float(r[1]), float(r[2]))
        self.scale     = float(scale)
        self.translate = (float(translate[0]), float(translate[1]))
        self.clip_extent = clip_extent

        phi, gamma = math.radians(self.rotate[1]), math.radians(self.rotate[2])
        self._cos_phi,   self._sin_phi   = math.cos(phi),   math.sin(phi)
        self._cos_gamma, self._sin_gamma = math.cos(gamma), math.sin(gamma)

    # ------------------------------------------------------------------
    # Forward
    # ------------------------------------------------------------------

    def _rotated(self, lon, lat, xp):
        """Unit vector (depth, east, up) of lon/lat after rotation."""
        lam = xp.radians(lon + self.rotate[0])
        phi = xp.radians(lat)
        cos_phi = xp.cos(phi)
        x = xp.cos(lam) * cos_phi
        y = xp.sin(lam) * cos_phi
        z = xp.sin(phi)

        k     = z * self._cos_phi + x * self._sin_phi
        depth = x * self._cos_phi - z * self._sin_phi
        east  = y * self._cos_gamma - k * self._sin_gamma
        up    = k * self._cos_gamma + y * self._sin_gamma
        return depth, east, up

    def project(self, lon: float, lat: float) -> Optional[Tuple[float, float]]:
        """
        Project (lon, lat) → screen (x, y).
        Returns None if the point is on the hidden hemisphere.
        """
        depth, east, up = self._rotated(lon, lat, math)
        if depth < -RIM_EPS:
            return None
        tx, ty = self.translate
        return tx + self.scale * east, ty - self.scale * up

    def project_array(self, lons: np.ndarray, lats: np.ndarray):
        """Vectorised project: returns (xs, ys, visible)."""
        lons = np.asarray(lons, dtype=np.float64)
        lats = np.asarray(lats, dtype=np.float64)
        depth, east, up = self._rotated(lons, lats, np)
        tx, ty = self.translate
        return tx + self.scale * east, ty - self.scale * up, depth >= -RIM_EPS

    # ------------------------------------------------------------------
    # Inverse
    # ------------------------------------------------------------------

    def unproject(self, sx: float, sy: float) -> Optional[Tuple[float, float]]:
        """
        Screen pixel → (lon, lat).
        Returns None outside the sphere disk, where the inverse is undefined.
        """
        if self.scale <= 0:
            return None
        tx, ty = self.translate
        east = (sx - tx) / self.scale
        up   = (ty - sy) / self.scale
        rho = math.hypot(east, up)
        if not rho <= 1.0 + INVERT_TOL:   # also rejects NaN
            return None
        if rho > 1.0:
            east, up = east / rho, up / rho
            rho = 1.0
        depth = math.sqrt(max(0.0, 1.0 - rho * rho))

        # undo roll
        y = east * self._cos_gamma + up * self._sin_gamma
        k = up * self._cos_gamma - east * self._sin_gamma
        # undo tilt
        x = depth * self._cos_phi + k * self._sin_phi
        z = k * self._cos_phi - depth * self._sin_phi

        lon = math.degrees(math.atan2(y, x)) - self.rotate[0]
        lat = math.degrees(math.asin(max(-1.0, min(1.0, z))))
        return wrap_lon(lon), lat

    # ------------------------------------------------------------------

    def is_visible(self, lon: float, lat: float) -> bool:
        return self._rotated(lon, lat, math)[0] >= -RIM_EPS

    def is_on_screen(self, px: float, py: float, margin: int = 10) -> bool:
        if self.clip_extent is None:
            return True
        (x0, y0), (x1, y1) = self.clip_extent
        return (x0 - margin <= px <= x1 + margin and
                y0 - margin <= py <= y1 + margin)
