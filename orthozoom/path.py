"""
GeoPath — geometry → projected pixel polylines.

Edges are resampled along great circles so they bend correctly on the
globe, then split wherever they pass behind the visible hemisphere.
Output pieces are plain numpy (N, 2) pixel arrays ready for pygame.draw.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List

import numpy as np

from .geojson import to_geojson
from .orthographic import OrthographicProjection

RESAMPLE_DEG  = 2.0     # max angular length of a drawn segment
SPHERE_POINTS = 180


@dataclass
class PathPiece:
    kind: str             # 'point' | 'line' | 'ring' | 'sphere'
    points: np.ndarray    # (N, 2) pixels
    closed: bool = False


def _to_xyz(lonlat: np.ndarray) -> np.ndarray:
    lon = np.radians(lonlat[:, 0])
    lat = np.radians(lonlat[:, 1])
    c = np.cos(lat)
    return np.column_stack([c * np.cos(lon), c * np.sin(lon), np.sin(lat)])


def _to_lonlat(xyz: np.ndarray) -> np.ndarray:
    lon = np.degrees(np.arctan2(xyz[:, 1], xyz[:, 0]))
    lat = np.degrees(np.arcsin(np.clip(xyz[:, 2], -1.0, 1.0)))
    return np.column_stack([lon, lat])


def resample(lonlat, precision: float = RESAMPLE_DEG) -> np.ndarray:
    """Insert great-circle points so no segment exceeds `precision` degrees."""
    lonlat = np.asarray(lonlat, dtype=np.float64).reshape(-1, 2)
    if len(lonlat) < 2:
        return lonlat
    xyz = _to_xyz(lonlat)
    out = [lonlat[:1]]
    for i in range(len(xyz) - 1):
        a, b = xyz[i], xyz[i + 1]
        omega = float(np.arccos(np.clip(a @ b, -1.0, 1.0)))
        n = max(1, int(np.ceil(np.degrees(omega) / precision)))
        t = np.arange(1, n + 1, dtype=np.float64) / n
        if omega > np.pi - 1e-6:
            # antipodal: no unique great circle, interpolate the angles
            seg = lonlat[i] + t[:, None] * (lonlat[i + 1] - lonlat[i])
        elif omega < 1e-9:
            seg = np.repeat(lonlat[i + 1:i + 2], n, axis=0)
        else:
            s = np.sin(omega)
            pts = (np.sin((1.0 - t) * omega)[:, None] * a
                   + np.sin(t * omega)[:, None] * b) / s
            seg = _to_lonlat(pts)
        out.append(seg)
    return np.concatenate(out)


def _runs(visible: np.ndarray):
    """(start, stop) index pairs of consecutive True values."""
    padded = np.concatenate([[False], visible, [False]]).astype(np.int8)
    edges = np.flatnonzero(np.diff(padded))
    return list(zip(edges[0::2], edges[1::2]))


class GeoPath:
    """Callable turning any supported shorthand into a list of PathPiece."""

    def __init__(self, projection: OrthographicProjection,
                 precision: float = RESAMPLE_DEG):
        self.projection = projection
        self.precision  = precision

    def __call__(self, o: Any) -> List[PathPiece]:
        pieces: List[PathPiece] = []
        self._geometry(to_geojson(o), pieces)
        return pieces

    # ------------------------------------------------------------------

    def _geometry(self, g: dict, out: List[PathPiece]):
        kind = g["type"]
        coords = g.get("coordinates")
        if kind == "Point":
            self._point(coords, out)
        elif kind == "MultiPoint":
            for c in coords: self._point(c, out)
        elif kind == "LineString":
            self._line(coords, False, out)
        elif kind == "MultiLineString":
            for c in coords: self._line(c, False, out)
        elif kind == "Polygon":
            for ring in coords: self._line(ring, True, out)
        elif kind == "MultiPolygon":
            for poly in coords:
                for ring in poly: self._line(ring, True, out)
        elif kind == "GeometryCollection":
            for child in g.get("geometries", []):
                self._geometry(to_geojson(child), out)
        elif kind == "Feature":
            if g.get("geometry"):
                self._geometry(to_geojson(g["geometry"]), out)
        elif kind == "FeatureCollection":
            for f in g.get("features", []):
                self._geometry(to_geojson(f), out)
        elif kind == "Sphere":
            self._sphere(out)
        else:
            raise ValueError(f"Unsupported geometry type: {kind}")

    def _point(self, c, out):
        px = self.projection.project(float(c[0]), float(c[1]))
        if px is not None:
            out.append(PathPiece("point", np.array([px], dtype=np.float64)))

    def _line(self, coords, closed: bool, out):
        lonlat = resample(coords, self.precision)
        if len(lonlat) == 0:
            return
        xs, ys, visible = self.projection.project_array(lonlat[:, 0], lonlat[:, 1])
        pts = np.column_stack([xs, ys])
        kind = "ring" if closed else "line"

        if visible.all():
            out.append(PathPiece(kind, pts, closed=closed and len(pts) > 2))
            return

        runs = _runs(visible)
        # a ring crossing the rim: glue the run through index 0 to the last one
        if closed and len(runs) > 1 and visible[0] and visible[-1]:
            (s0, e0), (s1, e1) = runs[0], runs[-1]
            runs = runs[1:-1]
            out.append(PathPiece(kind, np.concatenate([pts[s1:e1], pts[s0:e0]])))
        for s, e in runs:
            if e - s >= 2:
                out.append(PathPiece(kind, pts[s:e]))

    def _sphere(self, out):
        cx, cy = self.projection.translate
        r = self.projection.scale
        a = np.linspace(0.0, 2 * np.pi, SPHERE_POINTS, endpoint=False)
        pts = np.column_stack([cx + r * np.cos(a), cy + r * np.sin(a)])
        out.append(PathPiece("sphere", pts, closed=True))
