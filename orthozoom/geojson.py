"""
Geometry shorthand → GeoJSON-like dicts.

Plain nested arrays are typed by their depth:
    [lon, lat]                     → Point
    [[lon, lat], ...]              → LineString
    [[[lon, lat], ...], ...]       → Polygon
    [[[[lon, lat], ...]], ...]     → GeometryCollection (of polygons)

Strings become {"type": name}. Besides the usual GeoJSON types two
generators are understood, both expanded to plain geometry:
    {"type": "Circle", "center": [lon, lat], "radius": deg, "precision": deg}
    {"type": "Graticule", "step": [dx, dy], "extent": [[x0, y0], [x1, y1]],
     "precision": deg, "lines": bool, "outline": bool}
"Sphere" is passed through untouched (the path renderer draws the rim).
"""

from __future__ import annotations
from typing import Any

import numpy as np

CIRCLE_RADIUS    = 90.0
CIRCLE_PRECISION = 6.0

GRATICULE_STEP      = (10.0, 10.0)
GRATICULE_EXTENT    = ((-180.0, -80.0), (180.0, 80.0))
GRATICULE_PRECISION = 2.5
MAJOR_STEP          = 90.0      # meridians reaching the poles

_ARRAY = (list, tuple, np.ndarray)


def _is_array(v) -> bool:
    return isinstance(v, _ARRAY)


def array_kind(coords) -> str:
    if len(coords) == 0:
        raise ValueError("Empty coordinate array")
    if not _is_array(coords[0]):
        return "Point"
    if not _is_array(coords[0][0]):
        return "LineString"
    if not _is_array(coords[0][0][0]):
        return "Polygon"
    return "GeometryCollection"


def to_geojson(o: Any) -> dict:
    """Normalise shorthand `o` into a GeoJSON-like dict (input not mutated)."""
    if _is_array(o):
        o = {"type": array_kind(o), "coordinates": o}
    elif isinstance(o, str):
        o = {"type": o}
    elif not isinstance(o, dict) or not o.get("type"):
        raise ValueError(f"Cannot convert to geometry: {o!r}")

    kind = o["type"]
    if kind == "GeometryCollection":
        if "geometries" in o:
            children = o["geometries"]
        else:
            children = o.get("coordinates", [])
        return {"type": kind, "geometries": [to_geojson(g) for g in children]}
    if kind == "Circle":
        return circle(o.get("center", (0.0, 0.0)),
                      o.get("radius", CIRCLE_RADIUS),
                      o.get("precision", CIRCLE_PRECISION))
    if kind == "Graticule":
        return graticule(o.get("step", GRATICULE_STEP),
                         o.get("extent", GRATICULE_EXTENT),
                         o.get("precision", GRATICULE_PRECISION),
                         lines=bool(o.get("lines")),
                         outline=bool(o.get("outline")))
    return dict(o)


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------

def circle(center=(0.0, 0.0), radius: float = CIRCLE_RADIUS,
           precision: float = CIRCLE_PRECISION) -> dict:
    """Small circle of angular `radius` around `center`, as a closed Polygon."""
    lon0, lat0 = np.radians(center[0]), np.radians(center[1])
    r = np.radians(radius)
    n = max(3, int(np.ceil(360.0 / precision)))
    bearing = np.linspace(0.0, 2 * np.pi, n + 1)

    sin_lat = (np.sin(lat0) * np.cos(r)
               + np.cos(lat0) * np.sin(r) * np.cos(bearing))
    lat = np.arcsin(np.clip(sin_lat, -1.0, 1.0))
    lon = lon0 + np.arctan2(np.sin(bearing) * np.sin(r) * np.cos(lat0),
                            np.cos(r) - np.sin(lat0) * sin_lat)
    lon = (np.degrees(lon) + 180.0) % 360.0 - 180.0
    ring = np.column_stack([lon, np.degrees(lat)])
    ring[-1] = ring[0]
    return {"type": "Polygon", "coordinates": [ring.tolist()]}


def _span(a: float, b: float, precision: float) -> np.ndarray:
    n = max(1, int(np.ceil(abs(b - a) / precision)))
    return np.linspace(a, b, n + 1)


def graticule_lines(step=GRATICULE_STEP, extent=GRATICULE_EXTENT,
                    precision: float = GRATICULE_PRECISION) -> list:
    (x0, y0), (x1, y1) = extent
    dx, dy = step
    lines = []

    for lon in np.arange(np.ceil(x0 / dx) * dx, x1, dx):
        major = abs(lon % MAJOR_STEP) < 1e-9
        lats = _span(-90.0, 90.0, precision) if major else _span(y0, y1, precision)
        lines.append(np.column_stack([np.full_like(lats, lon), lats]).tolist())

    for lat in np.arange(np.ceil(y0 / dy) * dy, y1 + 1e-9, dy):
        lons = _span(x0, x1, precision)
        lines.append(np.column_stack([lons, np.full_like(lons, lat)]).tolist())
    return lines


def graticule(step=GRATICULE_STEP, extent=GRATICULE_EXTENT,
              precision: float = GRATICULE_PRECISION,
              *, lines: bool = False, outline: bool = False) -> dict:
    if outline:
        (x0, _), (x1, _) = extent
        # outline follows the major extent, pole to pole
        lat_up, lat_down = _span(-90.0, 90.0, precision), _span(90.0, -90.0, precision)
        lon_fwd, lon_back = _span(x0, x1, precision), _span(x1, x0, precision)
        ring = np.concatenate([
            np.column_stack([np.full_like(lat_up, x0), lat_up]),
            np.column_stack([lon_fwd, np.full_like(lon_fwd, 90.0)])[1:],
            np.column_stack([np.full_like(lat_down, x1), lat_down])[1:],
            np.column_stack([lon_back, np.full_like(lon_back, -90.0)])[1:],
        ])
        return {"type": "Polygon", "coordinates": [ring.tolist()]}

    coords = graticule_lines(step, extent, precision)
    if lines:
        return {"type": "GeometryCollection",
                "geometries": [{"type": "LineString", "coordinates": c} for c in coords]}
    return {"type": "MultiLineString", "coordinates": coords}
