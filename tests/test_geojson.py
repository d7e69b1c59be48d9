import math

import pytest

from orthozoom.geojson import array_kind, circle, graticule, to_geojson

SQUARE = [[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0], [0.0, 0.0]]


def _central_angle(a, b):
    lon1, lat1, lon2, lat2 = map(math.radians, (*a, *b))
    c = (math.sin(lat1) * math.sin(lat2)
         + math.cos(lat1) * math.cos(lat2) * math.cos(lon2 - lon1))
    return math.degrees(math.acos(max(-1.0, min(1.0, c))))


@pytest.mark.parametrize("coords, kind", [
    ([1.0, 2.0], "Point"),
    ([[1.0, 2.0], [3.0, 4.0]], "LineString"),
    ([SQUARE], "Polygon"),
    ([[SQUARE]], "GeometryCollection"),
    ((3.0, 4.0), "Point"),
])
def test_array_kind_by_depth(coords, kind):
    assert array_kind(coords) == kind


def test_empty_array_rejected():
    with pytest.raises(ValueError):
        array_kind([])


def test_string_becomes_type():
    assert to_geojson("Sphere") == {"type": "Sphere"}


@pytest.mark.parametrize("bad", [42, None, {"coordinates": [0, 0]}, {"type": ""}])
def test_unconvertible_input(bad):
    with pytest.raises(ValueError):
        to_geojson(bad)


def test_array_polygon_collection():
    g = to_geojson([[SQUARE], [SQUARE]])
    assert g["type"] == "GeometryCollection"
    assert [c["type"] for c in g["geometries"]] == ["Polygon", "Polygon"]
    assert g["geometries"][0]["coordinates"] == [SQUARE]


def test_collection_with_geometries_is_normalised():
    g = to_geojson({"type": "GeometryCollection",
                    "geometries": [[1.0, 2.0], "Sphere"]})
    assert g["geometries"] == [{"type": "Point", "coordinates": [1.0, 2.0]},
                               {"type": "Sphere"}]


def test_input_dict_not_mutated():
    src = {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}
    out = to_geojson(src)
    out["type"] = "changed"
    assert src["type"] == "LineString"


def test_circle_is_closed_and_equidistant():
    g = circle((20.0, 45.0), radius=15.0, precision=6.0)
    ring = g["coordinates"][0]
    assert g["type"] == "Polygon"
    assert len(ring) == 61
    assert ring[0] == ring[-1]
    for p in ring:
        assert _central_angle((20.0, 45.0), p) == pytest.approx(15.0, abs=1e-9)


def test_circle_around_pole_is_a_parallel():
    ring = to_geojson({"type": "Circle", "center": [0.0, 90.0], "radius": 10.0})["coordinates"][0]
    assert all(lat == pytest.approx(80.0) for _, lat in ring)


def test_default_graticule():
    g = graticule()
    assert g["type"] == "MultiLineString"
    lines = g["coordinates"]
    assert len(lines) == 36 + 17        # meridians + parallels

    first = lines[0]                    # -180 is a major meridian
    assert first[0] == [-180.0, -90.0] and first[-1] == [-180.0, 90.0]
    minor = lines[1]
    assert minor[0] == [-170.0, -80.0] and minor[-1] == [-170.0, 80.0]


def test_graticule_as_separate_lines():
    g = to_geojson({"type": "Graticule", "step": [30.0, 30.0], "lines": True})
    assert g["type"] == "GeometryCollection"
    assert {c["type"] for c in g["geometries"]} == {"LineString"}
    assert len(g["geometries"]) == 12 + 5     # parallels -60..60


def test_graticule_outline_is_closed_ring():
    g = to_geojson({"type": "Graticule", "outline": True})
    ring = g["coordinates"][0]
    assert g["type"] == "Polygon"
    assert ring[0] == pytest.approx(ring[-1])
    assert min(lat for _, lat in ring) == -90.0
    assert max(lat for _, lat in ring) == 90.0
