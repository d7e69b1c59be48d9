import numpy as np
import pytest

from orthozoom.path import GeoPath, resample


@pytest.fixture
def path(state):
    return GeoPath(state.projection())


def test_visible_point(path):
    (piece,) = path([0.0, 0.0])
    assert piece.kind == "point"
    assert piece.points[0].tolist() == pytest.approx([250.0, 250.0])


def test_hidden_point_dropped(path):
    assert path([180.0, 0.0]) == []


def test_short_line_resampled(path, state):
    (piece,) = path([[-10.0, 0.0], [10.0, 0.0]])
    proj = state.projection()
    assert piece.kind == "line" and not piece.closed
    assert len(piece.points) == 11
    assert tuple(piece.points[0]) == pytest.approx(proj.project(-10.0, 0.0))
    assert tuple(piece.points[-1]) == pytest.approx(proj.project(10.0, 0.0))


def test_line_clipped_at_rim(path):
    (piece,) = path([[0.0, 0.0], [120.0, 0.0]])
    # last kept vertex is on the visible hemisphere, near the right rim
    assert piece.points[:, 0].max() <= 490.0 + 1e-6
    assert piece.points[-1][0] > 480.0


def test_visible_polygon_is_closed(path):
    square = [[[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0], [0.0, 0.0]]]
    (piece,) = path(square)
    assert piece.kind == "ring" and piece.closed


def test_ring_crossing_rim_glued_into_one_piece(path):
    ring = [[[60.0, -10.0], [120.0, -10.0], [120.0, 10.0], [60.0, 10.0], [60.0, -10.0]]]
    (piece,) = path(ring)
    assert piece.kind == "ring"
    assert not piece.closed
    assert np.all(piece.points[:, 0] <= 490.0 + 1e-6)


def test_sphere_outline(path):
    (piece,) = path("Sphere")
    assert piece.kind == "sphere" and piece.closed
    r = np.hypot(piece.points[:, 0] - 250.0, piece.points[:, 1] - 250.0)
    assert r == pytest.approx(np.full(len(r), 240.0))


def test_feature_collection(path):
    fc = {"type": "FeatureCollection", "features": [
        {"type": "Feature", "geometry": {"type": "Point", "coordinates": [0.0, 0.0]}},
        {"type": "Feature", "geometry": None},
        {"type": "Feature", "geometry": {"type": "MultiPoint",
                                         "coordinates": [[10.0, 0.0], [180.0, 0.0]]}},
    ]}
    assert [p.kind for p in path(fc)] == ["point", "point"]


def test_graticule_and_circle_generators(path):
    assert len(path({"type": "Graticule"})) > 0
    (ring,) = path({"type": "Circle", "center": [0.0, 0.0], "radius": 10.0})
    assert ring.closed


def test_unknown_type_rejected(path):
    with pytest.raises(ValueError):
        path({"type": "Blob"})


def test_resample_follows_great_circle():
    pts = resample([[0.0, 0.0], [10.0, 0.0]], precision=2.0)
    assert len(pts) == 6
    assert pts[:, 1] == pytest.approx(np.zeros(6), abs=1e-12)
    assert pts[:, 0] == pytest.approx(np.linspace(0.0, 10.0, 6))


def test_resample_single_point():
    assert resample([[5.0, 5.0]]).tolist() == [[5.0, 5.0]]
