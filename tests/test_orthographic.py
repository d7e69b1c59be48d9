import numpy as np
import pytest

from orthozoom.orthographic import OrthographicProjection, wrap_lon


def _proj(rotate=(0.0, 0.0, 0.0)):
    return OrthographicProjection(rotate=rotate, scale=100.0, translate=(200.0, 200.0),
                                  clip_extent=((0.0, 0.0), (400.0, 400.0)))


def test_identity_projection():
    p = _proj()
    assert p.project(0.0, 0.0) == pytest.approx((200.0, 200.0))
    assert p.project(90.0, 0.0) == pytest.approx((300.0, 200.0))
    assert p.project(0.0, 90.0) == pytest.approx((200.0, 100.0))


def test_hidden_hemisphere_is_clipped():
    p = _proj()
    assert p.project(180.0, 0.0) is None
    assert not p.is_visible(135.0, 10.0)


def test_unproject_inside_and_outside_disk():
    p = _proj()
    lon, lat = p.unproject(300.0, 200.0)
    assert lon == pytest.approx(90.0)
    assert lat == pytest.approx(0.0, abs=1e-9)
    assert p.unproject(310.0, 200.0) is None
    assert p.unproject(float("nan"), 200.0) is None


def test_tilt_brings_north_pole_to_centre():
    p = _proj((0.0, -90.0, 0.0))
    assert p.project(0.0, 90.0) == pytest.approx((200.0, 200.0))
    lon, lat = p.unproject(200.0, 200.0)
    assert lat == pytest.approx(90.0)


def test_roll_turns_east_upwards():
    p = _proj((0.0, 0.0, 90.0))
    assert p.project(90.0, 0.0) == pytest.approx((200.0, 100.0))


@pytest.mark.parametrize("rotate", [(30.0, -20.0, 45.0), (-120.0, 60.0, 0.0), (200.0, 10.0, 180.0)])
@pytest.mark.parametrize("lonlat", [(10.0, 20.0), (-45.0, -30.0), (100.0, 70.0)])
def test_round_trip(rotate, lonlat):
    p = _proj(rotate)
    px = p.project(*lonlat)
    if px is None:
        pytest.skip("point on the hidden side for this rotation")
    lon, lat = p.unproject(*px)
    assert wrap_lon(lon - lonlat[0]) == pytest.approx(0.0, abs=1e-7)
    assert lat == pytest.approx(lonlat[1], abs=1e-7)


def test_project_array_matches_scalar():
    p = _proj((25.0, -35.0, 10.0))
    lons = np.array([0.0, 40.0, 170.0, -80.0])
    lats = np.array([0.0, 30.0, -10.0, 60.0])
    xs, ys, visible = p.project_array(lons, lats)
    for i in range(len(lons)):
        single = p.project(lons[i], lats[i])
        assert visible[i] == (single is not None)
        if single is not None:
            assert (xs[i], ys[i]) == pytest.approx(single)


def test_is_on_screen_uses_clip_extent():
    p = _proj()
    assert p.is_on_screen(10.0, 10.0)
    assert not p.is_on_screen(500.0, 10.0, margin=0)
