import pygame
import pytest

from globe_ui.screen_globe import GlobeScreen
from globe_ui.theme import Colors
from orthozoom.config import GlobeConfig


@pytest.fixture
def screen():
    pygame.init()
    s = GlobeScreen(GlobeConfig(), extent=(500, 500))
    s.on_enter()
    return s


def _ev(type, **kw):
    return pygame.event.Event(type, **kw)


def _motion(pos):
    return _ev(pygame.MOUSEMOTION, pos=pos, rel=(0, 0), buttons=(0, 0, 0))


def _key(key):
    return _ev(pygame.KEYDOWN, key=key, mod=0, unicode="")


def test_drag_is_solved_once_per_frame(screen):
    screen.handle_input([
        _ev(pygame.MOUSEBUTTONDOWN, button=1, pos=(250, 250)),
        _motion((300, 250)),
        _motion((340, 250)),
        _motion((375, 250)),
    ])
    # nothing solved until the frame tick
    assert screen.globe.state.rotation == [0.0, 0.0, 0.0]
    assert screen._move_frame.dropped == 2

    screen.update(1 / 60)
    st = screen.globe.state
    assert st.projection().project(0.0, 0.0) == pytest.approx((375.0, 250.0))

    screen.handle_input([_ev(pygame.MOUSEBUTTONUP, button=1, pos=(375, 250))])
    assert not screen.globe.active


def test_resize_is_debounced(screen):
    screen.handle_input([_ev(pygame.VIDEORESIZE, w=w, h=h, size=(w, h))
                         for w, h in [(600, 400), (700, 500), (800, 600)]])
    assert screen.globe.state.extent == [500.0, 500.0]
    screen.update(1 / 60)
    assert screen.globe.state.extent == [800.0, 600.0]


def test_wheel_zoom_about_pointer(screen):
    screen.handle_input([_motion((250, 250)), _ev(pygame.MOUSEWHEEL, x=0, y=1)])
    st = screen.globe.state
    assert st.scale == pytest.approx(0.96 * 2.0 ** 0.25)
    assert st.projection().project(0.0, 0.0) == pytest.approx((250.0, 250.0))
    assert not screen.globe.active


def test_keyboard_zoom_is_programmatic(screen):
    screen.handle_input([_key(pygame.K_PLUS)])
    screen.update(1 / 60)
    assert screen.globe.state.scale == pytest.approx(1.2)
    assert screen.globe.state.rotation == [0.0, 0.0, 0.0]
    assert screen.globe.last_outcome is None


def test_reset_and_quit_keys(screen):
    screen.handle_input([_ev(pygame.MOUSEBUTTONDOWN, button=1, pos=(250, 250)),
                         _motion((300, 200))])
    screen.update(1 / 60)
    assert screen.globe.state.rotation != [0.0, 0.0, 0.0]

    screen.handle_input([_key(pygame.K_r)])
    assert screen.globe.state.rotation == [0.0, 0.0, 0.0]
    assert screen.zoom.k == pytest.approx(0.96)
    assert screen.handle_input([_key(pygame.K_ESCAPE)]) == 'QUIT'


def test_toggles(screen):
    screen.handle_input([_key(pygame.K_g), _key(pygame.K_h)])
    assert not screen.show_graticule
    assert not screen.show_hud
    assert screen.show_shapes


def test_right_drag_moves_marker(screen):
    screen.handle_input([
        _ev(pygame.MOUSEBUTTONDOWN, button=3, pos=(252, 251)),
        _motion((370, 250)),
        _ev(pygame.MOUSEBUTTONUP, button=3, pos=(370, 250)),
    ])
    assert screen.marker == pytest.approx([30.0, 0.0])
    assert screen.globe.state.rotation == [0.0, 0.0, 0.0]


def test_right_click_away_from_marker_does_nothing(screen):
    screen.handle_input([
        _ev(pygame.MOUSEBUTTONDOWN, button=3, pos=(100, 100)),
        _motion((370, 250)),
    ])
    assert screen.marker == [0.0, 0.0]


def test_render_smoke(screen):
    surface = pygame.Surface((500, 500))
    screen.render(surface)
    assert tuple(surface.get_at((495, 5)))[:3] == Colors.BG_DARK
    assert tuple(surface.get_at((250, 150)))[:3] != Colors.BG_DARK


def test_keyboard_zoom_mid_drag_keeps_gesture(screen):
    screen.handle_input([_ev(pygame.MOUSEBUTTONDOWN, button=1, pos=(250, 250)),
                         _motion((300, 250))])
    screen.update(1 / 60)
    screen.handle_input([_key(pygame.K_PLUS)])
    screen.update(1 / 60)
    assert screen.globe.active
    assert screen.globe.state.scale == pytest.approx(1.2)

    screen.handle_input([_motion((375, 250))])
    screen.update(1 / 60)
    assert screen.globe.active
    assert screen.globe.state.projection().project(0.0, 0.0) == pytest.approx((375.0, 250.0))


def _drag(screen, start, end):
    screen.handle_input([_ev(pygame.MOUSEBUTTONDOWN, button=1, pos=start),
                         _motion(end)])
    screen.update(1 / 60)
    screen.handle_input([_ev(pygame.MOUSEBUTTONUP, button=1, pos=end)])


def _pixel_radius(screen):
    st = screen.globe.state
    return st.radius() * st.forced_scale


@pytest.mark.parametrize("mode", ["ratio", "fold", "direct"])
def test_keyboard_zoom_in_after_forced_drag_grows_globe(mode):
    pygame.init()
    screen = GlobeScreen(GlobeConfig(scale_mode=mode), extent=(500, 500))
    _drag(screen, (250, 250), (610, 250))
    _drag(screen, (250, 250), (250, 250))
    before = _pixel_radius(screen)
    assert before == pytest.approx(360.0)

    screen.handle_input([_key(pygame.K_PLUS)])
    assert _pixel_radius(screen) == pytest.approx(before * 1.25)
