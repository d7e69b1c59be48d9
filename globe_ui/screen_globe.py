"""
Globe Screen — interactive orthographic globe

Drag to rotate: the point grabbed stays under the pointer and north stays
up. Wheel / pinch zoom about the pointer. Grabbing the far side of the
reference meridian turns the globe south-up for that gesture.

Controls
--------
  Left drag             Rotate
  Scroll / pinch        Zoom about pointer
  Right drag            Move the cyan marker
  +/-                   Zoom (programmatic, no re-anchoring)
  G                     Toggle graticule
  R                     Reset view
  ESC                   Quit
"""

import logging
import pygame
from typing import Optional, Sequence

from .base_screen import BaseScreen
from .zoom import ZoomBehavior, ZoomEvent
from orthozoom.config import GlobeConfig
from orthozoom.controller import GlobeController
from orthozoom.debounce import FrameDebouncer
from orthozoom.path import PathPiece
from orthozoom.solver import StepOutcome

logger = logging.getLogger(__name__)

MARKER_HIT_PX = 12

# Sample shapes in array shorthand: polygon, line, point
_SHAPES = [
    [[[-10.0, 35.0], [40.0, 35.0], [40.0, 65.0], [-10.0, 65.0], [-10.0, 35.0]]],
    [[-75.0, 40.0], [-0.1, 51.5], [37.6, 55.8], [139.7, 35.7]],
    [-122.4, 37.8],
]

_OUTCOME_COLORS = {
    StepOutcome.PANNED:   "ACCENT_ORANGE",
    StepOutcome.DEFERRED: "ACCENT_ORANGE",
    StepOutcome.SKIPPED:  "ACCENT_RED",
}


class GlobeScreen(BaseScreen):
    """Orthographic globe driven by drag / zoom gestures."""

    def __init__(self, config: Optional[GlobeConfig] = None,
                 extent: Optional[Sequence[float]] = None):
        super().__init__("GLOBE")
        self.config = config or GlobeConfig()
        self.globe  = GlobeController(self.config, extent=extent)

        self.zoom = ZoomBehavior(k=self.globe.state.scale,
                                 scale_extent=self.config.scale_extent,
                                 wheel_step=self.config.wheel_step,
                                 pinch_gain=self.config.pinch_gain)
        self.zoom.on("start", self._on_zoom_start)
        self.zoom.on("zoom",  self._on_zoom)
        self.zoom.on("end",   self._on_zoom_end)

        # Bursty inputs: one solve and one resize per frame at most
        self._move_frame   = FrameDebouncer("move")
        self._resize_frame = FrameDebouncer("resize")

        # Draggable marker [lon, lat]
        self.marker = [0.0, 0.0]
        self._dragging_marker = False

        # Toggles
        self.show_graticule = True
        self.show_shapes    = True
        self.show_hud       = True

    # -----------------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------------

    def on_enter(self):
        super().on_enter()

    def on_exit(self):
        super().on_exit()
        self._move_frame.cancel()
        self.globe.on_end()

    # -----------------------------------------------------------------------
    # Zoom behaviour → controller
    # -----------------------------------------------------------------------

    def _on_zoom_start(self, ev: ZoomEvent):
        self._move_frame.flush()
        if self.globe.on_start(ev.pointer, source_event=ev.source_event, k=ev.k):
            if self.config.scale_mode != "ratio":
                # start may absorb forced scale; keep k in step with it
                self.zoom.k = self.globe.state.scale

    def _on_zoom(self, ev: ZoomEvent):
        self._move_frame.trigger(self.globe.on_move, ev.pointer, ev.k,
                                 source_event=ev.source_event)

    def _on_zoom_end(self, ev: ZoomEvent):
        self._move_frame.flush()
        if ev.source_event is None:
            # programmatic zoom, a drag in progress keeps its session
            return
        self.globe.on_end()
        if self.config.scale_mode != "ratio":
            # fold mode may have grown the scale past k
            self.zoom.k = self.globe.state.scale

    def request_resize(self, width: int, height: int):
        self._resize_frame.trigger(self.globe.set_extent, (width, height))

    # -----------------------------------------------------------------------
    # Input
    # -----------------------------------------------------------------------

    def handle_input(self, events) -> Optional[str]:
        extent = self.globe.state.extent
        for event in events:
            if event.type == pygame.KEYDOWN:
                k = event.key
                if   k == pygame.K_ESCAPE: return 'QUIT'
                elif k in (pygame.K_EQUALS, pygame.K_PLUS,  pygame.K_KP_PLUS):
                    self.zoom.scale_to(self.zoom.k * 1.25)
                elif k in (pygame.K_MINUS,  pygame.K_KP_MINUS):
                    self.zoom.scale_to(self.zoom.k / 1.25)
                elif k == pygame.K_g: self._toggle('show_graticule')
                elif k == pygame.K_s: self._toggle('show_shapes')
                elif k == pygame.K_h: self._toggle('show_hud')
                elif k == pygame.K_r: self._reset()

            elif event.type == pygame.VIDEORESIZE:
                self.request_resize(event.w, event.h)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 3:
                self._dragging_marker = self._near_marker(event.pos)

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 3:
                self._dragging_marker = False

            elif event.type == pygame.MOUSEMOTION and self._dragging_marker:
                self.globe.drag_point(self.marker, event.pos)

            else:
                self.zoom.handle_event(event, extent)
        return None

    def _toggle(self, attr: str):
        setattr(self, attr, not getattr(self, attr))

    def _reset(self):
        self._move_frame.cancel()
        self.globe.reset()
        self.zoom.k = self.globe.state.scale
        logger.debug("View reset to rotation=%s scale=%.3f",
                     self.globe.state.rotation, self.globe.state.scale)

    def _near_marker(self, pos) -> bool:
        proj = self.globe.state.projection()
        px = proj.project(*self.marker)
        if px is None or not proj.is_on_screen(*px, margin=0):
            return False
        return (px[0] - pos[0]) ** 2 + (px[1] - pos[1]) ** 2 <= MARKER_HIT_PX ** 2

    # -----------------------------------------------------------------------
    # Update
    # -----------------------------------------------------------------------

    def update(self, dt: float):
        self._resize_frame.flush()
        self._move_frame.flush()

    # -----------------------------------------------------------------------
    # Render
    # -----------------------------------------------------------------------

    def render(self, surface: pygame.Surface):
        colors = self.theme.colors
        surface.fill(colors.BG_DARK)

        for piece in self.globe.path("Sphere"):
            pygame.draw.polygon(surface, colors.OCEAN, piece.points.tolist())
            pygame.draw.polygon(surface, colors.SPHERE_RIM, piece.points.tolist(), 2)

        if self.show_graticule:
            grat = {"type": "Graticule", "step": list(self.config.graticule_step)}
            self._draw_pieces(surface, self.globe.path(grat), colors.GRATICULE)

        if self.show_shapes:
            for shape in _SHAPES:
                self._draw_pieces(surface, self.globe.path(shape),
                                  colors.SHAPE_LINE, fill=colors.SHAPE_FILL)

        marker_ring = {"type": "Circle", "center": list(self.marker), "radius": 4.0}
        self._draw_pieces(surface, self.globe.path(marker_ring), colors.ACCENT_CYAN, width=2)
        self._draw_pieces(surface, self.globe.path(list(self.marker)), colors.ACCENT_CYAN)

        if self.show_hud:
            self._draw_hud(surface)

    def _draw_pieces(self, surface, pieces: list[PathPiece], color,
                     width: int = 1, fill=None):
        for piece in pieces:
            pts = piece.points.tolist()
            if piece.kind == 'point':
                pygame.draw.circle(surface, color, pts[0], 3)
                continue
            if len(pts) < 2:
                continue
            if fill is not None and piece.closed and len(pts) > 2:
                pygame.draw.polygon(surface, fill, pts)
            pygame.draw.lines(surface, color, piece.closed, pts, width)

    def _draw_hud(self, surface):
        st = self.globe.state
        font = self.theme.fonts.tiny()
        colors = self.theme.colors
        r0, r1, r2 = st.rotation
        lines = [
            (f"ROT  {r0:8.2f} {r1:8.2f} {r2:8.2f}", colors.FG_PRIMARY),
            (f"SCALE {st.scale:6.3f}", colors.FG_PRIMARY),
            (f"FORCED x{st.forced_scale:5.3f}",
             colors.ACCENT_YELLOW if st.forced_scale > 1.0 else colors.FG_DIM),
            (f"MARKER {self.marker[0]:7.2f} {self.marker[1]:6.2f}", colors.ACCENT_CYAN),
        ]
        outcome = self.globe.last_outcome
        if outcome is not None:
            color = getattr(colors, _OUTCOME_COLORS.get(outcome, "FG_DIM"))
            lines.append((f"LAST  {outcome.value.upper()}", color))

        y = 10
        for text, color in lines:
            self.theme.draw_text(surface, font, 10, y, text, color)
            y += 16

        W, H = surface.get_width(), surface.get_height()
        self.draw_footer(surface, pygame.Rect(0, H - 30, W, 30),
                         "[DRAG] Rotate  [WHEEL] Zoom  [RMB] Marker  "
                         "[G] Grid  [R] Reset  [ESC] Quit")
