"""
GlobeController — scale and rotate an orthographic globe by gestures.

Owns the view state and the active gesture session, and turns the
start / move / end notifications of a zoom behaviour into solver steps.

    ctl = GlobeController(GlobeConfig())
    ctl.on_start(pointer, source_event=ev, k=ctl.state.scale)
    ctl.on_move(pointer, k, source_event=ev)
    pieces = ctl.path("Sphere")

All handlers absorb numerical trouble: they log, leave the view at its last
valid value and return. Nothing raises into the event loop.
"""

from __future__ import annotations
import logging
from typing import Any, List, MutableSequence, Optional, Sequence

from .config import GlobeConfig
from .gesture import GestureSession, start_gesture
from .path import GeoPath, PathPiece
from .solver import FallbackHandler, StepOutcome, minimum_scale, solve_step
from .view_state import ProjectionViewState

logger = logging.getLogger(__name__)


class GlobeController:

    def __init__(self, config: Optional[GlobeConfig] = None,
                 extent: Optional[Sequence[float]] = None,
                 fallback: Optional[FallbackHandler] = None):
        self.config = (config or GlobeConfig()).validate()
        self.fallback = fallback
        self.state = ProjectionViewState(
            rotation=list(self.config.initial_rotation),
            scale=self.config.initial_scale,
            translate=list(self.config.initial_translate),
            extent=list(extent or (self.config.width, self.config.height)),
        )
        self.session: Optional[GestureSession] = None
        self.last_outcome: Optional[StepOutcome] = None
        # scale / k of the latest gesture, kept for programmatic zooms
        self.scale_ratio = 1.0

    @property
    def active(self) -> bool:
        return self.session is not None

    # ── Gesture lifecycle ────────────────────────────────────────────────

    def on_start(self, pointer: Sequence[float], *,
                 source_event: Any, k: Optional[float] = None) -> bool:
        """idle → active. Programmatic starts keep the current session."""
        if source_event is None:
            return False
        session = start_gesture(self.state, pointer, source_event=source_event,
                                k=k, epsilon=self.config.epsilon)
        if session is None:
            return False
        self.session = session
        if session.base_scale_ratio:
            self.scale_ratio = session.base_scale_ratio
        return True

    def on_move(self, pointer: Sequence[float], k: float, *,
                source_event: Any) -> Optional[StepOutcome]:
        if source_event is None:
            # programmatic transform change: follow the scale only
            if k > 0:
                if self.config.scale_mode == "ratio":
                    k *= self.scale_ratio
                self.state.scale = k
            return None
        if self.session is None:
            return None

        mode = self.config.scale_mode
        if mode == "ratio" and self.session.base_scale_ratio:
            requested = self.session.base_scale_ratio * k
        else:
            requested = k
        if mode == "fold":
            requested = max(requested, minimum_scale(self.state, self.session,
                                                     pointer, requested))

        outcome = solve_step(self.state, self.session, pointer, requested,
                             fallback=self.fallback,
                             pole_epsilon=self.config.pole_epsilon)
        if mode == "fold" and outcome is StepOutcome.ROTATED:
            # rounding leftovers only
            self.state.scale *= self.state.forced_scale
            self.state.forced_scale = 1.0
        self.last_outcome = outcome
        return outcome

    def on_end(self):
        """active → idle."""
        self.session = None

    # ── Other entry points ───────────────────────────────────────────────

    def drag_point(self, obj: MutableSequence[float], pointer: Sequence[float]) -> bool:
        """Move a [lon, lat] marker to the point under the pointer."""
        lonlat = self.state.projection().unproject(*pointer)
        if lonlat is None:
            return False
        obj[0], obj[1] = lonlat
        return True

    def set_extent(self, extent: Sequence[float]):
        self.state.set_extent(*extent)
        logger.debug("Extent set to %s", self.state.extent)

    def reset(self):
        self.session = None
        self.scale_ratio = 1.0
        self.state.reset(self.config.initial_rotation,
                         self.config.initial_scale,
                         self.config.initial_translate)

    def path(self, o: Any) -> List[PathPiece]:
        return GeoPath(self.state.projection())(o)
