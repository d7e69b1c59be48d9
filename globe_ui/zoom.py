"""
ZoomBehavior — pygame input → start / zoom / end notifications.

Gestures recognised:
  - left-button drag        start, zoom per motion, end     (k constant)
  - mouse wheel             start, zoom, end about the pointer
  - two-finger pinch        start on first MULTIGESTURE, zoom per event,
                            end on FINGERUP
  - scale_to(k)             programmatic: events carry source_event=None

`k` is the absolute scale the user asks for, clamped to scale_extent.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import pygame

from orthozoom.config import PINCH_GAIN, SCALE_EXTENT, WHEEL_STEP

EVENT_TYPES = ("start", "zoom", "end")


@dataclass
class ZoomEvent:
    type: str
    pointer: Tuple[float, float]
    k: float
    source_event: Optional[pygame.event.Event] = None


class ZoomBehavior:

    def __init__(self, k: float = 1.0,
                 scale_extent: Sequence[float] = SCALE_EXTENT,
                 wheel_step: float = WHEEL_STEP,
                 pinch_gain: float = PINCH_GAIN):
        self.scale_extent = (float(scale_extent[0]), float(scale_extent[1]))
        self.k = self._clamp(k)
        self.wheel_step = wheel_step
        self.pinch_gain = pinch_gain

        self._listeners: Dict[str, List[Callable[[ZoomEvent], None]]] = {
            t: [] for t in EVENT_TYPES}
        self._pointer: Tuple[float, float] = (0.0, 0.0)
        self.dragging = False
        self.pinching = False

    def on(self, type: str, fn: Callable[[ZoomEvent], None]) -> "ZoomBehavior":
        if type not in self._listeners:
            raise ValueError(f"Unknown zoom event type: {type}")
        self._listeners[type].append(fn)
        return self

    def _clamp(self, k: float) -> float:
        lo, hi = self.scale_extent
        return max(lo, min(hi, float(k)))

    def _emit(self, type: str, source_event):
        ev = ZoomEvent(type, self._pointer, self.k, source_event)
        for fn in self._listeners[type]:
            fn(ev)

    @property
    def gesturing(self) -> bool:
        return self.dragging or self.pinching

    # ------------------------------------------------------------------

    def scale_to(self, k: float, pointer: Optional[Sequence[float]] = None):
        """Programmatic zoom: listeners see source_event=None."""
        if pointer is not None:
            self._pointer = (float(pointer[0]), float(pointer[1]))
        self.k = self._clamp(k)
        for t in EVENT_TYPES:
            self._emit(t, None)

    def handle_event(self, event: pygame.event.Event,
                     extent: Sequence[float] = (1.0, 1.0)) -> bool:
        """Feed one pygame event. Returns True if it was consumed."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._pointer = tuple(map(float, event.pos))
            if self.pinching:
                return True
            self.dragging = True
            self._emit("start", event)
            return True

        if event.type == pygame.MOUSEMOTION:
            self._pointer = tuple(map(float, event.pos))
            if self.dragging:
                self._emit("zoom", event)
                return True
            return False

        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._pointer = tuple(map(float, event.pos))
            if self.dragging:
                self.dragging = False
                self._emit("end", event)
                return True
            return False

        if event.type == pygame.MOUSEWHEEL:
            if event.y == 0:
                return False
            standalone = not self.gesturing
            if standalone:
                self._emit("start", event)
            self.k = self._clamp(self.k * 2.0 ** (event.y * self.wheel_step))
            self._emit("zoom", event)
            if standalone:
                self._emit("end", event)
            return True

        if event.type == pygame.MULTIGESTURE:
            self._pointer = (event.x * extent[0], event.y * extent[1])
            if not self.pinching:
                self.dragging = False
                self.pinching = True
                self._emit("start", event)
            self.k = self._clamp(self.k * (1.0 + event.pinched * self.pinch_gain))
            self._emit("zoom", event)
            return True

        if event.type == pygame.FINGERUP and self.pinching:
            self.pinching = False
            self._emit("end", event)
            return True

        return False
