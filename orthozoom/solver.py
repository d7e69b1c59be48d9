"""
Rotation / Scale Solver

Given the live pointer and the gesture anchor, recover the spin and tilt
that put the anchor under the pointer while keeping the polar axis
vertical on screen, plus the smallest scale at which that is possible.

Geometry (unit sphere, pointer already expressed relative to the disk):
  - the anchor sits on the parallel `anchor_lat`, whose horizontal reach
    from the polar axis is cos(anchor_lat)
  - the pointer's horizontal offset x fixes the spin:  sin(λ') = x / reach
  - on the vertical chord through x (half-length sqrt(1 - x²)) the pointer
    height y fixes the tilt

Near a pole all meridians converge and the spin is undefined; the step
then falls back to panning the view.
"""

from __future__ import annotations
import logging
import math
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

from .angles import Vec2, cosd, safe_asind, sign
from .config import POLE_EPSILON
from .gesture import GestureSession
from .view_state import ProjectionViewState

logger = logging.getLogger(__name__)

# fallback(state, session, pointer) -> True to run the default pan
FallbackHandler = Callable[[ProjectionViewState, GestureSession, Sequence[float]], bool]


class StepOutcome(Enum):
    ROTATED  = "rotated"    # spin/tilt solved and committed
    PANNED   = "panned"     # pole fallback: translate moved
    DEFERRED = "deferred"   # pole fallback handed to the caller
    SKIPPED  = "skipped"    # numerical failure, state untouched


def pointer_offsets(state: ProjectionViewState,
                    pointer: Sequence[float]) -> Tuple[float, float, float, float]:
    """
    Pointer and translate in unit-radius terms, with the roll undone.

    Returns (dx, dy, tx, ty): the pointer relative to the middle of the
    extent, and the translate. For a forced scale f the pointer sits at
    (dx / f - tx, dy / f - ty) on the unit disk.
    """
    d = (Vec2(*pointer)
         .minus((state.extent[0] / 2.0, state.extent[1] / 2.0))
         .rotate(-state.rotation[2])
         .times(1.0 / state.radius()))
    t = Vec2(*state.translate).rotate(-state.rotation[2])
    return d.x, d.y, t.x, t.y


def forced_scale_for(x: float, y: float, reach: float) -> float:
    return max(
        math.hypot(x, y),   # do not exceed the globe
        abs(x) / reach,     # do not exceed the reach from the nearest pole
        1.0,                # never shrink what the user asked for
    )


def fit_scale(dx: float, dy: float, tx: float, ty: float, reach: float) -> float:
    """
    Smallest f >= 1 with |d/f - t| <= 1 and |dx/f - tx| <= reach.

    The centre moves with f when the translate is not zero, so both bounds
    are solved for s = 1/f: the first gives an interval between the roots
    of a quadratic, the second a linear interval. NaN when they miss.
    """
    if tx == 0.0 and ty == 0.0:
        return forced_scale_for(dx, dy, reach)

    lo, hi = 0.0, 1.0

    # s² |d|² - 2 s (d·t) + |t|² - 1 <= 0
    a = dx * dx + dy * dy
    b = dx * tx + dy * ty
    c = tx * tx + ty * ty - 1.0
    if a == 0.0:
        if c > 0.0:
            return math.nan
    else:
        disc = b * b - a * c
        if disc < 0.0:
            return math.nan
        root = math.sqrt(disc)
        lo, hi = max(lo, (b - root) / a), min(hi, (b + root) / a)

    # tx - reach <= s dx <= tx + reach
    if dx == 0.0:
        if abs(tx) > reach:
            return math.nan
    else:
        s1, s2 = (tx - reach) / dx, (tx + reach) / dx
        lo, hi = max(lo, min(s1, s2)), min(hi, max(s1, s2))

    if not (hi > 0.0 and hi >= lo):
        return math.nan
    return 1.0 / hi


def minimum_scale(state: ProjectionViewState, session: GestureSession,
                  pointer: Sequence[float], k: float) -> float:
    """Smallest scale ≥ k at which the anchor can sit under the pointer."""
    snap = state.snapshot()
    try:
        state.scale = k
        dx, dy, tx, ty = pointer_offsets(state, pointer)
    finally:
        state.restore(snap)
    return k * fit_scale(dx, dy, tx, ty, session.reach)


def solve_step(state: ProjectionViewState,
               session: GestureSession,
               pointer: Sequence[float],
               k: float,
               *,
               fallback: Optional[FallbackHandler] = None,
               pole_epsilon: float = POLE_EPSILON) -> StepOutcome:
    """
    One gesture-move step. Mutates `state` in place, all or nothing.
    Never raises for numerical trouble; the outcome tells what happened.
    """
    if not (k > 0 and math.isfinite(k)):
        logger.error("Invalid requested scale k=%r, frame skipped", k)
        return StepOutcome.SKIPPED

    if cosd(session.anchor_lat) < pole_epsilon:
        return _pole_fallback(state, session, pointer, k, fallback)

    snap = state.snapshot()
    state.scale = k
    lon, lat, reach = session.anchor_lon, session.anchor_lat, session.reach

    dx, dy, tx, ty = pointer_offsets(state, pointer)
    forced = fit_scale(dx, dy, tx, ty, reach)
    x = dx / forced - tx
    y = dy / forced - ty

    # asind spans [-90, 90] depending on how close x is to the reach; this
    # also puts the anchor's meridian on the vertical through the pointer.
    r0 = safe_asind(x / reach) - lon

    # Right by x on the unit circle, then up until the circle is reached.
    reach_y = math.sqrt(max(0.0, 1.0 - x * x))

    if reach_y > 0:
        # Latitude of the point at the pointer's height on the centred line
        # running south from the north pole; added or subtracted depending on
        # the hemisphere because it may refer to the opposite pole.
        lat_ = -90.0 + safe_asind(cosd(lat) * cosd(lon + r0) / reach_y)
        r1 = -safe_asind(y / reach_y) + lat_ * sign(lat)
    else:
        # pointer at the end of the horizontal diameter: only an anchor on
        # the equator reaches it there, and any tilt keeps it in place
        r1 = state.rotation[1] if y == 0 else math.nan

    if math.isnan(r0) or math.isnan(r1) or math.isnan(forced):
        state.restore(snap)
        logger.error("NaN during rotation: r0=%r r1=%r forced=%r pointer=%s anchor=%s",
                     r0, r1, forced, tuple(pointer), session.anchor)
        return StepOutcome.SKIPPED

    state.rotation = [r0, r1, state.rotation[2]]
    state.forced_scale = forced
    return StepOutcome.ROTATED


def _pole_fallback(state, session, pointer, k, fallback) -> StepOutcome:
    logger.warning("The pointer was too close to a pole (anchor lat=%.6f)",
                   session.anchor_lat)
    if fallback is not None and not fallback(state, session, pointer):
        return StepOutcome.DEFERRED

    snap = state.snapshot()
    state.scale = k
    px = state.projection().project(*session.anchor)
    if px is None:
        state.restore(snap)
        logger.error("Pole anchor %s is not visible, frame skipped", session.anchor)
        return StepOutcome.SKIPPED

    # Translate so the anchor pixel lands on the pointer, rotation untouched
    r = state.radius() * state.forced_scale
    state.translate = [state.translate[0] + (pointer[0] - px[0]) / r,
                       state.translate[1] + (pointer[1] - px[1]) / r]
    return StepOutcome.PANNED
