"""
orthozoom — scale and rotate orthographic globes by pointer gestures.

Main exports:
    GlobeController       — gesture lifecycle glue (start / move / end)
    ProjectionViewState   — rotation, scale, translate, extent, forced scale
    GestureSession        — anchor captured at gesture start
    solve_step            — one rotation/scale solve (or pole fallback)
    OrthographicProjection — forward / inverse projection
    FrameDebouncer        — one pending job per frame
    GeoPath, to_geojson   — shorthand geometry → pixel polylines
"""
from .angles import Vec2, sind, cosd, safe_asind, angle_diff, mod, sign
from .config import GlobeConfig
from .orthographic import OrthographicProjection
from .view_state import ProjectionViewState
from .gesture import GestureSession, start_gesture
from .solver import StepOutcome, solve_step, minimum_scale, forced_scale_for, fit_scale
from .debounce import FrameDebouncer
from .geojson import to_geojson, array_kind, circle, graticule
from .path import GeoPath, PathPiece
from .controller import GlobeController

__all__ = [
    "Vec2",
    "sind",
    "cosd",
    "safe_asind",
    "angle_diff",
    "mod",
    "sign",
    "GlobeConfig",
    "OrthographicProjection",
    "ProjectionViewState",
    "GestureSession",
    "start_gesture",
    "StepOutcome",
    "solve_step",
    "minimum_scale",
    "forced_scale_for",
    "fit_scale",
    "FrameDebouncer",
    "to_geojson",
    "array_kind",
    "circle",
    "graticule",
    "GeoPath",
    "PathPiece",
    "GlobeController",
]
