from __future__ import annotations

import os

# Headless pygame for every test module
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from orthozoom.view_state import ProjectionViewState


@pytest.fixture
def state() -> ProjectionViewState:
    """500x500 view, scale 0.96: radius 240 px centred at (250, 250)."""
    return ProjectionViewState(rotation=[0.0, 0.0, 0.0], scale=0.96,
                               translate=[0.0, 0.0], extent=[500.0, 500.0])
