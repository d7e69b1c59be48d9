"""
Globe UI - pygame screens and input adapters for the globe viewer
"""
from .theme import get_theme, Colors, Fonts
from .base_screen import BaseScreen
from .zoom import ZoomBehavior, ZoomEvent
from .screen_globe import GlobeScreen

__all__ = [
    "get_theme", "Colors", "Fonts",
    "BaseScreen",
    "ZoomBehavior", "ZoomEvent",
    "GlobeScreen",
]
