"""
UI Theme - DOS VGA Retro Style

Colors and fonts for the globe viewer. Keeps the phosphor-green look for
HUD text and uses muted blues for the sphere itself.
"""

import pygame
from typing import Tuple
from dataclasses import dataclass


class Colors:
    """
    Color palette

    Phosphor green for text, dim teal panels, deep blue ocean.
    """

    # Background colors
    BG_DARK = (0, 12, 10)        # Very dark teal/black
    BG_PANEL = (0, 20, 15)       # Dark teal panel

    # Foreground colors (phosphor green theme)
    FG_PRIMARY = (0, 255, 120)   # Bright green (main text)
    FG_DIM = (0, 180, 80)        # Dimmed green (secondary text)

    # Accent colors
    ACCENT_CYAN = (0, 255, 255)    # Draggable marker
    ACCENT_YELLOW = (255, 255, 0)  # Forced scale active
    ACCENT_ORANGE = (255, 160, 0)  # Pole fallback
    ACCENT_RED = (255, 60, 60)     # Skipped frame

    # Globe
    OCEAN = (6, 24, 58)
    SPHERE_RIM = (60, 130, 200)
    GRATICULE = (22, 60, 96)
    SHAPE_LINE = (0, 200, 110)
    SHAPE_FILL = (0, 60, 36)

    BORDER_NORMAL = FG_PRIMARY


@dataclass
class FontConfig:
    """Font configuration"""
    family: str = "Consolas"
    size_normal: int = 18
    size_small: int = 14
    size_tiny: int = 12


class Fonts:
    """
    Font manager

    Loads and caches monospaced fonts.
    """

    _initialized = False
    _fonts: dict = {}
    _config = FontConfig()

    @classmethod
    def initialize(cls, config: FontConfig = None):
        if config is not None:
            cls._config = config

        pygame.font.init()

        # Try to load Consolas, fall back to Courier
        families = [cls._config.family, "Courier New", "Courier", "monospace"]
        for family in families:
            try:
                cls._fonts['normal'] = pygame.font.SysFont(family, cls._config.size_normal)
                cls._fonts['small'] = pygame.font.SysFont(family, cls._config.size_small)
                cls._fonts['tiny'] = pygame.font.SysFont(family, cls._config.size_tiny)
                cls._initialized = True
                break
            except (OSError, pygame.error):
                continue

        if not cls._initialized:
            # Ultimate fallback: pygame default font
            cls._fonts['normal'] = pygame.font.Font(None, cls._config.size_normal)
            cls._fonts['small'] = pygame.font.Font(None, cls._config.size_small)
            cls._fonts['tiny'] = pygame.font.Font(None, cls._config.size_tiny)
            cls._initialized = True

    @classmethod
    def get(cls, size: str = 'normal') -> pygame.font.Font:
        if not cls._initialized:
            cls.initialize()
        return cls._fonts.get(size, cls._fonts['normal'])

    @classmethod
    def small(cls) -> pygame.font.Font:
        return cls.get('small')

    @classmethod
    def tiny(cls) -> pygame.font.Font:
        return cls.get('tiny')


class Theme:
    """
    Complete theme configuration

    Bundles colors, fonts, and spacing into single object.
    """

    def __init__(self):
        self.colors = Colors()
        self.fonts = Fonts()

        self.border_width = 2

    def draw_panel(self, surface: pygame.Surface, rect: pygame.Rect,
                   fg_color: Tuple[int, int, int] = None,
                   bg_color: Tuple[int, int, int] = None):
        if fg_color is None:
            fg_color = self.colors.BORDER_NORMAL
        if bg_color is None:
            bg_color = self.colors.BG_PANEL

        pygame.draw.rect(surface, bg_color, rect)
        pygame.draw.rect(surface, fg_color, rect, self.border_width)

    def draw_text(self, surface: pygame.Surface, font: pygame.font.Font,
                  x: int, y: int, text: str, color: Tuple[int, int, int],
                  align: str = 'left'):
        """
        Draw text (no antialiasing for pixel-perfect rendering)

        Args:
            align: 'left', 'center', or 'right'
        """
        rendered = font.render(text, False, color)  # False = no AA

        if align == 'center':
            x -= rendered.get_width() // 2
        elif align == 'right':
            x -= rendered.get_width()

        surface.blit(rendered, (x, y))


# Global theme instance
_theme = None

def get_theme() -> Theme:
    """Get global theme instance"""
    global _theme
    if _theme is None:
        _theme = Theme()
        _theme.fonts.initialize()
    return _theme
