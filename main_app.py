"""
Orthographic Globe Viewer - Main Application

Interactive globe with gesture-driven rotation and zoom:
- drag keeps the grabbed point under the pointer, north up
- wheel / pinch zoom about the pointer
- debounced window resize
"""

import argparse
import logging
import pygame
import sys

from orthozoom.config import GlobeConfig, SCALE_MODES
from globe_ui.theme import get_theme
from globe_ui.screen_globe import GlobeScreen

TITLE = "Orthographic Globe - orthozoom"

logger = logging.getLogger("orthozoom.app")


class GlobeApp:
    """
    Main viewer application

    Manages the pygame loop and feeds events to the globe screen.
    """

    def __init__(self, config: GlobeConfig):
        """Initialize viewer"""
        pygame.init()

        self.config = config
        self.fullscreen = False
        self.screen = pygame.display.set_mode((config.width, config.height), pygame.RESIZABLE)
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()

        self.theme = get_theme()
        self.globe_screen = GlobeScreen(config, extent=(config.width, config.height))
        self.globe_screen.on_enter()

        self.running = True
        print(f"\n{TITLE}")
        print("=" * 60)
        print("Initialized successfully!")
        print("=" * 60)

    def run(self):
        """Main loop"""
        while self.running:
            dt = self.clock.tick(self.config.fps) / 1000.0

            events = pygame.event.get()
            for event in events:
                if event.type == pygame.QUIT:
                    self.running = False

                # Toggle fullscreen with F11
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_F11:
                        self.toggle_fullscreen()

                elif event.type == pygame.VIDEORESIZE:
                    self.handle_resize(event.w, event.h)

            if self.globe_screen.handle_input(events) == 'QUIT':
                self.running = False

            # Debounced work (resize, gesture solve) runs here, once per frame
            self.globe_screen.update(dt)

            self.globe_screen.render(self.screen)
            pygame.display.flip()

        self.quit()

    def toggle_fullscreen(self):
        """Toggle between fullscreen and windowed mode"""
        self.fullscreen = not self.fullscreen

        if self.fullscreen:
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width, height = self.config.width, self.config.height
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.globe_screen.request_resize(width, height)
        logger.info("Display mode %s: %dx%d",
                    "fullscreen" if self.fullscreen else "windowed", width, height)

    def handle_resize(self, width: int, height: int):
        """Handle window resize event (extent update is debounced by the screen)"""
        if not self.fullscreen:
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

    def quit(self):
        """Cleanup and quit"""
        self.globe_screen.on_exit()
        print("\nShutting down...")
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    d = GlobeConfig()
    ap = argparse.ArgumentParser(description="Interactive orthographic globe")
    ap.add_argument("--width", type=int, default=d.width)
    ap.add_argument("--height", type=int, default=d.height)
    ap.add_argument("--fps", type=int, default=d.fps)
    ap.add_argument("--scale", type=float, default=d.initial_scale,
                    help="Initial sphere radius relative to half the window")
    ap.add_argument("--rotate", type=float, nargs=3, default=list(d.initial_rotation),
                    metavar=("SPIN", "TILT", "ROLL"))
    ap.add_argument("--scale-mode", choices=SCALE_MODES, default=d.scale_mode)
    ap.add_argument("--epsilon", type=float, default=d.epsilon)
    ap.add_argument("--pole-epsilon", type=float, default=d.pole_epsilon)
    ap.add_argument("--log-level", default="INFO",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap


def config_from_args(args: argparse.Namespace) -> GlobeConfig:
    return GlobeConfig(
        width=args.width,
        height=args.height,
        fps=args.fps,
        initial_scale=args.scale,
        initial_rotation=tuple(args.rotate),
        scale_mode=args.scale_mode,
        epsilon=args.epsilon,
        pole_epsilon=args.pole_epsilon,
    ).validate()


def main(argv=None):
    """Entry point"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        config = config_from_args(args)
    except ValueError as e:
        raise SystemExit(f"Invalid configuration: {e}")
    logger.debug("Config: %s", config.to_dict())

    try:
        GlobeApp(config).run()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        pygame.quit()
        sys.exit(0)
    except Exception:
        logger.exception("FATAL ERROR")
        pygame.quit()
        sys.exit(1)


if __name__ == "__main__":
    main()
