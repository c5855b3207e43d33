"""
Pygame front-end for the Mandelbrot explorer.

Contains the MandelbrotApp class which handles:
- Window setup and main loop
- Translating pygame input into explorer events
- Blitting the explorer's RGBA buffer to the screen
- Keyboard shortcuts (reset, save, quit)
"""

import os
from datetime import datetime

import pygame

from .colormaps import list_colormap_names
from .compute import warmup_jit
from .events import ButtonChanged, PointerLeft, PointerMoved, Resized, Scrolled
from .explorer import MandelbrotExplorer
from .settings import Settings


CAPTION = "Mandelbrot Set - Scroll to zoom, drag to pan, R to reset, P for palette"


def translate_event(event):
    """
    Convert a pygame event into explorer events.

    Returns:
        List of events (possibly empty)
    """
    if event.type == pygame.MOUSEMOTION:
        return [PointerMoved(event.pos[0], event.pos[1])]
    if event.type == pygame.MOUSEBUTTONDOWN:
        return [PointerMoved(event.pos[0], event.pos[1]),
                ButtonChanged(event.button, True)]
    if event.type == pygame.MOUSEBUTTONUP:
        return [ButtonChanged(event.button, False)]
    if event.type == pygame.MOUSEWHEEL:
        return [Scrolled(float(getattr(event, 'precise_y', event.y)))]
    if event.type == pygame.WINDOWLEAVE:
        return [PointerLeft()]
    if event.type == pygame.VIDEORESIZE:
        return [Resized(event.w, event.h)]
    return []


class MandelbrotApp:
    """
    Main application class for the Mandelbrot explorer.

    Handles the pygame window and event loop; everything about the
    fractal itself lives in MandelbrotExplorer.
    """

    FPS = 60

    def __init__(self, settings=None):
        """
        Initialize the application.

        Args:
            settings: Settings instance (default: built-in defaults)
        """
        self.settings = settings or Settings()
        self.explorer = MandelbrotExplorer(self.settings)

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.surface = None

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._warmup()

        self.running = True
        while self.running:
            events = self._collect_events()
            if self.explorer.tick(events):
                self._update_surface()
            self._draw()
            self.clock.tick(self.FPS)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.settings.width, self.settings.height),
            pygame.RESIZABLE
        )
        pygame.display.set_caption(CAPTION)
        self.clock = pygame.time.Clock()

    def _warmup(self):
        """Warm up JIT before the first frame."""
        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit(self.explorer.renderer.palette)
        pygame.display.set_caption(CAPTION)

    def _collect_events(self):
        """Drain pygame's queue into explorer events, handling app keys here."""
        events = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)
            else:
                events.extend(translate_event(event))
        return events

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_r:
            self.explorer.reset_view()
        elif event.key == pygame.K_p:
            self._cycle_palette()
        elif event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.key == pygame.K_s and pygame.key.get_mods() & (pygame.KMOD_META | pygame.KMOD_CTRL):
            self._save_image()

    def _cycle_palette(self):
        names = list_colormap_names()
        current = names.index(self.explorer.renderer.palette_name)
        self.explorer.renderer.set_palette(names[(current + 1) % len(names)])

    def _save_image(self):
        """Save the current frame as a PNG in the working directory."""
        if self.surface is None:
            return
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = os.path.abspath(f"mandelbrot_{timestamp}.png")
        pygame.image.save(self.surface, filename)
        pygame.display.set_caption(f"Saved: {os.path.basename(filename)} - Mandelbrot Set")
        print(f"Image saved to: {filename}")

    def _update_surface(self):
        """Wrap the freshly rendered buffer in a surface."""
        buf = self.explorer.buffer
        self.surface = pygame.image.frombuffer(buf.tobytes(), buf.size, "RGBA")

    def _draw(self):
        """Draw the current frame."""
        self.screen.fill((0, 0, 0))
        if self.surface is not None:
            self.screen.blit(self.surface, (0, 0))
        pygame.display.flip()


def run(settings=None):
    """
    Run the Mandelbrot explorer.

    Args:
        settings: Settings instance (default: built-in defaults)
    """
    app = MandelbrotApp(settings)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
