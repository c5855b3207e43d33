"""
Mandelbrot Set Explorer Package

An interactive Mandelbrot set explorer using Pygame for display and
Numba for JIT-compiled computation.

Quick Start:
    from mandelbrot_view import run
    run()

Or from command line:
    python -m mandelbrot_view

Package Structure:
    - compute.py: JIT-compiled coordinate mapping, iteration and coloring kernels
    - colormaps.py: Palette definitions (classic, grayscale)
    - view.py: View state plus pan and zoom controllers
    - events.py: Input events consumed by the core
    - renderer.py: Pixel buffer and change-triggered frame renderer
    - explorer.py: Per-tick event handling and render triggering
    - settings.py: settings.json loading and validation
    - app.py: Pygame window and event loop

Controls:
    - Scroll: Zoom in/out at mouse position
    - Drag: Pan around
    - R: Reset to default view
    - P: Next palette
    - Ctrl/Cmd+S: Save current frame
    - ESC: Quit
"""

from .colormaps import COLORMAPS, color_for_iteration, get_colormap, list_colormap_names
from .compute import MAX_ITERATIONS, escape_time, pixel_to_complex
from .explorer import MandelbrotExplorer
from .renderer import FrameRenderer, PixelBuffer
from .settings import Settings, load_settings
from .view import PanController, ViewState, ZoomController


def run(settings=None):
    """Open the explorer window (imports pygame lazily)."""
    from .app import run as run_app
    run_app(settings)


__version__ = "1.0.0"
__all__ = [
    "run",
    "MandelbrotExplorer",
    "FrameRenderer",
    "PixelBuffer",
    "ViewState",
    "PanController",
    "ZoomController",
    "Settings",
    "load_settings",
    "COLORMAPS",
    "get_colormap",
    "list_colormap_names",
    "color_for_iteration",
    "escape_time",
    "pixel_to_complex",
    "MAX_ITERATIONS",
]
