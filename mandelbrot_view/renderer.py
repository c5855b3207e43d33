"""
Frame renderer with change-detection.

The FrameRenderer class handles:
- Owning the RGBA pixel buffer and reallocating it on resize
- Recomputing the full frame only when the view or size changed
- Keeping the last iteration counts so a palette swap only re-colors
- Skipping frames whose geometry or scale cannot be rendered
"""

import logging
import time

import numpy as np

from .colormaps import DEFAULT_COLORMAP, get_colormap
from .compute import MAX_ITERATIONS, apply_palette, compute_iterations


logger = logging.getLogger(__name__)


class PixelBuffer:
    """
    Row-major RGBA8 image, top row first.

    The pixels array has shape (height, width, 4); its raw bytes are
    exactly width * height * 4 long and are what the display consumes.
    """

    def __init__(self, width, height):
        self.pixels = None
        self.resize(width, height)

    @property
    def width(self):
        return self.pixels.shape[1]

    @property
    def height(self):
        return self.pixels.shape[0]

    @property
    def size(self):
        return (self.width, self.height)

    def __len__(self):
        return self.pixels.nbytes

    def resize(self, width, height):
        """Reallocate for new dimensions. Previous contents are discarded."""
        if width < 0 or height < 0:
            raise ValueError(f"buffer dimensions must be non-negative, got {width}x{height}")
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)

    def tobytes(self):
        return self.pixels.tobytes()


class FrameRenderer:
    """
    Recomputes the pixel buffer from a view.

    Usage:
        renderer = FrameRenderer(800, 600)
        view = ViewState()

        # Once per tick:
        if renderer.render_if_needed(view):
            display(renderer.buffer.tobytes())

    Attributes:
        buffer: The PixelBuffer written by every render
        max_iter: Maximum iteration count
        palette_name: Name of the active palette
        iterations: Iteration counts of the last render (or None)
    """

    def __init__(self, width, height, max_iter=None, palette_name=None):
        """
        Initialize the renderer.

        Args:
            width, height: Buffer dimensions in pixels
            max_iter: Maximum iteration count (default 512)
            palette_name: Palette from colormaps.COLORMAPS (default 'Classic')
        """
        self.max_iter = max_iter or MAX_ITERATIONS
        self.palette_name = palette_name or DEFAULT_COLORMAP
        self.palette = get_colormap(self.palette_name, self.max_iter)
        self.buffer = PixelBuffer(width, height)
        self.iterations = None

        # Change detection: (view snapshot, width, height) of the last render
        self._last_key = None
        self._dirty = True
        self._recolor = False
        self._last_skipped = None  # Invalid view already warned about
        self.frames_rendered = 0

    @property
    def width(self):
        return self.buffer.width

    @property
    def height(self):
        return self.buffer.height

    def resize(self, width, height):
        """Reallocate the buffer; the next render_if_needed always renders."""
        if (width, height) != self.buffer.size:
            logger.debug("Resizing buffer %dx%d -> %dx%d",
                         self.width, self.height, width, height)
        self.buffer.resize(width, height)
        self.iterations = None
        self._dirty = True

    def set_palette(self, name):
        """
        Switch palette. Re-colors the cached frame without re-iterating.

        Raises:
            KeyError if name is not a known palette
        """
        self.palette = get_colormap(name, self.max_iter)
        self.palette_name = name
        self._recolor = True

    def needs_render(self, view):
        """True if the view or buffer changed since the last render."""
        return (self._dirty or self._recolor
                or self._last_key != (view.snapshot(), self.buffer.size))

    def can_render(self, view):
        """False for geometry or scale that would divide by zero or invert."""
        if self.width < 1 or self.height < 1:
            logger.debug("Skipping frame: degenerate buffer %dx%d", self.width, self.height)
            return False
        if not view.is_valid():
            snapshot = view.snapshot()
            if snapshot != self._last_skipped:
                logger.warning("Skipping frame: invalid view %r", view)
                self._last_skipped = snapshot
            return False
        return True

    def render_if_needed(self, view):
        """
        Render only if something changed.

        Returns:
            True if the buffer was rewritten this call
        """
        if not self.needs_render(view):
            return False
        if not self.can_render(view):
            return False

        key = (view.snapshot(), self.buffer.size)
        if not self._dirty and self._last_key == key and self.iterations is not None:
            # Only the palette changed
            apply_palette(self.iterations, self.palette, self.buffer.pixels)
            self._recolor = False
            return True

        self.render(view)
        return True

    def render(self, view):
        """Unconditionally recompute every pixel for the view."""
        start = time.perf_counter()
        self.iterations = compute_iterations(
            view.center_x, view.center_y, view.scale,
            self.width, self.height, self.max_iter
        )
        apply_palette(self.iterations, self.palette, self.buffer.pixels)

        self._last_key = (view.snapshot(), self.buffer.size)
        self._dirty = False
        self._recolor = False
        self.frames_rendered += 1
        logger.debug("Rendered %dx%d at center=(%r, %r) scale=%g in %.1f ms",
                     self.width, self.height, view.center_x, view.center_y,
                     view.scale, (time.perf_counter() - start) * 1000.0)
