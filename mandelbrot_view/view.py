"""
View state and the input controllers that move it.

ViewState is the single window onto the complex plane. It is owned by
whoever drives the tick (see explorer.py) and handed to the controllers
by reference; only PanController and ZoomController mutate it.
"""

import logging
import math

from .compute import pixel_to_complex


logger = logging.getLogger(__name__)


class ViewState:
    """
    Center and horizontal scale of the visible plane region.

    Attributes:
        center_x, center_y: Real and imaginary parts of the view center
        scale: Plane width spanned by the full buffer width (always > 0)
    """

    DEFAULT_CENTER = (-0.75, 0.0)
    DEFAULT_SCALE = 3.5

    def __init__(self, center_x=None, center_y=None, scale=None):
        if center_x is None:
            center_x = self.DEFAULT_CENTER[0]
        if center_y is None:
            center_y = self.DEFAULT_CENTER[1]
        if scale is None:
            scale = self.DEFAULT_SCALE
        if not (math.isfinite(scale) and scale > 0):
            raise ValueError(f"scale must be a positive finite number, got {scale!r}")
        self.center_x = float(center_x)
        self.center_y = float(center_y)
        self.scale = float(scale)

    def __repr__(self):
        return (f"ViewState(center_x={self.center_x!r}, "
                f"center_y={self.center_y!r}, scale={self.scale!r})")

    @property
    def center(self):
        return (self.center_x, self.center_y)

    def snapshot(self):
        """Immutable copy of the state, for change detection."""
        return (self.center_x, self.center_y, self.scale)

    def is_valid(self):
        """False if an outside write left the state unrenderable."""
        return (math.isfinite(self.center_x) and math.isfinite(self.center_y)
                and math.isfinite(self.scale) and self.scale > 0)

    def reset(self):
        """Return to the default overview."""
        self.center_x, self.center_y = self.DEFAULT_CENTER
        self.scale = self.DEFAULT_SCALE

    def pixel_to_complex(self, x, y, width, height):
        """Plane point sampled by pixel (x, y) of a width x height buffer."""
        return pixel_to_complex(self.center_x, self.center_y, self.scale,
                                width, height, x, y)


class PanController:
    """
    Click-and-drag panning.

    Idle until the primary button is held and a pointer position has been
    seen; every later position moves the center by the pixel delta since
    the previous one. Releasing the button drops the stored position, so
    the next press never jumps.
    """

    def __init__(self):
        self.last_pos = None

    @property
    def dragging(self):
        return self.last_pos is not None

    def update(self, view, button_held, position, buffer_width):
        """
        Apply one tick of pointer input.

        Args:
            view: ViewState to move
            button_held: Whether the primary button is currently down
            position: Latest pointer position (x, y) this tick, or None
            buffer_width: Buffer width in pixels (sets pixels-to-plane ratio)

        Returns:
            True if the view center changed
        """
        if not button_held:
            self.last_pos = None
            return False
        if position is None:
            return False

        moved = False
        if self.last_pos is not None and buffer_width > 0:
            dx = position[0] - self.last_pos[0]
            dy = position[1] - self.last_pos[1]
            if dx or dy:
                units_per_pixel = view.scale / buffer_width
                # Screen y grows downward, imaginary axis grows upward
                view.center_x -= dx * units_per_pixel
                view.center_y += dy * units_per_pixel
                moved = True
        self.last_pos = (position[0], position[1])
        return moved


class ZoomController:
    """
    Scroll-wheel zoom anchored at the cursor.

    The plane point under the cursor stays under the same pixel. The
    resulting scale is clamped to [min_scale, max_scale]; when clamping
    kicks in the center moves by the clamped factor, so the anchor still
    holds.
    """

    DEFAULT_SENSITIVITY = 0.1
    DEFAULT_MIN_SCALE = 1e-12  # Below this doubles cannot resolve neighbouring pixels
    DEFAULT_MAX_SCALE = 100.0

    def __init__(self, sensitivity=None, min_scale=None, max_scale=None):
        self.sensitivity = self.DEFAULT_SENSITIVITY if sensitivity is None else sensitivity
        self.min_scale = self.DEFAULT_MIN_SCALE if min_scale is None else min_scale
        self.max_scale = self.DEFAULT_MAX_SCALE if max_scale is None else max_scale
        if not 0 < self.min_scale <= self.max_scale:
            raise ValueError(
                f"need 0 < min_scale <= max_scale, got {self.min_scale!r}, {self.max_scale!r}"
            )

    def apply(self, view, delta_y, cursor, width, height):
        """
        Apply a single scroll event.

        Args:
            view: ViewState to zoom
            delta_y: Signed scroll amount, positive zooms in
            cursor: Cursor pixel position (x, y), or None if outside the display
            width, height: Buffer dimensions in pixels

        Returns:
            True if the view changed
        """
        if cursor is None or not (0 <= cursor[0] < width and 0 <= cursor[1] < height):
            logger.debug("Dropping scroll %r: cursor %r outside display", delta_y, cursor)
            return False
        if not delta_y:
            return False
        if not view.is_valid():
            logger.warning("Dropping scroll %r: invalid view %r", delta_y, view)
            return False

        cursor_x, cursor_y = view.pixel_to_complex(cursor[0], cursor[1], width, height)

        zoom_factor = 1.0 - delta_y * self.sensitivity
        new_scale = view.scale * zoom_factor
        if not new_scale >= self.min_scale:
            logger.debug("Clamping scale %g to minimum %g", new_scale, self.min_scale)
            new_scale = self.min_scale
        elif new_scale > self.max_scale:
            logger.debug("Clamping scale %g to maximum %g", new_scale, self.max_scale)
            new_scale = self.max_scale

        factor = new_scale / view.scale
        if factor == 1.0:
            return False

        new_center_x = cursor_x - (cursor_x - view.center_x) * factor
        new_center_y = cursor_y - (cursor_y - view.center_y) * factor

        view.scale = new_scale
        view.center_x = new_center_x
        view.center_y = new_center_y
        return True
