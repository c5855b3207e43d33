"""
Mandelbrot computation functions using Numba JIT compilation.

This module contains all the performance-critical computation functions
that are JIT-compiled for speed. These functions handle:
- Mapping between pixel indices and complex-plane coordinates
- Escape-time iteration for a single point
- Whole-frame iteration (parallel over rows)
- Palette application into an RGBA buffer

A view is described by its center (center_x, center_y) and its scale,
the width in plane units spanned by the full buffer width. The vertical
extent follows from the buffer's aspect ratio.
"""

import numpy as np
from numba import jit, prange


MAX_ITERATIONS = 512  # Default iteration limit before a point is treated as bounded
ESCAPE_RADIUS_SQ = 4.0  # |z|^2 threshold (escape radius 2)


@jit(nopython=True, cache=True)
def linear_map(v, in_lo, in_hi, out_lo, out_hi):
    """
    Map a value from [in_lo, in_hi] onto [out_lo, out_hi].

    A zero-width input range maps to the midpoint of the output range,
    so a single pixel row or column lands on the view center.
    """
    if in_hi == in_lo:
        return (out_lo + out_hi) * 0.5
    return (v - in_lo) * (out_hi - out_lo) / (in_hi - in_lo) + out_lo


@jit(nopython=True, cache=True)
def plane_bounds(center_x, center_y, scale, width, height):
    """
    Compute the visible region of the complex plane.

    Returns:
        Tuple (x_min, x_max, y_min, y_max)
    """
    aspect_ratio = float(width) / float(height)
    plane_height = scale / aspect_ratio
    half_w = scale * 0.5
    half_h = plane_height * 0.5
    return (center_x - half_w, center_x + half_w,
            center_y - half_h, center_y + half_h)


@jit(nopython=True, cache=True)
def pixel_to_complex(center_x, center_y, scale, width, height, x, y):
    """
    Convert pixel (x, y) to the complex-plane point it samples.

    Pixel row 0 is the top of the image, so the imaginary axis is
    inverted: y = 0 maps to y_max.

    Returns:
        Tuple (cx, cy)
    """
    x_min, x_max, y_min, y_max = plane_bounds(center_x, center_y, scale, width, height)
    cx = linear_map(float(x), 0.0, float(width - 1), x_min, x_max)
    cy = linear_map(float(y), 0.0, float(height - 1), y_max, y_min)
    return cx, cy


@jit(nopython=True, cache=True)
def complex_to_pixel(center_x, center_y, scale, width, height, cx, cy):
    """
    Inverse of pixel_to_complex.

    Returns fractional pixel coordinates (x, y); they fall outside
    [0, width-1] x [0, height-1] for points outside the view.
    """
    x_min, x_max, y_min, y_max = plane_bounds(center_x, center_y, scale, width, height)
    x = linear_map(cx, x_min, x_max, 0.0, float(width - 1))
    y = linear_map(cy, y_max, y_min, 0.0, float(height - 1))
    return x, y


@jit(nopython=True, cache=True)
def escape_time(cx, cy, max_iter):
    """
    Count iterations of z -> z^2 + c until |z|^2 >= 4.

    Starts from z = 0. Returns a value in [0, max_iter]; max_iter means
    the point never escaped within the budget.
    """
    zx = 0.0
    zy = 0.0
    i = 0
    while zx * zx + zy * zy < ESCAPE_RADIUS_SQ and i < max_iter:
        tmp = zx * zx - zy * zy + cx
        zy = 2.0 * zx * zy + cy
        zx = tmp
        i += 1
    return i


@jit(nopython=True, parallel=True, cache=True)
def compute_iterations(center_x, center_y, scale, width, height, max_iter):
    """
    Compute escape-time iteration counts for every pixel of a view.

    Rows are distributed across threads; each pixel is independent.

    Args:
        center_x, center_y: View center in the complex plane
        scale: Plane width spanned by the full image width
        width, height: Image dimensions in pixels
        max_iter: Maximum iteration count before assuming point is in set

    Returns:
        2D numpy array (height, width) of int32 iteration counts.
    """
    result = np.empty((height, width), dtype=np.int32)

    x_min, x_max, y_min, y_max = plane_bounds(center_x, center_y, scale, width, height)
    last_x = float(width - 1)
    last_y = float(height - 1)

    for py in prange(height):
        cy = linear_map(float(py), 0.0, last_y, y_max, y_min)
        for px in range(width):
            cx = linear_map(float(px), 0.0, last_x, x_min, x_max)
            result[py, px] = escape_time(cx, cy, max_iter)

    return result


@jit(nopython=True, parallel=True, cache=True)
def apply_palette(data, palette, out):
    """
    Color iteration counts through a lookup table.

    Args:
        data: 2D array of iteration counts in [0, max_iter]
        palette: (max_iter + 1, 4) uint8 RGBA lookup table
        out: Output RGBA image array (height, width, 4), modified in place
    """
    height, width = data.shape
    last = palette.shape[0] - 1

    for py in prange(height):
        for px in range(width):
            idx = data[py, px]
            if idx < 0:
                idx = 0
            elif idx > last:
                idx = last
            out[py, px, 0] = palette[idx, 0]
            out[py, px, 1] = palette[idx, 1]
            out[py, px, 2] = palette[idx, 2]
            out[py, px, 3] = palette[idx, 3]


def warmup_jit(palette):
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real frame.

    Args:
        palette: A palette table to use for warming up apply_palette
    """
    data = compute_iterations(-0.75, 0.0, 3.5, 8, 6, 8)
    dummy = np.zeros((6, 8, 4), dtype=np.uint8)
    apply_palette(data, palette, dummy)
    pixel_to_complex(-0.75, 0.0, 3.5, 8, 6, 0, 0)
    complex_to_pixel(-0.75, 0.0, 3.5, 8, 6, 0.0, 0.0)
