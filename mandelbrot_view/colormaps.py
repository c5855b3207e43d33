"""
Palette definitions for Mandelbrot visualization.

Each palette function takes the iteration limit and returns a numpy array
of shape (max_iter + 1, 4) with RGBA values (uint8), one row per possible
iteration count. Row max_iter belongs to points inside the set and is
always opaque black.

To add a new palette:
1. Define a create_colormap_xxx(max_iter) function that returns the table
2. Add it to the COLORMAPS dictionary at the bottom of this file
"""

import numpy as np


BLACK = (0, 0, 0, 255)


def _classic_channels(n):
    """Bernstein-polynomial RGB curves for normalized escape fraction n."""
    r = 9.0 * (1.0 - n) * n ** 3 * 255.0
    g = 15.0 * (1.0 - n) ** 2 * n ** 2 * 255.0
    b = 8.5 * (1.0 - n) ** 3 * n * 255.0
    return r, g, b


def color_for_iteration(i, max_iter):
    """
    Color a single iteration count with the classic palette.

    Args:
        i: Iteration count in [0, max_iter]
        max_iter: Iteration limit; i == max_iter means "did not escape"

    Returns:
        Tuple (r, g, b, a) of ints in [0, 255]
    """
    if i >= max_iter:
        return BLACK
    n = i / max_iter
    return tuple(
        max(0, min(255, int(round(channel)))) for channel in _classic_channels(n)
    ) + (255,)


def create_colormap_classic(max_iter):
    """
    Classic palette: black -> deep blue -> green -> orange -> black.

    Smooth blend of three polynomials peaking at different escape
    fractions, so fast-escaping points go blue and slow ones go gold.
    """
    colors = np.zeros((max_iter + 1, 4), dtype=np.uint8)
    n = np.arange(max_iter, dtype=np.float64) / max_iter
    for channel, values in enumerate(_classic_channels(n)):
        colors[:max_iter, channel] = np.clip(np.rint(values), 0, 255)
    colors[:, 3] = 255
    colors[max_iter] = BLACK
    return colors


def create_colormap_grayscale(max_iter):
    """
    Grayscale palette: black -> white.

    Brightness grows linearly with the iteration count; the last row
    (points that never escaped) stays black.
    """
    colors = np.zeros((max_iter + 1, 4), dtype=np.uint8)
    v = np.clip(np.rint(255.0 * np.arange(max_iter) / max_iter), 0, 255)
    colors[:max_iter, 0] = v
    colors[:max_iter, 1] = v
    colors[:max_iter, 2] = v
    colors[:, 3] = 255
    colors[max_iter] = BLACK
    return colors


# Registry of all available palettes.
# Keys are display names, values are factory functions.
COLORMAPS = {
    'Classic': create_colormap_classic,
    'Grayscale': create_colormap_grayscale,
}

DEFAULT_COLORMAP = 'Classic'


def get_colormap(name, max_iter):
    """
    Get a palette table by name.

    Args:
        name: Key from COLORMAPS dictionary
        max_iter: Iteration limit the table is built for

    Returns:
        Palette array (max_iter + 1, 4) of uint8 RGBA values

    Raises:
        KeyError if name not found
    """
    return COLORMAPS[name](max_iter)


def list_colormap_names():
    """Get list of available palette names."""
    return list(COLORMAPS.keys())
