"""
Input events consumed by the explorer core.

The windowing layer (app.py for pygame) translates its native events
into these; the core never sees toolkit types. Pixel coordinates are
relative to the top-left of the display area.
"""

from collections import namedtuple


PRIMARY_BUTTON = 1  # Left mouse button

# Pointer moved to pixel (x, y)
PointerMoved = namedtuple('PointerMoved', ['x', 'y'])

# Pointer left the display area
PointerLeft = namedtuple('PointerLeft', [])

# Button pressed (pressed=True) or released (pressed=False)
ButtonChanged = namedtuple('ButtonChanged', ['button', 'pressed'])

# Vertical scroll; positive delta_y zooms in
Scrolled = namedtuple('Scrolled', ['delta_y'])

# Display area now has this many pixels
Resized = namedtuple('Resized', ['width', 'height'])
