"""
Startup settings for the Mandelbrot explorer.

Settings come from three layers, later ones winning:
1. Built-in defaults (class constants below)
2. An optional settings.json file
3. Explicit overrides (command-line flags)

Example settings.json:
    {
        "width": 1024,
        "height": 768,
        "max_iterations": 512,
        "zoom_sensitivity": 0.1,
        "min_scale": 1e-12,
        "max_scale": 100.0,
        "palette": "Classic"
    }
"""

import json
import logging
import os

from .colormaps import COLORMAPS, DEFAULT_COLORMAP
from .compute import MAX_ITERATIONS
from .view import ZoomController


logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = 'MANDELBROT_VIEW_SETTINGS'
SETTINGS_FILENAME = 'settings.json'


def _positive_int(value):
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _positive_number(value):
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and value > 0 and value != float('inf'))


def _palette_name(value):
    return value in COLORMAPS


class Settings:
    """
    Validated explorer configuration.

    Attributes:
        width, height: Initial window size in pixels
        max_iterations: Iteration limit, fixed for the session
        zoom_sensitivity: Scale change per unit of scroll
        min_scale, max_scale: Bounds on the view scale
        palette: Palette name from colormaps.COLORMAPS
    """

    DEFAULTS = {
        'width': 800,
        'height': 600,
        'max_iterations': MAX_ITERATIONS,
        'zoom_sensitivity': ZoomController.DEFAULT_SENSITIVITY,
        'min_scale': ZoomController.DEFAULT_MIN_SCALE,
        'max_scale': ZoomController.DEFAULT_MAX_SCALE,
        'palette': DEFAULT_COLORMAP,
    }

    VALIDATORS = {
        'width': _positive_int,
        'height': _positive_int,
        'max_iterations': _positive_int,
        'zoom_sensitivity': _positive_number,
        'min_scale': _positive_number,
        'max_scale': _positive_number,
        'palette': _palette_name,
    }

    def __init__(self, **values):
        merged = dict(self.DEFAULTS)
        merged.update(values)
        unknown = set(merged) - set(self.DEFAULTS)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
        for key, value in merged.items():
            if not self.VALIDATORS[key](value):
                raise ValueError(f"Invalid value for {key}: {value!r}")
        if merged['min_scale'] > merged['max_scale']:
            raise ValueError("min_scale must not exceed max_scale")
        self.__dict__.update(merged)

    def __repr__(self):
        fields = ', '.join(f"{k}={getattr(self, k)!r}" for k in self.DEFAULTS)
        return f"Settings({fields})"

    def as_dict(self):
        return {key: getattr(self, key) for key in self.DEFAULTS}

    @classmethod
    def validated(cls, raw):
        """
        Build settings from untrusted values, keeping defaults for bad ones.

        Each rejected key is logged; nothing is raised.
        """
        values = {}
        for key, value in raw.items():
            if key not in cls.VALIDATORS:
                logger.warning("Ignoring unknown setting %r", key)
            elif not cls.VALIDATORS[key](value):
                logger.warning("Ignoring invalid value for %s: %r (using %r)",
                               key, value, cls.DEFAULTS[key])
            else:
                values[key] = value

        min_scale = values.get('min_scale', cls.DEFAULTS['min_scale'])
        max_scale = values.get('max_scale', cls.DEFAULTS['max_scale'])
        if min_scale > max_scale:
            logger.warning("min_scale %g exceeds max_scale %g, using default bounds",
                           min_scale, max_scale)
            values.pop('min_scale', None)
            values.pop('max_scale', None)
        return cls(**values)

    def with_overrides(self, **overrides):
        """Copy with non-None overrides applied. Raises ValueError on bad values."""
        values = self.as_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return Settings(**values)


def find_settings_file(path=None):
    """Resolve which settings file to read, or None."""
    if path:
        return path
    env_path = os.environ.get(SETTINGS_ENV_VAR)
    if env_path:
        return env_path
    if os.path.isfile(SETTINGS_FILENAME):
        return SETTINGS_FILENAME
    return None


def load_settings(path=None):
    """
    Load settings from a JSON file.

    Args:
        path: Explicit settings file; falls back to $MANDELBROT_VIEW_SETTINGS,
            then ./settings.json

    Returns:
        Settings; defaults if there is no usable file
    """
    settings_path = find_settings_file(path)
    if settings_path is None:
        logger.debug("No settings file, using defaults")
        return Settings()

    try:
        with open(settings_path, 'r') as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load %s: %s", settings_path, e)
        return Settings()

    if not isinstance(raw, dict):
        logger.warning("Ignoring %s: expected a JSON object", settings_path)
        return Settings()

    logger.debug("Loaded settings from %s", settings_path)
    return Settings.validated(raw)
