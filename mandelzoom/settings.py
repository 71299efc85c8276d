"""
Settings for the viewer.

Defaults ship as settings.json next to this file. A user settings file
only needs the keys it wants to change; it is merged over the defaults.
"""

import copy
import json
import logging
import os

from .camera import Camera
from .complex_math import Complex
from .gradient import Gradient


logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

# Used when settings.json itself cannot be read
FALLBACK_SETTINGS = {
    'window': {'width': 400, 'height': 400, 'fps': 60},
    'render': {'max_iterations': 100, 'plane_scale': 4.0, 'cache_size': 0},
    'camera': {'center': [0.0, 0.0], 'zoom': 0.5, 'damping': 0.1, 'zoom_damping': 0.1},
    'input': {'wheel_step': 0.24},
    'gradient': {
        'period': 100.0,
        'initial': [0.0, 0.0, 1.0],
        'stops': [
            {'offset': 0.3, 'color': [1.0, 0.0, 0.0]},
            {'offset': 0.5, 'color': [1.0, 1.0, 0.0]},
            {'offset': 0.7, 'color': [0.0, 1.0, 0.0]},
            {'offset': 0.9, 'color': [0.0, 1.0, 1.0]},
        ],
        'final': [0.0, 0.0, 0.0],
        'final_falloff': 10.0,
    },
}


def _read_json(path):
    """Read a JSON file, returning None (with a warning) if it can't be used."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        # ValueError covers JSONDecodeError and UnicodeDecodeError
        logger.warning("Could not load settings from %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Could not load settings from %s: top level is %s, not an object",
                       path, type(data).__name__)
        return None
    return data


def merge_settings(base, override):
    """
    Recursively merge `override` into a copy of `base`.

    Nested dicts are merged key by key; any other value (including
    lists such as gradient stops) replaces the base value.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_settings(path=None):
    """
    Load settings, merging an optional user file over the defaults.

    Args:
        path: Path to a user settings JSON file, or None

    Returns:
        Settings dictionary with every key present
    """
    settings = _read_json(DEFAULT_SETTINGS_PATH)
    if settings is None:
        settings = copy.deepcopy(FALLBACK_SETTINGS)
    else:
        settings = merge_settings(FALLBACK_SETTINGS, settings)

    if path is not None:
        user = _read_json(path)
        if user is not None:
            settings = merge_settings(settings, user)
    return settings


def build_gradient(settings):
    """Create the Gradient described by the settings (cache included)."""
    gradient = Gradient.from_dict(settings['gradient'])
    cache_size = settings['render'].get('cache_size', 0)
    if cache_size:
        gradient.create_cache(cache_size)
    return gradient


def initial_view(settings):
    """(center, zoom) of the starting view."""
    re, im = settings['camera']['center']
    return Complex(re, im), float(settings['camera']['zoom'])


def build_camera(settings):
    """Create a Camera at the starting view, at rest."""
    center, zoom = initial_view(settings)
    return Camera(center=center, zoom=zoom)
