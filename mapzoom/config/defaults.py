"""Default configuration used when no user settings are available."""

from __future__ import annotations

from copy import deepcopy

LONGITUDE_WRAP_MODES = ("legacy", "wrap")

DEFAULT_PROJECTION_CONFIG = {
    "single_precision": False,
    "longitude_wrap": "legacy",
}


DEFAULT_ZOOM_CONFIG = {
    "max_zoom_level": 28,
}


DEFAULT_MAP_CONFIG = {
    "latitude": 0.0,
    "longitude": 0.0,
    "zoom_level": 2,
    "width": 320,
    "height": 320,
    "animation_speed": 0.25,
}


DEFAULT_LOGGING_CONFIG = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
}


def clone_defaults():
    """
    Create deep copies of the module's default configuration structures.

    Returns:
        tuple: (projection, zoom, map, logging) dictionaries.
    """

    return (
        deepcopy(DEFAULT_PROJECTION_CONFIG),
        deepcopy(DEFAULT_ZOOM_CONFIG),
        deepcopy(DEFAULT_MAP_CONFIG),
        deepcopy(DEFAULT_LOGGING_CONFIG),
    )
