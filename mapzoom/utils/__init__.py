"""Utility helpers for the Mercator zoom runtime."""

from .geo import (
    MERCATOR_OFFSET,
    MERCATOR_RADIUS,
    WORLD_SIZE_PX,
    clamp_latitude,
    latitude_to_pixel_y,
    longitude_to_pixel_x,
    normalize_longitude,
    pixel_x_to_longitude,
    pixel_y_to_latitude,
)

__all__ = [
    "MERCATOR_OFFSET",
    "MERCATOR_RADIUS",
    "WORLD_SIZE_PX",
    "clamp_latitude",
    "latitude_to_pixel_y",
    "longitude_to_pixel_x",
    "normalize_longitude",
    "pixel_x_to_longitude",
    "pixel_y_to_latitude",
]
