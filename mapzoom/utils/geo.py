"""Mercator pixel-space conversions used by the zoom helpers.

The pixel world is a square of ``2 * MERCATOR_OFFSET`` pixels on each side,
i.e. the whole world drawn with 256 pixel tiles at zoom level 21. All
conversions round to whole pixels.
"""

from __future__ import annotations

import math

import numpy as np

MERCATOR_OFFSET = 268435456.0
MERCATOR_RADIUS = 85445659.44705395
WORLD_SIZE_PX = MERCATOR_OFFSET * 2


def _round(value: float) -> float:
    """Round half away from zero, as C's ``round`` does."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


def longitude_to_pixel_x(longitude: float) -> float:
    """Project a longitude in degrees onto the pixel X axis."""
    return _round(MERCATOR_OFFSET + MERCATOR_RADIUS * longitude * math.pi / 180.0)


def latitude_to_pixel_y(latitude: float, single_precision: bool = False) -> float:
    """Project a latitude in degrees onto the pixel Y axis.

    The poles map onto the world edges directly since the Mercator formula
    diverges there. With ``single_precision`` the sine and logarithm are
    evaluated as 32-bit floats, matching legacy map widgets tile for tile.
    """
    if latitude == 90.0:
        return 0.0
    if latitude == -90.0:
        return WORLD_SIZE_PX

    if single_precision:
        sin_lat = np.sin(np.float32(latitude * math.pi / 180.0))
    else:
        sin_lat = math.sin(latitude * math.pi / 180.0)
    # sine rounds to +-1 just short of the poles
    if sin_lat >= 1.0:
        return 0.0
    if sin_lat <= -1.0:
        return WORLD_SIZE_PX

    if single_precision:
        ratio = (np.float32(1.0) + sin_lat) / (np.float32(1.0) - sin_lat)
        composed = float(np.log(ratio))
    else:
        composed = math.log((1.0 + sin_lat) / (1.0 - sin_lat))
    return _round(MERCATOR_OFFSET - MERCATOR_RADIUS * composed / 2.0)


def pixel_x_to_longitude(pixel_x: float) -> float:
    return ((_round(pixel_x) - MERCATOR_OFFSET) / MERCATOR_RADIUS) * 180.0 / math.pi


def pixel_y_to_latitude(pixel_y: float) -> float:
    exponent = (_round(pixel_y) - MERCATOR_OFFSET) / MERCATOR_RADIUS
    # atan saturates long before exp overflows
    inner = math.atan(math.exp(exponent)) if exponent < 700.0 else math.pi / 2.0
    return (math.pi / 2.0 - 2.0 * inner) * 180.0 / math.pi


def clamp_latitude(latitude: float) -> float:
    return min(max(-90.0, latitude), 90.0)


def normalize_longitude(longitude: float, mode: str = "legacy") -> float:
    """Reduce a longitude before projecting it.

    ``legacy`` keeps the historical ``fmod(longitude, 180)`` reduction, which
    leaves values in (-180, 180) but maps e.g. 190 onto 10 rather than -170.
    ``wrap`` wraps fully into (-180, 180].
    """
    if mode == "legacy":
        return math.fmod(longitude, 180.0)
    if mode == "wrap":
        wrapped = math.fmod(longitude + 180.0, 360.0)
        if wrapped <= 0.0:
            wrapped += 360.0
        return wrapped - 180.0
    raise ValueError(f"Unknown longitude wrap mode '{mode}'")


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
