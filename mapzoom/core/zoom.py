"""Zoom level helpers built on the Mercator pixel space.

A zoom level ``z`` shows ``2 ** (20 - z)`` pixel-space pixels per screen
pixel, so every step up halves the span covered by the viewport.
"""

from __future__ import annotations

import logging
import math
from typing import Tuple

from mapzoom.utils.geo import (
    MERCATOR_RADIUS,
    WORLD_SIZE_PX,
    clamp_latitude,
    latitude_to_pixel_y,
    longitude_to_pixel_x,
    normalize_longitude,
    pixel_x_to_longitude,
    pixel_y_to_latitude,
)

from .types import Coordinate, CoordinateRegion, CoordinateSpan, ViewportSize

logger = logging.getLogger(__name__)

MAX_ZOOM_LEVEL = 28
BASE_ZOOM_EXPONENT = 20

# Decimal places kept before truncating a zoom level; absorbs float noise in spans.
_LEVEL_DIGITS = 6


def clamp_zoom_level(zoom_level: int, max_zoom: int = MAX_ZOOM_LEVEL) -> int:
    """Clamp *zoom_level* to *max_zoom*. There is no lower bound."""

    if zoom_level > max_zoom:
        logger.debug("Zoom level %s clamped to %s", zoom_level, max_zoom)
        return max_zoom
    return zoom_level


def zoom_scale(zoom_level: float) -> float:
    return math.pow(2.0, BASE_ZOOM_EXPONENT - zoom_level)


def _scaled_extent(zoom_level: float, viewport: ViewportSize) -> Tuple[float, float]:
    scale = zoom_scale(zoom_level)
    return viewport.width * scale, viewport.height * scale


def _longitude_delta(center_pixel_x: float, scaled_width: float) -> float:
    left_pixel_x = center_pixel_x - scaled_width / 2.0
    min_longitude = pixel_x_to_longitude(left_pixel_x)
    max_longitude = pixel_x_to_longitude(left_pixel_x + scaled_width)
    return max_longitude - min_longitude


def _latitude_delta(top_pixel_y: float, bottom_pixel_y: float) -> float:
    # latitude decreases as pixel Y grows
    return -(pixel_y_to_latitude(bottom_pixel_y) - pixel_y_to_latitude(top_pixel_y))


def span_for_zoom(
    center: Coordinate,
    zoom_level: float,
    viewport: ViewportSize,
    *,
    single_precision: bool = False,
) -> CoordinateSpan:
    """Return the span visible around *center* at *zoom_level* on *viewport*."""

    center_pixel_x = longitude_to_pixel_x(center.longitude)
    center_pixel_y = latitude_to_pixel_y(center.latitude, single_precision)
    scaled_width, scaled_height = _scaled_extent(zoom_level, viewport)

    top_pixel_y = center_pixel_y - scaled_height / 2.0
    return CoordinateSpan(
        latitude_delta=_latitude_delta(top_pixel_y, top_pixel_y + scaled_height),
        longitude_delta=_longitude_delta(center_pixel_x, scaled_width),
    )


def region_for_zoom(
    center: Coordinate,
    zoom_level: float,
    viewport: ViewportSize,
    *,
    single_precision: bool = False,
    longitude_wrap: str = "legacy",
) -> CoordinateRegion:
    """Return the region shown when centering on *center* at *zoom_level*.

    The center is clamped into range first. Mercator cannot draw a box that
    crosses a pole, so when the viewport would run off the bottom of the
    pixel world it is pinned to that edge, extends ``scaled_height`` above
    the requested center, and the returned center moves to the middle of the
    pinned box.
    """

    latitude = clamp_latitude(center.latitude)
    longitude = normalize_longitude(center.longitude, longitude_wrap)
    if longitude != center.longitude:
        logger.debug("Longitude %s reduced to %s", center.longitude, longitude)

    center_pixel_x = longitude_to_pixel_x(longitude)
    center_pixel_y = latitude_to_pixel_y(latitude, single_precision)
    scaled_width, scaled_height = _scaled_extent(zoom_level, viewport)

    longitude_delta = _longitude_delta(center_pixel_x, scaled_width)

    top_pixel_y = center_pixel_y - scaled_height / 2.0
    bottom_pixel_y = center_pixel_y + scaled_height / 2.0
    adjusted = False
    if bottom_pixel_y > WORLD_SIZE_PX:
        top_pixel_y = center_pixel_y - scaled_height
        bottom_pixel_y = WORLD_SIZE_PX
        adjusted = True

    span = CoordinateSpan(
        latitude_delta=_latitude_delta(top_pixel_y, bottom_pixel_y),
        longitude_delta=longitude_delta,
    )

    if adjusted:
        latitude = pixel_y_to_latitude((top_pixel_y + bottom_pixel_y) / 2.0)
        logger.debug(
            "Viewport pinned to south edge at zoom %s, center latitude %s -> %s",
            zoom_level,
            center.latitude,
            latitude,
        )

    return CoordinateRegion(Coordinate(latitude, longitude), span)


def zoom_level_for_region(
    region: CoordinateRegion,
    viewport: ViewportSize,
    max_zoom: int = MAX_ZOOM_LEVEL,
) -> int:
    """Return the integer zoom level at which *region* fills *viewport*.

    Inverse of :func:`span_for_zoom` along the horizontal axis, truncated
    toward zero. The span is measured in unrounded pixel-world pixels so that
    odd viewport widths survive the round trip. Above zoom 20 the span itself
    is quantized to whole pixels and can report one level lower when
    ``viewport.width * zoom_scale(z)`` is not a whole number. A region with
    no horizontal extent reports *max_zoom*.
    """

    scaled_width = MERCATOR_RADIUS * region.span.longitude_delta * math.pi / 180.0
    if scaled_width <= 0.0:
        return max_zoom

    scale = scaled_width / viewport.width
    level = round(BASE_ZOOM_EXPONENT - math.log2(scale), _LEVEL_DIGITS)
    return int(level)


__all__ = [
    "BASE_ZOOM_EXPONENT",
    "MAX_ZOOM_LEVEL",
    "clamp_zoom_level",
    "region_for_zoom",
    "span_for_zoom",
    "zoom_level_for_region",
    "zoom_scale",
]
