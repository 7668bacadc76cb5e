"""Core building blocks: value types, zoom math and the map view bridge."""

from .map_view import MapViewController, MapWidget, RegionListener, set_center, zoom_level
from .types import Coordinate, CoordinateRegion, CoordinateSpan, ViewportSize
from .zoom import (
    MAX_ZOOM_LEVEL,
    clamp_zoom_level,
    region_for_zoom,
    span_for_zoom,
    zoom_level_for_region,
)

__all__ = [
    "Coordinate",
    "CoordinateRegion",
    "CoordinateSpan",
    "MAX_ZOOM_LEVEL",
    "MapViewController",
    "MapWidget",
    "RegionListener",
    "ViewportSize",
    "clamp_zoom_level",
    "region_for_zoom",
    "set_center",
    "span_for_zoom",
    "zoom_level",
    "zoom_level_for_region",
]
