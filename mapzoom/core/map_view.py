"""Bridge between the zoom helpers and a host map widget.

The helpers in :mod:`mapzoom.core.zoom` are pure functions. The functions in
this module read the host's displayed region and viewport size and issue the
single "display this region" command. :class:`MapViewController` is an
in-process host that keeps the displayed region for screens which draw the
map themselves.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Protocol

import pygame

from mapzoom.config import MapSettings, ProjectionSettings
from mapzoom.utils.geo import normalize_longitude

from .types import Coordinate, CoordinateRegion, CoordinateSpan, ViewportSize
from .zoom import MAX_ZOOM_LEVEL, clamp_zoom_level, span_for_zoom, zoom_level_for_region

logger = logging.getLogger(__name__)

RegionListener = Callable[[CoordinateRegion], None]

# Remaining difference, in degrees, below which an animation snaps to its target.
_SETTLE_EPSILON = 1e-9


class MapWidget(Protocol):
    """What the zoom helpers need from a map widget."""

    @property
    def region(self) -> CoordinateRegion: ...

    @property
    def viewport_size(self) -> ViewportSize: ...

    def set_region(self, region: CoordinateRegion, animated: bool = False) -> None: ...


def set_center(
    widget: MapWidget,
    coordinate: Coordinate,
    zoom_level: int,
    animated: bool = False,
    *,
    max_zoom: int = MAX_ZOOM_LEVEL,
    single_precision: bool = False,
) -> None:
    """Center *widget* on *coordinate* at *zoom_level*."""

    zoom = clamp_zoom_level(zoom_level, max_zoom)
    span = span_for_zoom(
        coordinate, zoom, widget.viewport_size, single_precision=single_precision
    )
    widget.set_region(CoordinateRegion(coordinate, span), animated)


def zoom_level(widget: MapWidget, max_zoom: int = MAX_ZOOM_LEVEL) -> int:
    """Return the integer zoom level of the region *widget* currently shows."""

    return zoom_level_for_region(widget.region, widget.viewport_size, max_zoom)


def _lerp(current: float, target: float, speed: float) -> float:
    return current + (target - current) * speed


def _longitude_offset(current: float, target: float) -> float:
    """Signed shortest arc from *current* to *target*, in (-180, 180]."""
    offset = (target - current + 180.0) % 360.0 - 180.0
    return 180.0 if offset == -180.0 else offset


def _interpolate(current: CoordinateRegion, target: CoordinateRegion, speed: float) -> CoordinateRegion:
    return CoordinateRegion(
        Coordinate(
            _lerp(current.center.latitude, target.center.latitude, speed),
            normalize_longitude(
                current.center.longitude
                + _longitude_offset(current.center.longitude, target.center.longitude) * speed,
                "wrap",
            ),
        ),
        CoordinateSpan(
            _lerp(current.span.latitude_delta, target.span.latitude_delta, speed),
            _lerp(current.span.longitude_delta, target.span.longitude_delta, speed),
        ),
    )


def _settled(current: CoordinateRegion, target: CoordinateRegion) -> bool:
    return (
        abs(current.center.latitude - target.center.latitude) < _SETTLE_EPSILON
        and abs(_longitude_offset(current.center.longitude, target.center.longitude)) < _SETTLE_EPSILON
        and abs(current.span.latitude_delta - target.span.latitude_delta) < _SETTLE_EPSILON
        and abs(current.span.longitude_delta - target.span.longitude_delta) < _SETTLE_EPSILON
    )


class MapViewController:
    """Keep the displayed region of a map surface and ease between regions."""

    def __init__(
        self,
        settings: Optional[MapSettings] = None,
        projection: Optional[ProjectionSettings] = None,
        *,
        max_zoom: int = MAX_ZOOM_LEVEL,
        on_region_changed: Optional[RegionListener] = None,
    ) -> None:
        self._settings = settings or MapSettings()
        self._projection = projection or ProjectionSettings()
        self._max_zoom = max_zoom
        self._lock = threading.RLock()
        self._listeners: List[RegionListener] = []
        if on_region_changed is not None:
            self.add_region_listener(on_region_changed)
        self._viewport_rect = pygame.Rect(0, 0, self._settings.width, self._settings.height)

        center = Coordinate(self._settings.latitude, self._settings.longitude)
        span = span_for_zoom(
            center,
            clamp_zoom_level(self._settings.zoom_level, max_zoom),
            self.viewport_size,
            single_precision=self._projection.single_precision,
        )
        self._region = CoordinateRegion(center, span)
        self._target_region: Optional[CoordinateRegion] = None

    # ------------------------------------------------------------------ properties
    @property
    def region(self) -> CoordinateRegion:
        with self._lock:
            return self._region

    @property
    def target_region(self) -> Optional[CoordinateRegion]:
        with self._lock:
            return self._target_region

    @property
    def is_animating(self) -> bool:
        with self._lock:
            return self._target_region is not None

    @property
    def viewport_rect(self) -> pygame.Rect:
        with self._lock:
            return self._viewport_rect.copy()

    @property
    def viewport_size(self) -> ViewportSize:
        with self._lock:
            return ViewportSize.from_rect(self._viewport_rect)

    @property
    def zoom_level(self) -> int:
        return zoom_level(self, self._max_zoom)

    # ------------------------------------------------------------------ listeners
    def add_region_listener(self, listener: RegionListener) -> RegionListener:
        """Call *listener* with the new region whenever the displayed region settles."""

        if not callable(listener):
            raise TypeError("region listener must be callable")
        with self._lock:
            self._listeners.append(listener)
        return listener

    def remove_region_listener(self, listener: RegionListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    # ------------------------------------------------------------------ configuration
    def resize(self, rect: pygame.Rect) -> None:
        """Adopt a new map surface geometry, keeping the displayed region."""

        ViewportSize.from_rect(rect)
        with self._lock:
            self._viewport_rect = pygame.Rect(rect)

    # ------------------------------------------------------------------ commands
    def set_region(self, region: CoordinateRegion, animated: bool = False) -> None:
        if animated:
            with self._lock:
                self._target_region = region
            logger.debug("Animating map region toward %s", region)
            return
        with self._lock:
            self._target_region = None
        self._apply(region)

    def set_center_coordinate(
        self,
        coordinate: Coordinate,
        zoom_level: int,
        animated: bool = False,
    ) -> None:
        set_center(
            self,
            coordinate,
            zoom_level,
            animated,
            max_zoom=self._max_zoom,
            single_precision=self._projection.single_precision,
        )

    # ------------------------------------------------------------------ update cycle
    def update(self) -> None:
        """Advance a running animation by one frame."""

        speed = self._settings.animation_speed
        with self._lock:
            target = self._target_region
            if target is None:
                return
            stepped = _interpolate(self._region, target, speed)
            if _settled(stepped, target):
                self._target_region = None
                stepped = target
            else:
                self._region = stepped
                return
        self._apply(stepped)

    def _apply(self, region: CoordinateRegion) -> None:
        with self._lock:
            changed = region != self._region
            self._region = region
        if not changed:
            return
        logger.debug("Map region changed to %s", region)
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(region)
            except Exception:
                logger.exception("Region listener %r failed", listener)


__all__ = [
    "MapViewController",
    "MapWidget",
    "RegionListener",
    "set_center",
    "zoom_level",
]
