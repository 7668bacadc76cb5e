"""Value types exchanged between the zoom helpers and the host map widget."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Union


@dataclass(frozen=True)
class Coordinate:
    """A geographic position in degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class CoordinateSpan:
    """Angular height and width of a displayed region, in degrees."""

    latitude_delta: float
    longitude_delta: float

    def scaled(self, factor: float) -> "CoordinateSpan":
        return CoordinateSpan(self.latitude_delta * factor, self.longitude_delta * factor)


@dataclass(frozen=True)
class CoordinateRegion:
    """The visible extent of a map: a center coordinate plus a span."""

    center: Coordinate
    span: CoordinateSpan

    @property
    def north(self) -> float:
        return self.center.latitude + self.span.latitude_delta / 2.0

    @property
    def south(self) -> float:
        return self.center.latitude - self.span.latitude_delta / 2.0

    @property
    def west(self) -> float:
        return self.center.longitude - self.span.longitude_delta / 2.0

    @property
    def east(self) -> float:
        return self.center.longitude + self.span.longitude_delta / 2.0


@dataclass(frozen=True)
class ViewportSize:
    """On-screen pixel dimensions of the map surface."""

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Viewport size must be positive, got {self.width}x{self.height}"
            )

    @classmethod
    def from_rect(cls, rect: Union[Sequence[float], Any]) -> "ViewportSize":
        """Build a size from a ``pygame.Rect``, a surface size or a ``(w, h)`` pair."""

        width = getattr(rect, "width", None)
        height = getattr(rect, "height", None)
        if width is None or height is None:
            width, height = rect[0], rect[1]
        return cls(float(width), float(height))


__all__ = ["Coordinate", "CoordinateRegion", "CoordinateSpan", "ViewportSize"]
