from __future__ import annotations

import pytest

from mapzoom.utils.geo import (
    MERCATOR_OFFSET,
    WORLD_SIZE_PX,
    clamp_latitude,
    latitude_to_pixel_y,
    longitude_to_pixel_x,
    normalize_longitude,
    pixel_x_to_longitude,
    pixel_y_to_latitude,
)

# One pixel of the pixel world, in degrees of longitude.
PIXEL_DEGREES = 180.0 / MERCATOR_OFFSET


def test_longitude_to_pixel_x_spans_the_world() -> None:
    assert longitude_to_pixel_x(0.0) == MERCATOR_OFFSET
    assert longitude_to_pixel_x(-180.0) == pytest.approx(0.0, abs=1)
    assert longitude_to_pixel_x(180.0) == pytest.approx(WORLD_SIZE_PX, abs=1)


def test_pixel_coordinates_are_whole_pixels() -> None:
    for longitude in (-122.4194, 2.3522, 151.2093):
        assert longitude_to_pixel_x(longitude).is_integer()
    for latitude in (-33.8688, 0.5, 48.8566):
        assert latitude_to_pixel_y(latitude).is_integer()


def test_latitude_to_pixel_y_poles_map_to_world_edges() -> None:
    assert latitude_to_pixel_y(90.0) == 0
    assert latitude_to_pixel_y(-90.0) == 2 * MERCATOR_OFFSET


def test_latitude_to_pixel_y_equator_is_world_middle() -> None:
    assert latitude_to_pixel_y(0.0) == MERCATOR_OFFSET


def test_latitude_to_pixel_y_grows_southward() -> None:
    assert latitude_to_pixel_y(45.0) < latitude_to_pixel_y(0.0) < latitude_to_pixel_y(-45.0)


def test_latitude_just_short_of_pole_does_not_fail() -> None:
    assert latitude_to_pixel_y(89.9999999999) == 0.0
    assert latitude_to_pixel_y(-89.9999999999) == WORLD_SIZE_PX


@pytest.mark.parametrize("longitude", [-179.9, -122.4194, -0.5, 0.0, 13.405, 179.99, 180.0])
def test_longitude_round_trip(longitude: float) -> None:
    restored = pixel_x_to_longitude(longitude_to_pixel_x(longitude))
    assert restored == pytest.approx(longitude, abs=PIXEL_DEGREES)


@pytest.mark.parametrize("latitude", [-85.0, -60.0, -33.8688, -0.001, 0.0, 40.7128, 71.0, 85.0])
def test_latitude_round_trip(latitude: float) -> None:
    restored = pixel_y_to_latitude(latitude_to_pixel_y(latitude))
    assert restored == pytest.approx(latitude, abs=PIXEL_DEGREES)


def test_pixel_y_to_latitude_saturates_outside_the_world() -> None:
    assert pixel_y_to_latitude(1e12) == pytest.approx(-90.0)
    assert pixel_y_to_latitude(-1e12) == pytest.approx(90.0)


def test_single_precision_stays_close_to_double_precision() -> None:
    for latitude in (-70.0, -12.5, 30.0, 45.0, 66.5):
        legacy = latitude_to_pixel_y(latitude, single_precision=True)
        assert legacy.is_integer()
        assert legacy == pytest.approx(latitude_to_pixel_y(latitude), abs=64)


def test_single_precision_keeps_pole_special_cases() -> None:
    assert latitude_to_pixel_y(90.0, single_precision=True) == 0
    assert latitude_to_pixel_y(-90.0, single_precision=True) == WORLD_SIZE_PX
    assert 0.0 <= latitude_to_pixel_y(89.99, single_precision=True) < MERCATOR_OFFSET


def test_clamp_latitude() -> None:
    assert clamp_latitude(95.0) == 90.0
    assert clamp_latitude(-100.0) == -90.0
    assert clamp_latitude(12.5) == 12.5


def test_normalize_longitude_legacy_uses_fmod_180() -> None:
    assert normalize_longitude(45.0) == 45.0
    assert normalize_longitude(190.0) == pytest.approx(10.0)
    assert normalize_longitude(-190.0) == pytest.approx(-10.0)
    assert normalize_longitude(400.0) == pytest.approx(40.0)


def test_normalize_longitude_wrap_is_full_wrap() -> None:
    assert normalize_longitude(45.0, "wrap") == pytest.approx(45.0)
    assert normalize_longitude(190.0, "wrap") == pytest.approx(-170.0)
    assert normalize_longitude(-190.0, "wrap") == pytest.approx(170.0)
    assert normalize_longitude(180.0, "wrap") == pytest.approx(180.0)
    assert normalize_longitude(-180.0, "wrap") == pytest.approx(180.0)
    assert normalize_longitude(540.0, "wrap") == pytest.approx(180.0)


def test_normalize_longitude_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError):
        normalize_longitude(10.0, "modulo")
