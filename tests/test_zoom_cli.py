from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from mapzoom.tools.zoom_cli import main


def _run(capsys: pytest.CaptureFixture, tmp_path: Path, *argv: str) -> dict:
    main(["--settings", str(tmp_path), *argv])
    return yaml.safe_load(capsys.readouterr().out)


def test_span_command(capsys: pytest.CaptureFixture, tmp_path: Path) -> None:
    result = _run(capsys, tmp_path, "span", "--lat", "0", "--lon", "0", "--zoom", "20")

    assert result["zoom_level"] == 20
    assert result["span"]["longitude_delta"] == pytest.approx(2.1457672119140625e-04, rel=1e-9)


def test_region_command_clamps_zoom(capsys: pytest.CaptureFixture, tmp_path: Path) -> None:
    result = _run(capsys, tmp_path, "region", "--lat", "45", "--lon", "190", "--zoom", "50")

    assert result["zoom_level"] == 28
    assert result["region"]["center"]["longitude"] == pytest.approx(10.0)


def test_zoom_command(capsys: pytest.CaptureFixture, tmp_path: Path) -> None:
    span = _run(capsys, tmp_path, "span", "--lat", "10", "--lon", "10", "--zoom", "13")["span"]

    result = _run(
        capsys,
        tmp_path,
        "zoom",
        "--lat", "10",
        "--lon", "10",
        "--lat-delta", repr(span["latitude_delta"]),
        "--lon-delta", repr(span["longitude_delta"]),
    )

    assert result == {"zoom_level": 13}


def test_pixel_command(capsys: pytest.CaptureFixture, tmp_path: Path) -> None:
    result = _run(capsys, tmp_path, "pixel", "--lat", "-90", "--lon", "0")

    assert result == {"pixel_x": 268435456.0, "pixel_y": 536870912.0}


def test_invalid_viewport_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(["--settings", str(tmp_path), "span", "--lat", "0", "--lon", "0", "--zoom", "3", "--width", "0"])
