"""Configuration loader that merges defaults, a settings file and overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional

import yaml

from .defaults import DEFAULT_LOGGING_CONFIG, LONGITUDE_WRAP_MODES, clone_defaults

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.yaml"


def _deep_update(base: MutableMapping[str, Any], updates: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Merge *updates* into *base* in place, recursing into nested mappings."""
    for key, value in updates.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), MutableMapping):
            _deep_update(base[key], value)  # type: ignore[index]
        else:
            base[key] = value
    return base


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Return the mapping in *path*, or an empty dict when the file is missing or empty."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"Configuration file '{path}' must contain a mapping")
    return dict(data)


@dataclass(frozen=True)
class ProjectionSettings:
    single_precision: bool = False
    longitude_wrap: str = "legacy"


@dataclass(frozen=True)
class MapSettings:
    latitude: float = 0.0
    longitude: float = 0.0
    zoom_level: int = 2
    width: int = 320
    height: int = 320
    animation_speed: float = 0.25


@dataclass(frozen=True)
class ConfigurationBundle:
    projection: ProjectionSettings
    map: MapSettings
    max_zoom_level: int
    log_level: str
    log_format: str


def _build_projection(payload: Mapping[str, Any]) -> ProjectionSettings:
    wrap = str(payload.get("longitude_wrap", "legacy"))
    if wrap not in LONGITUDE_WRAP_MODES:
        raise ValueError(
            f"projection.longitude_wrap must be one of {list(LONGITUDE_WRAP_MODES)}, got '{wrap}'"
        )
    return ProjectionSettings(
        single_precision=bool(payload.get("single_precision", False)),
        longitude_wrap=wrap,
    )


def _build_map(payload: Mapping[str, Any]) -> MapSettings:
    try:
        settings = MapSettings(
            latitude=float(payload["latitude"]),
            longitude=float(payload["longitude"]),
            zoom_level=int(payload["zoom_level"]),
            width=int(payload["width"]),
            height=int(payload["height"]),
            animation_speed=float(payload["animation_speed"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid map settings: {exc}") from exc
    if settings.width <= 0 or settings.height <= 0:
        raise ValueError("map.width and map.height must be positive")
    if not 0.0 < settings.animation_speed <= 1.0:
        raise ValueError("map.animation_speed must be in (0, 1]")
    return settings


def load_configuration(
    settings_dir: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ConfigurationBundle:
    """
    Load and merge layered configuration from defaults, the YAML settings file and optional overrides.

    Parameters:
        settings_dir (Optional[Path]): Directory holding ``settings.yaml``. If not provided, resolved from the MAPZOOM_SETTINGS_DIR environment variable or defaults to the repository's "settings" directory.
        overrides (Optional[Mapping]): Section mappings applied last, e.g. ``{"map": {"width": 640}}``.

    Returns:
        ConfigurationBundle: Aggregated configuration.

    Raises:
        ValueError: If the settings file is not a mapping or a value is out of range.
    """

    root_dir = Path(__file__).resolve().parents[2]
    settings_dir = Path(
        settings_dir
        or os.environ.get("MAPZOOM_SETTINGS_DIR")
        or (root_dir / "settings")
    )

    projection_config, zoom_config, map_config, logging_config = clone_defaults()
    merged: Dict[str, Any] = {
        "projection": projection_config,
        "zoom": zoom_config,
        "map": map_config,
        "logging": logging_config,
    }

    # -- load YAML file -----------------------------------------------------------
    settings_yaml = settings_dir / SETTINGS_FILE
    if settings_yaml.exists():
        _deep_update(merged, _load_yaml(settings_yaml))
        logger.info("Loaded settings from %s", settings_yaml)

    if overrides:
        _deep_update(merged, overrides)

    # -- convert sections into dataclasses ----------------------------------------
    for section in ("projection", "zoom", "map", "logging"):
        if not isinstance(merged.get(section), Mapping):
            raise ValueError(f"Configuration section '{section}' must be a mapping")

    try:
        max_zoom_level = int(merged["zoom"].get("max_zoom_level", 28))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid zoom.max_zoom_level: {exc}") from exc

    return ConfigurationBundle(
        projection=_build_projection(merged["projection"]),
        map=_build_map(merged["map"]),
        max_zoom_level=max_zoom_level,
        log_level=str(merged["logging"].get("level", "INFO")).upper(),
        log_format=str(merged["logging"].get("format") or DEFAULT_LOGGING_CONFIG["format"]),
    )


def configure_logging(bundle: ConfigurationBundle) -> None:
    """Apply the configured level and format to the root logger."""

    logging.basicConfig(level=bundle.log_level, format=bundle.log_format)


__all__ = [
    "ConfigurationBundle",
    "MapSettings",
    "ProjectionSettings",
    "configure_logging",
    "load_configuration",
]
