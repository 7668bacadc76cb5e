"""Configuration utilities for the Mercator zoom helpers."""

from .loader import (
    ConfigurationBundle,
    MapSettings,
    ProjectionSettings,
    configure_logging,
    load_configuration,
)

__all__ = [
    "ConfigurationBundle",
    "MapSettings",
    "ProjectionSettings",
    "configure_logging",
    "load_configuration",
]
