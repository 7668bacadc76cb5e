"""Zoom level support for Mercator map views."""

from .config.loader import load_configuration

__all__ = ["load_configuration"]
