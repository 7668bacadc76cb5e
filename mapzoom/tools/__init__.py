"""Command line tools for the Mercator zoom helpers."""
