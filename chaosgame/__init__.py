"""Polygon chaos-game generator with a pygame viewer."""

__version__ = "0.1.0"
