"""Procedural game sound effects and background music."""
__version__ = "1.0.0"
