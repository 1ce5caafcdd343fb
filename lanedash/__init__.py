"""LaneDash: headless lane-dodging arcade simulation."""

__version__ = "0.1.0"
