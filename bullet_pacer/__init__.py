"""Bullet Pacer - live time-pressure and move-pacing feedback for bullet chess."""

__version__ = "1.0.0"
