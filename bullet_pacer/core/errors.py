"""
Bullet Pacer exception hierarchy.

Provides a base exception class with user-facing messages and debug context,
plus specialized subclasses for different error domains.

None of these are raised from inside a polling tick: the tick path degrades
to a conservative classification instead. They surface when configuration
is built or when a tool is handed unusable input.
"""

from typing import Any, Dict, Optional


class PacerError(Exception):
    """Base exception for Bullet Pacer errors.

    Attributes:
        user_message: Safe, user-facing error message.
        context: Dictionary of debug information.
    """

    def __init__(
        self,
        message: str,
        *,
        user_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.user_message = user_message or message
        self.context = context or {}


class ConfigError(PacerError):
    """Threshold/budget configuration validation errors."""

    pass


class ClockReadError(PacerError):
    """Clock source could not be read (missing file, unreadable replay log)."""

    pass
