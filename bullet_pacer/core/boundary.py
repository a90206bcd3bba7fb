"""Game boundary detection.

A new game is recognised from the size of the move list shown next to the
board: a running game only ever grows it, a fresh game starts it empty. The
heuristic is fragile (a UI re-render can shrink the list too), so it sits
behind the SessionBoundaryDetector protocol and can be replaced without
touching the session.
"""

from __future__ import annotations

import logging
from typing import Protocol

from bullet_pacer.core.errors import ConfigError
from bullet_pacer.core.pacing.config import NEW_GAME_CONTRACTION_RATIO

_logger = logging.getLogger(__name__)


class SessionBoundaryDetector(Protocol):
    def observe(self, move_list_size: int) -> bool:
        """Return True if this observation marks the start of a new game."""
        ...

    def reset(self) -> None: ...


class MoveListShrinkDetector:
    """Signals a new game when the move list contracts below a fraction of its last size.

    Every observation becomes the new reference size, including the one that
    signals the reset, so a single contraction fires exactly once.
    """

    def __init__(self, contraction_ratio: float = NEW_GAME_CONTRACTION_RATIO):
        if not 0.0 < contraction_ratio < 1.0:
            raise ConfigError(
                "contraction_ratio must be in (0, 1)",
                context={"contraction_ratio": contraction_ratio},
            )
        self.contraction_ratio = contraction_ratio
        self._last_size = 0

    @property
    def last_size(self) -> int:
        return self._last_size

    def observe(self, move_list_size: int) -> bool:
        previous = self._last_size
        self._last_size = move_list_size
        if previous and move_list_size < previous * self.contraction_ratio:
            _logger.info("Move list shrank from %d to %d, new game", previous, move_list_size)
            return True
        return False

    def reset(self) -> None:
        self._last_size = 0
