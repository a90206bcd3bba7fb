"""Clock Text Parser.

Converts the text shown by a chess clock into seconds. Accepted forms:

    "1:02:03.4"  (H:MM:SS.s)
    "0:58.3"     (MM:SS.s, minutes may exceed 59)
    "9.7"        (bare seconds)

A missing or unparsable reading maps to MISSING_TIME_SENTINEL ("effectively
infinite time left") so that a glitch never fails the tick.
"""

import logging
import math

_logger = logging.getLogger(__name__)

MISSING_TIME_SENTINEL = 9999.0


def try_parse_clock_text(text: str | None) -> float | None:
    """Parse clock text; None if absent or unparsable.

    Leading/trailing whitespace is ignored. Negative components are
    rejected.
    """
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None

    parts = text.split(":")
    if len(parts) > 3:
        return None

    try:
        seconds = float(parts[-1])
        hours_minutes = [int(p) for p in parts[:-1]]
    except ValueError:
        return None

    if not math.isfinite(seconds) or seconds < 0 or any(v < 0 for v in hours_minutes):
        return None

    multiplier = 60
    for value in reversed(hours_minutes):
        seconds += value * multiplier
        multiplier *= 60
    return seconds


def parse_clock_text(text: str | None) -> float:
    """Parse clock text; MISSING_TIME_SENTINEL if absent or unparsable. Never raises."""
    seconds = try_parse_clock_text(text)
    if seconds is None:
        if text:
            _logger.debug("Unparsable clock text %r, using sentinel", text)
        return MISSING_TIME_SENTINEL
    return seconds
