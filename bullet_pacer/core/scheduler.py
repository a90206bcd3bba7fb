"""Polling loop.

The pacer is driven by a ticking source: once per interval it reads both
clocks, asks the boundary detector whether a new game started, advances the
session and hands the resulting TickEvent to the presentation sink. Ticks
never overlap, so no locking is needed; stopping the loop is the only
cancellation.

The Qt shell calls ``PollingLoop.tick()`` from a QTimer. Headless callers
(the replay tool, tests) use ``run()``, which sleeps between ticks with an
injectable ``sleep`` so it can be driven without a real timer.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol

from bullet_pacer.core.boundary import SessionBoundaryDetector
from bullet_pacer.core.pacing.models import TickEvent
from bullet_pacer.core.session import PacerSession

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClockReading:
    """Raw clock text for one tick.

    Attributes:
        user_text: User's clock as displayed, None if not found
        opp_text: Opponent's clock as displayed, None if not found
        move_list_size: Size of the displayed move list, None if unknown
    """

    user_text: str | None
    opp_text: str | None
    move_list_size: int | None = None


class ClockReader(Protocol):
    def read(self) -> ClockReading | None:
        """Current clock text, or None when no clock is on screen."""
        ...


class PresentationSink(Protocol):
    def on_tick(self, event: TickEvent) -> None: ...


class ReplayClockReader:
    """Replays a fixed sequence of readings, then returns None forever."""

    def __init__(self, readings: Iterable[ClockReading | None]):
        self._readings = list(readings)
        self._index = 0

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._readings)

    def __len__(self) -> int:
        return len(self._readings)

    def read(self) -> ClockReading | None:
        if self.exhausted:
            return None
        reading = self._readings[self._index]
        self._index += 1
        return reading


class EventRecorder:
    """Sink that keeps every event; completed moves are available via ``moves``."""

    def __init__(self):
        self.events: list[TickEvent] = []

    def on_tick(self, event: TickEvent) -> None:
        self.events.append(event)

    @property
    def moves(self):
        return [e.move for e in self.events if e.move is not None]


class PollingLoop:
    """Reads, detects boundaries, advances the session and notifies the sink, once per tick."""

    def __init__(
        self,
        session: PacerSession,
        reader: ClockReader,
        sink: PresentationSink | None = None,
        detector: SessionBoundaryDetector | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.session = session
        self.reader = reader
        self.sink = sink
        self.detector = detector
        self._clock = clock
        self._tick_count = 0
        self._stopped = False

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def interval_sec(self) -> float:
        return self.session.config.update_interval_ms / 1000.0

    def stop(self) -> None:
        self._stopped = True

    def tick(self) -> TickEvent | None:
        """Run one iteration. Never raises; returns the event, or None if nothing was read."""
        try:
            reading = self.reader.read()
        except Exception:
            _logger.exception("Clock reader failed, skipping tick")
            return None
        if reading is None:
            return None

        new_game = False
        if self.detector is not None and reading.move_list_size is not None:
            try:
                new_game = self.detector.observe(reading.move_list_size)
            except Exception:
                _logger.exception("Boundary detector failed, assuming same game")

        event = self.session.advance_text(reading.user_text, reading.opp_text, self._clock(), new_game=new_game)
        self._tick_count += 1

        if self.sink is not None:
            try:
                self.sink.on_tick(event)
            except Exception:
                _logger.exception("Presentation sink failed on tick %d", self._tick_count)
        return event

    def run(
        self,
        max_ticks: int | None = None,
        interval: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Tick until stopped, ``max_ticks`` reached or a replay reader runs dry.

        Returns:
            Number of iterations run (including ones that read nothing).
        """
        self._stopped = False
        interval = self.interval_sec if interval is None else interval
        iterations = 0
        while not self._stopped and (max_ticks is None or iterations < max_ticks):
            if getattr(self.reader, "exhausted", False):
                break
            self.tick()
            iterations += 1
            if interval > 0:
                sleep(interval)
        return iterations
