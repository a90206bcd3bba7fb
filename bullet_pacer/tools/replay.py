#!/usr/bin/env python
"""
Headless replay of a recorded clock log through the pacer.

Each CSV row is one polling tick: the user's clock text, the opponent's
clock text and optionally the move-list size (for new-game detection).
Empty cells are treated as a missing clock. Lines starting with '#' are
comments.

    # user,opponent,moves
    0:30.0,0:30.0,0
    0:30.0,0:29.1,2
    0:28.4,0:29.1,4

Usage:
    python -m bullet_pacer.tools.replay game.csv
    python -m bullet_pacer.tools.replay game.csv --config pacer.json --json
"""

import argparse
import csv
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from bullet_pacer.common.config_store import load_pacer_config
from bullet_pacer.common.log_setup import setup_logging
from bullet_pacer.core.boundary import MoveListShrinkDetector
from bullet_pacer.core.errors import ClockReadError, ConfigError
from bullet_pacer.core.formatting import feedback_text, format_budget
from bullet_pacer.core.pacing.config import PacerConfig
from bullet_pacer.core.scheduler import ClockReading, EventRecorder, PollingLoop, ReplayClockReader
from bullet_pacer.core.session import PacerSession


EXIT_OK = 0
EXIT_BAD_CONFIG = 1
EXIT_BAD_INPUT = 2


def _cell(row: List[str], index: int) -> Optional[str]:
    if index >= len(row):
        return None
    value = row[index].strip()
    return value or None


def read_clock_log(path: Path) -> List[ClockReading]:
    """Parse a clock CSV into readings.

    Raises:
        ClockReadError: If the file cannot be read or decoded, or a move-list size is not an integer.
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            rows = list(csv.reader(f))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise ClockReadError(f"Cannot read clock log {path}: {e}", context={"path": str(path)}) from e

    readings = []
    for line_no, row in enumerate(rows, start=1):
        if not row or row[0].lstrip().startswith("#"):
            continue
        size_text = _cell(row, 2)
        try:
            size = int(size_text) if size_text is not None else None
        except ValueError as e:
            raise ClockReadError(
                f"Line {line_no}: move-list size {size_text!r} is not an integer",
                context={"path": str(path), "line": line_no},
            ) from e
        readings.append(ClockReading(_cell(row, 0), _cell(row, 1), size))
    return readings


class _TickClock:
    """Synthetic monotonic clock advancing one polling interval per call."""

    def __init__(self, interval_sec: float):
        self._interval = interval_sec
        self._now = 0.0

    def __call__(self) -> float:
        now = self._now
        self._now += self._interval
        return now


def replay(readings: List[ClockReading], config: PacerConfig) -> EventRecorder:
    """Run readings through a fresh session at the configured tick rate."""
    session = PacerSession(config)
    recorder = EventRecorder()
    loop = PollingLoop(
        session,
        ReplayClockReader(readings),
        sink=recorder,
        detector=MoveListShrinkDetector(config.new_game_contraction_ratio),
        clock=_TickClock(config.update_interval_ms / 1000.0),
    )
    loop.run(interval=0)
    return recorder


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m bullet_pacer.tools.replay",
        description="Replay a recorded clock log and rate every detected user move.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("log", type=Path, help="CSV clock log (user,opponent[,move_list_size])")
    parser.add_argument("--config", type=Path, default=None, help="JSON file with a 'pacer' section")
    parser.add_argument("--json", action="store_true", help="Print moves as a JSON array")
    args = parser.parse_args(argv)

    setup_logging("bullet_pacer", default_level="WARNING")

    try:
        config = load_pacer_config(args.config)
    except ConfigError as e:
        print(f"Invalid configuration: {e.user_message}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    try:
        readings = read_clock_log(args.log)
    except ClockReadError as e:
        print(e.user_message, file=sys.stderr)
        return EXIT_BAD_INPUT

    recorder = replay(readings, config)
    moves = recorder.moves

    if args.json:
        print(json.dumps([asdict(m) for m in moves], indent=2))
        return EXIT_OK

    for number, move in enumerate(moves, start=1):
        print(
            f"{number:3d}. {move.rating:<9} {feedback_text(move):<18} budget {format_budget(move.budget)}"
        )
    final_momentum = recorder.events[-1].momentum if recorder.events else "NEUTRAL"
    print(f"{len(moves)} moves, momentum {final_momentum}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
