# bullet_pacer/common/config_store.py
"""JSON section store for pacer settings.

A config file is a JSON object whose top-level keys are sections, each a
dict. The pacing thresholds live under the ``"pacer"`` section:

    {
        "pacer": {
            "position": {"dominating": 5, "ahead": 2, "even": 1, "behind": -2.5},
            "momentum": {"window": 5}
        }
    }

Usage:
    from bullet_pacer.common.config_store import JsonConfigStore, load_pacer_config

    store = JsonConfigStore("pacer.json")
    store.put("pacer", **config.to_dict())
    config = load_pacer_config("pacer.json")
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from collections.abc import Iterator, Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any

from bullet_pacer.core.errors import ConfigError

if TYPE_CHECKING:
    from bullet_pacer.core.pacing.config import PacerConfig

PACER_SECTION = "pacer"

_logger = logging.getLogger(__name__)


class JsonConfigStore(Mapping[str, dict[str, Any]]):
    """JSON file-backed mapping of section name -> section dict.

    Reads once on construction; every ``put``/``delete`` rewrites the file
    atomically. A corrupt file is renamed aside and the store starts empty.

    Args:
        filename: Path to JSON file
        indent: JSON indentation (default 4)
    """

    def __init__(self, filename: str | os.PathLike[str], indent: int = 4):
        self._filename = os.fspath(filename)
        self._indent = indent
        self._data: dict[str, dict[str, Any]] = {}
        self._load()

    @property
    def filename(self) -> str:
        return self._filename

    def _load(self) -> None:
        if not os.path.exists(self._filename):
            self._data = {}
            return
        try:
            with open(self._filename, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            _logger.warning("Corrupt config file %s: %s", self._filename, e)
            timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
            with contextlib.suppress(OSError):
                os.rename(self._filename, f"{self._filename}.corrupt.{timestamp}")
            self._data = {}
            return

        if not isinstance(data, dict):
            _logger.warning("Config file %s is not a JSON object, ignoring", self._filename)
            self._data = {}
            return

        self._data = {}
        for key, value in data.items():
            if isinstance(value, dict):
                self._data[key] = value
            else:
                _logger.warning("Config section %s is not a dict (got %s), dropping", key, type(value).__name__)

    def _save(self) -> None:
        """Write via temp file + os.replace so a crash never truncates the config.

        Raises:
            OSError: If file operations fail (caller handles).
        """
        save_dir = os.path.dirname(self._filename) or "."
        os.makedirs(save_dir, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(suffix=".tmp", dir=save_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=self._indent, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, self._filename)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(temp_path)
            raise

    def get(self, key: str) -> dict[str, Any] | None:  # type: ignore[override]
        """Section as a shallow copy, or None if absent."""
        value = self._data.get(key)
        return dict(value) if value is not None else None

    def put(self, key: str, **kwargs: Any) -> None:
        self._data[key] = kwargs
        self._save()

    def delete(self, key: str) -> bool:
        if key not in self._data:
            return False
        del self._data[key]
        self._save()
        return True

    def __getitem__(self, key: str) -> dict[str, Any]:
        return dict(self._data[key])

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"JsonConfigStore({self._filename!r})"


def read_sections(path: str | os.PathLike[str]) -> dict[str, dict[str, Any]]:
    """Read a section file without touching it.

    Unlike ``JsonConfigStore``, a file that cannot be read is an error for
    the caller to report; nothing is renamed or rewritten.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid UTF-8 JSON,
            or not a JSON object.
    """
    filename = os.fspath(path)
    try:
        with open(filename, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(
            f"Cannot read config file {filename}: {e}",
            user_message=f"Cannot read config file {filename}",
            context={"path": filename},
        ) from e
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {filename} is not a JSON object (got {type(data).__name__})",
            context={"path": filename},
        )
    return {key: value for key, value in data.items() if isinstance(value, dict)}


def load_pacer_config(path: str | os.PathLike[str] | None) -> PacerConfig:
    """Build a PacerConfig from the ``pacer`` section of a JSON file.

    No path or a file without a ``pacer`` section yields the defaults.

    Raises:
        ConfigError: If the file cannot be read as a JSON object, or the
            section describes invalid thresholds.
    """
    from bullet_pacer.core.pacing.config import PacerConfig

    if path is None:
        return PacerConfig()
    raw = read_sections(path).get(PACER_SECTION)
    if raw is None:
        _logger.info("No '%s' section in %s, using defaults", PACER_SECTION, os.fspath(path))
        return PacerConfig()
    return PacerConfig.from_dict(raw)
