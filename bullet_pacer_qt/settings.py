"""
Settings Management for the Bullet Pacer Qt shell.

Provides a single source of truth for shell settings:
- Time control of the simulated clock (base, increment)
- Path to the pacer threshold config (JSON with a "pacer" section)
- Display preferences (board tint, stay on top)
- Window geometry

Settings are persisted to JSON and can be overridden by environment variables.

Usage:
    from bullet_pacer_qt.settings import Settings

    settings = Settings()
    settings.base_seconds = 120
    settings.save()

    # Environment variable override:
    # BULLET_PACER_CONFIG
"""

import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QSettings, QByteArray

from bullet_pacer.common.config_store import load_pacer_config
from bullet_pacer.core.errors import ConfigError
from bullet_pacer.core.pacing.config import PacerConfig

_logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

SETTINGS_FILENAME = "bullet_pacer_settings.json"
DEFAULT_SETTINGS_DIR = Path.home() / ".bullet_pacer"
QSETTINGS_ORG = "BulletPacer"
QSETTINGS_APP = "BulletPacer-Qt"
CONFIG_ENV_VAR = "BULLET_PACER_CONFIG"

DEFAULT_BASE_SECONDS = 60.0
# No increment by default: the clock text already includes the increment when
# a move ends, so moves faster than the increment are rated CRITICAL.
DEFAULT_INCREMENT_SECONDS = 0.0
MAX_BASE_SECONDS = 3 * 3600.0
MAX_INCREMENT_SECONDS = 60.0


# =============================================================================
# Settings Data Class
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with defaults."""

    # Simulated clock time control
    base_seconds: float = DEFAULT_BASE_SECONDS
    increment_seconds: float = DEFAULT_INCREMENT_SECONDS

    # Pacer thresholds file ("" = built-in defaults)
    pacer_config_path: str = ""

    # Display
    board_tint_enabled: bool = True
    stay_on_top: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "AppSettings":
        """Create from dictionary, ignoring unknown keys."""
        known_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in known_keys}
        return cls(**filtered)


# =============================================================================
# Settings Manager
# =============================================================================

class Settings:
    """
    Settings manager for the Qt shell.

    Handles:
    - JSON file persistence for app settings
    - QSettings for window geometry
    - Environment variable override of the pacer config path
    """

    def __init__(self, settings_dir: Optional[Path] = None):
        if settings_dir is None:
            settings_dir = DEFAULT_SETTINGS_DIR

        self._settings_dir = Path(settings_dir)
        self._settings_path = self._settings_dir / SETTINGS_FILENAME
        self._qsettings = QSettings(QSETTINGS_ORG, QSETTINGS_APP)
        self._settings = self._load()

    @property
    def settings_path(self) -> Path:
        return self._settings_path

    # -------------------------------------------------------------------------
    # Time Control
    # -------------------------------------------------------------------------

    @property
    def base_seconds(self) -> float:
        return self._settings.base_seconds

    @base_seconds.setter
    def base_seconds(self, value: float):
        self._settings.base_seconds = max(1.0, min(float(value), MAX_BASE_SECONDS))

    @property
    def increment_seconds(self) -> float:
        return self._settings.increment_seconds

    @increment_seconds.setter
    def increment_seconds(self, value: float):
        self._settings.increment_seconds = max(0.0, min(float(value), MAX_INCREMENT_SECONDS))

    # -------------------------------------------------------------------------
    # Pacer Config (with environment variable override)
    # -------------------------------------------------------------------------

    @property
    def pacer_config_path(self) -> str:
        """Pacer thresholds JSON path. BULLET_PACER_CONFIG env var overrides."""
        return os.environ.get(CONFIG_ENV_VAR, self._settings.pacer_config_path)

    @pacer_config_path.setter
    def pacer_config_path(self, value: str):
        self._settings.pacer_config_path = value

    def is_pacer_config_from_env(self) -> bool:
        return bool(os.environ.get(CONFIG_ENV_VAR))

    def load_pacer_config(self) -> PacerConfig:
        """Pacer config from the configured file; defaults if unset or invalid."""
        path = self.pacer_config_path
        if not path:
            return PacerConfig()
        try:
            return load_pacer_config(path)
        except ConfigError as e:
            _logger.warning("Invalid pacer config %s (%s), using defaults", path, e)
            return PacerConfig()

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    @property
    def board_tint_enabled(self) -> bool:
        return self._settings.board_tint_enabled

    @board_tint_enabled.setter
    def board_tint_enabled(self, value: bool):
        self._settings.board_tint_enabled = bool(value)

    @property
    def stay_on_top(self) -> bool:
        return self._settings.stay_on_top

    @stay_on_top.setter
    def stay_on_top(self, value: bool):
        self._settings.stay_on_top = bool(value)

    # -------------------------------------------------------------------------
    # Window Geometry (QSettings)
    # -------------------------------------------------------------------------

    def save_window_geometry(self, geometry: QByteArray):
        self._qsettings.setValue("window/geometry", geometry)

    def load_window_geometry(self) -> Optional[QByteArray]:
        """Load window geometry, returns None if not set."""
        value = self._qsettings.value("window/geometry")
        if isinstance(value, QByteArray):
            return value
        return None

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _load(self) -> AppSettings:
        if self._settings_path.exists():
            try:
                with open(self._settings_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return AppSettings.from_dict(data)
            except (json.JSONDecodeError, OSError, TypeError) as e:
                _logger.warning("Could not read %s: %s", self._settings_path, e)
        return AppSettings()

    def save(self):
        """Save settings to JSON file."""
        try:
            self._settings_dir.mkdir(parents=True, exist_ok=True)
            with open(self._settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings.to_dict(), f, indent=2)
        except OSError as e:
            _logger.warning("Could not save settings to %s: %s", self._settings_path, e)

    def reset_to_defaults(self):
        self._settings = AppSettings()
        self.save()
        self._qsettings.clear()
