"""Tests for PacerConfig, tolerant converters and the JSON config store."""

import json
import math
import os

import pytest

from bullet_pacer.common.config_store import PACER_SECTION, JsonConfigStore, load_pacer_config
from bullet_pacer.common.typed_config import safe_bool, safe_float, safe_int, section
from bullet_pacer.core.errors import ConfigError, PacerError
from bullet_pacer.core.pacing import DEFAULT_CONFIG, PacerConfig


# =============================================================================
# typed_config
# =============================================================================


class TestSafeConverters:
    def test_safe_int(self):
        assert safe_int(7, 1) == 7
        assert safe_int("12", 1) == 12
        assert safe_int(None, 5) == 5
        assert safe_int(True, 5) == 5
        assert safe_int(2.7, 5) == 5
        assert safe_int("x", 5) == 5

    def test_safe_float(self):
        assert safe_float(2, 0.0) == 2.0
        assert safe_float("2.5", 0.0) == 2.5
        assert safe_float(None, 1.5) == 1.5
        assert safe_float(False, 1.5) == 1.5
        assert safe_float("nan", 1.5) == 1.5
        assert safe_float([], 1.5) == 1.5

    def test_safe_bool(self):
        assert safe_bool("yes") is True
        assert safe_bool("off", True) is False
        assert safe_bool(0, True) is False
        assert safe_bool("maybe", True) is True

    def test_section(self):
        data = {"a": {"x": 1}, "b": 3}
        assert section(data, "a") == {"x": 1}
        assert section(data, "a") is not data["a"]
        assert section(data, "b") == {}
        assert section(None, "a") == {}


# =============================================================================
# PacerConfig
# =============================================================================


class TestPacerConfig:
    def test_defaults(self):
        config = PacerConfig()
        assert config.position.dominating == 5.0
        assert config.position.behind == -2.5
        assert config.urgency.relaxed == 25.0
        assert config.budget.base_moves_estimate == 35
        assert config.budget.safety_factor == 0.85
        assert config.rating.costly == 2.5
        assert config.momentum.window == 5
        assert config.tick_epsilon == 0.01
        assert config.feedback_duration_sec == 2.5
        assert config.update_interval_ms == 50
        assert config.new_game_contraction_ratio == 0.3

    def test_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.tick_epsilon = 1.0

    def test_from_empty_dict_is_default(self):
        assert PacerConfig.from_dict({}) == PacerConfig()

    def test_from_dict_partial_override(self):
        config = PacerConfig.from_dict(
            {
                "position": {"dominating": 8},
                "momentum": {"window": "7"},
                "update_interval_ms": 100,
                "board_color_enabled": "false",
            }
        )
        assert config.position.dominating == 8.0
        assert config.position.ahead == 2.0
        assert config.momentum.window == 7
        assert config.update_interval_ms == 100
        assert config.board_color_enabled is False

    def test_bad_values_fall_back_to_defaults(self):
        config = PacerConfig.from_dict({"budget": {"safety_factor": "lots"}, "tick_epsilon": None})
        assert config.budget.safety_factor == 0.85
        assert config.tick_epsilon == 0.01

    def test_inconsistent_values_raise(self):
        with pytest.raises(ConfigError) as exc_info:
            PacerConfig.from_dict({"urgency": {"relaxed": 5}})
        assert isinstance(exc_info.value, PacerError)
        assert exc_info.value.user_message

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"tick_epsilon": -0.1},
            {"tick_epsilon": math.inf},
            {"update_interval_ms": 0},
            {"board_max_delta": 0.0},
            {"new_game_contraction_ratio": 1.0},
            {"feedback_duration_sec": -1.0},
        ],
    )
    def test_invalid_scalars(self, kwargs):
        with pytest.raises(ConfigError):
            PacerConfig(**kwargs)

    def test_round_trip_through_dict(self):
        config = PacerConfig.from_dict({"rating": {"premove": 0.2}, "board_max_delta": 6})
        assert PacerConfig.from_dict(config.to_dict()) == config


# =============================================================================
# JsonConfigStore
# =============================================================================


class TestJsonConfigStore:
    @pytest.fixture
    def config_path(self, tmp_path):
        return str(tmp_path / "pacer.json")

    def test_put_and_get(self, config_path):
        store = JsonConfigStore(config_path)
        store.put("pacer", tick_epsilon=0.02)
        assert store.get("pacer") == {"tick_epsilon": 0.02}
        assert store.get("missing") is None

    def test_persistence(self, config_path):
        JsonConfigStore(config_path).put("pacer", update_interval_ms=80)
        assert JsonConfigStore(config_path)["pacer"] == {"update_interval_ms": 80}

    def test_mapping_protocol(self, config_path):
        store = JsonConfigStore(config_path)
        store.put("a", x=1)
        store.put("b", y=2)
        assert len(store) == 2
        assert dict(store) == {"a": {"x": 1}, "b": {"y": 2}}
        assert "a" in store

    def test_get_returns_copy(self, config_path):
        store = JsonConfigStore(config_path)
        store.put("pacer", tick_epsilon=0.02)
        store.get("pacer")["tick_epsilon"] = 5
        assert store.get("pacer") == {"tick_epsilon": 0.02}

    def test_delete(self, config_path):
        store = JsonConfigStore(config_path)
        store.put("pacer", tick_epsilon=0.02)
        assert store.delete("pacer") is True
        assert store.delete("pacer") is False
        assert len(JsonConfigStore(config_path)) == 0

    def test_corrupt_file_is_quarantined(self, tmp_path):
        path = tmp_path / "pacer.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonConfigStore(path)
        assert len(store) == 0
        assert not path.exists()
        assert any(p.name.startswith("pacer.json.corrupt.") for p in tmp_path.iterdir())

    def test_invalid_utf8_is_quarantined(self, tmp_path):
        path = tmp_path / "pacer.json"
        path.write_bytes(b'{"pacer": "\xff"}')
        assert len(JsonConfigStore(path)) == 0
        assert not path.exists()

    def test_non_dict_sections_dropped(self, tmp_path):
        path = tmp_path / "pacer.json"
        path.write_text(json.dumps({"pacer": {"tick_epsilon": 0.02}, "junk": [1, 2]}), encoding="utf-8")
        store = JsonConfigStore(path)
        assert list(store) == ["pacer"]

    def test_no_temp_files_left_behind(self, config_path, tmp_path):
        JsonConfigStore(config_path).put("pacer", tick_epsilon=0.02)
        assert [p.name for p in tmp_path.iterdir()] == ["pacer.json"]


class TestLoadPacerConfig:
    def test_none_path_is_default(self):
        assert load_pacer_config(None) == PacerConfig()

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read config file"):
            load_pacer_config(tmp_path / "nope.json")
        assert not os.path.exists(tmp_path / "nope.json")

    def test_corrupt_file_raises_and_is_left_alone(self, tmp_path):
        path = tmp_path / "pacer.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_pacer_config(path)
        assert path.read_text(encoding="utf-8") == "{not json"
        assert [p.name for p in tmp_path.iterdir()] == ["pacer.json"]

    def test_invalid_utf8_raises(self, tmp_path):
        path = tmp_path / "pacer.json"
        path.write_bytes(b'{"pacer": "\xff\xfe"}')
        with pytest.raises(ConfigError):
            load_pacer_config(path)
        assert path.exists()

    def test_non_object_top_level_raises(self, tmp_path):
        path = tmp_path / "pacer.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(ConfigError, match="not a JSON object"):
            load_pacer_config(path)

    def test_missing_section_is_default(self, tmp_path):
        path = tmp_path / "pacer.json"
        path.write_text(json.dumps({"other": {}}), encoding="utf-8")
        assert load_pacer_config(path) == PacerConfig()

    def test_loads_section(self, tmp_path):
        path = tmp_path / "pacer.json"
        path.write_text(json.dumps({PACER_SECTION: {"budget": {"scramble_budget": 0.4}}}), encoding="utf-8")
        assert load_pacer_config(path).budget.scramble_budget == 0.4

    def test_invalid_section_raises(self, tmp_path):
        path = tmp_path / "pacer.json"
        path.write_text(json.dumps({PACER_SECTION: {"momentum": {"window": 0}}}), encoding="utf-8")
        with pytest.raises(ConfigError):
            load_pacer_config(path)
