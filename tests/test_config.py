"""Tests for engine settings and YAML loading."""

import pytest

from loadplanner.config import (
    DEFAULT_SETTINGS,
    SETTINGS_ENV_VAR,
    EngineSettings,
    load_settings,
)
from loadplanner.core.errors import ConfigError


class TestEngineSettings:
    def test_defaults(self):
        s = EngineSettings()
        assert s.floor_space_ceiling == 0.85
        assert s.volume_weight == 0.7
        assert s.weight_weight == 0.3
        assert s.volume_epsilon == 1e-9
        assert s.ordering == "fragile_last"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"floor_space_ceiling": 0.0},
            {"floor_space_ceiling": 1.5},
            {"volume_weight": 0.5, "weight_weight": 0.6},
            {"volume_weight": -0.2, "weight_weight": 1.2},
            {"volume_epsilon": -1.0},
        ],
    )
    def test_out_of_range(self, kwargs):
        with pytest.raises(ConfigError):
            EngineSettings(**kwargs)

    def test_round_trip_dict(self):
        s = EngineSettings(floor_space_ceiling=0.9, ordering="volume_desc")
        assert EngineSettings.from_dict(s.to_dict()) == s

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown settings"):
            EngineSettings.from_dict({"floor_ceiling": 0.9})


class TestLoadSettings:
    def test_no_path_no_env(self, monkeypatch):
        monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)
        assert load_settings() is DEFAULT_SETTINGS

    def test_from_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("floor_space_ceiling: 0.9\nvolume_epsilon: 1.0e-6\n")
        s = load_settings(path)
        assert s.floor_space_ceiling == 0.9
        assert s.volume_epsilon == 1e-6
        assert s.volume_weight == 0.7

    def test_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.yaml"
        path.write_text("ordering: density_desc\n")
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(path))
        assert load_settings().ordering == "density_desc"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert load_settings(path) is DEFAULT_SETTINGS

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_settings(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("floor_space_ceiling: [0.9\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- 0.9\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path)

    def test_out_of_range_value(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("volume_weight: 0.9\n")
        with pytest.raises(ConfigError):
            load_settings(path)


class TestSettingsValueTypes:
    def test_exponent_without_dot(self, tmp_path):
        """PyYAML reads ``1e-9`` as a string; it is still accepted."""
        path = tmp_path / "settings.yaml"
        path.write_text("volume_epsilon: 1e-9\nfloor_space_ceiling: '0.9'\n")
        s = load_settings(path)
        assert s.volume_epsilon == pytest.approx(1e-9)
        assert s.floor_space_ceiling == pytest.approx(0.9)

    def test_integer_weights(self):
        s = EngineSettings.from_dict({"volume_weight": 1, "weight_weight": 0})
        assert s.volume_weight == 1.0
        assert isinstance(s.weight_weight, float)

    @pytest.mark.parametrize(
        "content",
        [
            "floor_space_ceiling: high\n",
            "volume_weight: [0.7]\n",
            "volume_epsilon: true\n",
            "weight_weight: null\n",
            "ordering: 3\n",
        ],
    )
    def test_wrong_type(self, tmp_path, content):
        path = tmp_path / "settings.yaml"
        path.write_text(content)
        with pytest.raises(ConfigError):
            load_settings(path)
