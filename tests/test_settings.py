"""
Tests for settings defaults, validation and JSON persistence.
"""

import json
import logging

import pytest

from quake_mapsource.errors import SettingsError
from quake_mapsource.settings import (
    AppSettings,
    get_settings_path,
    load_settings,
    load_settings_from_path,
    save_settings,
)


class TestAppSettings:
    def test_defaults(self):
        s = AppSettings()
        assert s.encoding == "utf-8"
        assert s.dump_format == "text"
        assert s.include_normals is False
        assert s.log_level == "WARNING"
        assert s.trace is False

    def test_from_dict_ignores_unknown_keys(self):
        s = AppSettings.from_dict({"dump_format": "json", "colour": "red"})
        assert s.dump_format == "json"

    @pytest.mark.parametrize("data", [
        {"dump_format": "obj"},
        {"include_normals": "yes"},
        {"float_precision": True},
        {"float_precision": 99},
        {"log_level": "LOUD"},
        {"encoding": 8},
        {"encoding": "no-such-codec"},
    ])
    def test_invalid_values_fall_back(self, data, caplog):
        with caplog.at_level(logging.WARNING):
            s = AppSettings.from_dict(data)
        assert s == AppSettings()
        assert "Ignoring invalid setting" in caplog.text

    def test_encoding_alias_is_accepted(self):
        assert AppSettings.from_dict({"encoding": "latin-1"}).encoding == "latin-1"

    def test_log_level_is_upper_cased(self):
        assert AppSettings.from_dict({"log_level": "debug"}).log_level == "DEBUG"

    def test_to_dict_round_trip(self):
        s = AppSettings(dump_format="map", include_normals=True, float_precision=3)
        assert AppSettings.from_dict(s.to_dict()) == s


class TestSettingsStorage:
    def test_missing_file_gives_defaults(self, config_dir):
        assert load_settings() == AppSettings()
        assert not config_dir.exists()

    def test_save_and_load(self, config_dir):
        s = AppSettings(dump_format="json", trace=True)
        path = save_settings(s)
        assert path == config_dir / "settings.json"
        assert get_settings_path() == path
        assert load_settings() == s

    def test_corrupt_default_file_gives_defaults(self, config_dir, caplog):
        config_dir.mkdir(parents=True)
        (config_dir / "settings.json").write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert load_settings() == AppSettings()
        assert "using defaults" in caplog.text

    def test_explicit_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SettingsError):
            load_settings_from_path(path)

    def test_explicit_non_object_raises(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps(["text"]), encoding="utf-8")
        with pytest.raises(SettingsError):
            load_settings_from_path(path)

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(SettingsError):
            load_settings_from_path(tmp_path / "nope.json")
