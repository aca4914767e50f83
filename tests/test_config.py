"""Tests for settings loading and validation."""

import json

import pytest

from wlancore.config import ConfigError, WirelessConfig, load_config, _save_setting


class TestWirelessConfig:
    def test_defaults(self):
        config = WirelessConfig()
        assert config.iface == "wlan0"
        assert config.iface2 is None
        assert config.update_frequency == 60
        assert config.connection_spy_frequency == 5
        assert config.vanish_threshold == 2

    @pytest.mark.parametrize("kwargs", [
        {"iface": ""},
        {"update_frequency": 0},
        {"connection_spy_frequency": -1},
        {"vanish_threshold": -1},
        {"command_timeout": 0},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigError):
            WirelessConfig(**kwargs).validate()

    def test_from_dict_ignores_unknown_keys(self):
        config = WirelessConfig.from_dict({"iface": "wlan1", "colour": "green"})
        assert config.iface == "wlan1"

    def test_to_dict_roundtrip(self):
        config = WirelessConfig(iface="wlp2s0", commands={"scan": "iw :INTERFACE scan"})
        assert WirelessConfig.from_dict(config.to_dict()) == config


class TestLoadConfig:
    def test_reads_wireless_section(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"language": "en",
                                    "wireless": {"iface": "wlan1", "update_frequency": 30}}))
        config = load_config(path)
        assert config.iface == "wlan1"
        assert config.update_frequency == 30

    def test_overrides_win_unless_none(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"wireless": {"iface": "wlan1", "vanish_threshold": 4}}))
        config = load_config(path, iface="wlan2", vanish_threshold=None)
        assert config.iface == "wlan2"
        assert config.vanish_threshold == 4

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.json")

    def test_bad_section(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"wireless": ["wlan0"]}))
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_values_rejected(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"wireless": {"update_frequency": -5}}))
        with pytest.raises(ConfigError):
            load_config(path)

    def test_unreadable_file_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        assert load_config(path) == WirelessConfig()


def test_save_setting_keeps_other_keys(tmp_path):
    path = tmp_path / "data" / "settings.json"
    _save_setting("wireless", {"iface": "wlan1"}, path)
    _save_setting("language", "ru", path)
    assert json.loads(path.read_text()) == {"wireless": {"iface": "wlan1"}, "language": "ru"}
