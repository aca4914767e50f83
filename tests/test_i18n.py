"""Tests for translations and event descriptions."""

import json

import pytest

from wlancore import i18n
from wlancore.events import Appear, Dhcp, Error, Former, Leave
from wlancore.network import JoinedNetwork, NetworkRecord


@pytest.fixture(autouse=True)
def english(monkeypatch):
    monkeypatch.setattr(i18n, "_current_lang", "en")


class TestTranslate:
    def test_placeholders(self):
        assert i18n.t("cli_found_networks", count=3) == "Found 3 network(s)"

    def test_unknown_key_returns_key(self):
        assert i18n.t("no_such_key") == "no_such_key"

    def test_missing_placeholder_leaves_text(self):
        assert "{count}" in i18n.t("cli_found_networks")

    def test_languages_share_keys(self):
        assert set(i18n.TRANSLATIONS["en"]) == set(i18n.TRANSLATIONS["ru"])

    def test_russian(self, monkeypatch):
        monkeypatch.setattr(i18n, "_current_lang", "ru")
        assert i18n.t("cli_stopped") == "Остановлено."


class TestDescribeEvent:
    def test_every_event_has_a_description(self):
        for name in i18n.TRANSLATIONS["en"]:
            if name.startswith("ev_"):
                assert name[3:] in {"appear", "change", "signal", "vanish", "join",
                                    "former", "leave", "dhcp", "error", "command",
                                    "stop", "empty", "batch"}

    def test_appear(self):
        network = NetworkRecord("aa:bb:cc:dd:ee:ff", ssid="Cafe")
        assert i18n.describe_event(Appear(network)) == "appeared: Cafe (aa:bb:cc:dd:ee:ff) Open"

    def test_former_without_ssid(self):
        text = i18n.describe_event(Former(JoinedNetwork("aa:bb:cc:dd:ee:ff", None)))
        assert text == "connected to unscanned network ? (aa:bb:cc:dd:ee:ff)"

    def test_simple_events(self):
        assert i18n.describe_event(Leave()) == "left network"
        assert i18n.describe_event(Dhcp("10.0.0.5")) == "dhcp lease: 10.0.0.5"
        assert i18n.describe_event(Error("bad")) == "error: bad"


class TestLanguage:
    def test_set_lang_persists(self, monkeypatch):
        saved = {}
        monkeypatch.setattr(i18n, "_save_setting", lambda key, value: saved.update({key: value}))
        assert i18n.set_lang("ru")
        assert i18n.get_lang() == "ru"
        assert saved == {"language": "ru"}

    def test_unknown_language_ignored(self, monkeypatch):
        monkeypatch.setattr(i18n, "_save_setting", lambda key, value: pytest.fail("saved"))
        assert not i18n.set_lang("xx")
        assert i18n.get_lang() == "en"

    def test_load_language_from_settings(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"language": "ru", "wireless": {"iface": "wlan1"}}))
        assert i18n.load_language(path) == "ru"

    def test_load_language_default(self, tmp_path):
        assert i18n.load_language(tmp_path / "missing.json") == "en"

    def test_available_languages(self):
        assert dict(i18n.available_languages()) == {"en": "English", "ru": "Русский"}
