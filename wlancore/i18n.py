"""Internationalization module — EN/RU language support."""

import logging
from pathlib import Path

from wlancore.config import SETTINGS_PATH, _load_settings, _save_setting

logger = logging.getLogger("wlanwatch.i18n")

# ═══════════════════════════════════════════════════════════════
# Translation dictionaries
# ═══════════════════════════════════════════════════════════════

TRANSLATIONS = {
    "en": {
        # ─── General ───
        "app_title": "WlanWatch",
        "app_subtitle": "Wireless presence monitor",
        "error": "Error",
        "help": "Help",
        "help_text": "R: rescan | J: join selected | L: leave | D: DHCP | Q: quit",

        # ─── CLI ───
        "cli_watching": "Watching {iface} (scan every {interval}s). Ctrl-C to stop.",
        "cli_scanning": "Scanning on {iface}...",
        "cli_no_networks": "No networks found.",
        "cli_found_networks": "Found {count} network(s)",
        "cli_config_error": "Configuration error: {error}",
        "cli_stopped": "Stopped.",

        # ─── Table ───
        "network_ssid": "SSID",
        "network_bssid": "BSSID",
        "network_channel": "CH",
        "network_signal": "Signal",
        "network_security": "Security",
        "network_vendor": "Vendor",
        "network_age": "Missed",

        # ─── Monitor screen ───
        "networks": "Networks",
        "events": "Events",
        "not_connected": "Not connected",
        "connected_to": "Connected to {ssid} ({address})",
        "enter_password": "Password (empty for open networks)",
        "join_btn": "Join",
        "leave_btn": "Leave",
        "dhcp_btn": "DHCP",
        "rescan_btn": "Rescan",
        "select_network": "Select a network first",
        "joining": "Joining {ssid}...",
        "join_failed": "Could not join {ssid}",
        "leave_failed": "Could not leave the network",
        "dhcp_leased": "Leased {ip}",

        # ─── Events ───
        "ev_appear": "appeared: {ssid} ({address}) {security}",
        "ev_change": "changed: {ssid} ({address}) {security}",
        "ev_signal": "signal: {ssid} ({address}) {signal}",
        "ev_vanish": "vanished: {ssid} ({address})",
        "ev_join": "joined: {ssid} ({address})",
        "ev_former": "connected to unscanned network {ssid} ({address})",
        "ev_leave": "left network",
        "ev_dhcp": "dhcp lease: {ip}",
        "ev_error": "error: {message}",
        "ev_command": "$ {command}",
        "ev_stop": "stopped",
        "ev_empty": "scan returned no networks",
        "ev_batch": "scan parsed {count} network(s)",
    },
    "ru": {
        "app_title": "WlanWatch",
        "app_subtitle": "Монитор беспроводных сетей",
        "error": "Ошибка",
        "help": "Помощь",
        "help_text": "R: пересканировать | J: подключиться | L: отключиться | D: DHCP | Q: выход",

        "cli_watching": "Наблюдение за {iface} (скан каждые {interval}с). Ctrl-C для остановки.",
        "cli_scanning": "Сканирование на {iface}...",
        "cli_no_networks": "Сети не найдены.",
        "cli_found_networks": "Найдено сетей: {count}",
        "cli_config_error": "Ошибка конфигурации: {error}",
        "cli_stopped": "Остановлено.",

        "network_ssid": "SSID",
        "network_bssid": "BSSID",
        "network_channel": "Канал",
        "network_signal": "Сигнал",
        "network_security": "Защита",
        "network_vendor": "Производитель",
        "network_age": "Пропуски",

        "networks": "Сети",
        "events": "События",
        "not_connected": "Не подключено",
        "connected_to": "Подключено к {ssid} ({address})",
        "enter_password": "Пароль (пусто для открытых сетей)",
        "join_btn": "Подключить",
        "leave_btn": "Отключить",
        "dhcp_btn": "DHCP",
        "rescan_btn": "Скан",
        "select_network": "Сначала выберите сеть",
        "joining": "Подключение к {ssid}...",
        "join_failed": "Не удалось подключиться к {ssid}",
        "leave_failed": "Не удалось отключиться",
        "dhcp_leased": "Получен адрес {ip}",

        "ev_appear": "появилась: {ssid} ({address}) {security}",
        "ev_change": "изменилась: {ssid} ({address}) {security}",
        "ev_signal": "сигнал: {ssid} ({address}) {signal}",
        "ev_vanish": "пропала: {ssid} ({address})",
        "ev_join": "подключено: {ssid} ({address})",
        "ev_former": "подключено к неизвестной сети {ssid} ({address})",
        "ev_leave": "отключено от сети",
        "ev_dhcp": "адрес DHCP: {ip}",
        "ev_error": "ошибка: {message}",
        "ev_command": "$ {command}",
        "ev_stop": "остановлено",
        "ev_empty": "скан не нашёл сетей",
        "ev_batch": "в скане сетей: {count}",
    },
}


# ═══════════════════════════════════════════════════════════════
# Active language
# ═══════════════════════════════════════════════════════════════

DEFAULT_LANG = "en"
LANGUAGE_NAMES = {"en": "English", "ru": "Русский"}

_current_lang = DEFAULT_LANG


def get_lang() -> str:
    return _current_lang


def set_lang(lang: str, persist: bool = True) -> bool:
    """Switch the interface language; unknown codes leave it unchanged.

    With *persist* the choice is written next to the ``"wireless"``
    section of the settings file.
    """
    global _current_lang
    if lang not in TRANSLATIONS:
        logger.warning(f"Unknown language '{lang}', keeping {_current_lang}")
        return False
    _current_lang = lang
    if persist:
        _save_setting("language", lang)
    return True


def load_language(path: Path | None = None) -> str:
    """Apply the language stored in the settings file and return it."""
    settings = _load_settings(path or SETTINGS_PATH)
    set_lang(settings.get("language", DEFAULT_LANG), persist=False)
    return _current_lang


def available_languages() -> list[tuple[str, str]]:
    """(code, native name) pairs for the language picker."""
    return [(code, LANGUAGE_NAMES.get(code, code)) for code in TRANSLATIONS]


def t(key: str, **kwargs) -> str:
    """Translate *key*, falling back to English and then to the key itself."""
    text = TRANSLATIONS[_current_lang].get(key) or TRANSLATIONS[DEFAULT_LANG].get(key, key)
    if not kwargs:
        return text
    try:
        return text.format(**kwargs)
    except (KeyError, IndexError):
        logger.debug(f"Missing placeholder for '{key}' in {_current_lang}")
        return text


def describe_event(event) -> str:
    """One-line, translated description of an engine event."""
    network = getattr(event, "network", None)
    values = {}
    if network is not None:
        values = {
            "ssid": network.ssid or "?",
            "address": network.address or "?",
            "security": getattr(network, "security", ""),
            "signal": getattr(network, "signal", ""),
        }
    if event.name == "dhcp":
        values["ip"] = event.ip_address
    elif event.name == "error":
        values["message"] = event.message
    elif event.name == "command":
        values["command"] = event.command
    elif event.name == "batch":
        values["count"] = len(event.networks)
    return t(f"ev_{event.name}", **values)
