"""Command table and placeholder substitution for iw/ifconfig/dhclient calls."""

import logging
import re

logger = logging.getLogger("wlanwatch.templater")

COMMANDS = {
    "scan": "sudo iw dev :INTERFACE scan",
    "scan2": "sudo iw dev :INTERFACE2 scan",
    "stat": "sudo iw dev :INTERFACE link",
    "disable": "sudo ifconfig :INTERFACE down",
    "enable": "sudo ifconfig :INTERFACE up",
    "interfaces": "sudo iw dev",
    "dhcp": "sudo dhclient :INTERFACE",
    "dhcp_disable": "dhclient -r :INTERFACE; sudo killall dhclient",
    "leave": "sudo killall wpa_supplicant",
    "metric": "sudo ifconfig :INTERFACE metric :METRIC",
    "connect_wep": 'sudo iw :INTERFACE connect ":ESSID" keys :PASSWORD',
    "connect_wpa": (
        'sudo wpa_passphrase ":ESSID" ":PASSWORD" > /tmp/wpa-temp.conf'
        " && sudo wpa_supplicant -B -D nl80211 -i :INTERFACE -c /tmp/wpa-temp.conf"
        " && rm /tmp/wpa-temp.conf"
    ),
    "connect_open": 'sudo iw :INTERFACE connect ":ESSID"',
}

# Literal characters allowed in a substituted value. Not a shell escaper:
# anything outside this set leaves the placeholder untouched.
_SAFE_VALUE_RE = re.compile(r"^[a-z0-9~!@#$%^&*()\-+=_\[\]{}\\|/,.<>?'’: ]+$",
                            re.IGNORECASE)


def is_safe_value(value: str) -> bool:
    return bool(_SAFE_VALUE_RE.match(value))


def translate(template: str, values: dict) -> str:
    """Replace ``:NAME`` placeholders in *template* with ``values["name"]``.

    Empty values are skipped. Values that fail the allow-list keep their
    placeholder in the output, which downstream commands then reject.
    Only the first occurrence of each placeholder is replaced.
    """
    for name, value in values.items():
        if not value:
            continue
        value = str(value)
        if not is_safe_value(value):
            logger.warning(f"Refusing unsafe value for :{name.upper()}")
            continue
        template = template.replace(f":{name.upper()}", value, 1)
    return template


def build_commands(iface: str, iface2: str | None = None,
                   overrides: dict | None = None) -> dict[str, str]:
    """Merge *overrides* over the command table and fill in interface names."""
    commands = dict(COMMANDS)
    if overrides:
        commands.update(overrides)

    # INTERFACE2 first, otherwise :INTERFACE would eat its prefix
    ifaces = {"interface2": iface2, "interface": iface}
    return {name: translate(template, ifaces) for name, template in commands.items()}
