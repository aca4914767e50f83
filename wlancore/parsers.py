"""Parsers for `iw` scan/link output and dhclient lease messages.

Scan output is read with a small line tokenizer: every line is classified
by its prefix into a :class:`LineKind`, and an accumulator folds the
classified lines into :class:`NetworkRecord` objects, one per ``BSS``
block.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from wlancore.network import NetworkRecord, JoinedNetwork

logger = logging.getLogger("wlanwatch.parsers")

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
_MAC_RE = re.compile(r"([0-9a-fA-F]{2}:){5}[0-9a-fA-F]{2}")
_CHANNEL_RE = re.compile(r"DS Parameter set: channel ([0-9]{1,3})")
_SIGNAL_RE = re.compile(r"signal: (-?\d+)\D")
_SSID_RE = re.compile(r"SSID: (.*)")
_CONNECTED_RE = re.compile(r"Connected to ([a-fA-F0-9:]*)")
_LEASE_RE = re.compile(r"leased (\b(?:\d{1,3}\.){3}\d{1,3}\b) for [0-9]+ seconds")


class LineKind(Enum):
    BSS = "bss"
    CHANNEL = "channel"
    SIGNAL = "signal"
    SSID = "ssid"
    RSN = "rsn"
    WPS = "wps"
    OTHER = "other"


# Prefix checked on the left-stripped line -> kind
_PREFIX_RULES = (
    ("DS Parameter set: channel ", LineKind.CHANNEL),
    ("signal:", LineKind.SIGNAL),
    ("SSID", LineKind.SSID),
    ("RSN:", LineKind.RSN),
    ("WPS:", LineKind.WPS),
)


@dataclass
class ScanResult:
    networks: list[NetworkRecord] = field(default_factory=list)
    markers: int = 0   # number of BSS lines seen

    @property
    def empty(self) -> bool:
        """No BSS block at all: the "no networks found" condition."""
        return self.markers == 0


def split_lines(text: str) -> list[str]:
    return _LINE_SPLIT_RE.split(text)


def classify_line(line: str) -> tuple[LineKind, object]:
    """Classify one line of `iw dev <iface> scan` output.

    Returns the kind and the value extracted for it (address, channel,
    signal or ssid), or ``None`` when the kind carries no value or the
    value could not be read.
    """
    line = line.rstrip()
    if line.startswith("BSS"):
        m = _MAC_RE.search(line)
        return LineKind.BSS, m.group(0).lower() if m else None

    line = line.lstrip()
    for prefix, kind in _PREFIX_RULES:
        if line.startswith(prefix):
            break
    else:
        return LineKind.OTHER, None

    if kind is LineKind.CHANNEL:
        m = _CHANNEL_RE.match(line)
        return kind, int(m.group(1)) if m else None
    if kind is LineKind.SIGNAL:
        # "signal: -47.00 dBm"; needs a non-digit after the number
        m = _SIGNAL_RE.match(line + " ")
        return kind, int(m.group(1)) if m else None
    if kind is LineKind.SSID:
        m = _SSID_RE.match(line)
        return kind, m.group(1) if m else None
    return kind, None


def parse_scan(text: str) -> ScanResult:
    """Parse the whole output of one scan into network records."""
    result = ScanResult()
    current: NetworkRecord | None = None
    started = False

    def flush():
        if current is not None:
            result.networks.append(current)
        elif started:
            logger.debug("Dropping BSS block without a hardware address")

    for line in split_lines(text or ""):
        kind, value = classify_line(line)

        if kind is LineKind.BSS:
            flush()
            started = True
            result.markers += 1
            current = NetworkRecord(address=value) if value else None
            continue

        if current is None:
            continue

        if kind is LineKind.CHANNEL and value is not None:
            current.channel = value
        elif kind is LineKind.SIGNAL and value is not None:
            current.signal = value
        elif kind is LineKind.SSID and value is not None:
            current.ssid = value
        elif kind is LineKind.RSN:
            current.encryption_any = True
            current.encryption_wep = False
            current.encryption_wpa2 = True
        elif kind is LineKind.WPS:
            current.encryption_any = True
            current.encryption_wep = False
            current.encryption_wpa = True

    flush()
    return result


def parse_link(text: str) -> JoinedNetwork | None:
    """Parse `iw dev <iface> link`; ``None`` means not associated."""
    lines = split_lines(text or "")
    if "Connected to " not in lines[0]:
        return None

    address = None
    ssid = None
    for line in lines:
        if "Connected to " in line:
            m = _CONNECTED_RE.search(line)
            if m:
                address = m.group(1).lower() or None
        elif "SSID" in line:
            m = _SSID_RE.search(line)
            if m:
                ssid = m.group(1) or None
    return JoinedNetwork(address=address, ssid=ssid)


def parse_dhcp_lease(text: str) -> str | None:
    """Return the leased IPv4 address from dhclient output, if any."""
    ip_address = None
    for line in split_lines(text or ""):
        m = _LEASE_RE.search(line)
        if m:
            ip_address = m.group(1)
    return ip_address


def parse_interfaces(text: str) -> list[str]:
    """Interface names from `iw dev` output."""
    names = []
    for line in split_lines(text or ""):
        line = line.strip()
        if line.startswith("Interface "):
            parts = line.split()
            if len(parts) >= 2:
                names.append(parts[1])
    return names
