"""Access point vendor lookup from the BSSID OUI."""

import logging

logger = logging.getLogger("wlanwatch.mac_lookup")

# Well-known access point / router OUI prefixes (first 3 bytes of BSSID)
ROUTER_OUI = {
    # Ubiquiti
    "fc:ec:da": "Ubiquiti", "04:18:d6": "Ubiquiti", "44:d9:e7": "Ubiquiti",
    "f0:9f:c2": "Ubiquiti", "dc:9f:db": "Ubiquiti", "80:2a:a8": "Ubiquiti",
    "24:5a:4c": "Ubiquiti", "68:72:51": "Ubiquiti", "74:83:c2": "Ubiquiti",
    # TP-Link
    "50:c7:bf": "TP-Link", "14:cc:20": "TP-Link", "60:32:b1": "TP-Link",
    "b0:95:75": "TP-Link", "a8:42:a1": "TP-Link", "c0:25:e9": "TP-Link",
    # D-Link
    "28:10:7b": "D-Link", "1c:7e:e5": "D-Link", "00:26:5a": "D-Link",
    "c8:be:19": "D-Link", "b8:a3:86": "D-Link",
}

# Devices that commonly run soft access points
IOT_OUI = {
    # Raspberry Pi
    "b8:27:eb": "Raspberry Pi", "dc:a6:32": "Raspberry Pi", "e4:5f:01": "Raspberry Pi",
    # Espressif (ESP8266/ESP32)
    "24:6f:28": "Espressif", "ac:67:b2": "Espressif", "24:0a:c4": "Espressif",
    "30:ae:a4": "Espressif", "cc:50:e3": "Espressif", "a4:cf:12": "Espressif",
    # Shelly
    "e8:db:84": "Shelly",
}

_cache: dict[str, str] = {}
_mac_lookup = None


def _prefix(mac: str) -> str:
    return mac.lower().replace("-", ":").strip()[:8]


def lookup_vendor(mac: str) -> str:
    """Look up access point vendor from the built-in OUI tables."""
    if not mac:
        return ""
    prefix = _prefix(mac)
    return ROUTER_OUI.get(prefix) or IOT_OUI.get(prefix) or _cache.get(prefix, "")


async def lookup_vendor_async(mac: str) -> str:
    """Like :func:`lookup_vendor`, falling back to the mac-vendor-lookup database."""
    vendor = lookup_vendor(mac)
    if vendor or not mac:
        return vendor
    prefix = _prefix(mac)
    if prefix in _cache:
        return _cache[prefix]

    global _mac_lookup
    try:
        from mac_vendor_lookup import AsyncMacLookup
        if _mac_lookup is None:
            _mac_lookup = AsyncMacLookup()
        vendor = await _mac_lookup.lookup(mac)
    except Exception as e:
        logger.debug(f"Vendor lookup failed for {prefix}: {e}")
        vendor = ""
    _cache[prefix] = vendor
    return vendor
