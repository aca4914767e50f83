"""Tests for vendor lookup by OUI."""

import asyncio

import pytest

from wlancore import mac_lookup


@pytest.fixture(autouse=True)
def empty_cache(monkeypatch):
    monkeypatch.setattr(mac_lookup, "_cache", {})


class FailingLookup:
    async def lookup(self, mac):
        raise KeyError(mac)


class TestLookupVendor:
    def test_builtin_tables(self):
        assert mac_lookup.lookup_vendor("B8:27:EB:12:34:56") == "Raspberry Pi"
        assert mac_lookup.lookup_vendor("fc-ec-da-00-00-01") == "Ubiquiti"

    def test_unknown(self):
        assert mac_lookup.lookup_vendor("02:00:00:00:00:01") == ""
        assert mac_lookup.lookup_vendor("") == ""

    def test_async_prefers_tables(self, monkeypatch):
        monkeypatch.setattr(mac_lookup, "_mac_lookup", FailingLookup())
        assert asyncio.run(mac_lookup.lookup_vendor_async("50:c7:bf:00:00:01")) == "TP-Link"

    def test_async_failure_is_cached_empty(self, monkeypatch):
        monkeypatch.setattr(mac_lookup, "_mac_lookup", FailingLookup())
        assert asyncio.run(mac_lookup.lookup_vendor_async("02:00:00:00:00:01")) == ""
        assert mac_lookup._cache == {"02:00:00": ""}
