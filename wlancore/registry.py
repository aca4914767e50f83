"""Network registry — latest record per BSSID, with appear/change/vanish tracking."""

import logging

from wlancore.events import Event, Appear, Change, Signal, Vanish
from wlancore.network import NetworkRecord

logger = logging.getLogger("wlanwatch.registry")


class NetworkRegistry:
    """Authoritative map of address -> latest :class:`NetworkRecord`.

    One scan cycle is ``ingest()`` followed by ``decay()``. Both methods
    finish their whole pass before returning the events they produced, so
    a subscriber never observes a half-applied scan.

    Vanished records are reported but kept; call :meth:`remove` to drop
    them.
    """

    def __init__(self, vanish_threshold: int = 2):
        self.vanish_threshold = vanish_threshold
        self._networks: dict[str, NetworkRecord] = {}
        self._refreshed: set[str] = set()

    def ingest(self, records: list[NetworkRecord]) -> list[Event]:
        events: list[Event] = []
        for network in records:
            network.last_tick = 0
            old = self._networks.get(network.address)
            self._networks[network.address] = network
            self._refreshed.add(network.address)

            if old is None:
                events.append(Appear(network))
            elif old.identity_differs(network):
                events.append(Change(network))
            elif old.signal_differs(network):
                events.append(Signal(network))
        return events

    def decay(self) -> list[Event]:
        """Age every record the last ingest did not refresh."""
        events: list[Event] = []
        for address, network in self._networks.items():
            if address in self._refreshed:
                continue
            network.last_tick += 1
            if network.last_tick == self.vanish_threshold + 1:
                logger.debug(f"{address} vanished after {network.last_tick} scans")
                events.append(Vanish(network))
        self._refreshed.clear()
        return events

    def snapshot(self) -> dict[str, NetworkRecord]:
        return dict(self._networks)

    def get(self, address: str | None) -> NetworkRecord | None:
        if not address:
            return None
        return self._networks.get(address.lower())

    def remove(self, address: str) -> NetworkRecord | None:
        self._refreshed.discard(address)
        return self._networks.pop(address, None)

    def clear(self) -> None:
        self._networks.clear()
        self._refreshed.clear()

    def __contains__(self, address: str) -> bool:
        return address in self._networks

    def __len__(self) -> int:
        return len(self._networks)

    def __iter__(self):
        return iter(list(self._networks.values()))
