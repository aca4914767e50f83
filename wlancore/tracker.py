"""Connection tracker — join/leave detection from successive link polls."""

import logging
from enum import Enum

from wlancore.events import Event, Join, Leave, Former
from wlancore.network import JoinedNetwork
from wlancore.registry import NetworkRegistry

logger = logging.getLogger("wlanwatch.tracker")


class ConnectionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class ConnectionTracker:
    """Two-state machine fed with one link poll at a time.

    While CONNECTED a poll reporting a different address is not treated as
    a new join; only a poll reporting no association moves back to
    DISCONNECTED.
    """

    def __init__(self):
        self.state = ConnectionState.DISCONNECTED
        self.address: str | None = None

    @property
    def connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    def reset(self) -> None:
        self.state = ConnectionState.DISCONNECTED
        self.address = None

    def update(self, link: JoinedNetwork | None,
               registry: NetworkRegistry) -> Event | None:
        if link is None:
            if self.connected:
                logger.info(f"Left {self.address or 'network'}")
                self.reset()
                return Leave()
            return None

        if self.connected:
            return None

        self.state = ConnectionState.CONNECTED
        self.address = link.address
        network = registry.get(link.address)
        if network is not None:
            logger.info(f"Joined {network.ssid} ({network.address})")
            return Join(network)
        logger.info(f"Connected to unscanned network {link.address}")
        return Former(link)
