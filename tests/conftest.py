"""Shared fixtures: canned `iw` output and a scripted command executor."""

import pytest

from wlancore.config import WirelessConfig
from wlancore.engine import Wireless
from wlancore.executor import CommandResult

SCAN_OUTPUT = """\
BSS 00:11:22:33:44:55(on wlan0) -- associated
\tTSF: 1736413843 usec (0d, 00:28:56)
\tfreq: 2412
\tbeacon interval: 100 TUs
\tcapability: ESS Privacy ShortSlotTime (0x0411)
\tsignal: -47.00 dBm
\tlast seen: 10 ms ago
\tSSID: HomeNet
\tSupported rates: 1.0* 2.0* 5.5* 11.0* 18.0 24.0 36.0 54.0
\tDS Parameter set: channel 1
\tRSN:\t * Version: 1
\t\t * Group cipher: CCMP
\t\t * Pairwise ciphers: CCMP
\t\t * Authentication suites: PSK
BSS AA:BB:CC:DD:EE:FF(on wlan0)
\tfreq: 2437
\tsignal: -80.00 dBm
\tlast seen: 120 ms ago
\tSSID: CoffeeShop
\tDS Parameter set: channel 6
"""

LINK_OUTPUT = """\
Connected to 00:11:22:33:44:55 (on wlan0)
\tSSID: HomeNet
\tfreq: 2412
\tsignal: -47 dBm
\ttx bitrate: 72.2 MBit/s
"""

NOT_CONNECTED = "Not connected.\n"


class FakeExecutor:
    """Replays queued results in order and records every command it gets.

    Once the queue is empty every call succeeds with empty output.
    """

    def __init__(self, *results: CommandResult):
        self.results = list(results)
        self.commands: list[str] = []

    def queue(self, *results: CommandResult) -> None:
        self.results.extend(results)

    async def __call__(self, command: str, timeout: float = 30) -> CommandResult:
        self.commands.append(command)
        if self.results:
            return self.results.pop(0)
        return CommandResult()


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def config():
    return WirelessConfig(iface="wlan0", update_frequency=60,
                          connection_spy_frequency=5)


@pytest.fixture
def engine(config, executor):
    return Wireless(config, executor=executor)


@pytest.fixture
def events(engine):
    """Every event the engine emits, in order."""
    received = []
    engine.subscribe(received.append)
    return received


def names(events):
    return [ev.name for ev in events if ev.name not in ("command", "batch")]
