"""Wireless engine — periodic scans, connection tracking, and interface control.

All work runs on one asyncio event loop. Two cadence tasks drive the scan
and the link poll; every result is parsed and applied to the registry or
the tracker synchronously before the next await, so state changes from two
results never interleave.
"""

import asyncio
import logging
import re
from typing import Callable

from wlancore.config import WirelessConfig
from wlancore.events import (
    Event, EventBus, Batch, Command, Dhcp, Empty, Error, Stop,
)
from wlancore.executor import CommandResult, Executor, is_busy, run_shell
from wlancore.network import NetworkRecord
from wlancore.parsers import (
    parse_scan, parse_link, parse_dhcp_lease, parse_interfaces,
)
from wlancore.registry import NetworkRegistry
from wlancore.templater import build_commands, translate
from wlancore.tracker import ConnectionTracker

logger = logging.getLogger("wlanwatch.engine")

_SCAN_ABORTED_RE = re.compile(r"scan aborted", re.IGNORECASE)

# callback(error, value): error is None on success
Callback = Callable[[object, object], None]

# detail returned by operations whose result arrived after stop()
STOPPED = "stopped"


class Wireless:
    """Discovers access points and tracks the host's association.

    Usage::

        engine = Wireless(WirelessConfig(iface="wlan0"))
        engine.on("appear", lambda ev: print(ev.network.ssid))
        await engine.start()
        ...
        await engine.stop()
    """

    def __init__(self, config: WirelessConfig | None = None,
                 executor: Executor | None = None,
                 bus: EventBus | None = None):
        self.config = (config or WirelessConfig()).validate()
        self.commands = build_commands(
            self.config.iface, self.config.iface2, self.config.commands
        )
        self.bus = bus or EventBus()
        self.registry = NetworkRegistry(self.config.vanish_threshold)
        self.tracker = ConnectionTracker()
        self._executor = executor or run_shell
        self._killing = False
        self._tasks: list[asyncio.Task] = []

    # ═══ Events ═══

    def on(self, name: str, handler: Callable[[Event], None]) -> None:
        self.bus.on(name, handler)

    def subscribe(self, handler: Callable[[Event], None]) -> None:
        self.bus.subscribe(handler)

    def emit(self, event: Event) -> None:
        if isinstance(event, Error):
            logger.warning(event.message)
        self.bus.emit(event)

    # ═══ Lifecycle ═══

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    @property
    def connected(self) -> bool:
        return self.tracker.connected

    async def start(self) -> None:
        """Start both cadences; each fires once right away."""
        if self.running:
            return
        self._killing = False
        logger.info(
            f"Starting on {self.config.iface}: scan every "
            f"{self.config.update_frequency}s, link every "
            f"{self.config.connection_spy_frequency}s"
        )
        self._tasks = [
            asyncio.create_task(
                self._every(self.config.update_frequency, self.scan_once),
                name="wlanwatch-scan",
            ),
            asyncio.create_task(
                self._every(self.config.connection_spy_frequency, self.check_connection),
                name="wlanwatch-link",
            ),
        ]

    async def stop(self, callback: Callable[[], None] | None = None) -> None:
        """Cancel both cadences and drop any in-flight results."""
        if self._killing and not self._tasks:
            return
        self._killing = True
        current = asyncio.current_task()
        tasks = [t for t in self._tasks if t is not current]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks = []

        logger.info("Stopped")
        self.emit(Stop())
        if callback:
            callback()

    async def _every(self, interval: float, tick) -> None:
        loop = asyncio.get_running_loop()
        while not self._killing:
            started = loop.time()
            try:
                await tick()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception(f"{tick.__name__} failed")
                self.emit(Error(f"Unexpected failure in {tick.__name__}: {e}"))
            await asyncio.sleep(max(0.0, interval - (loop.time() - started)))

    async def _run(self, command: str) -> CommandResult | None:
        """Run *command*; ``None`` when stop() came before or during the run."""
        if self._killing:
            return None
        self.emit(Command(command))
        result = await self._executor(command, timeout=self.config.command_timeout)
        if self._killing:
            logger.debug(f"Discarding result of '{command}' after stop")
            return None
        return result

    # ═══ Scanning ═══

    async def scan_once(self) -> None:
        await self._execute_scan()

    async def _execute_scan(self, command: str | None = None) -> None:
        scan_command = command or self.commands["scan"]
        result = await self._run(scan_command)
        if result is None:
            return

        if not result.ok:
            if is_busy(result):
                if command is None and self.config.iface2:
                    logger.info(f"{self.config.iface} busy, scanning on {self.config.iface2}")
                    return await self._execute_scan(self.commands["scan2"])
                self.emit(Error("Scans are overlapping; slow down update frequency"))
                return
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            self.emit(Error(
                f"Got some major errors from our scan command ({scan_command}): {detail}"
            ))
            return

        stderr = result.stderr.strip()
        if stderr:
            if "Device or resource busy" in stderr:
                self.emit(Error("Scans are overlapping; slow down update frequency"))
                return
            elif "Allocation failed" in stderr:
                self.emit(Error("Too many networks for iwlist to handle"))
                return
            self.emit(Error(f"Got some errors from our scan command: {stderr}"))

        if _SCAN_ABORTED_RE.search(result.stdout):
            if command is None and self.config.iface2:
                return await self._execute_scan(self.commands["scan2"])
            logger.info("Scan aborted by the driver")
            return

        self._apply_scan(result.stdout)

    def _apply_scan(self, text: str) -> None:
        scan = parse_scan(text)
        if scan.empty:
            self.emit(Empty())
        self.emit(Batch(tuple(scan.networks)))

        events = self.registry.ingest(scan.networks)
        events += self.registry.decay()
        logger.debug(
            f"Scan: {len(scan.networks)} seen, {len(self.registry)} known, "
            f"{len(events)} event(s)"
        )
        for event in events:
            self.emit(event)

    # ═══ Connection tracking ═══

    async def check_connection(self, callback: Callable[[], None] | None = None) -> None:
        """Poll the link once; *callback* runs whatever the outcome."""
        stat = self.commands["stat"]
        try:
            result = await self._run(stat)
            if result is None:
                return
            if not result.ok:
                detail = result.stderr.strip() or f"exit code {result.returncode}"
                self.emit(Error(f"Error getting wireless devices information ({stat}): {detail}"))
                return
            event = self.tracker.update(parse_link(result.stdout), self.registry)
            if event is not None:
                self.emit(event)
        finally:
            if callback:
                callback()

    # ═══ Connection management ═══

    async def join(self, network: NetworkRecord, password: str = "",
                   callback: Callback | None = None) -> tuple[bool, str]:
        """Connect to *network*, choosing the method from its encryption."""
        if network.encryption_wep:
            ok, detail = await self._connect("connect_wep", network.ssid, password)
        elif network.encryption_wpa or network.encryption_wpa2:
            ok, detail = await self._connect("connect_wpa", network.ssid, password)
        else:
            ok, detail = await self._connect("connect_open", network.ssid)

        if self._killing:
            return self._finish(False, STOPPED, callback)

        # Re-poll from scratch so a successful join is reported as one
        self.tracker.reset()
        await self.check_connection()
        return self._finish(ok, detail, callback)

    async def _connect(self, name: str, essid: str,
                       password: str | None = None) -> tuple[bool, str]:
        command = translate(self.commands[name], {"essid": essid, "password": password})
        result = await self._run(command)
        if result is None:
            return False, STOPPED

        if not result.ok or result.stderr.strip():
            detail = (result.stderr.strip() or result.stdout.strip()
                      or f"exit code {result.returncode}")
            self.emit(Error(f"There was an error joining {essid}: {detail}"))
            return False, detail
        return True, result.stdout.strip()

    async def leave(self, callback: Callback | None = None) -> tuple[bool, str]:
        result = await self._run(self.commands["leave"])
        if result is None:
            return self._finish(False, STOPPED, callback)
        await self.check_connection()

        if not result.ok:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            self.emit(Error("There was an error when we tried to disconnect from the network"))
            return self._finish(False, detail, callback)
        return self._finish(True, "Disconnected", callback)

    async def dhcp(self, callback: Callback | None = None) -> tuple[bool, str]:
        """Request a lease; the address is reported as a ``dhcp`` event."""
        result = await self._run(self.commands["dhcp"])
        if result is None:
            return self._finish(False, STOPPED, callback)

        if not result.ok:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            self.emit(Error(f"There was an unknown error enabling dhcp: {detail}"))
            return self._finish(False, detail, callback)

        # dhclient reports the lease on stderr
        ip_address = parse_dhcp_lease(result.stderr) or parse_dhcp_lease(result.stdout)
        if ip_address:
            self.emit(Dhcp(ip_address))
            return self._finish(True, ip_address, callback)

        self.emit(Error("Couldn't get an IP Address from DHCP"))
        return self._finish(False, "No lease", callback)

    async def dhcp_stop(self, callback: Callback | None = None) -> tuple[bool, str]:
        result = await self._run(self.commands["dhcp_disable"])
        if result is None:
            return self._finish(False, STOPPED, callback)

        if not result.ok:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            self.emit(Error(f"There was an unknown error disabling dhcp: {detail}"))
            return self._finish(False, detail, callback)
        return self._finish(True, "", callback)

    # ═══ Interface control ═══

    async def enable(self, callback: Callback | None = None) -> tuple[bool, str]:
        """Bring the interface up (ifconfig up)."""
        return await self._interface_command("enable", "enabling", callback)

    async def disable(self, callback: Callback | None = None) -> tuple[bool, str]:
        """Take the interface down (ifconfig down)."""
        return await self._interface_command("disable", "disabling", callback)

    async def set_metric(self, metric: int,
                         callback: Callback | None = None) -> tuple[bool, str]:
        command = translate(self.commands["metric"], {"metric": str(metric)})
        return await self._interface_command("metric", "setting the metric of",
                                             callback, command=command)

    async def _interface_command(self, name: str, verb: str,
                                 callback: Callback | None,
                                 command: str | None = None) -> tuple[bool, str]:
        result = await self._run(command or self.commands[name])
        if result is None:
            return self._finish(False, STOPPED, callback)
        output = (result.stdout + result.stderr).strip()

        if not result.ok:
            if "No such device" in output:
                self.emit(Error(f"The interface {self.config.iface} does not exist."))
            else:
                self.emit(Error(f"There was an unknown error {verb} the interface: "
                                f"{output or result.returncode}"))
            return self._finish(False, output or f"exit code {result.returncode}", callback)

        # ifconfig is silent on success
        if output:
            self.emit(Error(f"There was an error {verb} the interface: {output}"))
            return self._finish(False, output, callback)
        return self._finish(True, "", callback)

    async def interfaces(self) -> list[str]:
        """Wireless interface names reported by `iw dev`."""
        result = await self._run(self.commands["interfaces"])
        if result is None:
            return []
        if not result.ok:
            self.emit(Error(f"Could not list wireless interfaces: "
                            f"{result.stderr.strip() or result.returncode}"))
            return []
        return parse_interfaces(result.stdout)

    @staticmethod
    def _finish(ok: bool, detail: str,
                callback: Callback | None) -> tuple[bool, str]:
        if callback:
            callback(None if ok else detail, detail if ok else None)
        return ok, detail

    # Defined last: the name shadows the builtin for annotations in the class body
    def list(self) -> dict[str, NetworkRecord]:
        """Networks from the previous scans; does not trigger a new scan."""
        return self.registry.snapshot()
