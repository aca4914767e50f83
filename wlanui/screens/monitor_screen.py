"""Monitor screen — live network table, connection status, and event log."""

import asyncio
import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.screen import Screen
from textual.widgets import Button, Input, RichLog, Static

from wlancore.engine import Wireless
from wlancore.i18n import t, describe_event
from wlancore.mac_lookup import lookup_vendor_async
from wlanui.widgets.network_table import NetworkTable

logger = logging.getLogger("wlanwatch.monitor_screen")

EVENT_COLORS = {
    "appear": "#00ff41",
    "change": "#ffd700",
    "signal": "#3a6a3a",
    "vanish": "#ff00ff",
    "join": "bold #00ff41",
    "former": "bold #ffd700",
    "leave": "bold #ff4444",
    "dhcp": "#00d4ff",
    "error": "bold #ff0040",
    "command": "#555555",
    "stop": "bold",
    "empty": "#555555",
}

_NETWORK_EVENTS = ("appear", "change", "signal", "vanish")


class MonitorScreen(Screen):
    """Networks around the host and the host's own association."""

    BINDINGS = [
        Binding("r", "rescan", "Rescan", show=True),
        Binding("j", "join", "Join", show=True),
        Binding("l", "leave", "Leave", show=True),
        Binding("d", "dhcp", "DHCP", show=True),
    ]

    class EngineEvent(Message):
        """An engine event, carried onto the screen's message queue."""

        def __init__(self, event) -> None:
            super().__init__()
            self.event = event

    def __init__(self, engine: Wireless):
        super().__init__()
        self._engine = engine
        self._busy = False

    def compose(self) -> ComposeResult:
        yield Static(
            f"[bold #00ff41]◆ {t('app_title').upper()}[/] [#1a3a1a]//[/] "
            f"[#00d4ff]{t('app_subtitle').upper()}[/] "
            f"[#888]{self._engine.config.iface}[/]",
            id="header",
        )
        yield Static(f"[#888]{t('not_connected')}[/]", id="link-status")

        with Vertical(id="networks-section"):
            yield Static(f"[bold #00ff41]{t('networks').upper()}[/]",
                         classes="section-title")
            yield NetworkTable(id="network-table")

        with Horizontal(id="join-row"):
            yield Input(placeholder=t("enter_password"), password=True,
                        id="join-password")
            yield Button(t("join_btn"), id="btn-join", variant="success",
                         classes="action-btn")
            yield Button(t("leave_btn"), id="btn-leave", classes="action-btn")
            yield Button(t("dhcp_btn"), id="btn-dhcp", classes="action-btn")
            yield Button(t("rescan_btn"), id="btn-rescan", variant="primary",
                         classes="action-btn")

        yield Static(f"[bold #00ff41]{t('events').upper()}[/]", classes="section-title")
        yield RichLog(id="event-log", wrap=True, max_lines=500)
        yield Static(f" [#3a4a3a]{t('help_text')}[/]", id="footer")

    def on_mount(self) -> None:
        self._engine.subscribe(self._forward)

    def on_unmount(self) -> None:
        self._engine.bus.off(self._forward)

    def _forward(self, event) -> None:
        self.post_message(self.EngineEvent(event))

    # ═══ Engine events ═══

    def on_monitor_screen_engine_event(self, message: EngineEvent) -> None:
        event = message.event
        if event.name == "batch":
            return

        if event.name in _NETWORK_EVENTS:
            self._refresh_table()
            if event.name == "appear" and not event.network.vendor:
                asyncio.create_task(self._fill_vendor(event.network))
        elif event.name == "join":
            self._set_status(event.network.ssid, event.network.address)
        elif event.name == "former":
            self._set_status(event.network.ssid or "?", event.network.address or "?")
        elif event.name == "leave":
            self.query_one("#link-status", Static).update(f"[#888]{t('not_connected')}[/]")
        elif event.name == "dhcp":
            self.notify(t("dhcp_leased", ip=event.ip_address), timeout=5)

        log = self.query_one("#event-log", RichLog)
        log.write(Text(describe_event(event), style=EVENT_COLORS.get(event.name, "")))

    def _set_status(self, ssid: str, address: str) -> None:
        self.query_one("#link-status", Static).update(
            Text(f"● {t('connected_to', ssid=ssid, address=address)}",
                 style="bold #00ff41")
        )

    def _refresh_table(self) -> None:
        table = self.query_one(NetworkTable)
        table.load_networks(self._engine.list(), self._engine.config.vanish_threshold)

    async def _fill_vendor(self, network) -> None:
        network.vendor = await lookup_vendor_async(network.address)
        if network.vendor:
            self._refresh_table()

    # ═══ Actions ═══

    def on_button_pressed(self, event: Button.Pressed) -> None:
        actions = {
            "btn-join": self.action_join,
            "btn-leave": self.action_leave,
            "btn-dhcp": self.action_dhcp,
            "btn-rescan": self.action_rescan,
        }
        action = actions.get(event.button.id)
        if action:
            action()

    def action_rescan(self) -> None:
        asyncio.create_task(self._engine.scan_once())

    def action_join(self) -> None:
        network = self.query_one(NetworkTable).get_selected_network()
        if network is None:
            self.notify(t("select_network"), severity="warning")
            return
        password = self.query_one("#join-password", Input).value
        asyncio.create_task(self._join(network, password))

    def action_leave(self) -> None:
        asyncio.create_task(self._run_exclusive(self._engine.leave(), t("leave_failed")))

    def action_dhcp(self) -> None:
        asyncio.create_task(self._run_exclusive(self._engine.dhcp(), t("error")))

    async def _join(self, network, password: str) -> None:
        self.notify(t("joining", ssid=network.ssid), timeout=3)
        ok = await self._run_exclusive(self._engine.join(network, password),
                                       t("join_failed", ssid=network.ssid))
        if ok:
            self.query_one("#join-password", Input).value = ""

    async def _run_exclusive(self, operation, failure: str) -> bool:
        """Run one join/leave/dhcp at a time."""
        if self._busy:
            operation.close()
            return False
        self._busy = True
        try:
            ok, detail = await operation
        finally:
            self._busy = False
        if not ok:
            logger.info(f"{failure}: {detail}")
            self.notify(f"{failure}: {detail}", severity="error", timeout=8)
        return ok
