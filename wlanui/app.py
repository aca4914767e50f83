"""WlanWatch TUI Application — hosts the engine and the monitor screen."""

import logging
from pathlib import Path

from textual.app import App
from textual.binding import Binding

from wlancore.config import WirelessConfig
from wlancore.engine import Wireless
from wlancore.i18n import t
from wlanui.screens.monitor_screen import MonitorScreen

logger = logging.getLogger("wlanwatch.app")

CSS_PATH = Path(__file__).parent / "styles.tcss"


class WlanWatchApp(App):
    """WlanWatch — wireless presence monitor TUI."""

    TITLE = "WlanWatch"
    SUB_TITLE = "Wireless presence monitor"
    CSS_PATH = CSS_PATH

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("f1", "help", "Help", show=True),
    ]

    def __init__(self, config: WirelessConfig | None = None):
        super().__init__()
        self.engine = Wireless(config)

    async def on_mount(self) -> None:
        """Show the monitor, then start scanning."""
        # Screen subscribes first so the initial scan lands in the table
        await self.push_screen(MonitorScreen(self.engine))
        await self.engine.start()

    async def action_quit(self) -> None:
        await self.engine.stop()
        self.exit()

    async def on_unmount(self) -> None:
        if self.engine.running:
            await self.engine.stop()

    def action_help(self) -> None:
        self.notify(
            t("help_text"),
            title=t("help"),
            timeout=10,
        )
