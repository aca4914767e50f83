"""Network table widget for the monitor screen."""

from rich.text import Text
from textual.widgets import DataTable

from wlancore.i18n import t
from wlancore.mac_lookup import lookup_vendor
from wlancore.network import NetworkRecord


class NetworkTable(DataTable):
    """Data table showing the networks currently in the registry."""

    COLUMNS = [
        ("network_ssid", 24),
        ("network_bssid", 18),
        ("network_channel", 4),
        ("network_signal", 8),
        ("network_security", 10),
        ("network_vendor", 14),
        ("network_age", 7),
    ]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.cursor_type = "row"
        self.zebra_stripes = True
        self._networks: dict[str, NetworkRecord] = {}

    def on_mount(self) -> None:
        for key, width in self.COLUMNS:
            self.add_column(t(key), key=key, width=width)

    def load_networks(self, networks: dict[str, NetworkRecord],
                      vanish_threshold: int = 2) -> None:
        """Reload the table, keeping the cursor on the same network."""
        selected = self.get_selected_network()
        self.clear()
        self._networks = dict(networks)

        ordered = sorted(
            networks.values(),
            key=lambda n: (n.last_tick, -(n.signal if n.signal is not None else -999)),
        )
        for net in ordered:
            # Gone networks stay listed, dimmed
            style = "dim" if net.last_tick > vanish_threshold else ""
            self.add_row(
                Text(net.ssid, style=style),
                Text(net.address, style=style or "cyan"),
                str(net.channel) if net.channel is not None else "-",
                f"{net.signal} dBm" if net.signal is not None else "-",
                Text(net.security, style="green" if net.is_open else ""),
                (net.vendor or lookup_vendor(net.address) or "-")[:14],
                str(net.last_tick),
                key=net.address,
            )

        if selected is not None and selected.address in self._networks:
            self.move_cursor(row=self.get_row_index(selected.address))

    def get_selected_network(self) -> NetworkRecord | None:
        """Get the network under the cursor."""
        if self.row_count == 0:
            return None
        row_key, _ = self.coordinate_to_cell_key(self.cursor_coordinate)
        return self._networks.get(row_key.value)
