#!/usr/bin/env python3
"""
WlanWatch — Wireless network presence monitor
==============================================
Track access points around the host and whether the host is joined to one.

Usage:
    wlanwatch                               Launch TUI
    wlanwatch --watch                       Stream events to the terminal
    wlanwatch --list                        Scan once and print networks
    wlanwatch --list --json                 Same, as JSON
    wlanwatch --check-deps                  Check dependencies
    wlanwatch --iface wlan1 --interval 30   Override settings
    wlanwatch --lang ru                     Set language (en/ru)
"""

import argparse
import asyncio
import json
import logging
import os
import sys

# Add project root to path
PROJECT_DIR = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_DIR)


BANNER = """[bold green]
 __        ___          __        __    _       _
 \\ \\      / / | __ _ _ _\\ \\      / /_ _| |_ ___| |__
  \\ \\ /\\ / /| |/ _` | '_ \\ \\ /\\ / / _` | __/ __| '_ \\
   \\ V  V / | | (_| | | | \\ V  V / (_| | || (__| | | |
    \\_/\\_/  |_|\\__,_|_| |_|\\_/\\_/ \\__,_|\\__\\___|_| |_|
[/bold green][cyan]  Wireless presence monitor[/cyan]  [dim]v1.0.0[/dim]
"""

# rich style per event name
EVENT_STYLES = {
    "appear": "green",
    "change": "yellow",
    "signal": "dim",
    "vanish": "magenta",
    "join": "bold green",
    "former": "bold yellow",
    "leave": "bold red",
    "dhcp": "cyan",
    "error": "bold red",
    "command": "dim",
    "stop": "bold",
    "empty": "dim",
}


def setup_logging(verbose: bool = False, log_file: str | None = None):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    kwargs = {}
    if log_file:
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
        kwargs["filename"] = log_file
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
        **kwargs,
    )


def build_config(args):
    """Settings file + command-line overrides."""
    from wlancore.config import load_config
    return load_config(
        args.config,
        iface=args.iface,
        iface2=args.iface2,
        update_frequency=args.interval,
        connection_spy_frequency=args.spy_interval,
        vanish_threshold=args.vanish_threshold,
    )


def cmd_check_deps():
    """Check and display dependency status."""
    from rich.console import Console
    from wlancore.dep_manager import print_status

    console = Console()
    console.print(BANNER)
    print_status(console)


def networks_table(networks):
    from rich.markup import escape
    from rich.table import Table
    from wlancore.i18n import t
    from wlancore.mac_lookup import lookup_vendor

    table = Table()
    table.add_column(t("network_ssid"), style="bold")
    table.add_column(t("network_bssid"), style="cyan")
    table.add_column(t("network_channel"), justify="right")
    table.add_column(t("network_signal"), justify="right")
    table.add_column(t("network_security"))
    table.add_column(t("network_vendor"), style="dim")

    ordered = sorted(networks, key=lambda n: n.signal if n.signal is not None else -999,
                     reverse=True)
    for net in ordered:
        table.add_row(
            escape(net.ssid),
            net.address,
            str(net.channel) if net.channel is not None else "-",
            f"{net.signal} dBm" if net.signal is not None else "-",
            net.security,
            lookup_vendor(net.address) or "-",
        )
    return table


def cmd_list(config, as_json: bool = False):
    """Run one scan and print what it found."""
    from rich.console import Console
    from rich.markup import escape
    from wlancore.engine import Wireless
    from wlancore.i18n import t

    console = Console(stderr=as_json)
    engine = Wireless(config)
    errors = []
    engine.on("error", lambda ev: errors.append(ev.message))

    async def do_scan():
        await engine.scan_once()
        await engine.check_connection()

    if not as_json:
        console.print(f"[green][*] {t('cli_scanning', iface=config.iface)}[/]")
    asyncio.run(do_scan())

    networks = list(engine.list().values())
    if as_json:
        print(json.dumps([n.to_dict() for n in networks], indent=2))
    elif networks:
        console.print(networks_table(networks))
        console.print(f"[green]{t('cli_found_networks', count=len(networks))}[/]")
    else:
        console.print(f"[yellow]{t('cli_no_networks')}[/]")

    for message in errors:
        console.print(f"[red][!] {escape(message)}[/]")
    return 1 if errors and not networks else 0


def cmd_watch(config):
    """Print engine events until interrupted."""
    from rich.console import Console
    from rich.text import Text
    from wlancore.engine import Wireless
    from wlancore.i18n import t, describe_event

    console = Console()
    console.print(BANNER)
    console.print(f"[green][*] {t('cli_watching', iface=config.iface, interval=config.update_frequency)}[/]")

    engine = Wireless(config)

    def print_event(event):
        if event.name == "batch":
            return
        console.print(Text(describe_event(event), style=EVENT_STYLES.get(event.name, "")))

    engine.subscribe(print_event)

    async def watch():
        await engine.start()
        try:
            await asyncio.Event().wait()
        finally:
            await engine.stop()

    try:
        asyncio.run(watch())
    except KeyboardInterrupt:
        console.print(f"\n[bold]{t('cli_stopped')}[/]")
    return 0


def cmd_launch_tui(config):
    """Launch the TUI application."""
    from wlanui.app import WlanWatchApp
    app = WlanWatchApp(config)
    app.run()
    return 0


def main(argv=None):
    from wlancore.i18n import available_languages

    parser = argparse.ArgumentParser(
        description="WlanWatch — Wireless network presence monitor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wlanwatch                                Launch TUI interface
  wlanwatch --watch --iface wlan1          Stream events from wlan1
  wlanwatch --list --json                  One scan as JSON
  wlanwatch --check-deps                   Check installed tools
        """,
    )

    parser.add_argument("--watch", action="store_true",
                        help="Print network events to the terminal instead of the TUI")
    parser.add_argument("--list", action="store_true",
                        help="Scan once and print the networks found")
    parser.add_argument("--json", action="store_true",
                        help="With --list, print JSON")
    parser.add_argument("--check-deps", action="store_true",
                        help="Check and display dependency status")
    parser.add_argument("--config", metavar="PATH",
                        help="Settings file (default: data/settings.json)")
    parser.add_argument("--iface", metavar="IFACE",
                        help="Wireless interface to scan (default: wlan0)")
    parser.add_argument("--iface2", metavar="IFACE",
                        help="Fallback interface when the first one is busy")
    parser.add_argument("--interval", type=float, metavar="SECONDS",
                        help="Seconds between scans (default: 60)")
    parser.add_argument("--spy-interval", type=float, metavar="SECONDS",
                        help="Seconds between connection checks (default: 5)")
    parser.add_argument("--vanish-threshold", type=int, metavar="N",
                        help="Missed scans before a network is reported gone (default: 2)")
    parser.add_argument("--lang", metavar="LANG",
                        choices=[code for code, _ in available_languages()],
                        help="Set interface language (en/ru)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable verbose logging")

    args = parser.parse_args(argv)

    tui = not (args.watch or args.list or args.check_deps)
    from wlancore.config import ConfigError, LOG_PATH
    # The TUI owns the terminal, so its logs go to a file
    setup_logging(args.verbose, str(LOG_PATH) if tui else None)

    from wlancore.i18n import load_language, set_lang, t
    load_language()
    if args.lang:
        set_lang(args.lang)

    if args.check_deps:
        cmd_check_deps()
        return 0

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"\033[91m[!] {t('cli_config_error', error=e)}\033[0m", file=sys.stderr)
        return 2

    if args.list:
        return cmd_list(config, as_json=args.json)
    elif args.watch:
        return cmd_watch(config)
    return cmd_launch_tui(config)


if __name__ == "__main__":
    sys.exit(main())
