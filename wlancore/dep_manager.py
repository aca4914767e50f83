"""Dependency manager — checks the system tools and python packages wlanwatch drives."""

import shutil
from dataclasses import dataclass


@dataclass
class Dependency:
    name: str
    check_cmd: str       # command to check if installed
    install_cmd: str     # command to install
    critical: bool       # required for basic operation
    description: str


SYSTEM_DEPS = [
    Dependency("iw", "iw", "apt-get install -y iw", True,
               "Wireless scan and link status"),
    Dependency("sudo", "sudo", "apt-get install -y sudo", True,
               "Privilege elevation for iw/ifconfig"),
    Dependency("ifconfig", "ifconfig", "apt-get install -y net-tools", False,
               "Interface up/down and metric"),
    Dependency("dhclient", "dhclient", "apt-get install -y isc-dhcp-client", False,
               "DHCP lease after joining"),
    Dependency("wpa_supplicant", "wpa_supplicant", "apt-get install -y wpasupplicant", False,
               "WPA/WPA2 association"),
    Dependency("wpa_passphrase", "wpa_passphrase", "apt-get install -y wpasupplicant", False,
               "WPA PSK generation"),
    Dependency("killall", "killall", "apt-get install -y psmisc", False,
               "Stopping wpa_supplicant/dhclient"),
]

PYTHON_DEPS = [
    "textual>=0.47.0",
    "rich>=13.0",
    "mac-vendor-lookup>=0.1.12",
]

# pip name -> import name, where they differ
_IMPORT_MAP = {
    "mac-vendor-lookup": "mac_vendor_lookup",
}


def check_system_dep(dep: Dependency) -> bool:
    """Check if a system dependency is available."""
    return shutil.which(dep.check_cmd) is not None


def check_all_system_deps() -> dict[str, dict]:
    """Check all system dependencies, return status dict."""
    return {
        dep.name: {
            "installed": check_system_dep(dep),
            "critical": dep.critical,
            "description": dep.description,
            "install_cmd": dep.install_cmd,
        }
        for dep in SYSTEM_DEPS
    }


def check_python_dep(package: str) -> bool:
    """Check if a Python package is installed."""
    pkg_name = package.split(">=")[0].split("==")[0].split(">")[0].split("<")[0]
    import_name = _IMPORT_MAP.get(pkg_name, pkg_name.replace("-", "_"))
    try:
        __import__(import_name)
        return True
    except ImportError:
        return False


def check_all_python_deps() -> dict[str, bool]:
    """Check all Python dependencies."""
    return {pkg: check_python_dep(pkg) for pkg in PYTHON_DEPS}


def get_missing_critical() -> list[str]:
    """Get list of missing critical dependencies."""
    return [dep.name for dep in SYSTEM_DEPS
            if dep.critical and not check_system_dep(dep)]


def print_status(console=None):
    """Print dependency status to console."""
    from rich.console import Console
    from rich.table import Table

    console = console or Console()

    table = Table(title="System Dependencies")
    table.add_column("Package", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Required", style="yellow")
    table.add_column("Description")

    for name, info in check_all_system_deps().items():
        status = "[green]✓ Installed[/]" if info["installed"] else "[red]✗ Missing[/]"
        required = "[red]Yes[/]" if info["critical"] else "No"
        table.add_row(name, status, required, info["description"])

    console.print(table)
    console.print()

    table2 = Table(title="Python Dependencies")
    table2.add_column("Package", style="cyan")
    table2.add_column("Status", style="bold")

    for name, installed in check_all_python_deps().items():
        status = "[green]✓ Installed[/]" if installed else "[red]✗ Missing[/]"
        table2.add_row(name, status)

    console.print(table2)

    missing_critical = get_missing_critical()
    if missing_critical:
        console.print(f"\n[red][!] Missing critical dependencies: {', '.join(missing_critical)}[/]")
        hints = sorted({dep.install_cmd for dep in SYSTEM_DEPS if dep.name in missing_critical})
        for hint in hints:
            console.print(f"[yellow]    Run: sudo {hint}[/]")
    else:
        console.print("\n[green][✓] All critical dependencies satisfied[/]")
