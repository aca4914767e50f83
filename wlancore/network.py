"""Network model — an access point seen in scan output."""

from dataclasses import dataclass, field, asdict

UNKNOWN_SSID = "unknown"


@dataclass
class NetworkRecord:
    address: str
    ssid: str = UNKNOWN_SSID
    channel: int | None = None
    signal: int | None = None
    quality: int | None = None
    encryption_any: bool = False
    encryption_wep: bool = False
    encryption_wpa: bool = False
    encryption_wpa2: bool = False
    last_tick: int = 0            # scan cycles since last seen
    vendor: str = field(default="", compare=False)

    @property
    def is_open(self) -> bool:
        return not self.encryption_any

    @property
    def security(self) -> str:
        if self.encryption_wpa and self.encryption_wpa2:
            return "WPA/WPA2"
        elif self.encryption_wpa2:
            return "WPA2"
        elif self.encryption_wpa:
            return "WPA"
        elif self.encryption_wep:
            return "WEP"
        elif self.encryption_any:
            return "Encrypted"
        return "Open"

    def identity_differs(self, other: "NetworkRecord") -> bool:
        """True when the name or the protection of the network changed."""
        return (self.ssid != other.ssid
                or self.encryption_any != other.encryption_any)

    def signal_differs(self, other: "NetworkRecord") -> bool:
        return self.signal != other.signal or self.quality != other.quality

    def to_dict(self) -> dict:
        data = asdict(self)
        data["security"] = self.security
        return data


@dataclass(frozen=True)
class JoinedNetwork:
    """Address/SSID pair reported by the link status command."""
    address: str | None = None
    ssid: str | None = None

    def to_dict(self) -> dict:
        return {"address": self.address, "ssid": self.ssid}
