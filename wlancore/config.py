"""Settings — wireless engine configuration and the JSON settings file."""

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path

logger = logging.getLogger("wlanwatch.config")

DATA_DIR = Path(__file__).parent.parent / "data"
SETTINGS_PATH = DATA_DIR / "settings.json"
LOG_PATH = DATA_DIR / "wlanwatch.log"


class ConfigError(ValueError):
    pass


@dataclass
class WirelessConfig:
    iface: str = "wlan0"
    iface2: str | None = None          # fallback interface for busy scans
    update_frequency: float = 60       # seconds between scans
    connection_spy_frequency: float = 5
    vanish_threshold: int = 2          # missed scans before "vanish"
    command_timeout: float = 30
    commands: dict[str, str] = field(default_factory=dict)

    def validate(self) -> "WirelessConfig":
        if not self.iface:
            raise ConfigError("iface must not be empty")
        if self.update_frequency <= 0:
            raise ConfigError("update_frequency must be positive")
        if self.connection_spy_frequency <= 0:
            raise ConfigError("connection_spy_frequency must be positive")
        if self.vanish_threshold < 0:
            raise ConfigError("vanish_threshold must not be negative")
        if self.command_timeout <= 0:
            raise ConfigError("command_timeout must be positive")
        return self

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "WirelessConfig":
        """Build from a mapping, ignoring keys this version does not know."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.debug(f"Ignoring unknown settings: {', '.join(sorted(unknown))}")
        return cls(**{k: v for k, v in data.items() if k in known})


def load_config(path: str | Path | None = None, **overrides) -> WirelessConfig:
    """Load the ``"wireless"`` section of the settings file.

    *overrides* whose value is not ``None`` win over the file. An explicit
    *path* that does not exist is an error; the default file is optional.
    """
    if path is not None and not Path(path).exists():
        raise ConfigError(f"Settings file not found: {path}")

    settings = _load_settings(Path(path) if path else SETTINGS_PATH)
    data = settings.get("wireless", {})
    if not isinstance(data, dict):
        raise ConfigError("'wireless' settings must be an object")

    data.update({k: v for k, v in overrides.items() if v is not None})
    return WirelessConfig.from_dict(data).validate()


# ═══════════════════════════════════════════════════════════════
# Settings persistence
# ═══════════════════════════════════════════════════════════════

def _load_settings(path: Path = SETTINGS_PATH) -> dict:
    if path.exists():
        try:
            with open(path) as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Cannot read settings {path}: {e}")
    return {}


def _save_setting(key: str, value, path: Path = SETTINGS_PATH) -> None:
    settings = _load_settings(path)
    settings[key] = value
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(path, "w") as f:
            json.dump(settings, f, indent=2)
    except OSError as e:
        logger.warning(f"Cannot write settings {path}: {e}")
