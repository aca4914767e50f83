"""Engine events and the bus that delivers them to subscribers."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, ClassVar

from wlancore.network import NetworkRecord, JoinedNetwork

logger = logging.getLogger("wlanwatch.events")


@dataclass(frozen=True)
class Event:
    name: ClassVar[str] = "event"


@dataclass(frozen=True)
class Appear(Event):
    name: ClassVar[str] = "appear"
    network: NetworkRecord


@dataclass(frozen=True)
class Change(Event):
    name: ClassVar[str] = "change"
    network: NetworkRecord


@dataclass(frozen=True)
class Signal(Event):
    name: ClassVar[str] = "signal"
    network: NetworkRecord


@dataclass(frozen=True)
class Vanish(Event):
    name: ClassVar[str] = "vanish"
    network: NetworkRecord


@dataclass(frozen=True)
class Join(Event):
    name: ClassVar[str] = "join"
    network: NetworkRecord


@dataclass(frozen=True)
class Leave(Event):
    name: ClassVar[str] = "leave"


@dataclass(frozen=True)
class Former(Event):
    """Connected to a network that no recent scan has reported."""
    name: ClassVar[str] = "former"
    network: JoinedNetwork


@dataclass(frozen=True)
class Dhcp(Event):
    name: ClassVar[str] = "dhcp"
    ip_address: str


@dataclass(frozen=True)
class Error(Event):
    name: ClassVar[str] = "error"
    message: str


@dataclass(frozen=True)
class Command(Event):
    name: ClassVar[str] = "command"
    command: str


@dataclass(frozen=True)
class Stop(Event):
    name: ClassVar[str] = "stop"


@dataclass(frozen=True)
class Empty(Event):
    """Deprecated: a scan produced no BSS blocks."""
    name: ClassVar[str] = "empty"


@dataclass(frozen=True)
class Batch(Event):
    """Deprecated: the raw parse of one scan."""
    name: ClassVar[str] = "batch"
    networks: tuple = field(default_factory=tuple)


EVENT_TYPES = {
    cls.name: cls
    for cls in (Appear, Change, Signal, Vanish, Join, Leave, Former,
                Dhcp, Error, Command, Stop, Empty, Batch)
}

Handler = Callable[[Event], None]


class EventBus:
    """Synchronous publish/subscribe channel for engine events.

    Handlers run in emit order on the caller's thread. A failing handler is
    logged and skipped so one bad consumer cannot starve the others.
    """

    def __init__(self):
        self._any: list[Handler] = []
        self._named: dict[str, list[Handler]] = defaultdict(list)

    def subscribe(self, handler: Handler) -> None:
        """Receive every event."""
        self._any.append(handler)

    def on(self, name: str, handler: Handler) -> None:
        """Receive only events called *name* (``"appear"``, ``"join"``...)."""
        if name not in EVENT_TYPES:
            raise ValueError(f"Unknown event name: {name}")
        self._named[name].append(handler)

    def off(self, handler: Handler, name: str | None = None) -> None:
        lists = [self._named[name]] if name else [self._any, *self._named.values()]
        for handlers in lists:
            if handler in handlers:
                handlers.remove(handler)

    def emit(self, event: Event) -> None:
        for handler in [*self._named.get(event.name, ()), *self._any]:
            try:
                handler(event)
            except Exception:
                logger.exception(f"Handler for '{event.name}' failed")
