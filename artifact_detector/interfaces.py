"""Wireless interface discovery.

Walks the host's interface addresses and picks the first one whose name
looks like a wireless adapter and that carries an IPv4 or IPv6 address.
The naming rule is a predicate so other platforms' schemes can be swapped
in (``wlan0``, ``wlp2s0``, ``wlx00c0ca…``).
"""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass
from typing import Callable, Iterable

import psutil

logger = logging.getLogger(__name__)

INET_FAMILIES = (socket.AF_INET, socket.AF_INET6)

NamePredicate = Callable[[str], bool]
Enumerator = Callable[[], Iterable["InterfaceRecord"]]


class NoWirelessInterface(Exception):
    """No interface on this host matched the wireless naming rule."""


@dataclass(frozen=True)
class InterfaceRecord:
    """One address entry of a host network interface."""

    name: str
    family: int


def positional_predicate(letter: str, marker: str, offset: int) -> NamePredicate:
    """Name starts with ``letter`` and has ``marker`` at ``offset``.

    ``positional_predicate("w", "x", 2)`` matches USB adapters named
    after their MAC (``wlx…``).
    """

    def _match(name: str) -> bool:
        return (
            name.startswith(letter)
            and len(name) > offset
            and name[offset] == marker
        )

    return _match


def prefix_predicate(prefix: str) -> NamePredicate:
    def _match(name: str) -> bool:
        return name.startswith(prefix)

    return _match


def exact_predicate(iface_name: str) -> NamePredicate:
    def _match(name: str) -> bool:
        return name == iface_name

    return _match


def enumerate_interfaces() -> list[InterfaceRecord]:
    """List every (name, family) address pair reported by the OS."""
    records = []
    for name, addrs in psutil.net_if_addrs().items():
        for addr in addrs:
            records.append(InterfaceRecord(name=name, family=int(addr.family)))
    return records


class InterfaceLocator:
    """Resolves the wireless interface name once at startup."""

    def __init__(
        self,
        predicate: NamePredicate | None = None,
        enumerator: Enumerator | None = None,
    ):
        self.predicate = predicate or prefix_predicate("wl")
        self.enumerator = enumerator or enumerate_interfaces

    def locate(self) -> str:
        try:
            records = list(self.enumerator())
        except OSError as exc:
            raise NoWirelessInterface(f"cannot enumerate interfaces: {exc}") from exc

        for record in records:
            if record.family not in INET_FAMILIES:
                continue
            if self.predicate(record.name):
                logger.info("selecting interface: %s", record.name)
                return record.name

        names = sorted({r.name for r in records})
        logger.debug("no wireless interface among %s", names)
        raise NoWirelessInterface(
            f"no wireless interface found (saw: {', '.join(names) or 'none'})"
        )
