"""Wireless scan capture.

A scanner runs the platform's scan tool for one interface and writes the
SSID-bearing lines to the scan sink. Nothing is parsed here; the matcher
reads the sink afterwards.

Scan failures are logged and swallowed: the sink keeps whatever the last
good scan wrote, and the cycle sees "no match" if that has no target in it.
"""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class Scanner(Protocol):
    """Anything that can capture one scan of ``iface`` into ``sink``."""

    def scan(self, iface: str, sink: str | Path) -> None:
        ...


def write_sink(sink: str | Path, lines: list[str]) -> None:
    """Replace ``sink`` with ``lines`` in one atomic rename."""
    sink = Path(sink)
    sink.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{sink.name}.", dir=sink.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
        os.replace(tmp, sink)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


class _CommandScanner:
    """Shared subprocess handling for command-line scan tools."""

    name = "command"

    def __init__(self, timeout: float = 30.0, use_sudo: bool = False):
        # 0 means wait forever
        self.timeout: Optional[float] = timeout if timeout and timeout > 0 else None
        self.use_sudo = use_sudo

    def _command(self, args: list[str]) -> list[str]:
        if self.use_sudo:
            return ["sudo", "-n", *args]
        return args

    def _run(self, args: list[str]) -> Optional[str]:
        """Run a tool and return stdout, or None on any failure."""
        cmd = self._command(args)
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("%s scan timed out after %ss", self.name, self.timeout)
            return None
        except OSError as exc:
            logger.warning("%s scan could not start: %s", self.name, exc)
            return None

        if result.returncode != 0:
            err = (result.stderr or result.stdout or "").strip()
            logger.warning(
                "%s exited with %d: %s", cmd[0], result.returncode, err,
            )
            return None
        return result.stdout

    def _lines(self, iface: str) -> Optional[list[str]]:
        raise NotImplementedError

    def scan(self, iface: str, sink: str | Path) -> None:
        lines = self._lines(iface)
        if lines is None:
            return
        try:
            write_sink(sink, lines)
        except OSError as exc:
            logger.warning("Could not write scan sink %s: %s", sink, exc)
            return
        logger.debug("%s: %d SSID lines written to %s", self.name, len(lines), sink)


class IwlistScanner(_CommandScanner):
    """``iwlist <iface> scan`` filtered to ``ESSID:"…"`` lines.

    Triggering a fresh scan needs root; without it iwlist returns the
    kernel's cached results (see ``use_sudo``).
    """

    name = "iwlist"

    def _lines(self, iface: str) -> Optional[list[str]]:
        out = self._run(["iwlist", iface, "scan"])
        if out is None:
            return None
        return [line.strip() for line in out.splitlines() if "SSID" in line]


class NmcliScanner(_CommandScanner):
    """NetworkManager scan: rescan, then list SSIDs in terse mode.

    ``nmcli device wifi list`` alone often shows only the connected
    network, so a rescan is requested first.
    """

    name = "nmcli"

    def _lines(self, iface: str) -> Optional[list[str]]:
        # Rescan is rate-limited by NetworkManager; a refusal still leaves
        # a usable (cached) list.
        self._run(["nmcli", "device", "wifi", "rescan", "ifname", iface])
        out = self._run(
            ["nmcli", "-t", "-f", "SSID", "device", "wifi", "list", "ifname", iface]
        )
        if out is None:
            return None
        return [
            f'ESSID:"{ssid}"'
            for ssid in (line.strip() for line in out.splitlines())
            if ssid and ssid != "--"
        ]


SCANNERS = {
    "iwlist": IwlistScanner,
    "nmcli": NmcliScanner,
}


def create_scanner(backend: str = "iwlist", timeout: float = 30.0, use_sudo: bool = False) -> Scanner:
    """Build a scanner by backend name."""
    cls = SCANNERS.get(backend)
    if cls is None:
        raise ValueError(
            f"Unknown scan backend {backend!r} (choose from {', '.join(SCANNERS)})"
        )
    return cls(timeout=timeout, use_sudo=use_sudo)
