"""Detection cycle — scan, match, publish on a fixed cadence.

States: IDLE → SCANNING → IDLE

  Each cycle runs the scan into the sink, matches the sink against the
  target pattern and publishes the result (empty string when absent).
  Cycles never overlap. A stop request is only honoured between cycles;
  a scan already in progress runs to completion and is still published.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from pathlib import Path
from typing import Optional

from .matcher import MatchResult, SsidMatcher, TargetPattern
from .publisher import Publisher
from .scanner import Scanner

logger = logging.getLogger(__name__)


class State(enum.Enum):
    IDLE = "idle"
    SCANNING = "scanning"


class DetectionCycle:
    """Drives scan → match → publish until stopped."""

    def __init__(
        self,
        iface: str,
        scanner: Scanner,
        publisher: Publisher,
        pattern: TargetPattern,
        sink: str | Path = "ssid_list.txt",
        period: float = 0.05,
        matcher: Optional[SsidMatcher] = None,
    ):
        self.iface = iface
        self.scanner = scanner
        self.publisher = publisher
        self.pattern = pattern
        self.sink = Path(sink)
        self.period = period
        self.matcher = matcher or SsidMatcher()

        self.state = State.IDLE
        self.cycles_completed = 0
        self.last_result: Optional[MatchResult] = None
        self._stop = asyncio.Event()

    def stop(self) -> None:
        """Ask the loop to exit after the current cycle."""
        self._stop.set()

    @property
    def stopping(self) -> bool:
        return self._stop.is_set()

    async def run_once(self) -> MatchResult:
        """Run a single complete cycle and return its result."""
        loop = asyncio.get_running_loop()
        self.state = State.SCANNING
        try:
            # Blocking external scan; keep the event loop free for signals.
            try:
                await loop.run_in_executor(None, self.scanner.scan, self.iface, self.sink)
            except Exception:
                logger.exception("Scan on %s failed", self.iface)

            result = self.matcher.match(self.sink, self.pattern)
            if result.found:
                logger.info("found %s", result.ssid)
            else:
                logger.debug("did not find %s", self.pattern.prefix)

            try:
                await self.publisher.publish(result.payload)
            except Exception:
                logger.exception("Publish failed")

            self.last_result = result
            self.cycles_completed += 1
            return result
        finally:
            self.state = State.IDLE

    async def run(self, max_cycles: Optional[int] = None) -> int:
        """Run cycles until stopped (or ``max_cycles`` done).

        Returns the number of cycles completed by this call.
        """
        if max_cycles is not None and max_cycles <= 0:
            return 0

        loop = asyncio.get_running_loop()
        done = 0
        logger.info(
            "Detection loop started on %s (target %s, period %.2fs)",
            self.iface, self.pattern.prefix, self.period,
        )
        while not self._stop.is_set():
            started = loop.time()
            await self.run_once()
            done += 1
            if max_cycles is not None and done >= max_cycles:
                break

            remaining = self.period - (loop.time() - started)
            if remaining > 0:
                try:
                    await asyncio.wait_for(self._stop.wait(), timeout=remaining)
                except asyncio.TimeoutError:
                    pass

        logger.info("Detection loop stopped after %d cycles", done)
        return done
