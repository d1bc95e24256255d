"""SSID matching against a scan sink.

Phone artifacts broadcast an SSID of the form ``<prefix>XX`` where XX is a
two-digit number picked by the device. Only the first occurrence in the
scan is reported, and the suffix characters are taken verbatim without
checking that they are digits; callers that need a numeric suffix must
check it themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetPattern:
    """SSID prefix plus the width of the device-assigned suffix."""

    prefix: str
    suffix_length: int = 2

    def __post_init__(self) -> None:
        if not self.prefix:
            raise ValueError("target prefix must not be empty")
        if self.suffix_length < 0:
            raise ValueError("suffix_length must be >= 0")

    @property
    def length(self) -> int:
        """Length of a full matched SSID."""
        return len(self.prefix) + self.suffix_length


@dataclass(frozen=True)
class MatchResult:
    ssid: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.ssid is not None

    @property
    def payload(self) -> str:
        """What gets published: the SSID, or an empty string."""
        return self.ssid or ""


NOT_FOUND = MatchResult()


def find_ssid(text: str, pattern: TargetPattern) -> MatchResult:
    """Return the first ``<prefix>XX`` in ``text``."""
    pos = text.find(pattern.prefix)
    if pos < 0:
        return NOT_FOUND
    ssid = text[pos:pos + pattern.length]
    if len(ssid) < pattern.length:
        # prefix sits at the very end of the scan, suffix cut off
        return NOT_FOUND
    return MatchResult(ssid)


class SsidMatcher:
    """Reads a scan sink and looks for the target SSID."""

    def match(self, sink: str | Path, pattern: TargetPattern) -> MatchResult:
        try:
            text = Path(sink).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            # A missing scan file is the same as an empty scan.
            logger.debug("Scan sink %s unreadable: %s", sink, exc)
            return NOT_FOUND
        return find_ssid(text, pattern)
