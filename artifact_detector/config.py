"""Configuration for the artifact detector."""

from __future__ import annotations

import json
import logging
import socket
from dataclasses import dataclass
from pathlib import Path

from .matcher import TargetPattern

logger = logging.getLogger(__name__)


@dataclass
class DetectorConfig:
    """Detector configuration — loaded from config.json."""

    detector_id: str = ""

    # Target
    target_prefix: str = "PhoneArtifact"
    suffix_length: int = 2  # XX, two-digit randomized number

    # Scanning
    sink_path: str = "ssid_list.txt"
    cycle_period: float = 0.05  # seconds between cycle starts (20 Hz)
    scan_backend: str = "iwlist"  # iwlist | nmcli
    scan_timeout: float = 30.0  # 0 = no timeout
    use_sudo: bool = False

    # Interface
    interface: str = ""  # empty = auto-detect
    interface_prefix: str = "wl"

    # Publishing
    publisher: str = "log"  # log | websocket
    publish_url: str = "ws://localhost:5100/ws/detector"
    topic: str = "wifiAvailable"

    @classmethod
    def load(cls, path: str | Path) -> DetectorConfig:
        path = Path(path)
        if path.exists():
            with open(path) as f:
                data = json.load(f)
            known = {k for k in cls.__dataclass_fields__}
            filtered = {k: v for k, v in data.items() if k in known}
            return cls(**filtered)
        logger.warning("Config not found at %s, using defaults", path)
        return cls()

    def save(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {}
        for k, v in self.__dict__.items():
            data[k] = v
        with open(path, "w") as f:
            json.dump(data, f, indent=2)

    @property
    def target_pattern(self) -> TargetPattern:
        return TargetPattern(self.target_prefix, self.suffix_length)

    def generate_id(self) -> str:
        """Generate a detector ID from hostname."""
        hostname = socket.gethostname()
        return f"det-{hostname}"
