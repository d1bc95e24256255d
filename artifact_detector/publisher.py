"""Publish channel for detection results.

Every completed cycle publishes exactly one message. The payload is the
matched SSID, or an empty string when nothing was found.

  LogPublisher        — writes each message to the log
  WebSocketPublisher  — sends JSON messages to a downstream server
"""

from __future__ import annotations

import json
import logging
import time
from typing import Optional, Protocol

import websockets
from websockets.asyncio.client import ClientConnection

from .config import DetectorConfig

logger = logging.getLogger(__name__)


class Publisher(Protocol):
    async def publish(self, payload: str) -> None:
        ...

    async def close(self) -> None:
        ...


class LogPublisher:
    """Echoes each payload to the log, one line per cycle."""

    def __init__(self, topic: str = "wifiAvailable"):
        self.topic = topic
        self.count = 0

    async def publish(self, payload: str) -> None:
        self.count += 1
        logger.info("[%s] %s", self.topic, payload)

    async def close(self) -> None:
        pass


class WebSocketPublisher:
    """Sends results to a server over a WebSocket.

    Connects on first publish. A failed send drops the connection; the
    next publish reconnects. Nothing here raises into the detection cycle.
    """

    def __init__(
        self,
        url: str,
        topic: str = "wifiAvailable",
        detector_id: str = "",
        connect_timeout: float = 5.0,
    ):
        self.url = url
        self.topic = topic
        self.detector_id = detector_id
        self.connect_timeout = connect_timeout
        self._ws: Optional[ClientConnection] = None

    def _message(self, payload: str) -> dict:
        return {
            "type": "PUBLISH",
            "topic": self.topic,
            "detector_id": self.detector_id,
            "data": payload,
            "timestamp": time.time(),
        }

    async def _connect(self) -> bool:
        try:
            self._ws = await websockets.connect(
                self.url,
                open_timeout=self.connect_timeout,
                ping_interval=20,
                ping_timeout=10,
                close_timeout=5,
            )
            logger.info("Connected to %s", self.url)
            return True
        except Exception as exc:
            logger.warning("Failed to connect to %s: %s", self.url, exc)
            self._ws = None
            return False

    async def publish(self, payload: str) -> None:
        if self._ws is None and not await self._connect():
            logger.debug("Dropped message for %s: %r", self.topic, payload)
            return
        try:
            await self._ws.send(json.dumps(self._message(payload)))
        except Exception as exc:
            logger.warning("Publish to %s failed: %s", self.url, exc)
            await self.close()

    async def close(self) -> None:
        if self._ws:
            try:
                await self._ws.close()
            except Exception:
                logger.debug("Error closing websocket", exc_info=True)
            self._ws = None

    @property
    def connected(self) -> bool:
        return self._ws is not None


def create_publisher(config: DetectorConfig) -> Publisher:
    """Build the publisher named in ``config.publisher``."""
    if config.publisher == "log":
        return LogPublisher(topic=config.topic)
    if config.publisher == "websocket":
        return WebSocketPublisher(
            url=config.publish_url,
            topic=config.topic,
            detector_id=config.detector_id,
        )
    raise ValueError(
        f"Unknown publisher {config.publisher!r} (choose from log, websocket)"
    )
