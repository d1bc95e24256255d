"""Artifact detector entry point.

Usage:
    python -m artifact_detector [--config CONFIG_PATH] [--prefix PREFIX]

Scanning with iwlist needs root to trigger a fresh scan. Either run as
root, or set ``use_sudo`` and allow the user passwordless sudo for iwlist
in /etc/sudoers, e.g.::

    username ALL=(root) NOPASSWD: /sbin/iwlist
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

from .config import DetectorConfig
from .cycle import DetectionCycle
from .interfaces import InterfaceLocator, NoWirelessInterface, exact_predicate, prefix_predicate
from .publisher import create_publisher
from .scanner import SCANNERS, create_scanner

logger = logging.getLogger(__name__)

CONFIG_CANDIDATES = [
    Path("/etc/artifact-detector/config.json"),
    Path.home() / ".artifact-detector" / "config.json",
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Phone artifact SSID detector")
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to config.json (default: auto-detect)",
    )
    parser.add_argument("--prefix", default=None, help="Target SSID prefix (overrides config)")
    parser.add_argument("--interface", default=None, help="Wireless interface (skips auto-detect)")
    parser.add_argument("--sink", default=None, help="Scan output file (overrides config)")
    parser.add_argument("--period", type=float, default=None, help="Seconds between cycles")
    parser.add_argument(
        "--backend",
        default=None,
        choices=sorted(SCANNERS),
        help="Scan backend (overrides config)",
    )
    parser.add_argument(
        "--publisher",
        default=None,
        choices=["log", "websocket"],
        help="Publish channel (overrides config)",
    )
    parser.add_argument(
        "--cycles",
        type=int,
        default=None,
        help="Exit after this many cycles (default: run until signalled)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def load_config(args: argparse.Namespace) -> DetectorConfig:
    config_path = args.config
    if config_path is None:
        for candidate in CONFIG_CANDIDATES:
            if candidate.exists():
                config_path = str(candidate)
                break

    if config_path:
        config = DetectorConfig.load(config_path)
        logger.info("Loaded config from %s", config_path)
    else:
        config = DetectorConfig()
        logger.warning("No config found — using defaults")

    if not config.detector_id:
        config.detector_id = config.generate_id()

    # CLI overrides
    if args.prefix:
        config.target_prefix = args.prefix
    if args.interface:
        config.interface = args.interface
    if args.sink:
        config.sink_path = args.sink
    if args.period is not None:
        config.cycle_period = args.period
    if args.backend:
        config.scan_backend = args.backend
    if args.publisher:
        config.publisher = args.publisher
    return config


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    # Logging
    level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    config = load_config(args)

    try:
        pattern = config.target_pattern
        scanner = create_scanner(config.scan_backend, config.scan_timeout, config.use_sudo)
        publisher = create_publisher(config)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        sys.exit(1)

    # Resolve the wireless interface once; nothing to do without one.
    if config.interface:
        predicate = exact_predicate(config.interface)
    else:
        predicate = prefix_predicate(config.interface_prefix)
    try:
        iface = InterfaceLocator(predicate).locate()
    except NoWirelessInterface as exc:
        logger.error("%s, terminating", exc)
        sys.exit(1)

    cycle = DetectionCycle(
        iface=iface,
        scanner=scanner,
        publisher=publisher,
        pattern=pattern,
        sink=config.sink_path,
        period=config.cycle_period,
    )

    loop = asyncio.new_event_loop()

    def _shutdown(sig: int) -> None:
        logger.info("Received signal %d — stopping after current cycle", sig)
        cycle.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _shutdown, sig)

    try:
        loop.run_until_complete(cycle.run(max_cycles=args.cycles))
    except KeyboardInterrupt:
        pass
    finally:
        loop.run_until_complete(publisher.close())
        loop.close()


if __name__ == "__main__":
    main()
