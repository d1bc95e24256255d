"""Tests for the command-line entry point."""

from __future__ import annotations

import argparse
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from artifact_detector import __main__ as cli
from artifact_detector.interfaces import NoWirelessInterface


class TestParser:
    def test_defaults(self):
        args = cli.build_parser().parse_args([])
        assert args.config is None
        assert args.cycles is None
        assert args.debug is False

    def test_rejects_unknown_backend(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["--backend", "airport"])


class TestLoadConfig:
    def test_overrides(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"target_prefix": "Pixel", "cycle_period": 2.0}))
        args = cli.build_parser().parse_args([
            "-c", str(path), "--prefix", "PhoneArtifact", "--period", "0.5",
            "--interface", "wlan1", "--backend", "nmcli",
        ])
        cfg = cli.load_config(args)
        assert cfg.target_prefix == "PhoneArtifact"
        assert cfg.cycle_period == 0.5
        assert cfg.interface == "wlan1"
        assert cfg.scan_backend == "nmcli"
        assert cfg.detector_id.startswith("det-")

    def test_no_config_uses_defaults(self, tmp_path):
        with patch.object(cli, "CONFIG_CANDIDATES", [tmp_path / "missing.json"]):
            cfg = cli.load_config(argparse.Namespace(
                config=None, prefix=None, interface=None, sink=None, period=None,
                backend=None, publisher=None,
            ))
        assert cfg.target_prefix == "PhoneArtifact"


class TestMain:
    def test_exits_nonzero_without_interface(self, tmp_path):
        locator = MagicMock()
        locator.locate.side_effect = NoWirelessInterface("no wireless interface found")
        with patch.object(cli, "CONFIG_CANDIDATES", []), \
             patch.object(cli, "InterfaceLocator", return_value=locator), \
             patch.object(cli, "DetectionCycle") as cycle_cls:
            with pytest.raises(SystemExit) as exc:
                cli.main(["--sink", str(tmp_path / "s.txt")])
        assert exc.value.code == 1
        cycle_cls.assert_not_called()

    def test_exits_nonzero_on_bad_config(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"target_prefix": ""}))
        with patch.object(cli, "DetectionCycle") as cycle_cls:
            with pytest.raises(SystemExit) as exc:
                cli.main(["-c", str(path)])
        assert exc.value.code == 1
        cycle_cls.assert_not_called()

    def test_runs_requested_cycles(self, tmp_path):
        locator = MagicMock()
        locator.locate.return_value = "wlan0"
        cycle = MagicMock()
        cycle.run = AsyncMock(return_value=2)
        with patch.object(cli, "CONFIG_CANDIDATES", []), \
             patch.object(cli, "InterfaceLocator", return_value=locator), \
             patch.object(cli, "DetectionCycle", return_value=cycle) as cycle_cls:
            cli.main(["--cycles", "2", "--sink", str(tmp_path / "s.txt")])

        cycle.run.assert_awaited_once_with(max_cycles=2)
        kwargs = cycle_cls.call_args.kwargs
        assert kwargs["iface"] == "wlan0"
        assert kwargs["pattern"].prefix == "PhoneArtifact"
