"""Tests for detector configuration."""

from __future__ import annotations

import json

import pytest

from artifact_detector.config import DetectorConfig
from artifact_detector.matcher import TargetPattern


class TestDetectorConfig:
    def test_defaults(self):
        cfg = DetectorConfig()
        assert cfg.target_prefix == "PhoneArtifact"
        assert cfg.suffix_length == 2
        assert cfg.sink_path == "ssid_list.txt"
        assert cfg.cycle_period == 0.05
        assert cfg.scan_backend == "iwlist"
        assert cfg.publisher == "log"
        assert cfg.topic == "wifiAvailable"
        assert cfg.interface == ""

    def test_target_pattern(self):
        cfg = DetectorConfig(target_prefix="Pixel", suffix_length=3)
        assert cfg.target_pattern == TargetPattern("Pixel", 3)

    def test_invalid_target_pattern(self):
        cfg = DetectorConfig(target_prefix="")
        with pytest.raises(ValueError):
            cfg.target_pattern

    def test_load_save(self, tmp_path):
        cfg = DetectorConfig(
            detector_id="det-test",
            target_prefix="Pixel",
            sink_path="/tmp/scan.txt",
            publisher="websocket",
        )
        path = tmp_path / "nested" / "config.json"
        cfg.save(path)

        loaded = DetectorConfig.load(path)
        assert loaded == cfg

    def test_load_missing_file(self, tmp_path):
        cfg = DetectorConfig.load(tmp_path / "nonexistent.json")
        assert cfg == DetectorConfig()

    def test_load_ignores_unknown_keys(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "target_prefix": "Pixel",
            "ros_topic_queue": 1000,
        }))
        cfg = DetectorConfig.load(path)
        assert cfg.target_prefix == "Pixel"
        assert not hasattr(cfg, "ros_topic_queue")

    def test_generate_id(self):
        assert DetectorConfig().generate_id().startswith("det-")
