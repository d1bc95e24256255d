"""pytest configuration for artifact detector tests."""

import pytest


# Configure asyncio mode for pytest-asyncio
def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


@pytest.fixture
def sink(tmp_path):
    """Path of a scan sink inside a per-test temp dir (not created)."""
    return tmp_path / "ssid_list.txt"
