"""Shared test fixtures for rds-codec.

Provides:
- Config isolation (every test gets an empty config directory)
- Root logging restored after every test
- Encoded 0A and 2A packets for the known station vectors
"""

import logging

import pytest

from rdscodec.packet import encode_program_service, encode_radio_text
from tests.fixtures.known_groups import PS_STATION, RT_STATION


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config module at a temporary directory."""
    config_dir = tmp_path / "rds-config"
    monkeypatch.setattr("rdscodec.config.CONFIG_DIR", config_dir)
    monkeypatch.setattr("rdscodec.config.CONFIG_FILE", config_dir / "config.yaml")
    return config_dir


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo root logger changes made by `rds -v` (basicConfig with force=True)."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def ps_packet():
    """416-bit 0A packet for PS_STATION."""
    return encode_program_service(**PS_STATION)


@pytest.fixture
def rt_packet():
    """1664-bit 2A packet for RT_STATION."""
    return encode_radio_text(**RT_STATION)
