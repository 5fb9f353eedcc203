# tests/conftest.py
"""
Shared fixtures for hook-logger tests.

Provides a LogConfig rooted in a temporary directory, a fixed clock, a mock
host API and a recording stand-in for the event logger.
"""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add source to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "plugins" / "hook-logger"))

from hook_logger.config import LogConfig  # noqa: E402

FIXED_NOW = datetime(2026, 10, 19, 8, 15, 2, 113000, tzinfo=timezone.utc)


class RecordingEventLogger:
    """Collects (event_name, summary) pairs instead of touching the disk."""

    def __init__(self):
        self.entries = []

    def write_log_entry(self, event_name, summary):
        self.entries.append((event_name, summary))


@pytest.fixture
def log_dir(tmp_path):
    """Log directory that does not exist yet."""
    return tmp_path / "logs" / "hook-logger"


@pytest.fixture
def log_config(log_dir):
    return LogConfig(log_dir=log_dir, retention_days=3)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def recorder():
    return RecordingEventLogger()


@pytest.fixture
def mock_api():
    """Host API whose on() just records subscriptions."""
    api = MagicMock()
    api.handlers = {}

    def on(event_name, handler):
        api.handlers[event_name] = handler

    api.on.side_effect = on
    return api


def read_entries(log_file):
    """Parse a log file into (timestamp, event_name, summary) tuples."""
    entries = []
    for line in log_file.read_text(encoding="utf-8").splitlines():
        head, payload = line.split(" | ", 1)
        timestamp, event_name = head.split(" ", 1)
        entries.append((timestamp.strip("[]"), event_name, json.loads(payload)))
    return entries
