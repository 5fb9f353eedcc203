"""
Append one line per hook event to the day's log file.

Line format:
    [2026-10-19T08:15:02.113Z] llm_input | {"model":"gpt-4o","provider":"openai"}
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .config import LogConfig
from .retention import RetentionManager


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


JSON_KEY_TYPES = (str, int, float, bool)


def _stringify_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key if key is None or isinstance(key, JSON_KEY_TYPES) else str(key): _stringify_keys(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_stringify_keys(item) for item in value]
    return value


def encode_summary(summary: Any) -> str:
    """Compact JSON; anything json can't encode is rendered with str()."""
    return json.dumps(_stringify_keys(summary), separators=(',', ':'),
                      ensure_ascii=False, default=str)


class EventLogger:
    """Writes event summaries to <log_dir>/<YYYY-MM-DD>.log."""

    def __init__(self, config: LogConfig, clock: Optional[Callable[[], datetime]] = None,
                 retention: Optional[RetentionManager] = None):
        self.config = config
        self.clock = clock or utc_now
        self.retention = retention or RetentionManager(config)

    def log_file_path(self, timestamp: str) -> Path:
        return self.config.log_file_for(timestamp.split('T')[0])

    def write_log_entry(self, event_name: str, summary: Dict[str, Any]) -> None:
        print(f"[hook-logger] Logging: {event_name}")
        self.retention.ensure_log_directory()
        self.retention.prune_old_logs()

        timestamp = iso_timestamp(self.clock())
        entry = f"[{timestamp}] {event_name} | {encode_summary(summary)}"

        log_file = self.log_file_path(timestamp)
        print(f"[hook-logger] Writing to: {log_file}")
        with log_file.open('a', encoding='utf-8') as f:
            f.write(entry + '\n')
