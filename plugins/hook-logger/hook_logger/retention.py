"""
Log directory upkeep: create it on demand, drop files past the retention window.

Error policy:
  ensure_log_directory  - propagate (a log that can never be written should fail loudly)
  prune_old_logs        - swallow, per file (log hygiene must never break the host)
"""

import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

from .config import LOG_SUFFIX, LogConfig

logger = logging.getLogger(__name__)


@contextmanager
def best_effort(action: str, path: Path):
    """Swallow filesystem errors for one prune step."""
    try:
        yield
    except OSError as e:
        logger.debug(f"hook-logger: failed to {action} {path}: {e}")


class RetentionManager:
    """Keeps the log directory present and bounded to the retention window."""

    def __init__(self, config: LogConfig):
        self.config = config

    @property
    def log_dir(self) -> Path:
        return self.config.log_dir

    def ensure_log_directory(self) -> None:
        if not self.log_dir.exists():
            self.log_dir.mkdir(parents=True, exist_ok=True)

    def prune_old_logs(self, now: Optional[float] = None) -> List[Path]:
        """Delete *.log files whose mtime is older than the retention window.

        Returns the paths that were removed.
        """
        removed = []
        if not self.log_dir.exists():
            return removed

        now = time.time() if now is None else now
        cutoff = now - self.config.retention_seconds

        entries = []
        with best_effort('list', self.log_dir):
            entries = list(self.log_dir.iterdir())

        for entry in entries:
            if not entry.name.endswith(LOG_SUFFIX):
                continue
            with best_effort('prune', entry):
                if entry.stat().st_mtime < cutoff:
                    entry.unlink()
                    removed.append(entry)

        if removed:
            logger.debug(f"hook-logger: pruned {len(removed)} old log file(s)")
        return removed
