"""
hook-logger plugin descriptor.

The host calls register(api) once at load time; every lifecycle event is then
written to ~/.openclaw/workspace/logs/hook-logger/<YYYY-MM-DD>.log.
"""

import logging
from typing import Optional

from .config import PLUGIN_ID, LogConfig, load_config
from .event_logger import EventLogger
from .handlers import register_handlers

logger = logging.getLogger(__name__)


class HookLoggerPlugin:
    """Log all hook stages for debugging."""

    id = PLUGIN_ID
    name = PLUGIN_ID
    description = "Log all hook stages for debugging"

    def __init__(self, config: Optional[LogConfig] = None):
        self._config = config
        self.event_logger = None

    @property
    def config(self) -> LogConfig:
        # Resolved on first use so importing the package never touches the disk
        if self._config is None:
            self._config = load_config()
        return self._config

    def register(self, api) -> None:
        self.event_logger = EventLogger(self.config)
        if not self.config.enabled:
            logger.info("hook-logger disabled by config; events pass through unlogged")
        register_handlers(api, self.event_logger, enabled=self.config.enabled)


plugin = HookLoggerPlugin()
