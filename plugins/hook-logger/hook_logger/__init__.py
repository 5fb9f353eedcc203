"""Diagnostic plugin that logs every host lifecycle event to dated files."""

from .config import LogConfig, load_config
from .event_logger import EventLogger
from .handlers import HOOK_EVENTS
from .descriptor import HookLoggerPlugin, plugin
from .retention import RetentionManager

__all__ = [
    'EventLogger',
    'HOOK_EVENTS',
    'HookLoggerPlugin',
    'LogConfig',
    'RetentionManager',
    'load_config',
    'plugin',
]
