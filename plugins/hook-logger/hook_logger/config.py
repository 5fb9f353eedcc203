"""
Configuration loader for hook-logger.

Configuration Priority
======================

Highest to lowest priority:
1. Explicit config file passed to load_config()
2. ~/.openclaw/plugins/hook-logger/hook-logger.yaml (global)
3. Built-in defaults

Example hook-logger.yaml:

    enabled: true
    log_dir: ~/.openclaw/workspace/logs/hook-logger
    retention_days: 3

Log files themselves live under the workspace, not next to the config, so
clearing the logs never touches user settings.
"""

from pathlib import Path
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)

PLUGIN_ID = 'hook-logger'
LOG_SUFFIX = '.log'
DEFAULT_RETENTION_DAYS = 3


class LogConfig:
    """Where hook-logger writes and how long it keeps files."""

    def __init__(self, log_dir: Path, retention_days: float = DEFAULT_RETENTION_DAYS,
                 enabled: bool = True):
        self.log_dir = Path(log_dir)
        self.retention_days = retention_days
        self.enabled = enabled

    @property
    def retention_seconds(self) -> float:
        return self.retention_days * 24 * 60 * 60

    def log_file_for(self, date: str) -> Path:
        """Path of the log file for a YYYY-MM-DD date string."""
        return self.log_dir / f'{date}{LOG_SUFFIX}'

    def __repr__(self) -> str:
        return (f'LogConfig(log_dir={str(self.log_dir)!r}, '
                f'retention_days={self.retention_days!r}, enabled={self.enabled!r})')


def default_log_dir(home: Optional[Path] = None) -> Path:
    home = home or Path.home()
    return home / '.openclaw' / 'workspace' / 'logs' / PLUGIN_ID


def default_config_path(home: Optional[Path] = None) -> Path:
    home = home or Path.home()
    return home / '.openclaw' / 'plugins' / PLUGIN_ID / f'{PLUGIN_ID}.yaml'


def load_yaml_file(yaml_path: Path) -> Optional[Dict]:
    """Load YAML configuration from a .yaml file."""
    if not yaml_path.exists():
        return None

    try:
        import yaml
        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f.read()) or {}
    except (OSError, ImportError) as e:
        logger.warning(f"Failed to read config file {yaml_path}: {e}")
        return None
    except Exception as e:
        # yaml.YAMLError and friends
        logger.warning(f"Failed to parse YAML file {yaml_path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Ignoring {yaml_path}: expected a mapping, got {type(data).__name__}")
        return None
    return data


def get_default_config(home: Optional[Path] = None) -> Dict:
    """Return default configuration structure."""
    return {
        'enabled': True,
        'log_dir': str(default_log_dir(home)),
        'retention_days': DEFAULT_RETENTION_DAYS,
    }


def _retention_days(config: Dict) -> float:
    value = config.get('retention_days', DEFAULT_RETENTION_DAYS)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        logger.warning(
            f"Invalid retention_days {value!r}, using {DEFAULT_RETENTION_DAYS}"
        )
        return DEFAULT_RETENTION_DAYS
    return value


def _log_dir(config: Dict, home: Optional[Path]) -> Path:
    # Never fall back to the working directory: pruning deletes *.log there
    value = config.get('log_dir')
    if not isinstance(value, str) or not value.strip():
        fallback = default_log_dir(home)
        logger.warning(f"Invalid log_dir {value!r}, using {fallback}")
        return fallback
    return Path(value.strip()).expanduser()


def _enabled(config: Dict) -> bool:
    value = config.get('enabled', True)
    if not isinstance(value, bool):
        logger.warning(f"Invalid enabled {value!r}, expected true or false; using true")
        return True
    return value


def load_config(config_path: Optional[Path] = None, home: Optional[Path] = None) -> LogConfig:
    """
    Load configuration: defaults first, then the YAML file on top.

    Args:
        config_path: Explicit YAML file; defaults to the global location
        home: Home directory override (tests)

    Returns:
        LogConfig built from the merged settings
    """
    config = get_default_config(home)

    path = Path(config_path) if config_path else default_config_path(home)
    file_config = load_yaml_file(path)
    if file_config:
        config.update(file_config)

    return LogConfig(
        log_dir=_log_dir(config, home),
        retention_days=_retention_days(config),
        enabled=_enabled(config),
    )
