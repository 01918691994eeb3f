"""
Configuration and logging setup.

The config is a small YAML file, by default ``~/.sqlite-cloud-backup/config.yaml``::

    db_path: /data/app.db
    log_level: info
    transport:
      transport_type: local
      local_path: /mnt/nas/backups
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from . import BACKUP_HOME
from .errors import ConfigError
from .models import BackupConfig, LogLevel

logger = logging.getLogger("sqlite_cloud_backup.config")

CONFIG_FILE_NAME = "config.yaml"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def backup_home(home: Optional[Union[str, Path]] = None) -> Path:
    """Resolve the backup home directory (env var or ``~/.sqlite-cloud-backup``)."""
    return Path(home or BACKUP_HOME).expanduser()


def default_config_path(home: Optional[Union[str, Path]] = None) -> Path:
    return backup_home(home) / CONFIG_FILE_NAME


def load_config(path: Union[str, Path]) -> BackupConfig:
    """Load a backup configuration from YAML.

    Args:
        path: Config file to read.

    Returns:
        Validated BackupConfig.

    Raises:
        ConfigError: If the file is missing, not YAML, or fails validation.
    """
    config_file = Path(path).expanduser()
    if not config_file.exists():
        raise ConfigError(f"Config file not found: {config_file}")
    try:
        data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
        return BackupConfig(**data)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_file}: {exc}") from exc
    except (TypeError, ValidationError) as exc:
        raise ConfigError(f"Invalid config {config_file}: {exc}") from exc


def save_config(config: BackupConfig, path: Union[str, Path]) -> Path:
    """Persist a configuration as YAML, creating parent directories.

    Returns:
        The path written.
    """
    config_file = Path(path).expanduser()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    config_file.write_text(
        yaml.dump(data, default_flow_style=False), encoding="utf-8"
    )
    logger.info("Saved config: %s", config_file)
    return config_file


def log_level_value(level: LogLevel) -> int:
    return _LEVELS[LogLevel(level)]


def configure_logging(level: LogLevel = LogLevel.INFO) -> None:
    """Configure root logging for command-line use and set the package level."""
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    logging.getLogger("sqlite_cloud_backup").setLevel(log_level_value(level))
