"""Configuration management: JSON loading and config models.

Usage:
    >>> from vacuum_table.config import load_backup_config, BackupConfig
"""

from vacuum_table.config.loader import load_backup_config
from vacuum_table.config.models import BackupConfig

__all__ = ["load_backup_config", "BackupConfig"]
