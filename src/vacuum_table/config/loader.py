"""Backup configuration loading."""

import json
from pathlib import Path

from pydantic import ValidationError

from vacuum_table.config.models import BackupConfig
from vacuum_table.errors import ConfigError


def load_backup_config(config_path: str | Path) -> BackupConfig:
    """Load backup configuration from a JSON file.

    Args:
        config_path: Path to the config JSON file.

    Returns:
        Validated BackupConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigError: If the file is not valid JSON, has unknown top-level
            fields, or lists a table twice
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Backup config not found: {config_path}")

    with open(config_path, "rb") as f:
        raw = f.read()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    try:
        return BackupConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e
