"""Backup file writing, reading, and the end-to-end backup pipeline.

Backups are stored as indented JSON files:

    {
      "config": {"app-tables": {"app...": ["tbl...", ...]}},
      "tables": {"tbl...": [{"id": ..., "createdTime": ..., "fields": {...}}]},
      "attachments": [{"link": ..., "id": "att...", "size": 123}]
    }

The attachment files themselves live in a separate download directory,
one file per attachment id (see ``vacuum_table.backup.downloader``).

Usage:
    from vacuum_table.backup.snapshot import backup_bases, validate_backup

    # Full run: list tables, write backup file, download attachments
    summary = await backup_bases("config.json", "backup.json", "attachments/")

    # Offline check of an existing backup + attachment store
    report = validate_backup("backup.json", "attachments/")
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from vacuum_table.backup.downloader import (
    DownloadSummary,
    attachment_path,
    download_attachments,
)
from vacuum_table.backup.extract import extract_all_tables
from vacuum_table.backup.models import Backup
from vacuum_table.config.loader import load_backup_config
from vacuum_table.factory import create_http_client
from vacuum_table.schema.attachments import extract_attachments

logger = logging.getLogger(__name__)


def save_backup(backup: Backup, output_path: str | Path) -> None:
    """Write *backup* to *output_path* as indented JSON.

    The file is written in place.  If encoding, writing, or closing fails,
    the partially written file is removed before the error propagates, so a
    failed save leaves nothing at *output_path*.  If the file cannot be
    opened, nothing has been written and any existing file is left alone.

    Args:
        backup: Snapshot to write.
        output_path: Destination file.  Its directory must already exist.
    """
    output_path = Path(output_path)
    data = backup.model_dump(mode="json", by_alias=True)

    f = open(output_path, "w", encoding="utf-8")
    try:
        with f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
    except BaseException:
        output_path.unlink(missing_ok=True)
        raise


def load_backup(backup_path: str | Path) -> Backup:
    """Read a backup file written by ``save_backup``.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the content is not a valid backup.
    """
    with open(backup_path, "rb") as f:
        return Backup.model_validate_json(f.read())


def validate_backup(backup_path: str | Path, download_dir: str | Path) -> dict[str, Any]:
    """Validate a backup file against its attachment store.

    Checks that the backup file parses, that every attachment listed is
    present in *download_dir* with its declared size, and reports leftover
    temporary download files.

    This function is **sync** -- it only reads local files.

    Args:
        backup_path: Path to backup JSON file.
        download_dir: Directory holding downloaded attachments.

    Returns:
        Dict with ``valid`` (bool), ``errors`` (list[str]),
        and ``warnings`` (list[str]).
    """
    errors: list[str] = []
    warnings: list[str] = []

    try:
        backup = load_backup(backup_path)
    except FileNotFoundError:
        errors.append(f"Backup file not found: {backup_path}")
        return {"valid": False, "errors": errors, "warnings": warnings}
    except ValidationError as e:
        errors.append(f"Invalid backup file: {e}")
        return {"valid": False, "errors": errors, "warnings": warnings}
    except OSError as e:
        errors.append(f"Cannot read backup file {backup_path}: {e}")
        return {"valid": False, "errors": errors, "warnings": warnings}

    download_dir = Path(download_dir)
    if not download_dir.is_dir():
        errors.append(f"Download directory not found: {download_dir}")
        return {"valid": False, "errors": errors, "warnings": warnings}

    configured = {
        table
        for tables in backup.config.get("app-tables", {}).values()
        for table in tables
    }
    for table in configured - backup.tables.keys():
        errors.append(f"Configured table missing from backup: {table}")

    checked: set[str] = set()
    for attachment in backup.attachments:
        if attachment.id in checked:
            continue
        checked.add(attachment.id)
        try:
            path = attachment_path(download_dir, attachment)
        except ValueError as e:
            errors.append(str(e))
            continue
        try:
            size = path.stat().st_size
        except FileNotFoundError:
            errors.append(f"Missing attachment {attachment.id} ({attachment.link})")
            continue
        if size != attachment.size:
            errors.append(
                f"Attachment {attachment.id} has {size} bytes, expected {attachment.size}"
            )

    for leftover in sorted(download_dir.glob("TEMP.*")):
        warnings.append(f"Leftover temporary file: {leftover.name}")

    return {"valid": not errors, "errors": errors, "warnings": warnings}


async def backup_bases(
    config_path: str | Path,
    output_path: str | Path,
    download_dir: str | Path,
    **client_kwargs,
) -> DownloadSummary:
    """Run a full backup.

    Steps, each of which must succeed before the next starts:

    1. Load the config and list every configured table concurrently.
    2. Extract attachment references from the records.
    3. Write the backup file.
    4. Download missing attachments into *download_dir*.

    Args:
        config_path: Path to the JSON config file.
        output_path: Backup file to write.
        download_dir: Existing attachment store directory.
        **client_kwargs: Passed to ``create_http_client`` (e.g. ``transport``).

    Returns:
        DownloadSummary for the attachment stage.
    """
    config = load_backup_config(config_path)

    async with create_http_client(**client_kwargs) as client:
        tables = await extract_all_tables(config, client)
        backup = Backup(
            config=config.table_config(),
            tables=tables,
            attachments=extract_attachments(tables),
        )
        save_backup(backup, output_path)
        logger.info(
            "Wrote backup of %d tables (%d records, %d attachments) to %s",
            len(tables),
            sum(len(records) for records in tables.values()),
            len(backup.attachments),
            output_path,
        )
        return await download_attachments(backup.attachments, download_dir, client)
