"""Table extraction, backup files, and the attachment store.

Usage:
    from vacuum_table.backup import Backup, backup_bases, validate_backup
    from vacuum_table.backup import extract_all_tables, download_attachments
"""

from vacuum_table.backup.downloader import (
    DownloadOutcome,
    DownloadSummary,
    download_attachment,
    download_attachments,
)
from vacuum_table.backup.extract import extract_all_tables
from vacuum_table.backup.models import Backup
from vacuum_table.backup.snapshot import (
    backup_bases,
    load_backup,
    save_backup,
    validate_backup,
)

__all__ = [
    "Backup",
    "DownloadOutcome",
    "DownloadSummary",
    "backup_bases",
    "download_attachment",
    "download_attachments",
    "extract_all_tables",
    "load_backup",
    "save_backup",
    "validate_backup",
]
