"""vacuum-table: Point-in-time backup of Airtable bases.

Lists every configured table concurrently, writes a self-contained JSON
snapshot, and downloads record attachments into a deduplicated,
resumable file store.

Usage:
    from vacuum_table import backup_bases, load_backup_config
    from vacuum_table import extract_all_tables, extract_attachments
    from vacuum_table import save_backup, download_attachments
"""

__version__ = "0.1.0"

# Adapters
from vacuum_table.adapters.airtable import AirtableAdapter
from vacuum_table.adapters.base import RecordClient

# Config
from vacuum_table.config.loader import load_backup_config
from vacuum_table.config.models import BackupConfig

# Errors
from vacuum_table.errors import (
    AttachmentIntegrityError,
    AttachmentShapeError,
    ConfigError,
    EnvelopeDecodeError,
    ExtractionError,
    InvalidIdentifierError,
    RemoteStatusError,
    TransportError,
    VacuumTableError,
)

# Factory
from vacuum_table.factory import create_http_client, get_adapter

# Schema
from vacuum_table.schema.attachments import extract_attachments
from vacuum_table.schema.identifiers import is_airtable_id
from vacuum_table.schema.models import Attachment, ListRecordsReply, Record

# Backup
from vacuum_table.backup.downloader import download_attachments
from vacuum_table.backup.extract import extract_all_tables
from vacuum_table.backup.models import Backup
from vacuum_table.backup.snapshot import backup_bases, save_backup, validate_backup

__all__ = [
    # Adapters
    "RecordClient",
    "AirtableAdapter",
    # Config
    "load_backup_config",
    "BackupConfig",
    # Errors
    "VacuumTableError",
    "InvalidIdentifierError",
    "ConfigError",
    "TransportError",
    "RemoteStatusError",
    "EnvelopeDecodeError",
    "AttachmentShapeError",
    "AttachmentIntegrityError",
    "ExtractionError",
    # Factory
    "create_http_client",
    "get_adapter",
    # Schema
    "Record",
    "ListRecordsReply",
    "Attachment",
    "is_airtable_id",
    "extract_attachments",
    # Backup
    "Backup",
    "extract_all_tables",
    "save_backup",
    "download_attachments",
    "backup_bases",
    "validate_backup",
]
