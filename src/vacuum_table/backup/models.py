"""Backup snapshot model.

A backup is written once and never modified.  It holds the table
configuration that produced it, every record listed, and every attachment
found inside those records.

Usage:
    from vacuum_table.backup.models import Backup

    backup = Backup(
        config={"app-tables": {"appXXXXXXXXXXXXXX": ["tblXXXXXXXXXXXXXX"]}},
        tables={"tblXXXXXXXXXXXXXX": records},
        attachments=extract_attachments(tables),
    )
"""

from pydantic import BaseModel, Field

from vacuum_table.schema.models import Attachment, Record


class Backup(BaseModel):
    """Top-level snapshot written to the backup file."""

    config: dict[str, dict[str, list[str]]]          # {"app-tables": {app: [table, ...]}}
    tables: dict[str, list[Record]] = Field(default_factory=dict)
    attachments: list[Attachment] = Field(default_factory=list)
