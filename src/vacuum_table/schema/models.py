"""Pydantic models for the remote list-records protocol.

This module contains the record-level models:
- Record: one row of a table, with untyped ``fields``
- ListRecordsReply: one page of records plus the continuation offset
- Attachment: a file reference found inside a record

Record and ListRecordsReply reject unknown keys.  A new key appearing in
the remote reply means the backup format no longer captures everything the
service returns, and that should stop the run rather than be dropped.

The snapshot model (Backup) lives in vacuum_table.backup.models.
"""

from pydantic import BaseModel, ConfigDict, Field, JsonValue, NonNegativeInt


# ============================================================================
# Record Models
# ============================================================================


class Record(BaseModel):
    """One record from a table.

    ``fields`` values are arbitrary JSON: scalars, lists, or nested mappings.
    The schema of a table is not known in advance.

    Example:
        >>> record = Record.model_validate(
        ...     {"id": "recABCDEFGHIJKLMN", "createdTime": "2021-01-01T00:00:00.000Z",
        ...      "fields": {"Name": "Alice"}}
        ... )
        >>> record.created_time
        '2021-01-01T00:00:00.000Z'
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    created_time: str = Field(alias="createdTime")
    fields: dict[str, JsonValue] = Field(default_factory=dict)


class ListRecordsReply(BaseModel):
    """One page of a list-records reply.

    An empty ``offset`` marks the last page.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    records: list[Record] = Field(default_factory=list)
    offset: str = ""


# ============================================================================
# Attachment Model
# ============================================================================


class Attachment(BaseModel):
    """Reference to a binary blob embedded in a record field.

    Built by ``extract_attachments()``; ``id`` has already passed the
    identifier check and is safe to use as a filename.
    """

    model_config = ConfigDict(frozen=True)

    link: str                   # download URL
    id: str                     # attachment id, also the on-disk filename
    size: NonNegativeInt        # declared byte size
