"""Record models, identifier checks, and attachment discovery.

Usage:
    from vacuum_table.schema import Record, ListRecordsReply, Attachment
    from vacuum_table.schema import is_airtable_id, extract_attachments
"""

from vacuum_table.schema.attachments import (
    ATTACHMENT_ID_PREFIX,
    ATTACHMENT_LINK_PREFIX,
    extract_attachments,
)
from vacuum_table.schema.identifiers import is_airtable_id, is_valid_token
from vacuum_table.schema.models import Attachment, ListRecordsReply, Record

__all__ = [
    "Attachment",
    "ListRecordsReply",
    "Record",
    "is_airtable_id",
    "is_valid_token",
    "extract_attachments",
    "ATTACHMENT_ID_PREFIX",
    "ATTACHMENT_LINK_PREFIX",
]
