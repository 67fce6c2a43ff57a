"""Attachment discovery inside record field values.

Pure logic -- no I/O.  Walks every record's fields looking for lists of
attachment descriptors (mappings with a ``url`` key) and validates each one.
A descriptor that does not match the expected shape is fatal: it means the
remote schema changed in a way the download stage cannot safely handle.

Usage:
    from vacuum_table.schema.attachments import extract_attachments

    attachments = extract_attachments(tables)
"""

from collections.abc import Mapping, Sequence

from pydantic import JsonValue

from vacuum_table.errors import AttachmentShapeError
from vacuum_table.schema.identifiers import is_airtable_id
from vacuum_table.schema.models import Attachment, Record

ATTACHMENT_LINK_PREFIX = "https://dl.airtable.com/.attachments/"
ATTACHMENT_ID_PREFIX = "att"


def extract_attachments(
    tables: Mapping[str, Sequence[Record]],
    link_prefix: str = ATTACHMENT_LINK_PREFIX,
) -> list[Attachment]:
    """Collect every attachment referenced by the given records.

    Only list-valued fields are inspected.  Within a list, every mapping
    element that has a ``url`` key is treated as an attachment descriptor;
    other elements (strings, numbers, linked record ids) are ignored.

    Args:
        tables: Mapping of table name to its records.
        link_prefix: Required prefix of every attachment URL.

    Returns:
        Attachments in discovery order.  Duplicates are kept -- the
        downloader deduplicates by id through the filesystem.

    Raises:
        AttachmentShapeError: If a descriptor has an unexpected URL, id,
            or size.

    Example:
        >>> record = Record(id="recABCDEFGHIJKLMN", createdTime="", fields={
        ...     "Files": [{"url": ATTACHMENT_LINK_PREFIX + "x",
        ...                "id": "attABCDEFGHIJKLMN", "size": 42.0}],
        ... })
        >>> extract_attachments({"tbl": [record]})[0].size
        42
    """
    attachments: list[Attachment] = []
    for table, records in tables.items():
        for record in records:
            for field, value in record.fields.items():
                if not isinstance(value, list):
                    continue
                for item in value:
                    if isinstance(item, dict) and "url" in item:
                        attachments.append(
                            _parse_descriptor(item, table, record.id, field, link_prefix)
                        )
    return attachments


def _parse_descriptor(
    item: dict[str, JsonValue],
    table: str,
    record_id: str,
    field: str,
    link_prefix: str,
) -> Attachment:
    """Validate one attachment descriptor and build an ``Attachment``."""

    def fail(reason: str) -> AttachmentShapeError:
        return AttachmentShapeError(table, record_id, field, reason)

    url = item["url"]
    if not isinstance(url, str) or not url.startswith(link_prefix):
        raise fail(f"url {url!r} does not start with {link_prefix!r}")

    attachment_id = item.get("id")
    if not isinstance(attachment_id, str) or not is_airtable_id(attachment_id):
        raise fail(f"invalid attachment id {attachment_id!r}")
    if not attachment_id.startswith(ATTACHMENT_ID_PREFIX):
        raise fail(
            f"attachment id {attachment_id!r} does not start with "
            f"{ATTACHMENT_ID_PREFIX!r}"
        )

    return Attachment(link=url, id=attachment_id, size=_parse_size(item.get("size"), fail))


def _parse_size(size: JsonValue, fail) -> int:
    """Return *size* as an int, rejecting fractional or negative byte counts."""
    # bool is an int subclass; True is not a byte count
    if isinstance(size, bool):
        raise fail(f"invalid size {size!r}")
    if isinstance(size, float):
        if not size.is_integer():
            raise fail(f"invalid size {size!r}")
        size = int(size)
    if not isinstance(size, int):
        raise fail(f"invalid size {size!r}")
    if size < 0:
        raise fail(f"negative size {size!r}")
    return size
