"""Attachment download into a flat, deduplicated file store.

Every attachment is stored as ``<download_dir>/<attachment id>``.  Presence
of that file with exactly the declared size means "already backed up", so a
second run over the same attachment list makes no requests at all.

Downloads stream into ``TEMP.<id>`` next to the final path and are renamed
into place only after the byte count has been verified, so an interrupted
run never leaves a truncated file under a final name.  An existing file with
the wrong size is never overwritten: it may be corrupt, truncated by an
external tool, or belong to a different attachment with a colliding id.

Usage:
    from vacuum_table.backup.downloader import download_attachments

    async with create_http_client() as http:
        summary = await download_attachments(backup.attachments, "dl", http)
"""

import enum
import logging
import os
from collections.abc import Iterable
from pathlib import Path

import httpx
from pydantic import BaseModel

from vacuum_table.errors import (
    AttachmentIntegrityError,
    InvalidIdentifierError,
    RemoteStatusError,
    TransportError,
)
from vacuum_table.schema.identifiers import is_airtable_id
from vacuum_table.schema.models import Attachment

logger = logging.getLogger(__name__)

TEMP_PREFIX = "TEMP."


class DownloadOutcome(enum.Enum):
    """Terminal state of one attachment.  Failures are raised, not returned."""

    DOWNLOADED = "downloaded"
    ALREADY_PRESENT = "already_present"


class DownloadSummary(BaseModel):
    """Counts of download outcomes for one run."""

    downloaded: int = 0
    already_present: int = 0
    bytes_downloaded: int = 0

    @property
    def total(self) -> int:
        return self.downloaded + self.already_present


def attachment_path(download_dir: Path, attachment: Attachment) -> Path:
    """Return the final on-disk path for *attachment*.

    Raises:
        InvalidIdentifierError: If the id is not a plain identifier.
    """
    if not is_airtable_id(attachment.id):
        raise InvalidIdentifierError(f"not a valid attachment ID: {attachment.id!r}")
    return download_dir / attachment.id


async def download_attachment(
    attachment: Attachment,
    download_dir: Path,
    client: httpx.AsyncClient,
) -> int:
    """Download one attachment to its final path via a temporary file.

    Args:
        attachment: Attachment to fetch.
        download_dir: Existing store directory.
        client: HTTP client.

    Returns:
        Number of bytes written.

    Raises:
        TransportError: If the request fails, or the link is not a
            usable URL.
        RemoteStatusError: If the response status is not 200.
        AttachmentIntegrityError: If the body size differs from
            ``attachment.size``.
    """
    output_path = attachment_path(download_dir, attachment)
    temp_path = download_dir / f"{TEMP_PREFIX}{attachment.id}"

    try:
        try:
            async with client.stream("GET", attachment.link) as response:
                if response.status_code != 200:
                    raise RemoteStatusError(
                        attachment.link, response.status_code, response.reason_phrase
                    )
                size = 0
                with open(temp_path, "wb") as output:
                    async for chunk in response.aiter_bytes():
                        output.write(chunk)
                        size += len(chunk)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(attachment.link, e) from e

        if size != attachment.size:
            raise AttachmentIntegrityError(
                f"mismatch on download for {attachment.link!r}: received {size} "
                f"bytes but expected attachment to have {attachment.size}"
            )
        os.replace(temp_path, output_path)
    finally:
        temp_path.unlink(missing_ok=True)

    return size


async def download_attachments(
    attachments: Iterable[Attachment],
    download_dir: str | Path,
    client: httpx.AsyncClient,
) -> DownloadSummary:
    """Download every attachment that is not already in the store.

    Attachments are processed in ascending id order, one at a time.  The
    first failure aborts the run; later attachments are not attempted.

    Args:
        attachments: Attachments to back up (duplicates are fine).
        download_dir: Existing directory holding the store.
        client: HTTP client.

    Returns:
        DownloadSummary with per-outcome counts.

    Raises:
        FileNotFoundError: If *download_dir* does not exist.
        NotADirectoryError: If *download_dir* is not a directory.
        AttachmentIntegrityError: If a stored file has the wrong size, or a
            download returns the wrong number of bytes.
        OSError: If a stored file cannot be inspected.
    """
    download_dir = Path(download_dir)
    if not download_dir.exists():
        raise FileNotFoundError(f"download directory does not exist: {download_dir}")
    if not download_dir.is_dir():
        raise NotADirectoryError(f"download directory is not a directory: {download_dir}")

    ordered = sorted(attachments, key=lambda a: a.id)
    summary = DownloadSummary()

    for index, attachment in enumerate(ordered, start=1):
        outcome = await _ensure_attachment(attachment, download_dir, client)
        if outcome is DownloadOutcome.ALREADY_PRESENT:
            summary.already_present += 1
            continue

        summary.downloaded += 1
        summary.bytes_downloaded += attachment.size
        logger.info(
            "%d/%d: Downloaded %r to %r (%d bytes)",
            index,
            len(ordered),
            attachment.link,
            attachment.id,
            attachment.size,
        )

    return summary


async def _ensure_attachment(
    attachment: Attachment,
    download_dir: Path,
    client: httpx.AsyncClient,
) -> DownloadOutcome:
    """Skip a verified stored file, or download a missing one."""
    output_path = attachment_path(download_dir, attachment)
    try:
        stored_size = output_path.stat().st_size
    except FileNotFoundError:
        await download_attachment(attachment, download_dir, client)
        return DownloadOutcome.DOWNLOADED

    if stored_size != attachment.size:
        raise AttachmentIntegrityError(
            f"invalid size for already-downloaded attachment {attachment.link!r}: "
            f"{stored_size} instead of {attachment.size}"
        )
    return DownloadOutcome.ALREADY_PRESENT
