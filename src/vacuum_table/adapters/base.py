"""Record client protocol definition.

Defines the ``RecordClient`` Protocol that record sources must implement.
All methods are ``async def`` -- listing is network-bound and several apps
are listed concurrently.

Usage:
    from vacuum_table.adapters.base import RecordClient

    async def count(client: RecordClient, table: str) -> int:
        return len(await client.list_records_all(table))
"""

from typing import Protocol

from vacuum_table.schema.models import ListRecordsReply, Record


class RecordClient(Protocol):
    """Paginated record listing for a single app.

    One client is bound to one app (one authentication scope); the table is
    passed per call.
    """

    app: str

    async def list_records_page(self, table: str, offset: str = "") -> ListRecordsReply:
        """Fetch one page of records.

        Args:
            table: Table identifier.
            offset: Continuation token from the previous page, or ``""``
                for the first page.

        Returns:
            The page.  ``reply.offset == ""`` marks the last page.

        Raises:
            InvalidIdentifierError: If the token, app, or table is malformed
                (raised before any request is made).
            RemoteStatusError: If the remote answers with a non-200 status.
            EnvelopeDecodeError: If the reply has an unexpected shape.
        """
        ...

    async def list_records_all(self, table: str) -> list[Record]:
        """Fetch every record in a table by following continuation offsets.

        Any error propagates unchanged and no partial result is returned.
        """
        ...
