"""Async Airtable record adapter.

Provides ``AirtableAdapter``, an implementation of the ``RecordClient``
protocol over the Airtable REST list-records endpoint using an
``httpx.AsyncClient``.

Every identifier is checked before a URL is built from it, and replies are
decoded strictly: unknown keys in the envelope or in a record are errors.

Usage:
    from vacuum_table.adapters.airtable import AirtableAdapter

    async with httpx.AsyncClient() as http:
        adapter = AirtableAdapter("appXXXXXXXXXXXXXX", "keyXXXXXXXXXXXXXX", http)
        records = await adapter.list_records_all("tblXXXXXXXXXXXXXX")
"""

import httpx
from pydantic import ValidationError

from vacuum_table.errors import (
    EnvelopeDecodeError,
    InvalidIdentifierError,
    RemoteStatusError,
    TransportError,
)
from vacuum_table.schema.identifiers import is_airtable_id, is_valid_token
from vacuum_table.schema.models import ListRecordsReply, Record

API_ROOT = "https://api.airtable.com/v0"


class AirtableAdapter:
    """Airtable implementation of the ``RecordClient`` protocol.

    The HTTP client is owned by the caller and may be shared between
    adapters for different apps.

    Args:
        app: App (base) identifier.
        token: API key or personal access token.
        client: Shared ``httpx.AsyncClient``.
        api_root: Service root URL, without trailing slash.
    """

    def __init__(
        self,
        app: str,
        token: str,
        client: httpx.AsyncClient,
        api_root: str = API_ROOT,
    ) -> None:
        self.app: str = app
        self._token: str = token
        self._client: httpx.AsyncClient = client
        self._api_root: str = api_root

    def _check_identifiers(self, table: str) -> None:
        if not is_valid_token(self._token):
            raise InvalidIdentifierError("invalid API key")
        if not is_airtable_id(self.app):
            raise InvalidIdentifierError(f"not a valid app ID: {self.app!r}")
        if not is_airtable_id(table):
            raise InvalidIdentifierError(f"not a valid table ID: {table!r}")

    async def list_records_page(self, table: str, offset: str = "") -> ListRecordsReply:
        """Fetch one page of records with a single GET request."""
        self._check_identifiers(table)

        url = f"{self._api_root}/{self.app}/{table}"
        params = {"offset": offset} if offset else None
        headers = {"Authorization": f"Bearer {self._token}"}

        try:
            response = await self._client.get(url, params=params, headers=headers)
        except httpx.HTTPError as e:
            raise TransportError(url, e) from e

        if response.status_code != 200:
            raise RemoteStatusError(url, response.status_code, response.reason_phrase)

        try:
            return ListRecordsReply.model_validate_json(response.content)
        except ValidationError as e:
            raise EnvelopeDecodeError(
                f"unexpected list-records reply for app {self.app} table {table}: {e}"
            ) from e

    async def list_records_all(self, table: str) -> list[Record]:
        """Fetch every record in a table, page by page."""
        records: list[Record] = []
        offset = ""
        while True:
            reply = await self.list_records_page(table, offset)
            records.extend(reply.records)
            if not reply.offset:
                return records
            offset = reply.offset
