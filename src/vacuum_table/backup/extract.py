"""Concurrent extraction of every configured table.

One asyncio task runs per app; within an app, tables are listed one after
another.  An app stops at its first failing table, but its siblings keep
going -- every task runs to completion before results are inspected.

The result is all-or-nothing: either every configured table is returned, or
``ExtractionError`` is raised with one underlying error per failed app.  A
partial map is never returned because downstream stages assume the backup is
complete.

Usage:
    from vacuum_table.backup.extract import extract_all_tables

    async with create_http_client() as http:
        tables = await extract_all_tables(config, http)
"""

import asyncio
import logging
import time
from collections.abc import Callable

import httpx

from vacuum_table.adapters.base import RecordClient
from vacuum_table.config.models import BackupConfig
from vacuum_table.errors import ExtractionError
from vacuum_table.factory import get_adapter
from vacuum_table.schema.models import Record

logger = logging.getLogger(__name__)

AdapterFactory = Callable[[str, BackupConfig, httpx.AsyncClient], RecordClient]


async def _extract_app(adapter: RecordClient, tables: list[str]) -> dict[str, list[Record]]:
    """List every table of one app, in order, stopping at the first error.

    Returns a mapping owned by this worker only; the coordinator merges the
    per-app mappings after all workers have finished.
    """
    output: dict[str, list[Record]] = {}
    for table in tables:
        start = time.monotonic()
        records = await adapter.list_records_all(table)
        logger.info(
            "App %s -> Table %s: Listed %d records in %.3f seconds.",
            adapter.app,
            table,
            len(records),
            time.monotonic() - start,
        )
        output[table] = records
    return output


async def extract_all_tables(
    config: BackupConfig,
    client: httpx.AsyncClient,
    adapter_factory: AdapterFactory = get_adapter,
) -> dict[str, list[Record]]:
    """List every configured table across all apps concurrently.

    Args:
        config: Backup configuration with ``app_tables``.
        client: Shared HTTP client passed to each adapter.
        adapter_factory: Builds the per-app ``RecordClient``.

    Returns:
        Mapping of table id to all of its records.

    Raises:
        ExtractionError: If any app failed.  ``errors`` holds the first
            error of every failed app; results of successful apps are
            discarded.
    """
    apps = list(config.app_tables.items())
    results = await asyncio.gather(
        *(
            _extract_app(adapter_factory(app, config, client), tables)
            for app, tables in apps
        ),
        return_exceptions=True,
    )

    errors: list[Exception] = []
    output: dict[str, list[Record]] = {}
    for result in results:
        if isinstance(result, Exception):
            errors.append(result)
        elif isinstance(result, BaseException):
            raise result
        else:
            output.update(result)

    if errors:
        raise ExtractionError(errors)
    return output
