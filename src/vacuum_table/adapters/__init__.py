"""Record source adapters package.

Provides the ``RecordClient`` Protocol and the async Airtable adapter.

Usage:
    from vacuum_table.adapters import RecordClient, AirtableAdapter
"""

from vacuum_table.adapters.airtable import API_ROOT, AirtableAdapter
from vacuum_table.adapters.base import RecordClient

__all__ = [
    "RecordClient",
    "AirtableAdapter",
    "API_ROOT",
]
