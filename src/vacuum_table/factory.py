"""Adapter and HTTP client factory.

Builds the shared ``httpx.AsyncClient`` and one ``AirtableAdapter`` per
configured app.  Kept separate from the extraction coordinator so tests can
substitute their own adapter factory.
"""

import httpx

from vacuum_table import __version__
from vacuum_table.adapters.airtable import API_ROOT, AirtableAdapter
from vacuum_table.adapters.base import RecordClient
from vacuum_table.config.models import BackupConfig

USER_AGENT = f"vacuum-table/{__version__}"


def create_http_client(**kwargs) -> httpx.AsyncClient:
    """Create the HTTP client shared by listing and downloads.

    No request timeout is imposed and redirects are followed (attachment
    URLs may redirect to a CDN).  Extra keyword arguments are passed to
    ``httpx.AsyncClient`` (tests use ``transport=``).
    """
    kwargs.setdefault("timeout", None)
    kwargs.setdefault("follow_redirects", True)
    kwargs.setdefault("headers", {"User-Agent": USER_AGENT})
    return httpx.AsyncClient(**kwargs)


def get_adapter(
    app: str,
    config: BackupConfig,
    client: httpx.AsyncClient,
    api_root: str = API_ROOT,
) -> RecordClient:
    """Return a record adapter bound to *app*.

    Args:
        app: App identifier from ``config.app_tables``.
        config: Backup configuration (supplies the token).
        client: Shared HTTP client.
        api_root: Service root URL.

    Returns:
        ``AirtableAdapter`` for the app.
    """
    return AirtableAdapter(app, config.token, client, api_root=api_root)
