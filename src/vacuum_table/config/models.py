"""Pydantic model for the backup configuration file."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BackupConfig(BaseModel):
    """Backup configuration from the JSON config file.

    Example config file::

        {
          "token": "keyXXXXXXXXXXXXXX",
          "app-tables": {
            "appXXXXXXXXXXXXXX": ["tblXXXXXXXXXXXXXX", "tblYYYYYYYYYYYYYY"]
          }
        }

    Table ids must be unique across the whole file: the backup is keyed by
    table id, so the same table under two apps would overwrite itself.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    token: str
    app_tables: dict[str, list[str]] = Field(alias="app-tables")

    @model_validator(mode="after")
    def _check_unique_tables(self) -> "BackupConfig":
        seen: dict[str, str] = {}
        for app, tables in self.app_tables.items():
            for table in tables:
                if table in seen:
                    raise ValueError(
                        f"table {table!r} listed twice (apps {seen[table]!r} and {app!r})"
                    )
                seen[table] = app
        return self

    def table_config(self) -> dict[str, dict[str, list[str]]]:
        """Return the credential-free table configuration stored in backups."""
        return {"app-tables": {app: list(tables) for app, tables in self.app_tables.items()}}
