"""Exception hierarchy for vacuum-table.

Every failure in the pipeline is raised as a ``VacuumTableError`` subclass
(or a plain ``OSError`` from the filesystem) so the CLI has a single
failure-handling path.

Taxonomy:
- Shape errors (``InvalidIdentifierError``, ``ConfigError``): raised before
  any network call.
- Transport errors (``TransportError``, ``RemoteStatusError``): never retried.
- Decode errors (``EnvelopeDecodeError``, ``AttachmentShapeError``): the
  remote no longer matches what the backup format assumes.
- Integrity errors (``AttachmentIntegrityError``): never auto-corrected.
- ``ExtractionError``: aggregate of per-app failures from the coordinator.
"""


class VacuumTableError(Exception):
    """Base class for all vacuum-table errors."""

    pass


class InvalidIdentifierError(VacuumTableError, ValueError):
    """Raised when a token, app id, or table id is malformed."""

    pass


class ConfigError(VacuumTableError, ValueError):
    """Raised when the backup configuration cannot be parsed or validated."""

    pass


class TransportError(VacuumTableError):
    """Raised when an HTTP request fails before a response is received."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"request to {url} failed: {cause}")


class RemoteStatusError(VacuumTableError):
    """Raised when the remote answers with a non-200 status."""

    def __init__(self, url: str, status_code: int, reason: str) -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        super().__init__(
            f"status code was not 200, but rather {status_code} {reason!r} ({url})"
        )


class EnvelopeDecodeError(VacuumTableError, ValueError):
    """Raised when a list-records reply does not match the expected envelope."""

    pass


class AttachmentShapeError(VacuumTableError, ValueError):
    """Raised when an attachment-like value fails shape validation.

    Attributes:
        table: Table the record belongs to.
        record_id: Identifier of the offending record.
        field: Field name holding the attachment list.
        reason: Which expectation failed.
    """

    def __init__(self, table: str, record_id: str, field: str, reason: str) -> None:
        self.table = table
        self.record_id = record_id
        self.field = field
        self.reason = reason
        super().__init__(
            f"unexpected attachment in table {table} record {record_id} "
            f"field {field!r}: {reason}"
        )


class AttachmentIntegrityError(VacuumTableError):
    """Raised when attachment bytes on disk or on the wire have the wrong size."""

    pass


class ExtractionError(VacuumTableError):
    """Aggregate of every failure seen while listing tables.

    Attributes:
        errors: One exception per failed app, in configuration order.
    """

    def __init__(self, errors: list[Exception]) -> None:
        self.errors = list(errors)
        if len(self.errors) == 1:
            message = f"1 error occurred: {self.errors[0]}"
        else:
            details = "; ".join(str(e) for e in self.errors)
            message = f"{len(self.errors)} errors occurred: {details}"
        super().__init__(message)
