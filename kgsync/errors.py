"""Exception hierarchy for the synchronization layer."""


class SyncError(Exception):
    """Base class for all kgsync errors."""


class TransportFailure(SyncError):
    """A request failed at the network level or returned a non-success reply.

    Args:
        message: Human-readable description, suitable for display.
        status_code: HTTP status of the reply, or None for transport errors.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PartialEnumerationFailure(TransportFailure):
    """A page request failed after earlier pages of the same fetch succeeded."""

    def __init__(self, message: str, offset: int, fetched: int) -> None:
        super().__init__(message)
        self.offset = offset
        self.fetched = fetched


class TargetMetadataMissing(SyncError):
    """An upload target did not carry the resource identifier field."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Upload target is missing the '{field_name}' field")
        self.field_name = field_name


class BestEffortFailure(SyncError):
    """A non-essential lookup failed. Recorded and logged, never raised."""


class UploadStateError(SyncError):
    """An upload operation was requested from a state that does not allow it."""
