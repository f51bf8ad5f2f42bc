"""Error hierarchy for SLA.

Error layers:
- ArchiveError: Base class for all SLA errors
- DomainError: Business rule violations, malformed data, missing records
- InfrastructureError: Store-level failures like rejected writes or an unreachable ledger

The CLI maps these to a message and a non-zero exit code.
"""


class ArchiveError(Exception):
    """Base class for all SLA errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(ArchiveError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class RecordNotFoundError(NotFoundError):
    """No blob is stored under the record's key."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Record not found: {record_id}", code="RECORD_NOT_FOUND")
        self.record_id = record_id


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


class InvalidTransitionError(InvalidStateError):
    """Status change outside pending -> analyzed|anomaly."""

    def __init__(self, current: str, target: str | None = None) -> None:
        if target is None:
            message = f"Record is {current}; only pending records can be analyzed"
        else:
            message = f"Cannot transition from {current} to {target}"
        super().__init__(message, code="INVALID_TRANSITION")
        self.current = current
        self.target = target


class AuthorizationError(DomainError):
    """Caller not authorized for this operation."""


class UnauthorizedError(AuthorizationError):
    """Caller does not own the record it tried to change."""


class DecodeError(DomainError):
    """A blob could not be turned back into a domain object."""


class MalformedBlobError(DecodeError):
    """Blob is structurally invalid (bad UTF-8, bad JSON, wrong shape)."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message, code="MALFORMED")
        self.key = key


class InvalidKeyError(DomainError, ValueError):
    """Key cannot be used with the store, e.g. it contains a path separator."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Invalid key: {key}", code="INVALID_KEY")
        self.key = key


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(ArchiveError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Record store is unavailable (probe failed or transport error)."""


class WriteError(InfrastructureError):
    """A single-key write was not applied."""

    def __init__(self, message: str, key: str | None = None, code: str | None = None) -> None:
        super().__init__(message, code=code)
        self.key = key


class WriteRejectedError(WriteError):
    """The ledger or the signer rejected the transaction."""


class OrphanedRecordError(WriteError):
    """Record blob was written but its id could not be added to the index.

    ``cause`` is whatever stopped the append: the index read or its write.
    """

    def __init__(self, record_id: str, cause: ArchiveError) -> None:
        super().__init__(
            f"Record {record_id} stored but not indexed: {cause.message}",
            key=getattr(cause, "key", None),
            code="ORPHANED",
        )
        self.record_id = record_id
