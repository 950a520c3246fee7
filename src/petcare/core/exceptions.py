"""
PetCare exception hierarchy.

All petcare exceptions inherit from PetCareError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.
"""

from enum import StrEnum


class PetCareError(Exception):
    """Base exception class for all petcare errors."""


class ConfigurationError(PetCareError):
    """Raised for configuration errors (missing keys, invalid values)."""


class ValidationError(PetCareError, ValueError):
    """Raised before a mutation when a field holds an out-of-range value."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class InvalidRuleError(ValidationError):
    """Raised for a recurrence or repeat interval that is not strictly positive."""


class NotFoundError(PetCareError, LookupError):
    """Raised when updating or deleting an id that is not in the collection."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found: {entity_id}")


class PersistenceError(PetCareError):
    """Raised when the persistence port fails or times out."""


class SyncFailure(StrEnum):
    UNAVAILABLE = "unavailable"
    INVALID_RECORD = "invalid_record"
    FAILED = "failed"


class SyncError(PetCareError):
    """Raised by the cloud sync collaborator. Never fatal to local operation."""

    def __init__(self, reason: SyncFailure, message: str = ""):
        self.reason = SyncFailure(reason)
        super().__init__(message or f"sync {self.reason.value}")
