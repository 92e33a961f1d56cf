"""
Domain exceptions for the Second Brain application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class BrainError(Exception):
    """Base exception for all Second Brain errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Request Exceptions
class ValidationError(BrainError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidTypeError(BrainError):
    """Entity type is not one of the known collections."""

    def __init__(self, entity_type: str | None):
        super().__init__(
            "Missing type parameter" if not entity_type else f"Invalid type: {entity_type}",
            code="INVALID_TYPE",
            details={"type": entity_type},
        )


class InvalidActionError(BrainError):
    """Requested action is not supported."""

    def __init__(self, action: str | None, allowed: list[str]):
        super().__init__(
            f"Invalid action: {action}. Allowed: {', '.join(allowed)}",
            code="INVALID_ACTION",
            details={"action": action, "allowed": allowed},
        )


class MissingIdError(BrainError):
    """Update or delete issued without a record id."""

    def __init__(self, entity_type: str, action: str):
        super().__init__(
            f"Missing id for {action} on {entity_type}",
            code="MISSING_ID",
            details={"type": entity_type, "action": action},
        )


# Storage Exceptions
class StorageError(BrainError):
    """Base exception for storage operations."""

    pass


class RecordNotFoundError(StorageError):
    """Record not found in storage."""

    def __init__(self, entity_type: str, record_id: str):
        super().__init__(
            f"Record not found in {entity_type}: {record_id}",
            code="RECORD_NOT_FOUND",
            details={"type": entity_type, "id": record_id},
        )


class DuplicateRecordError(StorageError):
    """Record with the same id already exists."""

    def __init__(self, entity_type: str, record_id: str):
        super().__init__(
            f"Record already exists in {entity_type}: {record_id}",
            code="DUPLICATE_RECORD",
            details={"type": entity_type, "id": record_id},
        )


class CorruptRecordError(StorageError):
    """Stored row could not be decoded into a record."""

    def __init__(self, entity_type: str, record_id: str | None, reason: str):
        super().__init__(
            f"Corrupt record in {entity_type} ({record_id}): {reason}",
            code="CORRUPT_RECORD",
            details={"type": entity_type, "id": record_id, "reason": reason},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Integration Exceptions
class IntegrationError(BrainError):
    """Base exception for calendar and backup integrations."""

    pass


class RemoteCallFailedError(IntegrationError):
    """Outbound HTTP call to a third-party API failed."""

    def __init__(self, service: str, operation: str, reason: str):
        super().__init__(
            f"{service} {operation} failed: {reason}",
            code="REMOTE_CALL_FAILED",
            details={"service": service, "operation": operation, "reason": reason},
        )


class AmbiguousTargetError(IntegrationError):
    """More than one remote file matches the backup name."""

    def __init__(self, file_name: str, file_ids: list[str]):
        super().__init__(
            f"Found {len(file_ids)} remote files named '{file_name}'",
            code="AMBIGUOUS_TARGET",
            details={"file_name": file_name, "file_ids": file_ids},
        )


class ConfigurationError(BrainError):
    """Configuration error."""

    pass
