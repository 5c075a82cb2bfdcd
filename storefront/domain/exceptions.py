"""Domain exceptions.

All domain-level errors that represent taxonomy rule violations.
These exceptions are raised by the store and domain helpers when
invariants are violated or referenced entities are missing.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the API layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Input Errors
# ============================================================================


class ValidationError(DomainError):
    """Raised when input fails a structural constraint.

    Always tied to the offending field so editors can show it next
    to the right form control.
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize validation error.

        Args:
            field: Name of the invalid field (e.g., "name", "slug").
            message: Explanation of what is wrong with the value.
        """
        super().__init__(message, details={"field": field})
        self.field = field


class ConflictError(DomainError):
    """Raised when a uniqueness constraint is violated."""

    def __init__(self, entity_type: str, field: str, value: str) -> None:
        """Initialize conflict error.

        Args:
            entity_type: Type of entity (e.g., "Category", "Type").
            field: Field carrying the unique value.
            value: The duplicated value.
        """
        super().__init__(
            f"{entity_type} with {field} '{value}' already exists",
            details={"entity_type": entity_type, "field": field, "value": value},
        )
        self.entity_type = entity_type
        self.field = field
        self.value = value


class NotFoundError(DomainError):
    """Raised when a referenced Section, Category or Type does not exist."""

    def __init__(self, entity_type: str, key: str) -> None:
        """Initialize not found error.

        Args:
            entity_type: Type of entity (e.g., "Section", "Category").
            key: Identifier or slug that was looked up.
        """
        super().__init__(
            f"{entity_type} not found: {key}",
            details={"entity_type": entity_type, "key": key},
        )
        self.entity_type = entity_type
        self.key = key


# ============================================================================
# Asset Errors
# ============================================================================


class IconStorageError(DomainError):
    """Raised when the icon asset storage service fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize icon storage error.

        Args:
            message: Description of the failure.
            status_code: HTTP status returned by the storage service, if any.
        """
        super().__init__(message, details={"status_code": status_code})
        self.status_code = status_code
