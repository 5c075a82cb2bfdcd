"""Mapping of domain errors onto the standard error envelope."""

from typing import Any

from fastapi import HTTPException, status

from storefront.catalog.editor import EditorResult
from storefront.domain.exceptions import (
    ConflictError,
    DomainError,
    IconStorageError,
    NotFoundError,
    ValidationError,
)


def status_for_code(error_code: str) -> int:
    """HTTP status for a machine-readable error code."""
    if error_code.endswith("_NOT_FOUND"):
        return status.HTTP_404_NOT_FOUND
    return {
        "VALIDATION_ERROR": 422,
        "CONFLICT": status.HTTP_409_CONFLICT,
        "ICON_STORAGE_ERROR": status.HTTP_502_BAD_GATEWAY,
    }.get(error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_code_for(exc: DomainError) -> str:
    if isinstance(exc, ValidationError):
        return "VALIDATION_ERROR"
    if isinstance(exc, ConflictError):
        return "CONFLICT"
    if isinstance(exc, NotFoundError):
        return f"{exc.entity_type.upper()}_NOT_FOUND"
    if isinstance(exc, IconStorageError):
        return "ICON_STORAGE_ERROR"
    return "DOMAIN_ERROR"


def error_details_for(exc: DomainError) -> list[dict[str, Any]]:
    if isinstance(exc, ValidationError):
        return [{"field": exc.field, "message": exc.message}]
    if isinstance(exc, ConflictError):
        return [{"field": exc.field, "message": exc.message}]
    return []


def editor_failure(result: EditorResult) -> HTTPException:
    """Build the HTTP error for a failed editor submission.

    When the category was saved but its icon was not, the message names
    the saved category so the client can retry the icon upload.
    """
    error_code = result.error_code or "DOMAIN_ERROR"
    details = [
        {"field": name, "message": message}
        for name, message in result.field_errors.items()
    ]
    message = result.error or (details[0]["message"] if details else "Request failed")
    if result.category is not None:
        message = f"Category {result.category.id} saved without icon: {message}"

    return HTTPException(
        status_code=status_for_code(error_code),
        detail={
            "error_code": error_code,
            "message": message,
            "details": details,
        },
    )
