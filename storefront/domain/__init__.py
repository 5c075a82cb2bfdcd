"""Domain layer module.

Contains the storefront's pure domain rules: errors, slug handling and
transient wishlist state.
"""

from storefront.domain.exceptions import (
    ConflictError,
    DomainError,
    IconStorageError,
    NotFoundError,
    ValidationError,
)
from storefront.domain.slugs import derive_slug, normalize_slug, require_name
from storefront.domain.wishlist import Wishlist, WishlistItem

__all__ = [
    # Exceptions
    "ConflictError",
    "DomainError",
    "IconStorageError",
    "NotFoundError",
    "ValidationError",
    # Slugs
    "derive_slug",
    "normalize_slug",
    "require_name",
    # Wishlist
    "Wishlist",
    "WishlistItem",
]
