"""Slug derivation and validation.

Slugs are URL-safe identifiers derived from display names, e.g.
"Riding Gear" -> "riding-gear". They are always stored lower-case so
that uniqueness checks are case-insensitive.
"""

import re
import unicodedata

from storefront.domain.exceptions import ValidationError

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
MAX_SLUG_LENGTH = 200

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def derive_slug(name: str) -> str:
    """Derive a slug from a display name.

    Accents are folded to ASCII and every run of other characters
    becomes a single hyphen.

    Args:
        name: Display name.

    Returns:
        Slug, or an empty string if the name has no usable characters.
    """
    folded = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", folded.lower()).strip("-")


def normalize_slug(slug: str | None, name: str, field: str = "slug") -> str:
    """Return the canonical slug for an entity.

    Uses the given slug when present, otherwise derives one from the name.

    Args:
        slug: Slug supplied by the caller, may be None or blank.
        name: Entity name to derive from when no slug is supplied.
        field: Field name reported on validation errors.

    Returns:
        Lower-case slug matching SLUG_PATTERN.

    Raises:
        ValidationError: If the resulting slug is empty or malformed.
    """
    candidate = slug.strip().lower() if slug and slug.strip() else derive_slug(name)

    if not candidate:
        raise ValidationError(field, "Slug must not be empty")
    if len(candidate) > MAX_SLUG_LENGTH:
        raise ValidationError(field, f"Slug must be at most {MAX_SLUG_LENGTH} characters")
    if not SLUG_PATTERN.match(candidate):
        raise ValidationError(
            field,
            f"Slug '{candidate}' may only contain lowercase letters, digits and single hyphens",
        )
    return candidate


def require_name(name: str | None, field: str = "name") -> str:
    """Validate and trim a display name.

    Raises:
        ValidationError: If the name is missing or blank.
    """
    trimmed = (name or "").strip()
    if not trimmed:
        raise ValidationError(field, "Name must not be empty")
    return trimmed
