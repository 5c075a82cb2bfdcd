"""Catalog admin editor.

Thin orchestration used by admin forms. It stages an unsaved icon until
the form is submitted and turns store errors into field-level feedback.
All invariants are enforced by the TaxonomyStore.
"""

from dataclasses import dataclass, field

import structlog

from storefront.catalog.store import CategoryInput, TaxonomyStore
from storefront.catalog.taxonomy import CategoryNode, IconAsset
from storefront.domain.exceptions import (
    ConflictError,
    DomainError,
    IconStorageError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger()


@dataclass
class EditorResult:
    """Outcome of an editor submission.

    Attributes:
        success: Whether the submission was fully applied.
        category: The saved category, when it exists.
        field_errors: Field name to message, for inline form feedback.
        error: Message not tied to a field (e.g. missing category).
        error_code: Machine-readable failure kind.
    """

    success: bool = True
    category: CategoryNode | None = None
    field_errors: dict[str, str] = field(default_factory=dict)
    error: str | None = None
    error_code: str | None = None


def _failure(exc: DomainError, category: CategoryNode | None = None) -> EditorResult:
    result = EditorResult(success=False, category=category)
    if isinstance(exc, ValidationError):
        result.error_code = "VALIDATION_ERROR"
        result.field_errors[exc.field] = exc.message
    elif isinstance(exc, ConflictError):
        result.error_code = "CONFLICT"
        field_name = "types" if exc.entity_type == "Type" else "slug"
        result.field_errors[field_name] = exc.message
    elif isinstance(exc, IconStorageError):
        result.error_code = "ICON_STORAGE_ERROR"
        result.field_errors["icon"] = exc.message
    else:
        result.error_code = f"{exc.entity_type.upper()}_NOT_FOUND"
        result.error = exc.message
    return result


class CatalogAdminEditor:
    """Editor session for one category form.

    Example usage:
        editor = CatalogAdminEditor(store, actor="admin@example.com")
        editor.stage_icon(IconAsset("helmet.svg", "image/svg+xml", data))
        result = await editor.submit_create(
            CategoryInput(name="Helmets", section="riding-gear"),
        )
        if not result.success:
            show(result.field_errors)
    """

    def __init__(self, store: TaxonomyStore, actor: str | None = None) -> None:
        """Initialize editor.

        Args:
            store: Taxonomy store that applies the changes.
            actor: Caller identity passed through for audit logging.
        """
        self.store = store
        self.actor = actor
        self._staged_icon: IconAsset | None = None

    @property
    def staged_icon(self) -> IconAsset | None:
        return self._staged_icon

    def stage_icon(self, asset: IconAsset) -> EditorResult:
        """Hold an icon until the next submit, replacing any staged one.

        Only SVG icons are accepted.
        """
        if not asset.is_svg:
            return EditorResult(
                success=False,
                error_code="VALIDATION_ERROR",
                field_errors={"icon": f"Icon must be an SVG file, got {asset.content_type}"},
            )
        self._staged_icon = asset
        return EditorResult()

    def clear_icon(self) -> None:
        self._staged_icon = None

    async def submit_create(self, form: CategoryInput) -> EditorResult:
        """Create a category from the form, then attach the staged icon.

        If the icon upload fails the category is kept (unpublished) and
        the result reports the failure on the ``icon`` field.
        """
        try:
            category = await self.store.create_category(form, actor=self.actor)
        except (ValidationError, ConflictError, NotFoundError) as e:
            return _failure(e)

        return await self._attach_staged_icon(category)

    async def submit_update(self, category_id: str, form: CategoryInput) -> EditorResult:
        """Update a category from the form, then attach the staged icon.

        Without a staged icon the current icon is kept.
        """
        try:
            category = await self.store.update_category(category_id, form, actor=self.actor)
        except (ValidationError, ConflictError, NotFoundError) as e:
            return _failure(e)

        return await self._attach_staged_icon(category)

    async def _attach_staged_icon(self, category: CategoryNode) -> EditorResult:
        if self._staged_icon is None:
            return EditorResult(category=category)

        try:
            category = await self.store.attach_icon(category.id, self._staged_icon, actor=self.actor)
        except (IconStorageError, NotFoundError, ValidationError) as e:
            logger.warning(
                "Staged icon not attached",
                category_id=category.id,
                error=e.message,
            )
            return _failure(e, category=category)

        self._staged_icon = None
        return EditorResult(category=category)
