"""Taxonomy store.

Owns every mutation of the Section/Category/Type taxonomy and the brand
facet. Each mutation runs in exactly one database transaction; slug
uniqueness is enforced by database constraints so concurrent writers
race on the constraint rather than on a prior read.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.catalog.models import BrandModel, CategoryModel, SectionModel, TypeModel
from storefront.catalog.repository import TaxonomyRepository
from storefront.catalog.taxonomy import (
    Brand,
    CategoryNode,
    IconAsset,
    SectionNode,
    TypeNode,
    build_tree,
)
from storefront.domain.exceptions import (
    ConflictError,
    IconStorageError,
    NotFoundError,
    ValidationError,
)
from storefront.domain.slugs import normalize_slug, require_name

if TYPE_CHECKING:
    from storefront.infrastructure.icon_storage import IconStorage

logger = structlog.get_logger()


# ============================================================================
# Inputs
# ============================================================================


@dataclass
class TypeInput:
    """Type fields supplied by an editor.

    Attributes:
        name: Display name.
        slug: Optional slug; derived from the name when omitted.
        id: Existing type ID (updates only).
    """

    name: str
    slug: str | None = None
    id: str | None = None


@dataclass
class CategoryInput:
    """Category fields supplied by an editor.

    Attributes:
        name: Display name.
        section: Slug of the owning section.
        slug: Optional slug; derived from the name when omitted.
        types: Applicable types, in display order.
    """

    name: str
    section: str
    slug: str | None = None
    types: list[TypeInput] = field(default_factory=list)


@dataclass
class _CleanType:
    name: str
    slug: str
    id: str | None = None


def _clean_type(data: TypeInput, field_prefix: str = "") -> _CleanType:
    name = require_name(data.name, field=f"{field_prefix}name")
    slug = normalize_slug(data.slug, name, field=f"{field_prefix}slug")
    return _CleanType(name=name, slug=slug, id=data.id)


def _clean_types(types: list[TypeInput]) -> list[_CleanType]:
    return [_clean_type(t, field_prefix=f"types[{i}].") for i, t in enumerate(types)]


# ============================================================================
# Store
# ============================================================================


class TaxonomyStore:
    """Data-access contract for the catalog taxonomy.

    Example usage:
        store = TaxonomyStore(session_factory, icon_storage)
        category = await store.create_category(
            CategoryInput(name="Helmets", section="riding-gear"),
            actor="admin@example.com",
        )
        await store.attach_icon(category.id, asset)
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        icon_storage: "IconStorage",
    ) -> None:
        """Initialize store.

        Args:
            session_factory: Factory for database sessions.
            icon_storage: Asset storage used for category icons.
        """
        self.session_factory = session_factory
        self.icon_storage = icon_storage

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    async def create_section(
        self,
        name: str,
        slug: str | None = None,
        actor: str | None = None,
    ) -> SectionNode:
        """Create a section.

        Raises:
            ValidationError: If the name or slug is invalid.
            ConflictError: If the slug is taken.
        """
        clean_name = require_name(name)
        clean_slug = normalize_slug(slug, clean_name)

        async with self.session_factory() as session:
            async with session.begin():
                row = SectionModel(name=clean_name, slug=clean_slug)
                try:
                    await TaxonomyRepository(session).add(row)
                except IntegrityError as e:
                    raise ConflictError("Section", "slug", clean_slug) from e
                node = row.to_node()

        logger.info("Section created", section_id=node.id, slug=node.slug, actor=actor)
        return node

    async def list_sections(self) -> list[SectionNode]:
        """List every section with nested categories and types.

        Ordering is by insertion at every level.
        """
        async with self.session_factory() as session:
            repo = TaxonomyRepository(session)
            sections = [s.to_node() for s in await repo.list_sections()]
            categories = [c.to_node() for c in await repo.list_categories()]
            types = [t.to_node() for t in await repo.list_types()]

        return build_tree(sections, categories, types)

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    async def get_category(self, category_id: str) -> CategoryNode:
        """Get a category with its types.

        Raises:
            NotFoundError: If the category does not exist.
        """
        async with self.session_factory() as session:
            repo = TaxonomyRepository(session)
            category = await repo.get_category(category_id)
            if category is None:
                raise NotFoundError("Category", category_id)
            return await self._to_node(repo, category)

    async def create_category(
        self,
        data: CategoryInput,
        actor: str | None = None,
    ) -> CategoryNode:
        """Create a category and its initial types.

        The icon stays unset until attach_icon is called.

        Args:
            data: Category fields.
            actor: Caller identity, for the audit log only.

        Returns:
            The created category.

        Raises:
            ValidationError: If a name or slug is invalid.
            NotFoundError: If the section does not exist.
            ConflictError: If the category slug or a type slug is taken.
        """
        name = require_name(data.name)
        slug = normalize_slug(data.slug, name)
        types = _clean_types(data.types)

        async with self.session_factory() as session:
            async with session.begin():
                repo = TaxonomyRepository(session)
                await self._require_section(repo, data.section)

                category = CategoryModel(name=name, slug=slug, section_slug=data.section)
                try:
                    await repo.add(category)
                except IntegrityError as e:
                    raise ConflictError("Category", "slug", slug) from e

                for position, clean in enumerate(types):
                    await self._insert_type(repo, category.id, clean, position)

                node = await self._to_node(repo, category)

        logger.info(
            "Category created",
            category_id=node.id,
            slug=node.slug,
            section=node.section,
            type_count=len(node.types),
            actor=actor,
        )
        return node

    async def update_category(
        self,
        category_id: str,
        data: CategoryInput,
        actor: str | None = None,
    ) -> CategoryNode:
        """Update a category and reconcile its types.

        Types carrying an id are kept and updated, types without an id are
        created, and existing types missing from ``data.types`` are deleted.

        Raises:
            ValidationError: If a name or slug is invalid.
            NotFoundError: If the category, its new section, or a referenced
                type does not exist.
            ConflictError: If the category slug or a type slug is taken.
        """
        name = require_name(data.name)
        slug = normalize_slug(data.slug, name)
        types = _clean_types(data.types)

        async with self.session_factory() as session:
            async with session.begin():
                repo = TaxonomyRepository(session)
                category = await repo.get_category(category_id)
                if category is None:
                    raise NotFoundError("Category", category_id)
                await self._require_section(repo, data.section)

                category.name = name
                category.slug = slug
                category.section_slug = data.section
                try:
                    await session.flush()
                except IntegrityError as e:
                    raise ConflictError("Category", "slug", slug) from e

                existing = {t.id: t for t in await repo.list_types([category_id])}
                for clean in types:
                    if clean.id is not None and clean.id not in existing:
                        raise NotFoundError("Type", clean.id)

                kept_ids = {clean.id for clean in types if clean.id is not None}
                removed = await repo.delete_types(
                    [type_id for type_id in existing if type_id not in kept_ids]
                )

                # Kept types hold placeholder slugs until every final slug is set
                for type_id in kept_ids:
                    existing[type_id].slug = f"~{type_id}"
                await session.flush()

                for position, clean in enumerate(types):
                    if clean.id is None:
                        continue
                    row = existing[clean.id]
                    row.name = clean.name
                    row.slug = clean.slug
                    row.position = position
                    try:
                        await session.flush()
                    except IntegrityError as e:
                        raise ConflictError("Type", "slug", clean.slug) from e

                for position, clean in enumerate(types):
                    if clean.id is None:
                        await self._insert_type(repo, category_id, clean, position)

                node = await self._to_node(repo, category)

        logger.info(
            "Category updated",
            category_id=category_id,
            slug=node.slug,
            types_removed=removed,
            actor=actor,
        )
        return node

    async def attach_icon(
        self,
        category_id: str,
        asset: IconAsset,
        actor: str | None = None,
    ) -> CategoryNode:
        """Upload an icon and record it on the category.

        Both reference fields are written in one UPDATE. If that write
        fails, the fresh upload is deleted and the previous icon stays.
        After a successful write the previous icon asset is deleted.

        Args:
            category_id: Category to attach the icon to.
            asset: Unsaved SVG icon.
            actor: Caller identity, for the audit log only.

        Returns:
            The category with its new icon.

        Raises:
            ValidationError: If the asset is not an SVG.
            NotFoundError: If the category does not exist.
            IconStorageError: If the upload fails.
        """
        if not asset.is_svg:
            raise ValidationError(
                "icon", f"Icon must be an SVG file, got {asset.content_type}"
            )

        async with self.session_factory() as session:
            category = await TaxonomyRepository(session).get_category(category_id)
            if category is None:
                raise NotFoundError("Category", category_id)
            previous = category.icon
            name = category.name

        uploaded = await self.icon_storage.upload(asset, name_prefix=name)

        try:
            async with self.session_factory() as session:
                async with session.begin():
                    repo = TaxonomyRepository(session)
                    written = await repo.set_category_icon(
                        category_id,
                        secure_url=uploaded.secure_url,
                        public_id=uploaded.public_id,
                    )
                    if not written:
                        raise NotFoundError("Category", category_id)
        except Exception:
            await self._discard_icon(uploaded.public_id)
            raise

        if previous is not None and previous.public_id != uploaded.public_id:
            await self._discard_icon(previous.public_id)

        logger.info(
            "Category icon attached",
            category_id=category_id,
            public_id=uploaded.public_id,
            replaced=previous.public_id if previous else None,
            actor=actor,
        )
        return await self.get_category(category_id)

    async def delete_category(self, category_id: str, actor: str | None = None) -> None:
        """Delete a category together with all of its types.

        Types are removed first, then the category, in one transaction.
        Types left pointing at an already-deleted category are still
        cleaned up before NotFoundError is raised, so retrying a failed
        delete is safe.

        Raises:
            NotFoundError: If the category does not exist.
        """
        icon_public_id: str | None = None

        async with self.session_factory() as session:
            async with session.begin():
                repo = TaxonomyRepository(session)
                removed = await repo.delete_types_for_category(category_id)
                category = await repo.get_category(category_id)
                if category is not None:
                    icon_public_id = category.icon_public_id
                    await repo.delete_category(category)

        if category is None:
            if removed:
                logger.warning(
                    "Removed orphaned types of missing category",
                    category_id=category_id,
                    types_removed=removed,
                )
            raise NotFoundError("Category", category_id)

        if icon_public_id:
            await self._discard_icon(icon_public_id)

        logger.info(
            "Category deleted",
            category_id=category_id,
            types_removed=removed,
            actor=actor,
        )

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    async def add_type(
        self,
        category_id: str,
        data: TypeInput,
        actor: str | None = None,
    ) -> TypeNode:
        """Append a type to a category.

        Raises:
            ValidationError: If the name or slug is invalid.
            NotFoundError: If the category does not exist.
            ConflictError: If the slug is used by any other type.
        """
        clean = _clean_type(data)

        async with self.session_factory() as session:
            async with session.begin():
                repo = TaxonomyRepository(session)
                if await repo.get_category(category_id) is None:
                    raise NotFoundError("Category", category_id)
                position = await repo.next_type_position(category_id)
                node = await self._insert_type(repo, category_id, clean, position)

        logger.info(
            "Type added",
            category_id=category_id,
            type_id=node.id,
            slug=node.slug,
            actor=actor,
        )
        return node

    # ------------------------------------------------------------------
    # Brands
    # ------------------------------------------------------------------

    async def create_brand(
        self,
        name: str,
        logo: str | None = None,
        description: str | None = None,
        actor: str | None = None,
    ) -> Brand:
        """Create a brand facet value.

        Raises:
            ValidationError: If the trimmed name is empty.
        """
        clean_name = require_name(name)

        async with self.session_factory() as session:
            async with session.begin():
                row = BrandModel(name=clean_name, logo=logo, description=description)
                await TaxonomyRepository(session).add(row)
                brand = row.to_brand()

        logger.info("Brand created", brand_id=brand.id, name=brand.name, actor=actor)
        return brand

    async def list_brands(self) -> list[Brand]:
        async with self.session_factory() as session:
            rows = await TaxonomyRepository(session).list_brands()
            return [row.to_brand() for row in rows]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _require_section(self, repo: TaxonomyRepository, section_slug: str) -> None:
        if not section_slug or await repo.get_section_by_slug(section_slug) is None:
            raise NotFoundError("Section", section_slug)

    async def _insert_type(
        self,
        repo: TaxonomyRepository,
        category_id: str,
        clean: _CleanType,
        position: int,
    ) -> TypeNode:
        row = TypeModel(
            name=clean.name,
            slug=clean.slug,
            category_id=category_id,
            position=position,
        )
        try:
            await repo.add(row)
        except IntegrityError as e:
            raise ConflictError("Type", "slug", clean.slug) from e
        return row.to_node()

    async def _to_node(self, repo: TaxonomyRepository, category: CategoryModel) -> CategoryNode:
        types = [t.to_node() for t in await repo.list_types([category.id])]
        return category.to_node(types)

    async def _discard_icon(self, public_id: str) -> None:
        """Delete an icon asset, logging instead of failing the caller."""
        try:
            deleted = await self.icon_storage.destroy(public_id)
        except IconStorageError as e:
            logger.warning("Icon cleanup failed", public_id=public_id, error=e.message)
            return
        if not deleted:
            logger.warning("Icon cleanup incomplete, manual removal needed", public_id=public_id)
