"""Taxonomy repository for database operations.

Provides row-level access to sections, categories, types and brands.
The repository only flushes; transaction boundaries belong to the caller.
"""

from collections.abc import Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.models import BrandModel, CategoryModel, SectionModel, TypeModel


class TaxonomyRepository:
    """Repository for taxonomy database operations.

    Example usage:
        async with session_factory() as session, session.begin():
            repo = TaxonomyRepository(session)
            section = await repo.get_section_by_slug("riding-gear")
            categories = await repo.list_categories(section_slug="riding-gear")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def add(self, row: SectionModel | CategoryModel | TypeModel | BrandModel) -> None:
        """Stage a row and flush so constraint violations surface here."""
        self.session.add(row)
        await self.session.flush()

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    async def get_section_by_slug(self, slug: str) -> SectionModel | None:
        """Get section by exact slug.

        Args:
            slug: Section slug (case-sensitive).

        Returns:
            Section if found, None otherwise.
        """
        result = await self.session.execute(
            select(SectionModel).where(SectionModel.slug == slug)
        )
        return result.scalar_one_or_none()

    async def list_sections(self) -> Sequence[SectionModel]:
        result = await self.session.execute(
            select(SectionModel).order_by(SectionModel.seq)
        )
        return result.scalars().all()

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    async def get_category(self, category_id: str) -> CategoryModel | None:
        result = await self.session.execute(
            select(CategoryModel).where(CategoryModel.id == category_id)
        )
        return result.scalar_one_or_none()

    async def list_categories(self, section_slug: str | None = None) -> Sequence[CategoryModel]:
        """List categories in insertion order.

        Args:
            section_slug: Optional owning section filter.

        Returns:
            Sequence of categories.
        """
        query = select(CategoryModel)
        if section_slug is not None:
            query = query.where(CategoryModel.section_slug == section_slug)
        query = query.order_by(CategoryModel.seq)

        result = await self.session.execute(query)
        return result.scalars().all()

    async def set_category_icon(
        self,
        category_id: str,
        secure_url: str,
        public_id: str,
    ) -> bool:
        """Write both icon fields in a single UPDATE.

        Returns:
            True if a row was updated.
        """
        result = await self.session.execute(
            update(CategoryModel)
            .where(CategoryModel.id == category_id)
            .values(icon_secure_url=secure_url, icon_public_id=public_id)
        )
        return result.rowcount == 1

    async def delete_category(self, category: CategoryModel) -> None:
        await self.session.delete(category)
        await self.session.flush()

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    async def list_types(self, category_ids: Sequence[str] | None = None) -> Sequence[TypeModel]:
        """List types ordered by owning category position.

        Args:
            category_ids: Restrict to these categories; None means all.

        Returns:
            Sequence of types.
        """
        query = select(TypeModel)
        if category_ids is not None:
            query = query.where(TypeModel.category_id.in_(list(category_ids)))
        query = query.order_by(TypeModel.category_id, TypeModel.position, TypeModel.id)

        result = await self.session.execute(query)
        return result.scalars().all()

    async def next_type_position(self, category_id: str) -> int:
        result = await self.session.execute(
            select(func.max(TypeModel.position)).where(TypeModel.category_id == category_id)
        )
        current = result.scalar_one_or_none()
        return 0 if current is None else current + 1

    async def delete_types(self, type_ids: Sequence[str]) -> int:
        if not type_ids:
            return 0
        result = await self.session.execute(
            delete(TypeModel).where(TypeModel.id.in_(list(type_ids)))
        )
        return result.rowcount

    async def delete_types_for_category(self, category_id: str) -> int:
        """Delete every type owned by a category.

        Args:
            category_id: Owning category ID (need not exist any more).

        Returns:
            Number of deleted types.
        """
        result = await self.session.execute(
            delete(TypeModel).where(TypeModel.category_id == category_id)
        )
        return result.rowcount

    # ------------------------------------------------------------------
    # Brands
    # ------------------------------------------------------------------

    async def list_brands(self) -> Sequence[BrandModel]:
        result = await self.session.execute(
            select(BrandModel).order_by(BrandModel.name, BrandModel.id)
        )
        return result.scalars().all()

    async def get_brand_names(self) -> list[str]:
        """Get distinct brand names, sorted."""
        result = await self.session.execute(
            select(BrandModel.name).distinct().order_by(BrandModel.name)
        )
        return list(result.scalars().all())
