"""Taxonomy query service.

Read-only lookups used by navigation and filter UIs.
"""

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.catalog.repository import TaxonomyRepository
from storefront.catalog.taxonomy import SectionNode, build_tree
from storefront.domain.exceptions import NotFoundError


@dataclass
class FilterOptions:
    """Facet values offered by a product filter UI.

    Attributes:
        brands: Distinct brand names.
        categories: Distinct category names.
        types: Distinct type names.
    """

    brands: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    types: list[str] = field(default_factory=list)


def _distinct_sorted(values: list[str]) -> list[str]:
    return sorted(set(values))


class TaxonomyQueryService:
    """Service for taxonomy read queries.

    Never mutates the store; safe to call concurrently with writes.

    Example usage:
        queries = TaxonomyQueryService(session_factory)
        section = await queries.resolve_section("riding-gear")
        options = await queries.filter_options_for("riding-gear")
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize service with a session factory.

        Args:
            session_factory: Factory for database sessions.
        """
        self.session_factory = session_factory

    async def resolve_section(self, slug: str) -> SectionNode:
        """Resolve a section by exact, case-sensitive slug.

        Args:
            slug: Section slug.

        Returns:
            The section with its categories and their types.

        Raises:
            NotFoundError: If no section has this slug.
        """
        async with self.session_factory() as session:
            repo = TaxonomyRepository(session)
            section = await repo.get_section_by_slug(slug)
            if section is None:
                raise NotFoundError("Section", slug)

            categories = [c.to_node() for c in await repo.list_categories(section_slug=slug)]
            types = [t.to_node() for t in await repo.list_types([c.id for c in categories])]

        return build_tree([section.to_node()], categories, types)[0]

    async def filter_options_for(self, section_slug: str | None = None) -> FilterOptions:
        """Build facet options for a section, or for the whole catalog.

        Brands are not tied to the taxonomy, so every brand is offered
        regardless of section. Each list is de-duplicated and sorted.

        Args:
            section_slug: Section to scope categories and types to; None
                for the whole catalog.

        Returns:
            Filter options (empty lists on an empty catalog).

        Raises:
            NotFoundError: If section_slug is given but unknown.
        """
        async with self.session_factory() as session:
            repo = TaxonomyRepository(session)
            if section_slug is not None and await repo.get_section_by_slug(section_slug) is None:
                raise NotFoundError("Section", section_slug)

            brands = await repo.get_brand_names()
            categories = await repo.list_categories(section_slug=section_slug)
            category_ids = None if section_slug is None else [c.id for c in categories]
            types = await repo.list_types(category_ids)

        return FilterOptions(
            brands=_distinct_sorted(brands),
            categories=_distinct_sorted([c.name for c in categories]),
            types=_distinct_sorted([t.name for t in types]),
        )
