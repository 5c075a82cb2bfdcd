"""Tests for the taxonomy query service."""

import pytest

from storefront.catalog.query_service import FilterOptions, TaxonomyQueryService
from storefront.catalog.store import CategoryInput, TaxonomyStore, TypeInput
from storefront.domain.exceptions import NotFoundError


async def _seed(store: TaxonomyStore) -> None:
    await store.create_section("Riding Gear")
    await store.create_section("Motorcycle Parts")
    await store.create_category(
        CategoryInput(
            name="Helmets",
            section="riding-gear",
            types=[TypeInput(name="Modular"), TypeInput(name="Full Face")],
        )
    )
    await store.create_category(
        CategoryInput(name="Gloves", section="riding-gear", types=[TypeInput(name="Winter")])
    )
    await store.create_category(
        CategoryInput(name="Exhausts", section="motorcycle-parts", types=[TypeInput(name="Slip-On")])
    )
    for brand in ["Shoei", "Akrapovic", "Arai", "Shoei"]:
        await store.create_brand(brand)


class TestResolveSection:
    """Tests for resolve_section."""

    @pytest.mark.asyncio
    async def test_resolves_with_categories(
        self, store: TaxonomyStore, queries: TaxonomyQueryService
    ) -> None:
        await _seed(store)

        section = await queries.resolve_section("riding-gear")

        assert section.name == "Riding Gear"
        assert [c.slug for c in section.categories] == ["helmets", "gloves"]
        assert [t.slug for t in section.categories[0].types] == ["modular", "full-face"]

    @pytest.mark.asyncio
    async def test_slug_match_is_exact(
        self, store: TaxonomyStore, queries: TaxonomyQueryService
    ) -> None:
        await _seed(store)
        with pytest.raises(NotFoundError):
            await queries.resolve_section("Riding-Gear")

    @pytest.mark.asyncio
    async def test_unknown_section(self, queries: TaxonomyQueryService) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await queries.resolve_section("nowhere")
        assert exc_info.value.entity_type == "Section"


class TestFilterOptions:
    """Tests for filter_options_for."""

    @pytest.mark.asyncio
    async def test_empty_catalog(self, queries: TaxonomyQueryService) -> None:
        assert await queries.filter_options_for() == FilterOptions()

    @pytest.mark.asyncio
    async def test_whole_catalog(
        self, store: TaxonomyStore, queries: TaxonomyQueryService
    ) -> None:
        await _seed(store)

        options = await queries.filter_options_for()

        assert options.brands == ["Akrapovic", "Arai", "Shoei"]
        assert options.categories == ["Exhausts", "Gloves", "Helmets"]
        assert options.types == ["Full Face", "Modular", "Slip-On", "Winter"]

    @pytest.mark.asyncio
    async def test_scoped_to_section(
        self, store: TaxonomyStore, queries: TaxonomyQueryService
    ) -> None:
        """Categories and types are scoped; brands are not."""
        await _seed(store)

        options = await queries.filter_options_for("motorcycle-parts")

        assert options.categories == ["Exhausts"]
        assert options.types == ["Slip-On"]
        assert options.brands == ["Akrapovic", "Arai", "Shoei"]

    @pytest.mark.asyncio
    async def test_section_without_categories(
        self, store: TaxonomyStore, queries: TaxonomyQueryService
    ) -> None:
        await store.create_section("Motorcycles")

        options = await queries.filter_options_for("motorcycles")

        assert options == FilterOptions()

    @pytest.mark.asyncio
    async def test_unknown_section(self, queries: TaxonomyQueryService) -> None:
        with pytest.raises(NotFoundError):
            await queries.filter_options_for("nowhere")
