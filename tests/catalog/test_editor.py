"""Tests for the catalog admin editor."""

import pytest
import pytest_asyncio

from storefront.catalog.editor import CatalogAdminEditor
from storefront.catalog.store import CategoryInput, TaxonomyStore, TypeInput
from storefront.catalog.taxonomy import IconAsset


@pytest_asyncio.fixture
async def editor(store: TaxonomyStore) -> CatalogAdminEditor:
    """Editor over a store that already has the Riding Gear section."""
    await store.create_section("Riding Gear")
    return CatalogAdminEditor(store, actor="admin@example.com")


class TestStageIcon:
    """Tests for icon staging."""

    def test_rejects_non_svg(self, store: TaxonomyStore) -> None:
        editor = CatalogAdminEditor(store)

        result = editor.stage_icon(IconAsset("helmet.png", "image/png", b"\x89PNG"))

        assert not result.success
        assert result.error_code == "VALIDATION_ERROR"
        assert "icon" in result.field_errors
        assert editor.staged_icon is None

    def test_stages_svg(self, store: TaxonomyStore, svg_asset: IconAsset) -> None:
        editor = CatalogAdminEditor(store)
        assert editor.stage_icon(svg_asset).success
        assert editor.staged_icon is svg_asset

        editor.clear_icon()
        assert editor.staged_icon is None


class TestSubmitCreate:
    """Tests for submit_create."""

    @pytest.mark.asyncio
    async def test_creates_and_publishes(
        self, editor: CatalogAdminEditor, svg_asset: IconAsset
    ) -> None:
        editor.stage_icon(svg_asset)

        result = await editor.submit_create(
            CategoryInput(name="Helmets", section="riding-gear", types=[TypeInput(name="Modular")])
        )

        assert result.success
        assert result.category.is_published
        assert editor.staged_icon is None

    @pytest.mark.asyncio
    async def test_without_icon_stays_unpublished(self, editor: CatalogAdminEditor) -> None:
        result = await editor.submit_create(CategoryInput(name="Helmets", section="riding-gear"))

        assert result.success
        assert not result.category.is_published

    @pytest.mark.asyncio
    async def test_validation_error_on_field(self, editor: CatalogAdminEditor) -> None:
        result = await editor.submit_create(CategoryInput(name="  ", section="riding-gear"))

        assert not result.success
        assert result.error_code == "VALIDATION_ERROR"
        assert result.field_errors == {"name": "Name must not be empty"}
        assert result.category is None

    @pytest.mark.asyncio
    async def test_slug_conflict_on_slug_field(self, editor: CatalogAdminEditor) -> None:
        await editor.submit_create(CategoryInput(name="Helmets", section="riding-gear"))

        result = await editor.submit_create(CategoryInput(name="Helmets", section="riding-gear"))

        assert result.error_code == "CONFLICT"
        assert "slug" in result.field_errors

    @pytest.mark.asyncio
    async def test_type_conflict_on_types_field(self, editor: CatalogAdminEditor) -> None:
        await editor.submit_create(
            CategoryInput(name="Helmets", section="riding-gear", types=[TypeInput(name="Touring")])
        )

        result = await editor.submit_create(
            CategoryInput(name="Boots", section="riding-gear", types=[TypeInput(name="Touring")])
        )

        assert result.error_code == "CONFLICT"
        assert "types" in result.field_errors

    @pytest.mark.asyncio
    async def test_unknown_section(self, editor: CatalogAdminEditor) -> None:
        result = await editor.submit_create(CategoryInput(name="Helmets", section="nowhere"))

        assert result.error_code == "SECTION_NOT_FOUND"
        assert result.error == "Section not found: nowhere"

    @pytest.mark.asyncio
    async def test_icon_failure_keeps_category(
        self, editor: CatalogAdminEditor, icon_storage, svg_asset: IconAsset
    ) -> None:
        """The category is saved unpublished and the icon stays staged for retry."""
        icon_storage.fail_upload = True
        editor.stage_icon(svg_asset)

        result = await editor.submit_create(CategoryInput(name="Helmets", section="riding-gear"))

        assert not result.success
        assert result.error_code == "ICON_STORAGE_ERROR"
        assert "icon" in result.field_errors
        assert result.category is not None
        assert not result.category.is_published
        assert editor.staged_icon is svg_asset


class TestSubmitUpdate:
    """Tests for submit_update."""

    @pytest.mark.asyncio
    async def test_keeps_icon_when_none_staged(
        self, editor: CatalogAdminEditor, svg_asset: IconAsset
    ) -> None:
        editor.stage_icon(svg_asset)
        created = await editor.submit_create(CategoryInput(name="Helmets", section="riding-gear"))

        result = await editor.submit_update(
            created.category.id,
            CategoryInput(name="Road Helmets", section="riding-gear"),
        )

        assert result.success
        assert result.category.name == "Road Helmets"
        assert result.category.icon == created.category.icon

    @pytest.mark.asyncio
    async def test_missing_category(self, editor: CatalogAdminEditor) -> None:
        result = await editor.submit_update(
            "missing", CategoryInput(name="Helmets", section="riding-gear")
        )
        assert result.error_code == "CATEGORY_NOT_FOUND"
