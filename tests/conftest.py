"""Shared fixtures for storefront tests."""

from collections.abc import Awaitable, Callable
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from storefront.catalog.query_service import TaxonomyQueryService
from storefront.catalog.store import TaxonomyStore
from storefront.catalog.taxonomy import IconAsset, IconRef
from storefront.domain.exceptions import IconStorageError
from storefront.infrastructure.database import (
    create_engine,
    create_session_factory,
    create_tables,
)

SVG_BYTES = b'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"/>'


class FakeIconStorage:
    """In-memory icon storage that records every call."""

    def __init__(self) -> None:
        self.uploaded: list[IconRef] = []
        self.destroyed: list[str] = []
        self.fail_upload = False
        self.destroy_result = True
        self.on_upload: Callable[[], Awaitable[None]] | None = None

    async def upload(self, asset: IconAsset, name_prefix: str | None = None) -> IconRef:
        if self.fail_upload:
            raise IconStorageError("Icon upload failed: storage unavailable", 503)
        if self.on_upload is not None:
            await self.on_upload()
        public_id = f"icons/{(name_prefix or asset.stem).lower()}_{len(self.uploaded)}"
        ref = IconRef(
            secure_url=f"https://cdn.example.test/{public_id}.svg",
            public_id=public_id,
        )
        self.uploaded.append(ref)
        return ref

    async def destroy(self, public_id: str) -> bool:
        self.destroyed.append(public_id)
        return self.destroy_result


def svg_icon(filename: str = "helmet.svg") -> IconAsset:
    """Build a small SVG icon asset."""
    return IconAsset(filename=filename, content_type="image/svg+xml", data=SVG_BYTES)


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """File-backed SQLite URL, so each connection sees committed data."""
    return f"sqlite+aiosqlite:///{tmp_path / 'storefront.db'}"


@pytest_asyncio.fixture
async def engine(database_url: str) -> AsyncEngine:
    """Create a SQLite engine with the taxonomy tables."""
    engine = create_engine(database_url)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture
def icon_storage() -> FakeIconStorage:
    return FakeIconStorage()


@pytest.fixture
def store(
    session_factory: async_sessionmaker[AsyncSession],
    icon_storage: FakeIconStorage,
) -> TaxonomyStore:
    return TaxonomyStore(session_factory, icon_storage)


@pytest.fixture
def queries(session_factory: async_sessionmaker[AsyncSession]) -> TaxonomyQueryService:
    return TaxonomyQueryService(session_factory)


@pytest.fixture
def svg_asset() -> IconAsset:
    return svg_icon()
