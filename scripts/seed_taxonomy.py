#!/usr/bin/env python3
"""Seed catalog taxonomy script.

Creates the storefront's default sections and an optional starter set
of brands. Existing slugs are skipped, so the script can be re-run.

Usage:
    python scripts/seed_taxonomy.py
    python scripts/seed_taxonomy.py --with-brands
    python scripts/seed_taxonomy.py --database-url sqlite+aiosqlite:///./storefront.db
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from storefront.catalog.store import TaxonomyStore
from storefront.domain.exceptions import ConflictError
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import (
    create_engine,
    create_session_factory,
    create_tables,
)
from storefront.infrastructure.icon_storage import IconStorageClient

DEFAULT_SECTIONS = [
    "Helmets",
    "Riding Style",
    "Riding Gear",
    "Motorcycle Parts",
    "Motorcycles",
]

STARTER_BRANDS = [
    "Alpinestars",
    "AGV",
    "Arai",
    "Dainese",
    "REV'IT!",
    "Shoei",
]


async def seed(database_url: str, with_brands: bool) -> dict:
    """Seed sections (and optionally brands).

    Args:
        database_url: Database to seed.
        with_brands: Whether to also create the starter brands.

    Returns:
        Counts of created and skipped rows.
    """
    engine = create_engine(database_url)
    await create_tables(engine)
    icon_storage = IconStorageClient.from_settings(settings)
    store = TaxonomyStore(create_session_factory(engine), icon_storage)

    result = {"sections_created": 0, "sections_skipped": 0, "brands_created": 0}
    try:
        for name in DEFAULT_SECTIONS:
            try:
                await store.create_section(name, actor="seed")
                result["sections_created"] += 1
            except ConflictError:
                result["sections_skipped"] += 1

        if with_brands:
            existing = {b.name for b in await store.list_brands()}
            for name in STARTER_BRANDS:
                if name not in existing:
                    await store.create_brand(name, actor="seed")
                    result["brands_created"] += 1
    finally:
        await icon_storage.close()
        await engine.dispose()

    return result


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed storefront catalog taxonomy",
    )
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="Database URL (default: STOREFRONT_DATABASE_URL)",
    )
    parser.add_argument(
        "--with-brands",
        action="store_true",
        help="Also create a starter set of brands",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Storefront Taxonomy Seeder")
    print("=" * 60)

    result = await seed(args.database_url, args.with_brands)

    print(f"  ✓ Sections created: {result['sections_created']}")
    print(f"  ✓ Sections already present: {result['sections_skipped']}")
    if args.with_brands:
        print(f"  ✓ Brands created: {result['brands_created']}")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
