"""Catalog taxonomy service.

Provides the Section/Category/Type taxonomy store, read queries for
navigation and filters, the product search query-string codec and the
admin editor contract.
"""

from storefront.catalog.editor import CatalogAdminEditor, EditorResult
from storefront.catalog.query_service import FilterOptions, TaxonomyQueryService
from storefront.catalog.repository import TaxonomyRepository
from storefront.catalog.search_params import SearchFilter, decode, encode
from storefront.catalog.store import CategoryInput, TaxonomyStore, TypeInput
from storefront.catalog.taxonomy import (
    Brand,
    CategoryNode,
    IconAsset,
    IconRef,
    SectionNode,
    TypeNode,
)

__all__ = [
    # Taxonomy
    "Brand",
    "CategoryNode",
    "IconAsset",
    "IconRef",
    "SectionNode",
    "TypeNode",
    # Repository
    "TaxonomyRepository",
    # Store
    "CategoryInput",
    "TaxonomyStore",
    "TypeInput",
    # Queries
    "FilterOptions",
    "TaxonomyQueryService",
    # Search parameters
    "SearchFilter",
    "decode",
    "encode",
    # Editor
    "CatalogAdminEditor",
    "EditorResult",
]
