"""Request-scoped dependencies shared by the routers."""

from fastapi import Request

from storefront.catalog.editor import CatalogAdminEditor
from storefront.catalog.query_service import TaxonomyQueryService
from storefront.catalog.store import TaxonomyStore


def get_store(request: Request) -> TaxonomyStore:
    return request.app.state.store


def get_queries(request: Request) -> TaxonomyQueryService:
    return request.app.state.queries


def get_actor(request: Request) -> str | None:
    """Admin identity set by the API key middleware, if any."""
    return getattr(request.state, "actor", None)


def get_editor(request: Request) -> CatalogAdminEditor:
    """Fresh editor session for one admin form submission."""
    return CatalogAdminEditor(get_store(request), actor=get_actor(request))
