"""Section API endpoints.

Sections are the top level of the navigation taxonomy.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from storefront.api.dependencies import get_actor, get_queries, get_store
from storefront.api.schemas import (
    ErrorResponse,
    SectionCreateRequest,
    SectionListResponse,
    SectionResponse,
)
from storefront.catalog.query_service import TaxonomyQueryService
from storefront.catalog.store import TaxonomyStore

router = APIRouter(prefix="/sections", tags=["Sections"])


@router.get(
    "",
    response_model=SectionListResponse,
    summary="List sections",
    description="List every section with its categories and their applicable types.",
)
async def list_sections(
    store: Annotated[TaxonomyStore, Depends(get_store)],
) -> SectionListResponse:
    sections = await store.list_sections()
    return SectionListResponse(sections=[SectionResponse.from_node(s) for s in sections])


@router.get(
    "/{slug}",
    response_model=SectionResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get section",
    description="Resolve a section by its exact slug.",
)
async def get_section(
    slug: str,
    queries: Annotated[TaxonomyQueryService, Depends(get_queries)],
) -> SectionResponse:
    return SectionResponse.from_node(await queries.resolve_section(slug))


@router.post(
    "",
    response_model=SectionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Create section",
)
async def create_section(
    request: SectionCreateRequest,
    store: Annotated[TaxonomyStore, Depends(get_store)],
    actor: Annotated[str | None, Depends(get_actor)],
) -> SectionResponse:
    """Create a section.

    The slug is derived from the name when omitted.
    """
    section = await store.create_section(request.name, slug=request.slug, actor=actor)
    return SectionResponse.from_node(section)
