"""Product filter endpoints.

Serves facet options for filter UIs and normalizes product listing
query strings.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from storefront.api.dependencies import get_queries
from storefront.api.schemas import (
    ErrorResponse,
    FilterOptionsResponse,
    SearchParamsResponse,
)
from storefront.catalog.query_service import TaxonomyQueryService
from storefront.catalog.search_params import decode, encode

router = APIRouter(tags=["Search"])


@router.get(
    "/filters",
    response_model=FilterOptionsResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get filter options",
    description="Distinct brands, categories and types for a section or the whole catalog.",
)
async def get_filter_options(
    queries: Annotated[TaxonomyQueryService, Depends(get_queries)],
    section: Annotated[str | None, Query(description="Section slug")] = None,
) -> FilterOptionsResponse:
    options = await queries.filter_options_for(section)
    return FilterOptionsResponse(
        section=section,
        brands=options.brands,
        categories=options.categories,
        types=options.types,
    )


@router.get(
    "/search/params",
    response_model=SearchParamsResponse,
    summary="Normalize search parameters",
    description=(
        "Decode a product listing query string into a normalized filter and "
        "return its canonical encoding. Malformed values fall back to defaults."
    ),
)
async def normalize_search_params(request: Request) -> SearchParamsResponse:
    search = decode(request.url.query)
    return SearchParamsResponse.from_filter(search, encode(search))
