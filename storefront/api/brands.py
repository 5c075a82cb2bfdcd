"""Brand API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from storefront.api.dependencies import get_actor, get_store
from storefront.api.schemas import (
    BrandCreateRequest,
    BrandListResponse,
    BrandResponse,
    ErrorResponse,
)
from storefront.catalog.store import TaxonomyStore

router = APIRouter(prefix="/brands", tags=["Brands"])


@router.get("", response_model=BrandListResponse, summary="List brands")
async def list_brands(
    store: Annotated[TaxonomyStore, Depends(get_store)],
) -> BrandListResponse:
    brands = await store.list_brands()
    return BrandListResponse(brands=[BrandResponse.from_brand(b) for b in brands])


@router.post(
    "",
    response_model=BrandResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Create brand",
)
async def create_brand(
    request: BrandCreateRequest,
    store: Annotated[TaxonomyStore, Depends(get_store)],
    actor: Annotated[str | None, Depends(get_actor)],
) -> BrandResponse:
    brand = await store.create_brand(
        request.name,
        logo=request.logo,
        description=request.description,
        actor=actor,
    )
    return BrandResponse.from_brand(brand)
