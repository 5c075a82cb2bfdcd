"""Category API endpoints.

Provides the admin editor operations on categories and their types:
create, update, icon upload, type append and delete.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from storefront.api.dependencies import get_actor, get_editor, get_store
from storefront.api.errors import editor_failure
from storefront.api.schemas import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
    ErrorResponse,
    IconUploadSchema,
    TypeCreateRequest,
    TypeResponse,
)
from storefront.catalog.editor import CatalogAdminEditor
from storefront.catalog.store import TaxonomyStore, TypeInput

router = APIRouter(prefix="/categories", tags=["Categories"])

_WRITE_ERRORS = {
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def _stage_icon(editor: CatalogAdminEditor, request: CategoryCreateRequest) -> None:
    if request.icon is None:
        return
    staged = editor.stage_icon(request.icon.to_asset())
    if not staged.success:
        raise editor_failure(staged)


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get category",
)
async def get_category(
    category_id: str,
    store: Annotated[TaxonomyStore, Depends(get_store)],
) -> CategoryResponse:
    return CategoryResponse.from_node(await store.get_category(category_id))


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_WRITE_ERRORS,
    summary="Create category",
    description="Create a category with its types and, optionally, an SVG icon.",
)
async def create_category(
    request: CategoryCreateRequest,
    editor: Annotated[CatalogAdminEditor, Depends(get_editor)],
) -> CategoryResponse:
    """Create a category.

    The category is saved before the icon is uploaded. If the upload
    fails the category stays unpublished and a 502 is returned naming it.

    Raises:
        HTTPException: If the editor reports a failure.
    """
    _stage_icon(editor, request)
    result = await editor.submit_create(request.to_input())
    if not result.success or result.category is None:
        raise editor_failure(result)
    return CategoryResponse.from_node(result.category)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    responses=_WRITE_ERRORS,
    summary="Update category",
    description="Replace category fields and reconcile its types.",
)
async def update_category(
    category_id: str,
    request: CategoryUpdateRequest,
    editor: Annotated[CatalogAdminEditor, Depends(get_editor)],
) -> CategoryResponse:
    _stage_icon(editor, request)
    result = await editor.submit_update(category_id, request.to_input())
    if not result.success or result.category is None:
        raise editor_failure(result)
    return CategoryResponse.from_node(result.category)


@router.put(
    "/{category_id}/icon",
    response_model=CategoryResponse,
    responses=_WRITE_ERRORS,
    summary="Attach category icon",
    description="Upload an SVG icon and publish the category.",
)
async def attach_icon(
    category_id: str,
    request: IconUploadSchema,
    store: Annotated[TaxonomyStore, Depends(get_store)],
    actor: Annotated[str | None, Depends(get_actor)],
) -> CategoryResponse:
    category = await store.attach_icon(category_id, request.to_asset(), actor=actor)
    return CategoryResponse.from_node(category)


@router.post(
    "/{category_id}/types",
    response_model=TypeResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_WRITE_ERRORS,
    summary="Add type",
)
async def add_type(
    category_id: str,
    request: TypeCreateRequest,
    store: Annotated[TaxonomyStore, Depends(get_store)],
    actor: Annotated[str | None, Depends(get_actor)],
) -> TypeResponse:
    node = await store.add_type(
        category_id,
        TypeInput(name=request.name, slug=request.slug),
        actor=actor,
    )
    return TypeResponse.from_node(node)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete category",
    description="Delete a category together with all of its types.",
)
async def delete_category(
    category_id: str,
    store: Annotated[TaxonomyStore, Depends(get_store)],
    actor: Annotated[str | None, Depends(get_actor)],
) -> Response:
    await store.delete_category(category_id, actor=actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
