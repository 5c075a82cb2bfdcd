"""API schemas for the storefront catalog API.

Pydantic models for request/response validation and serialization.
"""

import base64
import binascii

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.catalog.search_params import SearchFilter
from storefront.catalog.store import CategoryInput, TypeInput
from storefront.catalog.taxonomy import (
    Brand,
    CategoryNode,
    IconAsset,
    IconRef,
    SectionNode,
    TypeNode,
)


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class IconSchema(BaseModel):
    """Persisted icon reference."""

    secure_url: str = Field(..., description="Public HTTPS URL of the icon")
    public_id: str = Field(..., description="Asset storage id")

    @classmethod
    def from_ref(cls, ref: IconRef | None) -> "IconSchema | None":
        if ref is None:
            return None
        return cls(secure_url=ref.secure_url, public_id=ref.public_id)


class IconUploadSchema(BaseModel):
    """Icon file sent inline as base64."""

    filename: str = Field(..., min_length=1, description="Original file name")
    content_type: str = Field(
        default=IconAsset.SVG_CONTENT_TYPE, description="MIME type, must be SVG"
    )
    data: str = Field(..., description="Base64-encoded file content")

    @field_validator("data")
    @classmethod
    def validate_base64(cls, v: str) -> str:
        try:
            base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("data must be valid base64") from e
        return v

    def to_asset(self) -> IconAsset:
        return IconAsset(
            filename=self.filename,
            content_type=self.content_type,
            data=base64.b64decode(self.data),
        )


# ============================================================================
# Type Schemas
# ============================================================================


class TypeSchema(BaseModel):
    """Type in requests; ``_id`` (or ``id``) identifies an existing type on update."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(default=None, alias="_id", description="Existing type ID (updates only)")
    name: str = Field(..., description="Display name")
    slug: str | None = Field(default=None, description="Slug, derived from name if omitted")

    def to_input(self) -> TypeInput:
        return TypeInput(name=self.name, slug=self.slug, id=self.id)


class TypeResponse(BaseModel):
    """Type in responses."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Type ID")
    name: str = Field(..., description="Display name")
    slug: str = Field(..., description="Slug")

    @classmethod
    def from_node(cls, node: TypeNode) -> "TypeResponse":
        return cls(id=node.id, name=node.name, slug=node.slug)


class ApplicableTypeSchema(BaseModel):
    """Type summary embedded in section menus."""

    name: str
    slug: str


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryCreateRequest(BaseModel):
    """Request to create a category."""

    name: str = Field(..., description="Display name", examples=["Helmets"])
    section: str = Field(..., description="Owning section slug", examples=["riding-gear"])
    slug: str | None = Field(default=None, description="Slug, derived from name if omitted")
    types: list[TypeSchema] = Field(default_factory=list, description="Applicable types")
    icon: IconUploadSchema | None = Field(default=None, description="Optional SVG icon")

    def to_input(self) -> CategoryInput:
        return CategoryInput(
            name=self.name,
            section=self.section,
            slug=self.slug,
            types=[t.to_input() for t in self.types],
        )


class CategoryUpdateRequest(CategoryCreateRequest):
    """Request to update a category.

    Types carrying an ``id`` are kept and updated, types without one are
    added, and existing types left out are removed. Omitting ``icon``
    keeps the current icon.
    """


class TypeCreateRequest(BaseModel):
    """Request to append a type to a category."""

    name: str = Field(..., description="Display name", examples=["Full Face"])
    slug: str | None = Field(default=None, description="Slug, derived from name if omitted")


class CategoryResponse(BaseModel):
    """Category record, keyed by ``_id``."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Category ID")
    name: str
    slug: str
    section: str = Field(..., description="Owning section slug")
    icon: IconSchema | None = None
    types: list[TypeResponse] = Field(default_factory=list)
    published: bool = Field(..., description="Whether an icon is attached")

    @classmethod
    def from_node(cls, node: CategoryNode) -> "CategoryResponse":
        return cls(
            id=node.id,
            name=node.name,
            slug=node.slug,
            section=node.section,
            icon=IconSchema.from_ref(node.icon),
            types=[TypeResponse.from_node(t) for t in node.types],
            published=node.is_published,
        )


# ============================================================================
# Section Schemas
# ============================================================================


class SectionCreateRequest(BaseModel):
    """Request to create a section."""

    name: str = Field(..., description="Display name", examples=["Riding Gear"])
    slug: str | None = Field(default=None, description="Slug, derived from name if omitted")


class SectionCategorySchema(BaseModel):
    """Category summary nested in a section."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    slug: str
    section: str
    icon: IconSchema | None = None
    applicable_types: list[ApplicableTypeSchema] = Field(
        default_factory=list, alias="applicableTypes"
    )


class SectionResponse(BaseModel):
    """Section record with its categories."""

    id: str | None = None
    name: str
    section: str = Field(..., description="Section display name")
    slug: str
    categories: list[SectionCategorySchema] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: SectionNode) -> "SectionResponse":
        return cls(
            id=node.id,
            name=node.name,
            section=node.name,
            slug=node.slug,
            categories=[
                SectionCategorySchema(
                    id=c.id,
                    name=c.name,
                    slug=c.slug,
                    section=c.section,
                    icon=IconSchema.from_ref(c.icon),
                    applicable_types=[
                        ApplicableTypeSchema(**t) for t in c.applicable_types
                    ],
                )
                for c in node.categories
            ],
        )


class SectionListResponse(BaseModel):
    """All sections in insertion order."""

    sections: list[SectionResponse]


# ============================================================================
# Brand Schemas
# ============================================================================


class BrandCreateRequest(BaseModel):
    """Request to create a brand."""

    name: str = Field(..., description="Brand name", examples=["Shoei"])
    logo: str | None = Field(default=None, description="Logo URL")
    description: str | None = None


class BrandResponse(BaseModel):
    """Brand record."""

    id: str
    name: str
    logo: str | None = None
    description: str | None = None

    @classmethod
    def from_brand(cls, brand: Brand) -> "BrandResponse":
        return cls(
            id=brand.id,
            name=brand.name,
            logo=brand.logo,
            description=brand.description,
        )


class BrandListResponse(BaseModel):
    """All brands."""

    brands: list[BrandResponse]


# ============================================================================
# Filter & Search Schemas
# ============================================================================


class FilterOptionsResponse(BaseModel):
    """Facet values for a product filter UI."""

    section: str | None = Field(default=None, description="Section the options are scoped to")
    brands: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)


class SearchParamsResponse(BaseModel):
    """Normalized product search filter and its canonical query string."""

    model_config = ConfigDict(populate_by_name=True)

    sort: str
    size: list[str]
    type: list[str]
    brand: list[str]
    style: list[str]
    min_price: int = Field(..., alias="minPrice")
    max_price: int = Field(..., alias="maxPrice")
    page: int
    limit: int
    offset: int
    query: str = Field(..., description="Canonical query string")

    @classmethod
    def from_filter(cls, search: SearchFilter, query: str) -> "SearchParamsResponse":
        return cls(
            sort=search.sort,
            size=search.size,
            type=search.type,
            brand=search.brand,
            style=search.style,
            min_price=search.min_price,
            max_price=search.max_price,
            page=search.page,
            limit=search.limit,
            offset=search.offset,
            query=query,
        )
