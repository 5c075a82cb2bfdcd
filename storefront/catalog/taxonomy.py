"""Catalog taxonomy read model.

The storefront catalog is a three-level hierarchy:

    Section  (e.g. "Riding Gear")
      Category  (e.g. "Helmets")
        Type  (e.g. "Full Face")

Categories point at their Section by slug and Types point at their
Category by id. This module holds the plain dataclasses handed out by
the store and the function that links rows into the nested tree.
"""

from dataclasses import dataclass, field

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class IconRef:
    """Persisted icon reference returned by the asset storage service."""

    secure_url: str
    public_id: str


@dataclass(frozen=True)
class IconAsset:
    """Unsaved icon staged for upload.

    Attributes:
        filename: Original file name (e.g., "helmet.svg").
        content_type: MIME type; only SVG is accepted for icons.
        data: Raw file bytes.
    """

    filename: str
    content_type: str
    data: bytes

    SVG_CONTENT_TYPE = "image/svg+xml"

    @property
    def is_svg(self) -> bool:
        return self.content_type == self.SVG_CONTENT_TYPE

    @property
    def stem(self) -> str:
        """File name without its extension."""
        head, dot, _ = self.filename.rpartition(".")
        return head if dot and head else self.filename


@dataclass
class TypeNode:
    """Leaf level of the taxonomy.

    Attributes:
        id: Type ID.
        name: Display name.
        slug: Slug, unique among all Types.
        category_id: ID of the owning Category.
    """

    id: str
    name: str
    slug: str
    category_id: str


@dataclass
class CategoryNode:
    """Middle level of the taxonomy.

    Attributes:
        id: Category ID.
        name: Display name.
        slug: Slug, unique among all Categories.
        section: Slug of the owning Section.
        icon: Persisted icon, None until one is attached.
        types: Applicable Types in insertion order.
    """

    id: str
    name: str
    slug: str
    section: str
    icon: IconRef | None = None
    types: list[TypeNode] = field(default_factory=list)

    @property
    def is_published(self) -> bool:
        """A Category is published once its icon is a persisted reference."""
        return self.icon is not None

    @property
    def applicable_types(self) -> list[dict[str, str]]:
        """Lightweight name/slug pairs for navigation menus."""
        return [{"name": t.name, "slug": t.slug} for t in self.types]


@dataclass
class SectionNode:
    """Top level of the taxonomy.

    Attributes:
        id: Section ID.
        name: Display name.
        slug: Slug, unique among Sections.
        categories: Categories declaring this Section, in insertion order.
    """

    id: str | None
    name: str
    slug: str
    categories: list[CategoryNode] = field(default_factory=list, repr=False)


def build_tree(
    sections: list[SectionNode],
    categories: list[CategoryNode],
    types: list[TypeNode],
) -> list[SectionNode]:
    """Link flat taxonomy rows into nested Sections.

    Inputs must already be in insertion order; that order is kept at
    every level. Categories naming an unknown Section and Types naming
    an unknown Category are dropped with a warning.

    Args:
        sections: All sections.
        categories: All categories.
        types: All types.

    Returns:
        The sections list, with categories and types attached.
    """
    by_category_id: dict[str, CategoryNode] = {}
    for category in categories:
        category.types = []
        by_category_id[category.id] = category

    for type_node in types:
        owner = by_category_id.get(type_node.category_id)
        if owner is None:
            logger.warning(
                "Type references missing category",
                type_slug=type_node.slug,
                category_id=type_node.category_id,
            )
            continue
        owner.types.append(type_node)

    by_section_slug: dict[str, SectionNode] = {}
    for section in sections:
        section.categories = []
        by_section_slug[section.slug] = section

    for category in categories:
        section = by_section_slug.get(category.section)
        if section is None:
            logger.warning(
                "Category references unknown section",
                category_slug=category.slug,
                section=category.section,
            )
            continue
        section.categories.append(category)

    return sections


@dataclass
class Brand:
    """Flat brand facet, independent of the Section/Category/Type tree."""

    id: str
    name: str
    logo: str | None = None
    description: str | None = None
