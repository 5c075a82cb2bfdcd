"""SQLAlchemy models for the catalog taxonomy.

Defines Section, Category, Type and Brand tables for persistent storage.
Categories reference their Section by slug (an indexed lookup, not an
ownership relation); Types reference their Category by foreign key.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from storefront.catalog.taxonomy import Brand, CategoryNode, IconRef, SectionNode, TypeNode
from storefront.infrastructure.database import Base


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SectionModel(Base):
    """Top-level catalog grouping (e.g. "Helmets", "Riding Gear").

    Attributes:
        seq: Surrogate key, increasing in insertion order.
        id: Unique section identifier (UUID string).
        name: Display name.
        slug: URL-safe slug, unique among sections.
        created_at: Creation timestamp.
    """

    __tablename__ = "sections"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), nullable=False, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    __table_args__ = (
        UniqueConstraint("id", name="uq_sections_id"),
        UniqueConstraint("slug", name="uq_sections_slug"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<SectionModel(id={self.id}, slug={self.slug})>"

    def to_node(self) -> SectionNode:
        return SectionNode(id=self.id, name=self.name, slug=self.slug)


class CategoryModel(Base):
    """Mid-level grouping owned by one Section.

    Attributes:
        seq: Surrogate key, increasing in insertion order.
        id: Unique category identifier (UUID string).
        name: Display name.
        slug: Lower-case slug, unique among categories.
        section_slug: Slug of the owning section.
        icon_secure_url: URL of the persisted icon (set together with public id).
        icon_public_id: Storage id of the persisted icon.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "categories"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), nullable=False, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    section_slug: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    icon_secure_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    icon_public_id: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    __table_args__ = (
        UniqueConstraint("id", name="uq_categories_id"),
        UniqueConstraint("slug", name="uq_categories_slug"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<CategoryModel(id={self.id}, slug={self.slug}, section={self.section_slug})>"

    @property
    def icon(self) -> IconRef | None:
        if self.icon_secure_url and self.icon_public_id:
            return IconRef(secure_url=self.icon_secure_url, public_id=self.icon_public_id)
        return None

    def to_node(self, types: list[TypeNode] | None = None) -> CategoryNode:
        return CategoryNode(
            id=self.id,
            name=self.name,
            slug=self.slug,
            section=self.section_slug,
            icon=self.icon,
            types=list(types or []),
        )


class TypeModel(Base):
    """Leaf grouping owned by one Category.

    The owning category's applicable types are exactly the rows pointing
    at it, ordered by ``position``.

    Attributes:
        id: Unique type identifier (UUID string).
        name: Display name.
        slug: Lower-case slug, unique among all types.
        category_id: Owning category.
        position: Order within the owning category.
    """

    __tablename__ = "types"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (UniqueConstraint("slug", name="uq_types_slug"),)

    def __repr__(self) -> str:
        """String representation."""
        return f"<TypeModel(id={self.id}, slug={self.slug}, category_id={self.category_id})>"

    def to_node(self) -> TypeNode:
        return TypeNode(
            id=self.id,
            name=self.name,
            slug=self.slug,
            category_id=self.category_id,
        )


class BrandModel(Base):
    """Brand used as a product filter facet.

    Attributes:
        id: Unique brand identifier (UUID string).
        name: Trimmed brand name.
        logo: Optional logo URL.
        description: Optional description.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "brands"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    logo: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<BrandModel(id={self.id}, name={self.name})>"

    def to_brand(self) -> Brand:
        return Brand(
            id=self.id,
            name=self.name,
            logo=self.logo,
            description=self.description,
        )
