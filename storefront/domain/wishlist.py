"""Wishlist value objects.

A wishlist lives in ephemeral client state (guest browser storage or a
session) and is never persisted by the catalog itself. Items are keyed
by product id; adding an id that is already present adds to its quantity.
"""

from dataclasses import dataclass, field, replace

from storefront.domain.exceptions import ValidationError


@dataclass(frozen=True)
class WishlistItem:
    """A product saved to a wishlist.

    Attributes:
        id: Product identifier.
        title: Optional display title.
        image_url: Optional display image.
        quantity: Number of units wanted (>= 1).
        sale_price: Sale price in cents, None when not on sale.
    """

    id: str
    title: str | None = None
    image_url: str | None = None
    quantity: int = 1
    sale_price: int | None = None

    def __post_init__(self) -> None:
        """Validate item invariants."""
        if not self.id:
            raise ValidationError("id", "Wishlist item id must not be empty")
        if self.quantity < 1:
            raise ValidationError("quantity", f"Quantity must be at least 1, got {self.quantity}")


@dataclass
class Wishlist:
    """Ordered collection of wishlist items, one per product id."""

    _items: dict[str, WishlistItem] = field(default_factory=dict)

    @property
    def items(self) -> list[WishlistItem]:
        """Items in the order they were first added."""
        return list(self._items.values())

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self._items.values())

    def add(self, item: WishlistItem) -> WishlistItem:
        """Add an item, merging quantities with an existing entry.

        Display fields of the newer item win when they are set.

        Args:
            item: Item to add.

        Returns:
            The stored item.
        """
        existing = self._items.get(item.id)
        if existing is None:
            self._items[item.id] = item
            return item

        merged = replace(
            existing,
            title=item.title or existing.title,
            image_url=item.image_url or existing.image_url,
            quantity=existing.quantity + item.quantity,
            sale_price=item.sale_price if item.sale_price is not None else existing.sale_price,
        )
        self._items[item.id] = merged
        return merged

    def remove(self, item_id: str) -> bool:
        """Remove an item. Returns False if it was not present."""
        return self._items.pop(item_id, None) is not None

    def contains(self, item_id: str) -> bool:
        return item_id in self._items

    def clear(self) -> None:
        self._items.clear()
