"""Product search query-string codec.

Translates between the product listing URL query string and a
validated SearchFilter. Decoding never raises: missing or malformed
values fall back to their defaults so a bad link still renders a page.

Query-string contract:
    sort        string                  default ""
    size        string list             default []
    type        string list             default []
    brand       string list             default []
    style       string list             default []
    minPrice    integer >= 0            default 0
    maxPrice    integer >= 0            default 30000
    page        zero-based integer      default 0
    limit       integer >= 1            default 20

List keys accept repeated keys (``brand=a&brand=b``), comma-joined
values (``brand=a,b``) or both. Values containing commas cannot be
represented.
"""

import re
from dataclasses import dataclass, field

import httpx

DEFAULT_SORT = ""
DEFAULT_MIN_PRICE = 0
DEFAULT_MAX_PRICE = 30000
DEFAULT_PAGE = 0
DEFAULT_LIMIT = 20

LIST_KEYS = ("size", "type", "brand", "style")

_INT_PATTERN = re.compile(r"^[+-]?\d+$")


@dataclass
class SearchFilter:
    """Filter for one product listing query.

    Attributes:
        sort: Sort key, "" for no sort.
        size: Selected sizes.
        type: Selected type slugs.
        brand: Selected brands.
        style: Selected riding styles.
        min_price: Lower price bound.
        max_price: Upper price bound.
        page: Zero-based page index.
        limit: Page size.
    """

    sort: str = DEFAULT_SORT
    size: list[str] = field(default_factory=list)
    type: list[str] = field(default_factory=list)
    brand: list[str] = field(default_factory=list)
    style: list[str] = field(default_factory=list)
    min_price: int = DEFAULT_MIN_PRICE
    max_price: int = DEFAULT_MAX_PRICE
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return self.page * self.limit


def _parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    raw = raw.strip()
    if not _INT_PATTERN.match(raw):
        return None
    try:
        return int(raw)
    except ValueError:
        # Exceeds the interpreter's integer string conversion limit
        return None


def _parse_list(values: list[str]) -> list[str]:
    result: list[str] = []
    seen: set[str] = set()
    for value in values:
        for item in value.split(","):
            item = item.strip()
            if item and item not in seen:
                seen.add(item)
                result.append(item)
    return result


def decode(query: str | None) -> SearchFilter:
    """Decode a query string into a SearchFilter.

    Args:
        query: Raw query string, with or without a leading "?".

    Returns:
        Normalized filter. Unknown keys are ignored.
    """
    params = httpx.QueryParams((query or "").lstrip("?"))

    page = _parse_int(params.get("page"))
    page = DEFAULT_PAGE if page is None else max(page, 0)

    limit = _parse_int(params.get("limit"))
    if limit is None or limit < 1:
        limit = DEFAULT_LIMIT

    min_price = _parse_int(params.get("minPrice"))
    min_price = DEFAULT_MIN_PRICE if min_price is None else max(min_price, 0)
    max_price = _parse_int(params.get("maxPrice"))
    max_price = DEFAULT_MAX_PRICE if max_price is None else max(max_price, 0)
    if min_price > max_price:
        min_price, max_price = max_price, min_price

    lists = {key: _parse_list(params.get_list(key)) for key in LIST_KEYS}

    return SearchFilter(
        sort=(params.get("sort") or DEFAULT_SORT).strip(),
        min_price=min_price,
        max_price=max_price,
        page=page,
        limit=limit,
        **lists,
    )


def encode(search: SearchFilter) -> str:
    """Encode a SearchFilter as a minimal canonical query string.

    Keys equal to their default are omitted and keys are emitted in a
    fixed order, so equal filters always produce the same string.

    Args:
        search: Filter to encode.

    Returns:
        Query string without a leading "?" ("" for the default filter).
    """
    pairs: list[tuple[str, str | int]] = []

    if search.sort != DEFAULT_SORT:
        pairs.append(("sort", search.sort))
    for key in LIST_KEYS:
        values = getattr(search, key)
        if values:
            pairs.append((key, ",".join(values)))
    if search.min_price != DEFAULT_MIN_PRICE:
        pairs.append(("minPrice", search.min_price))
    if search.max_price != DEFAULT_MAX_PRICE:
        pairs.append(("maxPrice", search.max_price))
    if search.page != DEFAULT_PAGE:
        pairs.append(("page", search.page))
    if search.limit != DEFAULT_LIMIT:
        pairs.append(("limit", search.limit))

    return str(httpx.QueryParams(pairs))
