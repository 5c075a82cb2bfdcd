"""Tests for the product search query-string codec."""

import pytest

from storefront.catalog.search_params import (
    DEFAULT_LIMIT,
    DEFAULT_MAX_PRICE,
    SearchFilter,
    decode,
    encode,
)


class TestDecode:
    """Tests for decode."""

    @pytest.mark.parametrize("query", [None, "", "?"])
    def test_empty_query_gives_defaults(self, query: str | None) -> None:
        assert decode(query) == SearchFilter()

    def test_full_query(self) -> None:
        search = decode(
            "?sort=price-asc&size=M,L&type=full-face&brand=Shoei&brand=Arai"
            "&style=touring&minPrice=100&maxPrice=900&page=2&limit=50"
        )
        assert search.sort == "price-asc"
        assert search.size == ["M", "L"]
        assert search.type == ["full-face"]
        assert search.brand == ["Shoei", "Arai"]
        assert search.style == ["touring"]
        assert (search.min_price, search.max_price) == (100, 900)
        assert (search.page, search.limit) == (2, 50)
        assert search.offset == 100

    def test_list_values_deduplicated_and_trimmed(self) -> None:
        search = decode("brand=Shoei,%20Arai&brand=Shoei&brand=,")
        assert search.brand == ["Shoei", "Arai"]

    def test_percent_encoded_values(self) -> None:
        search = decode("brand=REV%27IT%21&sort=name%20desc")
        assert search.brand == ["REV'IT!"]
        assert search.sort == "name desc"

    @pytest.mark.parametrize("raw", ["abc", "1.5", "", "1e3", "9" * 5000])
    def test_malformed_numbers_fall_back(self, raw: str) -> None:
        search = decode(f"page={raw}&limit={raw}&minPrice={raw}&maxPrice={raw}")
        assert search.page == 0
        assert search.limit == DEFAULT_LIMIT
        assert search.min_price == 0
        assert search.max_price == DEFAULT_MAX_PRICE

    def test_negative_values_clamped(self) -> None:
        search = decode("page=-3&minPrice=-10")
        assert search.page == 0
        assert search.min_price == 0

    @pytest.mark.parametrize("limit", ["0", "-1"])
    def test_non_positive_limit_uses_default(self, limit: str) -> None:
        assert decode(f"limit={limit}").limit == DEFAULT_LIMIT

    def test_large_limit_kept(self) -> None:
        assert decode("limit=150").limit == 150

    def test_inverted_prices_swapped(self) -> None:
        search = decode("minPrice=500&maxPrice=100")
        assert (search.min_price, search.max_price) == (100, 500)

    def test_unknown_keys_ignored(self) -> None:
        assert decode("utm_source=mail&color=red") == SearchFilter()


class TestEncode:
    """Tests for encode."""

    def test_default_filter_is_empty(self) -> None:
        assert encode(SearchFilter()) == ""

    def test_only_non_default_keys_in_fixed_order(self) -> None:
        search = SearchFilter(limit=40, brand=["Shoei", "Arai"], sort="new", page=1)
        assert encode(search) == "sort=new&brand=Shoei%2CArai&page=1&limit=40"

    def test_canonical_form_is_stable(self) -> None:
        """Decoding then re-encoding a canonical string returns it unchanged."""
        canonical = encode(decode("limit=40&brand=Arai&brand=Shoei&size=XL&minPrice=10"))
        assert encode(decode(canonical)) == canonical
        assert decode(canonical).brand == ["Arai", "Shoei"]

    def test_values_with_spaces_round_trip(self) -> None:
        search = SearchFilter(style=["Adventure Touring"], sort="price asc")
        assert decode(encode(search)) == search

    @pytest.mark.parametrize(
        "search",
        [
            SearchFilter(limit=150),
            SearchFilter(page=3, limit=1000, brand=["Shoei"]),
            SearchFilter(page=10**15, min_price=50, max_price=50),
        ],
    )
    def test_filters_round_trip(self, search: SearchFilter) -> None:
        assert decode(encode(search)) == search
