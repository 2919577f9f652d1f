"""Integration tests for cached catalogue listings."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.caching import get_server_cache, set_server_cache
from storefront.caching.server_cache import ServerCache
from storefront.catalogue import queries
from storefront.catalogue.product.product import Product


@pytest.fixture()
def catalogue(make_category, make_product):
    make_category(name="Women")
    make_category(name="Accessories")
    return {
        "kurta": make_product(name="Linen Kurta", is_featured=True, is_new=True, tags=["linen", "summer"]),
        "saree": make_product(
            name="Silk Saree",
            description="Banarasi silk",
            price=4999.0,
            compare_at_price=6999.0,
            is_sale=True,
            is_trending=True,
        ),
        "bag": make_product(
            name="Jute Tote",
            description="Everyday carry bag",
            category="Accessories",
            price=699.0,
            stock=0,
        ),
    }


def _names(products):
    return sorted(p["name"] for p in products)


class TestListings:
    def test_list_products(self, catalogue):
        assert _names(queries.list_products()) == ["Jute Tote", "Linen Kurta", "Silk Saree"]

    def test_merchandising_listings(self, catalogue):
        assert _names(queries.featured_products()) == ["Linen Kurta"]
        assert _names(queries.trending_products()) == ["Silk Saree"]
        assert _names(queries.new_products()) == ["Linen Kurta"]
        assert _names(queries.sale_products()) == ["Silk Saree"]

    def test_products_in_category(self, catalogue):
        assert _names(queries.products_in_category("Accessories")) == ["Jute Tote"]

    def test_product_dict_shape(self, catalogue):
        product = queries.get_product(catalogue["saree"])
        assert product["id"] == catalogue["saree"]
        assert product["price"] == 4999.0
        assert product["compare_at_price"] == 6999.0
        assert product["is_sale"] is True

    def test_missing_product(self, catalogue):
        with pytest.raises(ObjectNotFoundError):
            queries.get_product("missing")

    def test_categories_sorted_by_name(self, catalogue):
        assert [c["name"] for c in queries.list_categories()] == ["Accessories", "Women"]

    def test_category_by_slug(self, catalogue):
        assert queries.get_category_by_slug("accessories")["name"] == "Accessories"
        with pytest.raises(ObjectNotFoundError):
            queries.get_category_by_slug("garden")

    def test_listing_is_not_capped_at_a_page(self, women_category, make_product):
        for i in range(105):
            make_product(name=f"Block Print Kurta {i}")

        assert len(queries.list_products()) == 105
        assert len(queries.products_in_category("Women")) == 105


class TestSearch:
    def test_matches_name_case_insensitively(self, catalogue):
        assert _names(queries.search_products("KURTA")) == ["Linen Kurta"]

    def test_matches_description_and_category(self, catalogue):
        assert _names(queries.search_products("banarasi")) == ["Silk Saree"]
        assert _names(queries.search_products("accessories")) == ["Jute Tote"]

    def test_matches_tags(self, catalogue):
        assert _names(queries.search_products("summer")) == ["Linen Kurta"]

    def test_no_match(self, catalogue):
        assert queries.search_products("telescope") == []

    def test_blank_query_rejected(self, catalogue):
        with pytest.raises(ValidationError):
            queries.search_products("   ")


class TestCaching:
    def test_listing_is_served_from_cache(self, catalogue):
        first = queries.list_products()

        # Bypass the handlers so nothing invalidates the cache
        repo = current_domain.repository_for(Product)
        product = repo.get(catalogue["kurta"])
        repo._dao.delete(product)

        assert queries.list_products() == first

    def test_catalogue_change_refreshes_listing(self, catalogue, make_product):
        queries.list_products()

        make_product(name="Cotton Dupatta")

        assert "Cotton Dupatta" in _names(queries.list_products())

    def test_listings_stored_under_catalogue_prefix(self, catalogue):
        queries.featured_products()
        assert get_server_cache().invalidate_prefix("catalogue:") >= 1


class FakeClock:
    def __init__(self, now=1_000_000):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class TestSearchCaching:
    @pytest.fixture()
    def clock(self):
        clock = FakeClock()
        set_server_cache(ServerCache(clock=clock))
        return clock

    def _delete_behind_the_cache(self, product_id):
        repo = current_domain.repository_for(Product)
        repo._dao.delete(repo.get(product_id))

    def test_search_results_expire_before_listings(self, catalogue, clock):
        assert _names(queries.search_products("kurta")) == ["Linen Kurta"]
        listing = queries.list_products()

        self._delete_behind_the_cache(catalogue["kurta"])
        clock.advance(queries.SEARCH_TTL_MS + 1)

        assert queries.search_products("kurta") == []
        assert queries.list_products() == listing

    def test_search_results_cached_within_ttl(self, catalogue, clock):
        queries.search_products("kurta")

        self._delete_behind_the_cache(catalogue["kurta"])
        clock.advance(queries.SEARCH_TTL_MS - 1)

        assert _names(queries.search_products("kurta")) == ["Linen Kurta"]
