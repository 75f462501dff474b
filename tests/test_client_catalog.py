from datetime import datetime, timedelta

import pytest

from farmfresh.client.catalog import filter_products, list_products, price_ceiling, sort_products
from farmfresh.schemas.product import ProductOut

_ids = iter(range(1, 10_000))


def _product(name="Apples", price=1.0, **kw):
    pid = next(_ids)
    data = {
        "id": pid, "slug": f"p-{pid}", "farmer_id": 1, "category_id": 1,
        "name": name, "price": price, "description": f"{name} from the farm",
    }
    data.update(kw)
    return ProductOut(**data)


def _names(products):
    return [p.name for p in products]


def test_price_low_to_high():
    products = [_product("c", 3), _product("a", 1), _product("b", 2)]
    assert [p.price for p in sort_products(products, "price-low")] == [1, 2, 3]
    assert [p.price for p in sort_products(products, "price-high")] == [3, 2, 1]


def test_featured_first_then_name():
    products = [
        _product("Plums"), _product("Kale", featured=True),
        _product("apples"), _product("Beets", featured=True),
    ]
    assert _names(sort_products(products)) == ["Beets", "Kale", "apples", "Plums"]


def test_equal_featured_flags_fall_back_to_name():
    products = [_product("Zucchini"), _product("Carrots"), _product("Melon")]
    assert _names(sort_products(products, "featured")) == ["Carrots", "Melon", "Zucchini"]


def test_name_rating_and_newest_sorts():
    now = datetime(2026, 5, 1)
    old = _product("Old", rating=4.5, created_at=now - timedelta(days=3))
    new = _product("New", rating=3.0, created_at=now)
    undated = _product("Undated", rating=5.0)
    products = [old, new, undated]

    assert _names(sort_products(products, "name-asc")) == ["New", "Old", "Undated"]
    assert _names(sort_products(products, "name-desc")) == ["Undated", "Old", "New"]
    assert _names(sort_products(products, "rating")) == ["Undated", "Old", "New"]
    assert _names(sort_products(products, "newest")) == ["New", "Old", "Undated"]


def test_unknown_sort_option():
    with pytest.raises(ValueError):
        sort_products([_product()], "random")


def test_sort_does_not_mutate_input():
    products = [_product("b", 2), _product("a", 1)]
    sort_products(products, "price-low")
    assert _names(products) == ["b", "a"]


def test_search_matches_name_or_description():
    carrots = _product("Carrots", description="Crunchy roots")
    honey = _product("Honey", description="Raw wildflower honey")
    assert filter_products([carrots, honey], search="CARROT") == [carrots]
    assert filter_products([carrots, honey], search="wildflower") == [honey]
    assert filter_products([carrots, honey], search="  ") == [carrots, honey]


def test_category_price_and_organic_filters():
    apples = _product("Apples", 3.99, category_id=1, is_organic=True)
    carrots = _product("Carrots", 2.49, category_id=2)
    eggs = _product("Eggs", 4.50, category_id=4, is_organic=True)
    products = [apples, carrots, eggs]

    assert filter_products(products, category_ids=[1, 4]) == [apples, eggs]
    assert filter_products(products, category_ids=[]) == products
    assert filter_products(products, price_range=(2.49, 3.99)) == [apples, carrots]
    assert filter_products(products, price_range=(None, 3)) == [carrots]
    assert filter_products(products, organic_only=True) == [apples, eggs]


def test_list_products_chains_filter_and_sort():
    products = [_product("b", 5, is_organic=True), _product("a", 9, is_organic=True), _product("c", 1)]
    result = list_products(products, sort_by="price-high", organic_only=True)
    assert [p.price for p in result] == [9, 5]


def test_price_ceiling():
    assert price_ceiling([_product(price=3.2), _product(price=8.01)]) == 9.0
    assert price_ceiling([]) == 100.0
