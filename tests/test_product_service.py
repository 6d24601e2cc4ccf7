"""Tests for the product catalog service."""
import math

import pytest
from sqlalchemy.orm import Session

from catalog_api.errors import (
    DuplicateKey,
    InvalidArgument,
    InvalidId,
    NotFound,
    ValidationError,
)
from catalog_api.models.variant import Variant
from catalog_api.services import product_service as svc
from catalog_api.services.common import MAX_PAGE


def test_create_assigns_skus(db, product_payload):
    product = svc.create_product(
        product_payload(
            variants=[
                {"color": "Red", "size": "M", "stock": 5},
                {"color": "Blue", "size": "l", "stock": 1, "sku": "CUSTOM-1"},
            ]
        )
    )

    assert product.id is not None
    assert all(v.sku for v in product.variants)
    assert product.variants[0].sku.startswith("FOO-")
    assert product.variants[1].sku == "CUSTOM-1"
    assert product.variants[1].size == "L"
    assert product.total_stock == 6


def test_create_without_variants_fails(db, product_payload):
    with pytest.raises(ValidationError):
        svc.create_product(product_payload(variants=[]))
    with pytest.raises(ValidationError):
        svc.create_product({k: v for k, v in product_payload().items() if k != "variants"})


def test_duplicate_sku_is_reported(db, product_payload):
    svc.create_product(
        product_payload(variants=[{"color": "Red", "size": "M", "sku": "DUP-1"}])
    )
    with pytest.raises(DuplicateKey) as excinfo:
        svc.create_product(
            product_payload(variants=[{"color": "Blue", "size": "S", "sku": "DUP-1"}])
        )
    assert "SKU" in excinfo.value.message


def test_get_product_errors(db):
    with pytest.raises(InvalidId):
        svc.get_product("not-an-id")
    with pytest.raises(InvalidId):
        svc.get_product("0")
    with pytest.raises(NotFound):
        svc.get_product("9999")


@pytest.mark.parametrize(
    "bad_id", ["\u00b2", "\u0661", "\uff11", "1.0", "+1", "99999999999", "9" * 5000]
)
def test_get_product_rejects_malformed_ids(db, product_payload, bad_id):
    svc.create_product(product_payload())
    with pytest.raises(InvalidId):
        svc.get_product(bad_id)


def test_list_filters(db, product_payload):
    svc.create_product(product_payload(name="Cheap Shoe", price=10))
    svc.create_product(
        product_payload(
            name="Sold Out Shoe",
            price=60,
            variants=[{"color": "Red", "size": "M", "stock": 0}],
        )
    )
    svc.create_product(
        product_payload(name="Tee Shirt", price=20, category="Clothing")
    )

    result = svc.list_products({"category": "Footwear"})
    assert {p.name for p in result["items"]} == {"Cheap Shoe", "Sold Out Shoe"}

    result = svc.list_products({"minPrice": "15", "maxPrice": "60"})
    assert {p.name for p in result["items"]} == {"Sold Out Shoe", "Tee Shirt"}

    result = svc.list_products({"inStock": "true"})
    assert "Sold Out Shoe" not in {p.name for p in result["items"]}
    assert all(p.is_in_stock() for p in result["items"])

    result = svc.list_products({"inStock": "false"})
    assert result["total"] == 3


def test_list_rejects_non_numeric_price(db):
    with pytest.raises(InvalidArgument):
        svc.list_products({"minPrice": "cheap"})


@pytest.mark.parametrize(
    "filters", [{"minPrice": "1e30"}, {"maxPrice": "-1e300"}, {"minPrice": "1e400"}]
)
def test_list_rejects_out_of_range_price(db, filters):
    with pytest.raises(InvalidArgument):
        svc.list_products(filters)


def test_create_rejects_price_beyond_column_range(db, product_payload):
    for price in (1e300, 1e11, 10_000_000_000):
        with pytest.raises(ValidationError) as excinfo:
            svc.create_product(product_payload(price=price))
        assert excinfo.value.errors[0]["field"] == "price"

    product = svc.create_product(product_payload(price=9_999_999_999.99))
    assert float(product.price) == 9_999_999_999.99


def test_list_is_newest_first(db, product_payload):
    first = svc.create_product(product_payload(name="First"))
    second = svc.create_product(product_payload(name="Second"))

    items = svc.list_products()["items"]
    assert [p.id for p in items] == [second.id, first.id]


@pytest.mark.parametrize("page,limit", [(1, 2), (2, 2), (3, 2), (1, 4), (2, 3)])
def test_pagination_invariants(db, product_payload, page, limit):
    for i in range(5):
        svc.create_product(product_payload(name=f"Shoe {i}"))

    result = svc.list_products(page=page, limit=limit)
    assert len(result["items"]) <= limit
    assert result["total"] == 5
    assert result["total_pages"] == math.ceil(5 / limit)


@pytest.mark.parametrize("page,limit", [("0", "-3"), ("abc", "xyz"), (None, None)])
def test_pagination_falls_back_to_defaults(db, product_payload, page, limit):
    svc.create_product(product_payload())
    result = svc.list_products(page=page, limit=limit)
    assert result["page"] == 1
    assert result["limit"] == 10


@pytest.mark.parametrize("page", ["100000000000000000000", 10**30, "1000001"])
def test_pagination_far_past_the_end_is_empty(db, product_payload, page):
    svc.create_product(product_payload())
    result = svc.list_products(page=page, limit=100)
    assert result["items"] == []
    assert result["page"] == MAX_PAGE
    assert result["total"] == 1
    assert result["limit"] == 100


def test_soft_delete_hides_from_listing(db, product_payload):
    product = svc.create_product(product_payload())
    svc.soft_delete_product(product.id)

    assert product.id not in [p.id for p in svc.list_products()["items"]]
    assert svc.get_products_by_category("Footwear") == []
    assert svc.get_product(product.id).is_active is False


def test_by_color_substring(db, product_payload):
    match = svc.create_product(
        product_payload(variants=[{"color": "Navy Blue", "size": "M"}])
    )
    svc.create_product(product_payload(variants=[{"color": "Red", "size": "M"}]))

    assert [p.id for p in svc.get_products_by_color("blue")] == [match.id]
    assert [p.id for p in svc.get_products_by_color("NAVY")] == [match.id]
    assert svc.get_products_by_color("100%") == []


def test_search(db, product_payload):
    with pytest.raises(InvalidArgument):
        svc.search_products("")
    with pytest.raises(InvalidArgument):
        svc.search_products("   ")

    weak = svc.create_product(
        product_payload(
            name="Leather Belt",
            category="Accessories",
            description="Pairs well with any shoe",
        )
    )
    strong = svc.create_product(
        product_payload(name="Running Shoe", tags=["shoes"], description="A shoe.")
    )
    svc.create_product(product_payload(name="Coffee Mug", category="Home"))

    results = svc.search_products("Shoe")
    assert [p.id for p in results] == [strong.id, weak.id]


def test_search_skips_inactive(db, product_payload):
    product = svc.create_product(product_payload())
    svc.soft_delete_product(product.id)
    assert svc.search_products("Shoe") == []


def test_update_revalidates(db, product_payload):
    product = svc.create_product(product_payload())

    updated = svc.update_product(
        product.id, {"price": 75.5, "tags": ["Sale"], "rating": {"average": 4}}
    )
    assert float(updated.price) == 75.5
    assert updated.tags == ["sale"]
    assert updated.rating_average == 4
    assert updated.name == "Shoe"

    with pytest.raises(ValidationError):
        svc.update_product(product.id, {"category": "Toys"})
    with pytest.raises(ValidationError):
        svc.update_product(product.id, {"variants": []})
    with pytest.raises(ValidationError):
        svc.update_product(product.id, {"unknown": 1})
    with pytest.raises(NotFound):
        svc.update_product(9999, {"price": 1})


def test_update_replaces_variants_keeping_skus(db, product_payload):
    product = svc.create_product(product_payload())
    kept = product.variants[0]
    kept_id, kept_sku = kept.id, kept.sku

    updated = svc.update_product(
        product.id,
        {
            "variants": [
                {"id": kept_id, "color": "Crimson", "size": "M", "stock": 9},
                {"color": "Black", "size": "XL", "stock": 1},
            ]
        },
    )

    assert len(updated.variants) == 2
    assert updated.variants[0].id == kept_id
    assert updated.variants[0].sku == kept_sku
    assert updated.variants[0].color == "Crimson"
    assert updated.variants[1].sku


def test_update_with_unknown_variant_id(db, product_payload):
    product = svc.create_product(product_payload())
    with pytest.raises(NotFound):
        svc.update_product(
            product.id, {"variants": [{"id": 4242, "color": "Red", "size": "M"}]}
        )


def test_reactivate_through_update(db, product_payload):
    product = svc.create_product(product_payload())
    svc.soft_delete_product(product.id)
    svc.update_product(product.id, {"isActive": True})
    assert svc.list_products()["total"] == 1


def test_add_variant(db, product_payload):
    product = svc.create_product(product_payload())
    updated = svc.add_variant(product.id, {"color": "Green", "size": "s", "stock": 2})

    assert [v.color for v in updated.variants] == ["Red", "Green"]
    assert updated.variants[1].sku

    with pytest.raises(ValidationError):
        svc.add_variant(product.id, {"color": "Green", "size": "Giant"})
    with pytest.raises(NotFound):
        svc.add_variant(9999, {"color": "Green", "size": "S"})


def test_update_variant_stock(db, product_payload):
    product = svc.create_product(product_payload())
    variant_id = product.variants[0].id

    updated = svc.update_variant_stock(product.id, variant_id, 12)
    assert updated.variants[0].stock == 12
    assert updated.total_stock == 12

    with pytest.raises(ValidationError):
        svc.update_variant_stock(product.id, variant_id, -1)
    with pytest.raises(NotFound):
        svc.update_variant_stock(product.id, 9999, 1)
    with pytest.raises(NotFound):
        svc.update_variant_stock(9999, variant_id, 1)
    with pytest.raises(InvalidId):
        svc.update_variant_stock(product.id, "abc", 1)


def test_concurrent_stock_writes_last_one_wins(db, product_payload):
    product = svc.create_product(product_payload())
    product_id, variant_id = product.id, product.variants[0].id

    other = Session(db.engine)
    try:
        stale = other.get(Variant, variant_id)
        assert stale.stock == 5

        svc.update_variant_stock(product_id, variant_id, 3)
        stale.stock = 7
        other.commit()
    finally:
        other.close()

    db.session.expire_all()
    final = svc.get_product(product_id).variants[0].stock
    assert final in {3, 7}
    assert final == 7


def test_remove_variant(db, product_payload):
    product = svc.create_product(
        product_payload(
            variants=[
                {"color": "Red", "size": "M", "stock": 1},
                {"color": "Blue", "size": "M", "stock": 2},
            ]
        )
    )
    first, second = (v.id for v in product.variants)

    updated = svc.remove_variant(product.id, first)
    assert [v.id for v in updated.variants] == [second]

    with pytest.raises(NotFound):
        svc.remove_variant(product.id, first)


def test_remove_last_variant_is_rejected(db, product_payload):
    product = svc.create_product(product_payload())
    with pytest.raises(ValidationError):
        svc.remove_variant(product.id, product.variants[0].id)
    assert len(svc.get_product(product.id).variants) == 1


def test_statistics(db, product_payload):
    svc.create_product(
        product_payload(
            price=50,
            variants=[
                {"color": "Red", "size": "M", "stock": 5},
                {"color": "Blue", "size": "L", "stock": 1},
            ],
        )
    )
    svc.create_product(product_payload(price=70))
    svc.create_product(product_payload(price=20, category="Clothing"))
    hidden = svc.create_product(product_payload(price=1000))
    svc.soft_delete_product(hidden.id)

    stats = svc.get_statistics()
    assert stats["totalProducts"] == 3
    assert stats["categoryDistribution"] == [
        {"category": "Footwear", "count": 2, "averagePrice": 60.0},
        {"category": "Clothing", "count": 1, "averagePrice": 20.0},
    ]
    assert stats["variantStats"] == {"totalVariants": 4, "totalStock": 16}


def test_statistics_empty(db):
    stats = svc.get_statistics()
    assert stats == {
        "totalProducts": 0,
        "categoryDistribution": [],
        "variantStats": {"totalVariants": 0, "totalStock": 0},
    }
