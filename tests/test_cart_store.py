from decimal import Decimal

import pytest

from storefront.domain.errors import FormValidationError
from storefront.domain.schemas import CatalogProduct, CartLineItem
from storefront.services.cart_store import CartStore


def product(pid="a1b2c3d4-0000-0000-0000-000000000001", price="10", stock=5, **kw):
    return CatalogProduct(id=pid, name=kw.pop("name", "Mouse"), price=Decimal(price), stock_quantity=stock, **kw)


def test_repeated_adds_merge_into_one_line():
    cart = CartStore()
    p = product()

    for n in (1, 2, 4):
        cart.add(p, n)

    items = cart.items()
    assert len(items) == 1
    assert items[0].quantity == 7
    assert items[0].persisted_product_id == p.id


def test_add_marks_cart_open():
    cart = CartStore()
    assert cart.is_open is False
    cart.add(product())
    assert cart.is_open is True
    cart.close()
    assert cart.is_open is False


def test_add_rejects_non_positive_quantity():
    cart = CartStore()
    with pytest.raises(FormValidationError):
        cart.add(product(), 0)
    assert len(cart) == 0


def test_add_does_not_clamp_to_stock():
    cart = CartStore()
    cart.add(product(stock=2), 5)
    assert cart.get(product().id).quantity == 5


def test_products_with_same_display_prefix_stay_separate():
    cart = CartStore()
    first = product(pid="deadbeef-0000-0000-0000-000000000001", name="First")
    second = product(pid="deadbeef-0000-0000-0000-000000000002", name="Second")

    cart.add(first)
    cart.add(second)

    items = cart.items()
    assert len(items) == 2
    assert items[0].display_id == items[1].display_id
    assert {i.persisted_product_id for i in items} == {first.id, second.id}


def test_update_quantity_sets_exact_value():
    cart = CartStore()
    p = product()
    cart.add(p, 3)

    cart.update_quantity(p.id, 1)
    assert cart.get(p.id).quantity == 1


@pytest.mark.parametrize("new_quantity", [0, -3])
def test_update_quantity_to_zero_or_below_removes_line(new_quantity):
    cart = CartStore()
    p = product()
    cart.add(p, 2)

    assert cart.update_quantity(p.id, new_quantity) is None
    assert cart.get(p.id) is None
    assert len(cart) == 0


def test_update_unknown_item_is_noop():
    cart = CartStore()
    assert cart.update_quantity("missing", 3) is None
    assert len(cart) == 0


def test_remove_and_clear():
    cart = CartStore()
    a, b = product(pid="aaaaaaaa-1"), product(pid="bbbbbbbb-1")
    cart.add(a)
    cart.add(b)

    cart.remove(a.id)
    cart.remove("missing")
    assert [i.persisted_product_id for i in cart.items()] == [b.id]

    cart.clear()
    assert cart.items() == []


def test_total_of_empty_cart_is_zero():
    assert CartStore().total() == Decimal("0")


def test_total_sums_price_times_quantity():
    cart = CartStore()
    cart.add(product(pid="aaaaaaaa-1", price="10"), 2)
    cart.add(product(pid="bbbbbbbb-1", price="5"), 1)

    assert cart.total() == Decimal("25.00")
    assert cart.count() == 3


def test_total_treats_bad_numbers_as_zero():
    cart = CartStore()
    cart.add(product(pid="aaaaaaaa-1", price="10"), 2)
    cart._items["broken"] = CartLineItem.model_construct(
        display_id=0,
        persisted_product_id="broken",
        name="Broken",
        price="not-a-number",
        image="",
        stock_quantity=1,
        quantity=None,
    )
    cart._items["nan"] = CartLineItem.model_construct(
        display_id=0,
        persisted_product_id="nan",
        name="NaN",
        price=Decimal("NaN"),
        image="",
        stock_quantity=1,
        quantity=3,
    )

    assert cart.total() == Decimal("20.00")


def test_items_returns_copies():
    cart = CartStore()
    p = product()
    cart.add(p, 1)

    cart.items()[0].quantity = 99
    assert cart.get(p.id).quantity == 1


def test_snapshot_returns_lines_and_total_together():
    cart = CartStore()
    cart.add(product(pid="aaaaaaaa-1", price="10"), 2)
    cart.add(product(pid="bbbbbbbb-1", price="5"))

    items, total = cart.snapshot()

    assert [i.persisted_product_id for i in items] == ["aaaaaaaa-1", "bbbbbbbb-1"]
    assert total == Decimal("25.00")


def test_remove_ordered_keeps_lines_added_later():
    cart = CartStore()
    a, b, late = product(pid="aaaaaaaa-1"), product(pid="bbbbbbbb-1"), product(pid="cccccccc-1")
    cart.add(a, 2)
    cart.add(b)
    ordered, _ = cart.snapshot()

    cart.add(a)
    cart.add(late)
    cart.remove_ordered(ordered)

    remaining = {i.persisted_product_id: i.quantity for i in cart.items()}
    assert remaining == {a.id: 1, late.id: 1}
