from decimal import Decimal

import pytest

from storefront.data.models import OrderModel, OrderLineModel, ProductModel
from storefront.domain.errors import ProductNotFound, RecordStoreError
from storefront.domain.schemas import ProductCreate
from storefront.services.seller_service import (
    SellerInventoryService,
    SellerOrderBoard,
    SellerOrderService,
)
from tests.fakes import FakeEmbeddingClient


def test_list_only_own_products_sorted_by_name(db, make_product):
    make_product(name="Zebra mug", seller_id="seller-1")
    make_product(name="Apple crate", seller_id="seller-1")
    make_product(name="Other", seller_id="seller-2")

    names = [p.name for p in SellerInventoryService(db).list_products("seller-1")]

    assert names == ["Apple crate", "Zebra mug"]


def test_create_product_with_embedding(db):
    embeddings = FakeEmbeddingClient(vector=[0.1, 0.2])
    svc = SellerInventoryService(db, embeddings)

    created = svc.create_product(
        "seller-1",
        ProductCreate(name="Lamp", description="Desk lamp", price=Decimal("20"), stock_quantity=4, image_url=""),
    )

    assert created.seller_id == "seller-1"
    assert created.image_url is None
    assert created.embedding == [0.1, 0.2]
    assert embeddings.calls == ["Lamp Desk lamp"]


def test_create_product_without_embedding_service(db):
    created = SellerInventoryService(db, FakeEmbeddingClient(vector=None)).create_product(
        "seller-1",
        ProductCreate(name="Lamp", price=Decimal("20"), stock_quantity=4),
    )
    assert created.embedding is None


def test_delete_requires_matching_owner(db, make_product):
    product_id = make_product(seller_id="seller-1").id
    svc = SellerInventoryService(db)

    with pytest.raises(ProductNotFound):
        svc.delete_product("seller-2", product_id)
    assert db.query(ProductModel).filter_by(id=product_id).count() == 1

    svc.delete_product("seller-1", product_id)
    assert db.query(ProductModel).filter_by(id=product_id).count() == 0


@pytest.fixture
def seller_order(db, make_product, make_profile):
    make_profile("customer-1", full_name="Jan Kowalski")
    mine = make_product(name="Mug", seller_id="seller-1")
    theirs = make_product(name="Plate", seller_id="seller-2")

    order = OrderModel(customer_id="customer-1", total_amount=Decimal("100"), status="pending")
    db.add(order)
    db.flush()
    db.add_all(
        [
            OrderLineModel(order_id=order.id, product_id=mine.id, quantity=2, price_at_purchase=Decimal("25")),
            OrderLineModel(order_id=order.id, product_id=theirs.id, quantity=1, price_at_purchase=Decimal("50")),
        ]
    )
    db.commit()
    return order


def test_seller_sees_only_own_order_lines(db, seller_order):
    rows = SellerOrderService(db).list_orders("seller-1")

    assert len(rows) == 1
    assert rows[0].product_name == "Mug"
    assert rows[0].customer_name == "Jan Kowalski"
    assert rows[0].quantity == 2
    assert rows[0].delivery_status == "processing"


def test_update_status_of_foreign_order_is_forbidden(db, seller_order):
    with pytest.raises(PermissionError):
        SellerOrderService(db).update_delivery_status("seller-3", seller_order.id, "shipped")


def test_board_applies_status_change(db, seller_order):
    board = SellerOrderBoard(SellerOrderService(db), "seller-1")
    board.load()

    rows = board.change_status(seller_order.id, "shipped")

    assert rows[0].delivery_status == "shipped"
    db.expire_all()
    assert db.get(OrderModel, seller_order.id).delivery_status == "shipped"


def test_board_reverts_local_status_when_write_fails(db, seller_order, monkeypatch):
    service = SellerOrderService(db)
    board = SellerOrderBoard(service, "seller-1")
    board.load()

    def fail(seller_id, order_id, status):
        raise RecordStoreError("write failed")

    monkeypatch.setattr(service, "update_delivery_status", fail)

    with pytest.raises(RecordStoreError):
        board.change_status(seller_order.id, "delivered")

    assert board.rows[0].delivery_status == "processing"
