# storefront/repos/order_repo.py
from datetime import datetime
from typing import List

from sqlalchemy import select, delete, exists, update
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.order import OrderModel
from storefront.data.models.order_line import OrderLineModel
from storefront.data.models.product import ProductModel
from storefront.data.models.profile import ProfileModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    # zapisy checkoutu, commit robi serwis po calej sekwencji
    def create_order_header(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_lines(self, lines: List[OrderLineModel]) -> None:
        self.db.add_all(lines)
        self.db.flush()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_for_customer(self, customer_id: str) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.customer_id == customer_id)
                .options(selectinload(OrderModel.lines).selectinload(OrderLineModel.product))
                .order_by(OrderModel.created_at.desc())
            ).scalars().all()
        )

    def seller_order_rows(self, seller_id: str):
        """Widok zamowien sprzedawcy: jeden wiersz na pozycje z jego produktem."""
        stmt = (
            select(
                OrderModel.id.label("order_id"),
                OrderModel.created_at,
                OrderModel.payment_mode,
                OrderModel.payment_status,
                OrderModel.delivery_status,
                ProfileModel.full_name.label("customer_name"),
                ProductModel.name.label("product_name"),
                OrderLineModel.quantity,
                OrderLineModel.price_at_purchase.label("price"),
            )
            .join(OrderLineModel, OrderLineModel.order_id == OrderModel.id)
            .join(ProductModel, ProductModel.id == OrderLineModel.product_id)
            .outerjoin(ProfileModel, ProfileModel.id == OrderModel.customer_id)
            .where(ProductModel.seller_id == seller_id)
            .order_by(OrderModel.created_at.desc())
        )
        return self.db.execute(stmt).mappings().all()

    def order_has_seller_products(self, order_id: str, seller_id: str) -> bool:
        stmt = (
            select(OrderLineModel.id)
            .join(ProductModel, ProductModel.id == OrderLineModel.product_id)
            .where(
                OrderLineModel.order_id == order_id,
                ProductModel.seller_id == seller_id,
            )
            .limit(1)
        )
        return self.db.execute(stmt).first() is not None

    def update_delivery_status(self, order_id: str, delivery_status: str) -> int:
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id)
            .values(delivery_status=delivery_status)
        )
        self.db.commit()
        return result.rowcount

    def delete_orphaned_pending(self, created_before: datetime) -> int:
        """Usuwa naglowki 'pending' bez zadnych pozycji."""
        no_lines = ~exists().where(OrderLineModel.order_id == OrderModel.id).correlate(OrderModel)
        result = self.db.execute(
            delete(OrderModel)
            .where(
                OrderModel.status == "pending",
                OrderModel.created_at < created_before,
                no_lines,
            )
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount
