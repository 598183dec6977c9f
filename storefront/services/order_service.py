# storefront/services/order_service.py
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.errors import RecordStoreError
from storefront.domain.schemas import OrderOut, OrderLineOut
from storefront.repos.order_repo import OrderRepo


class CustomerOrderService:
    """Historia zamowien klienta (najnowsze pierwsze)."""

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)

    def list_orders(self, customer_id: str) -> List[OrderOut]:
        try:
            orders = self.repo.list_for_customer(customer_id)
        except SQLAlchemyError as e:
            raise RecordStoreError("Nie udalo sie pobrac zamowien") from e

        return [
            OrderOut(
                id=o.id,
                customer_id=o.customer_id,
                status=o.status,
                delivery_status=o.delivery_status,
                total_amount=o.total_amount,
                created_at=o.created_at,
                lines=[
                    OrderLineOut(
                        product_id=line.product_id,
                        product_name=line.product.name if line.product else "Usuniety produkt",
                        quantity=line.quantity,
                        price_at_purchase=line.price_at_purchase,
                    )
                    for line in o.lines
                ],
            )
            for o in orders
        ]
