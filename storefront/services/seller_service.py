# storefront/services/seller_service.py
from typing import Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import ProductNotFound, RecordStoreError
from storefront.domain.schemas import ProductCreate, SellerOrderOut, DeliveryStatus
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.embedding_client import EmbeddingClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class SellerInventoryService:
    """Produkty zalogowanego sprzedawcy: lista, dodanie, usuniecie."""

    def __init__(self, db: Session, embedding_client: EmbeddingClient | None = None):
        self.repo = ProductRepo(db)
        self.embedding_client = embedding_client

    def list_products(self, seller_id: str) -> List[ProductModel]:
        try:
            return self.repo.list_by_seller(seller_id)
        except SQLAlchemyError as e:
            raise RecordStoreError("Nie udalo sie pobrac produktow sprzedawcy") from e

    def create_product(self, seller_id: str, payload: ProductCreate) -> ProductModel:
        embedding = None
        if self.embedding_client is not None:
            embedding = self.embedding_client.embed(f"{payload.name} {payload.description}".strip())
            if embedding is None:
                logger.warning(f"Produkt '{payload.name}' zapisany bez embeddingu, nie bedzie w wyszukiwaniu")

        product = ProductModel(
            seller_id=seller_id,
            name=payload.name,
            description=payload.description or "",
            price=payload.price,
            stock_quantity=payload.stock_quantity,
            image_url=payload.image_url or None,
            category=payload.category or None,
            embedding=embedding,
        )
        try:
            created = self.repo.create_product(product)
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error adding product: {e}")
            raise RecordStoreError(f"Nie udalo sie dodac produktu: {e}") from e

        logger.info(f"Seller {seller_id} added product {created.id}")
        return created

    def delete_product(self, seller_id: str, product_id: str) -> None:
        try:
            deleted = self.repo.delete_owned_product(product_id, seller_id)
        except SQLAlchemyError as e:
            self.repo.rollback()
            raise RecordStoreError(f"Nie udalo sie usunac produktu: {e}") from e

        if deleted == 0:
            raise ProductNotFound("Produkt nie istnieje lub nalezy do innego sprzedawcy")

        logger.info(f"Seller {seller_id} deleted product {product_id}")


class SellerOrderService:
    def __init__(self, db: Session):
        self.repo = OrderRepo(db)

    def list_orders(self, seller_id: str) -> List[SellerOrderOut]:
        try:
            rows = self.repo.seller_order_rows(seller_id)
        except SQLAlchemyError as e:
            raise RecordStoreError("Nie udalo sie pobrac zamowien") from e

        return [
            SellerOrderOut(
                order_id=r["order_id"],
                created_at=r["created_at"],
                payment_mode=r["payment_mode"],
                payment_status=r["payment_status"],
                delivery_status=r["delivery_status"],
                customer_name=r["customer_name"] or "Unknown",
                product_name=r["product_name"],
                quantity=r["quantity"],
                price=r["price"],
            )
            for r in rows
        ]

    def update_delivery_status(self, seller_id: str, order_id: str, delivery_status: DeliveryStatus) -> None:
        if not self.repo.order_has_seller_products(order_id, seller_id):
            raise PermissionError("Brak dostepu do zamowienia")

        try:
            self.repo.update_delivery_status(order_id, delivery_status)
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error updating status: {e}")
            raise RecordStoreError("Nie udalo sie zmienic statusu zamowienia") from e

        logger.info(f"Order {order_id} delivery status -> {delivery_status}")


class SellerOrderBoard:
    """
    Lokalny widok zamowien sprzedawcy. Zmiana statusu najpierw lokalnie,
    potem zapis; gdy zapis sie nie uda, poprzedni status wraca.
    """

    def __init__(self, service: SellerOrderService, seller_id: str):
        self.service = service
        self.seller_id = seller_id
        self.rows: List[SellerOrderOut] = []

    def load(self) -> List[SellerOrderOut]:
        self.rows = self.service.list_orders(self.seller_id)
        return self.rows

    def change_status(self, order_id: str, delivery_status: DeliveryStatus) -> List[SellerOrderOut]:
        previous: Dict[int, str] = {}
        for idx, row in enumerate(self.rows):
            if row.order_id == order_id:
                previous[idx] = row.delivery_status
                row.delivery_status = delivery_status

        try:
            self.service.update_delivery_status(self.seller_id, order_id, delivery_status)
        except Exception:
            for idx, status in previous.items():
                self.rows[idx].delivery_status = status
            raise

        return self.rows
