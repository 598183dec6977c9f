# storefront/services/catalog_service.py
from decimal import Decimal
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.errors import EmbeddingUnavailable, ProductNotFound, RecordStoreError
from storefront.domain.schemas import CatalogProduct
from storefront.repos.product_repo import ProductRepo
from storefront.services.embedding_client import EmbeddingClient
from storefront.utils.settings import MATCH_THRESHOLD, MATCH_COUNT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ALL_CATEGORIES = "All"


def _category_filter(category: str | None) -> str | None:
    if not category or category == ALL_CATEGORIES:
        return None
    return category


def sort_products(products: List[CatalogProduct], sort_by: str) -> List[CatalogProduct]:
    if sort_by == "price-low":
        return sorted(products, key=lambda p: p.price)
    if sort_by == "price-high":
        return sorted(products, key=lambda p: p.price, reverse=True)
    if sort_by == "rating":
        return sorted(products, key=lambda p: p.rating or Decimal("0"), reverse=True)
    # featured: kolejnosc z magazynu (albo z podobienstwa)
    return list(products)


class CatalogService:
    """
    Odczyt katalogu:
    - wyszukiwanie semantyczne przez embedding + procedure wektorowa
    - filtr kategorii na dowolnym zbiorze wynikow
    - sortowanie
    """

    def __init__(
        self,
        db: Session,
        embedding_client: EmbeddingClient,
        match_threshold: float = MATCH_THRESHOLD,
        match_count: int = MATCH_COUNT,
    ):
        self.repo = ProductRepo(db)
        self.embedding_client = embedding_client
        self.match_threshold = match_threshold
        self.match_count = match_count

    def fetch_products(
        self,
        search_text: str | None = None,
        category: str | None = None,
        sort_by: str = "featured",
    ) -> List[CatalogProduct]:
        category = _category_filter(category)
        search_text = (search_text or "").strip()

        try:
            if search_text:
                logger.info(f"Generating embedding for: '{search_text}'")
                query_vector = self.embedding_client.embed(search_text)
                if query_vector is None:
                    raise EmbeddingUnavailable("Nie udalo sie wygenerowac embeddingu dla wyszukiwania")

                matches = self.repo.match_products_by_vector(
                    query_vector,
                    match_threshold=self.match_threshold,
                    match_count=self.match_count,
                )
                rows = [p for p, _ in matches]
                logger.info(f"Vector search returned {len(rows)} matches")
            else:
                rows = self.repo.list_products(category=category)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching products: {e}")
            raise RecordStoreError("Nie udalo sie pobrac produktow") from e

        products = [CatalogProduct.model_validate(r) for r in rows]

        #filtr kategorii dziala na obu zbiorach wynikow
        if category:
            products = [p for p in products if p.category == category]

        return sort_products(products, sort_by)

    def get_product(self, product_id: str) -> CatalogProduct:
        try:
            row = self.repo.get_product(product_id)
        except SQLAlchemyError as e:
            raise RecordStoreError("Nie udalo sie pobrac produktu") from e
        if not row:
            raise ProductNotFound("Produkt nie istnieje")
        return CatalogProduct.model_validate(row)

    def list_categories(self) -> List[str]:
        try:
            return self.repo.list_categories()
        except SQLAlchemyError as e:
            raise RecordStoreError("Nie udalo sie pobrac kategorii") from e
