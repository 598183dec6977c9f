# storefront/repos/product_repo.py
import math
from typing import List, Sequence, Tuple

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    if not a or not b or len(a) != len(b):
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if norm == 0:
        return 0.0
    return dot / norm


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(self, category: str | None = None) -> List[ProductModel]:
        stmt = select(ProductModel)
        if category:
            stmt = stmt.where(ProductModel.category == category)
        return list(self.db.execute(stmt.order_by(ProductModel.created_at)).scalars().all())

    def list_categories(self) -> List[str]:
        rows = self.db.execute(
            select(ProductModel.category)
            .where(ProductModel.category.is_not(None))
            .distinct()
            .order_by(ProductModel.category)
        ).all()
        return [r[0] for r in rows]

    def match_products_by_vector(
        self,
        query_embedding: Sequence[float],
        match_threshold: float,
        match_count: int,
    ) -> List[Tuple[ProductModel, float]]:
        """
        Odpowiednik procedury match_products_by_vector: podobienstwo cosinusowe,
        tylko wyniki powyzej progu, malejaco, max match_count.
        """
        candidates = self.db.execute(
            select(ProductModel).where(ProductModel.embedding.is_not(None))
        ).scalars().all()

        scored = []
        for p in candidates:
            similarity = cosine_similarity(p.embedding, query_embedding)
            if similarity > match_threshold:
                scored.append((p, similarity))

        scored.sort(key=lambda pair: pair[1], reverse=True)
        return scored[:match_count]

    def list_by_seller(self, seller_id: str) -> List[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .where(ProductModel.seller_id == seller_id)
                .order_by(ProductModel.name.asc())
            ).scalars().all()
        )

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_owned_product(self, product_id: str, seller_id: str) -> int:
        # id AND seller_id, sprzedawca nie usunie cudzego produktu zgadujac id
        result = self.db.execute(
            delete(ProductModel).where(
                ProductModel.id == product_id,
                ProductModel.seller_id == seller_id,
            )
        )
        self.db.commit()
        return result.rowcount

    def rollback(self):
        self.db.rollback()
