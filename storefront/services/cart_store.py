# storefront/services/cart_store.py
import threading
from decimal import Decimal
from typing import Dict, List, Tuple

from storefront.domain.errors import FormValidationError
from storefront.domain.schemas import CatalogProduct, CartLineItem
from storefront.services.product_adapter import adapt
from storefront.utils.money import to_decimal, money
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartStore:
    """
    Koszyk sesji trzymany w pamieci.

    Klucz pozycji to trwale id produktu (string), nie numeric display_id,
    wiec dwa rozne produkty nigdy nie zleja sie w jedna pozycje.
    Pozycja z iloscia 0 nie istnieje: zejscie do 0 usuwa ja z koszyka.
    """

    def __init__(self):
        self._items: Dict[str, CartLineItem] = {}
        self._lock = threading.RLock()
        self.is_open = False

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> List[CartLineItem]:
        with self._lock:
            return [item.model_copy() for item in self._items.values()]

    def get(self, product_id: str) -> CartLineItem | None:
        with self._lock:
            item = self._items.get(product_id)
            return item.model_copy() if item else None

    def add(self, product: CatalogProduct, quantity: int = 1) -> CartLineItem:
        if quantity < 1:
            raise FormValidationError("Ilosc musi byc wieksza niz 0", fields=["quantity"])

        view = adapt(product)

        with self._lock:
            existing = self._items.get(product.id)
            if existing:
                logger.info(
                    f"Produkt {product.id} juz jest w koszyku, zwiekszam ilosc "
                    f"z {existing.quantity} do {existing.quantity + quantity}"
                )
                existing.quantity += quantity
                # odswiez snapshot produktu
                existing.name = view.name
                existing.price = view.price
                existing.image = view.image
                existing.stock_quantity = view.stock_quantity
                item = existing
            else:
                logger.info(f"Dodaje nowy produkt {product.id} do koszyka")
                item = CartLineItem(
                    display_id=view.display_id,
                    persisted_product_id=product.id,
                    name=view.name,
                    price=view.price,
                    image=view.image,
                    stock_quantity=view.stock_quantity,
                    quantity=quantity,
                )
                self._items[product.id] = item

            self.is_open = True
            return item.model_copy()

    def update_quantity(self, product_id: str, new_quantity: int) -> CartLineItem | None:
        with self._lock:
            item = self._items.get(product_id)
            if not item:
                return None

            quantity = max(0, new_quantity)
            if quantity == 0:
                logger.info(f"Ilosc 0, usuwam produkt {product_id} z koszyka")
                del self._items[product_id]
                return None

            item.quantity = quantity
            return item.model_copy()

    def remove(self, product_id: str) -> None:
        with self._lock:
            self._items.pop(product_id, None)

    def snapshot(self) -> Tuple[List[CartLineItem], Decimal]:
        """Pozycje i suma z jednego odczytu pod lockiem."""
        with self._lock:
            return self.items(), self.total()

    def remove_ordered(self, ordered: List[CartLineItem]) -> None:
        # odejmuje tylko zamowione ilosci, pozycje dodane w trakcie zapisu zostaja
        with self._lock:
            for line in ordered:
                current = self._items.get(line.persisted_product_id)
                if not current:
                    continue
                remaining = current.quantity - line.quantity
                if remaining > 0:
                    current.quantity = remaining
                else:
                    del self._items[line.persisted_product_id]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def count(self) -> int:
        with self._lock:
            return sum(int(to_decimal(i.quantity)) for i in self._items.values())

    def total(self) -> Decimal:
        with self._lock:
            return money(
                sum(
                    (to_decimal(i.price) * to_decimal(i.quantity) for i in self._items.values()),
                    Decimal("0"),
                )
            )
