# storefront/services/checkout_service.py
"""
CHECKOUT (kontroler formularza + zapis zamowienia)

Kroki: SHIPPING -> PAYMENT -> REVIEW, bez przeskakiwania do przodu.
Zamowienie mozna zlozyc tylko z REVIEW.

Zapis zamowienia:
1. uzytkownik musi byc zalogowany (NotAuthenticated, zero zapisow)
2. kazda pozycja musi miec trwale id produktu (MissingProductReference, zero zapisow)
3. naglowek orders (status pending) -> flush po id (OrderCreateFailed)
4. pozycje order_items jednym batchem
5. commit; blad w 3-5 => rollback calej transakcji, nie zostaje osierocony naglowek
6. sukces: zamowione pozycje znikaja z koszyka, reset krokow, powiadomienie

Dane karty sa tylko walidowane, nie ma integracji z bramka platnosci.
"""
import threading
from enum import Enum
from typing import Any, Dict

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_line import OrderLineModel
from storefront.domain.errors import (
    CheckoutStepError,
    CheckoutTimeout,
    EmptyCart,
    FormValidationError,
    MissingProductReference,
    NotAuthenticated,
    OrderCreateFailed,
    RecordStoreError,
)
from storefront.domain.schemas import ShippingForm, PaymentForm, OrderSummary, PlacedOrderOut
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_store import CartStore
from storefront.utils.money import money
from storefront.utils.settings import SHIPPING_FREE_THRESHOLD, SHIPPING_COST, TAX_RATE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutStep(str, Enum):
    SHIPPING = "shipping"
    PAYMENT = "payment"
    REVIEW = "review"


_ORDER = [CheckoutStep.SHIPPING, CheckoutStep.PAYMENT, CheckoutStep.REVIEW]

_TIMEOUT_MARKERS = ("statement timeout", "canceling statement", "database is locked", "timed out")


def compute_summary(
    subtotal,
    free_threshold=SHIPPING_FREE_THRESHOLD,
    shipping_cost=SHIPPING_COST,
    tax_rate=TAX_RATE,
) -> OrderSummary:
    subtotal = money(subtotal)
    shipping = money(0) if subtotal > free_threshold else money(shipping_cost)
    tax = money(subtotal * tax_rate)
    return OrderSummary(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=money(subtotal + shipping + tax),
    )


def _is_timeout(exc: SQLAlchemyError) -> bool:
    message = str(getattr(exc, "orig", None) or exc).lower()
    return any(marker in message for marker in _TIMEOUT_MARKERS)


def _validate(schema, data: Dict[str, Any]):
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise FormValidationError(
            f"Uzupelnij wymagane pola: {', '.join(fields)}",
            fields=fields,
        ) from e


class CheckoutOrchestrator:
    def __init__(self, cart: CartStore, notifier=None):
        self.cart = cart
        self.notifier = notifier
        self.step = CheckoutStep.SHIPPING
        self.draft: Dict[str, Any] = {"country": "India"}
        self.shipping: ShippingForm | None = None
        self.payment: PaymentForm | None = None
        self._processing = threading.Lock()

    # =====================================================
    # FORMULARZ
    # =====================================================
    def prefill(self, profile) -> Dict[str, Any]:
        """Wypelnia szkic formularza danymi z profilu (email, imie, nazwisko, adres)."""
        if profile is None:
            return self.draft

        full_name = (profile.full_name or "").strip()
        first, _, rest = full_name.partition(" ")
        self.draft.update(
            {
                "email": profile.email or "",
                "first_name": first,
                "last_name": rest.strip(),
                "address": profile.address or "",
            }
        )
        return self.draft

    def _require_step(self, expected: CheckoutStep):
        if self.step != expected:
            raise CheckoutStepError(
                f"Niewlasciwy krok checkoutu: oczekiwano {expected.value}, aktualny {self.step.value}"
            )

    def submit_shipping(self, data: Dict[str, Any]) -> CheckoutStep:
        self._require_step(CheckoutStep.SHIPPING)
        merged = {**self.draft, **{k: v for k, v in data.items() if v is not None}}
        self.shipping = _validate(ShippingForm, merged)
        self.draft = merged
        self.step = CheckoutStep.PAYMENT
        return self.step

    def submit_payment(self, data: Dict[str, Any]) -> CheckoutStep:
        self._require_step(CheckoutStep.PAYMENT)
        self.payment = _validate(PaymentForm, data)
        self.step = CheckoutStep.REVIEW
        return self.step

    def back(self) -> CheckoutStep:
        idx = _ORDER.index(self.step)
        if idx > 0:
            self.step = _ORDER[idx - 1]
        return self.step

    def reset(self):
        self.step = CheckoutStep.SHIPPING
        self.shipping = None
        self.payment = None

    def summary(self) -> OrderSummary:
        return compute_summary(self.cart.total())

    # =====================================================
    # ZAMOWIENIE
    # =====================================================
    def place_order(self, db: Session, user) -> PlacedOrderOut:
        if user is None or not getattr(user, "id", None):
            raise NotAuthenticated("Uzytkownik niezalogowany lub brak profilu")

        self._require_step(CheckoutStep.REVIEW)

        if not self._processing.acquire(blocking=False):
            raise CheckoutStepError("Zamowienie jest juz przetwarzane")

        try:
            return self._place_order(db, user)
        finally:
            self._processing.release()

    def _place_order(self, db: Session, user) -> PlacedOrderOut:
        # jeden odczyt koszyka: pozycje i suma musza sie zgadzac z zapisanym zamowieniem
        items, subtotal = self.cart.snapshot()
        if not items:
            raise EmptyCart("Koszyk jest pusty")

        #najpierw walidacja wszystkich pozycji, dopiero potem zapisy
        for item in items:
            if not item.persisted_product_id:
                logger.error(f"Missing persisted product id for cart item '{item.name}'")
                raise MissingProductReference(item.name)

        summary = compute_summary(subtotal)
        repo = OrderRepo(db)

        try:
            try:
                order = repo.create_order_header(
                    OrderModel(
                        customer_id=user.id,
                        total_amount=summary.total,
                        status="pending",
                    )
                )
            except SQLAlchemyError as e:
                if _is_timeout(e):
                    raise CheckoutTimeout("Przekroczono czas zapisu zamowienia") from e
                raise OrderCreateFailed(f"Nie udalo sie utworzyc zamowienia: {e}") from e

            if not order.id:
                raise OrderCreateFailed("Nie udalo sie utworzyc zamowienia")

            lines = [
                OrderLineModel(
                    order_id=order.id,
                    product_id=item.persisted_product_id,
                    quantity=item.quantity,
                    price_at_purchase=money(item.price),
                )
                for item in items
            ]

            try:
                repo.add_order_lines(lines)
                repo.commit()
            except SQLAlchemyError as e:
                if _is_timeout(e):
                    raise CheckoutTimeout("Przekroczono czas zapisu zamowienia") from e
                raise RecordStoreError(f"Nie udalo sie zapisac pozycji zamowienia: {e}") from e

        except RecordStoreError:
            logger.error(f"Placing order for user {user.id} failed, rolling back")
            repo.rollback()
            raise

        order_id = order.id
        logger.info(f"Order {order_id} placed by {user.id} with {len(lines)} lines, total {summary.total}")

        self.cart.remove_ordered(items)
        self.reset()
        self._notify(user.id, order_id)

        return PlacedOrderOut(order_id=order_id, line_count=len(lines), summary=summary)

    def _notify(self, user_id: str, order_id: str):
        if self.notifier is None:
            return
        try:
            self.notifier.send_order_notification(user_id, order_id)
        except Exception as e:
            # zamowienie jest juz zapisane, brak powiadomienia nie cofa zakupu
            logger.warning(f"Failed to enqueue notification for order {order_id}: {e}")
