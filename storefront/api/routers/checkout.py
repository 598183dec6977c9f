# storefront/api/routers/checkout.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, get_session
from storefront.api.errors import to_http
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import CheckoutOut, PlacedOrderOut
from storefront.services.identity_service import IdentityService, UserIdentity
from storefront.services.session_service import StorefrontSession

router = APIRouter(prefix="/checkout", tags=["checkout"])


def _checkout_out(session: StorefrontSession) -> CheckoutOut:
    checkout = session.checkout
    return CheckoutOut(
        step=checkout.step.value,
        shipping=checkout.shipping.model_dump() if checkout.shipping else dict(checkout.draft),
        payment_captured=checkout.payment is not None,
        items=session.cart.items(),
        summary=checkout.summary(),
    )


@router.get("/", response_model=CheckoutOut)
def get_checkout(
    session: StorefrontSession = Depends(get_session),
    user: UserIdentity | None = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    # szkic formularza z profilu tylko raz, pozniej zostaja dane wpisane przez klienta
    if user is not None and "email" not in session.checkout.draft:
        session.checkout.prefill(IdentityService(db).get_profile(user.id))
    return _checkout_out(session)


@router.post("/shipping", response_model=CheckoutOut)
def submit_shipping(
    payload: Dict[str, Any] = Body(...),
    session: StorefrontSession = Depends(get_session),
):
    try:
        session.checkout.submit_shipping(payload)
    except StorefrontError as e:
        raise to_http(e)
    return _checkout_out(session)


@router.post("/payment", response_model=CheckoutOut)
def submit_payment(
    payload: Dict[str, Any] = Body(...),
    session: StorefrontSession = Depends(get_session),
):
    try:
        session.checkout.submit_payment(payload)
    except StorefrontError as e:
        raise to_http(e)
    return _checkout_out(session)


@router.post("/back", response_model=CheckoutOut)
def go_back(session: StorefrontSession = Depends(get_session)):
    session.checkout.back()
    return _checkout_out(session)


@router.post("/place-order", response_model=PlacedOrderOut, status_code=201)
def place_order(
    session: StorefrontSession = Depends(get_session),
    user: UserIdentity | None = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return session.checkout.place_order(db, user)
    except StorefrontError as e:
        raise to_http(e)
