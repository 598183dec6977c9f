# storefront/api/routers/cart.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_embedding_client, get_session
from storefront.api.errors import to_http
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import CartOut, ItemIn, QuantityIn
from storefront.services.catalog_service import CatalogService
from storefront.services.embedding_client import EmbeddingClient
from storefront.services.session_service import StorefrontSession

router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_out(session: StorefrontSession) -> CartOut:
    cart = session.cart
    return CartOut(
        session_id=session.id,
        items=cart.items(),
        count=cart.count(),
        total=cart.total(),
        is_open=cart.is_open,
    )


@router.get("/", response_model=CartOut)
def get_cart(session: StorefrontSession = Depends(get_session)):
    return _cart_out(session)


@router.post("/items", response_model=CartOut)
def add_item(
    payload: ItemIn,
    session: StorefrontSession = Depends(get_session),
    db: Session = Depends(get_db),
    embedding_client: EmbeddingClient = Depends(get_embedding_client),
):
    try:
        product = CatalogService(db=db, embedding_client=embedding_client).get_product(payload.product_id)
    except StorefrontError as e:
        raise to_http(e)

    # limit stanu magazynu pilnowany tutaj, koszyk sam go nie przycina
    existing = session.cart.get(product.id)
    in_cart = existing.quantity if existing else 0
    if in_cart + payload.quantity > product.stock_quantity:
        raise HTTPException(status_code=400, detail="Insufficient stock")

    try:
        session.cart.add(product, payload.quantity)
    except StorefrontError as e:
        raise to_http(e)
    return _cart_out(session)


@router.patch("/items/{product_id}", response_model=CartOut)
def update_item(
    product_id: str,
    payload: QuantityIn,
    session: StorefrontSession = Depends(get_session),
):
    item = session.cart.get(product_id)
    if not item:
        raise HTTPException(status_code=404, detail="Cart item not found")

    if payload.quantity > item.stock_quantity:
        raise HTTPException(status_code=400, detail="Insufficient stock")

    session.cart.update_quantity(product_id, payload.quantity)
    return _cart_out(session)


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(product_id: str, session: StorefrontSession = Depends(get_session)):
    session.cart.remove(product_id)
    return _cart_out(session)


@router.delete("/", response_model=CartOut)
def clear_cart(session: StorefrontSession = Depends(get_session)):
    session.cart.clear()
    return _cart_out(session)


@router.post("/close", response_model=CartOut)
def close_cart(session: StorefrontSession = Depends(get_session)):
    session.cart.close()
    return _cart_out(session)
