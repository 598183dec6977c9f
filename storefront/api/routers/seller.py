# storefront/api/routers/seller.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_embedding_client, require_seller
from storefront.api.errors import to_http
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import (
    DeliveryStatusIn,
    ProductCreate,
    SellerOrderOut,
    SellerProductOut,
)
from storefront.services.embedding_client import EmbeddingClient
from storefront.services.identity_service import UserIdentity
from storefront.services.seller_service import (
    SellerInventoryService,
    SellerOrderBoard,
    SellerOrderService,
)

router = APIRouter(prefix="/seller", tags=["seller"])


@router.get("/products", response_model=List[SellerProductOut])
def list_products(
    seller: UserIdentity = Depends(require_seller),
    db: Session = Depends(get_db),
):
    try:
        return SellerInventoryService(db).list_products(seller.id)
    except StorefrontError as e:
        raise to_http(e)


@router.post("/products", response_model=SellerProductOut, status_code=201)
def create_product(
    payload: ProductCreate,
    seller: UserIdentity = Depends(require_seller),
    db: Session = Depends(get_db),
    embedding_client: EmbeddingClient = Depends(get_embedding_client),
):
    try:
        return SellerInventoryService(db, embedding_client).create_product(seller.id, payload)
    except StorefrontError as e:
        raise to_http(e)


@router.delete("/products/{product_id}", status_code=204)
def delete_product(
    product_id: str,
    seller: UserIdentity = Depends(require_seller),
    db: Session = Depends(get_db),
):
    try:
        SellerInventoryService(db).delete_product(seller.id, product_id)
    except StorefrontError as e:
        raise to_http(e)
    return Response(status_code=204)


@router.get("/orders", response_model=List[SellerOrderOut])
def list_orders(
    seller: UserIdentity = Depends(require_seller),
    db: Session = Depends(get_db),
):
    try:
        return SellerOrderService(db).list_orders(seller.id)
    except StorefrontError as e:
        raise to_http(e)


@router.patch("/orders/{order_id}", response_model=List[SellerOrderOut])
def update_order_status(
    order_id: str,
    payload: DeliveryStatusIn,
    seller: UserIdentity = Depends(require_seller),
    db: Session = Depends(get_db),
):
    board = SellerOrderBoard(SellerOrderService(db), seller.id)
    try:
        board.load()
        return board.change_status(order_id, payload.delivery_status)
    except (StorefrontError, PermissionError) as e:
        raise to_http(e)
