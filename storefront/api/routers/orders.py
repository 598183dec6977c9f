# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_user
from storefront.api.errors import to_http
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import OrderOut
from storefront.services.identity_service import UserIdentity
from storefront.services.order_service import CustomerOrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("/mine", response_model=List[OrderOut])
def my_orders(
    user: UserIdentity = Depends(require_user),
    db: Session = Depends(get_db),
):
    """
    Historia zamowien zalogowanego klienta.
    """
    try:
        return CustomerOrderService(db).list_orders(user.id)
    except StorefrontError as e:
        raise to_http(e)
