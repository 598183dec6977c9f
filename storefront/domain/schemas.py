# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Literal, Optional
from decimal import Decimal
from datetime import datetime


SortBy = Literal["featured", "price-low", "price-high", "rating"]
DeliveryStatus = Literal["processing", "shipped", "delivered", "cancelled"]


class CatalogProduct(BaseModel):
    """Rekord produktu z magazynu rekordow."""

    id: str
    name: str
    description: str = ""
    price: Decimal = Field(default=Decimal("0"), ge=0)
    image_url: Optional[str] = None
    stock_quantity: int = Field(default=0, ge=0)
    category: Optional[str] = None
    rating: Optional[Decimal] = None
    seller_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ProductView(BaseModel):
    id: str
    display_id: int
    name: str
    description: str
    price: Decimal
    image: str
    category: str
    rating: Decimal
    reviews: int
    in_stock: bool
    stock_quantity: int


class CartLineItem(BaseModel):
    display_id: int
    persisted_product_id: str
    name: str
    price: Decimal
    image: str
    stock_quantity: int
    quantity: int = Field(..., ge=1)


class CartOut(BaseModel):
    session_id: str
    items: List[CartLineItem]
    count: int
    total: Decimal
    is_open: bool


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, gt=0, description="Ilosc produktu (musi byc > 0)")


class QuantityIn(BaseModel):
    quantity: int


class SessionOut(BaseModel):
    session_id: str
    expires_at: datetime


class ShippingForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    country: str = Field("India", min_length=1)


class PaymentForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    # dane karty tylko walidowane, nigdy nie wysylane ani zapisywane
    card_number: str = Field(..., min_length=1)
    card_name: str = Field(..., min_length=1)
    expiry_date: str = Field(..., min_length=1)
    cvv: str = Field(..., min_length=1)


class OrderSummary(BaseModel):
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal


class CheckoutOut(BaseModel):
    step: str
    shipping: Optional[dict] = None
    payment_captured: bool
    items: List[CartLineItem]
    summary: OrderSummary


class OrderLineOut(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    price_at_purchase: Decimal


class OrderOut(BaseModel):
    id: str
    customer_id: str
    status: str
    delivery_status: str
    total_amount: Decimal
    created_at: datetime
    lines: List[OrderLineOut]


class PlacedOrderOut(BaseModel):
    order_id: str
    line_count: int
    summary: OrderSummary


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    price: Decimal = Field(..., ge=0)
    stock_quantity: int = Field(..., ge=0)
    image_url: Optional[str] = None
    category: Optional[str] = None


class SellerProductOut(BaseModel):
    id: str
    name: str
    description: str
    price: Decimal
    stock_quantity: int
    image_url: Optional[str] = None
    category: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SellerOrderOut(BaseModel):
    order_id: str
    created_at: datetime
    payment_mode: str
    payment_status: str
    delivery_status: str
    customer_name: str
    product_name: str
    quantity: int
    price: Decimal


class DeliveryStatusIn(BaseModel):
    delivery_status: DeliveryStatus
