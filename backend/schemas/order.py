from enum import Enum
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, EmailStr, Field
from typing import List, Literal, Optional

from schemas.base import ORMBase
from schemas.product import ProductOut


# Statuses the storefront knows about; storage itself accepts any string
class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ShippingAddress(BaseModel):
    full_name: str
    email: EmailStr
    address: str
    city: str
    zip_code: str


# Input schema for checkout
class CheckoutPayload(BaseModel):
    shipping_address: ShippingAddress
    payment_method: Literal["card", "paypal"] = "card"


# Order header handed to storage; totals are computed by the caller
class OrderInsert(BaseModel):
    user_id: int
    total: Decimal
    status: str = OrderStatus.PENDING.value
    shipping_address: Optional[dict] = None
    payment_method: Optional[str] = None


class OrderItemInsert(BaseModel):
    order_id: int
    product_id: int
    quantity: int = Field(gt=0)
    price: Decimal


# One checkout line: product and quantity with the price snapshot
class OrderLineInput(BaseModel):
    product_id: int
    quantity: int = Field(gt=0)
    price: Decimal


class OrderItemOut(ORMBase):
    id: int
    order_id: int
    product_id: Optional[int] = None
    quantity: int
    price: Decimal


# Order item with the current product row; None once the product is deleted
class OrderItemDetail(OrderItemOut):
    product: Optional[ProductOut] = None


class OrderOut(ORMBase):
    id: int
    user_id: int
    total: Decimal
    status: str
    created_at: datetime
    shipping_address: Optional[dict] = None
    payment_method: Optional[str] = None


# Output schema representing the full order details
class OrderDetail(OrderOut):
    items: List[OrderItemDetail] = []


# Schema for updating order status
class OrderStatusPatch(BaseModel):
    status: OrderStatus
