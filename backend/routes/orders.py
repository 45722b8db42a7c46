# backend/routes/orders.py
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, status

from config import settings
from schemas.order import (
    CheckoutPayload, OrderDetail, OrderInsert, OrderLineInput, OrderOut,
    OrderStatus, OrderStatusPatch,
)
from schemas.user import UserResponse
from storage import DatabaseStorage, get_storage
from utils.tokenJWT import get_current_user, require_admin

router = APIRouter(prefix="/api/orders", tags=["Orders"])
logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _is_admin(user: UserResponse) -> bool:
    return user.role == "admin"


def _checkout_total(subtotal: Decimal) -> Decimal:
    """Subtotal plus tax and shipping, rounded to cents."""
    tax = subtotal * settings.TAX_RATE
    shipping = Decimal("0") if subtotal > settings.FREE_SHIPPING_THRESHOLD else settings.SHIPPING_FEE
    return (subtotal + tax + shipping).quantize(CENTS, rounding=ROUND_HALF_UP)


@router.get("", response_model=List[OrderDetail])
def list_orders(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    store: DatabaseStorage = Depends(get_storage),
    current_user: UserResponse = Depends(get_current_user),
):
    # Admins see every order, customers only their own
    user_id = None if _is_admin(current_user) else current_user.id
    return store.get_orders(user_id=user_id, limit=limit, offset=offset)


@router.get("/{order_id}", response_model=OrderDetail)
def get_order(
    order_id: int,
    store: DatabaseStorage = Depends(get_storage),
    current_user: UserResponse = Depends(get_current_user),
):
    order = store.get_order_by_id(order_id)
    if not order or (order.user_id != current_user.id and not _is_admin(current_user)):
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.post("", response_model=OrderDetail, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: CheckoutPayload,
    store: DatabaseStorage = Depends(get_storage),
    current_user: UserResponse = Depends(get_current_user),
):
    lines = store.get_cart_items(current_user.id)
    if not lines:
        raise HTTPException(status_code=400, detail="Cart is empty")

    # Snapshot current prices into the order lines
    order_lines = [
        OrderLineInput(product_id=line.product_id, quantity=line.quantity, price=line.product.price)
        for line in lines
    ]
    subtotal = sum((l.price * l.quantity for l in order_lines), Decimal("0"))

    order = store.place_order(
        OrderInsert(
            user_id=current_user.id,
            total=_checkout_total(subtotal),
            status=OrderStatus.PENDING.value,
            shipping_address=payload.shipping_address.model_dump(),
            payment_method=payload.payment_method,
        ),
        order_lines,
    )
    logger.info("User %s checked out order %s (%s)", current_user.id, order.id, order.total)
    return order


@router.patch("/{order_id}/status", response_model=OrderOut, dependencies=[Depends(require_admin)])
def update_order_status(
    order_id: int,
    payload: OrderStatusPatch,
    store: DatabaseStorage = Depends(get_storage),
):
    order = store.update_order_status(order_id, payload.status.value)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
