# backend/routes/cart.py
from decimal import Decimal
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status

from schemas.cart import CartAddItem, CartItemOut, CartLine, CartOut, CartUpdateItem
from schemas.user import UserResponse
from storage import DatabaseStorage, get_storage
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def _subtotal(lines: List[CartLine]) -> Decimal:
    return sum((line.product.price * line.quantity for line in lines), Decimal("0.00"))


def _own_line(store: DatabaseStorage, user_id: int, item_id: int) -> CartLine:
    # Line ids are global; only lines of the caller's cart may be touched
    for line in store.get_cart_items(user_id):
        if line.id == item_id:
            return line
    raise HTTPException(status_code=404, detail="Cart item not found")


@router.get("", response_model=CartOut)
def get_cart(
    store: DatabaseStorage = Depends(get_storage),
    current_user: UserResponse = Depends(get_current_user),
):
    lines = store.get_cart_items(current_user.id)
    return CartOut(items=lines, subtotal=str(_subtotal(lines)))


@router.post("", response_model=CartItemOut, status_code=status.HTTP_200_OK)
def add_to_cart(
    payload: CartAddItem,
    store: DatabaseStorage = Depends(get_storage),
    current_user: UserResponse = Depends(get_current_user),
):
    product = store.get_product_by_id(payload.product_id)
    if not product or not product.is_active:
        raise HTTPException(status_code=404, detail="Product not found")

    return store.add_to_cart(current_user.id, payload.product_id, payload.quantity)


@router.put("/{item_id}", response_model=CartItemOut)
def update_cart_item(
    item_id: int,
    payload: CartUpdateItem,
    store: DatabaseStorage = Depends(get_storage),
    current_user: UserResponse = Depends(get_current_user),
):
    _own_line(store, current_user.id, item_id)
    item = store.update_cart_item(item_id, payload.quantity)
    if not item:
        raise HTTPException(status_code=404, detail="Cart item not found")
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cart_item(
    item_id: int,
    store: DatabaseStorage = Depends(get_storage),
    current_user: UserResponse = Depends(get_current_user),
):
    _own_line(store, current_user.id, item_id)
    store.remove_from_cart(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(
    store: DatabaseStorage = Depends(get_storage),
    current_user: UserResponse = Depends(get_current_user),
):
    store.clear_cart(current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
