# backend/storage/cart.py
import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.dialects import postgresql, sqlite

from models.cart import CartItem
from models.product import Product
from schemas.cart import CartItemOut, CartLine
from schemas.product import ProductOut
from storage.base import BaseQueries

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CartQueries(BaseQueries):

    def get_cart_items(self, user_id: int) -> List[CartLine]:
        """
        Cart lines of a user, each with its product row embedded.

        Lines whose product no longer exists are left out.
        """
        stmt = (
            select(CartItem, Product)
            .outerjoin(Product, CartItem.product_id == Product.id)
            .where(CartItem.user_id == user_id)
            .order_by(CartItem.id.asc())
        )
        with self._session() as db:
            lines = []
            for item, product in db.execute(stmt).all():
                if product is None:
                    logger.warning("Skipping cart line %s: product %s is gone", item.id, item.product_id)
                    continue
                lines.append(CartLine(
                    **CartItemOut.model_validate(item).model_dump(),
                    product=ProductOut.model_validate(product),
                ))
            return lines

    def add_to_cart(self, user_id: int, product_id: int, quantity: int = 1) -> CartItemOut:
        """
        Add quantity of a product to the user's cart.

        An existing (user_id, product_id) line is incremented instead of
        duplicated. The merge is one INSERT ... ON CONFLICT DO UPDATE where the
        dialect supports it, otherwise a row-locked read and write in one
        transaction.
        """
        with self._session() as db:
            insert = _UPSERT_INSERTS.get(self._dialect(db))
            if insert is not None:
                stmt = insert(CartItem).values(user_id=user_id, product_id=product_id, quantity=quantity)
                stmt = stmt.on_conflict_do_update(
                    index_elements=["user_id", "product_id"],
                    set_={"quantity": CartItem.quantity + stmt.excluded.quantity},
                ).returning(CartItem.id)
                item_id = db.execute(stmt).scalar_one()
                item = db.get(CartItem, item_id, populate_existing=True)
            else:
                item = db.scalars(
                    select(CartItem)
                    .where(CartItem.user_id == user_id, CartItem.product_id == product_id)
                    .with_for_update()
                ).first()
                if item:
                    item.quantity = (item.quantity or 0) + quantity
                else:
                    item = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
                    db.add(item)
                db.flush()
                db.refresh(item)

            logger.info("Cart of user %s: product %s now x%s", user_id, product_id, item.quantity)
            return CartItemOut.model_validate(item)

    def update_cart_item(self, item_id: int, quantity: int) -> Optional[CartItemOut]:
        # Absolute quantity, not an increment
        with self._session() as db:
            item = db.scalars(
                update(CartItem)
                .where(CartItem.id == item_id)
                .values(quantity=quantity)
                .returning(CartItem)
            ).first()
            return CartItemOut.model_validate(item) if item else None

    def remove_from_cart(self, item_id: int) -> None:
        with self._session() as db:
            db.execute(delete(CartItem).where(CartItem.id == item_id))

    def clear_cart(self, user_id: int) -> None:
        with self._session() as db:
            result = db.execute(delete(CartItem).where(CartItem.user_id == user_id))
            logger.info("Cleared cart of user %s (%s lines)", user_id, result.rowcount)
