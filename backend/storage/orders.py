# backend/storage/orders.py
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, select, update

from models.cart import CartItem
from models.order import Order, OrderItem
from models.product import Product
from schemas.order import (
    OrderDetail, OrderInsert, OrderItemDetail, OrderItemInsert, OrderItemOut,
    OrderLineInput, OrderOut,
)
from schemas.product import ProductOut
from storage.base import BaseQueries
from storage.products import _reserve

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


def _load_items(db, order_ids: Iterable[int]) -> Dict[int, List[OrderItemDetail]]:
    """
    Fetch the items of several orders in one query, grouped by order id.

    Each item carries the current product row, or None once the product was
    deleted; the purchase price always comes from the item itself.
    """
    order_ids = list(order_ids)
    grouped: Dict[int, List[OrderItemDetail]] = defaultdict(list)
    if not order_ids:
        return grouped

    rows = db.execute(
        select(OrderItem, Product)
        .outerjoin(Product, OrderItem.product_id == Product.id)
        .where(OrderItem.order_id.in_(order_ids))
        .order_by(OrderItem.order_id, OrderItem.id)
    ).all()

    for item, product in rows:
        grouped[item.order_id].append(OrderItemDetail(
            **OrderItemOut.model_validate(item).model_dump(),
            product=ProductOut.model_validate(product) if product else None,
        ))
    return grouped


def _consume_cart_line(db, user_id: int, line: OrderLineInput) -> None:
    # Subtract rather than delete so units added since the cart was read survive
    db.execute(
        update(CartItem)
        .where(CartItem.user_id == user_id, CartItem.product_id == line.product_id)
        .values(quantity=CartItem.quantity - line.quantity)
        .execution_options(synchronize_session=False)
    )


def _detail(order: Order, items: List[OrderItemDetail]) -> OrderDetail:
    return OrderDetail(**OrderOut.model_validate(order).model_dump(), items=items)


class OrderQueries(BaseQueries):

    def create_order(self, payload: OrderInsert) -> OrderOut:
        # Totals are computed by the caller; this only persists the header
        with self._session() as db:
            order = Order(**payload.model_dump())
            db.add(order)
            db.flush()
            db.refresh(order)
            logger.info("Created order %s for user %s (total %s)", order.id, order.user_id, order.total)
            return OrderOut.model_validate(order)

    def create_order_item(self, payload: OrderItemInsert) -> OrderItemOut:
        with self._session() as db:
            item = OrderItem(**payload.model_dump())
            db.add(item)
            db.flush()
            return OrderItemOut.model_validate(item)

    def get_order_by_id(self, order_id: int) -> Optional[OrderDetail]:
        with self._session() as db:
            order = db.get(Order, order_id)
            if order is None:
                return None
            return _detail(order, _load_items(db, [order.id])[order.id])

    def get_orders(
        self,
        user_id: Optional[int] = None,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> List[OrderDetail]:
        """
        Orders newest first, optionally only those of user_id.

        Items for the whole page are loaded with a single IN query rather
        than one query per order. Any failure fails the whole listing.
        """
        stmt = select(Order)
        if user_id is not None:
            stmt = stmt.where(Order.user_id == user_id)
        stmt = stmt.order_by(Order.created_at.desc(), Order.id.desc()).limit(limit).offset(offset)

        with self._session() as db:
            orders = db.scalars(stmt).all()
            items = _load_items(db, [o.id for o in orders])
            return [_detail(o, items.get(o.id, [])) for o in orders]

    def update_order_status(self, order_id: int, status: str) -> Optional[OrderOut]:
        # Free-form: no transition rules are enforced here
        with self._session() as db:
            order = db.scalars(
                update(Order)
                .where(Order.id == order_id)
                .values(status=status)
                .returning(Order)
            ).first()
            if order is None:
                return None
            logger.info("Order %s status -> %s", order_id, status)
            return OrderOut.model_validate(order)

    def place_order(self, payload: OrderInsert, lines: List[OrderLineInput]) -> OrderDetail:
        """
        Checkout in a single transaction.

        Writes the order header and one item per line with its price
        snapshot, reserves stock for each line and takes the ordered
        quantities out of the user's cart. Cart lines added or topped up after
        the caller read the cart keep whatever was not ordered.
        InsufficientStock or any database error rolls everything back.
        """
        with self._session() as db:
            order = Order(**payload.model_dump())
            db.add(order)
            db.flush()
            db.refresh(order)

            for line in lines:
                db.add(OrderItem(
                    order_id=order.id,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price=line.price,
                ))
                _reserve(db, line.product_id, line.quantity)
                _consume_cart_line(db, payload.user_id, line)

            db.execute(delete(CartItem).where(CartItem.user_id == payload.user_id, CartItem.quantity <= 0))
            db.flush()

            logger.info("Placed order %s for user %s with %s lines", order.id, order.user_id, len(lines))
            return _detail(order, _load_items(db, [order.id])[order.id])
