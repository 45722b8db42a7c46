# backend/storage/stats.py
import logging
from decimal import Decimal

from sqlalchemy import func, select

from models.order import Order
from models.product import Product
from models.users import User
from schemas.stats import OrderStats
from storage.base import BaseQueries

logger = logging.getLogger(__name__)

CUSTOMER_ROLE = "user"


def _money(value) -> str:
    # Sum of Numeric(10, 2) kept as exact cents; "0" when there is nothing to sum
    if value is None:
        return "0"
    return str(Decimal(str(value)).quantize(Decimal("0.01")))


class StatsQueries(BaseQueries):

    def get_order_stats(self) -> OrderStats:
        """
        Dashboard counters: orders, revenue, products and customers.

        Three aggregate queries in one session. The numbers are a snapshot
        and need not be consistent with each other.
        """
        with self._session() as db:
            total_orders, total_revenue = db.execute(
                select(func.count(Order.id), func.sum(Order.total))
            ).one()

            # All products, inactive ones included
            total_products = db.scalar(select(func.count(Product.id)))

            total_customers = db.scalar(
                select(func.count(User.id)).where(User.role == CUSTOMER_ROLE)
            )

        return OrderStats(
            total_orders=total_orders or 0,
            total_revenue=_money(total_revenue),
            total_products=total_products or 0,
            total_customers=total_customers or 0,
        )
