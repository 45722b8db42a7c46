# backend/storage/__init__.py
from sqlalchemy.orm import sessionmaker

from database import SessionLocal
from storage.cart import CartQueries
from storage.categories import CategoryQueries
from storage.errors import ConnectivityFailure, ConstraintViolation, InsufficientStock, StorageError
from storage.orders import OrderQueries
from storage.products import ProductQueries
from storage.stats import StatsQueries
from storage.users import UserQueries


class DatabaseStorage(
    UserQueries,
    CategoryQueries,
    ProductQueries,
    CartQueries,
    OrderQueries,
    StatsQueries,
):
    """
    Storage interface of the storefront.

    One method per domain operation; every method opens its own session on
    the given factory, runs its statements and hands back pydantic records.
    Lookups return None when nothing matches.
    """

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        super().__init__(session_factory)


storage = DatabaseStorage()


def get_storage() -> DatabaseStorage:
    return storage


__all__ = [
    "DatabaseStorage",
    "storage",
    "get_storage",
    "StorageError",
    "ConstraintViolation",
    "ConnectivityFailure",
    "InsufficientStock",
]
