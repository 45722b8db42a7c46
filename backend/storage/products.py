# backend/storage/products.py
import logging
from typing import List, Optional

from sqlalchemy import and_, delete, select, update

from models.product import Product
from schemas.product import ProductCreate, ProductOut, ProductUpdate
from storage.base import BaseQueries
from storage.errors import InsufficientStock

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
DEFAULT_FEATURED_LIMIT = 8


def _newest_first():
    # id breaks created_at ties so offset pages never overlap
    return (Product.created_at.desc(), Product.id.desc())


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ProductQueries(BaseQueries):

    def get_products(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> List[ProductOut]:
        """
        Customer-facing product listing.

        Only active products are returned, newest first. category_id and
        search (case-insensitive substring of the name) narrow the result and
        combine with AND.
        """
        conditions = [Product.is_active.is_(True)]

        if category_id is not None:
            conditions.append(Product.category_id == category_id)

        if search:
            conditions.append(Product.name.ilike(f"%{_escape_like(search)}%", escape="\\"))

        stmt = (
            select(Product)
            .where(and_(*conditions))
            .order_by(*_newest_first())
            .limit(limit)
            .offset(offset)
        )
        with self._session() as db:
            return [ProductOut.model_validate(p) for p in db.scalars(stmt).all()]

    def get_all_products(self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> List[ProductOut]:
        # Admin listing, inactive products included
        stmt = select(Product).order_by(*_newest_first()).limit(limit).offset(offset)
        with self._session() as db:
            return [ProductOut.model_validate(p) for p in db.scalars(stmt).all()]

    def get_featured_products(self, limit: int = DEFAULT_FEATURED_LIMIT) -> List[ProductOut]:
        stmt = (
            select(Product)
            .where(Product.is_active.is_(True), Product.is_featured.is_(True))
            .order_by(*_newest_first())
            .limit(limit)
        )
        with self._session() as db:
            return [ProductOut.model_validate(p) for p in db.scalars(stmt).all()]

    def get_product_by_id(self, product_id: int) -> Optional[ProductOut]:
        with self._session() as db:
            product = db.get(Product, product_id)
            return ProductOut.model_validate(product) if product else None

    def get_product_by_slug(self, slug: str) -> Optional[ProductOut]:
        with self._session() as db:
            product = db.scalars(select(Product).where(Product.slug == slug)).first()
            return ProductOut.model_validate(product) if product else None

    def create_product(self, payload: ProductCreate) -> ProductOut:
        with self._session() as db:
            product = Product(**payload.model_dump())
            db.add(product)
            db.flush()
            db.refresh(product)
            logger.info("Created product %s (%s)", product.id, product.slug)
            return ProductOut.model_validate(product)

    def update_product(self, product_id: int, payload: ProductUpdate) -> Optional[ProductOut]:
        changes = payload.model_dump(exclude_unset=True)
        with self._session() as db:
            if not changes:
                product = db.get(Product, product_id)
                return ProductOut.model_validate(product) if product else None

            product = db.scalars(
                update(Product)
                .where(Product.id == product_id)
                .values(**changes)
                .returning(Product)
            ).first()
            if product is None:
                return None
            logger.info("Updated product %s: %s", product_id, sorted(changes))
            return ProductOut.model_validate(product)

    def delete_product(self, product_id: int) -> None:
        # Cart lines go with the product; order items keep their snapshot with product_id cleared
        with self._session() as db:
            result = db.execute(delete(Product).where(Product.id == product_id))
            logger.info("Deleted product %s (%s rows)", product_id, result.rowcount)

    def update_product_stock(self, product_id: int, quantity: int) -> None:
        """
        Decrement stock by quantity as one arithmetic UPDATE.

        Concurrent decrements never lose an update. No floor is applied, so
        stock may go negative; use reserve_stock for the checked variant.
        """
        with self._session() as db:
            db.execute(
                update(Product)
                .where(Product.id == product_id)
                .values(stock=Product.stock - quantity)
                .execution_options(synchronize_session=False)
            )

    def reserve_stock(self, product_id: int, quantity: int) -> None:
        with self._session() as db:
            _reserve(db, product_id, quantity)


def _reserve(db, product_id: int, quantity: int) -> None:
    # Conditional decrement; zero rows touched means the product is missing or short
    result = db.execute(
        update(Product)
        .where(Product.id == product_id, Product.stock >= quantity)
        .values(stock=Product.stock - quantity)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        logger.warning("Stock reservation failed for product %s (qty %s)", product_id, quantity)
        raise InsufficientStock(product_id, quantity)
