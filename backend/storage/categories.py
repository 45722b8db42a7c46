# backend/storage/categories.py
import logging
from typing import List, Optional

from sqlalchemy import delete, select, update

from models.category import Category
from schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from storage.base import BaseQueries

logger = logging.getLogger(__name__)


class CategoryQueries(BaseQueries):

    def get_categories(self) -> List[CategoryOut]:
        with self._session() as db:
            rows = db.scalars(select(Category).order_by(Category.name.asc())).all()
            return [CategoryOut.model_validate(c) for c in rows]

    def get_category_by_id(self, category_id: int) -> Optional[CategoryOut]:
        with self._session() as db:
            category = db.get(Category, category_id)
            return CategoryOut.model_validate(category) if category else None

    def create_category(self, payload: CategoryCreate) -> CategoryOut:
        with self._session() as db:
            category = Category(**payload.model_dump())
            db.add(category)
            db.flush()
            logger.info("Created category %s (%s)", category.id, category.slug)
            return CategoryOut.model_validate(category)

    def update_category(self, category_id: int, payload: CategoryUpdate) -> Optional[CategoryOut]:
        changes = payload.model_dump(exclude_unset=True)
        with self._session() as db:
            if not changes:
                category = db.get(Category, category_id)
                return CategoryOut.model_validate(category) if category else None

            category = db.scalars(
                update(Category)
                .where(Category.id == category_id)
                .values(**changes)
                .returning(Category)
            ).first()
            if category is None:
                return None
            logger.info("Updated category %s: %s", category_id, sorted(changes))
            return CategoryOut.model_validate(category)

    def delete_category(self, category_id: int) -> None:
        # Products keep existing; their category_id is cleared by the foreign key
        with self._session() as db:
            result = db.execute(delete(Category).where(Category.id == category_id))
            logger.info("Deleted category %s (%s rows)", category_id, result.rowcount)
