# backend/models/product.py
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime, ForeignKey, Index
from database import Base


def _utcnow():
    return datetime.now(timezone.utc)


# Model Product
# A single catalog entry. Price and original price are exact decimals,
# stock is the authoritative on-hand count and is_active works as a soft delete
# that hides the row from customer listings while keeping it for old orders.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)

    price = Column(Numeric(10, 2), nullable=False)
    original_price = Column(Numeric(10, 2), nullable=True) # Shown struck through when discounted
    image_url = Column(String, nullable=True)

    # Weak reference: a deleted category leaves the product uncategorised
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)

    stock = Column(Integer, nullable=False, default=0)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)

    rating = Column(Numeric(2, 1), nullable=False, default=0)
    review_count = Column(Integer, nullable=False, default=0)

    # Client-side default keeps sub-second resolution for newest-first ordering
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("ix_products_active_created", "is_active", "created_at"),
    )
