# backend/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint, func
from database import Base

# Represents a single item (product + quantity) in a user's cart
class CartItem(Base):
    __tablename__ = "cart_items" # Table name

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False) # Owning user
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), index=True, nullable=False) # Referenced product
    quantity = Column(Integer, nullable=False, default=1) # Product quantity
    created_at = Column(DateTime(timezone=True), server_default=func.now()) # Creation timestamp

    __table_args__ = (
        # One line per product per user; repeat adds merge into it
        UniqueConstraint("user_id", "product_id", name="uq_cartitem_user_product"),
    )
