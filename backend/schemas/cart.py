from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Optional

from schemas.base import ORMBase
from schemas.product import ProductOut

# Request schema for adding an item to the cart
class CartAddItem(BaseModel):
    product_id: int
    quantity: int = Field(default=1, gt=0)

# Request schema for updating cart item quantity
class CartUpdateItem(BaseModel):
    quantity: int = Field(gt=0)

# A stored cart line without product data
class CartItemOut(ORMBase):
    id: int
    user_id: int
    product_id: int
    quantity: int
    created_at: Optional[datetime] = None

# Cart line with the joined product row
class CartLine(CartItemOut):
    product: ProductOut

# Response schema for the cart with derived subtotal
class CartOut(BaseModel):
    items: List[CartLine]
    subtotal: str
