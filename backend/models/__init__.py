from models.users import User
from models.category import Category
from models.product import Product
from models.cart import CartItem
from models.order import Order, OrderItem

__all__ = ["User", "Category", "Product", "CartItem", "Order", "OrderItem"]
