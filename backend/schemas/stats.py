from pydantic import BaseModel


# Dashboard snapshot; revenue stays a string to keep decimal precision
class OrderStats(BaseModel):
    total_orders: int
    total_revenue: str
    total_products: int
    total_customers: int
