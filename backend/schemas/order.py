from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from schemas.base import CamelModel


# Input schema for checkout
class CheckoutPayload(CamelModel):
    buyer_id: int
    pick_up_point_id: int


class CheckoutOut(CamelModel):
    message: str
    order_id: int
    status: str = "success"


# Per-line snapshot taken at checkout
class OrderItemOut(CamelModel):
    product_id: int
    quantity: int
    unit_price: Decimal


class OrderOut(CamelModel):
    id: int
    buyer_id: int
    total_cost: Decimal
    ordered_products: List[int]
    pickup_point_id: Optional[int] = None
    created_at: Optional[datetime] = None
    items: List[OrderItemOut]


class OrderList(CamelModel):
    orders: List[OrderOut]
    status: str = "success"
