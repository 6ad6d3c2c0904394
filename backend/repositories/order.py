from typing import List

from sqlalchemy.orm import Session, selectinload

from models.order import Order
from repositories.base import storage_errors


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, order: Order) -> Order:
        # Flush only: the caller owns the transaction
        with storage_errors("order insert"):
            self.db.add(order)
            self.db.flush()
        return order

    def find_by_buyer(self, buyer_id: int) -> List[Order]:
        with storage_errors("order listing"):
            return (
                self.db.query(Order)
                .options(selectinload(Order.items))
                .filter(Order.buyer_id == buyer_id)
                .order_by(Order.id)
                .all()
            )
