from sqlalchemy import Column, Integer, Numeric, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from database import Base


# Immutable snapshot of a cart taken at checkout.
# buyer/pickup point/product ids are plain references so the record outlives them.
class Order(Base):
    __tablename__ = "orders"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    buyer_id = Column(Integer, index=True, nullable=False)
    total_cost = Column(Numeric(12, 2), nullable=False)
    pickup_point_id = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship(
        "OrderItem", back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id"
    )

    @property
    def ordered_products(self):
        # One entry per line item, in cart order
        return [it.product_id for it in self.items]


class OrderItem(Base):
    __tablename__ = "order_items"
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    product_id = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)

    order = relationship("Order", back_populates="items")
