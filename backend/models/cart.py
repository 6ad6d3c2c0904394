# backend/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# Represents the buyer's shopping cart (at most one per buyer)
class Cart(Base):
    __tablename__ = "carts" # Table name
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True) # Primary key
    buyer_id = Column(Integer, ForeignKey("buyers.id"), unique=True, index=True, nullable=False) # Foreign key to buyers
    version = Column(Integer, nullable=False, default=1) # Bumped on every item change, checked at checkout
    created_at = Column(DateTime, server_default=func.now()) # Creation timestamp

    # One-to-many relationship with cart items, kept in insertion order
    items = relationship(
        "CartItem", back_populates="cart", cascade="all, delete-orphan", order_by="CartItem.id"
    )

    @property
    def item_ids(self):
        return [it.id for it in self.items]


# Represents a single item (product + quantity) within a cart
class CartItem(Base):
    __tablename__ = "cart_items" # Table name

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id"), index=True, nullable=False) # Foreign key to parent cart
    # Plain reference: a product may be deleted while still sitting in a cart
    product_id = Column(Integer, index=True, nullable=False)
    quantity = Column(Integer, CheckConstraint("quantity >= 1"), nullable=False, default=1)

    cart = relationship("Cart", back_populates="items") # Relationship back to Cart

    __table_args__ = (
        # Unique constraint to prevent duplicate product entries in the same cart
        UniqueConstraint("cart_id", "product_id", name="uq_cartitem_cart_product"),
        {"sqlite_autoincrement": True},
    )
