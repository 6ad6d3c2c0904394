from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, CheckConstraint
from database import Base

# Model Product
# A single catalogue item. The price is the current unit price used at checkout;
# orders keep their own copy so later price changes do not rewrite history.
class Product(Base):
    __tablename__ = "products"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)

    price = Column(Numeric(12, 2), CheckConstraint("price >= 0"), nullable=False)

    photo = Column(String, nullable=True)
    characteristics = Column(String, nullable=True)

    category_id = Column(Integer, ForeignKey("categories.id"), index=True, nullable=True)
    manufacturer_id = Column(Integer, ForeignKey("suppliers.id"), index=True, nullable=False)
