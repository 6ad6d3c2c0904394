from sqlalchemy import Column, Integer, String
from database import Base


# Manufacturer of products, identified by its tax number (INN)
class Supplier(Base):
    __tablename__ = "suppliers"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    inn = Column(String, nullable=False)
    email = Column(String, nullable=False)
