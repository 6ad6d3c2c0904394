from sqlalchemy import Column, Integer, String
from database import Base


# Represents a customer who owns a cart and places orders
class Buyer(Base):
    __tablename__ = "buyers"
    __table_args__ = {"sqlite_autoincrement": True}  # ids are never handed out twice

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=True)
