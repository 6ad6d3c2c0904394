from sqlalchemy import Column, Integer, String
from database import Base


# Place where a buyer collects a placed order
class PickupPoint(Base):
    __tablename__ = "pickup_points"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
