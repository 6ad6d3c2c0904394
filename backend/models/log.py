from sqlalchemy import Column, Integer, String, DateTime, JSON, func
from database import Base

# Audit trail of cart and order actions
class AuditLog(Base):
    __tablename__ = "audit_logs"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)

    # Event timestamp and core action details
    ts = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    buyer_id = Column(Integer, nullable=True, index=True)
    action = Column(String(50), index=True)
    resource = Column(String(50), index=True)
    status = Column(String(20), index=True)

    # JSON container for flexible context data
    meta = Column(JSON, nullable=True)
