import logging

from sqlalchemy.orm import Session
from models.log import AuditLog

logger = logging.getLogger(__name__)


def write_log(db: Session, *, buyer_id, action, resource, status="SUCCESS", meta=None):
    entry = AuditLog(buyer_id=buyer_id, action=action, resource=resource, status=status, meta=meta or {})
    db.add(entry)
    db.commit()
    logger.info("%s %s buyer=%s %s", action, status, buyer_id, meta or {})
