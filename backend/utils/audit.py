# backend/utils/audit.py
import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from fastapi import Request
from sqlalchemy.orm import Session
from models.log import Log

logger = logging.getLogger(__name__)

def client_ip(request: Optional[Request]) -> Optional[str]:
    if request is None or request.client is None:
        return None
    return request.client.host

def write_log(db: Session, *, user_id, action, resource, status="SUCCESS", ip=None, meta=None):
    # Audit rows get their own commit, after the business transaction
    entry = Log(user_id=user_id, action=action, resource=resource, status=status, ip=ip, meta=meta or {})
    db.add(entry)
    db.commit()
    logger.debug("audit %s %s %s user=%s", action, resource, status, user_id)

def search_logs(
    db: Session,
    *,
    action: Optional[str] = None,
    user_id: Optional[int] = None,
    resource: Optional[str] = None,
    status: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    page: int = 1,
    page_size: int = 20,
) -> Tuple[List[Log], int]:
    """Return one page of audit rows matching every given filter, plus the match count."""
    query = db.query(Log)
    if action:
        query = query.filter(Log.action == action.upper())
    if user_id is not None:
        query = query.filter(Log.user_id == user_id)
    if resource:
        query = query.filter(Log.resource == resource.lower())
    if status:
        query = query.filter(Log.status == status.upper())
    if date_from:
        query = query.filter(Log.ts >= datetime.combine(date_from, time.min))
    if date_to:
        # Inclusive of the whole end day
        query = query.filter(Log.ts < datetime.combine(date_to + timedelta(days=1), time.min))

    total = query.count()
    rows = (
        query.order_by(Log.ts.desc(), Log.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return rows, total
