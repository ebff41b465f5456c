# backend/routes/logs.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas.log import LogOut, LogPage
from utils.audit import search_logs
from utils.tokenJWT import role_required

router = APIRouter(prefix="/logs", tags=["Logs"])


# Audit trail for admins, e.g. ?action=ORDER_CREATE&status=FAIL
@router.get("", response_model=LogPage)
def get_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    action: Optional[str] = Query(None, description="ORDER_CREATE, CART_ADD, LOGIN..."),
    user_id: Optional[int] = Query(None),
    resource: Optional[str] = Query(None, description="auth, user, products, cart or orders"),
    status: Optional[str] = Query(None, description="SUCCESS or FAIL"),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    rows, total = search_logs(
        db, action=action, user_id=user_id, resource=resource, status=status,
        date_from=date_from, date_to=date_to, page=page, page_size=page_size,
    )
    return LogPage(
        items=[LogOut.model_validate(r) for r in rows],
        total=total,
        page=page,
        page_size=page_size,
    )
