from pydantic import BaseModel, ConfigDict
from typing import Any, List, Optional
from datetime import datetime

# One audit row as returned to admins
class LogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    ts: Optional[datetime] = None
    user_id: Optional[int] = None
    action: str
    resource: str
    status: str
    ip: Optional[str] = None
    meta: Optional[Any] = None

# A page of audit rows, newest first
class LogPage(BaseModel):
    items: List[LogOut]
    total: int
    page: int
    page_size: int
