# backend/routes/user.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from utils.tokenJWT import get_current_user
from utils.audit import write_log, client_ip
from models.users import User
from routes.auth import user_to_out
from schemas.user import UserResponse, ProfileUpdate
from services import accounts

router = APIRouter(prefix="/user", tags=["User"])


@router.get("/profile", response_model=UserResponse)
def get_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return user_to_out(accounts.get_profile(db, current_user.id))


@router.put("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    # Only fields present in the body are changed; wire name profileImage maps to profile_image
    fields = payload.model_dump(exclude_unset=True)
    if "profileImage" in fields:
        fields["profile_image"] = fields.pop("profileImage")

    user = accounts.update_profile(db, current_user, fields)
    write_log(
        db, user_id=user.id, action="PROFILE_UPDATE", resource="user",
        status="SUCCESS", ip=client_ip(request), meta={"fields": sorted(fields)},
    )
    return user_to_out(user)
