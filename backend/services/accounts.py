# backend/services/accounts.py
import logging
from typing import Any, Dict, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.users import User
from services import errors
from utils.hashing import get_password_hash, verify_password
from utils.tokenJWT import create_access_token

logger = logging.getLogger(__name__)

# Profile attributes a user may change about themselves
PROFILE_FIELDS = ("name", "address", "phone", "profile_image")


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def issue_token(user: User) -> str:
    return create_access_token(data={"sub": user.email, "role": user.role})


def register(db: Session, email: str, password: str, name: str = None, role: str = "customer") -> User:
    normalized = _normalize_email(email)
    if db.query(User).filter(func.lower(User.email) == normalized).first():
        raise errors.EmailAlreadyRegistered(normalized)

    user = User(email=normalized, password_hash=get_password_hash(password), name=name, role=role)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise errors.EmailAlreadyRegistered(normalized)
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> Tuple[User, str]:
    user = db.query(User).filter(User.email == _normalize_email(email)).first()
    if not user or not verify_password(password, user.password_hash):
        raise errors.InvalidCredentials()
    return user, issue_token(user)


def update_profile(db: Session, user: User, fields: Dict[str, Any]) -> User:
    """Apply the given profile fields; keys outside PROFILE_FIELDS are ignored."""
    for key in PROFILE_FIELDS:
        if key in fields:
            setattr(user, key, fields[key])
    db.commit()
    db.refresh(user)
    return user


def get_profile(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise errors.NotFound(f"User not found: {user_id}")
    return user
