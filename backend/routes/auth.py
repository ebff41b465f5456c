# backend/routes/auth.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from utils.tokenJWT import get_current_user
from utils.audit import write_log, client_ip
from models.users import User
from schemas import user as schemas
from services import accounts, errors
from database import get_db

router = APIRouter(prefix="/auth", tags=["Auth"])


def user_to_out(user: User) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        address=user.address,
        phone=user.phone,
        profileImage=user.profile_image,
        role=user.role,
        created_at=user.created_at,
    )


# Register a new shopper and sign them in
@router.post("/register", response_model=schemas.Token, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    try:
        user = accounts.register(db, payload.email, payload.password, name=payload.name)
    except errors.EmailAlreadyRegistered:
        write_log(db, user_id=None, action="REGISTER", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"email": payload.email, "reason": "Email exists"})
        raise

    write_log(db, user_id=user.id, action="REGISTER", resource="auth", status="SUCCESS",
              ip=client_ip(request), meta={"email": user.email})
    return {"access_token": accounts.issue_token(user), "token_type": "bearer", "user": user_to_out(user)}


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.Token)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    try:
        user, token = accounts.authenticate(db, payload.email, payload.password)
    except errors.InvalidCredentials:
        write_log(db, user_id=None, action="LOGIN", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"email": payload.email})
        raise

    write_log(db, user_id=user.id, action="LOGIN", resource="auth", status="SUCCESS",
              ip=client_ip(request), meta={"email": user.email})
    return {"access_token": token, "token_type": "bearer", "user": user_to_out(user)}


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return user_to_out(current_user)
