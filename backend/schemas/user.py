from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from datetime import datetime

# Shared properties for user models
class UserBase(BaseModel):
    email: EmailStr

# Schema for user authentication credentials
class UserLogin(UserBase):
    password: str

# Schema for user registration requests
class UserCreate(UserBase):
    password: str = Field(min_length=6)
    name: Optional[str] = None

# Output schema for user profile details
class UserResponse(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    profileImage: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None

# Partial profile update; omitted fields stay untouched
class ProfileUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    profileImage: Optional[str] = None

# Schema for JWT authentication token response
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
