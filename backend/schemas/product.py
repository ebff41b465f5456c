# backend/schemas/product.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# A review as shown under a product
class ReviewOut(ORMBase):
    id: int
    user: str = Field(validation_alias="author")
    comment: Optional[str] = None
    rating: int
    date: Optional[datetime] = None


# Full product representation including reviews
class ProductOut(ORMBase):
    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    price: float
    stock: int
    rating: float
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    reviews: List[ReviewOut] = []


# Schema for stocking a new catalog entry (admin only)
class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    price: float = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    image_url: Optional[str] = None


# Schema for posting a review
class ReviewCreate(BaseModel):
    rating: int
    comment: Optional[str] = None
