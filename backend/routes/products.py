# backend/routes/products.py
from typing import Optional, List
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from database import get_db
from utils.tokenJWT import get_current_user, role_required
from utils.audit import write_log, client_ip
from models.users import User
import schemas.product as product_schemas
from services import catalog

router = APIRouter(prefix="/products", tags=["Products"])


# Browse the catalog; filters combine, default order is insertion order
@router.get("", response_model=List[product_schemas.ProductOut])
def list_products(
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Substring of name or description"),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    min_rating: Optional[float] = Query(None, alias="minRating", ge=0, le=5),
    sort: Optional[str] = Query(None, description="price_asc, price_desc, rating, name or newest"),
    db: Session = Depends(get_db),
):
    items = catalog.list_products(
        db, category=category, search=search, min_price=min_price,
        max_price=max_price, min_rating=min_rating, sort=sort,
    )
    return [product_schemas.ProductOut.model_validate(p) for p in items]


@router.get("/categories/list", response_model=List[str])
def get_categories(db: Session = Depends(get_db)):
    return catalog.categories(db)


@router.get("/{product_id}", response_model=product_schemas.ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return product_schemas.ProductOut.model_validate(catalog.get_product(db, product_id))


@router.post("", response_model=product_schemas.ProductOut, status_code=status.HTTP_201_CREATED)
def add_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    product = catalog.create_product(db, **payload.model_dump())
    write_log(
        db, user_id=current_user.id, action="PRODUCT_CREATE", resource="products",
        status="SUCCESS", ip=client_ip(request), meta={"id": product.id},
    )
    return product_schemas.ProductOut.model_validate(catalog.get_product(db, product.id))


@router.post("/{product_id}/reviews", response_model=product_schemas.ProductOut, status_code=status.HTTP_201_CREATED)
def add_review(
    product_id: int,
    payload: product_schemas.ReviewCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    author = current_user.name or current_user.email
    product = catalog.add_review(
        db, product_id, author=author, rating=payload.rating,
        comment=payload.comment, user_id=current_user.id,
    )
    write_log(
        db, user_id=current_user.id, action="REVIEW_ADD", resource="products",
        status="SUCCESS", ip=client_ip(request), meta={"product_id": product_id, "rating": payload.rating},
    )
    return product_schemas.ProductOut.model_validate(catalog.get_product(db, product.id))
