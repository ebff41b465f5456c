# backend/services/catalog.py
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import or_, func, update
from sqlalchemy.orm import Session

from models.product import Product, Review
from services import errors

logger = logging.getLogger(__name__)

# Sort keys accepted by list_products; ties fall back to insertion order
SORT_OPTIONS = {
    "price_asc": Product.price.asc(),
    "price_desc": Product.price.desc(),
    "rating": Product.rating.desc(),
    "name": Product.name.asc(),
    "newest": Product.id.desc(),
}


def get_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise errors.ProductNotFound(product_id)
    return product


def list_products(
    db: Session,
    category: Optional[str] = None,
    search: Optional[str] = None,
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
    min_rating: Optional[float] = None,
    sort: Optional[str] = None,
) -> List[Product]:
    """Filter the catalog; every filter is optional and they combine with AND."""
    query = db.query(Product)

    if category:
        query = query.filter(func.lower(Product.category) == category.strip().lower())
    if search:
        like = f"%{search.strip()}%"
        query = query.filter(or_(Product.name.ilike(like), Product.description.ilike(like)))
    if min_price is not None:
        query = query.filter(Product.price >= min_price)
    if max_price is not None:
        query = query.filter(Product.price <= max_price)
    if min_rating is not None:
        query = query.filter(Product.rating >= min_rating)

    if sort:
        if sort not in SORT_OPTIONS:
            raise errors.ValidationError(f"Unknown sort option: {sort}", field="sort")
        query = query.order_by(SORT_OPTIONS[sort], Product.id.asc())
    else:
        query = query.order_by(Product.id.asc())

    return query.all()


def categories(db: Session) -> List[str]:
    rows = db.query(Product.category).distinct().filter(Product.category != None, Product.category != "").all()
    return sorted(r[0] for r in rows)


def create_product(db: Session, **fields) -> Product:
    product = Product(**fields)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def decrement_stock(db: Session, product_id: int, amount: int) -> None:
    """Atomically lower a product's stock by ``amount``.

    The sufficiency check and the write are a single conditional UPDATE,
    so two callers racing for the last units cannot both succeed. Runs in
    the caller's transaction and does not commit.
    """
    if amount < 1:
        raise errors.InvalidQuantity(amount)

    result = db.execute(
        update(Product)
        .where(Product.id == product_id, Product.stock >= amount)
        .values(stock=Product.stock - amount)
    )
    if result.rowcount == 1:
        return

    exists = db.query(Product.id).filter(Product.id == product_id).first()
    if exists is None:
        raise errors.ProductNotFound(product_id)
    logger.info("Stock guard rejected decrement of %s for product %s", amount, product_id)
    raise errors.InsufficientStock([product_id])


def add_review(
    db: Session,
    product_id: int,
    author: str,
    rating: int,
    comment: Optional[str] = None,
    user_id: Optional[int] = None,
) -> Product:
    if rating < 1 or rating > 5:
        raise errors.ValidationError("Rating must be between 1 and 5", field="rating")

    product = get_product(db, product_id)
    db.add(Review(product_id=product.id, user_id=user_id, author=author, rating=rating, comment=comment))
    db.flush()

    # Product rating is the mean of its reviews
    avg = db.query(func.avg(Review.rating)).filter(Review.product_id == product.id).scalar()
    product.rating = round(float(avg), 1) if avg is not None else 0.0

    db.commit()
    db.refresh(product)
    return product
