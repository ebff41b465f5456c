# backend/services/cart.py
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from models.cart import CartItem
from services import catalog, errors

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def _find_line(db: Session, user_id: int, product_id: int) -> Optional[CartItem]:
    return db.query(CartItem).filter(
        CartItem.user_id == user_id, CartItem.product_id == product_id
    ).first()


def get_lines(db: Session, user_id: int) -> List[CartItem]:
    # Newest first; id breaks ties between lines added in the same second
    return (
        db.query(CartItem)
        .options(joinedload(CartItem.product))
        .filter(CartItem.user_id == user_id)
        .order_by(CartItem.added_at.desc(), CartItem.id.desc())
        .all()
    )


def get_line(db: Session, user_id: int, line_id: int) -> CartItem:
    item = db.query(CartItem).filter(CartItem.id == line_id, CartItem.user_id == user_id).first()
    if not item:
        raise errors.CartLineNotFound(line_id)
    return item


def add_line(db: Session, user_id: int, product_id: int, quantity: int = 1) -> CartItem:
    """Add a product to the cart, merging into the existing line for it."""
    if quantity < 1:
        raise errors.InvalidQuantity(quantity)
    catalog.get_product(db, product_id)

    item = _find_line(db, user_id, product_id)
    if item:
        _bump_quantity(db, item.id, quantity)
    else:
        item = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
        db.add(item)

    try:
        db.commit()
    except IntegrityError:
        # Lost the race to create the line; merge into the winner's
        db.rollback()
        item = _find_line(db, user_id, product_id)
        if item is None:
            raise
        _bump_quantity(db, item.id, quantity)
        db.commit()

    db.refresh(item)
    return item


def _bump_quantity(db: Session, line_id: int, quantity: int) -> None:
    # Increment in SQL so concurrent adds of the same product both count
    db.execute(
        update(CartItem)
        .where(CartItem.id == line_id)
        .values(quantity=CartItem.quantity + quantity)
    )


def set_quantity(db: Session, user_id: int, line_id: int, quantity: int) -> CartItem:
    item = get_line(db, user_id, line_id)
    if quantity < 1:
        raise errors.InvalidQuantity(quantity)
    item.quantity = quantity
    db.commit()
    db.refresh(item)
    return item


def remove_line(db: Session, user_id: int, line_id: int) -> None:
    item = get_line(db, user_id, line_id)
    db.delete(item)
    db.commit()


def clear(db: Session, user_id: int) -> int:
    """Delete every line of the user's cart; a no-op on an empty cart."""
    removed = db.query(CartItem).filter(CartItem.user_id == user_id).delete(synchronize_session="fetch")
    db.commit()
    return removed


def claim_lines(db: Session, user_id: int, lines: List[CartItem]) -> bool:
    """Delete exactly ``lines`` as they were read, inside the caller's transaction.

    Returns False when any line was removed or re-quantified since it was
    read, in which case the caller must roll back.
    """
    removed = 0
    for line in lines:
        removed += (
            db.query(CartItem)
            .filter(
                CartItem.id == line.id,
                CartItem.user_id == user_id,
                CartItem.quantity == line.quantity,
            )
            .delete(synchronize_session=False)
        )
    return removed == len(lines)


def total(db: Session, user_id: int) -> Decimal:
    """Cart value at the current catalog prices."""
    amount = sum((line.product.price * line.quantity for line in get_lines(db, user_id)), Decimal("0"))
    return Decimal(amount).quantize(CENT)
