# backend/services/orders.py
"""Order placement and the order status lifecycle.

Placing an order turns the shopper's cart into an immutable order in one
database transaction: the order with its frozen line snapshots is inserted,
stock is decremented for every line, and the cart is emptied. Either all of
it commits or none of it does.
"""
import logging
import time
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Dict, FrozenSet, List, Optional

from sqlalchemy import update
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, joinedload

from config import settings
from models.order import Order, OrderItem, OrderStatus, PaymentMethod
from models.users import User
from services import cart as cart_service
from services import catalog, errors

logger = logging.getLogger(__name__)


class _StaleCart(Exception):
    """The cart changed between reading it and consuming it."""


# Forward-only lifecycle; Delivered and Cancelled are terminal
ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def _parse_payment_method(value: Optional[str]) -> PaymentMethod:
    try:
        return PaymentMethod(value)
    except ValueError:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise errors.ValidationError(
            f"Payment method must be one of: {allowed}", field="paymentMethod"
        )


def _parse_status(value: Optional[str]) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise errors.ValidationError(f"Status must be one of: {allowed}", field="status")


def _build_order(
    db: Session,
    user_id: int,
    shipping_address: Optional[str],
    payment_method: Optional[str],
    now: Optional[datetime],
) -> Order:
    lines = cart_service.get_lines(db, user_id)
    if not lines:
        raise errors.EmptyCart()

    for line in lines:
        if line.product is None:
            raise errors.ProductNotFound(line.product_id)

    address = (shipping_address or "").strip()
    if not address:
        raise errors.ValidationError("Shipping address is required", field="shippingAddress")
    method = _parse_payment_method(payment_method)

    # Reject before touching anything; decrement_stock re-checks under the write
    short = [line.product_id for line in lines if line.product.stock < line.quantity]
    if short:
        raise errors.InsufficientStock(short)

    created = now or datetime.now(timezone.utc)
    order = Order(
        user_id=user_id,
        status=OrderStatus.PENDING.value,
        shipping_address=address,
        payment_method=method.value,
        order_date=created,
        estimated_delivery=created + timedelta(days=settings.DELIVERY_DAYS),
    )

    total = Decimal("0")
    for line in lines:
        product = line.product
        order.items.append(OrderItem(
            product_id=product.id,
            name=product.name,
            quantity=line.quantity,
            price=product.price,
            image_url=product.image_url,
        ))
        total += Decimal(product.price) * line.quantity
    order.total_amount = total.quantize(cart_service.CENT)
    db.add(order)

    # Consume the cart lines we priced before touching stock; a concurrent
    # checkout or cart edit since the read makes this attempt stale
    if not cart_service.claim_lines(db, user_id, lines):
        raise _StaleCart(user_id)

    for line in lines:
        catalog.decrement_stock(db, line.product_id, line.quantity)

    db.flush()
    return order


def place_order(
    db: Session,
    user_id: int,
    shipping_address: Optional[str],
    payment_method: Optional[str],
    now: Optional[datetime] = None,
) -> Order:
    """Convert the user's cart into a Pending order.

    Raises EmptyCart, ValidationError or InsufficientStock without side
    effects. Lock contention, or a cart that changed under us (e.g. the same
    user checking out twice at once), is retried a bounded number of times
    against fresh data, then reported as Conflict.
    """
    attempts = max(1, settings.ORDER_COMMIT_ATTEMPTS)
    for attempt in range(1, attempts + 1):
        try:
            order = _build_order(db, user_id, shipping_address, payment_method, now)
            db.commit()
        except (OperationalError, _StaleCart) as exc:
            db.rollback()
            if attempt == attempts:
                logger.warning("Giving up on order for user %s after %s attempts: %s", user_id, attempts, exc)
                raise errors.Conflict("Order could not be placed due to concurrent updates, please retry") from exc
            logger.info("Order commit for user %s hit contention (attempt %s/%s)", user_id, attempt, attempts)
            time.sleep(settings.ORDER_RETRY_BACKOFF * attempt)
            continue
        except Exception:
            db.rollback()
            raise

        db.refresh(order)
        logger.info("Order %s placed by user %s, total %s", order.id, user_id, order.total_amount)
        return order


def list_orders(db: Session, user_id: int) -> List[Order]:
    return (
        db.query(Order)
        .options(joinedload(Order.items))
        .filter(Order.user_id == user_id)
        .order_by(Order.order_date.desc(), Order.id.desc())
        .all()
    )


def get_order(db: Session, order_id: int, actor: User) -> Order:
    """Fetch an order visible to ``actor``: their own, or any for admins."""
    order = db.query(Order).options(joinedload(Order.items)).filter(Order.id == order_id).first()
    if not order or (order.user_id != actor.id and (actor.role or "").lower() != "admin"):
        raise errors.OrderNotFound(order_id)
    return order


def update_status(db: Session, order_id: int, new_status: Optional[str], actor: User) -> Order:
    order = get_order(db, order_id, actor)
    target = _parse_status(new_status)
    current = OrderStatus(order.status)
    if not can_transition(current, target):
        raise errors.InvalidTransition(current.value, target.value)

    # Compare-and-set on the status we validated against
    result = db.execute(
        update(Order)
        .where(Order.id == order.id, Order.status == current.value)
        .values(status=target.value)
    )
    if result.rowcount != 1:
        db.rollback()
        db.refresh(order)
        raise errors.InvalidTransition(order.status, target.value)

    db.commit()
    db.refresh(order)
    logger.info("Order %s status %s -> %s", order.id, current.value, target.value)
    return order
