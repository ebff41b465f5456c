# backend/routes/orders.py
from typing import List
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
import logging
from utils.tokenJWT import get_current_user
from utils.audit import write_log, client_ip
from models.users import User
from models.order import Order
from schemas.order import OrderResponse, OrderItemOut, OrderCreatePayload, OrderStatusUpdate
from services import errors
from services import orders as order_service

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = logging.getLogger(__name__)

# Map Order model to the wire representation
def _order_to_out(order: Order) -> OrderResponse:
    items: List[OrderItemOut] = [
        OrderItemOut(
            product_id=it.product_id,
            name=it.name,
            quantity=it.quantity,
            price=float(it.price),
            image_url=it.image_url,
        )
        for it in order.items
    ]
    return OrderResponse(
        id=order.id,
        user_id=order.user_id,
        items=items,
        total_amount=float(order.total_amount),
        status=order.status,
        shippingAddress=order.shipping_address,
        paymentMethod=order.payment_method,
        order_date=order.order_date,
        estimatedDelivery=order.estimated_delivery,
    )


# List the caller's orders, newest first
@router.get("", response_model=List[OrderResponse])
def list_my_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return [_order_to_out(o) for o in order_service.list_orders(db, current_user.id)]


# Place an order from the caller's cart
@router.post("/create", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreatePayload,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        order = order_service.place_order(
            db, current_user.id, payload.shippingAddress, payload.paymentMethod
        )
    except errors.ShopError as e:
        logger.info("Order rejected for user %s: %s", current_user.id, e.code)
        write_log(
            db, user_id=current_user.id, action="ORDER_CREATE", resource="orders", status="FAIL",
            ip=client_ip(request), meta={"reason": e.code, **e.extra},
        )
        raise

    write_log(
        db, user_id=current_user.id, action="ORDER_CREATE", resource="orders", status="SUCCESS",
        ip=client_ip(request),
        meta={"order_id": order.id, "total": float(order.total_amount), "lines": len(order.items)},
    )
    return _order_to_out(order)


# Get details of a specific order
@router.get("/{order_id}", response_model=OrderResponse)
def get_order_detail(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _order_to_out(order_service.get_order(db, order_id, current_user))


# Advance or cancel an order along its lifecycle
@router.put("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    order = order_service.update_status(db, order_id, payload.status, current_user)
    write_log(db, user_id=current_user.id, action="ORDER_STATUS_CHANGE", resource="orders", status="SUCCESS",
        ip=client_ip(request), meta={"order_id": order.id, "new": order.status})

    db.refresh(order)
    return _order_to_out(order)
