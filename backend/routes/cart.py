# backend/routes/cart.py
from typing import List
from fastapi import APIRouter, Depends, status, Request
from sqlalchemy.orm import Session
from database import get_db
from utils.tokenJWT import get_current_user
from utils.audit import write_log, client_ip
from models.users import User
from models.cart import CartItem
from schemas.cart import CartAddItem, CartUpdateItem, CartItemOut, CartTotalOut
from schemas.product import ProductOut
from services import cart as cart_service

router = APIRouter(prefix="/cart", tags=["Cart"])

def _line_to_out(item: CartItem) -> CartItemOut:
    return CartItemOut(
        id=item.id,
        user_id=item.user_id,
        product_id=item.product_id,
        quantity=item.quantity,
        added_at=item.added_at,
        product=ProductOut.model_validate(item.product),
    )

@router.get("", response_model=List[CartItemOut])
def get_cart(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return [_line_to_out(it) for it in cart_service.get_lines(db, current_user.id)]

@router.get("/total", response_model=CartTotalOut)
def get_cart_total(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    lines = cart_service.get_lines(db, current_user.id)
    return CartTotalOut(total=float(cart_service.total(db, current_user.id)), items=len(lines))

@router.post("/add", response_model=CartItemOut, status_code=status.HTTP_201_CREATED)
def add_to_cart(
    payload: CartAddItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    item = cart_service.add_line(db, current_user.id, payload.product_id, payload.quantity)
    out = _line_to_out(item)

    write_log(
        db,
        user_id=current_user.id,
        action="CART_ADD",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"product_id": payload.product_id, "qty": payload.quantity, "line_qty": out.quantity},
    )
    return out

# Registered before /{item_id} so "clear" is never parsed as a line id
@router.delete("/clear/all")
def clear_cart(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    removed = cart_service.clear(db, current_user.id)
    write_log(
        db,
        user_id=current_user.id,
        action="CART_CLEAR",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"removed": removed},
    )
    return {"message": "Cart cleared successfully"}

@router.put("/{item_id}", response_model=CartItemOut)
def update_cart_item(
    item_id: int,
    payload: CartUpdateItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    item = cart_service.set_quantity(db, current_user.id, item_id, payload.quantity)
    out = _line_to_out(item)

    write_log(
        db,
        user_id=current_user.id,
        action="CART_UPDATE",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"item_id": item_id, "qty": payload.quantity},
    )
    return out

@router.delete("/{item_id}")
def delete_cart_item(
    item_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    cart_service.remove_line(db, current_user.id, item_id)

    write_log(
        db,
        user_id=current_user.id,
        action="CART_DELETE",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"item_id": item_id},
    )
    return {"message": "Item removed from cart"}
