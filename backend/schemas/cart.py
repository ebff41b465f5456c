from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from schemas.product import ProductOut

# Request schema for adding an item to the cart
class CartAddItem(BaseModel):
    product_id: int
    quantity: int = 1

# Request schema for updating cart line quantity
class CartUpdateItem(BaseModel):
    quantity: int

# Response schema for a single cart line with its product expanded
class CartItemOut(BaseModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    added_at: Optional[datetime] = None
    product: ProductOut

# Response schema for the live cart total
class CartTotalOut(BaseModel):
    total: float
    items: int
