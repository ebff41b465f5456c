from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


# Output schema for an individual order line snapshot
class OrderItemOut(BaseModel):
    product_id: int
    name: str
    quantity: int
    price: float
    image_url: Optional[str] = None


# Input schema for placing an order from the cart; checked by the order engine
class OrderCreatePayload(BaseModel):
    shippingAddress: Optional[str] = None
    paymentMethod: Optional[str] = None

# Output schema representing the full order details
class OrderResponse(BaseModel):
    id: int
    user_id: int
    items: List[OrderItemOut]
    total_amount: float
    status: str
    shippingAddress: str
    paymentMethod: str
    order_date: datetime
    estimatedDelivery: datetime

# Schema for updating order status
class OrderStatusUpdate(BaseModel):
    status: Optional[str] = None
