# backend/models/order.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base

# Order lifecycle states, values are part of the wire contract
class OrderStatus(str, enum.Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

# Accepted payment labels (no real processing behind them)
class PaymentMethod(str, enum.Enum):
    CREDIT_CARD = "Credit Card"
    DEBIT_CARD = "Debit Card"
    PAYPAL = "PayPal"
    CASH_ON_DELIVERY = "Cash on Delivery"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    status = Column(String, nullable=False, default=OrderStatus.PENDING.value, index=True)

    # Frozen at creation, never recomputed from live prices
    total_amount = Column(Numeric(12, 2), CheckConstraint("total_amount >= 0"), nullable=False)

    shipping_address = Column(String, nullable=False)
    payment_method = Column(String, nullable=False)

    order_date = Column(DateTime(timezone=True), nullable=False, index=True)
    estimated_delivery = Column(DateTime(timezone=True), nullable=False)

    items = relationship(
        "OrderItem", back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id"
    )

# Snapshot of a cart line copied by value at order time
class OrderItem(Base):
    __tablename__ = "order_items"
    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), index=True, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    name = Column(String, nullable=False)
    quantity = Column(Integer, CheckConstraint("quantity >= 1"), nullable=False)
    price = Column(Numeric(10, 2), CheckConstraint("price >= 0"), nullable=False)
    image_url = Column(String, nullable=True)

    order = relationship("Order", back_populates="items")
