# backend/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base


# Represents a single cart line (product + quantity) owned by a user
class CartItem(Base):
    __tablename__ = "cart_items" # Table name

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False) # Owner of the line
    product_id = Column(Integer, ForeignKey("products.id"), index=True, nullable=False) # Foreign key to product
    quantity = Column(Integer, CheckConstraint("quantity >= 1"), nullable=False, default=1) # Product quantity
    added_at = Column(DateTime(timezone=True), server_default=func.now()) # Creation timestamp

    product = relationship("Product") # Relationship to Product

    __table_args__ = (
        # One line per product per user; adding again merges quantities
        UniqueConstraint("user_id", "product_id", name="uq_cartitem_user_product"),
    )
