# backend/models/product.py
from sqlalchemy import Column, Integer, String, Float, Numeric, ForeignKey, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# Model Product
# A single sellable catalog entry. Price and stock are guarded by check
# constraints; stock is only ever lowered through the catalog's
# compare-and-decrement so it can never go below zero.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=True)
    category = Column(String, nullable=True, index=True)

    price = Column(Numeric(10, 2), CheckConstraint("price >= 0"), nullable=False)
    stock = Column(Integer, CheckConstraint("stock >= 0"), nullable=False, default=0)
    rating = Column(Float, CheckConstraint("rating >= 0 AND rating <= 5"), nullable=False, default=0)

    image_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    reviews = relationship(
        "Review", back_populates="product", cascade="all, delete-orphan", order_by="Review.id"
    )


# A shopper review appended to a product, kept in submission order
class Review(Base):
    __tablename__ = "product_reviews"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    author = Column(String, nullable=False) # Display name shown with the review
    comment = Column(String, nullable=True)
    rating = Column(Integer, CheckConstraint("rating >= 1 AND rating <= 5"), nullable=False)
    date = Column(DateTime(timezone=True), server_default=func.now())

    product = relationship("Product", back_populates="reviews")
