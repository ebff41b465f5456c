# backend/populate_db.py
"""Seed the catalog with sample products and create an admin account.

Usage: python populate_db.py [--reset]
"""
import logging
import os
import sys
from decimal import Decimal

from dotenv import load_dotenv

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from config import env_path
from database import Base, engine, SessionLocal, init_db
from models.product import Product, Review
from models.users import User
from utils.hashing import get_password_hash

logger = logging.getLogger("populate_db")

# ADMIN_EMAIL / ADMIN_PASSWORD may live in the same .env as the app settings
load_dotenv(env_path)

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@storefront.io")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

SAMPLE_PRODUCTS = [
    {"name": "Wireless Headphones", "category": "Electronics", "price": "199.99", "stock": 50,
     "description": "Noise-cancelling wireless headphones with 30-hour battery life.",
     "image_url": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=500",
     "reviews": [("John Doe", "Great sound quality!", 5)]},
    {"name": "Smart Watch Pro", "category": "Electronics", "price": "299.99", "stock": 35,
     "description": "Fitness tracking smartwatch with heart rate monitor and GPS.",
     "image_url": "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=500",
     "reviews": [("Jane Smith", "Love the fitness features!", 5), ("Tom Brown", "Battery could be better.", 4)]},
    {"name": "Cotton T-Shirt", "category": "Clothing", "price": "29.99", "stock": 100,
     "description": "Comfortable organic cotton t-shirt with a modern fit.",
     "image_url": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=500",
     "reviews": []},
    {"name": "Denim Jeans", "category": "Clothing", "price": "59.99", "stock": 75,
     "description": "Classic fit denim jeans with stretch comfort.",
     "image_url": "https://images.unsplash.com/photo-1542272604-787c3835535d?w=500",
     "reviews": [("Mike Johnson", "Perfect fit!", 5)]},
    {"name": "JavaScript: The Complete Guide", "category": "Books", "price": "39.99", "stock": 60,
     "description": "Modern JavaScript programming from basics to advanced concepts.",
     "image_url": "https://images.unsplash.com/photo-1532012197267-da84d127e765?w=500",
     "reviews": [("Sarah Lee", "Best JS book ever!", 5)]},
    {"name": "Ceramic Plant Pot", "category": "Home & Garden", "price": "24.99", "stock": 40,
     "description": "Glazed ceramic pot with drainage hole for indoor plants.",
     "image_url": None, "reviews": []},
    {"name": "Yoga Mat Premium", "category": "Sports", "price": "34.99", "stock": 80,
     "description": "Non-slip yoga mat with extra cushioning.",
     "image_url": "https://images.unsplash.com/photo-1601925260368-ae2f83cf8b7f?w=500",
     "reviews": [("Emma Wilson", "Great grip.", 4)]},
    {"name": "Building Blocks Set", "category": "Toys", "price": "49.99", "stock": 30,
     "description": "500-piece creative building set for ages 6 and up.",
     "image_url": None, "reviews": []},
    {"name": "Vitamin C Serum", "category": "Beauty", "price": "19.99", "stock": 90,
     "description": "Brightening facial serum with 20% vitamin C.",
     "image_url": None, "reviews": [("Lily Chen", "Noticeable difference in a week.", 5)]},
    {"name": "Organic Coffee Beans", "category": "Food", "price": "14.99", "stock": 120,
     "description": "Medium roast whole coffee beans, 1 kg bag.",
     "image_url": None, "reviews": []},
]


def seed(reset: bool = False):
    if reset:
        Base.metadata.drop_all(bind=engine)
    init_db()

    session = SessionLocal()
    try:
        if not session.query(User).filter(User.email == ADMIN_EMAIL).first():
            session.add(User(
                email=ADMIN_EMAIL, password_hash=get_password_hash(ADMIN_PASSWORD),
                role="admin", name="Store Admin",
            ))
            logger.info("Created admin account %s", ADMIN_EMAIL)

        if session.query(Product).count() > 0:
            logger.info("Catalog already populated, skipping products")
        else:
            for data in SAMPLE_PRODUCTS:
                reviews = data["reviews"]
                product = Product(
                    name=data["name"], category=data["category"], price=Decimal(data["price"]),
                    stock=data["stock"], description=data["description"], image_url=data["image_url"],
                    rating=round(sum(r[2] for r in reviews) / len(reviews), 1) if reviews else 0.0,
                )
                product.reviews = [Review(author=a, comment=c, rating=r) for a, c, r in reviews]
                session.add(product)
            logger.info("Inserted %s products", len(SAMPLE_PRODUCTS))

        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed(reset="--reset" in sys.argv)
