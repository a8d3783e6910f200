import logging
import os
import sys

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from sqlalchemy.orm import Session

from config import settings
from database import SessionLocal, init_db
from models.product import Product, ReadymadeProduct, FabricProduct, AccessoryProduct
from models.users import User
from utils.hashing import get_password_hash
from utils.logger import setup_logging

logger = logging.getLogger("populate_db")


def build_catalog():
    """Starter catalog: two garments, two fabrics, one accessory."""
    return [
        ReadymadeProduct(
            name="Classic White Thobe",
            description="Premium quality white thobe made from 100% Egyptian cotton. "
                        "Perfect for daily prayers and special occasions.",
            category="mens", subcategory="thobe", price=50,
            images=[
                "https://images.unsplash.com/photo-1583743814966-8936f5b7be1a?w=500",
                "https://images.unsplash.com/photo-1620799140408-edc6dcb6d633?w=500",
            ],
            featured=True, active=True,
            tags=["thobe", "white", "cotton", "mens", "classic"],
            size_stock={"S": 10, "M": 15, "L": 12, "XL": 8, "XXL": 5},
            material="Egyptian Cotton", color="White",
        ),
        FabricProduct(
            name="Egyptian Cotton Fabric",
            description="Premium Egyptian cotton fabric, perfect for custom stitching. "
                        "Soft, breathable, and durable.",
            category="mens", subcategory="fabric", price=15,
            images=["https://images.unsplash.com/photo-1586105251261-72a756497a11?w=500"],
            featured=True, active=True,
            tags=["fabric", "cotton", "egyptian", "premium", "natural"],
            stock_in_meters=500, price_per_meter=15, fabric_type="Egyptian Cotton", width=60,
            texture="https://images.unsplash.com/photo-1586105251261-72a756497a11?w=500",
            stitching_available=True, stitching_price=35,
        ),
        AccessoryProduct(
            name="Royal Oudh Attar",
            description="Authentic Arabian oudh attar with rich, woody fragrance. Alcohol-free, 12ml bottle.",
            category="accessories", subcategory="fragrance", price=25,
            images=["https://images.unsplash.com/photo-1541643600914-78b084683601?w=500"],
            featured=False, active=True,
            tags=["attar", "perfume", "oudh", "fragrance"],
            stock=50, material="Natural Oudh Oil", color="Amber",
        ),
        ReadymadeProduct(
            name="Navy Blue Kurta",
            description="Elegant navy blue kurta with embroidered collar.",
            category="mens", subcategory="kurta", price=45,
            images=["https://images.unsplash.com/photo-1622470953794-aa9c70b0fb9d?w=500"],
            featured=False, active=True,
            tags=["kurta", "navy", "mens", "embroidered"],
            size_stock={"S": 5, "M": 8, "L": 10, "XL": 6, "XXL": 3},
            material="Cotton Blend", color="Navy Blue",
        ),
        FabricProduct(
            name="Premium Linen Fabric",
            description="High-quality linen fabric, breathable and perfect for summer wear.",
            category="mens", subcategory="fabric", price=20,
            images=["https://images.unsplash.com/photo-1519710164239-da123dc03ef4?w=500"],
            featured=False, active=True,
            tags=["fabric", "linen", "summer", "breathable"],
            stock_in_meters=300, price_per_meter=20, fabric_type="Premium Linen", width=58,
            texture="https://images.unsplash.com/photo-1519710164239-da123dc03ef4?w=500",
            stitching_available=True, stitching_price=40,
        ),
    ]


def ensure_admin(session: Session) -> User:
    email = settings.ADMIN_EMAIL.strip().lower()
    admin = session.query(User).filter(User.email == email).first()
    if admin:
        return admin
    admin = User(
        email=email,
        password_hash=get_password_hash(settings.ADMIN_PASSWORD),
        role="admin",
        first_name="Store",
        last_name="Admin",
    )
    session.add(admin)
    session.commit()
    logger.info("Created admin account %s", email)
    return admin


def seed(session: Session) -> int:
    """Replace the catalog with the starter products. Returns the number inserted."""
    session.query(Product).delete()
    products = build_catalog()
    session.add_all(products)
    session.commit()
    for p in products:
        logger.info("Created %s product: %s", p.type, p.name)
    return len(products)


if __name__ == "__main__":
    setup_logging()
    init_db()
    session = SessionLocal()
    try:
        ensure_admin(session)
        count = seed(session)
        logger.info("Seed finished, %d products", count)
    finally:
        session.close()
