# backend/models/product.py
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, JSON, CheckConstraint, func
from database import Base

PRODUCT_TYPES = ("readymade", "fabric", "accessory")
CATEGORIES = ("mens", "womens", "kids", "accessories")
SIZES = ("S", "M", "L", "XL", "XXL")


# Model Product
# A single catalog entry. The three product kinds share one table and are
# told apart by the `type` column (single-table inheritance); columns that
# belong to another kind stay NULL.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False, index=True)
    subcategory = Column(String, nullable=True)
    type = Column(String, nullable=False, index=True)

    price = Column(Float, CheckConstraint("price >= 0"), nullable=False)
    images = Column(JSON, nullable=False, default=list)
    featured = Column(Boolean, nullable=False, default=False, index=True)
    active = Column(Boolean, nullable=False, default=True, index=True)
    tags = Column(JSON, nullable=False, default=list)

    # Readymade garments and accessories
    material = Column(String, nullable=True)
    color = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {
        "polymorphic_on": type,
        "polymorphic_identity": "product",
    }

    @property
    def first_image(self) -> str:
        return self.images[0] if self.images else ""


class ReadymadeProduct(Product):
    # Stock per size, e.g. {"S": 10, "M": 15, ...}
    size_stock = Column(JSON, nullable=True)

    __mapper_args__ = {"polymorphic_identity": "readymade"}

    def stock_for(self, size: str) -> int:
        return int((self.size_stock or {}).get(size, 0) or 0)


class FabricProduct(Product):
    stock_in_meters = Column(Float, nullable=True)
    price_per_meter = Column(Float, nullable=True)
    fabric_type = Column(String, nullable=True)
    width = Column(Float, nullable=True)  # inches
    texture = Column(String, nullable=True)
    stitching_available = Column(Boolean, nullable=True, default=True)
    stitching_price = Column(Float, nullable=True, default=0)

    __mapper_args__ = {"polymorphic_identity": "fabric"}


class AccessoryProduct(Product):
    stock = Column(Integer, nullable=True)

    __mapper_args__ = {"polymorphic_identity": "accessory"}
