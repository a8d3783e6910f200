# backend/schemas/product.py
from pydantic import BaseModel, ConfigDict
from typing import Dict, List, Optional
from datetime import datetime


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Catalog entry as shown in the storefront; variant fields are null for other types
class ProductOut(ORMBase):
    id: int
    name: str
    description: str
    category: str
    subcategory: Optional[str] = None
    type: str
    price: float
    images: List[str] = []
    featured: bool
    active: bool
    tags: List[str] = []
    material: Optional[str] = None
    color: Optional[str] = None

    # Readymade
    size_stock: Optional[Dict[str, int]] = None

    # Fabric
    stock_in_meters: Optional[float] = None
    price_per_meter: Optional[float] = None
    fabric_type: Optional[str] = None
    width: Optional[float] = None
    texture: Optional[str] = None
    stitching_available: Optional[bool] = None
    stitching_price: Optional[float] = None

    # Accessory
    stock: Optional[int] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductList(BaseModel):
    count: int
    data: List[ProductOut]
