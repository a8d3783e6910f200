# backend/routes/products.py
from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database import get_db
from models.product import Product
import schemas.product as product_schemas

router = APIRouter(tags=["Products"])


def _serialize(p: Product) -> product_schemas.ProductOut:
    # Variant columns only exist on the matching subclass
    product_fields = list(product_schemas.ProductOut.model_fields.keys())
    data = {f: getattr(p, f) for f in product_fields if hasattr(p, f)}
    return product_schemas.ProductOut.model_validate(data)


# =========================
# PRODUCT LIST
# =========================
@router.get("/products", response_model=product_schemas.ProductList)
def list_products(
    category: Optional[Literal["mens", "womens", "kids", "accessories"]] = Query(None),
    product_type: Optional[Literal["readymade", "fabric", "accessory"]] = Query(None, alias="type"),
    featured: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    query = db.query(Product).filter(Product.active == True)  # noqa: E712

    if category: query = query.filter(Product.category == category)
    if product_type: query = query.filter(Product.type == product_type)
    if featured: query = query.filter(Product.featured == True)  # noqa: E712

    items = query.order_by(Product.created_at.desc(), Product.id.desc()).all()
    return {"count": len(items), "data": [_serialize(p) for p in items]}


# =========================
# PRODUCT DETAIL
# =========================
@router.get("/products/{product_id}", response_model=product_schemas.ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return _serialize(product)
