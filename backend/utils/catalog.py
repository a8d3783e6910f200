# utils/catalog.py
"""
Builds cart line items from add-to-cart requests.

This is the validation layer in front of the cart store: the product is looked
up once, checked against the request (type, stock, stitching availability) and
its current prices are copied onto the new line.
"""
from fastapi import HTTPException
from sqlalchemy.orm import Session

from models.product import Product, ReadymadeProduct, FabricProduct, AccessoryProduct
from schemas.cart import (
    CartAddItem, CartAddReadymade, CartAddFabric, CartAddAccessory,
    LineItem, ReadymadeLineItem, FabricLineItem, AccessoryLineItem,
    Measurements, StitchingSpecification,
)


def get_active_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id, Product.active == True).first()  # noqa: E712
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


def build_line_item(db: Session, payload: CartAddItem) -> LineItem:
    product = get_active_product(db, payload.product_id)

    if product.type != payload.type:
        raise HTTPException(
            status_code=400,
            detail=f"Product {product.id} is a {product.type} product, not {payload.type}",
        )

    if isinstance(payload, CartAddReadymade):
        return _readymade_line(product, payload)
    if isinstance(payload, CartAddFabric):
        return _fabric_line(product, payload)
    if isinstance(payload, CartAddAccessory):
        return _accessory_line(product, payload)
    raise HTTPException(status_code=400, detail="Unsupported item type")


def _readymade_line(product: ReadymadeProduct, payload: CartAddReadymade) -> ReadymadeLineItem:
    if payload.quantity > product.stock_for(payload.size):
        raise HTTPException(status_code=400, detail=f"Insufficient stock for size {payload.size}")

    return ReadymadeLineItem(
        product_id=product.id,
        name=product.name,
        image=product.first_image,
        quantity=payload.quantity,
        size=payload.size,
        price=product.price,
        material=product.material,
        color=product.color,
    )


def _fabric_line(product: FabricProduct, payload: CartAddFabric) -> FabricLineItem:
    needed = payload.meters * payload.quantity
    if product.stock_in_meters is not None and needed > product.stock_in_meters:
        raise HTTPException(status_code=400, detail="Insufficient fabric length in stock")

    stitching = None
    if payload.stitching is not None:
        if not product.stitching_available:
            raise HTTPException(status_code=400, detail="Stitching is not available for this fabric")
        stitching = StitchingSpecification(
            style=payload.stitching.style,
            measurements=Measurements(**payload.stitching.measurements.model_dump()),
            notes=payload.stitching.notes or None,
            stitching_price=product.stitching_price or 0,
        )

    price_per_meter = product.price_per_meter if product.price_per_meter is not None else product.price
    return FabricLineItem(
        product_id=product.id,
        name=product.name,
        image=product.first_image,
        quantity=payload.quantity,
        price_per_meter=price_per_meter,
        meters=payload.meters,
        fabric_type=product.fabric_type,
        stitching=stitching,
    )


def _accessory_line(product: AccessoryProduct, payload: CartAddAccessory) -> AccessoryLineItem:
    if product.stock is not None and payload.quantity > product.stock:
        raise HTTPException(status_code=400, detail="Insufficient stock")

    return AccessoryLineItem(
        product_id=product.id,
        name=product.name,
        image=product.first_image,
        quantity=payload.quantity,
        price=product.price,
        material=product.material,
        color=product.color,
    )
