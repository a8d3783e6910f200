# utils/checkout.py
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from config import settings
from models.order import Order, OrderItem
from schemas.cart import LineItem, ReadymadeLineItem, FabricLineItem, AccessoryLineItem
from utils.cart_store import item_total


def price_summary(subtotal: float) -> Dict[str, float]:
    """Subtotal, tax, shipping and grand total rounded to currency precision."""
    tax = subtotal * settings.TAX_RATE
    shipping = settings.SHIPPING_COST
    return {
        "subtotal": round(subtotal, 2),
        "tax": round(tax, 2),
        "shipping_cost": round(shipping, 2),
        "total": round(subtotal + tax + shipping, 2),
    }


def next_order_number(db: Session, now: Optional[datetime] = None) -> str:
    # FB + two-digit year + month + running number, e.g. FB250300042
    now = now or datetime.now()
    count = db.query(Order).count()
    return f"FB{now:%y%m}{count + 1:05d}"


def order_item_from_line(line: LineItem) -> OrderItem:
    """Copy one cart line into an order item, prices and measurements verbatim."""
    item = OrderItem(
        item_type=line.type,
        product_id=line.product_id,
        product_name=line.name,
        product_image=line.image or "",
        quantity=line.quantity,
        total_price=round(item_total(line), 2),
    )

    if isinstance(line, (ReadymadeLineItem, AccessoryLineItem)):
        item.price = line.price
        if isinstance(line, ReadymadeLineItem):
            item.size = line.size
    elif isinstance(line, FabricLineItem):
        item.meters = line.meters
        item.price_per_meter = line.price_per_meter
        if line.stitching is not None:
            item.stitching_style = line.stitching.style
            item.stitching_measurements = line.stitching.measurements.model_dump()
            item.stitching_price = line.stitching.stitching_price
            item.special_instructions = line.stitching.notes or ""
            item.stitching_status = "pending"
    else:
        raise TypeError(f"Unsupported cart item: {type(line).__name__}")

    return item


def order_items_from_cart(lines: List[LineItem]) -> List[OrderItem]:
    return [order_item_from_line(line) for line in lines]
