# utils/cart_sync.py
import logging
from typing import List

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.cart import Cart
from schemas.cart import LineItem
from utils.cart_store import CartStore

logger = logging.getLogger(__name__)

_line_items = TypeAdapter(List[LineItem])


def load_items(db: Session, owner_key: str) -> List[LineItem]:
    """Stored line items for `owner_key`, or an empty list for a new shopper."""
    cart = db.query(Cart).filter(Cart.owner_key == owner_key).first()
    if not cart or not cart.items:
        return []
    try:
        return _line_items.validate_python(cart.items)
    except ValidationError:
        # Unreadable stored cart -> start over instead of failing every request
        logger.warning("Discarding unreadable cart for %s", owner_key)
        return []


def save_items(db: Session, owner_key: str, items: List[LineItem]) -> None:
    """Overwrite the stored cart of `owner_key` with `items`."""
    payload = _line_items.dump_python(items, mode="json")
    try:
        cart = db.query(Cart).filter(Cart.owner_key == owner_key).first()
        if cart is None:
            cart = Cart(owner_key=owner_key, items=payload)
            db.add(cart)
        else:
            cart.items = payload
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def open_cart(db: Session, owner_key: str) -> CartStore:
    """Cart store preloaded from storage that writes back after every change."""
    return CartStore(
        load_items(db, owner_key),
        on_change=lambda items: save_items(db, owner_key, items),
    )
