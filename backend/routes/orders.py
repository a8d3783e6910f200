# backend/routes/orders.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
import logging

from config import settings
from database import get_db
from utils.tokenJWT import get_current_user, get_current_user_optional, get_cart_owner
from utils.audit import write_log
from utils.cart_sync import open_cart
from utils.checkout import price_summary, next_order_number, order_items_from_cart
from models.users import User
from models.order import Order, OrderItem
from schemas.order import (
    OrderCreatePayload, OrderCreated, OrderResponse, OrdersPage,
    OrderItemOut, StitchingDetailsOut, ShippingAddressOut,
)

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = logging.getLogger(__name__)

def is_admin(user: Optional[User]) -> bool:
    return user is not None and (user.role or "").lower() == "admin"

def _item_to_out(it: OrderItem) -> OrderItemOut:
    stitching = None
    if it.stitching_style is not None:
        stitching = StitchingDetailsOut(
            style=it.stitching_style,
            measurements=it.stitching_measurements or {},
            stitching_price=it.stitching_price or 0,
            special_instructions=it.special_instructions,
            status=it.stitching_status or "pending",
            estimated_completion_date=it.estimated_completion_date,
        )
    return OrderItemOut(
        id=it.id,
        item_type=it.item_type,
        product_id=it.product_id,
        product_name=it.product_name,
        product_image=it.product_image or "",
        quantity=it.quantity,
        total_price=it.total_price,
        size=it.size,
        price=it.price,
        meters=it.meters,
        price_per_meter=it.price_per_meter,
        stitching_details=stitching,
    )

# Map Order model to OrderResponse schema
def order_to_out(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        order_number=order.order_number,
        user_id=order.user_id,
        email=order.email,
        items=[_item_to_out(it) for it in order.items],
        subtotal=order.subtotal,
        tax=order.tax,
        shipping_cost=order.shipping_cost,
        total_amount=order.total_amount,
        shipping_address=ShippingAddressOut(
            full_name=order.shipping_full_name,
            phone=order.shipping_phone,
            address_line1=order.shipping_address_line1,
            address_line2=order.shipping_address_line2,
            city=order.shipping_city,
            state=order.shipping_state,
            postal_code=order.shipping_postal_code,
            country=order.shipping_country,
        ),
        status=order.status,
        payment_status=order.payment_status,
        payment_method=order.payment_method,
        tracking_number=order.tracking_number,
        estimated_delivery_date=order.estimated_delivery_date,
        delivered_at=order.delivered_at,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )

def load_order(db: Session, order_id: int) -> Optional[Order]:
    return db.query(Order).options(joinedload(Order.items)).filter(Order.id == order_id).first()


# Place an order from the current cart, then empty the cart
@router.post("", response_model=OrderCreated, status_code=201)
def create_order(
    payload: OrderCreatePayload,
    request: Request,
    db: Session = Depends(get_db),
    owner_key: str = Depends(get_cart_owner),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    store = open_cart(db, owner_key)
    if not store.items:
        raise HTTPException(status_code=400, detail="Cart is empty")

    summary = price_summary(store.cart_total())
    address = payload.shipping_address

    try:
        order = Order(
            order_number=next_order_number(db),
            user_id=current_user.id if current_user else None,
            owner_key=owner_key,
            email=address.email,
            subtotal=summary["subtotal"],
            tax=summary["tax"],
            shipping_cost=summary["shipping_cost"],
            total_amount=summary["total"],
            shipping_full_name=address.full_name,
            shipping_phone=address.phone,
            shipping_address_line1=address.address,
            # Single-line checkout form: the city doubles as state
            shipping_city=address.city,
            shipping_state=address.city,
            shipping_postal_code=address.postal_code,
            shipping_country=address.country or settings.DEFAULT_COUNTRY,
            status="pending",
            payment_status="pending",
            payment_method=payload.payment_method,
        )
        order.items = order_items_from_cart(store.items)
        db.add(order)
        db.commit()
        db.refresh(order)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Order creation failed for %s", owner_key)
        raise HTTPException(status_code=500, detail=f"Failed to create order: {e}")

    store.clear_cart()

    write_log(
        db, user_id=order.user_id, owner_key=owner_key, action="ORDER_CREATE", resource="orders",
        status="SUCCESS", ip=request.client.host,
        meta={"order_id": order.id, "order_number": order.order_number, "total": order.total_amount},
    )
    logger.info("Order %s created (%d items, total %.2f)", order.order_number, len(order.items), order.total_amount)
    return OrderCreated(order_id=order.id, order_number=order.order_number)


# List the logged-in user's orders
@router.get("", response_model=OrdersPage)
def list_my_orders(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    q = db.query(Order).options(
        joinedload(Order.items)
    ).filter(Order.user_id == current_user.id).order_by(Order.created_at.desc(), Order.id.desc())
    total = db.query(Order).filter(Order.user_id == current_user.id).count()
    rows: List[Order] = q.offset((page - 1) * page_size).limit(page_size).all()
    items = [order_to_out(o) for o in rows]
    return {"items": items, "total": total, "page": page, "page_size": page_size}


# Get details of a specific order (owner, same guest session, or admin)
@router.get("/{order_id}", response_model=OrderResponse)
def get_order_detail(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user_optional),
    owner_key: str = Depends(get_cart_owner),
):
    o = load_order(db, order_id)
    if not o or (o.owner_key != owner_key and not is_admin(current_user)):
        raise HTTPException(status_code=404, detail="Order not found")
    return order_to_out(o)
