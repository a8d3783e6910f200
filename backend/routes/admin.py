# backend/routes/admin.py
from datetime import datetime
from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
import logging

from database import get_db
from models.users import User
from models.order import Order, OrderItem, ORDER_STATUSES, STITCHING_STATUSES
from routes.orders import order_to_out, load_order
from schemas.order import AdminOrdersList, AdminStats, OrderResponse, OrderStatusPatch, TailorJobCard
from utils.audit import write_log
from utils.tokenJWT import role_required

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger(__name__)

require_admin = role_required("admin")

# Stitching jobs still in the tailor's queue
OPEN_STITCHING_STATUSES = ("pending", "in_progress")


# List all orders, optionally only stitching jobs or completed orders (Admin only)
@router.get("/orders", response_model=AdminOrdersList)
def list_orders(
    filter_: Optional[Literal["all", "stitching", "completed"]] = Query(None, alias="filter"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    query = db.query(Order).options(joinedload(Order.items))

    if filter_ == "stitching":
        # Orders with at least one item that carries stitching details
        query = query.filter(Order.items.any(OrderItem.stitching_style.isnot(None)))
    elif filter_ == "completed":
        query = query.filter(Order.status == "delivered")

    orders = query.order_by(Order.created_at.desc(), Order.id.desc()).all()
    return {"count": len(orders), "data": [order_to_out(o) for o in orders]}


# Dashboard summary (Admin only)
@router.get("/stats", response_model=AdminStats)
def get_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    total_orders = db.query(Order).count()

    pending_stitching = db.query(OrderItem).join(Order, OrderItem.order_id == Order.id).filter(
        OrderItem.stitching_style.isnot(None),
        OrderItem.stitching_status.in_(OPEN_STITCHING_STATUSES),
        Order.status != "cancelled",
    ).count()

    # Cancelled orders do not count towards revenue
    total_revenue = db.query(func.sum(Order.total_amount)).filter(Order.status != "cancelled").scalar() or 0.0

    return AdminStats(
        total_orders=total_orders,
        pending_stitching=pending_stitching,
        total_revenue=round(total_revenue, 2),
    )


# Get details of any order (Admin only)
@router.get("/orders/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    order = load_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order_to_out(order)


# Tailor job cards for every stitched item of an order (Admin only)
@router.get("/orders/{order_id}/job-cards", response_model=List[TailorJobCard])
def get_job_cards(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    order = load_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    return [
        TailorJobCard(
            order_number=order.order_number,
            item_id=it.id,
            customer_name=order.shipping_full_name,
            product_name=it.product_name,
            meters=it.meters,
            quantity=it.quantity,
            style=it.stitching_style,
            measurements=it.stitching_measurements or {},
            special_instructions=it.special_instructions,
            status=it.stitching_status or "pending",
            ordered_at=order.created_at,
        )
        for it in order.items
        if it.stitching_style is not None
    ]


def _parse_item_id(raw) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail="Invalid item ID")


def _set_status(order: Order, new_status: str) -> None:
    if new_status not in ORDER_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid order status")
    order.status = new_status
    if new_status == "delivered" and order.delivered_at is None:
        order.delivered_at = datetime.now()


# Update order status and/or the stitching status of one item (Admin only)
@router.patch("/orders/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: int,
    payload: OrderStatusPatch,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    order = load_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    old_status = order.status
    meta = {"order_id": order.id}

    if payload.stitching_status is not None or payload.item_id is not None:
        if payload.item_id in (None, "") or not payload.stitching_status:
            raise HTTPException(status_code=400, detail="item_id and stitching_status are required")
        if payload.stitching_status not in STITCHING_STATUSES:
            raise HTTPException(status_code=400, detail="Invalid stitching status")

        item_id = _parse_item_id(payload.item_id)
        item = next((it for it in order.items if it.id == item_id), None)
        if item is None:
            raise HTTPException(status_code=404, detail="Order item not found")
        if item.stitching_style is None:
            raise HTTPException(status_code=400, detail="Selected item has no stitching details")

        if payload.status is not None:
            _set_status(order, payload.status)

        meta.update({"item_id": item.id, "old_stitching": item.stitching_status, "new_stitching": payload.stitching_status})
        item.stitching_status = payload.stitching_status
    elif payload.status is not None:
        _set_status(order, payload.status)
    else:
        raise HTTPException(status_code=400, detail="No update payload provided")

    db.commit()
    meta.update({"old": old_status, "new": order.status})
    write_log(db, user_id=current_user.id, action="ORDER_STATUS_CHANGE", resource="orders", status="SUCCESS",
        ip=request.client.host, meta=meta)
    logger.info("Order %s updated by admin %s: %s", order.order_number, current_user.id, meta)

    return order_to_out(load_order(db, order_id))
