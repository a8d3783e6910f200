# backend/routes/cart.py
from fastapi import APIRouter, Depends, status, Request
from sqlalchemy.orm import Session
from database import get_db
from utils.tokenJWT import get_cart_owner
from utils.audit import write_log
from utils.cart_store import CartStore, item_total
from utils.cart_sync import open_cart
from utils.catalog import build_line_item
from utils.checkout import price_summary
from schemas.cart import CartAddItem, CartUpdateItem, CartOut

router = APIRouter(prefix="/cart", tags=["Cart"])

def _owner_user_id(owner_key: str):
    # "user-12" -> 12, guests have no user id
    return int(owner_key.split("-", 1)[1]) if owner_key.startswith("user-") else None

def _cart_to_out(store: CartStore) -> CartOut:
    items_out = [
        {**it.model_dump(), "item_total": round(item_total(it), 2)}
        for it in store.items
    ]
    return CartOut(
        items=items_out,
        total_items=store.total_item_count(),
        **price_summary(store.cart_total()),
    )

@router.get("", response_model=CartOut)
def get_cart(
    db: Session = Depends(get_db),
    owner_key: str = Depends(get_cart_owner),
):
    store = open_cart(db, owner_key)
    return _cart_to_out(store)

@router.post("/items", response_model=CartOut, status_code=status.HTTP_200_OK)
def add_to_cart(
    payload: CartAddItem,
    request: Request,
    db: Session = Depends(get_db),
    owner_key: str = Depends(get_cart_owner),
):
    line = build_line_item(db, payload)

    store = open_cart(db, owner_key)
    added = store.add_item(line)

    out = _cart_to_out(store)
    write_log(
        db,
        user_id=_owner_user_id(owner_key),
        owner_key=owner_key,
        action="CART_ADD",
        resource="cart",
        status="SUCCESS",
        ip=request.client.host,
        meta={"item_id": added.id, "qty": payload.quantity, "cart_items": len(out.items), "subtotal": out.subtotal},
    )
    return out

@router.patch("/items/{item_id}", response_model=CartOut)
def update_cart_item(
    item_id: str,
    payload: CartUpdateItem,
    request: Request,
    db: Session = Depends(get_db),
    owner_key: str = Depends(get_cart_owner),
):
    store = open_cart(db, owner_key)
    store.update_quantity(item_id, payload.quantity)

    out = _cart_to_out(store)
    write_log(
        db,
        user_id=_owner_user_id(owner_key),
        owner_key=owner_key,
        action="CART_UPDATE",
        resource="cart",
        status="SUCCESS",
        ip=request.client.host,
        meta={"item_id": item_id, "qty": payload.quantity, "subtotal": out.subtotal},
    )
    return out

@router.delete("/items/{item_id}", response_model=CartOut)
def delete_cart_item(
    item_id: str,
    request: Request,
    db: Session = Depends(get_db),
    owner_key: str = Depends(get_cart_owner),
):
    store = open_cart(db, owner_key)
    store.remove_item(item_id)

    out = _cart_to_out(store)
    write_log(
        db,
        user_id=_owner_user_id(owner_key),
        owner_key=owner_key,
        action="CART_DELETE",
        resource="cart",
        status="SUCCESS",
        ip=request.client.host,
        meta={"item_id": item_id, "cart_items": len(out.items), "subtotal": out.subtotal},
    )
    return out

@router.delete("", response_model=CartOut)
def clear_cart(
    request: Request,
    db: Session = Depends(get_db),
    owner_key: str = Depends(get_cart_owner),
):
    store = open_cart(db, owner_key)
    store.clear_cart()

    write_log(
        db,
        user_id=_owner_user_id(owner_key),
        owner_key=owner_key,
        action="CART_CLEAR",
        resource="cart",
        status="SUCCESS",
        ip=request.client.host,
    )
    return _cart_to_out(store)
