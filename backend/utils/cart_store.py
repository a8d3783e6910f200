# utils/cart_store.py
"""
In-memory shopping cart for a single shopper.

The store keeps line items in insertion order and decides, per add, whether the
new line merges into an existing one or is appended:

- readymade garments merge by (product, size)
- plain fabric and accessories merge by product
- fabric with a stitching request never merges, every tailored piece is its
  own line

Prices on a line are snapshots taken when the line was built; totals are
recomputed from the current lines on every call.

Persistence is not handled here. Pass `on_change` to get the full item list
after every mutation; errors raised by the callback are logged and do not
affect the operation.
"""
import logging
import uuid
from typing import Callable, Iterable, List, Optional

from schemas.cart import AccessoryLineItem, FabricLineItem, LineItem, ReadymadeLineItem

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[List[LineItem]], None]


def identity_of(item: LineItem) -> str:
    """Return the key that decides merge vs append for `item`."""
    if isinstance(item, ReadymadeLineItem):
        return f"{item.product_id}-{item.size}"
    if isinstance(item, FabricLineItem):
        if item.stitching is not None:
            # Unique per add, two tailored pieces never share a line
            return f"{item.product_id}-custom-{uuid.uuid4().hex}"
        return str(item.product_id)
    if isinstance(item, AccessoryLineItem):
        return str(item.product_id)
    raise TypeError(f"Unsupported cart item: {type(item).__name__}")


def is_mergeable(item: LineItem) -> bool:
    if isinstance(item, (ReadymadeLineItem, AccessoryLineItem)):
        return True
    if isinstance(item, FabricLineItem):
        return item.stitching is None
    raise TypeError(f"Unsupported cart item: {type(item).__name__}")


def item_total(item: LineItem) -> float:
    """Price of a line: stitching is charged per purchased quantity."""
    if isinstance(item, (ReadymadeLineItem, AccessoryLineItem)):
        return item.price * item.quantity
    if isinstance(item, FabricLineItem):
        unit_cost = item.price_per_meter * item.meters
        if item.stitching is not None:
            unit_cost += item.stitching.stitching_price
        return unit_cost * item.quantity
    raise TypeError(f"Unsupported cart item: {type(item).__name__}")


class CartStore:
    def __init__(self, items: Optional[Iterable[LineItem]] = None, on_change: Optional[ChangeCallback] = None):
        self.items: List[LineItem] = list(items or [])
        self.on_change = on_change

    def add_item(self, new_item: LineItem) -> LineItem:
        """Merge `new_item` into a matching line or append it. Returns the affected line."""
        item_id = identity_of(new_item)
        existing = self._find(item_id)

        if existing is not None and is_mergeable(new_item):
            existing.quantity += new_item.quantity
            self._changed()
            return existing

        added = new_item.model_copy(update={"id": item_id}, deep=True)
        self.items.append(added)
        self._changed()
        return added

    def remove_item(self, item_id: str) -> None:
        for idx, it in enumerate(self.items):
            if it.id == item_id:
                del self.items[idx]
                self._changed()
                return

    def update_quantity(self, item_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(item_id)
            return

        item = self._find(item_id)
        if item is None:
            return
        item.quantity = quantity
        self._changed()

    def clear_cart(self) -> None:
        self.items = []
        self._changed()

    def cart_total(self) -> float:
        return sum(item_total(it) for it in self.items)

    def total_item_count(self) -> int:
        return sum(it.quantity for it in self.items)

    def _find(self, item_id: str) -> Optional[LineItem]:
        for it in self.items:
            if it.id == item_id:
                return it
        return None

    def _changed(self) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(list(self.items))
        except Exception:
            # The in-memory state stays authoritative; storage catches up on the next change
            logger.exception("Cart sync failed (%d items)", len(self.items))
