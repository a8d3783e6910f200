# backend/models/order.py
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, JSON, func
from sqlalchemy.orm import relationship
from database import Base

ORDER_STATUSES = ("pending", "confirmed", "processing", "shipped", "delivered", "cancelled")
PAYMENT_STATUSES = ("pending", "paid", "failed", "refunded")
PAYMENT_METHODS = ("card", "cod", "upi")
STITCHING_STATUSES = ("pending", "in_progress", "completed", "delivered")


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String, unique=True, nullable=False, index=True)

    # Registered buyer, or NULL for guest checkout
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    # Cart owner the order was placed from, used for guest access
    owner_key = Column(String, nullable=False, index=True)
    email = Column(String, nullable=True)

    # Pricing snapshot
    subtotal = Column(Float, nullable=False)
    tax = Column(Float, nullable=False, default=0)
    shipping_cost = Column(Float, nullable=False, default=0)
    total_amount = Column(Float, nullable=False)

    # Shipping address
    shipping_full_name = Column(String, nullable=False)
    shipping_phone = Column(String, nullable=False)
    shipping_address_line1 = Column(String, nullable=False)
    shipping_address_line2 = Column(String, nullable=True)
    shipping_city = Column(String, nullable=False)
    shipping_state = Column(String, nullable=False)
    shipping_postal_code = Column(String, nullable=False)
    shipping_country = Column(String, nullable=False)

    status = Column(String, nullable=False, default="pending", index=True)
    payment_status = Column(String, nullable=False, default="pending", index=True)
    payment_method = Column(String, nullable=False, default="cod")

    # Tracking
    tracking_number = Column(String, nullable=True)
    estimated_delivery_date = Column(DateTime(timezone=True), nullable=True)
    delivered_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    items = relationship(
        "OrderItem", back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id"
    )

    @property
    def has_stitching(self) -> bool:
        return any(it.stitching_style is not None for it in self.items)


# One purchased line, copied verbatim from the cart at checkout.
class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    item_type = Column(String, nullable=False)  # readymade | fabric | accessory

    # Catalog reference is kept as a plain id, the product may be removed later
    product_id = Column(Integer, nullable=False)
    product_name = Column(String, nullable=False)
    product_image = Column(String, nullable=False, default="")

    quantity = Column(Integer, nullable=False)
    total_price = Column(Float, nullable=False)

    # Readymade / accessory
    size = Column(String, nullable=True)
    price = Column(Float, nullable=True)

    # Fabric
    meters = Column(Float, nullable=True)
    price_per_meter = Column(Float, nullable=True)

    # Stitching (fabric with a tailoring request only)
    stitching_style = Column(String, nullable=True)
    stitching_measurements = Column(JSON, nullable=True)
    stitching_price = Column(Float, nullable=True)
    special_instructions = Column(String, nullable=True)
    stitching_status = Column(String, nullable=True)
    estimated_completion_date = Column(DateTime(timezone=True), nullable=True)

    order = relationship("Order", back_populates="items")
