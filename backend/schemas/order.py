from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictInt
from typing import Dict, List, Literal, Optional, Union
from datetime import datetime

OrderStatus = Literal["pending", "confirmed", "processing", "shipped", "delivered", "cancelled"]
PaymentMethod = Literal["card", "cod", "upi"]


# Shipping address entered on the checkout form
class ShippingAddressIn(BaseModel):
    full_name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    phone: str = Field(min_length=10, max_length=20, pattern=r"^[0-9+\-\s()]+$")
    address: str = Field(min_length=5, max_length=200)
    city: str = Field(min_length=2, max_length=100)
    postal_code: str = Field(min_length=3, max_length=20)
    country: str = Field(min_length=2, max_length=100)


# Input schema for placing an order from the current cart
class OrderCreatePayload(BaseModel):
    shipping_address: ShippingAddressIn
    payment_method: PaymentMethod = "cod"


class OrderCreated(BaseModel):
    order_id: int
    order_number: str


class StitchingDetailsOut(BaseModel):
    style: str
    measurements: Dict[str, float]
    stitching_price: float
    special_instructions: Optional[str] = None
    status: str
    estimated_completion_date: Optional[datetime] = None


# Output schema for an individual order line item
class OrderItemOut(BaseModel):
    id: int
    item_type: str
    product_id: int
    product_name: str
    product_image: str
    quantity: int
    total_price: float
    size: Optional[str] = None
    price: Optional[float] = None
    meters: Optional[float] = None
    price_per_meter: Optional[float] = None
    stitching_details: Optional[StitchingDetailsOut] = None


class ShippingAddressOut(BaseModel):
    full_name: str
    phone: str
    address_line1: str
    address_line2: Optional[str] = None
    city: str
    state: str
    postal_code: str
    country: str


# Output schema representing the full order details
class OrderResponse(BaseModel):
    id: int
    order_number: str
    user_id: Optional[int] = None
    email: Optional[str] = None
    items: List[OrderItemOut]
    subtotal: float
    tax: float
    shipping_cost: float
    total_amount: float
    shipping_address: ShippingAddressOut
    status: str
    payment_status: str
    payment_method: str
    tracking_number: Optional[str] = None
    estimated_delivery_date: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Schema for paginated order lists
class OrdersPage(BaseModel):
    items: List[OrderResponse]
    total: int
    page: int
    page_size: int


# Admin listing
class AdminOrdersList(BaseModel):
    count: int
    data: List[OrderResponse]


# Admin update of order status and/or the stitching job of one item
class OrderStatusPatch(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: Optional[str] = None
    stitching_status: Optional[str] = None
    # Numeric id or its string form, booleans are rejected
    item_id: Optional[Union[StrictInt, str]] = None


class AdminStats(BaseModel):
    total_orders: int
    pending_stitching: int
    total_revenue: float


# One printable card per tailored item
class TailorJobCard(BaseModel):
    order_number: str
    item_id: int
    customer_name: str
    product_name: str
    meters: Optional[float] = None
    quantity: int
    style: str
    measurements: Dict[str, float]
    special_instructions: Optional[str] = None
    status: str
    ordered_at: Optional[datetime] = None
