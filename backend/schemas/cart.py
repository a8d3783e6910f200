from pydantic import BaseModel, Discriminator, Field
from typing import Annotated, List, Literal, Optional, Union

Size = Literal["S", "M", "L", "XL", "XXL"]
GarmentStyle = Literal["Jubbah", "Kurta", "Shirt", "Kandura"]


# Body measurements in inches, as stored on a line item
class Measurements(BaseModel):
    neck: float = Field(gt=0)
    chest: float = Field(gt=0)
    waist: float = Field(gt=0)
    shoulder: float = Field(gt=0)
    sleeve_length: float = Field(gt=0)
    shirt_length: float = Field(gt=0)


# Tailoring request attached to a fabric line item
class StitchingSpecification(BaseModel):
    style: GarmentStyle
    measurements: Measurements
    notes: Optional[str] = Field(default=None, max_length=500)
    stitching_price: float = Field(ge=0)


# ---- Line items (one variant per product type, tagged by `type`) ----

class LineItemBase(BaseModel):
    id: str = ""
    product_id: int
    name: str
    image: str = ""
    quantity: int = Field(ge=1)


class ReadymadeLineItem(LineItemBase):
    type: Literal["readymade"] = "readymade"
    size: Size
    price: float = Field(ge=0)
    material: Optional[str] = None
    color: Optional[str] = None


class FabricLineItem(LineItemBase):
    type: Literal["fabric"] = "fabric"
    price_per_meter: float = Field(ge=0)
    meters: float = Field(ge=0.5)
    fabric_type: Optional[str] = None
    stitching: Optional[StitchingSpecification] = None


class AccessoryLineItem(LineItemBase):
    type: Literal["accessory"] = "accessory"
    price: float = Field(ge=0)
    material: Optional[str] = None
    color: Optional[str] = None


LineItem = Annotated[
    Union[ReadymadeLineItem, FabricLineItem, AccessoryLineItem],
    Field(discriminator="type"),
]


# ---- Add-to-cart requests ----

# Measurement ranges accepted from the storefront form
class MeasurementsIn(BaseModel):
    neck: float = Field(ge=10, le=25, description="Around the base of the neck")
    chest: float = Field(ge=20, le=60, description="Around the fullest part of the chest")
    waist: float = Field(ge=20, le=60, description="Around the natural waistline")
    shoulder: float = Field(ge=10, le=30, description="Shoulder point to shoulder point across the back")
    sleeve_length: float = Field(ge=10, le=40, description="Shoulder to wrist with arm slightly bent")
    shirt_length: float = Field(ge=20, le=70, description="Base of neck to the desired hem")


class StitchingRequest(BaseModel):
    style: GarmentStyle
    measurements: MeasurementsIn
    notes: Optional[str] = Field(default=None, max_length=500)


class CartAddReadymade(BaseModel):
    type: Literal["readymade"]
    product_id: int
    size: Size
    quantity: int = Field(1, ge=1, le=100)


class CartAddFabric(BaseModel):
    type: Literal["fabric"]
    product_id: int
    meters: float = Field(ge=0.5, le=100)
    quantity: int = Field(1, ge=1, le=100)
    stitching: Optional[StitchingRequest] = None


class CartAddAccessory(BaseModel):
    type: Literal["accessory"]
    product_id: int
    quantity: int = Field(1, ge=1, le=100)


# Add-to-cart request, tagged by "type"
CartAddItem = Annotated[
    Union[CartAddReadymade, CartAddFabric, CartAddAccessory],
    Discriminator("type"),
]


# Request schema for updating cart item quantity (0 or less removes the item)
class CartUpdateItem(BaseModel):
    quantity: int


# ---- Responses ----

class ReadymadeLineOut(ReadymadeLineItem):
    item_total: float


class FabricLineOut(FabricLineItem):
    item_total: float


class AccessoryLineOut(AccessoryLineItem):
    item_total: float


LineItemOut = Annotated[
    Union[ReadymadeLineOut, FabricLineOut, AccessoryLineOut],
    Field(discriminator="type"),
]


# Response schema for the entire cart summary
class CartOut(BaseModel):
    items: List[LineItemOut]
    total_items: int
    subtotal: float
    tax: float
    shipping_cost: float
    total: float
