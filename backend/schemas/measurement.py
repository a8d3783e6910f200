from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional
from datetime import datetime

GarmentType = Literal["kurta", "thobe", "shirt", "pant", "other"]


# Saved measurements in inches; waist and trouser fields are optional
class ProfileMeasurements(BaseModel):
    neck: float = Field(ge=10, le=30)
    chest: float = Field(ge=20, le=60)
    waist: Optional[float] = Field(default=None, ge=20, le=60)
    shoulder: float = Field(ge=10, le=30)
    sleeve_length: float = Field(ge=10, le=40)
    shirt_length: float = Field(ge=20, le=60)
    pant_length: Optional[float] = Field(default=None, ge=20, le=50)
    pant_waist: Optional[float] = Field(default=None, ge=20, le=60)


class MeasurementProfileCreate(BaseModel):
    profile_name: str = Field(min_length=1, max_length=60)
    garment_type: GarmentType
    measurements: ProfileMeasurements
    is_default: bool = False


class MeasurementProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    profile_name: str
    garment_type: str
    measurements: ProfileMeasurements
    is_default: bool
    created_at: Optional[datetime] = None
