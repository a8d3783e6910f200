# backend/models/measurement.py
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, JSON, func
from sqlalchemy.orm import relationship
from database import Base

GARMENT_TYPES = ("kurta", "thobe", "shirt", "pant", "other")


# Saved body measurements a customer can reuse for stitching requests
class MeasurementProfile(Base):
    __tablename__ = "measurement_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    profile_name = Column(String, nullable=False)  # e.g. "My Default", "For Son"
    garment_type = Column(String, nullable=False)
    measurements = Column(JSON, nullable=False)  # inches
    is_default = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="measurement_profiles")
