# backend/models/cart.py
from sqlalchemy import Column, Integer, String, DateTime, JSON, func
from database import Base

# Stored copy of one shopper's cart.
# The line items are kept as a JSON list in insertion order and are rewritten
# wholesale on every change (last write wins).
class Cart(Base):
    __tablename__ = "carts" # Table name

    id = Column(Integer, primary_key=True, index=True) # Primary key
    owner_key = Column(String, unique=True, index=True, nullable=False) # "user-<id>" or "guest-<session>"
    items = Column(JSON, nullable=False, default=list) # Serialized line items
    created_at = Column(DateTime(timezone=True), server_default=func.now()) # Creation timestamp
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
