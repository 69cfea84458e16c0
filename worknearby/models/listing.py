from __future__ import annotations

from sqlalchemy import Column, DateTime, Float, String, Text

from worknearby.models.base import Base

DEFAULT_CATEGORY = "General"
CATEGORY_MAX_LENGTH = 64
SUGGESTED_CATEGORIES = ("General", "Delivery", "Cleaning", "Technical", "Manual Labor")


class Listing(Base):
    __tablename__ = "listings"

    id = Column(String, primary_key=True)
    # No FK: a listing may outlive its owner row
    owner_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(CATEGORY_MAX_LENGTH), nullable=False, default=DEFAULT_CATEGORY)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    created_at = Column(DateTime, nullable=False)
