from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from worknearby.models.listing import CATEGORY_MAX_LENGTH, DEFAULT_CATEGORY


class ListingCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1, max_length=128, description="Caller-assigned listing id")
    user_id: str = Field(alias="userId", min_length=1, max_length=128, description="Owner id")
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default="", max_length=5000)
    category: str | None = Field(default=DEFAULT_CATEGORY, max_length=CATEGORY_MAX_LENGTH)
    lat: float = Field(ge=-90.0, le=90.0, description="Latitude (-90..90)")
    lng: float = Field(ge=-180.0, le=180.0, description="Longitude (-180..180)")


class ListingNearbyItem(BaseModel):
    id: str
    user_id: str
    user_name: str | None = Field(default=None, description="Owner name, null if the owner is gone")
    title: str
    description: str
    category: str
    lat: float
    lng: float
    created_at: str | None = Field(default=None, description="ISO8601, UTC")
    distance: float = Field(description="Distance from the origin in km")
