from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from worknearby.models.participant import ParticipantRole


class ParticipantUpsertRequest(BaseModel):
    id: str = Field(min_length=1, max_length=128, description="Caller-assigned participant id")
    name: str = Field(min_length=1, max_length=120, description="Display name")
    role: ParticipantRole = Field(description="worker | employer")
    lat: float | None = Field(default=None, ge=-90.0, le=90.0, description="Latitude (-90..90)")
    lng: float | None = Field(
        default=None, ge=-180.0, le=180.0, description="Longitude (-180..180)"
    )

    @model_validator(mode="after")
    def _lat_lng_together(self) -> ParticipantUpsertRequest:
        if (self.lat is None) != (self.lng is None):
            raise ValueError("lat and lng must be given together")
        return self


class WorkerNearbyItem(BaseModel):
    id: str
    name: str
    role: str
    lat: float
    lng: float
    last_active: str | None = Field(default=None, description="ISO8601, UTC")
    distance: float = Field(description="Distance from the origin in km")
