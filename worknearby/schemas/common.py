# worknearby/schemas/common.py
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    detail: str = Field(description="Error message")

    model_config = {"json_schema_extra": {"examples": [{"detail": "Conflict"}]}}


class SuccessResponse(BaseModel):
    success: bool = Field(default=True, description="Always true when the write was accepted")

    model_config = {"json_schema_extra": {"examples": [{"success": True}]}}


class OkResponse(BaseModel):
    ok: bool = Field(description="Always true")

    model_config = {"json_schema_extra": {"examples": [{"ok": True}]}}


class CategoriesResponse(BaseModel):
    categories: list[str] = Field(description="Suggested listing categories")
