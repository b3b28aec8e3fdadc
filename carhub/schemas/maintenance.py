from typing import Any, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from carhub.models.enums import MaintenanceCategory, MaintenanceType
from carhub.schemas.common import (
    UtcDatetime,
    parse_calendar_date,
    required_text,
    strip_or_none,
)

class MaintenanceRecordBase(BaseModel):
    """Fields the client sends for a service event."""
    vehicleId: str = Field(..., description="ID of the vehicle")
    date: datetime = Field(..., description="Service date")
    description: str = Field(..., description="What was done")
    cost: float = Field(..., ge=0, allow_inf_nan=False, description="Total cost")
    type: MaintenanceType = Field(..., description="Maintenance type")
    category: MaintenanceCategory = Field(..., description="Vehicle system concerned")
    notes: Optional[str] = Field(None, description="Free-text notes")
    mileage: Optional[float] = Field(None, ge=0, allow_inf_nan=False, description="Odometer reading in km")

class MaintenanceRecordCreate(MaintenanceRecordBase):
    """Schema for adding or updating a maintenance record."""

    @field_validator("vehicleId", mode="before")
    @classmethod
    def check_vehicle_id(cls, v: Any) -> str:
        return required_text(v, "vehicleId is required.")

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, v: Any) -> datetime:
        return parse_calendar_date(v)

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, v: Any) -> str:
        return required_text(v, "Description is required.")

    @field_validator("notes", "mileage", mode="before")
    @classmethod
    def clean_optional(cls, v: Any) -> Optional[Any]:
        return strip_or_none(v)

class MaintenanceRecordResponse(MaintenanceRecordBase):
    """Schema for maintenance record response."""
    id: str = Field(..., description="Record ID")
    date: UtcDatetime = Field(..., description="Service date")
    createdAt: UtcDatetime = Field(..., description="Creation timestamp")
    updatedAt: UtcDatetime = Field(..., description="Last update timestamp")

    model_config = {
        "from_attributes": True
    }
