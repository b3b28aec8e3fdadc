from typing import Any, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from carhub.models.enums import FuelType
from carhub.schemas.common import (
    UtcDatetime,
    parse_calendar_date,
    required_text,
    strip_or_none,
)

class FuelingRecordBase(BaseModel):
    """Fields the client sends for a fill-up."""
    vehicleId: str = Field(..., description="ID of the vehicle")
    date: datetime = Field(..., description="Fill-up date")
    mileage: float = Field(..., ge=0, allow_inf_nan=False, description="Odometer reading in km")
    fuelType: FuelType = Field(..., description="Fuel type")
    liters: float = Field(..., gt=0, allow_inf_nan=False, description="Volume in liters")
    cost: float = Field(..., gt=0, allow_inf_nan=False, description="Total cost")
    isFullTank: bool = Field(False, description="Whether the tank was filled up completely")
    station: Optional[str] = Field(None, description="Station name")

class FuelingRecordCreate(FuelingRecordBase):
    """
    Schema for adding or updating a fueling record.

    On update the stored vehicleId is kept; the field is only required for
    shape compatibility with the add payload.
    """

    @field_validator("vehicleId", mode="before")
    @classmethod
    def check_vehicle_id(cls, v: Any) -> str:
        return required_text(v, "vehicleId is required.")

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, v: Any) -> datetime:
        return parse_calendar_date(v)

    @field_validator("isFullTank", mode="before")
    @classmethod
    def default_full_tank(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("station", mode="before")
    @classmethod
    def clean_station(cls, v: Any) -> Optional[Any]:
        return strip_or_none(v)

class FuelingRecordResponse(FuelingRecordBase):
    """Schema for fueling record response."""
    id: str = Field(..., description="Record ID")
    date: UtcDatetime = Field(..., description="Fill-up date")
    kmPerLiter: Optional[float] = Field(
        None, description="Km driven per liter since the previous full tank; set for full tanks only"
    )
    createdAt: UtcDatetime = Field(..., description="Creation timestamp")
    updatedAt: UtcDatetime = Field(..., description="Last update timestamp")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "id": "0d9e8f7a6b5c4d3e2f1a0b9c8d7e6f5a",
                "vehicleId": "5f0c6a1e9b7d4c2f8a3e1d0b9c8a7f6e",
                "date": "2024-03-10T00:00:00Z",
                "mileage": 10400,
                "fuelType": "Gasolina",
                "liters": 40,
                "cost": 232.0,
                "isFullTank": True,
                "station": "Posto Central",
                "kmPerLiter": 10.0,
                "createdAt": "2024-03-10T18:21:00Z",
                "updatedAt": "2024-03-10T18:21:00Z"
            }
        }
    }
