from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator

from carhub.schemas.common import UtcDatetime, required_text, strip_or_none

class VehicleBase(BaseModel):
    """Base schema for vehicle information."""
    name: str = Field(..., description="Display name (e.g., 'Family car')")
    make: Optional[str] = Field(None, description="Manufacturer (e.g., 'Fiat')")
    model: Optional[str] = Field(None, description="Model (e.g., 'Uno')")
    year: Optional[int] = Field(None, description="Manufacturing year")
    licensePlate: Optional[str] = Field(None, description="License plate, stored uppercase")

class VehicleCreate(VehicleBase):
    """Schema for adding or updating a vehicle."""

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v: Any) -> str:
        return required_text(v, "Vehicle name is required.")

    @field_validator("make", "model", mode="before")
    @classmethod
    def clean_text(cls, v: Any) -> Optional[Any]:
        return strip_or_none(v)

    @field_validator("year", mode="before")
    @classmethod
    def clean_year(cls, v: Any) -> Optional[Any]:
        v = strip_or_none(v)
        # 0 means "not informed" in the web form
        if v == 0:
            return None
        return v

    @field_validator("licensePlate", mode="before")
    @classmethod
    def normalize_plate(cls, v: Any) -> Optional[Any]:
        v = strip_or_none(v)
        if isinstance(v, str):
            return v.upper()
        return v

class VehicleResponse(VehicleBase):
    """Schema for vehicle response."""
    id: str = Field(..., description="Vehicle ID")
    createdAt: UtcDatetime = Field(..., description="Creation timestamp")
    updatedAt: UtcDatetime = Field(..., description="Last update timestamp")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "id": "5f0c6a1e9b7d4c2f8a3e1d0b9c8a7f6e",
                "name": "Meu Carro",
                "make": "Fiat",
                "model": "Uno",
                "year": 2015,
                "licensePlate": "ABC1D23",
                "createdAt": "2024-03-01T12:00:00Z",
                "updatedAt": "2024-03-01T12:00:00Z"
            }
        }
    }
