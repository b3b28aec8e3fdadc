from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator

class UserPreferencesUpdate(BaseModel):
    """The activeVehicleId key must be present; null clears the selection."""
    activeVehicleId: Optional[str] = Field(..., description="ID of the selected vehicle, or null")

    @field_validator("activeVehicleId", mode="before")
    @classmethod
    def blank_is_null(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

class UserPreferencesResponse(BaseModel):
    activeVehicleId: Optional[str] = None

    model_config = {
        "from_attributes": True
    }
