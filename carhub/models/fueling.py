"""
SQLAlchemy model for the fuelingRecords table.
"""

from sqlalchemy import Column, String, Float, DateTime, Boolean, Enum

from carhub.db.session import Base
from carhub.db.base_model import BaseModel
from carhub.models.enums import FuelType, enum_values

class FuelingRecord(Base, BaseModel):
    """
    One fill-up of a vehicle.
    kmPerLiter is derived when the record is written and is only set for full tanks.
    """
    __tablename__ = "fuelingRecords"

    vehicleId = Column(String(32), nullable=False, index=True)  # Reference without constraint
    date = Column(DateTime, nullable=False)
    mileage = Column(Float, nullable=False)  # Odometer reading in km
    fuelType = Column(
        Enum(FuelType, values_callable=enum_values, native_enum=False, length=32),
        nullable=False,
    )
    liters = Column(Float, nullable=False)
    cost = Column(Float, nullable=False)
    isFullTank = Column(Boolean, nullable=False, default=False)
    station = Column(String, nullable=True)
    kmPerLiter = Column(Float, nullable=True)

    def __repr__(self):
        return f"<FuelingRecord {self.id} for vehicle {self.vehicleId}>"
