"""
SQLAlchemy model for the maintenanceRecords table.
"""

from sqlalchemy import Column, String, Float, DateTime, Text, Enum

from carhub.db.session import Base
from carhub.db.base_model import BaseModel
from carhub.models.enums import MaintenanceCategory, MaintenanceType, enum_values

class MaintenanceRecord(Base, BaseModel):
    """
    One service event of a vehicle.
    """
    __tablename__ = "maintenanceRecords"

    vehicleId = Column(String(32), nullable=False, index=True)  # Reference without constraint
    date = Column(DateTime, nullable=False)
    mileage = Column(Float, nullable=True)
    description = Column(Text, nullable=False)
    cost = Column(Float, nullable=False)
    type = Column(
        Enum(MaintenanceType, values_callable=enum_values, native_enum=False, length=32),
        nullable=False,
    )
    category = Column(
        Enum(MaintenanceCategory, values_callable=enum_values, native_enum=False, length=32),
        nullable=False,
    )
    notes = Column(Text, nullable=True)

    def __repr__(self):
        return f"<MaintenanceRecord {self.id} for vehicle {self.vehicleId}>"
