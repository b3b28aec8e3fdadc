"""
Import all models from their respective modules.
"""

from carhub.models.enums import FuelType, MaintenanceType, MaintenanceCategory
from carhub.models.vehicle import Vehicle
from carhub.models.fueling import FuelingRecord
from carhub.models.maintenance import MaintenanceRecord
from carhub.models.preferences import UserPreference

# Export all models
__all__ = [
    "FuelType",
    "MaintenanceType",
    "MaintenanceCategory",
    "Vehicle",
    "FuelingRecord",
    "MaintenanceRecord",
    "UserPreference",
]
