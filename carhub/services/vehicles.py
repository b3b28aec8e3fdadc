"""
Store access for vehicles. Every query is scoped by the owner's subject id.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from carhub.core.exceptions import LastVehicleError
from carhub.models.fueling import FuelingRecord
from carhub.models.maintenance import MaintenanceRecord
from carhub.models.vehicle import Vehicle
from carhub.schemas.vehicle import VehicleCreate

logger = logging.getLogger(__name__)


def list_vehicles(db: Session, owner_id: str) -> List[Vehicle]:
    return db.query(Vehicle)\
        .filter(Vehicle.ownerId == owner_id)\
        .order_by(Vehicle.name, Vehicle.createdAt)\
        .all()


def get_vehicle(db: Session, owner_id: str, vehicle_id: str) -> Optional[Vehicle]:
    return db.query(Vehicle)\
        .filter(Vehicle.ownerId == owner_id, Vehicle.id == vehicle_id)\
        .first()


def create_vehicle(db: Session, owner_id: str, data: VehicleCreate) -> Vehicle:
    vehicle = Vehicle(ownerId=owner_id, **data.model_dump())
    db.add(vehicle)
    db.commit()
    db.refresh(vehicle)
    logger.info(f"Vehicle {vehicle.id} added for user {owner_id}")
    return vehicle


def update_vehicle(db: Session, owner_id: str, vehicle_id: str, data: VehicleCreate) -> Optional[Vehicle]:
    vehicle = get_vehicle(db, owner_id, vehicle_id)
    if vehicle is None:
        return None

    for field, value in data.model_dump().items():
        setattr(vehicle, field, value)
    db.commit()
    db.refresh(vehicle)
    logger.info(f"Vehicle {vehicle_id} updated for user {owner_id}")
    return vehicle


def delete_vehicle(db: Session, owner_id: str, vehicle_id: str) -> bool:
    """
    Delete a vehicle together with its fueling and maintenance records.

    Everything goes in a single commit: either all of it is removed or none.
    Returns False when the vehicle does not exist for this owner; raises
    LastVehicleError when it is the owner's only vehicle.
    """
    vehicle = get_vehicle(db, owner_id, vehicle_id)
    if vehicle is None:
        return False

    vehicle_count = db.query(Vehicle).filter(Vehicle.ownerId == owner_id).count()
    if vehicle_count <= 1:
        raise LastVehicleError(vehicle_id)

    try:
        fueling_deleted = db.query(FuelingRecord)\
            .filter(FuelingRecord.ownerId == owner_id, FuelingRecord.vehicleId == vehicle_id)\
            .delete(synchronize_session=False)
        maintenance_deleted = db.query(MaintenanceRecord)\
            .filter(MaintenanceRecord.ownerId == owner_id, MaintenanceRecord.vehicleId == vehicle_id)\
            .delete(synchronize_session=False)
        db.delete(vehicle)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"Vehicle {vehicle_id} deleted for user {owner_id} with "
        f"{fueling_deleted} fueling and {maintenance_deleted} maintenance records"
    )
    return True
