"""
Store access for maintenance records.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from carhub.models.maintenance import MaintenanceRecord
from carhub.schemas.maintenance import MaintenanceRecordCreate

logger = logging.getLogger(__name__)


def list_maintenance_records(db: Session, owner_id: str, vehicle_id: str) -> List[MaintenanceRecord]:
    return db.query(MaintenanceRecord)\
        .filter(MaintenanceRecord.ownerId == owner_id, MaintenanceRecord.vehicleId == vehicle_id)\
        .order_by(MaintenanceRecord.date.desc(), MaintenanceRecord.createdAt.desc())\
        .all()


def get_maintenance_record(db: Session, owner_id: str, record_id: str) -> Optional[MaintenanceRecord]:
    return db.query(MaintenanceRecord)\
        .filter(MaintenanceRecord.ownerId == owner_id, MaintenanceRecord.id == record_id)\
        .first()


def create_maintenance_record(db: Session, owner_id: str, data: MaintenanceRecordCreate) -> MaintenanceRecord:
    record = MaintenanceRecord(ownerId=owner_id, **data.model_dump())
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(f"Maintenance record {record.id} added for user {owner_id}, vehicle {record.vehicleId}")
    return record


def update_maintenance_record(
    db: Session,
    owner_id: str,
    record_id: str,
    data: MaintenanceRecordCreate,
) -> Optional[MaintenanceRecord]:
    record = get_maintenance_record(db, owner_id, record_id)
    if record is None:
        return None

    for field, value in data.model_dump(exclude={"vehicleId"}).items():
        setattr(record, field, value)
    db.commit()
    db.refresh(record)
    logger.info(f"Maintenance record {record_id} updated for user {owner_id}")
    return record


def delete_maintenance_record(db: Session, owner_id: str, record_id: str) -> bool:
    record = get_maintenance_record(db, owner_id, record_id)
    if record is None:
        return False

    db.delete(record)
    db.commit()
    logger.info(f"Maintenance record {record_id} deleted for user {owner_id}")
    return True
