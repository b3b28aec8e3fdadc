"""
Store access for fueling records. kmPerLiter is recomputed on every write.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from carhub.models.fueling import FuelingRecord
from carhub.schemas.fueling import FuelingRecordCreate
from carhub.services.efficiency import calculate_km_per_liter

logger = logging.getLogger(__name__)


def list_fueling_records(db: Session, owner_id: str, vehicle_id: str) -> List[FuelingRecord]:
    """Most recent first; same-day fill-ups in reverse order of entry."""
    return db.query(FuelingRecord)\
        .filter(FuelingRecord.ownerId == owner_id, FuelingRecord.vehicleId == vehicle_id)\
        .order_by(FuelingRecord.date.desc(), FuelingRecord.createdAt.desc())\
        .all()


def get_fueling_record(db: Session, owner_id: str, record_id: str) -> Optional[FuelingRecord]:
    return db.query(FuelingRecord)\
        .filter(FuelingRecord.ownerId == owner_id, FuelingRecord.id == record_id)\
        .first()


def create_fueling_record(db: Session, owner_id: str, data: FuelingRecordCreate) -> FuelingRecord:
    record = FuelingRecord(ownerId=owner_id, **data.model_dump())
    record.kmPerLiter = calculate_km_per_liter(db, owner_id, data.vehicleId, data)
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(f"Fueling record {record.id} added for user {owner_id}, vehicle {record.vehicleId}")
    return record


def update_fueling_record(
    db: Session,
    owner_id: str,
    record_id: str,
    data: FuelingRecordCreate,
) -> Optional[FuelingRecord]:
    """Update a record in place. The record stays attached to its original vehicle."""
    record = get_fueling_record(db, owner_id, record_id)
    if record is None:
        return None

    vehicle_id = record.vehicleId
    for field, value in data.model_dump(exclude={"vehicleId"}).items():
        setattr(record, field, value)
    record.kmPerLiter = calculate_km_per_liter(db, owner_id, vehicle_id, data, exclude_id=record_id)
    db.commit()
    db.refresh(record)
    logger.info(f"Fueling record {record_id} updated for user {owner_id}")
    return record


def delete_fueling_record(db: Session, owner_id: str, record_id: str) -> bool:
    record = get_fueling_record(db, owner_id, record_id)
    if record is None:
        return False

    db.delete(record)
    db.commit()
    logger.info(f"Fueling record {record_id} deleted for user {owner_id}")
    return True
