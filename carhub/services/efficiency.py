"""
Fuel efficiency (km per liter) of full-tank fill-ups.

A full tank's efficiency is the distance driven since the nearest earlier
full tank of the same vehicle, divided by the liters of the current fill-up.
"Nearest" is by odometer: the previous full tank is the one with the highest
mileage below the candidate's. Only fill-ups dated strictly before the
candidate qualify, so a back-dated entry with a lower odometer is not paired
with a fill-up that happened after it.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional, Protocol

from sqlalchemy.orm import Session

from carhub.models.fueling import FuelingRecord

logger = logging.getLogger(__name__)


class FillUp(Protocol):
    """The attributes the calculation reads from a fill-up."""
    mileage: Optional[float]
    liters: Optional[float]
    isFullTank: bool
    date: datetime


def _is_measurable(candidate: FillUp) -> bool:
    return bool(
        candidate.isFullTank
        and candidate.mileage is not None
        and candidate.liters is not None
        and candidate.liters > 0
    )


def km_per_liter_from_history(
    candidate: FillUp,
    previous_full_tanks: Iterable[FuelingRecord],
    exclude_id: Optional[str] = None,
) -> Optional[float]:
    """
    Pick the previous full tank from ``previous_full_tanks`` and compute the
    efficiency of ``candidate``.

    ``previous_full_tanks`` must already be filtered to full tanks of the
    same vehicle with lower mileage and earlier date, ordered by mileage
    descending.
    """
    if not _is_measurable(candidate):
        return None

    previous = next((r for r in previous_full_tanks if r.id != exclude_id), None)
    if previous is None:
        return None

    km_driven = candidate.mileage - previous.mileage
    if km_driven <= 0:
        return None
    return round(km_driven / candidate.liters, 2)


def calculate_km_per_liter(
    db: Session,
    owner_id: str,
    vehicle_id: str,
    candidate: FillUp,
    exclude_id: Optional[str] = None,
) -> Optional[float]:
    """
    Efficiency of ``candidate`` against the owner's stored fill-ups.

    ``exclude_id`` is the id of the record being updated, so its stored
    version is never used as its own previous full tank.
    """
    if not _is_measurable(candidate):
        return None

    previous_full_tanks = db.query(FuelingRecord)\
        .filter(
            FuelingRecord.ownerId == owner_id,
            FuelingRecord.vehicleId == vehicle_id,
            FuelingRecord.isFullTank.is_(True),
            FuelingRecord.mileage < candidate.mileage,
            FuelingRecord.date < candidate.date,
        )\
        .order_by(FuelingRecord.mileage.desc())\
        .all()

    value = km_per_liter_from_history(candidate, previous_full_tanks, exclude_id)
    logger.debug(
        f"kmPerLiter for vehicle {vehicle_id} at {candidate.mileage} km: {value} "
        f"({len(previous_full_tanks)} earlier full tanks)"
    )
    return value
