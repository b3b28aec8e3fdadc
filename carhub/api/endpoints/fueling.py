import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from carhub.core.security import Identity, get_current_user
from carhub.db.session import get_db
from carhub.schemas.fueling import FuelingRecordCreate, FuelingRecordResponse
from carhub.services import fueling as fueling_store
from carhub.services.vehicles import get_vehicle

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/getFuelingRecords", response_model=List[FuelingRecordResponse])
def get_fueling_records(
    vehicle_id: str = Query(..., alias="vehicleId", min_length=1),
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[FuelingRecordResponse]:
    """
    Fill-ups of one of the caller's vehicles, most recent first.
    """
    return fueling_store.list_fueling_records(db, current_user.subject, vehicle_id)

@router.post("/addFuelingRecord", response_model=FuelingRecordResponse, status_code=status.HTTP_201_CREATED)
def add_fueling_record(
    record_data: FuelingRecordCreate,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> FuelingRecordResponse:
    """
    Record a fill-up. kmPerLiter is computed from the vehicle's earlier full tanks.
    """
    if not get_vehicle(db, current_user.subject, record_data.vehicleId):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Vehicle not found."
        )
    return fueling_store.create_fueling_record(db, current_user.subject, record_data)

@router.put("/updateFuelingRecord/{record_id}", response_model=FuelingRecordResponse)
def update_fueling_record(
    record_id: str,
    record_data: FuelingRecordCreate,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> FuelingRecordResponse:
    """
    Edit a fill-up and recompute its kmPerLiter. The record keeps its vehicle.
    """
    record = fueling_store.update_fueling_record(db, current_user.subject, record_id, record_data)
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Fueling record not found."
        )
    return record

@router.delete("/deleteFuelingRecord/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_fueling_record(
    record_id: str,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Response:
    if not fueling_store.delete_fueling_record(db, current_user.subject, record_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Fueling record not found."
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
