from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from carhub.core.security import Identity, get_current_user
from carhub.db.session import get_db
from carhub.schemas.maintenance import MaintenanceRecordCreate, MaintenanceRecordResponse
from carhub.services import maintenance as maintenance_store
from carhub.services.vehicles import get_vehicle

router = APIRouter()

@router.get("/getMaintenanceRecords", response_model=List[MaintenanceRecordResponse])
def get_maintenance_records(
    vehicle_id: str = Query(..., alias="vehicleId", min_length=1),
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[MaintenanceRecordResponse]:
    """
    Service history of one of the caller's vehicles, most recent first.
    """
    return maintenance_store.list_maintenance_records(db, current_user.subject, vehicle_id)

@router.post("/addMaintenanceRecord", response_model=MaintenanceRecordResponse, status_code=status.HTTP_201_CREATED)
def add_maintenance_record(
    record_data: MaintenanceRecordCreate,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> MaintenanceRecordResponse:
    if not get_vehicle(db, current_user.subject, record_data.vehicleId):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Vehicle not found."
        )
    return maintenance_store.create_maintenance_record(db, current_user.subject, record_data)

@router.put("/updateMaintenanceRecord/{record_id}", response_model=MaintenanceRecordResponse)
def update_maintenance_record(
    record_id: str,
    record_data: MaintenanceRecordCreate,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> MaintenanceRecordResponse:
    """
    Edit a service event. The record keeps its vehicle.
    """
    record = maintenance_store.update_maintenance_record(db, current_user.subject, record_id, record_data)
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Maintenance record not found."
        )
    return record

@router.delete("/deleteMaintenanceRecord/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_maintenance_record(
    record_id: str,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Response:
    if not maintenance_store.delete_maintenance_record(db, current_user.subject, record_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Maintenance record not found."
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
