import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from carhub.core.exceptions import LastVehicleError
from carhub.core.security import Identity, get_current_user
from carhub.db.session import get_db
from carhub.schemas.vehicle import VehicleCreate, VehicleResponse
from carhub.services import vehicles as vehicle_store

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/getVehicles", response_model=List[VehicleResponse])
def get_vehicles(
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[VehicleResponse]:
    """
    List the caller's vehicles, ordered by name.
    """
    vehicles = vehicle_store.list_vehicles(db, current_user.subject)
    logger.info(f"Found {len(vehicles)} vehicles for user {current_user.subject}")
    return vehicles

@router.post("/addVehicle", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
def add_vehicle(
    vehicle_data: VehicleCreate,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> VehicleResponse:
    """
    Register a new vehicle. Only the name is required.
    """
    return vehicle_store.create_vehicle(db, current_user.subject, vehicle_data)

@router.put("/updateVehicle/{vehicle_id}", response_model=VehicleResponse)
def update_vehicle(
    vehicle_id: str,
    vehicle_data: VehicleCreate,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> VehicleResponse:
    """
    Replace the editable fields of a vehicle.
    """
    vehicle = vehicle_store.update_vehicle(db, current_user.subject, vehicle_id, vehicle_data)
    if not vehicle:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Vehicle not found."
        )
    return vehicle

@router.delete("/deleteVehicle/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vehicle(
    vehicle_id: str,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Response:
    """
    Delete a vehicle and all of its fueling and maintenance records.

    The owner's last remaining vehicle cannot be deleted.
    """
    try:
        deleted = vehicle_store.delete_vehicle(db, current_user.subject, vehicle_id)
    except LastVehicleError as e:
        logger.info(f"Refused to delete the only vehicle of user {current_user.subject}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=e.message
        )

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Vehicle not found or already deleted."
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
