from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from carhub.core.security import Identity, get_current_user
from carhub.db.session import get_db
from carhub.schemas.preferences import UserPreferencesResponse, UserPreferencesUpdate
from carhub.services import preferences as preference_store

router = APIRouter()

@router.get("/getUserPreferences", response_model=UserPreferencesResponse)
def get_user_preferences(
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> UserPreferencesResponse:
    """
    The caller's preferences. The row is created on first access.
    """
    return preference_store.get_or_create_preferences(db, current_user.subject, current_user.email)

@router.post("/setUserPreferences", response_model=UserPreferencesResponse)
def set_user_preferences(
    preferences: UserPreferencesUpdate,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> UserPreferencesResponse:
    """
    Save the active vehicle. The body must carry the activeVehicleId key;
    null clears the selection.
    """
    return preference_store.set_active_vehicle(
        db, current_user.subject, preferences.activeVehicleId, current_user.email
    )
