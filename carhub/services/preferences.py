"""
Store access for the per-user preferences row.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from carhub.models.preferences import UserPreference

logger = logging.getLogger(__name__)


def get_or_create_preferences(db: Session, user_id: str, email: Optional[str] = None) -> UserPreference:
    """Return the user's row, creating it on first access and filling in a missing email."""
    preferences = db.get(UserPreference, user_id)
    if preferences is None:
        preferences = UserPreference(userId=user_id, email=email, activeVehicleId=None)
        db.add(preferences)
        db.commit()
        db.refresh(preferences)
        logger.info(f"Preferences created for user {user_id}")
    elif not preferences.email and email:
        preferences.email = email
        db.commit()
        db.refresh(preferences)
    return preferences


def set_active_vehicle(
    db: Session,
    user_id: str,
    active_vehicle_id: Optional[str],
    email: Optional[str] = None,
) -> UserPreference:
    preferences = db.get(UserPreference, user_id)
    if preferences is None:
        preferences = UserPreference(userId=user_id, email=email)
        db.add(preferences)
    elif not preferences.email and email:
        preferences.email = email

    preferences.activeVehicleId = active_vehicle_id
    db.commit()
    db.refresh(preferences)
    logger.info(f"Active vehicle for user {user_id} set to {active_vehicle_id}")
    return preferences
