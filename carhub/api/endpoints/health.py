import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from carhub.core.config import settings
from carhub.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter()

class HealthStatus(BaseModel):
    status: str
    api: str = "online"
    database: str
    authMode: str
    database_error: Optional[str] = None

@router.get("", response_model=HealthStatus, response_model_exclude_none=True)
@router.get("/", response_model=HealthStatus, response_model_exclude_none=True, include_in_schema=False)
def health_check(response: Response, db: Session = Depends(get_db)) -> HealthStatus:
    """
    Report whether the store answers. Answers 503 while it does not.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthStatus(
            status="unhealthy",
            database="offline",
            authMode=settings.AUTH_MODE,
            database_error=str(e),
        )

    return HealthStatus(status="healthy", database="online", authMode=settings.AUTH_MODE)
