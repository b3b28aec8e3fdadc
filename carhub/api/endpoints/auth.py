from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from carhub.core.config import settings
from carhub.core.security import Identity, create_access_token, get_current_user

router = APIRouter()

class AuthTestResponse(BaseModel):
    """Response model for the authentication check endpoint."""
    message: str
    subject: str
    email: Optional[str] = None

@router.get("/me", response_model=AuthTestResponse)
async def get_user_info(current_user: Identity = Depends(get_current_user)):
    """
    Verify the bearer token and return the identity it asserts.
    """
    return AuthTestResponse(
        message="Authentication successful",
        subject=current_user.subject,
        email=current_user.email,
    )

class TestTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"

@router.get("/test-token", response_model=TestTokenResponse)
async def get_test_token(user_id: str = "test_user", email: Optional[str] = None, expires_delta_minutes: int = 60):
    """
    Issue a token the local verifier accepts, for development.

    Only available with AUTH_MODE=local and ENABLE_TEST_TOKENS=true.
    """
    if settings.AUTH_MODE != "local" or not settings.ENABLE_TEST_TOKENS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    token = create_access_token(
        subject=user_id,
        email=email,
        expires_delta=timedelta(minutes=expires_delta_minutes),
    )
    return TestTokenResponse(access_token=token)
