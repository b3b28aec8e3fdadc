"""Custom exceptions for the CarHub API."""

from typing import Optional


class CarHubError(Exception):
    """Base exception for all CarHub errors."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


# Authentication


class AuthError(CarHubError):
    """Base class for authentication errors."""


class AuthConfigurationError(AuthError):
    """The verifier cannot be built from the current settings."""


class ExpiredTokenError(AuthError):
    """The bearer token is past its expiry."""

    def __init__(self) -> None:
        super().__init__("Token expired")


class InvalidTokenError(AuthError):
    """Signature, audience, issuer or format check failed."""

    def __init__(self, reason: Optional[str] = None) -> None:
        super().__init__("Token verification failed", reason)


class InvalidTokenPayloadError(InvalidTokenError):
    """The token verified but carries no subject."""

    def __init__(self) -> None:
        super().__init__("token has no subject")


# Domain rules


class LastVehicleError(CarHubError):
    """Deleting the owner's only vehicle."""

    def __init__(self, vehicle_id: str) -> None:
        super().__init__(
            "Cannot delete the only vehicle. Add another vehicle first.",
            f"vehicle {vehicle_id}",
        )
