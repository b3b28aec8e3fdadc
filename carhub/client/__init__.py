"""
Client-side data layer: an authenticated API client and the session state
the web front end keeps between views.
"""

from carhub.client.api import ApiError, CarHubClient
from carhub.client.state import AppState, GoogleUser

__all__ = ["ApiError", "CarHubClient", "AppState", "GoogleUser"]
