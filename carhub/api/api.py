from fastapi import APIRouter

from carhub.api.endpoints import auth, fueling, health, maintenance, preferences, vehicles

# Create API router
api_router = APIRouter()

# Resource routes keep the flat paths the web front end calls (/getVehicles, /addFuelingRecord, ...)
api_router.include_router(vehicles.router, tags=["vehicles"])
api_router.include_router(preferences.router, tags=["preferences"])
api_router.include_router(fueling.router, tags=["fueling"])
api_router.include_router(maintenance.router, tags=["maintenance"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
