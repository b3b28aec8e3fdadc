"""
HTTP client for the CarHub API.

Every call sends the caller's ID token as a bearer credential. Non-2xx
responses raise ApiError; 204 responses return None. Nothing is retried.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from carhub.schemas.fueling import FuelingRecordResponse
from carhub.schemas.maintenance import MaintenanceRecordResponse
from carhub.schemas.vehicle import VehicleResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A request the API answered with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"API {status_code}: {message}")


class CarHubClient:
    """
    Thin wrapper over the CarHub endpoints.

    ``http_client`` may be any ``httpx.Client`` (FastAPI's TestClient
    included); by default one is created for ``base_url``.
    """

    def __init__(
        self,
        base_url: str = "",
        id_token: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ):
        self.id_token = id_token
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        if not self.id_token:
            raise ApiError(401, "No authentication token")

        headers = {
            "Authorization": f"Bearer {self.id_token}",
            "Content-Type": "application/json",
        }
        try:
            response = self._http.request(method, path, json=json, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(0, str(e)) from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("detail"):
                message = body["detail"]
            else:
                message = response.text
            logger.warning(f"API error {response.status_code} for {method} {path}: {message}")
            raise ApiError(response.status_code, str(message))

        if response.status_code == 204:
            return None
        return response.json()

    # Vehicles

    def get_vehicles(self) -> List[VehicleResponse]:
        return [VehicleResponse.model_validate(v) for v in self._request("GET", "/getVehicles")]

    def add_vehicle(self, vehicle: Dict[str, Any]) -> VehicleResponse:
        return VehicleResponse.model_validate(self._request("POST", "/addVehicle", json=vehicle))

    def update_vehicle(self, vehicle_id: str, vehicle: Dict[str, Any]) -> VehicleResponse:
        return VehicleResponse.model_validate(self._request("PUT", f"/updateVehicle/{vehicle_id}", json=vehicle))

    def delete_vehicle(self, vehicle_id: str) -> None:
        self._request("DELETE", f"/deleteVehicle/{vehicle_id}")

    # Preferences

    def get_user_preferences(self) -> Dict[str, Optional[str]]:
        return self._request("GET", "/getUserPreferences")

    def set_user_preferences(self, active_vehicle_id: Optional[str]) -> Dict[str, Optional[str]]:
        return self._request("POST", "/setUserPreferences", json={"activeVehicleId": active_vehicle_id})

    # Fueling records

    def get_fueling_records(self, vehicle_id: str) -> List[FuelingRecordResponse]:
        records = self._request("GET", "/getFuelingRecords", params={"vehicleId": vehicle_id})
        return [FuelingRecordResponse.model_validate(r) for r in records]

    def add_fueling_record(self, record: Dict[str, Any]) -> FuelingRecordResponse:
        return FuelingRecordResponse.model_validate(self._request("POST", "/addFuelingRecord", json=record))

    def update_fueling_record(self, record_id: str, record: Dict[str, Any]) -> FuelingRecordResponse:
        return FuelingRecordResponse.model_validate(
            self._request("PUT", f"/updateFuelingRecord/{record_id}", json=record)
        )

    def delete_fueling_record(self, record_id: str) -> None:
        self._request("DELETE", f"/deleteFuelingRecord/{record_id}")

    # Maintenance records

    def get_maintenance_records(self, vehicle_id: str) -> List[MaintenanceRecordResponse]:
        records = self._request("GET", "/getMaintenanceRecords", params={"vehicleId": vehicle_id})
        return [MaintenanceRecordResponse.model_validate(r) for r in records]

    def add_maintenance_record(self, record: Dict[str, Any]) -> MaintenanceRecordResponse:
        return MaintenanceRecordResponse.model_validate(self._request("POST", "/addMaintenanceRecord", json=record))

    def update_maintenance_record(self, record_id: str, record: Dict[str, Any]) -> MaintenanceRecordResponse:
        return MaintenanceRecordResponse.model_validate(
            self._request("PUT", f"/updateMaintenanceRecord/{record_id}", json=record)
        )

    def delete_maintenance_record(self, record_id: str) -> None:
        self._request("DELETE", f"/deleteMaintenanceRecord/{record_id}")
