"""
Session state of the CarHub front end.

AppState mirrors what the web app keeps in memory for the signed-in user:
the vehicle list, the active vehicle and that vehicle's records. Every
change goes through the API first and the server's answer is merged into
local state; a failed call leaves state untouched and stores a message in
``error``. Saving the active vehicle remotely is best effort and only sets
``warning`` when it fails, since the selection is also kept locally.
"""

import json
import logging
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

import platformdirs
from jose import jwt
from jose.exceptions import JOSEError
from pydantic import BaseModel

from carhub.client.api import ApiError, CarHubClient
from carhub.schemas.fueling import FuelingRecordResponse
from carhub.schemas.maintenance import MaintenanceRecordResponse
from carhub.schemas.statistics import DashboardSummary, ReportData
from carhub.schemas.vehicle import VehicleResponse
from carhub.services.statistics import dashboard_summary, report_data

logger = logging.getLogger(__name__)

LAST_VEHICLE_MESSAGE = "Cannot delete the only vehicle. Add another vehicle first or edit this one."


class GoogleUser(BaseModel):
    """Profile claims read from the ID token for display."""
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    picture: Optional[str] = None


def user_from_id_token(id_token: str) -> GoogleUser:
    """
    Read the profile from an ID token without verifying it.

    The API verifies every request; this is only for showing who is signed in.
    """
    claims = jwt.get_unverified_claims(id_token)
    return GoogleUser(
        id=claims["sub"],
        name=claims.get("name"),
        email=claims.get("email"),
        picture=claims.get("picture"),
    )


class LocalPreferences:
    """The active vehicle id, kept on disk so it survives a restart."""

    def __init__(self, path: Optional[Path] = None):
        if path is None:
            path = Path(platformdirs.user_config_dir("carhub", ensure_exists=True)) / "preferences.json"
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable local preferences {self.path}: {e}")
            return {}

    def load_active_vehicle_id(self) -> Optional[str]:
        return self._read().get("activeVehicleId")

    def save_active_vehicle_id(self, vehicle_id: Optional[str]) -> None:
        data = self._read()
        data["activeVehicleId"] = vehicle_id
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")


def _newest_first(records: List[Any]) -> List[Any]:
    return sorted(records, key=lambda r: (r.date, r.createdAt), reverse=True)


class AppState:
    """
    Holds the signed-in user's data and applies changes through the API.

    ``confirm`` is asked before destructive actions and must return True for
    them to proceed.
    """

    def __init__(
        self,
        client: CarHubClient,
        local: Optional[LocalPreferences] = None,
        confirm: Callable[[str], bool] = lambda message: False,
    ):
        self.client = client
        self.local = local or LocalPreferences()
        self.confirm = confirm

        self.current_user: Optional[GoogleUser] = None
        self.id_token: Optional[str] = None
        self.vehicles: List[VehicleResponse] = []
        self.active_vehicle_id: Optional[str] = self.local.load_active_vehicle_id()
        self.fueling_records: List[FuelingRecordResponse] = []
        self.maintenance_records: List[MaintenanceRecordResponse] = []

        self.is_loading = False
        self.error: Optional[str] = None
        self.warning: Optional[str] = None

    @contextmanager
    def _busy(self) -> Iterator[None]:
        self.is_loading = True
        self.error = None
        try:
            yield
        finally:
            self.is_loading = False

    @property
    def active_vehicle(self) -> Optional[VehicleResponse]:
        if not self.current_user or not self.active_vehicle_id:
            return None
        return next((v for v in self.vehicles if v.id == self.active_vehicle_id), None)

    def dismiss_error(self) -> None:
        self.error = None

    def dismiss_warning(self) -> None:
        self.warning = None

    # Session

    def sign_in(self, id_token: str) -> bool:
        try:
            user = user_from_id_token(id_token)
        except (JOSEError, KeyError) as e:
            logger.error(f"Could not read the ID token: {e}")
            self.sign_out()
            self.error = "Could not read the sign-in credential."
            return False

        self.current_user = user
        self.id_token = id_token
        self.client.id_token = id_token
        self.refresh()
        return self.error is None

    def sign_out(self) -> None:
        self.current_user = None
        self.id_token = None
        self.client.id_token = None
        self.vehicles = []
        self.fueling_records = []
        self.maintenance_records = []
        self._set_active(None)
        self.error = None
        self.warning = None

    def refresh(self) -> None:
        """Load preferences, then vehicles, then the active vehicle's records."""
        if not self.current_user:
            return

        with self._busy():
            try:
                preferences = self.client.get_user_preferences()
                if preferences.get("activeVehicleId"):
                    self._set_active(preferences["activeVehicleId"])
            except ApiError as e:
                logger.error(f"Could not load preferences: {e}")
                self.error = "Could not load your preferences."

            try:
                self.vehicles = self.client.get_vehicles()
            except ApiError as e:
                logger.error(f"Could not load vehicles: {e}")
                self.error = "Could not load your vehicles."
                self.vehicles = []
                return

            if not self.vehicles:
                self._set_active(None)
            elif not any(v.id == self.active_vehicle_id for v in self.vehicles):
                self._set_active(self.vehicles[0].id)
                self._save_remote_preference()

            self._load_records()

    def _set_active(self, vehicle_id: Optional[str]) -> None:
        self.active_vehicle_id = vehicle_id
        self.local.save_active_vehicle_id(vehicle_id)

    def _save_remote_preference(self) -> None:
        try:
            self.client.set_user_preferences(self.active_vehicle_id)
        except ApiError as e:
            logger.warning(f"Failed to save the active vehicle preference: {e}")
            self.warning = "Could not save your active vehicle on the server."

    def _load_records(self) -> None:
        self.fueling_records = []
        self.maintenance_records = []
        if not self.active_vehicle_id:
            return
        try:
            self.fueling_records = self.client.get_fueling_records(self.active_vehicle_id)
            self.maintenance_records = self.client.get_maintenance_records(self.active_vehicle_id)
        except ApiError as e:
            logger.error(f"Could not load records for vehicle {self.active_vehicle_id}: {e}")
            self.error = "Could not load the vehicle's records."

    # Vehicles

    def select_vehicle(self, vehicle_id: str) -> bool:
        if not self.current_user or not any(v.id == vehicle_id for v in self.vehicles):
            return False

        with self._busy():
            self._set_active(vehicle_id)
            self._load_records()
            self._save_remote_preference()
        return True

    def add_vehicle(self, vehicle: Dict[str, Any]) -> Optional[VehicleResponse]:
        if not self.current_user:
            return None

        with self._busy():
            try:
                created = self.client.add_vehicle(vehicle)
            except ApiError as e:
                self.error = e.message or "Failed to add vehicle."
                return None

            had_vehicles = bool(self.vehicles)
            self.vehicles = sorted(self.vehicles + [created], key=lambda v: v.name)
            if not self.active_vehicle_id or not had_vehicles:
                self._set_active(created.id)
                self._load_records()
                self._save_remote_preference()
            return created

    def update_vehicle(self, vehicle_id: str, vehicle: Dict[str, Any]) -> Optional[VehicleResponse]:
        if not self.current_user:
            return None

        with self._busy():
            try:
                updated = self.client.update_vehicle(vehicle_id, vehicle)
            except ApiError as e:
                self.error = e.message or "Failed to update vehicle."
                return None

            self.vehicles = sorted(
                [updated if v.id == vehicle_id else v for v in self.vehicles],
                key=lambda v: v.name,
            )
            return updated

    def delete_vehicle(self, vehicle_id: str) -> bool:
        """Delete a vehicle and its records after confirmation. The only vehicle is kept."""
        if not self.current_user:
            return False
        vehicle = next((v for v in self.vehicles if v.id == vehicle_id), None)
        if vehicle is None:
            return False

        if len(self.vehicles) == 1:
            self.error = LAST_VEHICLE_MESSAGE
            return False
        if not self.confirm(
            f'Delete the vehicle "{vehicle.name}" and ALL of its fueling and maintenance records? '
            "This cannot be undone."
        ):
            return False

        with self._busy():
            try:
                self.client.delete_vehicle(vehicle_id)
            except ApiError as e:
                self.error = e.message or "Failed to delete vehicle."
                return False

            self.vehicles = [v for v in self.vehicles if v.id != vehicle_id]
            if self.active_vehicle_id == vehicle_id:
                self._set_active(self.vehicles[0].id if self.vehicles else None)
                self._load_records()
                self._save_remote_preference()
            return True

    # Fueling records

    def add_fueling_record(self, record: Dict[str, Any]) -> Optional[FuelingRecordResponse]:
        if not self.active_vehicle:
            self.error = "No active vehicle."
            return None

        with self._busy():
            try:
                created = self.client.add_fueling_record({**record, "vehicleId": self.active_vehicle_id})
            except ApiError as e:
                self.error = e.message or "Failed to add fueling record."
                return None

            self.fueling_records = _newest_first(self.fueling_records + [created])
            return created

    def update_fueling_record(self, record_id: str, record: Dict[str, Any]) -> Optional[FuelingRecordResponse]:
        existing = next((r for r in self.fueling_records if r.id == record_id), None)
        if existing is None:
            return None

        with self._busy():
            try:
                updated = self.client.update_fueling_record(record_id, {**record, "vehicleId": existing.vehicleId})
            except ApiError as e:
                self.error = e.message or "Failed to update fueling record."
                return None

            self.fueling_records = _newest_first(
                [updated if r.id == record_id else r for r in self.fueling_records]
            )
            return updated

    def delete_fueling_record(self, record_id: str) -> bool:
        if not any(r.id == record_id for r in self.fueling_records):
            return False
        if not self.confirm("Delete this fueling record?"):
            return False

        with self._busy():
            try:
                self.client.delete_fueling_record(record_id)
            except ApiError as e:
                self.error = e.message or "Failed to delete fueling record."
                return False

            self.fueling_records = [r for r in self.fueling_records if r.id != record_id]
            return True

    # Maintenance records

    def add_maintenance_record(self, record: Dict[str, Any]) -> Optional[MaintenanceRecordResponse]:
        if not self.active_vehicle:
            self.error = "No active vehicle."
            return None

        with self._busy():
            try:
                created = self.client.add_maintenance_record({**record, "vehicleId": self.active_vehicle_id})
            except ApiError as e:
                self.error = e.message or "Failed to add maintenance record."
                return None

            self.maintenance_records = _newest_first(self.maintenance_records + [created])
            return created

    def update_maintenance_record(self, record_id: str, record: Dict[str, Any]) -> Optional[MaintenanceRecordResponse]:
        existing = next((r for r in self.maintenance_records if r.id == record_id), None)
        if existing is None:
            return None

        with self._busy():
            try:
                updated = self.client.update_maintenance_record(
                    record_id, {**record, "vehicleId": existing.vehicleId}
                )
            except ApiError as e:
                self.error = e.message or "Failed to update maintenance record."
                return None

            self.maintenance_records = _newest_first(
                [updated if r.id == record_id else r for r in self.maintenance_records]
            )
            return updated

    def delete_maintenance_record(self, record_id: str) -> bool:
        if not any(r.id == record_id for r in self.maintenance_records):
            return False
        if not self.confirm("Delete this maintenance record?"):
            return False

        with self._busy():
            try:
                self.client.delete_maintenance_record(record_id)
            except ApiError as e:
                self.error = e.message or "Failed to delete maintenance record."
                return False

            self.maintenance_records = [r for r in self.maintenance_records if r.id != record_id]
            return True

    # Derived figures

    def dashboard(self, start: Optional[date] = None, end: Optional[date] = None) -> DashboardSummary:
        if not self.active_vehicle:
            return DashboardSummary()
        return dashboard_summary(self.fueling_records, self.maintenance_records, start, end)

    def report(self, month: Optional[int] = None, year: Optional[int] = None) -> ReportData:
        if not self.active_vehicle:
            return ReportData()
        return report_data(self.fueling_records, self.maintenance_records, month, year)
