"""Tests for the vehicle endpoints."""

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session


FUELING = {
    "date": "2024-03-01",
    "mileage": 10000,
    "fuelType": "Gasolina",
    "liters": 40,
    "cost": 232.0,
    "isFullTank": True,
}

MAINTENANCE = {
    "date": "2024-03-02",
    "description": "Troca de óleo",
    "cost": 180.0,
    "type": "Preventiva",
    "category": "Óleo e Filtros",
}


def add_vehicle(client, headers, **fields):
    response = client.post("/addVehicle", json={"name": "Meu Carro", **fields}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestAddVehicle:
    def test_name_only(self, client, alice):
        """Only the name is required; everything else comes back null."""
        vehicle = add_vehicle(client, alice, name="Moto")

        assert vehicle["name"] == "Moto"
        assert vehicle["make"] is None
        assert vehicle["model"] is None
        assert vehicle["year"] is None
        assert vehicle["licensePlate"] is None
        assert vehicle["id"]
        assert vehicle["createdAt"].endswith("Z")
        assert vehicle["updatedAt"].endswith("Z")

    def test_full_vehicle(self, client, alice):
        vehicle = add_vehicle(
            client, alice,
            name=" Family car ", make="Fiat", model="Uno", year=2015, licensePlate=" abc1d23 ",
        )

        assert vehicle["name"] == "Family car"
        assert vehicle["make"] == "Fiat"
        assert vehicle["year"] == 2015
        assert vehicle["licensePlate"] == "ABC1D23"

    def test_blank_optional_fields_become_null(self, client, alice):
        vehicle = add_vehicle(client, alice, make="", model="  ", year="", licensePlate="")

        assert vehicle["make"] is None
        assert vehicle["model"] is None
        assert vehicle["year"] is None
        assert vehicle["licensePlate"] is None

    def test_empty_name_rejected(self, client, alice):
        response = client.post("/addVehicle", json={"name": "   "}, headers=alice)

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail.startswith("Bad Request")
        assert "Vehicle name is required." in detail

    def test_missing_body_rejected(self, client, alice):
        response = client.post("/addVehicle", headers=alice)
        assert response.status_code == 400

    def test_wrong_method(self, client, alice):
        response = client.get("/addVehicle", headers=alice)
        assert response.status_code == 405


class TestListVehicles:
    def test_empty(self, client, alice):
        response = client.get("/getVehicles", headers=alice)
        assert response.status_code == 200
        assert response.json() == []

    def test_ordered_by_name(self, client, alice):
        add_vehicle(client, alice, name="Zafira")
        add_vehicle(client, alice, name="Astra")
        add_vehicle(client, alice, name="Moto")

        names = [v["name"] for v in client.get("/getVehicles", headers=alice).json()]
        assert names == ["Astra", "Moto", "Zafira"]

    def test_only_own_vehicles(self, client, alice, bob):
        add_vehicle(client, alice, name="Alice car")
        add_vehicle(client, bob, name="Bob car")

        alice_names = [v["name"] for v in client.get("/getVehicles", headers=alice).json()]
        assert alice_names == ["Alice car"]


class TestUpdateVehicle:
    def test_update(self, client, alice):
        vehicle = add_vehicle(client, alice, make="Fiat")

        response = client.put(
            f"/updateVehicle/{vehicle['id']}",
            json={"name": "Renamed", "licensePlate": "xyz9a87"},
            headers=alice,
        )

        assert response.status_code == 200
        updated = response.json()
        assert updated["id"] == vehicle["id"]
        assert updated["name"] == "Renamed"
        assert updated["licensePlate"] == "XYZ9A87"
        # Omitted optional fields are cleared
        assert updated["make"] is None
        assert updated["createdAt"] == vehicle["createdAt"]

    def test_unknown_vehicle(self, client, alice):
        response = client.put("/updateVehicle/does-not-exist", json={"name": "X"}, headers=alice)
        assert response.status_code == 404

    def test_other_users_vehicle(self, client, alice, bob):
        vehicle = add_vehicle(client, alice)

        response = client.put(f"/updateVehicle/{vehicle['id']}", json={"name": "Stolen"}, headers=bob)
        assert response.status_code == 404

        names = [v["name"] for v in client.get("/getVehicles", headers=alice).json()]
        assert names == ["Meu Carro"]

    def test_empty_name_rejected(self, client, alice):
        vehicle = add_vehicle(client, alice)
        response = client.put(f"/updateVehicle/{vehicle['id']}", json={"name": ""}, headers=alice)
        assert response.status_code == 400


class TestDeleteVehicle:
    def test_only_vehicle_is_kept(self, client, alice):
        vehicle = add_vehicle(client, alice)

        response = client.delete(f"/deleteVehicle/{vehicle['id']}", headers=alice)

        assert response.status_code == 409
        assert response.json()["detail"] == "Cannot delete the only vehicle. Add another vehicle first."
        assert len(client.get("/getVehicles", headers=alice).json()) == 1

    def test_cascade(self, client, alice):
        """Deleting a vehicle removes its records and nothing else."""
        doomed = add_vehicle(client, alice, name="Old")
        kept = add_vehicle(client, alice, name="New")
        for vehicle in (doomed, kept):
            assert client.post(
                "/addFuelingRecord", json={**FUELING, "vehicleId": vehicle["id"]}, headers=alice
            ).status_code == 201
            assert client.post(
                "/addMaintenanceRecord", json={**MAINTENANCE, "vehicleId": vehicle["id"]}, headers=alice
            ).status_code == 201

        response = client.delete(f"/deleteVehicle/{doomed['id']}", headers=alice)

        assert response.status_code == 204
        assert response.content == b""
        assert [v["id"] for v in client.get("/getVehicles", headers=alice).json()] == [kept["id"]]
        for path in ("/getFuelingRecords", "/getMaintenanceRecords"):
            assert client.get(path, params={"vehicleId": doomed["id"]}, headers=alice).json() == []
            assert len(client.get(path, params={"vehicleId": kept["id"]}, headers=alice).json()) == 1

    def test_already_deleted(self, client, alice):
        add_vehicle(client, alice, name="Kept")
        vehicle = add_vehicle(client, alice, name="Gone")
        assert client.delete(f"/deleteVehicle/{vehicle['id']}", headers=alice).status_code == 204

        response = client.delete(f"/deleteVehicle/{vehicle['id']}", headers=alice)
        assert response.status_code == 404
        assert response.json()["detail"] == "Vehicle not found or already deleted."

    def test_other_users_vehicle(self, client, alice, bob):
        add_vehicle(client, alice, name="First")
        vehicle = add_vehicle(client, alice, name="Second")
        add_vehicle(client, bob, name="Bob 1")
        add_vehicle(client, bob, name="Bob 2")

        response = client.delete(f"/deleteVehicle/{vehicle['id']}", headers=bob)

        assert response.status_code == 404
        assert len(client.get("/getVehicles", headers=alice).json()) == 2

    def test_failed_delete_keeps_everything(self, client, alice, monkeypatch):
        """A store failure mid-delete rolls back the record removals too."""
        doomed = add_vehicle(client, alice, name="Old")
        add_vehicle(client, alice, name="New")
        client.post("/addFuelingRecord", json={**FUELING, "vehicleId": doomed["id"]}, headers=alice)
        client.post("/addMaintenanceRecord", json={**MAINTENANCE, "vehicleId": doomed["id"]}, headers=alice)

        def broken(self, instance):
            raise OperationalError("DELETE", {}, Exception("database is gone"))

        monkeypatch.setattr(Session, "delete", broken)
        response = client.delete(f"/deleteVehicle/{doomed['id']}", headers=alice)
        monkeypatch.undo()

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal Server Error"}
        assert doomed["id"] in [v["id"] for v in client.get("/getVehicles", headers=alice).json()]
        for path in ("/getFuelingRecords", "/getMaintenanceRecords"):
            assert len(client.get(path, params={"vehicleId": doomed["id"]}, headers=alice).json()) == 1
