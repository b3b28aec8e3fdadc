"""Tests for the maintenance record endpoints."""

import pytest


def service(vehicle_id, **fields):
    record = {
        "vehicleId": vehicle_id,
        "date": "2024-04-15",
        "description": "Troca de pastilhas",
        "cost": 350.0,
        "type": "Corretiva",
        "category": "Freios",
    }
    record.update(fields)
    return record


@pytest.fixture
def vehicle(client, alice):
    return client.post("/addVehicle", json={"name": "Meu Carro"}, headers=alice).json()


def add(client, headers, record):
    response = client.post("/addMaintenanceRecord", json=record, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestAddMaintenanceRecord:
    def test_minimal_record(self, client, alice, vehicle):
        record = add(client, alice, service(vehicle["id"]))

        assert record["vehicleId"] == vehicle["id"]
        assert record["date"] == "2024-04-15T00:00:00Z"
        assert record["type"] == "Corretiva"
        assert record["category"] == "Freios"
        assert record["mileage"] is None
        assert record["notes"] is None

    def test_optional_fields(self, client, alice, vehicle):
        record = add(client, alice, service(
            vehicle["id"], mileage=45000, notes="  Dianteiras  ", type="Revisão Periódica", category="Óleo e Filtros",
        ))

        assert record["mileage"] == 45000
        assert record["notes"] == "Dianteiras"
        assert record["type"] == "Revisão Periódica"
        assert record["category"] == "Óleo e Filtros"

    def test_blank_notes_and_mileage_are_null(self, client, alice, vehicle):
        record = add(client, alice, service(vehicle["id"], notes="", mileage=""))

        assert record["notes"] is None
        assert record["mileage"] is None

    def test_free_service(self, client, alice, vehicle):
        record = add(client, alice, service(vehicle["id"], cost=0))
        assert record["cost"] == 0

    def test_description_required(self, client, alice, vehicle):
        response = client.post("/addMaintenanceRecord", json=service(vehicle["id"], description="  "), headers=alice)

        assert response.status_code == 400
        assert "Description is required." in response.json()["detail"]

    @pytest.mark.parametrize("fields", [
        {"type": "Urgente"},
        {"category": "Motor elétrico"},
        {"cost": -1},
        {"date": "ontem"},
    ])
    def test_invalid_fields_rejected(self, client, alice, vehicle, fields):
        response = client.post("/addMaintenanceRecord", json=service(vehicle["id"], **fields), headers=alice)
        assert response.status_code == 400

    def test_other_users_vehicle(self, client, bob, vehicle):
        response = client.post("/addMaintenanceRecord", json=service(vehicle["id"]), headers=bob)
        assert response.status_code == 404


class TestListMaintenanceRecords:
    def test_vehicle_id_required(self, client, alice):
        assert client.get("/getMaintenanceRecords", headers=alice).status_code == 400

    def test_newest_first(self, client, alice, vehicle):
        older = add(client, alice, service(vehicle["id"], date="2024-01-10"))
        newer = add(client, alice, service(vehicle["id"], date="2024-06-01"))

        response = client.get("/getMaintenanceRecords", params={"vehicleId": vehicle["id"]}, headers=alice)
        assert [r["id"] for r in response.json()] == [newer["id"], older["id"]]

    def test_other_users_records_hidden(self, client, alice, bob, vehicle):
        add(client, alice, service(vehicle["id"]))

        response = client.get("/getMaintenanceRecords", params={"vehicleId": vehicle["id"]}, headers=bob)
        assert response.json() == []


class TestUpdateMaintenanceRecord:
    def test_update_keeps_vehicle(self, client, alice, vehicle):
        other = client.post("/addVehicle", json={"name": "Other"}, headers=alice).json()
        record = add(client, alice, service(vehicle["id"]))

        response = client.put(
            f"/updateMaintenanceRecord/{record['id']}",
            json=service(other["id"], description="Troca de discos", cost=900.0),
            headers=alice,
        )

        assert response.status_code == 200
        updated = response.json()
        assert updated["vehicleId"] == vehicle["id"]
        assert updated["description"] == "Troca de discos"
        assert updated["cost"] == 900.0

    def test_unknown_record(self, client, alice, vehicle):
        response = client.put("/updateMaintenanceRecord/nope", json=service(vehicle["id"]), headers=alice)

        assert response.status_code == 404
        assert response.json()["detail"] == "Maintenance record not found."


class TestDeleteMaintenanceRecord:
    def test_delete(self, client, alice, vehicle):
        record = add(client, alice, service(vehicle["id"]))

        assert client.delete(f"/deleteMaintenanceRecord/{record['id']}", headers=alice).status_code == 204
        assert client.delete(f"/deleteMaintenanceRecord/{record['id']}", headers=alice).status_code == 404

    def test_other_users_record(self, client, alice, bob, vehicle):
        record = add(client, alice, service(vehicle["id"]))
        assert client.delete(f"/deleteMaintenanceRecord/{record['id']}", headers=bob).status_code == 404
