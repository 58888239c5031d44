from conftest import FailingService, InMemoryRepository

from sensor_api.services.data import DataService

RECORD = {
    "device_id": "dev-001",
    "device_name": "Boiler Controller",
    "price": 129.99,
    "serial_number": 4411.0,
    "type": "controller",
    "date_time": "2024-12-22T12:00:00Z",
    "description": "Main hall boiler",
}


def test_create_data_assigns_id(make_client):
    client = make_client(data_service=DataService(InMemoryRepository()))

    response = client.post("/data", json=RECORD)

    assert response.status_code == 201
    assert response.json() == {**RECORD, "id": 1}


def test_create_data_accepts_legacy_serial_number_key(make_client):
    client = make_client(data_service=DataService(InMemoryRepository()))
    legacy = {k: v for k, v in RECORD.items() if k != "serial_number"}
    legacy["SerialNumber"] = 77.0

    response = client.post("/data", json=legacy)

    assert response.status_code == 201
    assert response.json()["serial_number"] == 77.0


def test_create_data_missing_fields_take_zero_values(make_client):
    client = make_client(data_service=DataService(InMemoryRepository()))

    response = client.post("/data", json={"device_name": "bare"})

    assert response.status_code == 201
    body = response.json()
    assert body["price"] == 0.0
    assert body["description"] == ""


def test_get_data_not_found(make_client):
    client = make_client(data_service=DataService(InMemoryRepository()))

    response = client.get("/data/42")

    assert response.status_code == 404
    assert response.content == b""


def test_data_pagination(make_client):
    client = make_client(data_service=DataService(InMemoryRepository()))
    for i in range(3):
        client.post("/data", json={**RECORD, "device_id": f"dev-{i}"})

    first = client.get("/data", params={"page": 1, "rows_per_page": 2}).json()
    second = client.get("/data", params={"page": 2, "rows_per_page": 2}).json()

    assert [r["device_id"] for r in first] == ["dev-0", "dev-1"]
    assert [r["device_id"] for r in second] == ["dev-2"]


def test_data_list_invalid_query_parameter(make_client):
    client = make_client(data_service=DataService(InMemoryRepository()))

    response = client.get("/data", params={"rows_per_page": "ten"})

    assert response.status_code == 400
    assert response.text.startswith("Invalid request parameters")


def test_update_and_delete_missing_data_still_ok(make_client):
    client = make_client(data_service=DataService(InMemoryRepository()))

    updated = client.put("/data", json={**RECORD, "id": 5})
    deleted = client.delete("/data/5")

    assert updated.status_code == 200
    assert updated.text == "Data updated successfully"
    assert deleted.status_code == 200
    assert deleted.text == "Data deleted successfully"


def test_data_malformed_id(make_client):
    client = make_client(data_service=DataService(InMemoryRepository()))

    assert client.get("/data/x1").status_code == 400
    assert client.delete("/data/-").status_code == 400


def test_data_store_errors_are_not_leaked(make_client):
    client = make_client(data_service=FailingService())

    responses = [
        client.post("/data", json=RECORD),
        client.get("/data"),
        client.get("/data/1"),
        client.put("/data/1", json=RECORD),
        client.delete("/data/1"),
    ]

    assert [r.status_code for r in responses] == [500] * 5
    assert all("db-host" not in r.text for r in responses)
