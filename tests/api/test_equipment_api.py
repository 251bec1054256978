def _allocate(client, **overrides):
    payload = {
        "allocation_type": "equipment",
        "resource_id": 501,
        "site_id": 10,
        "allocated_date": "2025-03-03",
        "hours_worked": 10,
        "hourly_rate": 20000,
    }
    payload.update(overrides)
    return client.post("/api/equipment/allocations", json=payload)


def test_create_allocation(client):
    resp = _allocate(client)

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["allocation_id"] == 1
    assert data["total_cost"] == "220000"
    assert data["overtime_hours"] == "2.00"


def test_create_allocation_without_rate_has_no_cost(client):
    data = _allocate(client, hourly_rate=None).get_json()["data"]

    assert data["total_cost"] is None


def test_create_allocation_rejects_unknown_type(client):
    assert _allocate(client, allocation_type="crane").status_code == 400


def test_list_and_cost(client):
    _allocate(client)
    _allocate(client, allocation_type="worker", resource_id=2, hours_worked=8, hourly_rate=15000)
    _allocate(client, site_id=20)

    listed = client.get("/api/equipment/allocations?site_id=10").get_json()["data"]
    assert len(listed) == 2

    cost = client.get("/api/equipment/allocations/cost?site_id=10").get_json()["data"]
    assert cost == {"regular_hours": "16.00", "overtime_hours": "2.00", "total_cost": "340000"}
