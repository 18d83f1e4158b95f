"""Integration tests for the reservation HTTP API"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_full_reservation_flow(client: AsyncClient):
    """
    Integration test simulating the reservation lifecycle:
    1. Create a reservation for tomorrow
    2. Try to take the same slot again
    3. Cancel the first reservation, then cancel it again
    4. Look up an id that does not exist
    """
    # Step 1: Create reservation
    create_response = await client.post(
        "/api/reservations",
        json={"customer_name": "Alice", "reserved_at": "2026-10-18T19:00:00"},
    )

    assert create_response.status_code == 201
    created = create_response.json()
    assert created["status"] == "REQUESTED"
    assert created["customer_name"] == "Alice"
    assert created["reserved_at"] == "2026-10-18T19:00:00"
    assert created["reservation_number"].startswith("RSV-")
    assert created["cancel_reason"] is None

    reservation_id = created["id"]

    # Step 2: Same slot is taken
    duplicate_response = await client.post(
        "/api/reservations",
        json={"customer_name": "Bob", "reserved_at": "2026-10-18T19:00:00"},
    )

    assert duplicate_response.status_code == 409
    assert duplicate_response.json()["error"] == "conflict"

    # Step 3: Cancel, then cancel again
    cancel_response = await client.patch(f"/api/reservations/{reservation_id}/cancel")

    assert cancel_response.status_code == 200
    canceled = cancel_response.json()
    assert canceled["status"] == "CANCELED"
    assert canceled["cancel_reason"]

    second_cancel = await client.patch(f"/api/reservations/{reservation_id}/cancel")
    assert second_cancel.status_code == 409

    # Step 4: Unknown id
    missing_response = await client.get("/api/reservations/987654")
    assert missing_response.status_code == 404
    assert missing_response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_get_and_list_reservations(client: AsyncClient):
    first = (await client.post(
        "/api/reservations",
        json={"customer_name": "Alice", "reserved_at": "2026-10-18T19:00", "party_size": 2},
    )).json()
    second = (await client.post(
        "/api/reservations",
        json={"customer_name": "Bob", "reserved_at": "2026-10-20T20:30"},
    )).json()

    get_response = await client.get(f"/api/reservations/{first['id']}")
    assert get_response.status_code == 200
    assert get_response.json()["party_size"] == 2

    number_response = await client.get(f"/api/reservations/number/{second['reservation_number']}")
    assert number_response.status_code == 200
    assert number_response.json()["id"] == second["id"]

    list_response = await client.get("/api/reservations")
    assert list_response.status_code == 200
    assert [r["id"] for r in list_response.json()] == [first["id"], second["id"]]

    await client.patch(f"/api/reservations/{first['id']}/cancel")

    filtered = await client.get("/api/reservations", params={"status": "CANCELED"})
    assert [r["id"] for r in filtered.json()] == [first["id"]]

    ranged = await client.get("/api/reservations", params={"from": "2026-10-19T00:00:00"})
    assert [r["id"] for r in ranged.json()] == [second["id"]]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, detail",
    [
        ({"customer_name": "  ", "reserved_at": "2026-10-18T19:00"}, "customer name required"),
        ({"customer_name": "Alice"}, "malformed timestamp"),
        ({"customer_name": "Alice", "reserved_at": "18/10/2026 19:00"}, "malformed timestamp"),
        ({"customer_name": "Alice", "reserved_at": "2026-10-18T19:00", "party_size": 0},
         "party size must be at least 1"),
    ],
)
async def test_create_rejects_invalid_input(client: AsyncClient, payload, detail):
    response = await client.post("/api/reservations", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "invalid_input", "detail": detail}


@pytest.mark.asyncio
async def test_create_without_body(client: AsyncClient):
    response = await client.post("/api/reservations")

    assert response.status_code == 400
    assert response.json()["detail"] == "request required"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, detail",
    [
        ({"customer_name": "Alice", "reserved_at": "2026-10-18T19:00", "party_size": "many"},
         "party size must be at least 1"),
        ({"customer_name": "Alice", "reserved_at": "2026-10-18T19:00", "party_size": 2.5},
         "party size must be at least 1"),
        ({"customer_name": "Alice", "reserved_at": "2026-10-18T19:00", "party_size": True},
         "party size must be at least 1"),
        ({"customer_name": " ", "reserved_at": "2026-10-18T19:00", "party_size": "many"},
         "customer name required"),
        ({"customer_name": 42, "reserved_at": "2026-10-18T19:00"}, "customer name required"),
        ({"customer_name": "Alice", "reserved_at": 20261018}, "malformed timestamp"),
        ({"customer_name": "A" * 101, "reserved_at": "2026-10-18T19:00"},
         "customer name must be at most 100 characters"),
        ({"customer_name": "Alice", "reserved_at": "2026-10-18T19:00", "customer_phone": "0" * 21},
         "customer phone must be at most 20 characters"),
    ],
)
async def test_create_classifies_wrongly_typed_fields(client: AsyncClient, payload, detail):
    """Type and length problems surface as the gate's messages, in its order"""
    response = await client.post("/api/reservations", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "invalid_input", "detail": detail}

    list_response = await client.get("/api/reservations")
    assert list_response.json() == []


@pytest.mark.asyncio
async def test_create_rejects_past_timestamp(client: AsyncClient):
    response = await client.post(
        "/api/reservations",
        json={"customer_name": "Alice", "reserved_at": "2026-10-17T09:00"},
    )

    assert response.status_code == 400
    assert response.json() == {
        "error": "invalid_argument",
        "detail": "reservation time must be in the future",
    }

    list_response = await client.get("/api/reservations")
    assert list_response.json() == []


@pytest.mark.asyncio
async def test_cancel_unknown_reservation(client: AsyncClient):
    response = await client.patch("/api/reservations/987654/cancel")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_out_of_range_id_is_not_found(client: AsyncClient):
    """Ids beyond the storage key range are unknown, not server errors"""
    get_response = await client.get("/api/reservations/99999999999999999999")
    assert get_response.status_code == 404
    assert get_response.json()["error"] == "not_found"

    cancel_response = await client.patch("/api/reservations/99999999999999999999/cancel")
    assert cancel_response.status_code == 404
    assert cancel_response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
