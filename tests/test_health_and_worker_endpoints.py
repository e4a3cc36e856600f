from app.domain.entities.booking import BookingStatus
from app.domain.errors import StoreError


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "hotel-booking-api"}


def test_health_live(client):
    assert client.get("/health/live").status_code == 200


def test_health_db_and_ready(client):
    assert client.get("/health/db").json() == {"status": "healthy", "component": "database"}
    assert client.get("/health/ready").json()["status"] == "ready"


def test_health_db_unhealthy(client, booking_repo):
    async def broken_ping():
        raise StoreError("ping", "OperationalError")

    booking_repo.ping = broken_ping

    assert client.get("/health/db").status_code == 503
    assert client.get("/health/ready").status_code == 503


def test_expire_worker_fails_only_stale_pending(client, booking_payload, booking_repo, clock):
    stale_id = client.post("/bookings", json=booking_payload).json()["bookingId"]
    clock.advance(hours=2)
    fresh_id = client.post("/bookings", json=booking_payload).json()["bookingId"]

    response = client.post("/api/v1/workers/bookings/expire")

    assert response.status_code == 200
    assert response.json() == {"expired": 1, "bookingIds": [stale_id]}
    assert booking_repo.bookings[stale_id].status == BookingStatus.FAILED
    assert booking_repo.bookings[stale_id].failure_reason == "EXPIRED"
    assert booking_repo.bookings[fresh_id].status == BookingStatus.PENDING


def test_expire_worker_with_ttl_override(client, booking_payload, clock):
    booking_id = client.post("/bookings", json=booking_payload).json()["bookingId"]
    clock.advance(seconds=120)

    response = client.post("/api/v1/workers/bookings/expire", params={"ttl-seconds": 60})

    assert response.json()["bookingIds"] == [booking_id]


def test_expire_worker_rejects_huge_ttl(client, booking_payload, booking_repo):
    booking_id = client.post("/bookings", json=booking_payload).json()["bookingId"]

    response = client.post("/api/v1/workers/bookings/expire", params={"ttl-seconds": 99999999999999})

    assert response.status_code == 400
    assert booking_repo.bookings[booking_id].status == BookingStatus.PENDING
