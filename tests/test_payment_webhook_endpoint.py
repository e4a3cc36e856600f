import json

from app.domain.entities.booking import BookingStatus
from app.infrastructure.gateways.hmac_webhook_verifier import sign_payload


def _create_booking(client, booking_payload) -> int:
    return client.post("/bookings", json=booking_payload).json()["bookingId"]


def test_confirms_booking(client, booking_payload, booking_repo, post_webhook):
    booking_id = _create_booking(client, booking_payload)

    response = post_webhook({"bookingId": booking_id})

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "bookingId": booking_id, "bookingStatus": "confirmed"}
    assert booking_repo.bookings[booking_id].status == BookingStatus.CONFIRMED


def test_paypal_capture_envelope(client, booking_payload, booking_repo, post_webhook):
    booking_id = _create_booking(client, booking_payload)

    response = post_webhook(
        {
            "event_type": "PAYMENT.CAPTURE.COMPLETED",
            "resource": {
                "custom_id": str(booking_id),
                "amount": {"currency_code": "USD", "value": "350.00"},
            },
        }
    )

    assert response.status_code == 200
    assert booking_repo.bookings[booking_id].status == BookingStatus.CONFIRMED


def test_duplicate_confirmation_is_ok(client, booking_payload, booking_repo, post_webhook):
    booking_id = _create_booking(client, booking_payload)

    post_webhook({"bookingId": booking_id})
    response = post_webhook({"bookingId": booking_id})

    assert response.status_code == 200
    assert response.json()["bookingStatus"] == "confirmed"
    assert booking_repo.bookings[booking_id].status == BookingStatus.CONFIRMED


def test_invalid_signature_leaves_booking_unchanged(client, booking_payload, booking_repo, post_webhook):
    booking_id = _create_booking(client, booking_payload)

    response = post_webhook({"bookingId": booking_id}, secret="wrong-secret")

    assert response.status_code == 401
    assert response.json()["code"] == "WEBHOOK_VERIFICATION_FAILED"
    assert booking_repo.bookings[booking_id].status == BookingStatus.PENDING


def test_unsigned_request_is_rejected(client, booking_payload):
    booking_id = _create_booking(client, booking_payload)

    response = client.post("/payments/webhook/paypal", json={"bookingId": booking_id})

    assert response.status_code == 401


def test_unknown_booking_is_404_and_creates_nothing(client, booking_repo, post_webhook):
    response = post_webhook({"bookingId": 999})

    assert response.status_code == 404
    assert booking_repo.bookings == {}


def test_missing_booking_id(client, post_webhook):
    response = post_webhook({"event_type": "CHECKOUT.ORDER.APPROVED", "resource": {}})

    assert response.status_code == 400


def test_invalid_json(client):
    body = b"not json"

    response = client.post(
        "/payments/webhook/paypal",
        content=body,
        headers={"X-Webhook-Signature": sign_payload("test-webhook-secret", body)},
    )

    assert response.status_code == 400


def test_amount_mismatch_is_409(client, booking_payload, booking_repo, post_webhook):
    booking_id = _create_booking(client, booking_payload)

    response = post_webhook({"bookingId": booking_id, "amount": "1.00"})

    assert response.status_code == 409
    assert response.json()["code"] == "PAYMENT_AMOUNT_MISMATCH"
    assert booking_repo.bookings[booking_id].status == BookingStatus.PENDING


def test_failed_booking_is_409(client, booking_payload, post_webhook, clock):
    booking_id = _create_booking(client, booking_payload)
    clock.advance(seconds=1)
    client.post("/api/v1/workers/bookings/expire", params={"ttl-seconds": 0})

    response = post_webhook({"bookingId": booking_id})

    assert response.status_code == 409
    assert response.json()["code"] == "INVALID_BOOKING_STATUS"


def test_body_is_verified_byte_for_byte(client, booking_payload, booking_repo):
    booking_id = _create_booking(client, booking_payload)
    signed = json.dumps({"bookingId": booking_id}).encode()
    sent = json.dumps({"bookingId": booking_id}, indent=2).encode()

    response = client.post(
        "/payments/webhook/paypal",
        content=sent,
        headers={"X-Webhook-Signature": sign_payload("test-webhook-secret", signed)},
    )

    assert response.status_code == 401
    assert booking_repo.bookings[booking_id].status == BookingStatus.PENDING


def test_booking_id_out_of_range(client, post_webhook):
    response = post_webhook({"bookingId": str(10**30)})

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
