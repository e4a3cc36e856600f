from app.domain.entities.booking import BookingStatus
from app.domain.errors import DeliveryError


def _confirmed_booking(client, booking_payload, post_webhook) -> int:
    booking_id = client.post("/bookings", json=booking_payload).json()["bookingId"]
    post_webhook({"bookingId": booking_id})
    return booking_id


def test_notify_by_email(client, booking_payload, post_webhook, email_channel):
    booking_id = _confirmed_booking(client, booking_payload, post_webhook)

    response = client.post(f"/notify/{booking_id}", json={"email": "guest@example.com"})

    assert response.status_code == 200
    assert response.json()["message"] == "Email sent to guest@example.com"
    recipient, message = email_channel.sent[0]
    assert recipient == "guest@example.com"
    assert "Hotel: Manila Bay Suites" in message.body
    assert "Check-in: 2026-02-01" in message.body
    assert "Check-out: 2026-02-05" in message.body
    assert "Guests: 2" in message.body
    assert "Total: $350.00" in message.body
    assert message.body.startswith("Booking confirmed!")


def test_notify_falls_back_to_booking_email(client, booking_payload, post_webhook, email_channel):
    booking_id = _confirmed_booking(client, booking_payload, post_webhook)

    response = client.post(f"/notify/{booking_id}")

    assert response.status_code == 200
    assert email_channel.sent[0][0] == "jane@example.com"


def test_notify_by_phone(client, booking_payload, post_webhook, sms_channel):
    booking_id = _confirmed_booking(client, booking_payload, post_webhook)

    response = client.post(f"/notify/{booking_id}", json={"phone": "+15551234567"})

    assert response.status_code == 200
    assert response.json()["channel"] == "sms"
    assert sms_channel.sent[0][0] == "+15551234567"


def test_notify_sms_alias(client, booking_payload, post_webhook, sms_channel, email_channel):
    booking_id = _confirmed_booking(client, booking_payload, post_webhook)

    response = client.post(f"/notify-sms/{booking_id}", json={"phone": "+15551234567"})

    assert response.status_code == 200
    assert response.json()["message"] == "SMS sent to +15551234567"
    assert email_channel.sent == []


def test_notify_sms_without_phone(client, booking_payload, post_webhook):
    booking_id = _confirmed_booking(client, booking_payload, post_webhook)

    response = client.post(f"/notify-sms/{booking_id}", json={})

    assert response.status_code == 400


def test_notify_without_any_contact(client, booking_payload):
    del booking_payload["email"]
    booking_id = client.post("/bookings", json=booking_payload).json()["bookingId"]

    response = client.post(f"/notify/{booking_id}", json={})

    assert response.status_code == 400


def test_notify_unknown_booking(client):
    response = client.post("/notify/404", json={"email": "guest@example.com"})

    assert response.status_code == 404


def test_delivery_failure_leaves_booking_confirmed(client, booking_payload, post_webhook, email_channel, booking_repo):
    booking_id = _confirmed_booking(client, booking_payload, post_webhook)
    email_channel.error = DeliveryError("email", "sendgrid", "provider answered 500")

    response = client.post(f"/notify/{booking_id}", json={"email": "guest@example.com"})

    assert response.status_code == 500
    body = response.json()
    assert body["code"] == "NOTIFICATION_DELIVERY_FAILED"
    assert "error_id" in body
    assert booking_repo.bookings[booking_id].status == BookingStatus.CONFIRMED


def test_notify_booking_id_out_of_range(client):
    assert client.post(f"/notify/{10**30}", json={"email": "guest@example.com"}).status_code == 400
    assert client.post(f"/notify-sms/{10**30}", json={"phone": "+15551234567"}).status_code == 400
