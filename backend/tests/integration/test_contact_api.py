"""
Integration tests for the booking contact endpoint.

The mailer on app.state is swapped for one using an in-memory SMTP fake.
"""

import smtplib

import pytest

from linkhub.services.mailer import BookingMailer


class RecordingSMTP:
    sent = []

    def __init__(self, host, port, timeout=None):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        pass

    def login(self, user, password):
        pass

    def send_message(self, msg):
        RecordingSMTP.sent.append(msg)


class BrokenSMTP(RecordingSMTP):
    def __init__(self, host, port, timeout=None):
        raise ConnectionRefusedError("connection refused")


@pytest.fixture
def smtp_settings(settings):
    return settings.model_copy(update={
        "smtp_host": "smtp.example.com",
        "smtp_user": "mailer@example.com",
        "smtp_pass": "app-password",
        "booking_email": "bookings@artist.example",
    })


@pytest.fixture
def mail_app(app, smtp_settings):
    RecordingSMTP.sent = []
    app.state.mailer = BookingMailer(smtp_settings, smtp_factory=RecordingSMTP)
    return app


INQUIRY = {"name": "Jane Promoter", "email": "jane@venue.example", "message": "Friday 9pm?"}


class TestContact:

    def test_missing_field_is_400(self, client):
        response = client.post("/api/contact", json={"name": "Jane", "email": "jane@venue.example"})

        assert response.status_code == 400
        assert response.json() == {"error": "Name, email and message are required"}

    def test_not_configured_is_500(self, client):
        response = client.post("/api/contact", json=INQUIRY)

        assert response.status_code == 500
        assert response.json() == {"error": "Email not configured on server. Please contact admin."}

    def test_inquiry_is_sent(self, mail_app, client):
        response = client.post("/api/contact", json=INQUIRY)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        (msg,) = RecordingSMTP.sent
        assert msg["To"] == "bookings@artist.example"
        assert msg["Reply-To"] == "jane@venue.example"
        assert "Friday 9pm?" in msg.get_body(preferencelist=("plain",)).get_content()

    def test_delivery_failure_is_500(self, app, smtp_settings, client):
        app.state.mailer = BookingMailer(smtp_settings, smtp_factory=BrokenSMTP)

        response = client.post("/api/contact", json=INQUIRY)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to send email"}

    def test_auth_error_is_500(self, app, smtp_settings, client):
        class RejectingSMTP(RecordingSMTP):
            def login(self, user, password):
                raise smtplib.SMTPAuthenticationError(535, b"denied")

        app.state.mailer = BookingMailer(smtp_settings, smtp_factory=RejectingSMTP)

        response = client.post("/api/contact", json=INQUIRY)

        assert response.status_code == 500

    @pytest.mark.parametrize(
        "field,value",
        [
            ("name", "Jane\nBcc: someone@elsewhere.example"),
            ("name", "Jane\r\nX-Header: injected"),
            ("email", "jane@venue.example\nBcc: someone@elsewhere.example"),
        ],
    )
    def test_line_break_in_header_field_is_400(self, mail_app, client, field, value):
        response = client.post("/api/contact", json={**INQUIRY, field: value})

        assert response.status_code == 400
        assert response.json() == {"error": "Name and email must be a single line"}
        assert RecordingSMTP.sent == []

    def test_line_breaks_in_message_are_kept(self, mail_app, client):
        response = client.post("/api/contact", json={**INQUIRY, "message": "Line one\nLine two"})

        assert response.status_code == 200
        (msg,) = RecordingSMTP.sent
        assert "Line one\nLine two" in msg.get_body(preferencelist=("plain",)).get_content()
