"""
Test calendar export, SMS sending and the notification dispatcher
"""
from datetime import datetime, timezone
from urllib.parse import parse_qs

import httpx
import pytest

from coffeeconnect import config
from coffeeconnect.models import Location, Meeting, SMSLog, User
from coffeeconnect.services.calendar_export import (
    APP_NAME,
    generate_calendar_file,
    google_maps_link,
)
from coffeeconnect.services.notification_service import (
    NotificationDispatcher,
    format_meeting_time,
)
from coffeeconnect.services.twilio_service import send_sms


@pytest.fixture
def meeting_parts():
    meeting = Meeting(
        id="meeting-1",
        host_user_id="user-host",
        attendee_user_id="user-attendee",
        timeslot_id="slot-1",
        location_id="loc-mission",
        start_time=datetime(2026, 3, 5, 9, 30),
        duration_minutes=60,
        status="CONFIRMED",
    )
    location = Location(
        id="loc-mission",
        name="Mission Coffee Roasters",
        address="11641 Ridgeline Dr Ste 170, Colorado Springs, CO 80921",
        latitude=39.0142,
        longitude=-104.7966,
    )
    host = User(id="user-host", name="Bob Johnson", phone_number="+15550000003")
    attendee = User(id="user-attendee", name="Alice Williams", phone_number="(555) 000-0004")
    return meeting, location, host, attendee


@pytest.fixture
def twilio_config(monkeypatch):
    monkeypatch.setattr(config, "SMS_ENABLED", True)
    monkeypatch.setattr(config, "TWILIO_ACCOUNT_SID", "AC123")
    monkeypatch.setattr(config, "TWILIO_AUTH_TOKEN", "secret")
    monkeypatch.setattr(config, "TWILIO_FROM_NUMBER", "+15559990000")
    monkeypatch.setattr(config, "TWILIO_MESSAGING_SERVICE_SID", None)


def mock_client(status_code, payload, requests=None):
    def handler(request):
        if requests is not None:
            requests.append(request)
        return httpx.Response(status_code, json=payload)

    return httpx.Client(transport=httpx.MockTransport(handler))


class TestCalendarExport:
    def test_exact_calendar_file(self, meeting_parts):
        meeting, location, host, attendee = meeting_parts
        now = datetime(2026, 3, 1, 17, 4, 5, tzinfo=timezone.utc)

        ics = generate_calendar_file(meeting, location, host, attendee, now=now)

        maps = (
            "https://www.google.com/maps/search/?api=1&query="
            "11641%20Ridgeline%20Dr%20Ste%20170%2C%20Colorado%20Springs%2C%20CO%2080921"
        )
        place = "Mission Coffee Roasters, 11641 Ridgeline Dr Ste 170, Colorado Springs, CO 80921"
        assert ics.split("\n") == [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            f"PRODID:-//{APP_NAME}//NONSGML v1.0//EN",
            "BEGIN:VEVENT",
            "UID:meeting-1",
            "DTSTAMP:20260301T170405Z",
            "DTSTART:20260305T093000",
            "DTEND:20260305T103000",
            "SUMMARY:Coffee Connect with Alice Williams",
            f"DESCRIPTION:Location: {place}\\nView on Google Maps: {maps}",
            f"LOCATION:{place}",
            "END:VEVENT",
            "END:VCALENDAR",
        ]

    def test_thirty_minute_meeting_end(self, meeting_parts):
        meeting, location, host, attendee = meeting_parts
        meeting.duration_minutes = 30
        meeting.start_time = datetime(2026, 3, 5, 23, 45)

        ics = generate_calendar_file(meeting, location, host, attendee)

        assert "DTEND:20260306T001500" in ics.split("\n")

    def test_maps_link_keeps_browser_safe_characters(self):
        assert google_maps_link("Joe's (Main) St!") == (
            "https://www.google.com/maps/search/?api=1&query=Joe's%20(Main)%20St!"
        )


class TestFormatMeetingTime:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (datetime(2026, 3, 5, 9, 30), "Mar 05, 2026 9:30 AM"),
            (datetime(2026, 12, 24, 0, 5), "Dec 24, 2026 12:05 AM"),
            (datetime(2026, 7, 1, 15, 0), "Jul 01, 2026 3:00 PM"),
        ],
    )
    def test_format(self, value, expected):
        assert format_meeting_time(value) == expected


class TestSendSms:
    def test_disabled(self, monkeypatch):
        monkeypatch.setattr(config, "SMS_ENABLED", False)

        assert send_sms("+15550000003", "hi", "general") == (False, "SMS disabled")

    def test_requires_e164(self, twilio_config):
        success, error = send_sms("5550000003", "hi", "general")

        assert success is False
        assert "E.164" in error

    def test_not_configured(self, twilio_config, monkeypatch):
        monkeypatch.setattr(config, "TWILIO_AUTH_TOKEN", None)

        assert send_sms("+15550000003", "hi", "general") == (False, "Twilio not configured")

    def test_successful_send_is_logged(self, db, twilio_config):
        requests = []
        client = mock_client(201, {"sid": "SM42"}, requests)

        result = send_sms(
            "+15550000003",
            "SUCCESS! You have a coffee meeting",
            "meeting_confirmation",
            db=db,
            entity_type="Meeting",
            entity_id="meeting-1",
            client=client,
        )

        assert result == (True, None)
        request = requests[0]
        assert request.url.path == "/2010-04-01/Accounts/AC123/Messages.json"
        assert request.headers["authorization"].startswith("Basic ")
        form = parse_qs(request.content.decode())
        assert form["To"] == ["+15550000003"]
        assert form["From"] == ["+15559990000"]
        assert form["Body"] == ["SUCCESS! You have a coffee meeting"]

        log = db.query(SMSLog).one()
        assert log.status == "sent"
        assert log.twilio_message_sid == "SM42"
        assert log.entity_id == "meeting-1"

    def test_messaging_service_preferred_over_from_number(self, twilio_config, monkeypatch):
        monkeypatch.setattr(config, "TWILIO_MESSAGING_SERVICE_SID", "MG1")
        requests = []

        send_sms("+15550000003", "hi", "general", client=mock_client(201, {"sid": "SM1"}, requests))

        form = parse_qs(requests[0].content.decode())
        assert form["MessagingServiceSid"] == ["MG1"]
        assert "From" not in form

    def test_api_error_is_logged_as_failed(self, db, twilio_config):
        client = mock_client(400, {"code": 21211, "message": "Invalid 'To' Phone Number"})

        success, error = send_sms("+15550000003", "hi", "general", db=db, client=client)

        assert success is False
        assert error == "Invalid 'To' Phone Number"
        log = db.query(SMSLog).one()
        assert log.status == "failed"
        assert log.error_message == "[21211] Invalid 'To' Phone Number"

    def test_transport_error(self, db, twilio_config):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))

        success, error = send_sms("+15550000003", "hi", "general", db=db, client=client)

        assert success is False
        assert "connection refused" in error
        assert db.query(SMSLog).one().status == "failed"


class TestNotificationDispatcher:
    def test_confirmation_goes_to_both_parties(self, meeting_parts):
        meeting, location, host, attendee = meeting_parts
        sent = []

        def transport(to_phone, message_body, message_type, **kwargs):
            sent.append((to_phone, message_body, kwargs["entity_id"]))
            return True, None

        ics = NotificationDispatcher(sms_func=transport).meeting_confirmed(
            meeting, host, attendee, location
        )

        assert sent == [
            (
                "+15550000003",
                "SUCCESS! You have a coffee meeting with Alice Williams on Mar 05, 2026 9:30 AM "
                "at Mission Coffee Roasters. Check your in-app calendar for details and an .ics file!",
                "meeting-1",
            ),
            (
                # Non-E.164 numbers are normalized before sending
                "+15550000004",
                "SUCCESS! You're meeting Bob Johnson on Mar 05, 2026 9:30 AM at Mission Coffee "
                "Roasters. Check your in-app calendar for details and an .ics file!",
                "meeting-1",
            ),
        ]
        assert ics.startswith("BEGIN:VCALENDAR")

    def test_cancellation_message(self, meeting_parts):
        meeting, location, host, attendee = meeting_parts
        sent = []

        def transport(to_phone, message_body, message_type, **kwargs):
            sent.append((to_phone, message_body))
            return True, None

        NotificationDispatcher(sms_func=transport).meeting_cancelled(
            meeting, attendee, [host], location
        )

        assert sent == [
            (
                "+15550000003",
                "Alice Williams has cancelled your coffee meeting on Mar 05, 2026 9:30 AM at "
                "Mission Coffee Roasters. Please check the app for updates.",
            )
        ]

    def test_transport_exception_is_swallowed(self):
        def transport(**kwargs):
            raise RuntimeError("network down")

        dispatcher = NotificationDispatcher(sms_func=transport)

        assert dispatcher.notify("+15550000003", "hello") is False

    def test_missing_or_invalid_contact(self):
        calls = []
        dispatcher = NotificationDispatcher(sms_func=lambda **kw: calls.append(kw) or (True, None))

        assert dispatcher.notify(None, "hello") is False
        assert dispatcher.notify("12345", "hello") is False
        assert calls == []
