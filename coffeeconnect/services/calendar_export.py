"""
Calendar export - builds the .ics invite attached to a confirmed meeting
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from urllib.parse import quote

from ..config import APP_NAME
from ..models import Location, Meeting, User

LOCAL_FORMAT = "%Y%m%dT%H%M%S"
UTC_FORMAT = "%Y%m%dT%H%M%SZ"

# Characters browsers leave unescaped in URI components
URI_SAFE = "!~*'()"


def google_maps_link(address: str) -> str:
    """Search link for an address, encoded the same way a browser would"""
    return f"https://www.google.com/maps/search/?api=1&query={quote(address, safe=URI_SAFE)}"


def generate_calendar_file(
    meeting: Meeting,
    location: Location,
    host: User,
    attendee: User,
    now: Optional[datetime] = None,
) -> str:
    """
    Render a VCALENDAR block for a meeting.

    DTSTART/DTEND are the meeting's local wall-clock times; DTSTAMP is the
    generation time in UTC.
    """
    start = meeting.start_time
    end = start + timedelta(minutes=meeting.duration_minutes)
    stamp = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    place = f"{location.name}, {location.address}"

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:-//{APP_NAME}//NONSGML v1.0//EN",
        "BEGIN:VEVENT",
        f"UID:{meeting.id}",
        f"DTSTAMP:{stamp.strftime(UTC_FORMAT)}",
        f"DTSTART:{start.strftime(LOCAL_FORMAT)}",
        f"DTEND:{end.strftime(LOCAL_FORMAT)}",
        f"SUMMARY:Coffee Connect with {attendee.name}",
        f"DESCRIPTION:Location: {place}\\nView on Google Maps: {google_maps_link(location.address)}",
        f"LOCATION:{place}",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\n".join(lines)
