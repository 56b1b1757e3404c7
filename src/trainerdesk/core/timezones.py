"""Timezones offered on the profile settings page."""

from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_TIMEZONE = "America/New_York"


@dataclass(frozen=True)
class TimezoneOption:
    value: str
    label: str
    offset: str


TIMEZONES: tuple[TimezoneOption, ...] = (
    # Americas
    TimezoneOption("America/New_York", "Eastern Time (ET)", "UTC-5"),
    TimezoneOption("America/Chicago", "Central Time (CT)", "UTC-6"),
    TimezoneOption("America/Denver", "Mountain Time (MT)", "UTC-7"),
    TimezoneOption("America/Los_Angeles", "Pacific Time (PT)", "UTC-8"),
    TimezoneOption("America/Anchorage", "Alaska Time (AKT)", "UTC-9"),
    TimezoneOption("Pacific/Honolulu", "Hawaii Time (HT)", "UTC-10"),
    # Europe
    TimezoneOption("Europe/London", "London (GMT)", "UTC+0"),
    TimezoneOption("Europe/Paris", "Paris (CET)", "UTC+1"),
    TimezoneOption("Europe/Berlin", "Berlin (CET)", "UTC+1"),
    TimezoneOption("Europe/Rome", "Rome (CET)", "UTC+1"),
    TimezoneOption("Europe/Athens", "Athens (EET)", "UTC+2"),
    TimezoneOption("Europe/Moscow", "Moscow (MSK)", "UTC+3"),
    # Asia
    TimezoneOption("Asia/Dubai", "Dubai (GST)", "UTC+4"),
    TimezoneOption("Asia/Karachi", "Karachi (PKT)", "UTC+5"),
    TimezoneOption("Asia/Kolkata", "India (IST)", "UTC+5:30"),
    TimezoneOption("Asia/Dhaka", "Dhaka (BST)", "UTC+6"),
    TimezoneOption("Asia/Bangkok", "Bangkok (ICT)", "UTC+7"),
    TimezoneOption("Asia/Singapore", "Singapore (SGT)", "UTC+8"),
    TimezoneOption("Asia/Hong_Kong", "Hong Kong (HKT)", "UTC+8"),
    TimezoneOption("Asia/Tokyo", "Tokyo (JST)", "UTC+9"),
    TimezoneOption("Asia/Seoul", "Seoul (KST)", "UTC+9"),
    # Australia
    TimezoneOption("Australia/Sydney", "Sydney (AEDT)", "UTC+11"),
    TimezoneOption("Australia/Melbourne", "Melbourne (AEDT)", "UTC+11"),
    TimezoneOption("Australia/Brisbane", "Brisbane (AEST)", "UTC+10"),
    TimezoneOption("Australia/Perth", "Perth (AWST)", "UTC+8"),
    # Pacific
    TimezoneOption("Pacific/Auckland", "Auckland (NZDT)", "UTC+13"),
    TimezoneOption("Pacific/Fiji", "Fiji (FJT)", "UTC+12"),
)

_BY_VALUE = {tz.value: tz for tz in TIMEZONES}


def get_timezone_label(value: str) -> str:
    """Display label for a zone, falling back to the raw value."""
    tz = _BY_VALUE.get(value)
    return f"{tz.label} ({tz.offset})" if tz else value


def is_valid_timezone(value: str) -> bool:
    """Whether ``value`` names an IANA zone known to this system."""
    if value in _BY_VALUE:
        return True
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
