"""Shared validation utilities"""

import re
from typing import Optional

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(value: str) -> tuple[int, int]:
    """
    Parse an "HH:MM" wall-clock time.

    Args:
        value: Time string, hours may be a single digit ("9:00")

    Returns:
        (hour, minute) tuple

    Raises:
        ValueError: If the value is not a valid 24h time
    """
    match = TIME_PATTERN.match(value.strip()) if value else None
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return hour, minute


def validate_time(value: str) -> str:
    """Validate and normalize an "HH:MM" time to zero-padded form"""
    hour, minute = parse_time(value)
    return f"{hour:02d}:{minute:02d}"


def time_to_minutes(value: str) -> int:
    """Minutes since midnight for an "HH:MM" time"""
    hour, minute = parse_time(value)
    return hour * 60 + minute


def minutes_to_time(total_minutes: int) -> str:
    """Format minutes since midnight as "HH:MM" """
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def validate_percentage(value: Optional[float]) -> float:
    """
    Validate a percentage in the 0-100 range.

    Missing values are treated as 0.
    """
    if value is None:
        return 0.0
    if value < 0 or value > 100:
        raise ValueError("Percentage must be between 0 and 100")
    return float(value)


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email
