"""Date helpers shared by models, services and commands.

All timestamps handled by taskman are timezone-aware UTC datetimes. Naive
values (typed by the user or found in older data files) are read as UTC.
"""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_date(text: str) -> datetime:
    """Parse a user supplied date.

    Accepts ``YYYY-MM-DD`` as well as full ISO-8601 timestamps
    (``2024-06-01T09:30``, ``2024-06-01T09:30:00Z``).

    Raises:
        ValueError: If the text is not a recognised date.
    """
    cleaned = text.strip()
    if not cleaned:
        raise ValueError("Date cannot be empty")
    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError as e:
        raise ValueError(
            f"Invalid date '{text}'. Use YYYY-MM-DD or an ISO-8601 timestamp."
        ) from e
    return ensure_utc(parsed)


def format_timestamp(value: datetime | None) -> str:
    """Format a timestamp for terminal display."""
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M")
