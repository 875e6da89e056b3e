"""
Centralized date and time utilities for the application.

This module provides a focused set of functions for handling dates, times,
and timestamps in a consistent and timezone-aware manner.

Key Features:
-   **Timezone-Aware Parsing**: All timestamps are handled as timezone-aware
    datetime objects, defaulting to UTC to prevent common timezone-related bugs.
-   **Epoch Support**: Mobile clients send sample timestamps as epoch
    milliseconds; those are accepted wherever a timestamp is.
-   **Dependency Abstraction**: Wraps `dateutil` to provide a stable,
    internal API for the rest of the application.
"""

import logging
from datetime import UTC, date, datetime

from dateutil import parser

logger = logging.getLogger(__name__)


def get_current_utc_time() -> datetime:
    """Return the current UTC time, truncated to the millisecond precision BSON keeps."""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def parse_timestamp(ts: str | datetime | int | float) -> datetime | None:
    """
    Parse a timestamp string, epoch value or datetime object and ensure it is
    timezone-aware, defaulting to UTC.

    Numeric values are interpreted as milliseconds since the Unix epoch.

    Args:
        ts: The timestamp to parse, either as an ISO 8601 string, epoch
            milliseconds, or a datetime object.

    Returns:
        A timezone-aware datetime object, or None if parsing fails.
    """
    if isinstance(ts, bool):
        logger.warning("Refusing to parse boolean '%s' as a timestamp.", ts)
        return None

    if isinstance(ts, int | float):
        try:
            return datetime.fromtimestamp(ts / 1000.0, tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            logger.warning("Failed to parse epoch timestamp '%s': %s", ts, e)
            return None

    if not ts:
        logger.debug("Received empty timestamp; returning None.")
        return None

    if isinstance(ts, datetime):
        if ts.tzinfo is None:
            return ts.replace(tzinfo=UTC)
        return ts.astimezone(UTC)

    try:
        parsed_time = parser.isoparse(ts)
        if parsed_time.tzinfo is None:
            return parsed_time.replace(tzinfo=UTC)
        return parsed_time.astimezone(UTC)
    except (ValueError, TypeError, OverflowError) as e:
        logger.warning("Failed to parse timestamp '%s': %s", ts, e)
        return None


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return the datetime as an explicit UTC-aware value."""

    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def to_storage_datetime(dt: datetime) -> datetime:
    """Return a naive UTC datetime, the form BSON stores and compares."""
    return ensure_utc(dt).replace(tzinfo=None)


def normalize_to_utc_datetime(value: str | datetime | date | None) -> datetime | None:
    """Normalize arbitrary date/datetime inputs to a UTC-aware datetime."""

    if value is None:
        return None

    if isinstance(value, datetime):
        return ensure_utc(value)

    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time(), tzinfo=UTC)

    if isinstance(value, str):
        parsed = parse_timestamp(value)
        if parsed:
            return ensure_utc(parsed)

        try:
            parsed_date = datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            logger.warning(
                "Unable to interpret value '%s' as datetime; returning None.", value
            )
            return None

        return datetime.combine(parsed_date, datetime.min.time(), tzinfo=UTC)

    logger.warning("Unsupported datetime input type '%s'", type(value))
    return None
