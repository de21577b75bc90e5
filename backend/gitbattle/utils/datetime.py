import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_datetime(dt_value, default_now: bool = True) -> datetime | None:
    """
    Parse datetime from API response to naive UTC datetime.

    Handles:
    - ISO string with timezone (e.g., "2024-01-01T00:00:00Z") -> naive UTC datetime
    - datetime object with timezone -> naive UTC datetime
    - datetime object without timezone -> returned as-is
    - None or invalid -> current UTC time (if default_now=True) or None

    Args:
        dt_value: The datetime value to parse (str, datetime, or None)
        default_now: If True, return current UTC time for None/invalid values.
                     If False, return None for None/invalid values.
    """
    if dt_value is None:
        return utc_now() if default_now else None

    if isinstance(dt_value, str):
        try:
            dt = datetime.fromisoformat(dt_value.replace("Z", "+00:00"))
            return ensure_naive_utc(dt)
        except (ValueError, AttributeError):
            logger.warning(f"Failed to parse datetime string: {dt_value}")
            return utc_now() if default_now else None

    if isinstance(dt_value, datetime):
        return ensure_naive_utc(dt_value)

    logger.warning(f"Unexpected datetime type: {type(dt_value)}")
    return utc_now() if default_now else None


def ensure_naive_utc(dt_value: datetime | None) -> datetime | None:
    """
    Ensure a datetime is naive UTC.

    MongoDB hands back naive datetimes, so everything compared against stored
    timestamps is normalized to naive UTC first.
    """
    if dt_value is None:
        return None

    if isinstance(dt_value, datetime):
        if dt_value.tzinfo is not None:
            return dt_value.astimezone(timezone.utc).replace(tzinfo=None)
        return dt_value

    return None
