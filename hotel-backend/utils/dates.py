# utils/dates.py
from datetime import datetime, timezone
from dateutil.parser import parse as parse_date


def parse_datetime(value):
    """Parse an ISO 8601 string into a naive UTC datetime.

    Raises ValueError for anything that is not a parsable string or datetime.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = parse_date(value)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"invalid datetime: {value}") from e
    else:
        raise ValueError(f"invalid datetime: {value!r}")

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError as e:
            raise ValueError(f"invalid datetime: {value}") from e
    return parsed
