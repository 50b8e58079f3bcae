from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_timestamp() -> str:
    """current UTC time as an RFC3339 string."""
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


def format_timestamp(value: str) -> str:
    """render a stored timestamp for display, falling back to the raw string."""
    try:
        # fromisoformat only understands a trailing Z from 3.11 on
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime(DISPLAY_FORMAT)
