"""UTC datetime utilities."""

from datetime import datetime, timezone


def parse_iso8601(value: str) -> datetime:
    """Parse an ISO8601 timestamp such as 2016-01-02T15:04:05+09:00.

    Naive input is taken as UTC. Raises ValueError on malformed input.
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
