"""UTC timestamp helpers shared by repositories and services."""
from datetime import datetime, timezone


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_iso() -> str:
    """ISO-8601 UTC with milliseconds, e.g. 2025-01-31T10:15:00.123Z.

    Millisecond precision keeps `created_at` ordering stable for notes
    created within the same second.
    """
    return now_utc().isoformat(timespec="milliseconds").replace("+00:00", "Z")
