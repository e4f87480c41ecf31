import uuid
from datetime import datetime, timezone


def generate_id() -> str:
    return uuid.uuid4().hex[:16]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z, e.g. 2024-05-01T12:00:00.000Z."""
    moment = moment or utc_now()
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
