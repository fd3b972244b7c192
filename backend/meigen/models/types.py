"""
Column types shared by every table.

Timestamps are persisted as integer epoch seconds so the embedded SQLite
file and PostgreSQL store identical values. Python code only ever sees
timezone-aware UTC datetimes.
"""

from datetime import datetime, timezone

from sqlalchemy import Integer
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    """Current time as an aware UTC datetime, truncated to the stored precision."""
    return datetime.now(timezone.utc).replace(microsecond=0)


class EpochSeconds(TypeDecorator):
    """Aware datetime in Python, whole seconds since the Unix epoch in the database."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, (int, float)):
            return int(value)
        if value.tzinfo is None:
            # naive values are treated as UTC
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
