"""Base SQLAlchemy models and configuration"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import declarative_base

from ..domain.issue import Status

Base = declarative_base()


def to_db_time(value: Optional[datetime]) -> Optional[datetime]:
    """Store timestamps as naive UTC; SQLite drops the offset anyway"""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def from_db_time(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


__all__ = ["Base", "Status", "to_db_time", "from_db_time"]
