"""Base SQLAlchemy models and configuration"""

from datetime import timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator
import enum

Base = declarative_base()

# Identifiers are stored as signed 32-bit integers
MAX_ID = 2**31 - 1

class Status(enum.Enum):
    """Issue status enumeration (wire value = storage value)"""
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

# No operation transitions out of these
TERMINAL_STATUSES = frozenset({Status.COMPLETED, Status.CANCELLED})

# The only statuses an issue may hold without an assignee
UNASSIGNED_STATUSES = frozenset({Status.PENDING, Status.CANCELLED})

class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetime, stored as naive UTC.

    SQLite has no timezone support, so values are normalized to UTC on the
    way in and tagged with UTC on the way out. Naive values are taken as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            value = value.replace(tzinfo=timezone.utc)
        return value
