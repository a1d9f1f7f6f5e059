"""IssueTrack models package"""

from .base import Base, Status, TERMINAL_STATUSES, UNASSIGNED_STATUSES, MAX_ID, UTCDateTime
from .user import User, SEED_USERS
from .issue import Issue

__all__ = [
    "Base",
    "Status",
    "TERMINAL_STATUSES",
    "UNASSIGNED_STATUSES",
    "MAX_ID",
    "UTCDateTime",
    "User",
    "SEED_USERS",
    "Issue",
]
