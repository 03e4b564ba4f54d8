"""
Workflow status constants and helpers.

Canonical status values stored in the database for connections, feedback and
reviews, plus the small transition tables the repositories enforce.
"""

from enum import Enum
from typing import FrozenSet

# Inbox statuses shared by connections and feedback
STATUS_UNREAD = "unread"
STATUS_READ = "read"
STATUS_REPLIED = "replied"

INBOX_STATUSES: FrozenSet[str] = frozenset({STATUS_UNREAD, STATUS_READ, STATUS_REPLIED})

# Statuses an admin may set directly; replied requires a reply message
MANUAL_INBOX_STATUSES: FrozenSet[str] = frozenset({STATUS_UNREAD, STATUS_READ})

# Review moderation
REVIEW_PENDING = "pending"
REVIEW_APPROVED = "approved"
REVIEW_REJECTED = "rejected"

REVIEW_STATUSES: FrozenSet[str] = frozenset({REVIEW_PENDING, REVIEW_APPROVED, REVIEW_REJECTED})

# target status -> statuses it may be reached from (the target itself is a no-op)
REVIEW_TRANSITIONS = {
    REVIEW_APPROVED: frozenset({REVIEW_PENDING}),
    REVIEW_REJECTED: frozenset({REVIEW_PENDING}),
}


def review_transition_allowed(current: str, target: str) -> bool:
    """Return True if a review in `current` may move to `target`."""
    if current == target:
        return True
    return current in REVIEW_TRANSITIONS.get(target, frozenset())


class InboxStatusEnum(str, Enum):
    unread = STATUS_UNREAD
    read = STATUS_READ
    replied = STATUS_REPLIED


class ReviewStatusEnum(str, Enum):
    pending = REVIEW_PENDING
    approved = REVIEW_APPROVED
    rejected = REVIEW_REJECTED


class FeedbackTypeEnum(str, Enum):
    feedback = "feedback"
    complaint = "complaint"
    suggestion = "suggestion"


class FeedbackPriorityEnum(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


def status_value(status):
    """Accept either an enum member or its raw string value."""
    return getattr(status, "value", status)
