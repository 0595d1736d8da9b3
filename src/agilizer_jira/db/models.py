"""
Issue event and issue state models.

An `IssueEvent` is one immutable fact about a change to an issue (a comment
being added, a status transition...). An `IssueState` is a snapshot of the
issue's descriptive fields as of a point in time. Both are appended to the
store; neither is ever updated in place.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventKind(str, Enum):
    """Kinds of events extracted from issue changelogs."""

    COMMENT_ADDED = "comment_added"
    STATUS_CHANGED = "status_changed"


def to_naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    """
    Converts an aware datetime to naive UTC.

    The timestamp columns carry no time zone, so every stored value is UTC.
    Naive values are taken to be UTC already and pass through unchanged.
    """
    if v is None or v.tzinfo is None:
        return v
    return v.astimezone(timezone.utc).replace(tzinfo=None)


class IssueEvent(BaseModel):
    """A single change to an issue at a point in time."""

    model_config = ConfigDict(frozen=True)

    event_time: datetime = Field(..., description="When the change happened in Jira")
    event_kind: str = Field(..., description="Kind of event (see EventKind)")
    event_author: str = Field(..., description="Display name of the user who made the change")
    issue_key: str = Field(..., description="Key of the issue the event belongs to")
    comment_body: Optional[str] = None
    status_change_from: Optional[str] = None
    status_change_to: Optional[str] = None

    @field_validator("event_kind", mode="before")
    @classmethod
    def event_kind_to_str(cls, v):
        """Store EventKind members by value."""
        if isinstance(v, EventKind):
            return v.value
        return v

    @field_validator("event_time")
    @classmethod
    def event_time_to_utc(cls, v):
        return to_naive_utc(v)


class IssueState(BaseModel):
    """
    Snapshot of an issue's attributes.

    Everything except the key and the creation/update timestamps is optional
    because Jira may omit any field. An unset field stays None and is stored
    as NULL, which keeps "not provided" distinct from an empty string.
    """

    created_at: datetime
    updated_at: datetime
    key: str
    resolved_at: Optional[datetime] = None
    project: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    labels: Optional[str] = None
    # Not persisted: neither table has a reporter column
    reporter: Optional[str] = None
    assignee: Optional[str] = None
    developer_backend: Optional[str] = None
    developer_frontend: Optional[str] = None
    reviewer: Optional[str] = None
    product_owner: Optional[str] = None
    bug_cause: Optional[str] = None
    epic: Optional[str] = None
    tribe: Optional[str] = None
    components: Optional[str] = None
    fix_versions: Optional[str] = None

    @field_validator("created_at", "updated_at", "resolved_at")
    @classmethod
    def timestamps_to_utc(cls, v):
        """Store timestamps as naive UTC so their order survives the round-trip."""
        return to_naive_utc(v)
