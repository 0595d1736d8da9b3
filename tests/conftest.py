from datetime import datetime

import pytest

from agilizer_jira.db.models import EventKind, IssueEvent, IssueState
from agilizer_jira.testing.fake_client import FakeJiraClient


@pytest.fixture
def fake_client():
    """A fresh FakeJiraClient with an empty expectation queue."""
    return FakeJiraClient()


@pytest.fixture
def issue_state():
    """State snapshot with every column required by the schema set."""
    return IssueState(
        created_at=datetime(2024, 3, 1, 9, 30),
        updated_at=datetime(2024, 3, 4, 16, 5),
        key="A-1",
        project="Agilizer",
        status="In Progress",
        priority="High",
        summary="Export issue history",
        type="Story",
        labels="backend,etl",
        assignee="Ada",
        epic="A-100",
        components="ingestion",
    )


@pytest.fixture
def issue_event():
    """Status change event for the issue of `issue_state`."""
    return IssueEvent(
        event_time=datetime(2024, 3, 4, 16, 5),
        event_kind=EventKind.STATUS_CHANGED,
        event_author="Ada",
        issue_key="A-1",
        status_change_from="To Do",
        status_change_to="In Progress",
    )
