# src/agilizer_jira/jira/protocols.py
"""
Defines the Protocol implemented by Jira clients.

The HTTP client talking to the real Jira API lives outside this package;
`agilizer_jira.testing.fake_client.FakeJiraClient` implements the same
protocol for tests.
"""

from typing import Protocol

from agilizer_jira.jira.channel import IssueKeyChannel
from agilizer_jira.jira.models import Issue


class IssueTrackerClient(Protocol):
    """Protocol for reading issues from the issue tracker."""

    def search_issues(self, query: str, issue_keys: IssueKeyChannel) -> None:
        """
        Runs a search query and sends every matching issue key into
        `issue_keys`, closing the channel once all keys have been sent.
        """
        ...

    def get_issue(self, issue_key: str) -> Issue:
        """Fetches the issue identified by `issue_key`."""
        ...
