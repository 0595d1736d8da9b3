"""
agilizer_jira: extracts Jira issue history into a PostgreSQL event log
and a table of issue state snapshots.
"""

__version__ = "0.1.0"
