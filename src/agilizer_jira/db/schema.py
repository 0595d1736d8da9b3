"""
Table definitions for the issue history store.

`issues_events` is the append-only event log: one row per event, carrying a
copy of the issue's state as of that event. `issues_states` accumulates state
snapshots. There is no foreign key between the two; the inserting code keeps
them consistent.

The insert column tuples fix the positional order of the bound parameters.
"""

from typing import List, Sequence

ISSUES_EVENTS_TABLE = "issues_events"
ISSUES_STATES_TABLE = "issues_states"

# Issue columns shared by both tables, in insert order (after issue_key)
ISSUE_STATE_COLUMNS = (
    "issue_created_at",
    "issue_updated_at",
    "issue_project",
    "issue_status",
    "issue_resolved_at",
    "issue_priority",
    "issue_summary",
    "issue_description",
    "issue_type",
    "issue_labels",
    "issue_assignee",
    "issue_developer_backend",
    "issue_developer_frontend",
    "issue_reviewer",
    "issue_product_owner",
    "issue_bug_cause",
    "issue_epic",
    "issue_tribe",
    "issue_components",
    "issue_fix_versions",
)

ISSUES_EVENTS_INSERT_COLUMNS = (
    "event_time",
    "event_kind",
    "event_author",
    "comment_body",
    "status_change_from",
    "status_change_to",
    "issue_key",
) + ISSUE_STATE_COLUMNS

ISSUES_STATES_INSERT_COLUMNS = (
    "issue_created_at",
    "issue_updated_at",
    "issue_key",
) + ISSUE_STATE_COLUMNS[2:]

CREATE_ISSUES_EVENTS_TABLE = f"""
CREATE TABLE "{ISSUES_EVENTS_TABLE}" (
  "id" SERIAL PRIMARY KEY NOT NULL,
  "inserted_at" TIMESTAMP(6) NOT NULL DEFAULT statement_timestamp(),
  "event_time" TIMESTAMP NOT NULL,
  "event_kind" TEXT NOT NULL,
  "event_author" TEXT NOT NULL,
  "issue_key" TEXT NOT NULL,
  "issue_created_at" TIMESTAMP NOT NULL,
  "issue_updated_at" TIMESTAMP NOT NULL,
  "issue_project" TEXT NOT NULL,
  "issue_status" TEXT NOT NULL,
  "issue_resolved_at" TIMESTAMP,
  "issue_priority" TEXT NOT NULL,
  "issue_summary" TEXT NOT NULL,
  "issue_description" TEXT,
  "issue_type" TEXT NOT NULL,
  "issue_labels" TEXT,
  "issue_assignee" TEXT,
  "issue_developer_backend" TEXT,
  "issue_developer_frontend" TEXT,
  "issue_reviewer" TEXT,
  "issue_product_owner" TEXT,
  "issue_bug_cause" TEXT,
  "issue_epic" TEXT,
  "issue_tribe" TEXT,
  "issue_components" TEXT,
  "issue_fix_versions" TEXT,
  "comment_body" TEXT,
  "status_change_from" TEXT,
  "status_change_to" TEXT
);
"""

CREATE_ISSUES_STATES_TABLE = f"""
CREATE TABLE "{ISSUES_STATES_TABLE}" (
  "id" SERIAL PRIMARY KEY NOT NULL,
  "inserted_at" TIMESTAMP(6) NOT NULL DEFAULT statement_timestamp(),
  "issue_created_at" TIMESTAMP NOT NULL,
  "issue_updated_at" TIMESTAMP NOT NULL,
  "issue_key" TEXT NOT NULL,
  "issue_project" TEXT NOT NULL,
  "issue_status" TEXT NOT NULL,
  "issue_resolved_at" TIMESTAMP,
  "issue_priority" TEXT NOT NULL,
  "issue_summary" TEXT NOT NULL,
  "issue_description" TEXT,
  "issue_type" TEXT NOT NULL,
  "issue_labels" TEXT,
  "issue_assignee" TEXT,
  "issue_developer_backend" TEXT,
  "issue_developer_frontend" TEXT,
  "issue_reviewer" TEXT,
  "issue_product_owner" TEXT,
  "issue_bug_cause" TEXT,
  "issue_epic" TEXT,
  "issue_tribe" TEXT,
  "issue_components" TEXT,
  "issue_fix_versions" TEXT
);
"""


def drop_table_statement(table: str) -> str:
    return f'DROP TABLE IF EXISTS "{table}";'


def drop_statements() -> List[str]:
    return [
        drop_table_statement(ISSUES_EVENTS_TABLE),
        drop_table_statement(ISSUES_STATES_TABLE),
    ]


def reset_statements() -> List[str]:
    """Statements dropping then recreating both tables, in execution order."""
    return [
        drop_table_statement(ISSUES_EVENTS_TABLE),
        CREATE_ISSUES_EVENTS_TABLE,
        drop_table_statement(ISSUES_STATES_TABLE),
        CREATE_ISSUES_STATES_TABLE,
    ]


def insert_statement(table: str, columns: Sequence[str]) -> str:
    """Builds an INSERT binding one positional parameter per column."""
    column_list = ", ".join(f'"{c}"' for c in columns)
    placeholders = ", ".join(["%s"] * len(columns))
    return f'INSERT INTO "{table}" ({column_list}) VALUES ({placeholders});'


INSERT_ISSUE_EVENT = insert_statement(ISSUES_EVENTS_TABLE, ISSUES_EVENTS_INSERT_COLUMNS)
INSERT_ISSUE_STATE = insert_statement(ISSUES_STATES_TABLE, ISSUES_STATES_INSERT_COLUMNS)
