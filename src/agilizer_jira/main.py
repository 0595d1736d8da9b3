"""
main.py

Administrative entry point for the issue history database.

    agilizer-jira reset         drop and recreate the issue history tables
    agilizer-jira drop-tables   drop the issue history tables

The target database is selected by `database.url` in config.yaml or the
`DB_URL` environment variable, and can be overridden with `--db-url`.
"""

import argparse
import sys
from typing import List, Optional

from agilizer_jira.db.store import IssueStore, StoreError
from agilizer_jira.utils.logger import get_logger

logger = get_logger()

# CLI command -> IssueStore method
COMMANDS = {
    "reset": "reset",
    "drop-tables": "drop_tables",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agilizer-jira",
        description="Manage the Jira issue history tables.",
    )
    parser.add_argument(
        "command",
        choices=sorted(COMMANDS),
        help="Operation to run against the database.",
    )
    parser.add_argument(
        "--db-url",
        default=None,
        help="PostgreSQL connection string (defaults to DB_URL / config.yaml).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parses arguments, runs the requested operation and returns the exit code.

    Store errors are logged and turned into exit code 1.
    """
    args = build_parser().parse_args(argv)
    try:
        with IssueStore(dsn=args.db_url) as store:
            getattr(store, COMMANDS[args.command])()
    except StoreError as e:
        logger.critical(f"`{args.command}` failed: {e}")
        return 1

    logger.info(f"`{args.command}` completed successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
