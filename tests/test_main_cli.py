"""
tests/test_main_cli.py

Tests for the administrative CLI (src/agilizer_jira/main.py).
"""

from unittest.mock import MagicMock, patch

import pytest

from agilizer_jira.db.store import SchemaError, StoreConnectionError
from agilizer_jira.main import build_parser, main


@pytest.fixture
def mock_store():
    with patch("agilizer_jira.main.IssueStore") as store_class:
        store = MagicMock()
        store_class.return_value.__enter__.return_value = store
        yield store_class, store


class TestArgumentParsing:
    def test_commands(self):
        parser = build_parser()

        assert parser.parse_args(["reset"]).command == "reset"
        assert parser.parse_args(["drop-tables"]).command == "drop-tables"

    def test_unknown_command_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["truncate"])

    def test_db_url_defaults_to_none(self):
        assert build_parser().parse_args(["reset"]).db_url is None


class TestMain:
    def test_reset(self, mock_store):
        store_class, store = mock_store

        assert main(["reset"]) == 0

        store_class.assert_called_once_with(dsn=None)
        store.reset.assert_called_once_with()
        store.drop_tables.assert_not_called()

    def test_drop_tables_with_explicit_url(self, mock_store):
        store_class, store = mock_store

        assert main(["drop-tables", "--db-url", "postgresql://localhost/agilizer"]) == 0

        store_class.assert_called_once_with(dsn="postgresql://localhost/agilizer")
        store.drop_tables.assert_called_once_with()

    def test_schema_error_returns_1(self, mock_store):
        _, store = mock_store
        store.reset.side_effect = SchemaError("reset", "permission denied")

        with patch("agilizer_jira.main.logger") as mock_logger:
            assert main(["reset"]) == 1

        mock_logger.critical.assert_called_once()
        assert "permission denied" in mock_logger.critical.call_args.args[0]

    def test_connection_error_returns_1(self, mock_store):
        store_class, _ = mock_store
        store_class.return_value.__enter__.side_effect = StoreConnectionError("open", "connection refused")

        assert main(["drop-tables"]) == 1
