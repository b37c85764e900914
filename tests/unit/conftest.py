"""Shared fixtures for console-table unit tests."""

import pytest

from console_table import ConsoleTable, WcwidthProvider


@pytest.fixture
def provider() -> WcwidthProvider:
    """Unicode width provider."""
    return WcwidthProvider()


@pytest.fixture
def table() -> ConsoleTable:
    """Empty table with default options."""
    return ConsoleTable()


@pytest.fixture
def scores_table() -> ConsoleTable:
    """Two-column table with a header and two rows."""
    table = ConsoleTable()
    table.set_headers(["Name", "Score"])
    table.add_row(["Alice", "10"])
    table.add_row(["Bob", "7"])
    return table
