# ============================================================================
# TEST FIXTURES
# ============================================================================
# STATUS: Tests - Shared fixtures
# PURPOSE: Isolated defaults, descriptor helpers and mocked gateways
# CREATED: 18 OCT 2026
# ============================================================================

from unittest.mock import MagicMock

import pytest

from tablewright.config import reset_defaults
from tablewright.contracts import NativeType
from tablewright.infrastructure.gateway import RequestResult
from tablewright.metadata import Column, DescriptorBuilder, Id, Reference, Table

ENV_VARS = (
    "TABLEWRIGHT_NAMING_STRATEGY",
    "TABLEWRIGHT_DEFER_FOREIGN_KEYS",
    "TABLEWRIGHT_RENDER_MODE",
    "TABLEWRIGHT_INSERT_RECORDS",
    "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_defaults(monkeypatch):
    """Every test starts from built-in defaults, not the caller's environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture
def mock_gateway():
    """Gateway whose every statement succeeds."""
    gateway = MagicMock()
    gateway.execute.return_value = RequestResult(success=True)
    return gateway


def make_table_descriptor(name, *references, table_name=None):
    """
    Minimal table type: an Id plus one INT column per reference.

    references are target table names; the referencing column is
    "<target>_id" and points at the target's "id".
    """
    builder = DescriptorBuilder(name).table(Table(table_name or ""))
    builder.field("id", NativeType.INTEGER, Id())
    for target in references:
        column = f"{target}_id"
        builder.field(column, NativeType.INTEGER, Column(nullable=False))
        builder.table(Reference(column, target, "id"))
    return builder.build()


@pytest.fixture
def table_descriptor():
    return make_table_descriptor
