# ============================================================================
# SCHEMA COMPILER TESTS
# ============================================================================
# STATUS: Tests - Emission order and fragments
# PURPOSE: Verify dependency ordering, cycle failure and rendered DDL
# CREATED: 18 OCT 2026
# ============================================================================
"""
SchemaCompiler Tests

Run with:
    pytest tests/test_compiler.py -v
"""

import re

import pytest

from tablewright.contracts import RenderMode
from tablewright.errors import CircularForeignKeyError
from tablewright.metadata import PydanticMetadataProvider
from tablewright.schema.compiler import SchemaCompiler
from tablewright.schema.registry import Registry
from tablewright.schema.table_resolver import TableResolver

from sample_models import AUTHOR_DDL, BOOK_DDL, PUBLISHER_INSERT, Author, Book, Publisher


# ============================================================================
# HELPERS
# ============================================================================

def _registry(*descriptors):
    registry = Registry()
    resolver = TableResolver()
    for descriptor in descriptors:
        registry.register(resolver.resolve(descriptor))
    return registry


def _model_registry(*models):
    provider = PydanticMetadataProvider()
    return _registry(*(provider.describe(m) for m in models))


# ============================================================================
# ORDERING
# ============================================================================

class TestEmissionOrder:
    def test_targets_before_sources(self, table_descriptor):
        registry = _registry(
            table_descriptor("Loan", "book", "member"),
            table_descriptor("Book", "author"),
            table_descriptor("Member"),
            table_descriptor("Author"),
        )
        order = SchemaCompiler().compile(registry).table_order

        assert order.index("author") < order.index("book")
        assert order.index("book") < order.index("loan")
        assert order.index("member") < order.index("loan")

    def test_unreferencing_tables_first_in_registration_order(self, table_descriptor):
        registry = _registry(
            table_descriptor("Book", "author"),
            table_descriptor("Member"),
            table_descriptor("Author"),
        )
        assert SchemaCompiler().compile(registry).table_order == ["member", "author", "book"]

    def test_book_registered_before_author(self):
        registry = _model_registry(Book, Author)
        assert SchemaCompiler().compile(registry).table_order == ["author", "book"]

    def test_chain_registered_backwards(self, table_descriptor):
        registry = _registry(
            table_descriptor("D", "c"),
            table_descriptor("C", "b"),
            table_descriptor("B", "a"),
            table_descriptor("A"),
        )
        assert SchemaCompiler().compile(registry).table_order == ["a", "b", "c", "d"]

    def test_self_reference_does_not_block(self, table_descriptor):
        registry = _registry(table_descriptor("Node", "node"))
        assert SchemaCompiler().compile(registry).table_order == ["node"]

    def test_unregistered_target_does_not_block(self, table_descriptor):
        registry = _registry(table_descriptor("Book", "author"))
        assert SchemaCompiler().compile(registry).table_order == ["book"]

    def test_three_table_cycle_fails_at_compile(self, table_descriptor):
        # Registration only catches direct pairs
        registry = _registry(
            table_descriptor("A", "b"),
            table_descriptor("B", "c"),
            table_descriptor("C", "a"),
        )
        with pytest.raises(CircularForeignKeyError) as exc:
            SchemaCompiler().compile(registry)
        assert sorted(exc.value.tables) == ["a", "b", "c"]
        assert registry.sealed is False

    def test_compile_seals_registry(self, table_descriptor):
        registry = _registry(table_descriptor("Author"))
        SchemaCompiler().compile(registry)
        assert registry.sealed is True


# ============================================================================
# FRAGMENTS
# ============================================================================

class TestFragments:
    def test_create_table_round_trip(self):
        schema = SchemaCompiler().compile(_model_registry(Book, Author))
        author, book = schema.tables

        assert author.create_sql(RenderMode.STRICT) == AUTHOR_DDL
        assert book.create_sql(RenderMode.STRICT) == BOOK_DDL

    def test_rendered_columns_match_definitions(self):
        registry = _model_registry(Author, Book, Publisher)
        tables = {t.name: t for t in registry.all()}
        schema = SchemaCompiler().compile(registry)

        for fragment in schema.tables:
            parsed = re.findall(r"^    `([^`]+)` ([A-Z]+)", fragment.create_sql(), re.MULTILINE)
            expected = [(c.name, c.type) for c in tables[fragment.name].columns.values()]
            assert parsed == expected

    def test_tolerant_rendering_same_schema(self):
        schema = SchemaCompiler().compile(_model_registry(Author))
        fragment = schema.tables[0]

        assert fragment.create_sql(RenderMode.TOLERANT).startswith("CREATE TABLE IF NOT EXISTS `author`")
        assert fragment.create_sql(RenderMode.STRICT) == AUTHOR_DDL

    def test_triggers_and_records(self):
        schema = SchemaCompiler().compile(_model_registry(Author, Book, Publisher))

        assert schema.has_tables
        assert schema.has_triggers
        assert schema.has_records
        assert schema.triggers[0].table_name == "book"
        assert schema.records[0].insert_sql(RenderMode.STRICT) == PUBLISHER_INSERT
        assert schema.records[0].insert_sql(RenderMode.TOLERANT).startswith("INSERT IGNORE INTO")

    def test_no_triggers_or_records(self):
        schema = SchemaCompiler().compile(_model_registry(Author))
        assert not schema.has_triggers
        assert not schema.has_records

    def test_empty_registry(self):
        schema = SchemaCompiler().compile(Registry())
        assert not schema.has_tables
        assert schema.table_order == []

    def test_deferred_foreign_keys(self):
        schema = SchemaCompiler(defer_foreign_keys=True).compile(_model_registry(Author, Book))
        author, book = schema.tables

        assert "FOREIGN KEY" not in book.create_sql()
        assert author.foreign_key_sql() is None
        assert book.foreign_key_sql() == (
            "ALTER TABLE `book`\n"
            "    ADD FOREIGN KEY(`author_id`) REFERENCES `author`(`id`)"
        )

    def test_inline_foreign_keys_have_no_alter(self):
        schema = SchemaCompiler().compile(_model_registry(Author, Book))
        assert schema.tables[1].foreign_key_sql() is None
