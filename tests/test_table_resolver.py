# ============================================================================
# TABLE RESOLVER TESTS
# ============================================================================
# STATUS: Tests - Type to table resolution
# PURPOSE: Verify table names, primary keys, constraints, triggers and seeds
# CREATED: 18 OCT 2026
# ============================================================================
"""
TableResolver Tests

Run with:
    pytest tests/test_table_resolver.py -v
"""

import pytest

from tablewright.contracts import NamingStrategy, NativeType, TriggerEvent, TriggerTiming
from tablewright.errors import (
    ConflictingPrimaryKeyError,
    InvalidSeedRecordError,
    MultiplePrimaryKeysError,
    UnknownColumnInConstraintError,
    UnknownPrimaryKeyColumnError,
)
from tablewright.metadata import (
    Column,
    DescriptorBuilder,
    Id,
    Ignore,
    Naming,
    PrimaryKey,
    PydanticMetadataProvider,
    Record,
    Reference,
    Table,
    Trigger,
    Unique,
)
from tablewright.schema.table_resolver import TableResolver

from sample_models import Author, Book, Settings


@pytest.fixture
def resolver():
    return TableResolver()


def _book(*table_items):
    """Book type with id/author_id/title columns and the given table items."""
    return (
        DescriptorBuilder("Book")
        .table(Table(), *table_items)
        .field("id", NativeType.INTEGER, Id())
        .field("author_id", NativeType.INTEGER, Column(nullable=False))
        .field("title", NativeType.TEXT, Column(nullable=False, size=120))
        .build()
    )


# ============================================================================
# TABLE MARKER / NAME
# ============================================================================

class TestTableName:
    def test_not_a_table(self, resolver):
        descriptor = DescriptorBuilder("Settings").field("theme", NativeType.TEXT).build()
        assert resolver.resolve(descriptor) is None

    def test_ignored_table(self, resolver):
        descriptor = DescriptorBuilder("Draft").table(Table(), Ignore()).build()
        assert TableResolver.is_table(descriptor) is False
        assert resolver.resolve(descriptor) is None

    def test_name_from_type(self, resolver):
        descriptor = DescriptorBuilder("BookAuthor").table(Table()).build()
        assert resolver.resolve(descriptor).name == "book_author"

    def test_explicit_name(self, resolver):
        descriptor = DescriptorBuilder("BookAuthor").table(Table("credits")).build()
        assert resolver.resolve(descriptor).name == "credits"

    def test_table_naming_strategy_applies_to_table_and_columns(self, resolver):
        descriptor = (
            DescriptorBuilder("BookAuthor")
            .table(Table(), Naming(NamingStrategy.UNDERSCORE_SEPARATED_UPPER_CASE))
            .field("bookId", NativeType.INTEGER, Column(nullable=False))
            .build()
        )
        table = resolver.resolve(descriptor)
        assert table.name == "BOOK_AUTHOR"
        assert table.column_names() == ["BOOK_ID"]

    def test_source_defaults_to_type_name(self, resolver):
        assert resolver.resolve(_book()).source == "Book"

    def test_pydantic_models(self, resolver):
        provider = PydanticMetadataProvider()
        author = resolver.resolve(provider.describe(Author))
        book = resolver.resolve(provider.describe(Book))

        assert author.name == "author"
        assert author.column_names() == ["id", "name", "bio", "updated_at"]
        assert book.column_names() == ["id", "author_id", "title", "genre", "pages"]
        assert resolver.resolve(provider.describe(Settings)) is None


# ============================================================================
# PRIMARY KEY
# ============================================================================

class TestPrimaryKey:
    def test_id_column_is_primary_key(self, resolver):
        assert resolver.resolve(_book()).primary_key_column == "id"

    def test_no_primary_key(self, resolver):
        descriptor = (
            DescriptorBuilder("Log")
            .table(Table())
            .field("message", NativeType.TEXT, Column(nullable=False))
            .build()
        )
        assert resolver.resolve(descriptor).primary_key_column is None

    def test_multiple_primary_keys(self, resolver):
        descriptor = (
            DescriptorBuilder("Pair")
            .table(Table())
            .field("left", NativeType.INTEGER, Id())
            .field("right", NativeType.INTEGER, Id())
            .build()
        )
        with pytest.raises(MultiplePrimaryKeysError) as exc:
            resolver.resolve(descriptor)
        assert exc.value.table == "pair"
        assert exc.value.columns == ["left", "right"]

    def test_table_level_primary_key_promotes_column(self, resolver):
        descriptor = (
            DescriptorBuilder("Country")
            .table(Table(), PrimaryKey("code"))
            .field("code", NativeType.TEXT, Column(size=2), allows_null=True)
            .build()
        )
        table = resolver.resolve(descriptor)
        assert table.primary_key_column == "code"
        code = table.columns["code"]
        assert code.primary is True
        assert code.nullable is False
        assert code.default == ""

    def test_conflicting_primary_key(self, resolver):
        with pytest.raises(ConflictingPrimaryKeyError) as exc:
            resolver.resolve(_book(PrimaryKey("title")))
        assert exc.value.existing == "id"
        assert exc.value.declared == "title"

    def test_unknown_primary_key_column(self, resolver):
        descriptor = (
            DescriptorBuilder("Country")
            .table(Table(), PrimaryKey("iso"))
            .field("code", NativeType.TEXT, Column(nullable=False))
            .build()
        )
        with pytest.raises(UnknownPrimaryKeyColumnError) as exc:
            resolver.resolve(descriptor)
        assert exc.value.column == "iso"


# ============================================================================
# CONSTRAINTS
# ============================================================================

class TestConstraints:
    def test_unique_constraint(self, resolver):
        table = resolver.resolve(_book(Unique("uq_title", ("author_id", "title"))))
        assert table.unique_constraints[0].columns == ("author_id", "title")

    def test_unique_unknown_column(self, resolver):
        with pytest.raises(UnknownColumnInConstraintError) as exc:
            resolver.resolve(_book(Unique("uq_isbn", ("isbn",))))
        assert exc.value.column == "isbn"
        assert "uq_isbn" in exc.value.constraint

    def test_foreign_key(self, resolver):
        table = resolver.resolve(_book(Reference("author_id", "author", "id")))
        assert table.references("author")
        assert table.referenced_tables == ["author"]

    def test_foreign_key_target_not_checked(self, resolver):
        table = resolver.resolve(_book(Reference("author_id", "nowhere", "id")))
        assert table.referenced_tables == ["nowhere"]

    def test_foreign_key_unknown_column(self, resolver):
        with pytest.raises(UnknownColumnInConstraintError) as exc:
            resolver.resolve(_book(Reference("editor_id", "editor", "id")))
        assert exc.value.constraint == "foreign key"

    def test_referenced_tables_distinct(self, resolver):
        descriptor = (
            DescriptorBuilder("Loan")
            .table(
                Table(),
                Reference("lender_id", "member", "id"),
                Reference("borrower_id", "member", "id"),
            )
            .field("lender_id", NativeType.INTEGER, Column(nullable=False))
            .field("borrower_id", NativeType.INTEGER, Column(nullable=False))
            .build()
        )
        table = resolver.resolve(descriptor)
        assert len(table.foreign_keys) == 2
        assert table.referenced_tables == ["member"]


# ============================================================================
# TRIGGERS / RECORDS
# ============================================================================

class TestTriggersAndRecords:
    def test_triggers_collected(self, resolver):
        trigger = Trigger("trim_title", TriggerTiming.BEFORE, TriggerEvent.INSERT, "SET NEW.title = TRIM(NEW.title);")
        table = resolver.resolve(_book(trigger))
        assert table.triggers[0].name == "trim_title"
        assert table.triggers[0].event is TriggerEvent.INSERT

    def test_records_collected(self, resolver):
        table = resolver.resolve(_book(Record(("author_id", "title"), ((1, "Dune"),))))
        assert table.records[0].values == ((1, "Dune"),)

    def test_record_unknown_column(self, resolver):
        with pytest.raises(UnknownColumnInConstraintError) as exc:
            resolver.resolve(_book(Record(("isbn",), (("123",),))))
        assert exc.value.constraint == "seed record"

    def test_record_row_too_long(self, resolver):
        with pytest.raises(InvalidSeedRecordError) as exc:
            resolver.resolve(_book(Record(("title",), (("Dune", "extra"),))))
        assert exc.value.table == "book"


# ============================================================================
# FIELD COLUMNS
# ============================================================================

class TestFieldColumns:
    def test_mapped_fields_only(self, resolver):
        descriptor = PydanticMetadataProvider().describe(Book)
        assert resolver.field_columns(descriptor) == {
            "id": "id",
            "author_id": "author_id",
            "title": "title",
            "genre": "genre",
            "pages": "pages",
        }

    def test_table_naming_strategy(self, resolver):
        descriptor = (
            DescriptorBuilder("Reader")
            .table(Table(), Naming(NamingStrategy.UPPER_CASE))
            .field("displayName", NativeType.TEXT, Column(nullable=False))
            .field("nickName", NativeType.TEXT, Column(name="alias", nullable=False))
            .build()
        )
        assert resolver.field_columns(descriptor) == {"displayName": "DISPLAYNAME", "nickName": "alias"}
