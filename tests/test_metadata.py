# ============================================================================
# METADATA TESTS
# ============================================================================
# STATUS: Tests - Metadata items, descriptors and the pydantic provider
# PURPOSE: Verify item validation, partitioning and model description
# CREATED: 18 OCT 2026
# ============================================================================
"""
Metadata Tests

Covers:
- Item validation (SqlType normalization, non-empty column lists)
- MetadataSet partitioning into singular and repeated kinds
- DescriptorBuilder
- PydanticMetadataProvider: native types, Optional, max_length sizing

Run with:
    pytest tests/test_metadata.py -v
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, List, Optional

import pytest
from pydantic import BaseModel, ValidationError

from tablewright.contracts import MetadataKind, NamingStrategy, NativeType
from tablewright.errors import DuplicateMetadataItemError
from tablewright.metadata import (
    Column,
    DescriptorBuilder,
    Id,
    MetadataSet,
    Naming,
    PydanticMetadataProvider,
    Reference,
    SqlType,
    Table,
    Unique,
    native_type_of,
)

from sample_models import Author, Book, Genre, Settings


# ============================================================================
# ITEMS
# ============================================================================

class TestItems:
    def test_sql_type_normalized(self):
        assert SqlType("  varchar ").type == "VARCHAR"

    def test_sql_type_empty_rejected(self):
        with pytest.raises(ValidationError):
            SqlType("   ")

    def test_unique_needs_columns(self):
        with pytest.raises(ValidationError):
            Unique("uq_empty", ())

    def test_unique_columns_become_tuple(self):
        assert Unique("uq", ["a", "b"]).columns == ("a", "b")

    def test_id_is_non_nullable_and_unique(self):
        marker = Id()
        assert marker.nullable is False
        assert marker.unique is True
        assert marker.auto_increment is True

    def test_column_defaults(self):
        marker = Column()
        assert marker.nullable is True
        assert marker.size == -1
        assert marker.precision == -1


# ============================================================================
# METADATA SET
# ============================================================================

class TestMetadataSet:
    def test_singular_lookup(self):
        meta = MetadataSet("Book", [Table("books")])
        assert meta.has(MetadataKind.TABLE)
        assert meta.get(MetadataKind.TABLE).name == "books"
        assert meta.get(MetadataKind.IGNORE) is None

    def test_duplicate_singular_rejected(self):
        with pytest.raises(DuplicateMetadataItemError) as exc:
            MetadataSet("Book", [Table(), Table("books")])
        assert exc.value.owner == "Book"
        assert exc.value.kind == "table"

    def test_repeated_kept_in_order(self):
        meta = MetadataSet("Book", [
            Reference("author_id", "author", "id"),
            Reference("editor_id", "editor", "id"),
        ])
        assert [r.table for r in meta.get_all(MetadataKind.REFERENCE)] == ["author", "editor"]
        assert meta.get(MetadataKind.REFERENCE) is None

    def test_first_of_prefers_argument_order(self):
        meta = MetadataSet("Book.id", [Column(), Id()])
        assert isinstance(meta.first_of(Id, Column), Id)
        assert isinstance(meta.first_of(Column, Id), Column)

    def test_len(self):
        assert len(MetadataSet("x", [Table(), Unique("u", ("a",))])) == 2


# ============================================================================
# DESCRIPTOR BUILDER
# ============================================================================

class TestDescriptorBuilder:
    def test_build(self):
        descriptor = (
            DescriptorBuilder("Book", source="app.Book")
            .table(Table())
            .field("id", NativeType.INTEGER, Id())
            .field("subtitle", NativeType.TEXT, Column(), allows_null=True)
            .build()
        )
        assert descriptor.name == "Book"
        assert descriptor.source == "app.Book"
        assert [f.name for f in descriptor.fields] == ["id", "subtitle"]
        assert descriptor.fields[1].allows_null is True
        assert descriptor.fields[0].metadata.owner == "Book.id"

    def test_duplicate_field_item_rejected_on_build(self):
        builder = DescriptorBuilder("Book").field("id", NativeType.INTEGER, Column(), Column())
        with pytest.raises(DuplicateMetadataItemError):
            builder.build()


# ============================================================================
# PYDANTIC PROVIDER
# ============================================================================

class TestNativeTypeOf:
    @pytest.mark.parametrize("annotation,expected", [
        (str, NativeType.TEXT),
        (Genre, NativeType.TEXT),
        (int, NativeType.INTEGER),
        (bool, NativeType.BOOLEAN),
        (float, NativeType.FLOAT),
        (Decimal, NativeType.FLOAT),
        (datetime, NativeType.DATETIME),
        (date, NativeType.DATETIME),
        (list, NativeType.LIST),
        (List[str], NativeType.LIST),
        (dict, NativeType.OTHER),
        (bytes, NativeType.OTHER),
    ])
    def test_classification(self, annotation, expected):
        assert native_type_of(annotation) is expected


class TestPydanticMetadataProvider:
    def test_describe_author(self):
        descriptor = PydanticMetadataProvider().describe(Author)

        assert descriptor.name == "Author"
        assert descriptor.source.endswith("sample_models.Author")
        assert descriptor.metadata.has(MetadataKind.TABLE)
        assert [f.name for f in descriptor.fields] == ["id", "name", "bio", "updated_at"]

    def test_optional_allows_null(self):
        fields = {f.name: f for f in PydanticMetadataProvider().describe(Author).fields}
        assert fields["bio"].allows_null is True
        assert fields["bio"].native_type is NativeType.TEXT
        assert fields["name"].allows_null is False
        assert fields["updated_at"].native_type is NativeType.DATETIME

    def test_max_length_sizes_column(self):
        fields = {f.name: f for f in PydanticMetadataProvider().describe(Author).fields}
        assert fields["name"].metadata.get(MetadataKind.COLUMN).size == 80

    def test_explicit_size_wins_over_max_length(self):
        from pydantic import Field

        class Tag(BaseModel):
            __sql_metadata__ = [Table()]
            label: Annotated[str, Column(nullable=False, size=16), Field(max_length=80)] = ""

        field = PydanticMetadataProvider().describe(Tag).fields[0]
        assert field.metadata.get(MetadataKind.COLUMN).size == 16

    def test_repeated_table_items(self):
        meta = PydanticMetadataProvider().describe(Book).metadata
        assert len(meta.get_all(MetadataKind.REFERENCE)) == 1
        assert len(meta.get_all(MetadataKind.UNIQUE)) == 1
        assert len(meta.get_all(MetadataKind.TRIGGER)) == 1

    def test_single_item_metadata(self):
        class Tag(BaseModel):
            __sql_metadata__ = Naming(NamingStrategy.UPPER_CASE)
            label: Optional[str] = None

        meta = PydanticMetadataProvider().describe(Tag).metadata
        assert meta.get(MetadataKind.NAMING_STRATEGY).strategy is NamingStrategy.UPPER_CASE

    def test_model_without_metadata(self):
        descriptor = PydanticMetadataProvider().describe(Settings)
        assert len(descriptor.metadata) == 0

    def test_rejects_non_model(self):
        with pytest.raises(TypeError):
            PydanticMetadataProvider().describe(dict)
