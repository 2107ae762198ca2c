# ============================================================================
# METADATA ITEMS
# ============================================================================
# STATUS: Core - Declarative table/column metadata
# PURPOSE: Tagged metadata items attached to model types and fields
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: MetadataItem, Table, Ignore, Column, Id, PrimaryKey, AutoIncrement,
#          Unique, Reference, Trigger, Record, Naming, SqlType,
#          EnumSetValues, DefaultsTo, Unsigned, Zerofill, UpdateTimestamp
# DEPENDENCIES: pydantic, annotated_types
# ============================================================================
"""
Metadata Items

Each item is a small frozen pydantic dataclass tagged with a MetadataKind.
Items marked repeatable may appear several times on one type (multiple
unique constraints, foreign keys, triggers, seed records); every other
kind is singular per type or field.

Items are pydantic dataclasses rather than BaseModels so they can sit inside
Annotated[...] on a pydantic model field without being mistaken for a
schema override.

Type-level usage:
    __sql_metadata__: ClassVar[list] = [
        Table("book"),
        Reference("author_id", "author", "id"),
    ]

Field-level usage:
    author_id: Annotated[int, Column(nullable=False), Unsigned()]
"""

from typing import Annotated, Any, ClassVar, Optional, Tuple

from annotated_types import MinLen
from pydantic import field_validator
from pydantic.dataclasses import dataclass

from tablewright.contracts import MetadataKind, NamingStrategy, TriggerEvent, TriggerTiming


@dataclass(frozen=True)
class MetadataItem:
    """Base for all metadata items."""

    kind: ClassVar[MetadataKind]
    repeatable: ClassVar[bool] = False


# ============================================================================
# MARKERS
# ============================================================================

@dataclass(frozen=True)
class Table(MetadataItem):
    """Marks a type as mapped to a table. Empty name = derive from type name."""
    kind: ClassVar[MetadataKind] = MetadataKind.TABLE

    name: str = ""


@dataclass(frozen=True)
class Ignore(MetadataItem):
    """Excludes a type or field from mapping."""
    kind: ClassVar[MetadataKind] = MetadataKind.IGNORE


@dataclass(frozen=True)
class Column(MetadataItem):
    """
    Marks a field as mapped to a column.

    precision and size use -1 for "unset".
    """
    kind: ClassVar[MetadataKind] = MetadataKind.COLUMN

    name: str = ""
    nullable: bool = True
    unique: bool = False
    precision: int = -1
    size: int = -1


@dataclass(frozen=True)
class Id(MetadataItem):
    """Primary key column: non-nullable, unique, auto-increment by default."""
    kind: ClassVar[MetadataKind] = MetadataKind.ID

    name: str = ""
    auto_increment: bool = True
    precision: int = -1
    size: int = -1

    # Id columns are never nullable and always unique
    nullable: ClassVar[bool] = False
    unique: ClassVar[bool] = True


@dataclass(frozen=True)
class PrimaryKey(MetadataItem):
    """
    Primary key declaration.

    On a field it marks that field's column as the primary key. On a type it
    names the primary key column and must not be combined with a primary
    column.
    """
    kind: ClassVar[MetadataKind] = MetadataKind.PRIMARY_KEY

    column: Optional[str] = None


@dataclass(frozen=True)
class AutoIncrement(MetadataItem):
    kind: ClassVar[MetadataKind] = MetadataKind.AUTO_INCREMENT


# ============================================================================
# TABLE CONSTRAINTS (repeatable)
# ============================================================================

@dataclass(frozen=True)
class Unique(MetadataItem):
    """Named multi-column unique constraint."""
    kind: ClassVar[MetadataKind] = MetadataKind.UNIQUE
    repeatable: ClassVar[bool] = True

    name: str
    columns: Annotated[Tuple[str, ...], MinLen(1)]


@dataclass(frozen=True)
class Reference(MetadataItem):
    """Foreign key from `column` to `table`(`reference_column`)."""
    kind: ClassVar[MetadataKind] = MetadataKind.REFERENCE
    repeatable: ClassVar[bool] = True

    column: str
    table: str
    reference_column: str


@dataclass(frozen=True)
class Trigger(MetadataItem):
    kind: ClassVar[MetadataKind] = MetadataKind.TRIGGER
    repeatable: ClassVar[bool] = True

    name: str
    timing: TriggerTiming
    event: TriggerEvent
    body: str


@dataclass(frozen=True)
class Record(MetadataItem):
    """
    Seed rows inserted when the table is created.

    Rows shorter than `columns` are padded from the column defaults.
    A value of the form "{query: <expr>}" is emitted as raw SQL.
    """
    kind: ClassVar[MetadataKind] = MetadataKind.RECORD
    repeatable: ClassVar[bool] = True

    columns: Annotated[Tuple[str, ...], MinLen(1)]
    values: Tuple[Tuple[Any, ...], ...] = ()


# ============================================================================
# MODIFIERS
# ============================================================================

@dataclass(frozen=True)
class Naming(MetadataItem):
    """Naming strategy override for a type (all its columns) or one field."""
    kind: ClassVar[MetadataKind] = MetadataKind.NAMING_STRATEGY

    strategy: NamingStrategy


@dataclass(frozen=True)
class SqlType(MetadataItem):
    """Explicit SQL type, bypassing native type inference."""
    kind: ClassVar[MetadataKind] = MetadataKind.TYPE

    type: str

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("SQL type must not be empty")
        return v


@dataclass(frozen=True)
class EnumSetValues(MetadataItem):
    kind: ClassVar[MetadataKind] = MetadataKind.ENUM_SET_VALUES

    values: Tuple[str, ...]


@dataclass(frozen=True)
class DefaultsTo(MetadataItem):
    """Raw default expression, emitted verbatim after DEFAULT."""
    kind: ClassVar[MetadataKind] = MetadataKind.DEFAULT

    value: str


@dataclass(frozen=True)
class Unsigned(MetadataItem):
    kind: ClassVar[MetadataKind] = MetadataKind.UNSIGNED


@dataclass(frozen=True)
class Zerofill(MetadataItem):
    kind: ClassVar[MetadataKind] = MetadataKind.ZEROFILL


@dataclass(frozen=True)
class UpdateTimestamp(MetadataItem):
    """Refresh the column with CURRENT_TIMESTAMP on every row update."""
    kind: ClassVar[MetadataKind] = MetadataKind.UPDATE_TIMESTAMP


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "MetadataItem",
    "Table",
    "Ignore",
    "Column",
    "Id",
    "PrimaryKey",
    "AutoIncrement",
    "Unique",
    "Reference",
    "Trigger",
    "Record",
    "Naming",
    "SqlType",
    "EnumSetValues",
    "DefaultsTo",
    "Unsigned",
    "Zerofill",
    "UpdateTimestamp",
]
