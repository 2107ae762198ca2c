# ============================================================================
# SCHEMA ERRORS
# ============================================================================
# STATUS: Foundation - Resolution and validation error taxonomy
# PURPOSE: Exceptions raised while resolving, registering and compiling tables
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Schema error taxonomy.

Every error here is a resolution or validation failure. They are raised
synchronously where the problem is detected and abort the current step,
so a table is never left half-registered.

Statement execution failures are NOT part of this taxonomy: the gateway
reports them as results (see infrastructure.gateway.RequestResult).
"""

from typing import Iterable, Optional


class SchemaError(Exception):
    """Base class for all tablewright resolution/validation errors."""


# ============================================================================
# METADATA
# ============================================================================

class DuplicateMetadataItemError(SchemaError):
    """A non-repeatable metadata item was declared more than once."""

    def __init__(self, owner: str, kind: str):
        self.owner = owner
        self.kind = kind
        super().__init__(f"Metadata '{kind}' declared more than once on '{owner}'")


class UnsupportedNamingStrategyError(SchemaError):
    def __init__(self, strategy):
        self.strategy = strategy
        super().__init__(f"Unsupported naming strategy: {strategy!r}")


# ============================================================================
# COLUMNS
# ============================================================================

class DuplicateColumnError(SchemaError):
    def __init__(self, column: str, owner: Optional[str] = None):
        self.column = column
        self.owner = owner
        where = f" in '{owner}'" if owner else ""
        super().__init__(f"Found duplicate column definition '{column}'{where}")


class UnmappableNativeTypeError(SchemaError):
    """The field's native type has no inferred SQL type."""

    def __init__(self, field: str, type_name: str):
        self.field = field
        self.type_name = type_name
        super().__init__(
            f"Unable to deduce an SQL type from native type '{type_name}' of field "
            f"'{field}', please qualify the field with an explicit SqlType"
        )


class NonNullableMismatchError(SchemaError):
    """Column is declared nullable but the field cannot hold an absent value."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Field '{field}' is not nullable even though its column is")


class InvalidColumnModifierError(SchemaError):
    def __init__(self, column: str, modifier: str, sql_type: str):
        self.column = column
        self.modifier = modifier
        self.sql_type = sql_type
        super().__init__(f"Column '{column}' of type {sql_type} does not support {modifier}")


class UnknownColumnError(SchemaError):
    """A statement refers to a column the table does not have."""

    def __init__(self, table: str, column: str):
        self.table = table
        self.column = column
        super().__init__(f"No column named '{column}' in table '{table}'")


class UnconvertibleValueError(SchemaError):
    """A temporal value was bound to a column with no temporal wire format."""

    def __init__(self, column: str, sql_type: str):
        self.column = column
        self.sql_type = sql_type
        super().__init__(
            f"Column '{column}' of type {sql_type} is not convertible to or from a "
            f"date/time value"
        )


# ============================================================================
# TABLES
# ============================================================================

class MultiplePrimaryKeysError(SchemaError):
    def __init__(self, table: str, columns: Iterable[str]):
        self.table = table
        self.columns = list(columns)
        super().__init__(
            f"Invalid column constraint on '{table}': multiple primary keys are not "
            f"supported ({', '.join(self.columns)})"
        )


class ConflictingPrimaryKeyError(SchemaError):
    """A table-level primary key was declared while a column already is one."""

    def __init__(self, table: str, existing: str, declared: str):
        self.table = table
        self.existing = existing
        self.declared = declared
        super().__init__(
            f"Invalid table constraint on '{table}': column '{existing}' is already "
            f"the primary key, cannot also declare '{declared}'"
        )


class UnknownPrimaryKeyColumnError(SchemaError):
    def __init__(self, table: str, column: str):
        self.table = table
        self.column = column
        super().__init__(
            f"Invalid table constraint: cannot set primary key '{column}' on '{table}', "
            f"table has no such column"
        )


class UnknownColumnInConstraintError(SchemaError):
    """A unique constraint, foreign key or seed record names a missing column."""

    def __init__(self, table: str, constraint: str, column: str):
        self.table = table
        self.constraint = constraint
        self.column = column
        super().__init__(
            f"Cannot apply {constraint} to table '{table}', there is no column "
            f"such as '{column}'"
        )


class InvalidSeedRecordError(SchemaError):
    def __init__(self, table: str, message: str):
        self.table = table
        super().__init__(f"Invalid seed record for table '{table}': {message}")


# ============================================================================
# REGISTRY / COMPILER
# ============================================================================

class DuplicateTableError(SchemaError):
    def __init__(self, table: str, existing_source: Optional[str] = None):
        self.table = table
        self.existing_source = existing_source
        detail = f" ({existing_source})" if existing_source else ""
        super().__init__(
            f"Couldn't register table '{table}' because it was already registered "
            f"before{detail}"
        )


class CircularForeignKeyError(SchemaError):
    """
    Tables reference each other through foreign keys.

    Raised by the registry for direct pairs and by the compiler for any
    longer cycle it cannot order.
    """

    def __init__(self, tables: Iterable[str]):
        self.tables = list(tables)
        if len(self.tables) == 2:
            message = (
                f"Table '{self.tables[0]}' and '{self.tables[1]}' reference each other, "
                f"circular foreign keys are not allowed"
            )
        else:
            message = (
                f"Tables {', '.join(repr(t) for t in self.tables)} form a foreign key "
                f"cycle and cannot be ordered"
            )
        super().__init__(message)


class RegistrySealedError(SchemaError):
    def __init__(self, table: str):
        self.table = table
        super().__init__(
            f"Cannot register table '{table}': registry was already compiled"
        )


# ============================================================================
# RECORDS
# ============================================================================

class RecordReadError(SchemaError):
    """A record read failed at the database."""

    def __init__(self, table: str, error: Optional[str]):
        self.table = table
        self.error = error
        super().__init__(f"Reading '{table}' failed: {error}")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "SchemaError",
    "DuplicateMetadataItemError",
    "UnsupportedNamingStrategyError",
    "DuplicateColumnError",
    "UnmappableNativeTypeError",
    "NonNullableMismatchError",
    "InvalidColumnModifierError",
    "UnknownColumnError",
    "UnconvertibleValueError",
    "MultiplePrimaryKeysError",
    "ConflictingPrimaryKeyError",
    "UnknownPrimaryKeyColumnError",
    "UnknownColumnInConstraintError",
    "InvalidSeedRecordError",
    "DuplicateTableError",
    "CircularForeignKeyError",
    "RegistrySealedError",
    "RecordReadError",
]
