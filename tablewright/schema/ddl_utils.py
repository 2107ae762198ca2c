# ============================================================================
# DDL UTILITIES
# ============================================================================
# STATUS: Core - DRY utilities for MySQL DDL/DML generation
# PURPOSE: Column, constraint, table, trigger and seed record builders
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ColumnBuilder, ConstraintBuilder, TableBuilder, TriggerBuilder,
#          RecordBuilder, quote_identifier, quote_literal
# ============================================================================
"""
DDL Utilities - Shared SQL Generation Patterns.

All builders are static and return plain MySQL text. Identifiers are
backtick-quoted; literals are single-quoted with embedded quotes doubled.

Usage:
    from tablewright.schema.ddl_utils import ColumnBuilder, TableBuilder

    line = ColumnBuilder.column_sql(column)
    stmt = TableBuilder.create_table(table, if_not_exists=True)
"""

import re
from enum import Enum
from typing import Any, List, Optional, Sequence

from tablewright.contracts import TriggerEvent, TriggerTiming
from tablewright.models.column import NULL_DEFAULT, ColumnDefinition
from tablewright.models.table import (
    ForeignKeyConstraint,
    SeedRecordSet,
    TableDefinition,
    TriggerDefinition,
    UniqueConstraint,
)


# ============================================================================
# TYPE FAMILIES
# ============================================================================

# Types rendered as T(size)
SIZED_TYPES = (
    "CHAR", "VARCHAR", "BINARY", "VARBINARY", "TEXT", "BLOB", "BIT",
    "TINYINT", "SMALLINT", "MEDIUMINT", "INT", "INTEGER", "BIGINT",
)

# Types rendered as T(size,precision)
DECIMAL_TYPES = ("FLOAT", "DOUBLE", "DOUBLE_PRECISION", "DECIMAL", "DEC")

# Types rendered as T(fractional second precision)
FRACTIONAL_TIME_TYPES = ("DATETIME", "TIMESTAMP", "TIME")

# Types rendered with their permitted value list
VALUE_LIST_TYPES = ("ENUM", "SET")

TRIGGER_TIMINGS = {
    TriggerTiming.BEFORE: "BEFORE",
    TriggerTiming.AFTER: "AFTER",
}

TRIGGER_EVENTS = {
    TriggerEvent.INSERT: "INSERT",
    TriggerEvent.UPDATE: "UPDATE",
    TriggerEvent.DELETE: "DELETE",
}

# A seed value of the form {query: <expression>} is inserted unquoted
RAW_EXPRESSION = re.compile(r"\s*\{query:\s*(.*?)\s*\}\s*", re.DOTALL)

INDENT = "    "


def quote_identifier(name: str) -> str:
    """Backtick-quote a table or column name."""
    return "`" + name.replace("`", "``") + "`"


def quote_literal(value: str) -> str:
    """Single-quote a string literal, doubling embedded quotes."""
    return "'" + value.replace("'", "''") + "'"


def _identifier_list(names: Sequence[str]) -> str:
    return ",".join(quote_identifier(n) for n in names)


# ============================================================================
# COLUMN BUILDER
# ============================================================================

class ColumnBuilder:
    """
    Builder for column definitions inside CREATE TABLE.
    """

    @staticmethod
    def type_sql(column: ColumnDefinition) -> str:
        """
        Render the column type with size/precision/value list and modifiers.

        Examples:
            VARCHAR, size 80           -> VARCHAR(80)
            DECIMAL, size 10, prec 2   -> DECIMAL(10,2)
            DATETIME, precision 3      -> DATETIME(3)
            ENUM ('a', 'b')            -> ENUM('a','b')
            INT, unsigned              -> INT UNSIGNED
        """
        base = column.type

        if base in SIZED_TYPES:
            if column.size > -1:
                base = f"{base}({column.size})"
        elif base in DECIMAL_TYPES:
            if column.size > -1 and column.precision > -1:
                base = f"{base}({column.size},{column.precision})"
        elif base in FRACTIONAL_TIME_TYPES:
            if column.precision > -1:
                base = f"{base}({column.precision})"
        elif base in VALUE_LIST_TYPES:
            values = ",".join(quote_literal(v) for v in column.enum_set_values)
            base = f"{base}({values})"

        if column.unsigned:
            base += " UNSIGNED"
        if column.zerofill:
            base += " ZEROFILL"
        return base

    @staticmethod
    def column_sql(column: ColumnDefinition) -> str:
        """
        Render one column line:
        `name` TYPE[ NOT NULL][ DEFAULT d][ AUTO_INCREMENT][ UNIQUE][ PRIMARY KEY][ ON UPDATE ...]
        """
        parts = [quote_identifier(column.name), ColumnBuilder.type_sql(column)]

        if not column.nullable:
            parts.append("NOT NULL")
        if column.has_default:
            parts.append(f"DEFAULT {column.default.strip()}")
        if column.auto_increment:
            parts.append("AUTO_INCREMENT")
        # PRIMARY KEY already implies UNIQUE
        if column.unique and not column.primary:
            parts.append("UNIQUE")
        if column.primary:
            parts.append("PRIMARY KEY")
        if column.update_timestamp:
            parts.append("ON UPDATE CURRENT_TIMESTAMP")

        return " ".join(parts)


# ============================================================================
# CONSTRAINT BUILDER
# ============================================================================

class ConstraintBuilder:
    """
    Builder for table-level constraint elements.
    """

    @staticmethod
    def unique(constraint: UniqueConstraint) -> str:
        """UNIQUE `name`(`a`,`b`)"""
        return f"UNIQUE {quote_identifier(constraint.name)}({_identifier_list(constraint.columns)})"

    @staticmethod
    def foreign_key(constraint: ForeignKeyConstraint) -> str:
        """FOREIGN KEY(`column`) REFERENCES `table`(`reference_column`)"""
        return (
            f"FOREIGN KEY({quote_identifier(constraint.column)}) "
            f"REFERENCES {quote_identifier(constraint.table)}"
            f"({quote_identifier(constraint.reference_column)})"
        )


# ============================================================================
# TABLE BUILDER
# ============================================================================

class TableBuilder:
    """
    Builder for CREATE/ALTER/DROP TABLE statements (without terminator).
    """

    @staticmethod
    def create_table(
        table: TableDefinition,
        if_not_exists: bool = False,
        include_foreign_keys: bool = True,
    ) -> str:
        """
        CREATE TABLE with columns, then unique constraints, then foreign keys.

        Args:
            table: Resolved table
            if_not_exists: Add IF NOT EXISTS
            include_foreign_keys: False when foreign keys are added later
                                  by ALTER TABLE
        """
        elements: List[str] = [ColumnBuilder.column_sql(c) for c in table.columns.values()]
        elements.extend(ConstraintBuilder.unique(u) for u in table.unique_constraints)
        if include_foreign_keys:
            elements.extend(ConstraintBuilder.foreign_key(fk) for fk in table.foreign_keys)

        ignore = "IF NOT EXISTS " if if_not_exists else ""
        body = ",\n".join(INDENT + e for e in elements)
        return f"CREATE TABLE {ignore}{quote_identifier(table.name)}\n(\n{body}\n)"

    @staticmethod
    def add_foreign_keys(table: TableDefinition) -> Optional[str]:
        """ALTER TABLE adding every foreign key, or None if the table has none."""
        if not table.foreign_keys:
            return None
        additions = ",\n".join(
            f"{INDENT}ADD {ConstraintBuilder.foreign_key(fk)}" for fk in table.foreign_keys
        )
        return f"ALTER TABLE {quote_identifier(table.name)}\n{additions}"

    @staticmethod
    def drop_table(name: str, if_exists: bool = True) -> str:
        ignore = "IF EXISTS " if if_exists else ""
        return f"DROP TABLE {ignore}{quote_identifier(name)}"

    @staticmethod
    def truncate_table(name: str) -> str:
        return f"TRUNCATE TABLE {quote_identifier(name)}"

    @staticmethod
    def table_exists_query() -> str:
        """Lookup in the connection's current database; binds the table name."""
        return (
            "SELECT 1 FROM information_schema.tables\n"
            "WHERE table_schema = DATABASE() AND table_name = %s\n"
            "LIMIT 1"
        )


# ============================================================================
# TRIGGER BUILDER
# ============================================================================

class TriggerBuilder:
    """
    Builder for MySQL trigger statements (without delimiter).
    """

    @staticmethod
    def create_trigger(table_name: str, trigger: TriggerDefinition) -> str:
        timing = TRIGGER_TIMINGS[TriggerTiming(trigger.timing)]
        event = TRIGGER_EVENTS[TriggerEvent(trigger.event)]
        return (
            f"CREATE TRIGGER {quote_identifier(trigger.name)}\n"
            f"{timing} {event} ON {quote_identifier(table_name)}\n"
            f"FOR EACH ROW\n"
            f"BEGIN\n"
            f"{trigger.body}\n"
            f"END"
        )

    @staticmethod
    def drop_trigger(name: str) -> str:
        return f"DROP TRIGGER IF EXISTS {quote_identifier(name)}"


# ============================================================================
# RECORD BUILDER
# ============================================================================

class RecordBuilder:
    """
    Builder for seed INSERT statements.

    Value rendering:
        None                 -> NULL
        "{query: NOW()}"     -> (NOW())
        anything else        -> quoted literal ('O''Brien', '42', '1')
    Missing trailing values are taken from the column default.
    """

    @staticmethod
    def value_sql(value: Any) -> str:
        if value is None:
            return NULL_DEFAULT
        if isinstance(value, bool):
            return quote_literal("1" if value else "0")
        if isinstance(value, Enum):
            value = value.value
        text = str(value)
        match = RAW_EXPRESSION.fullmatch(text)
        if match:
            return f"({match.group(1)})"
        return quote_literal(text)

    @staticmethod
    def padding_sql(column: ColumnDefinition) -> str:
        """Value used for a column a seed row leaves out."""
        default = column.default.strip()
        if default == NULL_DEFAULT:
            return NULL_DEFAULT
        if len(default) >= 2 and default.startswith("'") and default.endswith("'"):
            return default
        return quote_literal(default)

    @staticmethod
    def row_sql(table: TableDefinition, columns: Sequence[str], row: Sequence[Any]) -> str:
        values = []
        for index, name in enumerate(columns):
            if index < len(row):
                values.append(RecordBuilder.value_sql(row[index]))
            else:
                values.append(RecordBuilder.padding_sql(table.columns[name]))
        return "(" + ",".join(values) + ")"

    @staticmethod
    def insert(table: TableDefinition, records: SeedRecordSet, ignore: bool = False) -> str:
        rows = f",\n{INDENT}".join(
            RecordBuilder.row_sql(table, records.columns, row) for row in records.values
        )
        keyword = "INSERT IGNORE" if ignore else "INSERT"
        return (
            f"{keyword} INTO {quote_identifier(table.name)}\n"
            f"{INDENT}({_identifier_list(records.columns)})\n"
            f"VALUES\n"
            f"{INDENT}{rows}"
        )

    @staticmethod
    def parameterized_insert(table_name: str, columns: Sequence[str], ignore: bool = False) -> str:
        """INSERT with one %s placeholder per column, for gateway execution."""
        keyword = "INSERT IGNORE" if ignore else "INSERT"
        placeholders = ",".join("%s" for _ in columns)
        return (
            f"{keyword} INTO {quote_identifier(table_name)}\n"
            f"{INDENT}({_identifier_list(columns)})\n"
            f"VALUES\n"
            f"{INDENT}({placeholders})"
        )

    @staticmethod
    def parameterized_update(table_name: str, columns: Sequence[str], where_column: str) -> str:
        """UPDATE setting each column to a %s placeholder; the last parameter binds where_column."""
        assignments = f",\n{INDENT}".join(f"{quote_identifier(c)} = %s" for c in columns)
        return (
            f"UPDATE {quote_identifier(table_name)}\n"
            f"SET\n"
            f"{INDENT}{assignments}\n"
            f"WHERE {quote_identifier(where_column)} = %s"
        )

    @staticmethod
    def select(table_name: str, columns: Sequence[str], where: str = "") -> str:
        """SELECT of the named columns; where is appended verbatim after WHERE."""
        statement = f"SELECT {_identifier_list(columns)}\nFROM {quote_identifier(table_name)}"
        if where.strip():
            statement += f"\nWHERE {where.strip()}"
        return statement


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "SIZED_TYPES",
    "DECIMAL_TYPES",
    "FRACTIONAL_TIME_TYPES",
    "VALUE_LIST_TYPES",
    "TRIGGER_TIMINGS",
    "TRIGGER_EVENTS",
    "quote_identifier",
    "quote_literal",
    "ColumnBuilder",
    "ConstraintBuilder",
    "TableBuilder",
    "TriggerBuilder",
    "RecordBuilder",
]
