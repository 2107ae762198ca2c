# ============================================================================
# VALUE CONVERTERS
# ============================================================================
# STATUS: Core - Python values to and from MySQL wire values
# PURPOSE: Format temporal and SET values for bound statement parameters
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ValueConverter
# ============================================================================
"""
Value conversion between model values and statement parameters.

Temporal wire formats by column type:

    DATETIME, TIMESTAMP   %Y-%m-%d %H:%M:%S[.%f]
    DATE                  %Y-%m-%d
    TIME                  %H:%M:%S[.%f]
    YEAR                  %Y

The fractional part is sent for DATETIME(n)/TIMESTAMP(n)/TIME(n) columns
(precision > 0) and accepted on the way back whenever the server includes it.
SET columns travel as a comma separated string.
"""

from datetime import date, datetime, time
from enum import Enum
from typing import Any

from tablewright.errors import UnconvertibleValueError
from tablewright.models.column import ColumnDefinition
from tablewright.schema.ddl_utils import FRACTIONAL_TIME_TYPES

TEMPORAL_FORMATS = {
    "DATETIME": "%Y-%m-%d %H:%M:%S",
    "TIMESTAMP": "%Y-%m-%d %H:%M:%S",
    "DATE": "%Y-%m-%d",
    "TIME": "%H:%M:%S",
    "YEAR": "%Y",
}

FRACTION_FORMAT = ".%f"

SET_SEPARATOR = ","


class ValueConverter:
    """Stateless conversions keyed on the column's SQL type."""

    @staticmethod
    def to_wire(column: ColumnDefinition, value: Any) -> Any:
        if value is None:
            return None

        if isinstance(value, (datetime, date, time)):
            fmt = TEMPORAL_FORMATS.get(column.type)
            if fmt is None:
                raise UnconvertibleValueError(column.name, column.type)
            if column.type in FRACTIONAL_TIME_TYPES and column.precision > 0:
                fmt += FRACTION_FORMAT
            return value.strftime(fmt)

        if column.type == "SET" and isinstance(value, (list, tuple, set, frozenset)):
            items = [v.value if isinstance(v, Enum) else v for v in value]
            return SET_SEPARATOR.join(str(v) for v in items)

        if isinstance(value, Enum):
            return value.value
        if isinstance(value, bool):
            return int(value)
        return value

    @staticmethod
    def from_wire(column: ColumnDefinition, value: Any) -> Any:
        if value is None:
            return None

        fmt = TEMPORAL_FORMATS.get(column.type)
        if fmt is not None:
            if isinstance(value, (datetime, date, time)):
                return value
            text = str(value)
            if column.type in FRACTIONAL_TIME_TYPES and "." in text:
                fmt += FRACTION_FORMAT
            parsed = datetime.strptime(text, fmt)
            if column.type == "DATE":
                return parsed.date()
            if column.type == "TIME":
                return parsed.time()
            return parsed

        if column.type == "SET" and isinstance(value, str):
            return [v for v in value.split(SET_SEPARATOR) if v]

        return value


__all__ = ["ValueConverter", "TEMPORAL_FORMATS"]
