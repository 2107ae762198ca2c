# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums shared by every layer
# PURPOSE: Define naming, typing, trigger and rendering enums
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: NamingStrategy, NativeType, MetadataKind, TriggerTiming,
#          TriggerEvent, RenderMode
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for tablewright.

These enums cross every boundary of the engine:
- Metadata (what a model declares)
- Resolution (how names and types are derived)
- Rendering (how the compiled schema is written out)
"""

from enum import Enum, IntEnum


# ============================================================================
# NAMING
# ============================================================================

class NamingStrategy(str, Enum):
    """
    Strategies for turning an identifier into a table or column name.

    Examples for the identifier "BookAuthor":
        RAW                             -> BookAuthor
        KEBAB_CASE                      -> book-author
        LOWER_CASE                      -> bookauthor
        UPPER_CASE                      -> BOOKAUTHOR
        UNDERSCORE_SEPARATED_LOWER_CASE -> book_author
        UNDERSCORE_SEPARATED_UPPER_CASE -> BOOK_AUTHOR
    """
    RAW = "raw"
    KEBAB_CASE = "kebab_case"
    LOWER_CASE = "lower_case"
    UPPER_CASE = "upper_case"
    UNDERSCORE_SEPARATED_LOWER_CASE = "underscore_separated_lower_case"
    UNDERSCORE_SEPARATED_UPPER_CASE = "underscore_separated_upper_case"


# ============================================================================
# NATIVE TYPES
# ============================================================================

class NativeType(str, Enum):
    """
    Native value categories a field can carry.

    Providers classify a field once; resolvers only ever see this enum.
    """
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    LIST = "list"
    OTHER = "other"


# ============================================================================
# METADATA KINDS
# ============================================================================

class MetadataKind(str, Enum):
    """Tag carried by every metadata item."""
    TABLE = "table"
    IGNORE = "ignore"
    COLUMN = "column"
    ID = "id"
    PRIMARY_KEY = "primary_key"
    AUTO_INCREMENT = "auto_increment"
    UNIQUE = "unique"
    REFERENCE = "reference"
    TRIGGER = "trigger"
    RECORD = "record"
    NAMING_STRATEGY = "naming_strategy"
    TYPE = "type"
    ENUM_SET_VALUES = "enum_set_values"
    DEFAULT = "default"
    UNSIGNED = "unsigned"
    ZEROFILL = "zerofill"
    UPDATE_TIMESTAMP = "update_timestamp"


# ============================================================================
# TRIGGERS
# ============================================================================

class TriggerTiming(IntEnum):
    """When a trigger fires relative to its event."""
    BEFORE = 0
    AFTER = 1


class TriggerEvent(IntEnum):
    """Row event a trigger fires on."""
    INSERT = 0
    UPDATE = 1
    DELETE = 2


# ============================================================================
# RENDERING
# ============================================================================

class RenderMode(str, Enum):
    """
    How compiled statements treat objects that already exist.

    STRICT:   plain CREATE/INSERT, fails on pre-existing objects
    TOLERANT: CREATE TABLE IF NOT EXISTS, DROP TRIGGER IF EXISTS before
              CREATE TRIGGER, INSERT IGNORE
    """
    STRICT = "strict"
    TOLERANT = "tolerant"

    def is_tolerant(self) -> bool:
        return self is RenderMode.TOLERANT


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "NamingStrategy",
    "NativeType",
    "MetadataKind",
    "TriggerTiming",
    "TriggerEvent",
    "RenderMode",
]
