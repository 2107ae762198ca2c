# ============================================================================
# TABLE RESOLVER
# ============================================================================
# STATUS: Core - Type metadata to TableDefinition
# PURPOSE: Resolve table name, primary key, constraints, triggers, seed rows
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: TableResolver
# DEPENDENCIES: pydantic
# ============================================================================
"""
Table Resolver.

Turns a TypeDescriptor into a validated TableDefinition:

1. Table marker present and not ignored (else: not a table, returns None)
2. Columns resolved in field order (ColumnResolver)
3. Table name: Table.name, else naming strategy on the type identifier
4. Primary key: at most one primary column; a table-level PrimaryKey
   must name an existing column and must not compete with a primary column
5. Unique constraints and foreign keys: every referenced local column
   must exist (foreign key target tables are NOT checked here)
6. Triggers collected verbatim
7. Seed records: columns must exist, rows must not be longer than columns

Any failure raises before a TableDefinition exists.
"""

import logging
from typing import Dict, List, Optional

from tablewright.contracts import MetadataKind
from tablewright.errors import (
    ConflictingPrimaryKeyError,
    InvalidSeedRecordError,
    MultiplePrimaryKeysError,
    UnknownColumnInConstraintError,
    UnknownPrimaryKeyColumnError,
)
from tablewright.metadata.descriptors import TypeDescriptor
from tablewright.metadata.items import Naming, PrimaryKey, Record, Reference, Table, Trigger, Unique
from tablewright.models.column import ColumnDefinition
from tablewright.models.table import (
    ConstraintSet,
    ForeignKeyConstraint,
    SeedRecordSet,
    TableDefinition,
    TriggerDefinition,
    UniqueConstraint,
)
from tablewright.schema.column_resolver import ColumnResolver
from tablewright.schema.naming import apply_naming_strategy

logger = logging.getLogger(__name__)


class TableResolver:
    """
    Resolve TypeDescriptors into TableDefinitions.

    Usage:
        resolver = TableResolver()
        table = resolver.resolve(descriptor)
        if table is not None:
            registry.register(table)
    """

    def __init__(self, column_resolver: Optional[ColumnResolver] = None):
        self.column_resolver = column_resolver or ColumnResolver()

    @staticmethod
    def is_table(descriptor: TypeDescriptor) -> bool:
        meta = descriptor.metadata
        return meta.has(MetadataKind.TABLE) and not meta.has(MetadataKind.IGNORE)

    # =========================================================================
    # RESOLUTION
    # =========================================================================

    def resolve(self, descriptor: TypeDescriptor) -> Optional[TableDefinition]:
        """
        Resolve a type into a table.

        Returns:
            TableDefinition, or None if the type carries no table marker
        """
        if not self.is_table(descriptor):
            logger.debug(f"{descriptor.name} is not a table, skipping")
            return None

        meta = descriptor.metadata
        naming = meta.get(MetadataKind.NAMING_STRATEGY)
        table_strategy = naming.strategy if isinstance(naming, Naming) else None

        marker = meta.get(MetadataKind.TABLE)
        name = marker.name.strip() if isinstance(marker, Table) else ""
        if not name:
            name = apply_naming_strategy(
                descriptor.name, table_strategy or self.column_resolver.default_strategy
            )

        column_list = self.column_resolver.resolve_all(
            descriptor.fields, table_strategy, owner=name
        )
        columns: Dict[str, ColumnDefinition] = {c.name: c for c in column_list}

        primary_key = self._resolve_primary_key(name, columns, meta.get(MetadataKind.PRIMARY_KEY))
        if primary_key is not None and not columns[primary_key].primary:
            columns[primary_key] = columns[primary_key].as_primary()

        constraints = ConstraintSet(
            unique=tuple(self._resolve_unique(name, columns, meta.get_all(MetadataKind.UNIQUE))),
            reference=tuple(self._resolve_references(name, columns, meta.get_all(MetadataKind.REFERENCE))),
        )

        triggers = tuple(
            TriggerDefinition(name=t.name, timing=t.timing, event=t.event, body=t.body)
            for t in meta.get_all(MetadataKind.TRIGGER)
            if isinstance(t, Trigger)
        )

        records = tuple(self._resolve_records(name, columns, meta.get_all(MetadataKind.RECORD)))

        table = TableDefinition(
            name=name,
            primary_key_column=primary_key,
            columns=columns,
            constraints=constraints,
            triggers=triggers,
            records=records,
            source=descriptor.source or descriptor.name,
        )

        logger.debug(
            f"Resolved {descriptor.name} -> table {name} "
            f"({len(columns)} columns, {len(constraints.reference)} foreign keys)"
        )
        return table

    def field_columns(self, descriptor: TypeDescriptor) -> Dict[str, str]:
        """Field name -> column name for the mapped fields of a type."""
        naming = descriptor.metadata.get(MetadataKind.NAMING_STRATEGY)
        table_strategy = naming.strategy if isinstance(naming, Naming) else None

        mapping: Dict[str, str] = {}
        for field in descriptor.fields:
            column = self.column_resolver.resolve(field, table_strategy)
            if column is not None:
                mapping[field.name] = column.name
        return mapping

    # =========================================================================
    # VALIDATION)
    # =========================================================================

    @staticmethod
    def _resolve_primary_key(
        table: str,
        columns: Dict[str, ColumnDefinition],
        declaration: Optional[PrimaryKey],
    ) -> Optional[str]:
        primaries = [c.name for c in columns.values() if c.primary]
        if len(primaries) > 1:
            raise MultiplePrimaryKeysError(table, primaries)

        primary_key = primaries[0] if primaries else None

        if isinstance(declaration, PrimaryKey):
            declared = (declaration.column or "").strip()
            if primary_key is not None:
                raise ConflictingPrimaryKeyError(table, primary_key, declared)
            if declared not in columns:
                raise UnknownPrimaryKeyColumnError(table, declared)
            primary_key = declared

        return primary_key

    @staticmethod
    def _resolve_unique(
        table: str,
        columns: Dict[str, ColumnDefinition],
        items: List[Unique],
    ) -> List[UniqueConstraint]:
        result = []
        for item in items:
            for column in item.columns:
                if column not in columns:
                    raise UnknownColumnInConstraintError(
                        table, f"unique constraint '{item.name}'", column
                    )
            result.append(UniqueConstraint(name=item.name, columns=item.columns))
        return result

    @staticmethod
    def _resolve_references(
        table: str,
        columns: Dict[str, ColumnDefinition],
        items: List[Reference],
    ) -> List[ForeignKeyConstraint]:
        result = []
        for item in items:
            if item.column not in columns:
                raise UnknownColumnInConstraintError(table, "foreign key", item.column)
            result.append(ForeignKeyConstraint(
                column=item.column,
                table=item.table,
                reference_column=item.reference_column,
            ))
        return result

    @staticmethod
    def _resolve_records(
        table: str,
        columns: Dict[str, ColumnDefinition],
        items: List[Record],
    ) -> List[SeedRecordSet]:
        result = []
        for item in items:
            for column in item.columns:
                if column not in columns:
                    raise UnknownColumnInConstraintError(table, "seed record", column)
            for row in item.values:
                if len(row) > len(item.columns):
                    raise InvalidSeedRecordError(
                        table,
                        f"row has {len(row)} values but only {len(item.columns)} columns",
                    )
            result.append(SeedRecordSet(columns=item.columns, values=item.values))
        return result


__all__ = ["TableResolver"]
