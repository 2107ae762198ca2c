# ============================================================================
# SCHEMA COMPILER
# ============================================================================
# STATUS: Core - Registry to ordered statement fragments
# PURPOSE: Order tables so foreign key targets come first, build fragments
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: SchemaCompiler, Schema, TableFragment, TriggerFragment, RecordFragment
# ============================================================================
"""
Schema Compiler.

Turns a Registry into a Schema: per-table fragments in emission order.

Emission order:
    1. Tables without foreign keys, in registration order
    2. The rest go through a FIFO work-list. A table whose referenced
       tables are all emitted (or are not pending at all) is emitted,
       otherwise it is requeued at the back.

Self-references and references to tables that were never registered do
not hold a table back. A full pass over the work-list without emitting
anything means the remaining tables form a cycle, which raises
CircularForeignKeyError.

Fragments keep structure, not text: the same Schema renders STRICT or
TOLERANT without recompiling.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

from tablewright.contracts import RenderMode
from tablewright.errors import CircularForeignKeyError
from tablewright.logging import ComponentType, get_logger, log_checkpoint, log_context
from tablewright.models.table import SeedRecordSet, TableDefinition, TriggerDefinition
from tablewright.schema.ddl_utils import RecordBuilder, TableBuilder, TriggerBuilder
from tablewright.schema.registry import Registry

logger = get_logger(__name__, ComponentType.COMPILER)


# ============================================================================
# FRAGMENTS
# ============================================================================

@dataclass(frozen=True)
class TableFragment:
    """CREATE TABLE for one table, plus its ALTER TABLE when foreign keys are deferred."""
    table: TableDefinition
    defer_foreign_keys: bool = False

    @property
    def name(self) -> str:
        return self.table.name

    def create_sql(self, mode: RenderMode = RenderMode.STRICT) -> str:
        return TableBuilder.create_table(
            self.table,
            if_not_exists=mode.is_tolerant(),
            include_foreign_keys=not self.defer_foreign_keys,
        )

    def foreign_key_sql(self) -> Optional[str]:
        if not self.defer_foreign_keys:
            return None
        return TableBuilder.add_foreign_keys(self.table)

    def drop_sql(self) -> str:
        return TableBuilder.drop_table(self.table.name, if_exists=True)


@dataclass(frozen=True)
class TriggerFragment:
    table_name: str
    trigger: TriggerDefinition

    @property
    def name(self) -> str:
        return self.trigger.name

    def create_sql(self) -> str:
        return TriggerBuilder.create_trigger(self.table_name, self.trigger)

    def drop_sql(self) -> str:
        return TriggerBuilder.drop_trigger(self.trigger.name)


@dataclass(frozen=True)
class RecordFragment:
    table: TableDefinition
    records: SeedRecordSet

    def insert_sql(self, mode: RenderMode = RenderMode.STRICT) -> str:
        return RecordBuilder.insert(self.table, self.records, ignore=mode.is_tolerant())


# ============================================================================
# SCHEMA
# ============================================================================

@dataclass(frozen=True)
class Schema:
    """Compiled fragments, every tuple in emission order."""
    tables: Tuple[TableFragment, ...] = ()
    triggers: Tuple[TriggerFragment, ...] = ()
    records: Tuple[RecordFragment, ...] = ()

    @property
    def has_tables(self) -> bool:
        return len(self.tables) > 0

    @property
    def has_triggers(self) -> bool:
        return len(self.triggers) > 0

    @property
    def has_records(self) -> bool:
        return len(self.records) > 0

    @property
    def table_order(self) -> List[str]:
        return [fragment.name for fragment in self.tables]


# ============================================================================
# COMPILER
# ============================================================================

class SchemaCompiler:
    """
    Compile a Registry into a Schema.

    Usage:
        schema = SchemaCompiler().compile(registry)
        print(SchemaExporter(schema).export_schema())
    """

    def __init__(self, defer_foreign_keys: bool = False):
        self.defer_foreign_keys = defer_foreign_keys

    def compile(self, registry: Registry) -> Schema:
        """
        Order the registered tables and build their fragments.

        Seals the registry.

        Raises:
            CircularForeignKeyError: tables reference each other in a cycle
                                     the registry did not catch
        """
        with log_context(operation="compile"):
            ordered = self.order_tables(registry.all())

            tables: List[TableFragment] = []
            triggers: List[TriggerFragment] = []
            records: List[RecordFragment] = []

            for table in ordered:
                tables.append(TableFragment(table, self.defer_foreign_keys))
                triggers.extend(TriggerFragment(table.name, t) for t in table.triggers)
                records.extend(RecordFragment(table, r) for r in table.records)

            registry.seal()

            schema = Schema(tuple(tables), tuple(triggers), tuple(records))
            logger.info(
                f"Compiled {len(tables)} tables, {len(triggers)} triggers, "
                f"{len(records)} record sets"
            )
            log_checkpoint("schema_compiled", {"tables": schema.table_order})
            return schema

    @staticmethod
    def order_tables(tables: List[TableDefinition]) -> List[TableDefinition]:
        """Emission order: foreign key targets before the tables referencing them."""
        ordered: List[TableDefinition] = []
        pending: Deque[TableDefinition] = deque()

        for table in tables:
            if table.referenced_tables:
                pending.append(table)
            else:
                ordered.append(table)
                logger.debug(f"Emitting {table.name} (no references)")

        requeued = 0
        while pending:
            table = pending.popleft()
            pending_names = {t.name for t in pending}
            blockers = [
                name for name in table.referenced_tables
                if name != table.name and name in pending_names
            ]

            if blockers:
                pending.append(table)
                requeued += 1
                # Every pending table was requeued once since the last emission
                if requeued >= len(pending):
                    raise CircularForeignKeyError([t.name for t in pending])
                continue

            ordered.append(table)
            requeued = 0
            logger.debug(f"Emitting {table.name}")

        return ordered


__all__ = [
    "SchemaCompiler",
    "Schema",
    "TableFragment",
    "TriggerFragment",
    "RecordFragment",
]
