# ============================================================================
# TABLE REGISTRY
# ============================================================================
# STATUS: Core - Session-scoped collection of resolved tables
# PURPOSE: Reject duplicate tables and direct circular foreign keys
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: Registry
# ============================================================================
"""
Table Registry.

Holds the TableDefinitions of one assembly session keyed by table name.

Lifecycle:
    1. Created empty
    2. Tables registered one at a time (grows monotonically, no removal)
    3. Compiled exactly once by SchemaCompiler, which seals it

The circular reference check is pairwise only: A -> B -> A is rejected
at registration, longer cycles (A -> B -> C -> A) are not. The compiler
detects those when it cannot order the tables.

Single writer: a Registry is not safe for concurrent registration.
"""

import logging
from typing import Dict, Iterator, List, Optional

from tablewright.errors import CircularForeignKeyError, DuplicateTableError, RegistrySealedError
from tablewright.models.table import TableDefinition

logger = logging.getLogger(__name__)


class Registry:
    """Resolved tables keyed by name, in registration order."""

    def __init__(self):
        self._tables: Dict[str, TableDefinition] = {}
        self._sealed = False

    def __len__(self) -> int:
        return len(self._tables)

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __iter__(self) -> Iterator[TableDefinition]:
        return iter(list(self._tables.values()))

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Freeze the registry; called once it has been compiled."""
        self._sealed = True

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def register(self, table: TableDefinition) -> TableDefinition:
        """
        Add a table.

        Raises:
            RegistrySealedError: registry was already compiled
            DuplicateTableError: a table with this name exists
            CircularForeignKeyError: a registered table references this one
                                     while this one references it
        """
        if self._sealed:
            raise RegistrySealedError(table.name)

        existing = self._tables.get(table.name)
        if existing is not None:
            raise DuplicateTableError(table.name, existing.source)

        self._verify_no_circular_references(table)

        self._tables[table.name] = table
        logger.debug(f"Registered table {table.name} ({len(self._tables)} total)")
        return table

    def _verify_no_circular_references(self, table: TableDefinition) -> None:
        for fk in table.foreign_keys:
            referenced = self._tables.get(fk.table)
            if referenced is not None and referenced.references(table.name):
                raise CircularForeignKeyError([table.name, referenced.name])

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    def lookup(self, name: str) -> Optional[TableDefinition]:
        return self._tables.get(name)

    def all(self) -> List[TableDefinition]:
        """All tables in registration order."""
        return list(self._tables.values())

    def names(self) -> List[str]:
        return list(self._tables.keys())


__all__ = ["Registry"]
