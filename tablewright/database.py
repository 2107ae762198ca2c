# ============================================================================
# DATABASE SESSION
# ============================================================================
# STATUS: Service - Assembly session facade
# PURPOSE: Register types, compile and apply the schema, read and write records
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: Database
# ============================================================================
"""
Database - one schema assembly session.

Flow:
    db = Database(gateway=DbApiGateway(connection))
    db.add_tables(Author, Book)          # describe -> resolve -> register
    print(db.export_schema())            # compile once, render
    result = db.make_and_apply_schema()  # compile once, apply in a transaction
    authors = db.read_records(Author, "`name` = %s", ("Le Guin",))

Types are passed explicitly; nothing is discovered by scanning modules.
Once the schema is generated the session's registry is sealed and no
further tables can be added.
"""

import uuid
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from tablewright.config.defaults import SchemaDefaults, get_defaults
from tablewright.contracts import RenderMode
from tablewright.converters import ValueConverter
from tablewright.errors import RecordReadError, UnknownColumnError
from tablewright.infrastructure.exporter import ApplyResult, SchemaExporter
from tablewright.infrastructure.gateway import Gateway, RequestResult
from tablewright.logging import ComponentType, get_logger, log_context
from tablewright.metadata.descriptors import MetadataProvider, TypeDescriptor
from tablewright.metadata.pydantic_provider import PydanticMetadataProvider
from tablewright.models.table import TableDefinition
from tablewright.schema.column_resolver import ColumnResolver
from tablewright.schema.compiler import Schema, SchemaCompiler
from tablewright.schema.ddl_utils import RecordBuilder, TableBuilder
from tablewright.schema.registry import Registry
from tablewright.schema.table_resolver import TableResolver

logger = get_logger(__name__, ComponentType.SESSION)


def _source_key(source: Any) -> str:
    if isinstance(source, TypeDescriptor):
        return source.source or source.name
    if isinstance(source, type):
        return f"{source.__module__}.{source.__qualname__}"
    return str(source)


class Database:
    """
    Schema assembly session.

    Args:
        gateway: Statement executor; only needed to apply or insert
        provider: Metadata provider for non-descriptor types
                  (default: PydanticMetadataProvider)
        defaults: Session defaults (default: get_defaults(), from env)
    """

    def __init__(
        self,
        gateway: Optional[Gateway] = None,
        provider: Optional[MetadataProvider] = None,
        defaults: Optional[SchemaDefaults] = None,
    ):
        self.gateway = gateway
        self.provider = provider or PydanticMetadataProvider()
        self.defaults = defaults or get_defaults()
        self.session_id = uuid.uuid4().hex[:8]

        self.registry = Registry()
        self.resolver = TableResolver(ColumnResolver(self.defaults.naming_strategy))
        self.compiler = SchemaCompiler(defer_foreign_keys=self.defaults.defer_foreign_keys)
        self.converter = ValueConverter()

        self._sources: Dict[str, str] = {}
        self._field_columns: Dict[str, Dict[str, str]] = {}
        self._schema: Optional[Schema] = None

    # ========================================================================
    # REGISTRATION
    # ========================================================================

    def add_tables(self, *types: Any) -> List[TableDefinition]:
        """
        Describe, resolve and register each type in order.

        Types without a table marker are skipped. The first error aborts
        the call; tables registered before it stay registered.

        Returns:
            The TableDefinitions registered by this call
        """
        registered: List[TableDefinition] = []

        with log_context(session_id=self.session_id, operation="add_tables"):
            for source in types:
                descriptor = source if isinstance(source, TypeDescriptor) else self.provider.describe(source)
                table = self.resolver.resolve(descriptor)
                if table is None:
                    continue

                with log_context(table=table.name):
                    self.registry.register(table)
                    self._sources[_source_key(source)] = table.name
                    self._field_columns[table.name] = self.resolver.field_columns(descriptor)
                    registered.append(table)
                    logger.debug(f"Registered {descriptor.name} as {table.name}")

            logger.info(f"Registered {len(registered)} tables ({len(self.registry)} total)")

        return registered

    def find_table(self, type_or_name: Union[str, Any]) -> Optional[TableDefinition]:
        """Look a table up by table name, model class or descriptor."""
        if isinstance(type_or_name, str):
            table = self.registry.lookup(type_or_name)
            if table is not None:
                return table
        name = self._sources.get(_source_key(type_or_name))
        return self.registry.lookup(name) if name is not None else None

    # ========================================================================
    # SCHEMA
    # ========================================================================

    def generate_schema(self) -> Schema:
        """Compile the registry (once) and return the Schema."""
        if self._schema is None:
            with log_context(session_id=self.session_id):
                self._schema = self.compiler.compile(self.registry)
        return self._schema

    def exporter(self) -> SchemaExporter:
        return SchemaExporter(self.generate_schema())

    def export_schema(
        self,
        mode: Optional[RenderMode] = None,
        insert_records: Optional[bool] = None,
        pure: bool = True,
    ) -> str:
        """Render the full script; unset arguments come from the session defaults."""
        return self.exporter().export_schema(
            mode or self.defaults.render_mode,
            self.defaults.insert_records if insert_records is None else insert_records,
            pure,
        )

    def make_and_apply_schema(self, mode: Optional[RenderMode] = None) -> ApplyResult:
        """Compile and apply the schema through the session gateway."""
        gateway = self._require_gateway()
        with log_context(session_id=self.session_id):
            return self.exporter().apply(gateway, mode or self.defaults.render_mode)

    # ========================================================================
    # RECORDS
    # ========================================================================

    def insert_record(
        self,
        table: Union[str, Any],
        values: Mapping[str, Any],
        ignore_duplicates: bool = True,
    ) -> RequestResult:
        """
        Insert one row with bound parameters.

        Args:
            table: Table name, model class or descriptor
            values: Column name -> value
            ignore_duplicates: Use INSERT IGNORE

        Raises:
            KeyError: table is not registered in this session
            UnknownColumnError: a key is not a column of the table
        """
        gateway = self._require_gateway()
        definition = self._require_table(table)
        params = self._wire_values(definition, values)

        statement = RecordBuilder.parameterized_insert(
            definition.name, list(values.keys()), ignore=ignore_duplicates
        )

        with log_context(session_id=self.session_id, table=definition.name, operation="insert"):
            result = gateway.execute(statement, params)
            result.close()
            if not result.success:
                logger.warning(f"Insert into {definition.name} failed: {result.error}")
            return result

    def update_record(
        self,
        table: Union[str, Any],
        values: Mapping[str, Any],
        where_column: str,
    ) -> RequestResult:
        """
        Update the rows whose where_column equals values[where_column].

        Every other key of values is written.

        Raises:
            KeyError: table is not registered in this session
            UnknownColumnError: a key or where_column is not a column of the table
            ValueError: values has no entry for where_column, or nothing else to set
        """
        gateway = self._require_gateway()
        definition = self._require_table(table)
        if where_column not in definition.columns:
            raise UnknownColumnError(definition.name, where_column)
        if where_column not in values:
            raise ValueError(f"No value given for where column '{where_column}'")

        assigned = {k: v for k, v in values.items() if k != where_column}
        if not assigned:
            raise ValueError(f"Nothing to update in {definition.name}")

        params = self._wire_values(definition, assigned)
        params.append(self.converter.to_wire(definition.columns[where_column], values[where_column]))
        statement = RecordBuilder.parameterized_update(
            definition.name, list(assigned.keys()), where_column
        )

        with log_context(session_id=self.session_id, table=definition.name, operation="update"):
            result = gateway.execute(statement, params)
            result.close()
            if not result.success:
                logger.warning(f"Update of {definition.name} failed: {result.error}")
            return result

    def read_records(
        self,
        model: Any,
        where: str = "",
        params: Sequence[Any] = (),
    ) -> List[Any]:
        """
        Read rows of a registered table back into model instances.

        Args:
            model: Registered model class (or descriptor, which yields dicts)
            where: Condition appended after WHERE, with %s placeholders
            params: Values bound to the placeholders in where

        Returns:
            One instance per row (model.model_validate), keyed by field name

        Raises:
            KeyError: model is not registered in this session
            RecordReadError: the SELECT failed
        """
        gateway = self._require_gateway()
        definition = self._require_table(model)
        field_names = {
            column: field for field, column in self._field_columns.get(definition.name, {}).items()
        }

        columns = list(definition.columns.keys())
        statement = RecordBuilder.select(definition.name, columns, where)

        with log_context(session_id=self.session_id, table=definition.name, operation="read"):
            result = gateway.execute(statement, params)
            if not result.success:
                raise RecordReadError(definition.name, result.error)
            rows = result.fetch_all()

            records = []
            for row in rows:
                data = {
                    field_names.get(name, name): self.converter.from_wire(definition.columns[name], value)
                    for name, value in zip(columns, row)
                }
                records.append(data if isinstance(model, TypeDescriptor) else model.model_validate(data))

            logger.debug(f"Read {len(records)} rows from {definition.name}")
            return records

    # ========================================================================
    # TABLES
    # ========================================================================

    def table_exists(self, table: Union[str, Any]) -> bool:
        """
        Whether the table exists in the connection's current database.

        Registered model classes and descriptors resolve to their table
        name; any other string is looked up as given.
        """
        gateway = self._require_gateway()
        definition = self.find_table(table)
        name = definition.name if definition is not None else table
        if not isinstance(name, str):
            raise KeyError(f"No registered table for {_source_key(table)!r}")

        result = gateway.execute(TableBuilder.table_exists_query(), (name,))
        if not result.success:
            logger.warning(f"Existence check for {name} failed: {result.error}")
        return len(result.fetch_all()) > 0

    def truncate_table(self, table: Union[str, Any]) -> RequestResult:
        """Delete every row of a registered table."""
        gateway = self._require_gateway()
        definition = self._require_table(table)

        with log_context(session_id=self.session_id, table=definition.name, operation="truncate"):
            result = gateway.execute(TableBuilder.truncate_table(definition.name))
            result.close()
            if result.success:
                logger.info(f"Truncated {definition.name}")
            else:
                logger.warning(f"Truncate of {definition.name} failed: {result.error}")
            return result

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _wire_values(self, definition: TableDefinition, values: Mapping[str, Any]) -> List[Any]:
        params = []
        for name, value in values.items():
            column = definition.columns.get(name)
            if column is None:
                raise UnknownColumnError(definition.name, name)
            params.append(self.converter.to_wire(column, value))
        return params

    def _require_table(self, table: Union[str, Any]) -> TableDefinition:
        definition = self.find_table(table)
        if definition is None:
            raise KeyError(f"No registered table for {_source_key(table)!r}")
        return definition

    def _require_gateway(self) -> Gateway:
        if self.gateway is None:
            raise RuntimeError("Database session has no gateway configured")
        return self.gateway


__all__ = ["Database"]
