# ============================================================================
# SCHEMA EXPORTER
# ============================================================================
# STATUS: Infrastructure - Schema rendering and application
# PURPOSE: Render a compiled Schema as MySQL script text or apply it
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: SchemaExporter, ApplyResult, StepResult
# ============================================================================
"""
SchemaExporter - render or apply a compiled Schema.

Script layout (export_schema):
1. CREATE TABLE statements in emission order
2. ALTER TABLE ... ADD FOREIGN KEY (only when foreign keys are deferred)
3. Triggers wrapped in DELIMITER $$ ... DELIMITER ;
4. Seed INSERTs

apply() executes the same statements through a Gateway inside a single
transaction, in the same order, stopping at the first failure.

Usage:
    exporter = SchemaExporter(schema)
    print(exporter.export_schema(RenderMode.TOLERANT, pure=False))

    result = exporter.apply(gateway)
    if not result.success:
        print(result.failed_statement)
"""

import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from tablewright.contracts import RenderMode
from tablewright.infrastructure.gateway import Gateway
from tablewright.logging import ComponentType, get_logger, log_checkpoint, log_context
from tablewright.schema.compiler import Schema

logger = get_logger(__name__, ComponentType.EXPORTER)

STEP_TABLES = "create_tables"
STEP_FOREIGN_KEYS = "add_foreign_keys"
STEP_TRIGGERS = "create_triggers"
STEP_RECORDS = "insert_records"

# Execution order for apply()
STEP_ORDER = (STEP_TABLES, STEP_FOREIGN_KEYS, STEP_TRIGGERS, STEP_RECORDS)

_SECTION_RULE = "#===================================\n"


def _section_header(title: str) -> str:
    label = f"# {title} "
    return _SECTION_RULE + label + "=" * (len(_SECTION_RULE) - 1 - len(label)) + "\n" + _SECTION_RULE


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class StepResult:
    """Result of a single apply step."""
    name: str
    status: str  # 'success', 'failed', 'skipped'
    message: str = ""
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ApplyResult:
    """Complete result of applying a schema."""
    timestamp: str
    mode: str
    success: bool = False
    tables_created: int = 0
    statements_executed: int = 0
    failed_statement: Optional[str] = None
    error: Optional[str] = None
    steps: List[StepResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "mode": self.mode,
            "success": self.success,
            "tables_created": self.tables_created,
            "statements_executed": self.statements_executed,
            "failed_statement": self.failed_statement,
            "error": self.error,
            "steps": [
                {
                    "name": s.name,
                    "status": s.status,
                    "message": s.message,
                    "error": s.error,
                    "details": s.details,
                }
                for s in self.steps
            ],
            "summary": {
                "total_steps": len(self.steps),
                "successful": len([s for s in self.steps if s.status == "success"]),
                "failed": len([s for s in self.steps if s.status == "failed"]),
                "skipped": len([s for s in self.steps if s.status == "skipped"]),
            },
        }


# ============================================================================
# EXPORTER
# ============================================================================

class SchemaExporter:
    """
    Render a compiled Schema in STRICT or TOLERANT mode.

    STRICT fails on objects that already exist; TOLERANT uses
    CREATE TABLE IF NOT EXISTS, DROP TRIGGER IF EXISTS and INSERT IGNORE.
    """

    def __init__(self, schema: Schema):
        self.schema = schema

    # ========================================================================
    # SCRIPT TEXT
    # ========================================================================

    def export_table_schema(self, mode: RenderMode = RenderMode.STRICT) -> str:
        output = ""
        for fragment in self.schema.tables:
            output += fragment.create_sql(mode) + ";\n\n"
        for fragment in self.schema.tables:
            alter = fragment.foreign_key_sql()
            if alter:
                output += alter + ";\n\n"
        return output

    def export_trigger_schema(self, mode: RenderMode = RenderMode.STRICT) -> str:
        output = "DELIMITER $$\n\n"
        for fragment in self.schema.triggers:
            if mode.is_tolerant():
                output += fragment.drop_sql() + "$$\n\n"
            output += fragment.create_sql() + "$$\n\n"
        output += "DELIMITER ;\n\n"
        return output

    def export_record_schema(self, mode: RenderMode = RenderMode.STRICT) -> str:
        output = ""
        for fragment in self.schema.records:
            output += fragment.insert_sql(mode) + ";\n\n"
        return output

    def export_schema(
        self,
        mode: RenderMode = RenderMode.STRICT,
        insert_records: bool = True,
        pure: bool = True,
    ) -> str:
        """
        Full script: tables, then triggers (if any), then records (if any and requested).

        Args:
            mode: STRICT or TOLERANT
            insert_records: Include seed INSERTs
            pure: Omit the generated-at banner and section headers
        """
        output = ""

        if not pure:
            generated = datetime.now(timezone.utc).strftime("%m/%d/%Y %I:%M:%S %p UTC")
            output = (
                "# tablewright Schema Exporter\n"
                f"# Generated: {generated}\n\n"
                + _section_header("Tables")
            )

        output += self.export_table_schema(mode)

        if self.schema.has_triggers:
            if not pure:
                output += _section_header("Triggers")
            output += self.export_trigger_schema(mode)

        if self.schema.has_records and insert_records:
            if not pure:
                output += _section_header("Records")
            output += self.export_record_schema(mode)

        return output

    def export_drop_schema(self) -> str:
        """DROP TABLE IF EXISTS for every table, referencing tables first."""
        output = ""
        for fragment in reversed(self.schema.tables):
            output += fragment.drop_sql() + ";\n\n"
        return output

    # ========================================================================
    # EXECUTABLE STATEMENTS
    # ========================================================================

    def statements(self, mode: RenderMode = RenderMode.STRICT) -> Dict[str, List[str]]:
        """
        Executable statements per step, without terminators or DELIMITER lines.

        Returns:
            Dict keyed by step name, in execution order
        """
        triggers: List[str] = []
        for fragment in self.schema.triggers:
            if mode.is_tolerant():
                triggers.append(fragment.drop_sql())
            triggers.append(fragment.create_sql())

        foreign_keys = [
            alter for alter in (f.foreign_key_sql() for f in self.schema.tables) if alter
        ]

        return {
            STEP_TABLES: [f.create_sql(mode) for f in self.schema.tables],
            STEP_FOREIGN_KEYS: foreign_keys,
            STEP_TRIGGERS: triggers,
            STEP_RECORDS: [f.insert_sql(mode) for f in self.schema.records],
        }

    # ========================================================================
    # APPLY
    # ========================================================================

    def apply(self, gateway: Gateway, mode: RenderMode = RenderMode.TOLERANT) -> ApplyResult:
        """
        Execute the schema through a gateway inside one transaction.

        The first failing (or raising) statement rolls the transaction back; the result
        then carries the failing statement and the driver error.

        Returns:
            ApplyResult with per-step results
        """
        result = ApplyResult(
            timestamp=datetime.now(timezone.utc).isoformat(),
            mode=mode.value,
        )
        plan = self.statements(mode)

        with log_context(operation="apply"):
            logger.info(
                f"Applying schema ({len(self.schema.tables)} tables, mode={mode.value})"
            )

            try:
                gateway.begin_transaction()
            except Exception as e:
                logger.error(f"Could not begin transaction: {e}")
                self._rollback(gateway)
                result.error = str(e)
                return result

            for step_name in STEP_ORDER:
                step = self._run_step(gateway, step_name, plan[step_name], result)
                result.steps.append(step)
                if step.status == "failed":
                    self._rollback(gateway)
                    logger.warning(f"Schema apply failed at {step_name}, rolled back")
                    return result

            try:
                gateway.commit()
            except Exception as e:
                logger.error(f"Commit failed: {e}")
                logger.debug(traceback.format_exc())
                self._rollback(gateway)
                result.error = str(e)
                return result

            result.success = True
            logger.info(
                f"Schema applied: {result.tables_created} tables, "
                f"{result.statements_executed} statements"
            )
            log_checkpoint("schema_applied", {"tables_created": result.tables_created})
            return result

    @staticmethod
    def _run_step(
        gateway: Gateway,
        step_name: str,
        statements: List[str],
        result: ApplyResult,
    ) -> StepResult:
        step = StepResult(name=step_name, status="pending")

        if not statements:
            step.status = "skipped"
            step.message = "Nothing to execute"
            return step

        executed = 0
        statement = ""
        try:
            for statement in statements:
                outcome = gateway.execute(statement)
                outcome.close()
                if not outcome.success:
                    step.status = "failed"
                    step.error = outcome.error
                    step.message = f"Failed after {executed} of {len(statements)} statements"
                    result.failed_statement = statement
                    result.error = outcome.error
                    return step

                executed += 1
                result.statements_executed += 1
                if step_name == STEP_TABLES:
                    result.tables_created += 1

        except Exception as e:
            step.status = "failed"
            step.error = str(e)
            step.message = f"Raised after {executed} of {len(statements)} statements: {e}"
            result.failed_statement = statement
            result.error = str(e)
            logger.error(f"{step_name} failed: {e}")
            logger.debug(traceback.format_exc())
            return step

        step.status = "success"
        step.message = f"Executed {executed} statements"
        step.details = {"statements_executed": executed}
        logger.debug(f"{step_name}: {step.message}")
        return step

    @staticmethod
    def _rollback(gateway: Gateway) -> None:
        try:
            gateway.rollback()
        except Exception as e:
            logger.error(f"Rollback failed: {e}")


__all__ = ["SchemaExporter", "ApplyResult", "StepResult"]
