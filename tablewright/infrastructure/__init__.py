# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - Database boundary
# PURPOSE: Export gateway and exporter
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Infrastructure Module

Everything that leaves the process: rendered scripts and executed statements.
"""

from tablewright.infrastructure.gateway import Gateway, DbApiGateway, RequestResult, connect_mysql
from tablewright.infrastructure.exporter import SchemaExporter, ApplyResult, StepResult

__all__ = [
    # Gateway
    "Gateway",
    "DbApiGateway",
    "RequestResult",
    "connect_mysql",
    # Exporter
    "SchemaExporter",
    "ApplyResult",
    "StepResult",
]
