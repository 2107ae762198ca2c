# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for name resolution and schema export
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Session-wide defaults for resolving and exporting a schema.
These can be overridden via environment variables or constructor arguments.

Design:
- Immutable dataclass for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass
from typing import Optional

from tablewright.contracts import NamingStrategy, RenderMode
from tablewright.schema.naming import DEFAULT_NAMING_STRATEGY, parse_naming_strategy

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_render_mode(name: str, default: RenderMode) -> RenderMode:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return RenderMode(raw.strip().lower())
    except ValueError:
        raise ValueError(
            f"{name} must be one of {[m.value for m in RenderMode]}, got {raw!r}"
        )


@dataclass(frozen=True)
class SchemaDefaults:
    """
    Defaults for a schema assembly session.

    naming_strategy:    used when neither a field nor its type names one
    defer_foreign_keys: emit foreign keys as ALTER TABLE after all CREATEs
    render_mode:        STRICT or TOLERANT rendering for export and apply
    insert_records:     include seed INSERTs in exported scripts
    """
    naming_strategy: NamingStrategy = DEFAULT_NAMING_STRATEGY
    defer_foreign_keys: bool = False
    render_mode: RenderMode = RenderMode.TOLERANT
    insert_records: bool = True

    @classmethod
    def from_env(cls) -> "SchemaDefaults":
        """Create from environment variables."""
        return cls(
            naming_strategy=parse_naming_strategy(
                os.getenv("TABLEWRIGHT_NAMING_STRATEGY", DEFAULT_NAMING_STRATEGY.value)
            ),
            defer_foreign_keys=_env_flag("TABLEWRIGHT_DEFER_FOREIGN_KEYS", False),
            render_mode=_env_render_mode("TABLEWRIGHT_RENDER_MODE", RenderMode.TOLERANT),
            insert_records=_env_flag("TABLEWRIGHT_INSERT_RECORDS", True),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

_defaults: Optional[SchemaDefaults] = None


def get_defaults() -> SchemaDefaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = SchemaDefaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "SchemaDefaults",
    "get_defaults",
    "reset_defaults",
]
