# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides session defaults for schema resolution and export.
"""

from tablewright.config.defaults import (
    SchemaDefaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "SchemaDefaults",
    "get_defaults",
    "reset_defaults",
]
