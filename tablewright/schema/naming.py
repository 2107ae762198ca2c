# ============================================================================
# NAMING STRATEGIES
# ============================================================================
# STATUS: Core - Identifier to table/column name conversion
# PURPOSE: Apply NamingStrategy rules to type and field identifiers
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: apply_naming_strategy, parse_naming_strategy, DEFAULT_NAMING_STRATEGY
# ============================================================================
"""
Naming strategies are pure functions from an identifier to a name.

Word boundaries are uppercase letters that are not at the start of the
identifier, so "BookAuthor" splits into "Book", "Author" and a field
already in snake_case ("author_id") is left alone by the underscore
strategies.
"""

import re
from typing import Union

from tablewright.contracts import NamingStrategy
from tablewright.errors import UnsupportedNamingStrategyError

DEFAULT_NAMING_STRATEGY = NamingStrategy.UNDERSCORE_SEPARATED_LOWER_CASE

_WORD_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _separate(name: str, separator: str) -> str:
    return _WORD_BOUNDARY.sub(separator, name)


def parse_naming_strategy(value: Union[str, NamingStrategy]) -> NamingStrategy:
    """
    Accept a NamingStrategy, its value ("kebab_case") or its name ("KEBAB_CASE").
    """
    if isinstance(value, NamingStrategy):
        return value
    if isinstance(value, str):
        candidate = value.strip()
        try:
            return NamingStrategy(candidate.lower())
        except ValueError:
            pass
        try:
            return NamingStrategy[candidate.upper()]
        except KeyError:
            pass
    raise UnsupportedNamingStrategyError(value)


def apply_naming_strategy(name: str, strategy: Union[str, NamingStrategy]) -> str:
    """Convert an identifier according to the given strategy."""
    strategy = parse_naming_strategy(strategy)

    if strategy is NamingStrategy.RAW:
        return name
    if strategy is NamingStrategy.KEBAB_CASE:
        return _separate(name, "-").lower()
    if strategy is NamingStrategy.LOWER_CASE:
        return name.lower()
    if strategy is NamingStrategy.UPPER_CASE:
        return name.upper()
    if strategy is NamingStrategy.UNDERSCORE_SEPARATED_LOWER_CASE:
        return _separate(name, "_").lower()
    if strategy is NamingStrategy.UNDERSCORE_SEPARATED_UPPER_CASE:
        return _separate(name, "_").upper()

    raise UnsupportedNamingStrategyError(strategy)


__all__ = ["apply_naming_strategy", "parse_naming_strategy", "DEFAULT_NAMING_STRATEGY"]
