# topmark:header:start
#
#   project      : StructInspect
#   file         : guards.py
#   file_relpath : src/structinspect/config/io/guards.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type guards for values coming out of TOML parsing.

``tomlkit`` documents are unwrapped into plain Python containers before they
reach these helpers, so the guards only check plain ``dict``/``list`` shapes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeGuard

if TYPE_CHECKING:
    from .types import TomlTable


def is_toml_table(obj: object) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping.

    Args:
        obj (object): Value to test.

    Returns:
        TypeGuard[TomlTable]: ``True`` if ``obj`` is a ``dict``.
    """
    return isinstance(obj, dict)


def is_any_list(obj: object) -> TypeGuard[list[Any]]:
    """Type guard for a generic list value (item types are not checked)."""
    return isinstance(obj, list)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Returns a new empty dict if the sub-table is missing or not a mapping.

    Args:
        table (TomlTable): Parent table mapping.
        key (str): Sub-table key.

    Returns:
        TomlTable: The sub-table if present and a mapping, otherwise an empty dict.
    """
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_dotted_table(table: TomlTable, dotted: str) -> TomlTable:
    """Return the sub-table addressed by a dotted path (e.g. ``"tool.structinspect"``)."""
    current: TomlTable = table
    for part in dotted.split("."):
        current = get_table_value(current, part)
    return current


def has_dotted_table(table: TomlTable, dotted: str) -> bool:
    """Return True if a (possibly empty) table exists at the dotted path."""
    current: object = table
    for part in dotted.split("."):
        if not is_toml_table(current) or part not in current:
            return False
        current = current[part]
    return is_toml_table(current)
