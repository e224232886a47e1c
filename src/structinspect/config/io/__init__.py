# topmark:header:start
#
#   project      : StructInspect
#   file         : __init__.py
#   file_relpath : src/structinspect/config/io/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for StructInspect configuration.

Design goals:
    * Minimal side effects: functions **do not** mutate configuration objects.
    * Clear typing: public helpers use the ``TomlTable`` alias and TypeGuards.

TOML parsing/formatting:
    StructInspect uses `tomlkit` for parsing and rendering.

    - `load_toml_dict()` parses on-disk TOML and returns plain dicts.
    - `to_toml()` renders (after stripping TOML-incompatible values like `None`).
"""

from __future__ import annotations

from .getters import get_bool_value, get_bool_value_checked, get_list_value
from .guards import get_dotted_table, get_table_value, has_dotted_table, is_any_list, is_toml_table
from .loaders import load_toml_dict, load_toml_dict_checked
from .render import to_toml
from .types import TomlTable

__all__: list[str] = [
    "TomlTable",
    "get_bool_value",
    "get_bool_value_checked",
    "get_dotted_table",
    "get_list_value",
    "get_table_value",
    "has_dotted_table",
    "is_any_list",
    "is_toml_table",
    "load_toml_dict",
    "load_toml_dict_checked",
    "to_toml",
]
