# topmark:header:start
#
#   project      : StructInspect
#   file         : validation.py
#   file_relpath : src/structinspect/core/validation.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shape checks for omission inputs.

`resolve` never fails: unknown names are ignored and unrecognized shapes act
as no override. This module reports what `resolve` would silently ignore, so
``structinspect config check`` can surface mistakes in configuration files.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from structinspect.core.categories import EXCEPT_KEY, is_except_key, parse_flag_name
from structinspect.core.diagnostics import Diagnostic, DiagnosticLevel
from structinspect.core.rules import RuleSet, is_rule_set_input


def _check_names(names: list[Any], where: str) -> list[Diagnostic]:
    out: list[Diagnostic] = []
    for name in names:
        if not isinstance(name, str):
            out.append(
                Diagnostic(DiagnosticLevel.ERROR, f"Expected category name in {where}, got {name!r}")
            )
        elif parse_flag_name(name) is None:
            out.append(
                Diagnostic(DiagnosticLevel.WARNING, f"Unknown omission category in {where}: {name!r}")
            )
    return out


def check_omit_value(raw: object, *, where: str) -> list[Diagnostic]:
    """Return diagnostics for an ``omit`` value (names list or keyed table).

    Args:
        raw (object): The value as read from TOML or passed by the caller.
        where (str): Location prefix used in messages (e.g. ``"[tool.structinspect].omit"``).

    Returns:
        list[Diagnostic]: Errors for unusable shapes, warnings for ignored entries.
    """
    if raw is None or isinstance(raw, RuleSet) or is_rule_set_input(raw):
        return []
    if isinstance(raw, str):
        return _check_names([raw], where)
    if isinstance(raw, (list, tuple)):
        items: list[Any] = list(raw)
        if items and all(isinstance(item, tuple) and len(item) == 2 for item in items):
            # Key/value pairs read as a keyed table
            return check_omit_value(dict(items), where=where)
        return _check_names(items, where)
    if not isinstance(raw, Mapping):
        return [
            Diagnostic(
                DiagnosticLevel.ERROR,
                f"Expected a list of names or a table in {where}, got {type(raw).__name__}",
            )
        ]

    out: list[Diagnostic] = []
    for key, value in raw.items():
        loc: str = f"{where}.{key}"
        if is_except_key(key):
            if isinstance(value, str):
                continue
            if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
                out.append(
                    Diagnostic(
                        DiagnosticLevel.ERROR,
                        f"Expected a list of field names in {where}.{EXCEPT_KEY}, got {value!r}",
                    )
                )
            continue
        if parse_flag_name(key) is None:
            out.append(Diagnostic(DiagnosticLevel.WARNING, f"Unknown omission key {loc}"))
        elif not isinstance(value, bool):
            out.append(
                Diagnostic(
                    DiagnosticLevel.WARNING,
                    f"Expected bool in {loc}, got {type(value).__name__}: {value!r}",
                )
            )
    return out
