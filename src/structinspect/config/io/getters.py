# topmark:header:start
#
#   project      : StructInspect
#   file         : getters.py
#   file_relpath : src/structinspect/config/io/getters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed reads from settings tables.

Lenient getters fall back to a default and log at debug level. The checked
variant records a warning in a `DiagnosticLog` instead, for
``structinspect config check``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from structinspect.config.logging import get_logger

from .guards import is_any_list

if TYPE_CHECKING:
    from structinspect.config.logging import StructInspectLogger
    from structinspect.core.diagnostics import DiagnosticLog

    from .types import TomlTable

logger: StructInspectLogger = get_logger(__name__)


def get_bool_value(table: TomlTable, key: str, default: bool = False) -> bool:
    """Read a flag such as ``root``.

    Integers are accepted (``root = 1``); any other non-bool value yields ``default``.

    Args:
        table (TomlTable): Settings table.
        key (str): Key to read.
        default (bool): Value used when the key is absent or unusable.

    Returns:
        bool: The flag value.
    """
    raw: Any = table.get(key)
    if isinstance(raw, (bool, int)):
        return bool(raw)
    if raw is not None:
        logger.debug("%s = %r is not a flag; using %r", key, raw, default)
    return default


def get_list_value(table: TomlTable, key: str) -> list[Any]:
    """Read an array such as ``overrides``; anything else reads as ``[]``."""
    raw: Any = table.get(key)
    if is_any_list(raw):
        return raw
    if raw is not None:
        logger.debug("%s = %r is not an array; ignoring it", key, raw)
    return []


def get_bool_value_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    default: bool = False,
) -> bool:
    """Read a flag strictly: only real booleans count, others add a warning.

    Args:
        table (TomlTable): Settings table.
        key (str): Key to read.
        where (str): Location prefix used in the message.
        diagnostics (DiagnosticLog): Receives the warning.
        default (bool): Value used when the key is absent or not a bool.

    Returns:
        bool: The flag value.
    """
    raw: Any = table.get(key)
    if raw is None or isinstance(raw, bool):
        return default if raw is None else raw

    message: str = f"Expected bool in {where}.{key}, got {type(raw).__name__}: {raw!r}"
    logger.warning("%s", message)
    diagnostics.add_warning(message)
    return default
