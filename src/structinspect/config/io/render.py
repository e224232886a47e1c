# topmark:header:start
#
#   project      : StructInspect
#   file         : render.py
#   file_relpath : src/structinspect/config/io/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render TOML for config dumps.

TOML has no `null` value, so `None` entries are stripped during rendering.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

import tomlkit

from structinspect.config.logging import get_logger

if TYPE_CHECKING:
    from structinspect.config.logging import StructInspectLogger

    from .types import TomlTable

logger: StructInspectLogger = get_logger(__name__)


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` from mappings and lists (keys become strings)."""
    if isinstance(value, Mapping):
        out: dict[str, object] = {}
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        for k_any, v_any in m.items():
            if v_any is None:
                logger.debug("Ignoring `None` entry in Mapping for key %s", k_any)
                continue
            k: str = k_any if isinstance(k_any, str) else str(k_any)
            out[k] = _strip_none_for_toml(v_any)
        return out

    if isinstance(value, (list, tuple)):
        seq: list[object] = list(cast("list[object]", value))
        return [_strip_none_for_toml(v) for v in seq if v is not None]

    return value


def _as_inline(value: object) -> object:
    """Convert nested dicts to tomlkit inline tables (arrays are walked too)."""
    if isinstance(value, dict):
        tbl = tomlkit.inline_table()
        for k, v in value.items():
            tbl[k] = _as_inline(v)
        return tbl
    if isinstance(value, list):
        return [_as_inline(v) for v in value]
    return value


def _inline_override_tables(data: dict[str, object]) -> None:
    """Render tables nested in arrays inline (``{ type = "...", omit = [...] }``)."""
    for key, value in data.items():
        if isinstance(value, list) and any(isinstance(v, dict) for v in value):
            arr = tomlkit.array()
            arr.multiline(True)
            for item in value:
                arr.append(_as_inline(item))
            data[key] = arr


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string.

    Args:
        toml_dict (TomlTable): TOML mapping to render.

    Returns:
        str: The rendered TOML document as a string.
    """
    stripped: dict[str, object] = cast("dict[str, object]", _strip_none_for_toml(toml_dict))
    # Plain values first: a key written after a [table] header would belong to that table.
    cleaned: dict[str, object] = {k: v for k, v in stripped.items() if not isinstance(v, dict)}
    cleaned.update((k, v) for k, v in stripped.items() if isinstance(v, dict))
    _inline_override_tables(cleaned)
    # tomlkit itself is treated as untyped here.
    return cast("str", cast("Any", tomlkit).dumps(cleaned))
