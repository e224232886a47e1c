# topmark:header:start
#
#   project      : StructInspect
#   file         : loaders.py
#   file_relpath : src/structinspect/config/io/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

Reads ``structinspect.toml`` and ``pyproject.toml`` files from disk. Parsing
is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from structinspect.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from structinspect.config.logging import StructInspectLogger

    from .types import TomlTable

logger: StructInspectLogger = get_logger(__name__)


def load_toml_dict_checked(path: Path) -> tuple[TomlTable, str | None]:
    """Load and parse a TOML file, returning the failure reason instead of raising.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        tuple[TomlTable, str | None]: ``(table, error)``; on failure the table is
        empty and ``error`` describes the problem.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}, f"Cannot read {path}: {e}"
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}, f"Invalid TOML in {path}: {e}"
    except (TypeError, ValueError) as e:
        logger.error("Unknown error while reading TOML from %s: %s", path, e)
        return {}, f"Cannot parse {path}: {e}"
    return (cast("TomlTable", data_any) if isinstance(data_any, dict) else {}), None


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed TOML content (empty on failure; errors are logged).
    """
    data: TomlTable
    data, _err = load_toml_dict_checked(path)
    return data
