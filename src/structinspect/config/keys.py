# topmark:header:start
#
#   project      : StructInspect
#   file         : keys.py
#   file_relpath : src/structinspect/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML key names for StructInspect configuration.

These keys are the external configuration schema as it appears at the top
level of ``structinspect.toml`` and in ``[tool.structinspect]`` inside
``pyproject.toml``. Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML keys used by StructInspect configuration."""

    # Root / discovery
    KEY_ROOT: Final[str] = "root"

    # Process-wide omission layer: a names list or a keyed table
    KEY_OMIT: Final[str] = "omit"

    # Override registry: strings or { type = "...", omit = ... } tables
    KEY_OVERRIDES: Final[str] = "overrides"
    KEY_OVERRIDE_TYPE: Final[str] = "type"
    KEY_OVERRIDE_OMIT: Final[str] = "omit"

    ALLOWED_TOP_LEVEL_KEYS: Final[frozenset[str]] = frozenset(
        {
            KEY_ROOT,
            KEY_OMIT,
            KEY_OVERRIDES,
        }
    )
