# topmark:header:start
#
#   project      : StructInspect
#   file         : __init__.py
#   file_relpath : src/structinspect/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Override registry for externally defined record types."""

from __future__ import annotations

from .overrides import (
    OverrideEntry,
    OverrideRegistry,
    check_overrides,
    import_type,
    is_rewritable_type,
    normalize_override,
    type_path,
)

__all__: list[str] = [
    "OverrideEntry",
    "OverrideRegistry",
    "check_overrides",
    "import_type",
    "is_rewritable_type",
    "normalize_override",
    "type_path",
]
