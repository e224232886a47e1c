# topmark:header:start
#
#   project      : StructInspect
#   file         : __init__.py
#   file_relpath : src/structinspect/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Text rendering of filtered records."""

from __future__ import annotations

from structinspect.core.records import display_name

from .compact import CYCLE_MARKER, render

__all__: list[str] = [
    "CYCLE_MARKER",
    "display_name",
    "render",
]
