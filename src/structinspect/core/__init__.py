# topmark:header:start
#
#   project      : StructInspect
#   file         : __init__.py
#   file_relpath : src/structinspect/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure building blocks of StructInspect.

The ``structinspect.core`` package holds the omission-rule model and the field
filter. Nothing in here performs I/O or touches the inspected values.

Included modules:

- ``categories``
  The ten emptiness categories and flag-name parsing.

- ``rules``
  The resolved `RuleSet`, the four `RuleSetInput` shapes and three-layer
  resolution.

- ``records``
  Record introspection, default instances and structural equality.

- ``emptiness`` / ``filtering``
  Per-category predicates and the ordered field filter.

- ``diagnostics`` / ``errors``
  Configuration diagnostics and the library exception hierarchy.
"""

from __future__ import annotations
