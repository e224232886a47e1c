# topmark:header:start
#
#   project      : StructInspect
#   file         : __init__.py
#   file_relpath : src/structinspect/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration layer for StructInspect.

Loads the process-wide omission layer and the override registry entries from
``structinspect.toml`` or ``[tool.structinspect]`` in ``pyproject.toml``, and
hosts the package logging helpers.

Public modules:
    - structinspect.config.model
    - structinspect.config.keys
    - structinspect.config.logging

Core modules import `structinspect.config.logging`, so this package module stays
import-free to avoid cycles with `structinspect.config.model`.
"""

from __future__ import annotations
