# topmark:header:start
#
#   project      : StructInspect
#   file         : __init__.py
#   file_relpath : src/structinspect/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructInspect CLI package.

The console script entry point is defined in ``pyproject.toml`` as::

    [project.scripts]
    structinspect = "structinspect.cli.main:cli"

All subcommands live in [`structinspect.cli.commands`][].
"""

from __future__ import annotations

__all__: list[str] = []
# Do NOT import .main or commands at module import time
