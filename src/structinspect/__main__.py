# topmark:header:start
#
#   project      : StructInspect
#   file         : __main__.py
#   file_relpath : src/structinspect/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running StructInspect via ``python -m structinspect``.

Equivalent to running the ``structinspect`` console script.

Examples:
    Show the effective process-wide rules::

        python -m structinspect rules
"""

from __future__ import annotations

from structinspect.cli.main import cli

if __name__ == "__main__":
    cli()
