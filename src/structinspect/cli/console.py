# topmark:header:start
#
#   project      : StructInspect
#   file         : console.py
#   file_relpath : src/structinspect/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Program output for the CLI.

Commands write TOML and short reports through `ClickConsole`; internal
diagnostics go through `logging` instead. Verbose annotations are written as
TOML comments so the output stays parseable.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

import click


class ClickConsole:
    """Console bound to the streams active when the command runs.

    Attributes:
        enable_color (bool): Emit ANSI styles.
        out (TextIO): Program output.
        err (TextIO): Error messages.
    """

    enable_color: bool
    out: TextIO
    err: TextIO

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write ``text`` to the output stream."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def comment(self, text: str, *, bold: bool = False) -> None:
        """Write ``text`` as a TOML comment line (``# text``)."""
        self.print(self.styled(f"# {text}", bold=bold, dim=not bold))

    def error(self, text: str) -> None:
        """Write an error message to the error stream."""
        click.secho(text, file=self.err, color=self.enable_color, fg="bright_red")

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled with `click.style`, or unchanged when color is off."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)
