# topmark:header:start
#
#   project      : StructInspect
#   file         : version.py
#   file_relpath : src/structinspect/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructInspect `version` command.

Prints the StructInspect version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from structinspect.constants import STRUCTINSPECT_VERSION

if TYPE_CHECKING:
    from structinspect.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of StructInspect.",
)
def version_command() -> None:
    """Show the current version of StructInspect."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = int(ctx.obj.get("verbosity_level", 0))

    if vlevel > 0:
        console.print(console.styled("StructInspect version:", bold=True, underline=True))
        console.print(f"    {console.styled(STRUCTINSPECT_VERSION, bold=True)}")
    else:
        console.print(console.styled(STRUCTINSPECT_VERSION, bold=True))
