# topmark:header:start
#
#   project      : StructInspect
#   file         : rules.py
#   file_relpath : src/structinspect/cli/commands/rules.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructInspect `rules` command.

Prints the effective rule set as a TOML table: the process-wide rules by
default, the rules of one record type with ``--type``, or the process-wide
rules with a names-only per-call layer with ``--omit``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from structinspect import api
from structinspect.cli.commands.config import load_cli_settings
from structinspect.cli.errors import StructInspectUsageError
from structinspect.cli.options import common_config_options
from structinspect.config.io import to_toml
from structinspect.core.errors import OverrideTargetError
from structinspect.core.rules import NamesOnly, resolve
from structinspect.registry.overrides import import_type, type_path

if TYPE_CHECKING:
    from structinspect.cli.console import ClickConsole
    from structinspect.core.rules import RuleSet


@click.command(
    name="rules",
    help="Show the effective omission rules.",
)
@common_config_options
@click.option(
    "--type",
    "type_name",
    metavar="DOTTED.PATH",
    default=None,
    help="Show the rules of this record type (e.g. 'myapp.models.User').",
)
@click.option(
    "--omit",
    "omit_names",
    multiple=True,
    metavar="NAME",
    help="Names-only per-call layer applied on top of the process-wide rules (repeatable).",
)
def rules_command(
    *,
    config_paths: tuple[str, ...],
    no_config: bool,
    type_name: str | None,
    omit_names: tuple[str, ...],
) -> None:
    """Print the effective rule set.

    Args:
        config_paths (tuple[str, ...]): Extra config files.
        no_config (bool): Skip discovery.
        type_name (str | None): Dotted path of a record type.
        omit_names (tuple[str, ...]): Category names for the per-call layer.

    Raises:
        StructInspectUsageError: When ``--type`` and ``--omit`` are combined,
            or the type cannot be imported.
    """
    ctx: click.Context = click.get_current_context()
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = int(ctx.obj.get("verbosity_level", 0))

    if type_name and omit_names:
        raise StructInspectUsageError("The '--type' and '--omit' options are mutually exclusive.")

    api.configure(load_cli_settings(config_paths=config_paths, no_config=no_config))

    title: str
    rules: RuleSet
    if type_name:
        try:
            cls: type | None = import_type(type_name, strict=True)
        except OverrideTargetError as exc:
            raise StructInspectUsageError(str(exc)) from exc
        assert cls is not None
        rules = api.rules_for(cls)
        title = f"Rules for {type_path(cls)}"
    elif omit_names:
        rules = resolve(api.process_wide_rules(), NamesOnly(frozenset(omit_names)))
        title = "Process-wide rules with --omit"
    else:
        rules = api.process_wide_rules()
        title = "Process-wide rules"

    if vlevel > 0:
        console.comment(title, bold=True)
        for category in rules.enabled_categories():
            console.comment(f"  omits {category.label}")
    console.print(to_toml(rules.to_toml_table()), nl=False)


__all__ = ["rules_command"]
