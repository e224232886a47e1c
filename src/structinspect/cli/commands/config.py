# topmark:header:start
#
#   project      : StructInspect
#   file         : config.py
#   file_relpath : src/structinspect/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructInspect `config` command group.

  * ``structinspect config dump``: show the merged configuration as TOML.
  * ``structinspect config check``: validate the configuration files.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from structinspect.cli.exit_codes import ExitCode
from structinspect.cli.options import CONTEXT_SETTINGS, common_config_options
from structinspect.config.io import to_toml
from structinspect.config.logging import get_logger
from structinspect.config.model import MutableSettings
from structinspect.core.diagnostics import DiagnosticLevel

if TYPE_CHECKING:
    from structinspect.cli.console import ClickConsole
    from structinspect.config.logging import StructInspectLogger
    from structinspect.config.model import Settings
    from structinspect.core.diagnostics import DiagnosticStats

logger: StructInspectLogger = get_logger(__name__)


def load_cli_settings(*, config_paths: tuple[str, ...], no_config: bool) -> Settings:
    """Discover from the CWD and merge the explicit ``--config`` files.

    Args:
        config_paths (tuple[str, ...]): Paths given with ``--config``.
        no_config (bool): Skip discovery.

    Returns:
        Settings: The merged snapshot.
    """
    draft: MutableSettings = MutableSettings.load_merged(
        input_paths=[Path.cwd()],
        extra_config_files=[Path(p) for p in config_paths],
        no_config=no_config,
    )
    logger.trace("Merged settings draft: %s", draft)
    return draft.freeze()


@click.group(
    name="config",
    help="Inspect and validate StructInspect configuration.",
    context_settings=CONTEXT_SETTINGS,
)
def config_command() -> None:
    """Group for configuration-related subcommands."""


@config_command.command(
    name="dump",
    help="Show the merged configuration as TOML.",
)
@common_config_options
def config_dump_command(*, config_paths: tuple[str, ...], no_config: bool) -> None:
    """Print the merged settings as a ``structinspect.toml`` document.

    Args:
        config_paths (tuple[str, ...]): Extra config files.
        no_config (bool): Skip discovery.
    """
    ctx: click.Context = click.get_current_context()
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = int(ctx.obj.get("verbosity_level", 0))

    settings: Settings = load_cli_settings(config_paths=config_paths, no_config=no_config)

    if vlevel > 0:
        for i, source in enumerate(settings.config_files, start=1):
            console.comment(f"Config source {i}: {source}")
    console.print(to_toml(settings.to_toml_dict()), nl=False)


@config_command.command(
    name="check",
    help="Validate configuration files and report diagnostics.",
)
@common_config_options
@click.option(
    "--strict/--no-strict",
    "strict",
    default=False,
    show_default=True,
    help="Fail if any warnings are present (in addition to errors).",
)
def config_check_command(*, config_paths: tuple[str, ...], no_config: bool, strict: bool) -> None:
    """Validate the merged configuration sources.

    Exits with ``CONFIG_ERROR`` (78) when errors are found (or warnings with ``--strict``).

    Args:
        config_paths (tuple[str, ...]): Extra config files.
        no_config (bool): Skip discovery.
        strict (bool): Treat warnings as failures.
    """
    ctx: click.Context = click.get_current_context()
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = int(ctx.obj.get("verbosity_level", 0))

    settings: Settings = load_cli_settings(config_paths=config_paths, no_config=no_config)
    stats: DiagnosticStats = settings.diagnostics.stats()
    fail: bool = stats.n_error > 0 or (strict and stats.n_warning > 0)

    if stats.total == 0:
        console.print("Config OK (no diagnostics).")
    else:
        console.print(
            "Config diagnostics: "
            f"{stats.n_error} error(s), {stats.n_warning} warning(s), {stats.n_info} info(s)"
        )
        for d in settings.diagnostics:
            if vlevel < 0 and d.level != DiagnosticLevel.ERROR:
                continue
            label: str = d.level.value
            if console.enable_color:
                label = d.level.color(label)
            console.print(f"- {label}: {d.message}")

    if vlevel > 0:
        console.print(f"Config sources processed: {len(settings.config_files)}")
        for i, source in enumerate(settings.config_files, start=1):
            console.print(f"  {i}: {source}")

    console.print("FAILED" if fail else "OK")
    ctx.exit(ExitCode.CONFIG_ERROR if fail else ExitCode.SUCCESS)
