# topmark:header:start
#
#   project      : StructInspect
#   file         : api.py
#   file_relpath : src/structinspect/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Process-wide configuration and inspection entry points.

The process-wide layer is installed once with [`configure`][structinspect.api.configure]
and read by every subsequent call. Until `configure` is called the builtin
defaults apply (no ``omit`` layer, empty override registry).

Rule resolution for a type, highest priority first:

1. types decorated with `@struct_inspect` use their declared input;
2. types listed in the override registry use their registry entry;
3. any other type uses the process-wide rules unchanged.

The installed state is an immutable snapshot swapped atomically, so
concurrent readers see either the old or the new configuration.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from structinspect.config.logging import get_logger
from structinspect.config.model import MutableSettings, Settings, settings_from_mapping
from structinspect.constants import STRUCT_INSPECT_ATTR
from structinspect.core.records import is_inspectable, is_record_type
from structinspect.core.rules import resolve
from structinspect.registry.overrides import OverrideRegistry
from structinspect.rendering.compact import render

if TYPE_CHECKING:
    from collections.abc import Iterable

    from structinspect.config.logging import StructInspectLogger
    from structinspect.core.rules import RuleSet, RuleSetInput

logger: StructInspectLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class _Installed:
    settings: Settings
    process_wide: RuleSet
    registry: OverrideRegistry


def _install(settings: Settings) -> _Installed:
    return _Installed(
        settings=settings,
        process_wide=settings.process_wide_rules(),
        registry=settings.override_registry(),
    )


_lock = threading.Lock()
_installed: _Installed = _install(Settings())


def configure(
    settings: Settings | MutableSettings | Mapping[str, object] | None = None,
    *,
    paths: Iterable[Path | str] | None = None,
    config_files: Iterable[Path | str] | None = None,
    no_config: bool = False,
) -> Settings:
    """Install the process-wide settings.

    Args:
        settings (Settings | MutableSettings | Mapping[str, object] | None): Explicit
            settings, or a table shaped like ``[tool.structinspect]``. When given,
            no files are read.
        paths (Iterable[Path | str] | None): Discovery anchors. When given (or when
            ``config_files`` is given), config files are discovered upward from
            the first anchor (or CWD) and merged.
        config_files (Iterable[Path | str] | None): Extra config files merged last.
        no_config (bool): Skip discovery (``config_files`` are still merged).

    Returns:
        Settings: The installed snapshot.
    """
    global _installed

    resolved: Settings
    if isinstance(settings, Settings):
        resolved = settings
    elif isinstance(settings, MutableSettings):
        resolved = settings.freeze()
    elif isinstance(settings, Mapping):
        resolved = settings_from_mapping(dict(settings))
    elif paths is None and config_files is None:
        resolved = Settings()
    else:
        resolved = MutableSettings.load_merged(
            input_paths=[Path(p) for p in paths or ()],
            extra_config_files=[Path(p) for p in config_files or ()],
            no_config=no_config,
        ).freeze()

    state: _Installed = _install(resolved)
    with _lock:
        _installed = state
    logger.debug(
        "Installed settings from %d source(s); %d override(s)",
        len(resolved.config_files),
        len(state.registry),
    )
    return resolved


def reset() -> None:
    """Reinstall the builtin defaults."""
    configure(Settings())


def current_settings() -> Settings:
    """Return the installed process-wide settings."""
    return _installed.settings


def current_registry() -> OverrideRegistry:
    """Return the override registry built from the installed settings."""
    return _installed.registry


def process_wide_rules() -> RuleSet:
    """Return builtin defaults with the process-wide layer applied."""
    return _installed.process_wide


def declared_input(cls: type) -> RuleSetInput | None:
    """Return the input declared on ``cls`` by `@struct_inspect`, or None."""
    return cls.__dict__.get(STRUCT_INSPECT_ATTR)


def _configured_rules(cls: type, state: _Installed) -> RuleSet | None:
    declared: RuleSetInput | None = declared_input(cls)
    if declared is not None:
        return resolve(state.process_wide, declared)
    if cls not in state.registry and issubclass(cls, Mapping) and not is_record_type(cls):
        # The ``dict`` entry stands for every untyped mapping
        cls = dict
    return state.registry.rules_for(cls, state.process_wide)


def rules_for(cls_or_value: object) -> RuleSet:
    """Resolve the effective rule set for a type (or for the type of a value).

    Args:
        cls_or_value (object): A class, or an instance whose type is used.

    Returns:
        RuleSet: The three configuration layers resolved for that type.
    """
    cls: type = cls_or_value if isinstance(cls_or_value, type) else type(cls_or_value)
    state: _Installed = _installed
    configured: RuleSet | None = _configured_rules(cls, state)
    return configured if configured is not None else state.process_wide


def lookup_rules(value: object) -> RuleSet | None:
    """Return the rules used to render a nested value, or None to use `repr`.

    Only decorated types and registered types are rendered compactly when
    nested; everything else keeps its own representation.
    """
    return _configured_rules(type(value), _installed)


def inspect(value: object, omit: object = None) -> str:
    """Render ``value`` compactly with its effective rules.

    Args:
        value (object): Any value; records and mappings are filtered, anything
            else is rendered with `repr`.
        omit (object): Optional per-call input. It replaces the per-type layer
            and is applied on top of the process-wide layer.

    Returns:
        str: The rendered text.
    """
    if not is_inspectable(value):
        return repr(value)
    rules: RuleSet = (
        rules_for(value) if omit is None else resolve(_installed.process_wide, omit)
    )
    return render(value, rules, lookup=lookup_rules)
