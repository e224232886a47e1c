# topmark:header:start
#
#   project      : StructInspect
#   file         : model.py
#   file_relpath : src/structinspect/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Settings model, discovery and merge policy.

This module defines:
    - `Settings`: an immutable snapshot of the process-wide configuration
      (the ``omit`` layer and the ``overrides`` registry entries).
    - `MutableSettings`: a mutable builder used during discovery/merge; it
      can be frozen into `Settings` and thawed back for edits.

Merge order (lowest to highest precedence):
    1) Builtin defaults (no ``omit`` input, no overrides)
    2) Project configs discovered upward **root -> anchor**; within a directory
       ``pyproject.toml`` is merged first, then ``structinspect.toml``
    3) Extra config files passed explicitly (in the order given)

The ``omit`` layer is last-wins: a later layer that sets ``omit`` replaces the
earlier one. ``overrides`` entries are concatenated in precedence order, so a
later entry for the same type wins when the registry is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from structinspect.config.io import (
    get_bool_value,
    get_bool_value_checked,
    get_dotted_table,
    get_list_value,
    has_dotted_table,
    load_toml_dict,
    load_toml_dict_checked,
)
from structinspect.config.keys import Toml
from structinspect.config.logging import get_logger
from structinspect.constants import (
    PYPROJECT_TOML_NAME,
    PYPROJECT_TOOL_SECTION,
    STRUCTINSPECT_TOML_NAME,
)
from structinspect.core.diagnostics import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticLog,
    FrozenDiagnosticLog,
)
from structinspect.core.rules import Empty, RuleSet, builtin_defaults, coerce_input, resolve
from structinspect.core.validation import check_omit_value
from structinspect.registry.overrides import OverrideRegistry, check_overrides, normalize_override

if TYPE_CHECKING:
    from collections.abc import Iterable

    from structinspect.config.io import TomlTable
    from structinspect.config.logging import StructInspectLogger
    from structinspect.core.rules import RuleSetInput
    from structinspect.registry.overrides import OverrideEntry

logger: StructInspectLogger = get_logger(__name__)


# ------------------ Immutable settings ------------------


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable process-wide configuration.

    Attributes:
        omit (RuleSetInput): The process-wide omission layer.
        overrides (tuple[object, ...]): Raw override registry entries, in precedence order.
        config_files (tuple[Path | str, ...]): Config sources merged into this snapshot.
        diagnostics (FrozenDiagnosticLog): Problems found while loading the sources.
    """

    omit: RuleSetInput = Empty()
    overrides: tuple[object, ...] = ()
    config_files: tuple[Path | str, ...] = ()
    diagnostics: FrozenDiagnosticLog = FrozenDiagnosticLog()

    def process_wide_rules(self) -> RuleSet:
        """Return builtin defaults with the ``omit`` layer applied."""
        return resolve(builtin_defaults(), self.omit)

    def override_registry(self) -> OverrideRegistry:
        """Build the override registry from the configured entries."""
        return OverrideRegistry.from_entries(self.overrides)

    def to_toml_dict(self) -> TomlTable:
        """Convert this snapshot to a TOML-serializable table.

        Returns:
            TomlTable: ``omit`` (when set) and ``overrides``.
        """
        out: TomlTable = {}
        omit_value: object = self.omit.to_toml_value()
        if omit_value is not None:
            out[Toml.KEY_OMIT] = omit_value
        entries: list[Any] = []
        for raw in self.overrides:
            entry: OverrideEntry | None = normalize_override(raw)
            if entry is not None:
                entries.append(entry.to_toml_value())
        out[Toml.KEY_OVERRIDES] = entries
        return out

    def thaw(self) -> MutableSettings:
        """Return a mutable copy of this snapshot."""
        return MutableSettings(
            omit=self.omit,
            overrides=list(self.overrides),
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog.from_iterable(self.diagnostics),
        )


# ------------------ Validation ------------------


def validate_settings_table(
    table: TomlTable,
    *,
    where: str = f"[{PYPROJECT_TOOL_SECTION}]",
) -> list[Diagnostic]:
    """Validate a settings table (top level of ``structinspect.toml``).

    Args:
        table (TomlTable): The table to validate.
        where (str): Location prefix used in messages.

    Returns:
        list[Diagnostic]: Unknown keys, malformed ``omit`` values and
        unusable ``overrides`` entries.
    """
    log: DiagnosticLog = DiagnosticLog()
    for key in table:
        if key not in Toml.ALLOWED_TOP_LEVEL_KEYS:
            log.add_warning(f"Unknown key in {where}: {key!r}")
    get_bool_value_checked(table, Toml.KEY_ROOT, where=where, diagnostics=log)
    log.extend(check_omit_value(table.get(Toml.KEY_OMIT), where=f"{where}.{Toml.KEY_OMIT}"))
    log.extend(
        check_overrides(table.get(Toml.KEY_OVERRIDES), where=f"{where}.{Toml.KEY_OVERRIDES}")
    )
    return list(log)


def _settings_table_for(path: Path, data: TomlTable) -> TomlTable | None:
    if path.name == PYPROJECT_TOML_NAME:
        if not has_dotted_table(data, PYPROJECT_TOOL_SECTION):
            return None
        return get_dotted_table(data, PYPROJECT_TOOL_SECTION)
    return data


# ------------------ Mutable builder ------------------


@dataclass
class MutableSettings:
    """Mutable settings used during discovery and merging.

    Attributes:
        omit (RuleSetInput): The process-wide omission layer.
        overrides (list[object]): Raw override entries.
        config_files (list[Path | str]): Config sources merged so far.
        diagnostics (DiagnosticLog): Problems found while loading the sources.
    """

    omit: RuleSetInput = field(default_factory=Empty)
    overrides: list[object] = field(default_factory=lambda: [])
    config_files: list[Path | str] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    def freeze(self) -> Settings:
        """Freeze this builder into an immutable `Settings`."""
        return Settings(
            omit=self.omit,
            overrides=tuple(self.overrides),
            config_files=tuple(self.config_files),
            diagnostics=self.diagnostics.freeze(),
        )

    @classmethod
    def from_defaults(cls) -> MutableSettings:
        """Return the builtin defaults layer."""
        return cls(config_files=["<defaults>"])

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        config_file: Path | None = None,
    ) -> MutableSettings:
        """Create a draft from a settings table.

        Args:
            data (TomlTable): The ``[tool.structinspect]`` table or the top level
                of ``structinspect.toml``.
            config_file (Path | None): The source file, for provenance and messages.

        Returns:
            MutableSettings: The resulting draft (diagnostics included).
        """
        where: str = str(config_file) if config_file is not None else "<settings>"
        draft: MutableSettings = cls()
        draft.diagnostics.extend(validate_settings_table(data, where=where))
        if Toml.KEY_OMIT in data:
            draft.omit = coerce_input(data[Toml.KEY_OMIT])
        raw_overrides: object = data.get(Toml.KEY_OVERRIDES)
        if isinstance(raw_overrides, tuple):
            draft.overrides = list(raw_overrides)
        else:
            draft.overrides = list(get_list_value(data, Toml.KEY_OVERRIDES))
        if config_file is not None:
            draft.config_files = [config_file]
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableSettings:
        """Load settings from a single TOML file.

        Read and parse failures are recorded as error diagnostics; the returned
        draft then carries no settings.

        Args:
            path (Path): Path to ``structinspect.toml`` or ``pyproject.toml``.

        Returns:
            MutableSettings: The draft for this file.
        """
        logger.debug("Creating MutableSettings from TOML config: %s", path)
        data: TomlTable
        err: str | None
        data, err = load_toml_dict_checked(path)
        if err is not None:
            draft: MutableSettings = cls(config_files=[path])
            draft.diagnostics.add_error(err)
            return draft

        table: TomlTable | None = _settings_table_for(path, data)
        if table is None:
            logger.warning("[%s] section missing in %s", PYPROJECT_TOOL_SECTION, path)
            draft = cls(config_files=[path])
            draft.diagnostics.add_warning(f"[{PYPROJECT_TOOL_SECTION}] section missing in {path}")
            return draft

        return cls.from_toml_dict(table, config_file=path)

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files discovered by walking upward from ``start``.

        Files are returned root-most first. Within one directory
        ``pyproject.toml`` (only when it has a ``[tool.structinspect]`` table)
        comes before ``structinspect.toml``. A file setting ``root = true``
        stops the walk after its directory.

        Args:
            start (Path): Directory (or file) where discovery starts.

        Returns:
            list[Path]: Discovered config paths in merge order.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            root_stop_here: bool = False
            dir_entries: list[Path] = []

            for name in (PYPROJECT_TOML_NAME, STRUCTINSPECT_TOML_NAME):
                p: Path = cur / name
                if not p.is_file():
                    continue
                table: TomlTable | None = _settings_table_for(p, load_toml_dict(p))
                if table is None:
                    logger.trace("Skipping %s without [%s]", p, PYPROJECT_TOOL_SECTION)
                    continue
                dir_entries.append(p)
                logger.debug("Discovered config file: %s", p)
                if get_bool_value(table, Toml.KEY_ROOT):
                    root_stop_here = True

            if dir_entries:
                per_dir.append(dir_entries)

            parent: Path = cur.parent
            if parent == cur:
                break
            if root_stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):
            ordered.extend(dir_list)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        input_paths: Iterable[Path] | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableSettings:
        """Discover and merge configuration layers into a draft.

        Args:
            input_paths (Iterable[Path] | None): Discovery anchor(s). The first path
                (or CWD if none) is where upward discovery starts.
            extra_config_files (Iterable[Path] | None): Explicit config files merged
                **after** discovery, in the order given.
            no_config (bool): Skip discovery (explicit files are still merged).

        Returns:
            MutableSettings: The merged draft.
        """
        draft: MutableSettings = cls.from_defaults()

        anchors: list[Path] = list(input_paths or ())
        anchor: Path = anchors[0] if anchors else Path.cwd()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(anchor):
                draft = draft.merge_with(cls.from_toml_file(cfg_path))

        for extra in extra_config_files or ():
            draft = draft.merge_with(cls.from_toml_file(Path(extra)))

        return draft

    def merge_with(self, other: MutableSettings) -> MutableSettings:
        """Return a new draft where ``other`` overrides this draft.

        Args:
            other (MutableSettings): The higher-precedence layer.

        Returns:
            MutableSettings: The merged draft.
        """
        return MutableSettings(
            omit=self.omit if isinstance(other.omit, Empty) else other.omit,
            overrides=self.overrides + other.overrides,
            config_files=self.config_files + other.config_files,
            diagnostics=DiagnosticLog.from_iterable([*self.diagnostics, *other.diagnostics]),
        )


def settings_from_mapping(data: TomlTable) -> Settings:
    """Build frozen settings from an in-memory settings table.

    Args:
        data (TomlTable): A table shaped like ``[tool.structinspect]``.

    Returns:
        Settings: The snapshot; shape problems are logged and kept as diagnostics.
    """
    draft: MutableSettings = MutableSettings.from_toml_dict(data)
    for d in draft.diagnostics:
        if d.level != DiagnosticLevel.INFO:
            logger.debug("Settings diagnostic: %s", d.message)
    return draft.freeze()
