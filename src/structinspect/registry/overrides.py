# topmark:header:start
#
#   project      : StructInspect
#   file         : overrides.py
#   file_relpath : src/structinspect/registry/overrides.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Override registry for types that cannot be decorated directly.

The ``overrides`` configuration key lists third-party record types whose
rendering should be filtered too. Each entry is normalized once, at
configuration time, into an `OverrideEntry`:

    bare type (class or dotted path)     -> AlreadyResolved(builtin defaults)
    (type, omit) pair                    -> coerce_input(omit)
    {"type": ..., "omit": ...} table     -> coerce_input(omit)

Entries whose type cannot be imported, is not a record type, or is `RuleSet`
itself are dropped. ``dict`` is always accepted: it stands for every untyped
mapping. Later entries for the same type replace earlier ones.
"""

from __future__ import annotations

import builtins
import importlib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from structinspect.config.logging import get_logger
from structinspect.core.diagnostics import Diagnostic, DiagnosticLevel
from structinspect.core.errors import OverrideTargetError
from structinspect.core.records import is_record_type
from structinspect.core.rules import (
    BUILTIN_DEFAULTS,
    AlreadyResolved,
    RuleSet,
    RuleSetInput,
    builtin_defaults,
    coerce_input,
    resolve,
)
from structinspect.core.validation import check_omit_value

if TYPE_CHECKING:
    from structinspect.config.logging import StructInspectLogger

logger: StructInspectLogger = get_logger(__name__)

# Keys of an inline-table override entry
ENTRY_TYPE_KEY = "type"
ENTRY_OMIT_KEY = "omit"


def type_path(cls: type) -> str:
    """Return the import path of ``cls`` (bare name for builtins)."""
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


@dataclass(frozen=True, slots=True)
class OverrideEntry:
    """One normalized override registry entry.

    Attributes:
        target (type | str): The class object, or its dotted import path.
        omit (RuleSetInput): The per-type input applied on top of the process-wide layer.
    """

    target: type | str
    omit: RuleSetInput

    @property
    def is_bare(self) -> bool:
        """True when the entry carries builtin defaults only (no override data)."""
        return isinstance(self.omit, AlreadyResolved) and self.omit.rules == BUILTIN_DEFAULTS

    def to_toml_value(self) -> str | dict[str, Any]:
        """Return the entry as written in ``overrides`` (a string or an inline table)."""
        path: str = self.target if isinstance(self.target, str) else type_path(self.target)
        if self.is_bare:
            return path
        out: dict[str, Any] = {ENTRY_TYPE_KEY: path}
        omit_value: object = self.omit.to_toml_value()
        if omit_value is not None:
            out[ENTRY_OMIT_KEY] = omit_value
        return out


def normalize_override(raw: object) -> OverrideEntry | None:
    """Normalize one raw ``overrides`` entry.

    Args:
        raw (object): A class, a dotted path, a ``(target, omit)`` pair or a
            ``{"type": ..., "omit": ...}`` mapping.

    Returns:
        OverrideEntry | None: The entry, or None when ``raw`` has no recognizable shape.
    """
    if isinstance(raw, (type, str)):
        return OverrideEntry(raw, AlreadyResolved(builtin_defaults()))
    if isinstance(raw, Mapping):
        target: object = raw.get(ENTRY_TYPE_KEY)
        if isinstance(target, (type, str)):
            return OverrideEntry(target, coerce_input(raw.get(ENTRY_OMIT_KEY)))
        return None
    if isinstance(raw, tuple) and len(raw) == 2 and isinstance(raw[0], (type, str)):
        return OverrideEntry(raw[0], coerce_input(raw[1]))
    return None


def import_type(target: type | str, *, strict: bool = False) -> type | None:
    """Resolve a class object or dotted path (``pkg.mod.Class`` or ``pkg.mod:Class``).

    Names without a module part are looked up in `builtins` (``"dict"``).

    Args:
        target (type | str): The class or its import path.
        strict (bool): Raise instead of returning None.

    Returns:
        type | None: The class, or None when it cannot be resolved.

    Raises:
        OverrideTargetError: With ``strict=True``, when the target cannot be resolved.
    """
    if isinstance(target, type):
        return target

    module_name: str
    qualname: str
    if ":" in target:
        module_name, _, qualname = target.partition(":")
    else:
        module_name, _, qualname = target.rpartition(".")

    try:
        obj: Any = importlib.import_module(module_name) if module_name else builtins
        for part in qualname.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError, ValueError) as exc:
        if strict:
            raise OverrideTargetError(f"Cannot import {target!r}: {exc}") from exc
        logger.debug("Cannot import override target %r: %s", target, exc)
        return None

    if not isinstance(obj, type):
        if strict:
            raise OverrideTargetError(f"{target!r} does not name a class")
        logger.debug("Override target %r is not a class: %r", target, obj)
        return None
    return obj


def is_rewritable_type(cls: object) -> bool:
    """Return True if ``cls`` may carry an override.

    ``dict`` is always valid. `RuleSet` never is. Anything else must be a
    typed record type (dataclass or named tuple).
    """
    if cls is dict:
        return True
    if cls is RuleSet:
        return False
    return is_record_type(cls)


@dataclass(frozen=True, slots=True)
class OverrideRegistry:
    """Immutable mapping from record types to their per-type omission input.

    Build it with [`from_entries`][structinspect.registry.overrides.OverrideRegistry.from_entries].
    """

    entries: Mapping[type, RuleSetInput] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    @classmethod
    def from_entries(cls, raw_entries: Iterable[object]) -> OverrideRegistry:
        """Normalize, resolve and validate raw entries, dropping invalid ones.

        Args:
            raw_entries (Iterable[object]): Entries as configured (see `normalize_override`).

        Returns:
            OverrideRegistry: The registry; insertion order follows the entries.
        """
        table: dict[type, RuleSetInput] = {}
        for raw in raw_entries:
            entry: OverrideEntry | None = normalize_override(raw)
            if entry is None:
                logger.debug("Dropping unrecognized override entry %r", raw)
                continue
            target: type | None = import_type(entry.target)
            if target is None or not is_rewritable_type(target):
                logger.debug("Dropping override for non-rewritable type %r", entry.target)
                continue
            if target in table:
                logger.debug("Override for %s replaces an earlier entry", type_path(target))
            table[target] = entry.omit
        logger.debug("Override registry holds %d type(s)", len(table))
        return cls(MappingProxyType(table))

    def input_for(self, cls: type) -> RuleSetInput | None:
        """Return the registered input for ``cls``, or None."""
        return self.entries.get(cls)

    def rules_for(self, cls: type, process_wide: object = None) -> RuleSet | None:
        """Resolve the rule set for a registered type.

        Args:
            cls (type): The record type.
            process_wide (object): The process-wide layer (a `RuleSet` or any input shape).

        Returns:
            RuleSet | None: The effective rules, or None when ``cls`` is not registered.
        """
        rsi: RuleSetInput | None = self.entries.get(cls)
        if rsi is None:
            return None
        baseline: RuleSet = (
            process_wide
            if isinstance(process_wide, RuleSet)
            else resolve(builtin_defaults(), process_wide)
        )
        return resolve(baseline, rsi)

    def types(self) -> tuple[type, ...]:
        """Return the registered types in registration order."""
        return tuple(self.entries)

    def __contains__(self, cls: object) -> bool:
        return cls in self.entries

    def __len__(self) -> int:
        return len(self.entries)


def check_overrides(raw_entries: object, *, where: str = "overrides") -> list[Diagnostic]:
    """Report what `OverrideRegistry.from_entries` would drop or ignore.

    Args:
        raw_entries (object): The configured ``overrides`` value.
        where (str): Location prefix used in messages.

    Returns:
        list[Diagnostic]: One diagnostic per problem found.
    """
    if raw_entries is None:
        return []
    if not isinstance(raw_entries, (list, tuple)):
        return [
            Diagnostic(
                DiagnosticLevel.ERROR,
                f"Expected a list in {where}, got {type(raw_entries).__name__}",
            )
        ]

    out: list[Diagnostic] = []
    for i, raw in enumerate(raw_entries):
        loc: str = f"{where}[{i}]"
        entry: OverrideEntry | None = normalize_override(raw)
        if entry is None:
            out.append(Diagnostic(DiagnosticLevel.ERROR, f"Unrecognized override entry {loc}: {raw!r}"))
            continue
        if isinstance(raw, Mapping):
            unknown: list[str] = sorted(
                str(k) for k in raw if k not in (ENTRY_TYPE_KEY, ENTRY_OMIT_KEY)
            )
            if unknown:
                out.append(
                    Diagnostic(
                        DiagnosticLevel.WARNING, f"Unknown key(s) in {loc}: {', '.join(unknown)}"
                    )
                )
            out.extend(check_omit_value(raw.get(ENTRY_OMIT_KEY), where=f"{loc}.{ENTRY_OMIT_KEY}"))
        elif isinstance(raw, tuple):
            out.extend(check_omit_value(raw[1], where=f"{loc}.{ENTRY_OMIT_KEY}"))

        try:
            target: type | None = import_type(entry.target, strict=True)
        except OverrideTargetError as exc:
            out.append(Diagnostic(DiagnosticLevel.ERROR, f"{loc}: {exc}"))
            continue
        if not is_rewritable_type(target):
            out.append(
                Diagnostic(
                    DiagnosticLevel.ERROR,
                    f"{loc}: {entry.target!r} is not a record type (dataclass or named tuple)",
                )
            )
    return out
