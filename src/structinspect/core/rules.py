# topmark:header:start
#
#   project      : StructInspect
#   file         : rules.py
#   file_relpath : src/structinspect/core/rules.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Omission rules: the resolved `RuleSet` and the inputs that build it.

Design:
    * `RuleSet` is the fully-resolved, immutable runtime view with plain
      booleans (one per `OmitCategory`, plus ``type_tag``) and the
      exclude-by-name list ``except_fields``. Filtering never branches on
      "unset" values.
    * `RuleSetInput` is a tagged union of the four shapes a configuration layer
      may take: `Empty`, `KeyedOverrides`, `NamesOnly` and `AlreadyResolved`.
    * [`resolve`][structinspect.core.rules.resolve] applies one input on top of
      a baseline and returns a new `RuleSet`. It is pure and total: unknown keys
      and names are ignored, and loose inputs that match no shape act as `Empty`.
    * [`effective_rules`][structinspect.core.rules.effective_rules] chains the
      three layers: builtin defaults, then the process-wide layer, then the
      per-type layer.

Merge semantics per input shape:

    Empty               -> baseline unchanged
    KeyedOverrides(m)   -> baseline with every key present in ``m`` overwritten
    NamesOnly(names)    -> every flag False except ``names``; ``except`` reset
    AlreadyResolved(rs) -> ``rs``; the baseline is discarded
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Final, TypeAlias

from structinspect.config.logging import get_logger
from structinspect.core.categories import (
    EXCEPT_KEY,
    FLAG_NAMES,
    TYPE_TAG_FLAG,
    OmitCategory,
    is_except_key,
    parse_flag_name,
)

if TYPE_CHECKING:
    from structinspect.config.logging import StructInspectLogger

logger: StructInspectLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Immutable, resolved omission rules.

    Attributes:
        nil_value (bool): Omit ``None``.
        zero_integer_value (bool): Omit integer ``0`` (booleans never match).
        zero_float_value (bool): Omit ``+0.0``.
        empty_string (bool): Omit ``""``.
        empty_list (bool): Omit ``[]``.
        empty_map (bool): Omit empty mappings that are not typed records.
        empty_struct (bool): Omit typed records equal to their type's default instance.
        empty_tuple (bool): Omit ``()``.
        true_value (bool): Omit ``True``.
        false_value (bool): Omit ``False``.
        type_tag (bool): Hide the synthetic type-tag field.
        except_fields (tuple[str, ...]): Field names that are always omitted.
    """

    nil_value: bool = True
    zero_integer_value: bool = False
    zero_float_value: bool = False
    empty_string: bool = True
    empty_list: bool = True
    empty_map: bool = True
    empty_struct: bool = True
    empty_tuple: bool = True
    true_value: bool = False
    false_value: bool = False
    type_tag: bool = True
    except_fields: tuple[str, ...] = ()

    def flags(self) -> dict[str, bool]:
        """Return every boolean flag keyed by its canonical name."""
        return {name: getattr(self, name) for name in FLAG_NAMES}

    def omits(self, category: OmitCategory) -> bool:
        """Return True if values of ``category`` are treated as empty."""
        return bool(getattr(self, category.value))

    def enabled_categories(self) -> tuple[OmitCategory, ...]:
        """Return the enabled categories in declaration order."""
        return tuple(c for c in OmitCategory if self.omits(c))

    def to_toml_table(self) -> dict[str, Any]:
        """Serialize to a TOML-friendly table (flags plus the ``except`` list).

        Returns:
            dict[str, Any]: Table with primitive types only.
        """
        out: dict[str, Any] = dict(self.flags())
        out[EXCEPT_KEY] = [str(name) for name in self.except_fields]
        return out


BUILTIN_DEFAULTS: Final[RuleSet] = RuleSet()


def builtin_defaults() -> RuleSet:
    """Return the builtin default rule set (the lowest configuration layer)."""
    return BUILTIN_DEFAULTS


# ------------------ Input shapes (tagged union) ------------------


@dataclass(frozen=True, slots=True)
class Empty:
    """No input: the baseline is kept as is."""

    def to_toml_value(self) -> None:
        """Return the TOML representation (TOML has no null, so ``None`` is dropped)."""
        return None


@dataclass(frozen=True, slots=True)
class KeyedOverrides:
    """Partial flag mapping merged over the baseline (last-wins per key).

    Attributes:
        values (Mapping[str, object]): Flag names (or aliases) to booleans, optionally
            with an ``except`` entry holding field names.
    """

    values: Mapping[str, object] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Snapshot the caller's mapping; the input must not change after construction.
        object.__setattr__(self, "values", dict(self.values))

    def to_toml_value(self) -> dict[str, Any]:
        """Return the overrides as a TOML table."""
        out: dict[str, Any] = {}
        for key, value in self.values.items():
            if is_except_key(key):
                out[EXCEPT_KEY] = [str(v) for v in _coerce_except(value) or ()]
            elif isinstance(value, int):
                out[str(key)] = bool(value)
        return out


@dataclass(frozen=True, slots=True)
class NamesOnly:
    """Destructive input: exactly the named flags are set, all others cleared.

    Attributes:
        names (frozenset[str]): Category names (or aliases, or ``type_tag``).
    """

    names: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", frozenset(self.names))

    def to_toml_value(self) -> list[str]:
        """Return the names as a sorted TOML array."""
        return sorted(str(n) for n in self.names)


@dataclass(frozen=True, slots=True)
class AlreadyResolved:
    """A complete rule set that short-circuits any further merging.

    Attributes:
        rules (RuleSet): The rule set returned by `resolve`.
    """

    rules: RuleSet = BUILTIN_DEFAULTS

    def to_toml_value(self) -> dict[str, Any]:
        """Return the full rule set as a TOML table."""
        return self.rules.to_toml_table()


RuleSetInput: TypeAlias = "Empty | KeyedOverrides | NamesOnly | AlreadyResolved"

_INPUT_TYPES: Final[tuple[type, ...]] = (Empty, KeyedOverrides, NamesOnly, AlreadyResolved)


def is_rule_set_input(obj: object) -> bool:
    """Return True if ``obj`` is one of the four `RuleSetInput` variants."""
    return isinstance(obj, _INPUT_TYPES)


def coerce_input(raw: object) -> RuleSetInput:
    """Map a loose Python or TOML value onto a `RuleSetInput` variant.

    Accepted shapes:
        - ``None``, ``[]``, ``{}`` -> `Empty`
        - a `RuleSetInput` variant -> itself
        - a `RuleSet` -> `AlreadyResolved`
        - a mapping -> `KeyedOverrides`
        - a string, or an iterable of strings -> `NamesOnly`
        - an iterable of ``(key, value)`` pairs -> `KeyedOverrides`

    Anything else is a configuration-shape error: it is logged and treated as
    `Empty` so rendering is never aborted by malformed configuration.

    Args:
        raw (object): The value to coerce.

    Returns:
        RuleSetInput: The matching variant.
    """
    if raw is None:
        return Empty()
    if isinstance(raw, _INPUT_TYPES):
        return raw  # type: ignore[return-value]
    if isinstance(raw, RuleSet):
        return AlreadyResolved(raw)
    if isinstance(raw, Mapping):
        return KeyedOverrides(raw) if raw else Empty()
    if isinstance(raw, str):
        return NamesOnly(frozenset({raw}))
    if isinstance(raw, Iterable) and not isinstance(raw, (bytes, bytearray)):
        items: list[Any] = list(raw)
        if not items:
            return Empty()
        if all(isinstance(item, str) for item in items):
            return NamesOnly(frozenset(items))
        if all(isinstance(item, tuple) and len(item) == 2 for item in items):
            return KeyedOverrides(dict(items))

    logger.warning("Unrecognized omission input %r; treating it as no override", raw)
    return Empty()


# ------------------ Resolution ------------------


def _coerce_except(value: object) -> tuple[str, ...] | None:
    """Normalize an ``except`` value to a tuple of names, or None if malformed."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(value)  # type: ignore[arg-type]
    return None


def _apply_keyed(baseline: RuleSet, values: Mapping[str, object]) -> RuleSet:
    changes: dict[str, Any] = {}
    for key, value in values.items():
        if is_except_key(key):
            names: tuple[str, ...] | None = _coerce_except(value)
            if names is None:
                logger.warning("Ignoring malformed '%s' value: %r", EXCEPT_KEY, value)
                continue
            changes["except_fields"] = names
            continue
        flag: str | None = parse_flag_name(key)
        if flag is None:
            logger.debug("Ignoring unknown omission key %r", key)
            continue
        if not isinstance(value, int):
            logger.warning("Ignoring non-boolean value for '%s': %r", key, value)
            continue
        changes[flag] = bool(value)
    return replace(baseline, **changes) if changes else baseline


def _apply_names(names: Iterable[str]) -> RuleSet:
    flags: dict[str, bool] = dict.fromkeys(FLAG_NAMES, False)
    for raw in names:
        flag: str | None = parse_flag_name(raw)
        if flag is None:
            logger.debug("Ignoring unknown omission name %r", raw)
            continue
        flags[flag] = True
    return RuleSet(**flags, except_fields=())


def resolve(baseline: RuleSet, override: object = None) -> RuleSet:
    """Apply one configuration layer on top of ``baseline``.

    Args:
        baseline (RuleSet): The rule set resolved from the lower layers.
        override (object): A `RuleSetInput` variant, or a loose shape accepted by
            [`coerce_input`][structinspect.core.rules.coerce_input].

    Returns:
        RuleSet: The resolved rule set. ``baseline`` itself is returned when the
        input changes nothing.
    """
    rsi: RuleSetInput = coerce_input(override)
    match rsi:
        case AlreadyResolved(rules=rules):
            return rules
        case KeyedOverrides(values=values):
            return _apply_keyed(baseline, values)
        case NamesOnly(names=names):
            return _apply_names(names)
        case _:
            return baseline


def effective_rules(process_wide: object = None, per_type: object = None) -> RuleSet:
    """Resolve the three configuration layers into the rule set used for filtering.

    ``effective = resolve(resolve(builtin_defaults(), process_wide), per_type)``

    Args:
        process_wide (object): The process-wide layer (read once from configuration).
        per_type (object): The per-type (or per-call) layer.

    Returns:
        RuleSet: The effective rule set.
    """
    return resolve(resolve(builtin_defaults(), process_wide), per_type)


__all__ = [
    "BUILTIN_DEFAULTS",
    "TYPE_TAG_FLAG",
    "AlreadyResolved",
    "Empty",
    "KeyedOverrides",
    "NamesOnly",
    "RuleSet",
    "RuleSetInput",
    "builtin_defaults",
    "coerce_input",
    "effective_rules",
    "is_rule_set_input",
    "resolve",
]
