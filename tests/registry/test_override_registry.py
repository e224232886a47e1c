# topmark:header:start
#
#   project      : StructInspect
#   file         : test_override_registry.py
#   file_relpath : tests/registry/test_override_registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for override entry normalization and the override registry."""

from __future__ import annotations

import pytest

from structinspect.core.diagnostics import Diagnostic, DiagnosticLevel
from structinspect.core.errors import OverrideTargetError
from structinspect.core.rules import (
    AlreadyResolved,
    KeyedOverrides,
    NamesOnly,
    RuleSet,
    builtin_defaults,
)
from structinspect.registry import (
    OverrideEntry,
    OverrideRegistry,
    check_overrides,
    import_type,
    is_rewritable_type,
    normalize_override,
)
from tests.conftest import parametrize
from tests.models import Address, NotARecord, Point, Vendor


def test_bare_entry_normalizes_to_builtin_defaults() -> None:
    """A bare type (class or path) carries the builtin defaults."""
    entry: OverrideEntry | None = normalize_override("tests.models.Address")
    assert entry == OverrideEntry("tests.models.Address", AlreadyResolved(builtin_defaults()))
    assert entry is not None and entry.is_bare
    assert normalize_override(Address) == OverrideEntry(Address, AlreadyResolved(builtin_defaults()))


def test_pair_and_table_entries_keep_their_input() -> None:
    """Pairs and tables carry their omit input as given."""
    assert normalize_override((Vendor, ["nil_value"])) == OverrideEntry(
        Vendor, NamesOnly(frozenset({"nil_value"}))
    )
    entry: OverrideEntry | None = normalize_override(
        {"type": "tests.models.Vendor", "omit": {"nil_value": False}}
    )
    assert entry == OverrideEntry("tests.models.Vendor", KeyedOverrides({"nil_value": False}))


@parametrize("raw", [42, None, {"omit": []}, (1, 2, 3), ("a",)])
def test_unrecognized_entries(raw: object) -> None:
    """Shapes without a type are not entries."""
    assert normalize_override(raw) is None


@parametrize(
    "target, expected",
    [
        ("tests.models.Address", Address),
        ("tests.models:Point", Point),
        ("dict", dict),
        (Vendor, Vendor),
        ("tests.models.Missing", None),
        ("no_such_module_xyz.Thing", None),
        ("tests.models.TYPE_CHECKING_NOT_HERE", None),
    ],
)
def test_import_type(target: type | str, expected: type | None) -> None:
    """Dotted and colon paths resolve; failures return None."""
    assert import_type(target) is expected


def test_import_type_strict_raises() -> None:
    """Strict mode raises `OverrideTargetError`."""
    with pytest.raises(OverrideTargetError):
        import_type("tests.models.Missing", strict=True)
    with pytest.raises(OverrideTargetError):
        import_type("tests.models.field", strict=True)


@parametrize(
    "cls, expected",
    [(dict, True), (Address, True), (Point, True), (RuleSet, False), (NotARecord, False), (list, False)],
)
def test_is_rewritable_type(cls: type, expected: bool) -> None:
    """Only record types (and dict) may be overridden; RuleSet never."""
    assert is_rewritable_type(cls) is expected


def test_registry_drops_invalid_entries() -> None:
    """Invalid entries are dropped silently; valid ones keep their order."""
    registry: OverrideRegistry = OverrideRegistry.from_entries(
        [
            "tests.models.Address",
            "tests.models.NotARecord",
            RuleSet,
            "no_such_module_xyz.Thing",
            42,
            "dict",
            (Vendor, ["nil_value"]),
        ]
    )
    assert registry.types() == (Address, dict, Vendor)


def test_registry_later_entries_win() -> None:
    """A later entry for the same type replaces the earlier one."""
    registry: OverrideRegistry = OverrideRegistry.from_entries(
        [(Vendor, ["nil_value"]), {"type": "tests.models.Vendor", "omit": ["empty_list"]}]
    )
    assert len(registry) == 1
    assert registry.input_for(Vendor) == NamesOnly(frozenset({"empty_list"}))


def test_registry_rules_for() -> None:
    """Keyed entries merge over the process-wide layer; bare entries ignore it."""
    registry: OverrideRegistry = OverrideRegistry.from_entries(
        [Address, (Vendor, {"nil_value": False})]
    )
    process_wide = RuleSet(zero_integer_value=True)

    vendor_rules: RuleSet | None = registry.rules_for(Vendor, process_wide)
    assert vendor_rules == RuleSet(zero_integer_value=True, nil_value=False)

    assert registry.rules_for(Address, process_wide) == builtin_defaults()
    assert registry.rules_for(Point, process_wide) is None
    # Loose process-wide inputs are resolved over the builtin defaults first
    flags: dict[str, bool] = dict.fromkeys(RuleSet().flags(), False)
    flags["zero_integer_value"] = True
    assert registry.rules_for(Vendor, ["zero_integer_value"]) == RuleSet(**flags)


def test_check_overrides_reports_problems() -> None:
    """Every dropped or partly ignored entry is reported."""
    diags: list[Diagnostic] = check_overrides(
        [
            "tests.models.Address",
            "no_such_module_xyz.Thing",
            "tests.models.NotARecord",
            {"type": "tests.models.Vendor", "omit": ["bogus"], "extra": 1},
            17,
        ]
    )
    levels = [d.level for d in diags]
    assert levels == [
        DiagnosticLevel.ERROR,
        DiagnosticLevel.ERROR,
        DiagnosticLevel.WARNING,
        DiagnosticLevel.WARNING,
        DiagnosticLevel.ERROR,
    ]
    assert "overrides[1]" in diags[0].message
    assert "overrides[4]" in diags[-1].message


def test_check_overrides_rejects_non_list() -> None:
    """The value itself must be a list."""
    diags: list[Diagnostic] = check_overrides("tests.models.Address")
    assert [d.level for d in diags] == [DiagnosticLevel.ERROR]


def test_entry_to_toml_value() -> None:
    """Bare entries export as strings, others as inline tables."""
    assert normalize_override(Address).to_toml_value() == "tests.models.Address"  # type: ignore[union-attr]
    assert normalize_override((Vendor, None)).to_toml_value() == {  # type: ignore[union-attr]
        "type": "tests.models.Vendor"
    }
