# topmark:header:start
#
#   project      : StructInspect
#   file         : test_decorators.py
#   file_relpath : tests/api/test_decorators.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `@struct_inspect` and override patching."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

import pytest

import structinspect
from structinspect import struct_inspect
from structinspect.core.rules import NamesOnly, RuleSet
from structinspect.decorators import overridden_types
from tests.models import NotARecord, Vendor


@struct_inspect
@dataclass
class Plain:
    name: str = ""
    note: str | None = None
    count: int = 0


@struct_inspect(omit=["nil_value", "type_tag"])
@dataclass
class Profile:
    name: str = ""
    bio: str | None = None
    tags: list[str] = field(default_factory=list)


@struct_inspect(omit={"except": ["password"]})
@dataclass
class Login:
    user: str = ""
    password: str = ""


@struct_inspect(omit=["zero_integer_value"])
class Pair(NamedTuple):
    left: int = 0
    right: int = 0


@struct_inspect
@dataclass
class Wrapper:
    label: str = ""
    profile: Profile | None = None
    vendor: Vendor | None = None


@struct_inspect
@dataclass
class Tree:
    label: str = ""
    parent: Tree | None = None
    children: list[Tree] = field(default_factory=list)


def test_bare_decorator_uses_process_wide_rules() -> None:
    """Without arguments the process-wide rules apply."""
    assert repr(Plain(name="x")) == "Plain(name='x', count=0)"
    structinspect.configure({"omit": {"zero_integer_value": True}})
    assert repr(Plain(name="x")) == "Plain(name='x')"


def test_declared_names_only_input() -> None:
    """A names-only declaration keeps everything but the named categories."""
    assert repr(Profile(name="")) == "Profile(name='', tags=[])"
    assert structinspect.rules_for(Profile) == RuleSet(
        **{**dict.fromkeys(RuleSet().flags(), False), "nil_value": True, "type_tag": True}
    )


def test_declared_keyed_input_merges_over_process_wide() -> None:
    """A keyed declaration overlays the process-wide rules."""
    assert repr(Login(user="ada", password="hunter2")) == "Login(user='ada')"


def test_named_tuple_decoration() -> None:
    """Named tuples can be decorated too."""
    # names-only without type_tag shows the tag
    assert repr(Pair(0, 3)) == "Pair(__type__=Pair, right=3)"
    assert Pair(0, 3) == (0, 3)


def test_decorated_input_is_stored_on_the_class() -> None:
    """The per-type input is coerced once, at decoration time."""
    expected = NamesOnly(frozenset({"nil_value", "type_tag"}))
    assert structinspect.api.declared_input(Profile) == expected
    assert structinspect.api.declared_input(Vendor) is None


def test_nested_decorated_records_use_their_own_rules() -> None:
    """Nested decorated records are filtered with their own rules; others use repr."""
    w = Wrapper(label="w", profile=Profile(name="p"), vendor=Vendor(name="v"))
    assert repr(w) == (
        "Wrapper(label='w', profile=Profile(name='p', tags=[]), "
        "vendor=Vendor(name='v', note=None, flags=[]))"
    )


def test_decoration_keeps_equality() -> None:
    """Only the representation changes."""
    assert Profile(name="a") == Profile(name="a")


def test_decorator_rejects_plain_classes() -> None:
    """Only dataclasses and named tuples can be decorated."""
    with pytest.raises(TypeError):
        struct_inspect(NotARecord)


def test_recursive_records_terminate() -> None:
    """Cycles through containers render with the cycle marker instead of recursing."""
    root = Tree(label="root")
    child = Tree(label="child", parent=root)
    root.children.append(child)
    text: str = repr(root)
    assert text.startswith("Tree(label='root', children=[Tree(label='child'")
    assert "..." in text


def test_enable_overrides_patches_registered_types() -> None:
    """Registered third-party types get the compact repr until disabled."""
    original: str = repr(Vendor(name="v"))
    patched = structinspect.enable_overrides(
        structinspect.Settings(overrides=("tests.models.Vendor", "dict"))
    )
    assert patched == (Vendor,)
    assert overridden_types() == (Vendor,)
    assert repr(Vendor(name="v")) == "Vendor(name='v')"
    assert repr({"a": None}) == "{'a': None}"

    # Patching twice is a no-op
    assert structinspect.enable_overrides() == ()

    structinspect.disable_overrides()
    assert repr(Vendor(name="v")) == original
    assert overridden_types() == ()


def test_override_entry_options_apply_to_patched_repr() -> None:
    """The entry's omit input is used by the patched repr."""
    structinspect.configure(
        {"overrides": [{"type": "tests.models.Vendor", "omit": {"nil_value": False}}]}
    )
    structinspect.enable_overrides()
    assert repr(Vendor(name="v")) == "Vendor(name='v', note=None)"
