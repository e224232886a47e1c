# topmark:header:start
#
#   project      : StructInspect
#   file         : test_toml_render.py
#   file_relpath : tests/config/test_toml_render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for TOML rendering helpers in structinspect.config.io."""

from __future__ import annotations

from typing import Any

import tomlkit

from structinspect.config.io import get_bool_value_checked, get_dotted_table, has_dotted_table, to_toml
from structinspect.core.diagnostics import DiagnosticLog


def test_to_toml_strips_none_and_orders_tables() -> None:
    """`None` entries are dropped and plain keys are written before tables."""
    text: str = to_toml({"omit": {"nil_value": True, "skip": None}, "overrides": []})
    parsed: Any = tomlkit.parse(text).unwrap()
    assert parsed == {"overrides": [], "omit": {"nil_value": True}}
    assert text.index("overrides") < text.index("[omit]")


def test_to_toml_renders_inline_override_tables() -> None:
    """Tables inside arrays are rendered as inline tables."""
    text: str = to_toml({"overrides": ["a.B", {"type": "a.C", "omit": ["nil_value"]}]})
    assert "[[overrides]]" not in text
    assert 'type = "a.C"' in text
    parsed: Any = tomlkit.parse(text).unwrap()
    assert parsed["overrides"][1] == {"type": "a.C", "omit": ["nil_value"]}


def test_get_bool_value_checked_records_warning() -> None:
    """Non-boolean values fall back to the default and are recorded."""
    log = DiagnosticLog()
    assert get_bool_value_checked({"root": 1}, "root", where="cfg", diagnostics=log) is False
    assert get_bool_value_checked({"root": True}, "root", where="cfg", diagnostics=log) is True
    assert len(log) == 1
    assert "cfg.root" in next(iter(log)).message


def test_dotted_tables() -> None:
    """Dotted paths address nested tables; missing tables yield empty dicts."""
    data: dict[str, Any] = {"tool": {"structinspect": {"omit": []}}}
    assert has_dotted_table(data, "tool.structinspect") is True
    assert has_dotted_table(data, "tool.other") is False
    assert get_dotted_table(data, "tool.structinspect") == {"omit": []}
    assert get_dotted_table(data, "tool.other") == {}
