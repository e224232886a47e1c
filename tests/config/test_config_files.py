# topmark:header:start
#
#   project      : StructInspect
#   file         : test_config_files.py
#   file_relpath : tests/config/test_config_files.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for loading TOML config files and upward discovery."""

from __future__ import annotations

from typing import TYPE_CHECKING

from structinspect.config.io import load_toml_dict_checked
from structinspect.config.model import MutableSettings
from structinspect.core.diagnostics import DiagnosticLevel
from structinspect.core.rules import NamesOnly

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_load_toml_reports_parse_errors(tmp_path: Path) -> None:
    """Invalid TOML yields an empty table and an error message."""
    bad: Path = _write(tmp_path / "structinspect.toml", "omit = [\n")
    data, err = load_toml_dict_checked(bad)
    assert data == {}
    assert err is not None
    assert "Invalid TOML" in err


def test_from_toml_file_structinspect_toml(tmp_path: Path) -> None:
    """``structinspect.toml`` keys live at the top level."""
    cfg: Path = _write(tmp_path / "structinspect.toml", 'omit = ["nil_value"]\n')
    draft: MutableSettings = MutableSettings.from_toml_file(cfg)
    assert draft.omit == NamesOnly(frozenset({"nil_value"}))
    assert draft.config_files == [cfg]


def test_from_toml_file_pyproject_section(tmp_path: Path) -> None:
    """``pyproject.toml`` keys live under ``[tool.structinspect]``."""
    cfg: Path = _write(
        tmp_path / "pyproject.toml",
        '[project]\nname = "x"\n\n[tool.structinspect]\nomit = ["true_value"]\n',
    )
    draft: MutableSettings = MutableSettings.from_toml_file(cfg)
    assert draft.omit == NamesOnly(frozenset({"true_value"}))


def test_from_toml_file_pyproject_without_section(tmp_path: Path) -> None:
    """A pyproject without the tool section yields a warning and no settings."""
    cfg: Path = _write(tmp_path / "pyproject.toml", '[project]\nname = "x"\n')
    draft: MutableSettings = MutableSettings.from_toml_file(cfg)
    assert [d.level for d in draft.diagnostics] == [DiagnosticLevel.WARNING]


def test_from_toml_file_invalid_is_error(tmp_path: Path) -> None:
    """Parse failures are recorded as errors on the draft."""
    cfg: Path = _write(tmp_path / "structinspect.toml", "omit = \n")
    draft: MutableSettings = MutableSettings.from_toml_file(cfg)
    assert draft.diagnostics.has_error()


def test_discovery_order_root_to_anchor(tmp_path: Path) -> None:
    """Files are merged root-most first; pyproject before structinspect.toml."""
    top: Path = _write(tmp_path / "structinspect.toml", 'root = true\nomit = ["nil_value"]\n')
    py: Path = _write(
        tmp_path / "pkg" / "pyproject.toml", '[tool.structinspect]\nomit = ["true_value"]\n'
    )
    local: Path = _write(tmp_path / "pkg" / "structinspect.toml", 'omit = ["false_value"]\n')
    _write(tmp_path / "pkg" / "sub" / "keep.txt", "")

    found: list[Path] = MutableSettings.discover_local_config_files(tmp_path / "pkg" / "sub")
    assert found == [top.resolve(), py.resolve(), local.resolve()]

    merged: MutableSettings = MutableSettings.load_merged(input_paths=[tmp_path / "pkg" / "sub"])
    assert merged.omit == NamesOnly(frozenset({"false_value"}))
    assert merged.config_files[0] == "<defaults>"


def test_discovery_stops_at_root_true(tmp_path: Path) -> None:
    """Directories above a ``root = true`` config are not searched."""
    _write(tmp_path / "structinspect.toml", 'omit = ["nil_value"]\n')
    inner: Path = _write(tmp_path / "proj" / "structinspect.toml", "root = true\n")
    found: list[Path] = MutableSettings.discover_local_config_files(tmp_path / "proj")
    assert found == [inner.resolve()]


def test_discovery_skips_pyproject_without_section(tmp_path: Path) -> None:
    """A pyproject without ``[tool.structinspect]`` is not a config source."""
    _write(tmp_path / "pyproject.toml", '[project]\nname = "x"\n')
    local: Path = _write(tmp_path / "structinspect.toml", "root = true\n")
    assert MutableSettings.discover_local_config_files(tmp_path) == [local.resolve()]


def test_no_config_still_merges_explicit_files(tmp_path: Path) -> None:
    """``no_config`` skips discovery; explicit files are merged last."""
    _write(tmp_path / "structinspect.toml", 'root = true\nomit = ["nil_value"]\n')
    extra: Path = _write(tmp_path / "extra" / "custom.toml", 'omit = ["empty_list"]\n')

    merged: MutableSettings = MutableSettings.load_merged(
        input_paths=[tmp_path], extra_config_files=[extra], no_config=True
    )
    assert merged.omit == NamesOnly(frozenset({"empty_list"}))
    assert merged.config_files == ["<defaults>", extra]

    merged = MutableSettings.load_merged(input_paths=[tmp_path])
    assert merged.omit == NamesOnly(frozenset({"nil_value"}))
