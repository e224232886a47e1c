# topmark:header:start
#
#   project      : StructInspect
#   file         : test_cli_config.py
#   file_relpath : tests/cli/test_cli_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: `config dump` and `config check`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import tomlkit

from tests.cli.conftest import (
    assert_CONFIG_ERROR,
    assert_SUCCESS,
    run_cli_in,
    write_root_config,
)
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result


@mark_cli
def test_config_dump_outputs_valid_toml(tmp_path: Path) -> None:
    """The dump is valid TOML reflecting the discovered settings."""
    write_root_config(
        tmp_path,
        'omit = ["nil_value"]\n'
        "overrides = [\n"
        '  "tests.models.Address",\n'
        '  { type = "tests.models.Vendor", omit = { nil_value = false } },\n'
        "]\n",
    )
    result: Result = run_cli_in(tmp_path, ["--no-color", "config", "dump"])
    assert_SUCCESS(result)

    parsed: Any = tomlkit.parse(result.output).unwrap()
    assert parsed["omit"] == ["nil_value"]
    assert parsed["overrides"] == [
        "tests.models.Address",
        {"type": "tests.models.Vendor", "omit": {"nil_value": False}},
    ]


@mark_cli
def test_config_dump_verbose_lists_sources_as_comments(tmp_path: Path) -> None:
    """Verbose output lists the config sources as TOML comments."""
    cfg: Path = write_root_config(tmp_path)
    result: Result = run_cli_in(tmp_path, ["--no-color", "-v", "config", "dump"])
    assert_SUCCESS(result)
    assert "# Config source 1: <defaults>" in result.output
    assert f"# Config source 2: {cfg.resolve()}" in result.output
    assert tomlkit.parse(result.output).unwrap() == {"overrides": []}


@mark_cli
def test_config_dump_explicit_config_wins(tmp_path: Path) -> None:
    """``--config`` files are merged after discovery; ``--no-config`` skips discovery."""
    write_root_config(tmp_path, 'omit = ["nil_value"]\n')
    (tmp_path / "extra.toml").write_text('omit = ["true_value"]\n', encoding="utf-8")

    result: Result = run_cli_in(
        tmp_path, ["--no-color", "config", "dump", "--config", "extra.toml"]
    )
    assert_SUCCESS(result)
    assert tomlkit.parse(result.output).unwrap()["omit"] == ["true_value"]

    result = run_cli_in(tmp_path, ["--no-color", "config", "dump", "--no-config"])
    assert_SUCCESS(result)
    assert "omit" not in tomlkit.parse(result.output).unwrap()


@mark_cli
def test_config_check_ok(tmp_path: Path) -> None:
    """A clean configuration passes."""
    write_root_config(tmp_path, 'omit = ["nil_value"]\n')
    result: Result = run_cli_in(tmp_path, ["--no-color", "config", "check"])
    assert_SUCCESS(result)
    assert "Config OK" in result.output
    assert result.output.rstrip().endswith("OK")


@mark_cli
def test_config_check_errors_fail(tmp_path: Path) -> None:
    """Errors make the check fail with CONFIG_ERROR."""
    write_root_config(tmp_path, 'overrides = ["no_such_module_xyz.Thing"]\n')
    result: Result = run_cli_in(tmp_path, ["--no-color", "config", "check"])
    assert_CONFIG_ERROR(result)
    assert "1 error(s)" in result.output
    assert "- error:" in result.output
    assert "FAILED" in result.output


@mark_cli
def test_config_check_invalid_toml_fails(tmp_path: Path) -> None:
    """Unparseable config files are errors."""
    (tmp_path / "structinspect.toml").write_text("root = true\nomit = [\n", encoding="utf-8")
    (tmp_path / "broken.toml").write_text("omit = \n", encoding="utf-8")
    result: Result = run_cli_in(
        tmp_path, ["--no-color", "config", "check", "--no-config", "--config", "broken.toml"]
    )
    assert_CONFIG_ERROR(result)
    assert "Invalid TOML" in result.output


@mark_cli
def test_config_check_strict_fails_on_warnings(tmp_path: Path) -> None:
    """Warnings pass by default and fail with ``--strict``."""
    write_root_config(tmp_path, 'omit = ["nil_valeu"]\n')

    result: Result = run_cli_in(tmp_path, ["--no-color", "config", "check"])
    assert_SUCCESS(result)
    assert "1 warning(s)" in result.output
    assert "nil_valeu" in result.output

    result = run_cli_in(tmp_path, ["--no-color", "config", "check", "--strict"])
    assert_CONFIG_ERROR(result)


@mark_cli
def test_config_check_quiet_hides_warnings(tmp_path: Path) -> None:
    """With ``-q`` only errors are listed."""
    write_root_config(tmp_path, 'omit = ["nil_valeu"]\n')
    result: Result = run_cli_in(tmp_path, ["--no-color", "-q", "config", "check"])
    assert_SUCCESS(result)
    assert "nil_valeu" not in result.output
