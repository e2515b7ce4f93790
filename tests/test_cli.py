"""Tests for the handoff CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from handoff.cli import main


@pytest.fixture
def base_args(tmp_path: Path) -> list[str]:
    # Point at a config file that does not exist so ~/.handoff is never read
    return ["--config", str(tmp_path / "config.yaml")]


@pytest.fixture
def agents_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "agents"
    directory.mkdir()
    (directory / "lead.yaml").write_text("name: lead\nmodel: opus\ndependencies: [dev]\n")
    (directory / "dev.yaml").write_text("name: dev\nmodel: sonnet\ndependencies: [lib]\n")
    (directory / "lib.yaml").write_text("name: lib\n")
    return directory


def test_version() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_select(base_args: list[str]) -> None:
    runner = CliRunner()
    result = runner.invoke(
        main,
        base_args + ["select", "fix typo in comment", "--type", "bug fix", "--file", "a.py"],
    )
    assert result.exit_code == 0
    assert "moderate" in result.output
    assert "developer" in result.output
    assert "sonnet" in result.output


def test_select_with_configured_skills(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("skills:\n  - name: go-code\n    triggers: [golang]\n")

    runner = CliRunner()
    result = runner.invoke(
        main,
        ["--config", str(config), "select", "add handler", "--type", "feature", "--meta", "lang=golang"],
    )
    assert result.exit_code == 0
    assert "go-code" in result.output


def test_select_unknown_type(base_args: list[str]) -> None:
    runner = CliRunner()
    result = runner.invoke(main, base_args + ["select", "tidy up", "--type", "chore"])
    assert result.exit_code == 1
    assert "unknown task type" in result.output


def test_select_empty_description(base_args: list[str]) -> None:
    runner = CliRunner()
    result = runner.invoke(main, base_args + ["select", "", "--type", "feature"])
    assert result.exit_code == 1
    assert "invalid task" in result.output


def test_select_bad_meta(base_args: list[str]) -> None:
    runner = CliRunner()
    result = runner.invoke(main, base_args + ["select", "x", "--type", "test", "--meta", "novalue"])
    assert result.exit_code == 1
    assert "KEY=VALUE" in result.output


def test_chain(base_args: list[str]) -> None:
    runner = CliRunner()
    result = runner.invoke(main, base_args + ["chain", "fix crash", "--type", "bugfix"])
    assert result.exit_code == 0
    assert "senior → developer → reviewer" in result.output


def test_next(base_args: list[str]) -> None:
    runner = CliRunner()
    result = runner.invoke(main, base_args + ["next", "fix crash", "--type", "bugfix", "--role", "senior"])
    assert result.exit_code == 0
    assert "developer" in result.output


def test_next_end_of_chain(base_args: list[str]) -> None:
    runner = CliRunner()
    result = runner.invoke(main, base_args + ["next", "fix crash", "--type", "bugfix", "--role", "reviewer"])
    assert result.exit_code == 0
    assert "Chain complete" in result.output


def test_can_hand_off(base_args: list[str]) -> None:
    runner = CliRunner()
    allowed = runner.invoke(main, base_args + ["can-hand-off", "architect", "senior"])
    denied = runner.invoke(main, base_args + ["can-hand-off", "reviewer", "developer"])

    assert allowed.exit_code == 0
    assert "allowed" in allowed.output
    assert "not allowed" not in allowed.output
    assert "not allowed" in denied.output


def test_deps_resolve(base_args: list[str], agents_dir: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(main, base_args + ["deps", "--agents-dir", str(agents_dir), "resolve", "dev"])
    assert result.exit_code == 0
    assert "dev" in result.output
    assert "lib" in result.output
    assert "lead" not in result.output


def test_deps_resolve_unknown(base_args: list[str], agents_dir: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(main, base_args + ["deps", "--agents-dir", str(agents_dir), "resolve", "ghost"])
    assert result.exit_code == 1
    assert "agent not found: ghost" in result.output


def test_deps_order(base_args: list[str], agents_dir: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(main, base_args + ["deps", "--agents-dir", str(agents_dir), "order", "--load-order"])
    assert result.exit_code == 0
    assert result.output.index("lib") < result.output.index("lead")


def test_deps_validate(base_args: list[str], agents_dir: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(main, base_args + ["deps", "--agents-dir", str(agents_dir), "validate"])
    assert result.exit_code == 0
    assert "OK" in result.output


def test_deps_validate_cycle(base_args: list[str], agents_dir: Path) -> None:
    (agents_dir / "lib.yaml").write_text("name: lib\ndependencies: [lead]\n")

    runner = CliRunner()
    result = runner.invoke(main, base_args + ["deps", "--agents-dir", str(agents_dir), "validate"])
    assert result.exit_code == 1
    assert "cycle" in result.output


def test_deps_missing_directory(base_args: list[str], tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(main, base_args + ["deps", "--agents-dir", str(tmp_path / "none"), "order"])
    assert result.exit_code == 1
    assert "cannot read agents directory" in result.output


def test_deps_subcommand_help_without_agents_directory(base_args: list[str], tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(main, base_args + ["deps", "--agents-dir", str(tmp_path / "none"), "order", "--help"])
    assert result.exit_code == 0
    assert "--load-order" in result.output


def test_deps_order_cycle_shows_path(base_args: list[str], agents_dir: Path) -> None:
    (agents_dir / "lib.yaml").write_text("name: lib\ndependencies: [lead]\n")

    runner = CliRunner()
    result = runner.invoke(main, base_args + ["deps", "--agents-dir", str(agents_dir), "order"])
    assert result.exit_code == 1
    assert "cycle detected in dependency graph:" in result.output
