"""Tests for the covhtml CLI commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
import yaml
from click.testing import CliRunner

from covhtml import __version__
from covhtml.cli import _config_to_dict, cli
from covhtml.config import CONFIG_FILENAME, load_config
from covhtml.themes import get_theme

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("COVHTML_THEME", raising=False)
    monkeypatch.delenv("COVHTML_STYLESHEET", raising=False)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_commands(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    for name in ("render", "summary", "themes", "css", "config"):
        assert name in result.output


# ── render ──────────────────────────────────────────────────────


class TestRender:
    def test_stdin_to_stdout(
        self, runner: CliRunner, tmp_path: Path, single_package_json: bytes
    ) -> None:
        result = runner.invoke(
            cli, ["render", "--path", str(tmp_path)], input=single_package_json
        )
        assert result.exit_code == 0, result.output
        assert "<!DOCTYPE html>" in result.output
        assert "pkg/a" in result.output

    def test_file_to_output(
        self, runner: CliRunner, tmp_path: Path, two_package_json: bytes
    ) -> None:
        src = tmp_path / "coverage.json"
        src.write_bytes(two_package_json)
        out = tmp_path / "coverage.html"
        result = runner.invoke(
            cli, ["render", str(src), "-t", "kit", "-o", str(out), "--path", str(tmp_path)]
        )
        assert result.exit_code == 0, result.output
        assert "Report written to" in result.output
        html = out.read_text(encoding="utf-8")
        assert html.startswith("\n<!DOCTYPE html>")
        assert get_theme("kit").style in html
        assert "Report Total" in html

    def test_custom_stylesheet(
        self, runner: CliRunner, tmp_path: Path, single_package_json: bytes
    ) -> None:
        css = tmp_path / "custom.css"
        css.write_text("p { margin: 0; }", encoding="utf-8")
        out = tmp_path / "r.html"
        result = runner.invoke(
            cli,
            ["render", "-s", str(css), "-o", str(out), "--path", str(tmp_path)],
            input=single_package_json,
        )
        assert result.exit_code == 0, result.output
        assert "p { margin: 0; }" in out.read_text(encoding="utf-8")

    def test_missing_stylesheet_aborts(
        self, runner: CliRunner, tmp_path: Path, single_package_json: bytes
    ) -> None:
        result = runner.invoke(
            cli,
            ["render", "-s", str(tmp_path / "missing.css"), "--path", str(tmp_path)],
            input=single_package_json,
        )
        assert result.exit_code != 0
        assert "stylesheet:" in result.output
        assert "<!DOCTYPE html>" not in result.output

    def test_invalid_json_keeps_stdout_clean(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["render", "--path", str(tmp_path)], input=b"{nope")
        assert result.exit_code != 0
        assert result.stdout == ""
        assert "unmarshal coverage data" in result.stderr

    @pytest.mark.parametrize(
        ("extra_args", "data"),
        [
            (["-s", "missing.css"], b'{"Packages": []}'),
            ([], b"{nope"),
        ],
    )
    def test_failure_keeps_existing_output(
        self, runner: CliRunner, tmp_path: Path, extra_args: list[str], data: bytes
    ) -> None:
        src = tmp_path / "coverage.json"
        src.write_bytes(data)
        out = tmp_path / "report.html"
        out.write_text("previous report", encoding="utf-8")
        args = [str(tmp_path / a) if a.endswith(".css") else a for a in extra_args]
        result = runner.invoke(
            cli, ["render", str(src), "-o", str(out), "--path", str(tmp_path), *args]
        )
        assert result.exit_code != 0
        assert out.read_text(encoding="utf-8") == "previous report"

    def test_failure_does_not_create_output(self, runner: CliRunner, tmp_path: Path) -> None:
        out = tmp_path / "report.html"
        result = runner.invoke(
            cli, ["render", "-o", str(out), "--path", str(tmp_path)], input=b"{nope"
        )
        assert result.exit_code != 0
        assert not out.exists()

    def test_unknown_theme_rejected(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["render", "-t", "fancy", "--path", str(tmp_path)], input=b"")
        assert result.exit_code == 2

    def test_theme_from_config(
        self, runner: CliRunner, tmp_path: Path, single_package_json: bytes
    ) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            yaml.dump({"report": {"theme": "kit", "output": "out.html"}}), encoding="utf-8"
        )
        result = runner.invoke(
            cli, ["render", "--path", str(tmp_path)], input=single_package_json
        )
        assert result.exit_code == 0, result.output
        assert get_theme("kit").style in (tmp_path / "out.html").read_text(encoding="utf-8")

    def test_bad_merge_rule_in_config(
        self, runner: CliRunner, tmp_path: Path, single_package_json: bytes
    ) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            yaml.dump({"report": {"merge_rule": "avg"}}), encoding="utf-8"
        )
        result = runner.invoke(
            cli, ["render", "--path", str(tmp_path)], input=single_package_json
        )
        assert result.exit_code != 0
        assert "Unknown merge rule" in result.output


# ── summary / themes / css ──────────────────────────────────────


class TestSummary:
    def test_table(self, runner: CliRunner, tmp_path: Path, two_package_json: bytes) -> None:
        result = runner.invoke(cli, ["summary", "--path", str(tmp_path)], input=two_package_json)
        assert result.exit_code == 0, result.output
        assert "pkg/a" in result.output
        assert "pkg/b" in result.output
        assert "Report Total" in result.output

    def test_single_package_has_no_total(
        self, runner: CliRunner, tmp_path: Path, single_package_json: bytes
    ) -> None:
        result = runner.invoke(
            cli, ["summary", "--path", str(tmp_path)], input=single_package_json
        )
        assert result.exit_code == 0, result.output
        assert "Report Total" not in result.output

    def test_empty(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["summary", "--path", str(tmp_path)], input=b'{"Packages": []}')
        assert result.exit_code == 0
        assert "No packages" in result.stderr

    def test_invalid_input(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["summary", "--path", str(tmp_path)], input=b"[]")
        assert result.exit_code != 0
        assert result.stdout == ""


def test_themes_command(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["themes"])
    assert result.exit_code == 0
    assert "golang" in result.output
    assert "kit" in result.output


@pytest.mark.parametrize("theme", ["golang", "kit"])
def test_css_command(runner: CliRunner, theme: str) -> None:
    result = runner.invoke(cli, ["css", "-t", theme])
    assert result.exit_code == 0
    assert result.output == get_theme(theme).style


# ── config ──────────────────────────────────────────────────────


class TestConfigCommands:
    def test_show_json(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            yaml.dump({"report": {"theme": "kit"}}), encoding="utf-8"
        )
        result = runner.invoke(cli, ["config", "show", "--path", str(tmp_path), "--json-output"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["report"]["theme"] == "kit"
        assert "raw" not in data

    def test_show_yaml(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["config", "show", "--path", str(tmp_path)])
        assert result.exit_code == 0
        assert "theme: golang" in result.output

    def test_validate_ok(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["config", "validate", "--path", str(tmp_path)])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output

    def test_validate_errors(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            yaml.dump({"report": {"theme": "fancy"}}), encoding="utf-8"
        )
        result = runner.invoke(cli, ["config", "validate", "--path", str(tmp_path)])
        assert result.exit_code != 0
        assert "report.theme" in result.output

    def test_config_to_dict_drops_raw(self, tmp_path: Path) -> None:
        data = _config_to_dict(load_config(tmp_path))
        assert set(data) == {"root", "report"}
