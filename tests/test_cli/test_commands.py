"""Tests for the cssguide CLI commands."""
from __future__ import annotations

import json
import logging
from pathlib import Path

from click.testing import CliRunner

from cssguide import __version__
from cssguide.cli.main import cli

CLEAN = ".a {\n\tcolor: red;\n}\n"
DIRTY = ".a{color:#FFF}\n"


def _write(root: Path, name: str, text: str) -> Path:
    path = root / name
    path.write_text(text)
    return path


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_help_lists_commands(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "check" in result.output
        assert "fix" in result.output
        assert "rules" in result.output

    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_verbose_logs_progress(self, tmp_path: Path) -> None:
        _write(tmp_path, "a.css", CLEAN)
        logger = logging.getLogger("cssguide")
        runner = CliRunner()
        try:
            result = runner.invoke(cli, ["-v", "check", str(tmp_path)])
            assert result.exit_code == 0
            assert logger.level == logging.DEBUG
            assert logger.handlers
        finally:
            logger.handlers.clear()
            logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


class TestCheckCommand:
    def test_clean_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "a.css", CLEAN)
        runner = CliRunner()
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 0
        assert "Summary: 0 error(s), 0 warning(s), 0 info in 1 file(s)" in result.output

    def test_violations_exit_one(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "a.css", DIRTY)
        runner = CliRunner()
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 1
        assert f"{path}:1:10: WARNING hex-case: Hex color '#FFF' should be lowercase." in (
            result.output
        )

    def test_directory(self, tmp_path: Path) -> None:
        _write(tmp_path, "a.css", CLEAN)
        _write(tmp_path, "b.scss", CLEAN)
        runner = CliRunner()
        result = runner.invoke(cli, ["check", str(tmp_path)])
        assert result.exit_code == 0
        assert "in 2 file(s)" in result.output

    def test_json(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "a.css", DIRTY)
        runner = CliRunner()
        result = runner.invoke(cli, ["check", "--json", str(path)])
        assert result.exit_code == 1
        payload = json.loads(result.output)
        rules = {v["rule"] for v in payload["files"][0]["violations"]}
        assert {"brace-spacing", "hex-case"} <= rules

    def test_group_by_rule(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "a.css", DIRTY)
        runner = CliRunner()
        result = runner.invoke(cli, ["check", "--group", "rule", str(path)])
        assert "hex-case (1)" in result.output

    def test_disable_and_enable(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "a.css", ".cb {\n\tcolor: #FFF;\n}\n")
        runner = CliRunner()
        result = runner.invoke(
            cli, ["check", "--disable", "hex-case", "--enable", "naming", str(path)]
        )
        assert result.exit_code == 1
        assert "hex-case" not in result.output
        assert "naming" in result.output

    def test_preprocessor_flag(self, tmp_path: Path) -> None:
        path = tmp_path / "nested.scss"
        path.write_text(".a {\n\t.b {\n\t\t.c {\n\t\t\tcolor: red;\n\t\t}\n\t}\n}\n")
        runner = CliRunner()
        assert runner.invoke(cli, ["check", str(path)]).exit_code == 0
        result = runner.invoke(cli, ["check", "--preprocessor", str(path)])
        assert result.exit_code == 1
        assert "nesting-depth" in result.output

    def test_config_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "a.css", ".a {\n  color: red;\n}\n")
        config = _write(tmp_path, "cssguide.json", '{"indent_char": "space", "indent_width": 2}')
        runner = CliRunner()
        assert runner.invoke(cli, ["check", str(path)]).exit_code == 1
        result = runner.invoke(cli, ["check", "--config", str(config), str(path)])
        assert result.exit_code == 0

    def test_bad_config_is_usage_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "a.css", CLEAN)
        config = _write(tmp_path, "cssguide.json", '{"quote": "`"}')
        runner = CliRunner()
        result = runner.invoke(cli, ["check", "--config", str(config), str(path)])
        assert result.exit_code == 2
        assert "'quote' must be" in result.output

    def test_unknown_check_is_usage_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "a.css", CLEAN)
        runner = CliRunner()
        result = runner.invoke(cli, ["check", "--disable", "hex-colour", str(path)])
        assert result.exit_code == 2
        assert "Unknown check identifier" in result.output

    def test_missing_path(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["check", str(tmp_path / "missing.css")])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# fix command
# ---------------------------------------------------------------------------


class TestFixCommand:
    def test_rewrites_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "a.css", DIRTY)
        runner = CliRunner()
        result = runner.invoke(cli, ["fix", str(path)])
        assert result.exit_code == 0
        assert path.read_text() == ".a {\n\tcolor: #fff;\n}\n"
        assert f"Fixed {path}" in result.output

    def test_clean_file_untouched(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "a.css", CLEAN)
        runner = CliRunner()
        result = runner.invoke(cli, ["fix", str(path)])
        assert result.exit_code == 0
        assert "Fixed" not in result.output

    def test_remaining_violations_exit_one(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "a.css", ".a {\n\tmargin-top: 1px;\n\tmargin: 0;\n}\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["fix", str(path)])
        assert result.exit_code == 1
        assert "property-order" in result.output

    def test_diff(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "a.css", DIRTY)
        runner = CliRunner()
        result = runner.invoke(cli, ["fix", "--diff", str(path)])
        assert result.exit_code == 0
        assert "-.a{color:#FFF}" in result.output
        assert "+\tcolor: #fff;" in result.output
        assert path.read_text() == DIRTY

    def test_json(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "a.css", DIRTY)
        runner = CliRunner()
        result = runner.invoke(cli, ["fix", "--json", str(path)])
        payload = json.loads(result.output)
        assert payload["files"][0]["changed"] is True
        assert payload["summary"]["warning"] == 0


# ---------------------------------------------------------------------------
# rules command
# ---------------------------------------------------------------------------


class TestRulesCommand:
    def test_lists_checks(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["rules"])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == 16
        (naming,) = [line for line in lines if line.startswith("naming ")]
        assert "fix=no" in naming
        assert naming.endswith("[off by default]")
        (nesting,) = [line for line in lines if line.startswith("nesting-depth ")]
        assert nesting.endswith("[preprocessor]")
