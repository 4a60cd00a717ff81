"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from perfaudit.cli import _build_parser, main
from perfaudit.orchestrator import HTML_REPORT, JSON_REPORT
from tests._fixtures.project_builder import ProjectBuilder


def _project(project_builder: ProjectBuilder) -> Path:
    project_builder.package_json({"dependencies": {"vue": "^3.4.0"}})
    project_builder.write({"src/main.js": "console.log('boot')\n"})
    return project_builder.path()


def test_cli_defaults() -> None:
    args = _build_parser().parse_args([])
    assert args.path == "."
    assert args.output_format == "console"
    assert args.performance_only is False
    assert args.bundle_only is False
    assert args.no_report is False
    assert args.emit_configs is False


def test_cli_accepts_all_flags() -> None:
    args = _build_parser().parse_args(
        ["app", "--json", "--performance-only", "--no-report", "--emit-configs", "-v"]
    )
    assert args.path == "app"
    assert args.output_format == "json"
    assert args.performance_only is True
    assert args.no_report is True
    assert args.emit_configs is True
    assert args.verbose is True


@pytest.mark.parametrize(
    "argv",
    [["--json", "--html"], ["--performance-only", "--bundle-only"]],
)
def test_cli_rejects_conflicting_flags(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _build_parser().parse_args(argv)
    assert excinfo.value.code == 2


def test_console_run_without_report(project_builder: ProjectBuilder, capsys) -> None:
    root = _project(project_builder)

    main([str(root), "--no-report", "--performance-only"])

    out = capsys.readouterr().out
    assert "PERFORMANCE ANALYSIS SUMMARY" in out
    assert "Project type: Vue" in out
    assert "Console statements in code" in out
    assert not (root / JSON_REPORT).exists()


def test_console_run_writes_json_report(project_builder: ProjectBuilder, capsys) -> None:
    root = _project(project_builder)

    main([str(root)])

    out = capsys.readouterr().out
    assert "Detailed report saved to" in out
    payload = json.loads((root / JSON_REPORT).read_text(encoding="utf-8"))
    assert set(payload["sections"]) >= {"manifest", "code", "build"}


def test_json_without_report_prints_to_stdout(project_builder: ProjectBuilder, capsys) -> None:
    root = _project(project_builder)

    main([str(root), "--json", "--no-report"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["sections"]["manifest"]["project_type"] == "Vue"
    assert payload["options"]["output_format"] == "json"
    assert not (root / JSON_REPORT).exists()


def test_html_writes_both_reports(project_builder: ProjectBuilder, tmp_path: Path, capsys) -> None:
    root = _project(project_builder)
    output_dir = tmp_path / "out"

    main([str(root), "--html", "--output-dir", str(output_dir)])

    assert "HTML report saved to" in capsys.readouterr().out
    assert (output_dir / HTML_REPORT).exists()
    assert (output_dir / JSON_REPORT).exists()


def test_missing_path_exits_with_error(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "nowhere")])

    assert excinfo.value.code == 1
    assert "Project path not found" in capsys.readouterr().err


def test_invalid_config_exits_with_error(project_builder: ProjectBuilder, capsys) -> None:
    root = _project(project_builder)
    project_builder.write({".perfaudit.yml": "- not\n- a mapping\n"})

    with pytest.raises(SystemExit) as excinfo:
        main([str(root)])

    assert excinfo.value.code == 1
    assert "Invalid configuration" in capsys.readouterr().err
