"""Tests for the package.json manifest inspector."""

from __future__ import annotations

from perfaudit.analyzers.manifest import (
    ManifestInspector,
    detect_project_type,
    find_duplicate_groups,
    find_heavy_dependencies,
)
from perfaudit.logging import collect_warnings
from perfaudit.models import ManifestReport
from tests._fixtures.project_builder import ProjectBuilder


def test_manifest_counts_and_detects_framework(project_builder: ProjectBuilder) -> None:
    project_builder.package_json(
        {
            "name": "shop",
            "dependencies": {"react": "^18.2.0", "react-dom": "^18.2.0", "axios": "^1.6.0"},
            "devDependencies": {"vite": "^5.0.0"},
            "scripts": {"build": "vite build"},
        }
    )

    report = ManifestInspector().analyze(project_builder.context())

    assert isinstance(report, ManifestReport)
    assert report.present is True
    assert report.project_type == "React"
    assert report.total_dependencies == 3
    assert report.total_dev_dependencies == 1
    assert report.scripts == {"build": "vite build"}
    assert report.heavy_dependencies == []
    assert report.findings == []


def test_manifest_without_framework_defaults_to_javascript(project_builder: ProjectBuilder) -> None:
    project_builder.package_json({"dependencies": {"express": "^4.18.0"}})

    report = ManifestInspector().analyze(project_builder.context())

    assert report.project_type == "JavaScript"


def test_manifest_detects_framework_from_dev_dependencies(project_builder: ProjectBuilder) -> None:
    project_builder.package_json({"devDependencies": {"@vue/cli-service": "^5.0.0"}})

    report = ManifestInspector().analyze(project_builder.context())

    assert report.project_type == "Vue"
    assert report.total_dependencies == 0


def test_manifest_reports_single_duplicate_group(project_builder: ProjectBuilder) -> None:
    project_builder.package_json(
        {"dependencies": {"moment": "^2.29.0", "date-fns": "^3.0.0", "react": "^18.0.0"}}
    )

    report = ManifestInspector().analyze(project_builder.context())

    duplicates = [item for item in report.findings if item.category == "duplicate-group"]
    assert len(duplicates) == 1
    assert duplicates[0].name == "date"
    assert duplicates[0].members == ["moment", "date-fns"]
    assert report.duplicate_groups == [["moment", "date-fns"]]


def test_manifest_flags_heavy_dependencies_by_substring(project_builder: ProjectBuilder) -> None:
    project_builder.package_json(
        {
            "dependencies": {"lodash.debounce": "^4.0.8", "jquery": "^3.7.0", "preact": "^10.0.0"},
            "devDependencies": {"moment": "^2.29.0"},
        }
    )

    report = ManifestInspector().analyze(project_builder.context())

    assert report.heavy_dependencies == ["lodash.debounce", "jquery"]
    heavy = {item.name: item for item in report.findings if item.category == "heavy"}
    assert set(heavy) == {"lodash.debounce", "jquery"}
    assert heavy["jquery"].hint.startswith("Use native DOM APIs")


def test_manifest_absent_reports_unknown_and_warns(project_builder: ProjectBuilder) -> None:
    with collect_warnings() as collector:
        report = ManifestInspector().analyze(project_builder.context())

    assert report.present is False
    assert report.project_type == "unknown"
    assert any("No package.json" in message for message in collector.messages)


def test_manifest_malformed_is_treated_as_absent(project_builder: ProjectBuilder) -> None:
    (project_builder.path() / "package.json").write_text("{ not json", encoding="utf-8")

    with collect_warnings() as collector:
        report = ManifestInspector().analyze(project_builder.context())

    assert report.present is False
    assert report.project_type == "unknown"
    assert any("Could not read package.json" in message for message in collector.messages)
    assert not any("No package.json" in message for message in collector.messages)


def test_manifest_records_side_effects_flag(project_builder: ProjectBuilder) -> None:
    project_builder.package_json({"sideEffects": False, "dependencies": {}})

    report = ManifestInspector().analyze(project_builder.context())

    assert report.side_effects_declared is True


def test_helpers_operate_on_plain_mappings() -> None:
    assert detect_project_type({"next": "14", "react": "18"}) == "React"
    assert detect_project_type({"svelte": "4"}) == "Svelte"
    assert find_heavy_dependencies({"rxjs": "7", "zod": "3"}) == ["rxjs"]
    assert find_duplicate_groups({"uuid": "9", "nanoid": "5", "axios": "1"}) == [
        ("id-generator", ["uuid", "nanoid"])
    ]
