"""Tests for bundler detection and tree-shaking signals."""

from __future__ import annotations

from perfaudit.analyzers.bundler import BundlerDetector
from perfaudit.analyzers.tree_shaking import TreeShakingInspector
from perfaudit.models import AnalysisContext
from tests._fixtures.project_builder import ProjectBuilder


def _with_bundler(project_builder: ProjectBuilder) -> AnalysisContext:
    context = project_builder.context()
    context.add_section("bundler", BundlerDetector().analyze(context))
    return context


def test_config_file_wins_over_package_hints(project_builder: ProjectBuilder) -> None:
    project_builder.write({"webpack.config.js": "module.exports = {};\n"})
    project_builder.package_json({"scripts": {"build": "vite build"}})

    info = BundlerDetector().analyze(project_builder.context())

    assert info.name == "webpack"
    assert info.config_file == "webpack.config.js"
    assert info.has_config is True


def test_typescript_config_is_recognised(project_builder: ProjectBuilder) -> None:
    project_builder.write({"vite.config.ts": "export default {};\n"})

    info = BundlerDetector().analyze(project_builder.context())

    assert info.name == "vite"
    assert info.config_file == "vite.config.ts"


def test_build_script_hint(project_builder: ProjectBuilder) -> None:
    project_builder.package_json({"scripts": {"build": "webpack --mode production"}})

    info = BundlerDetector().analyze(project_builder.context())

    assert info.name == "webpack"
    assert info.has_config is False
    assert info.config_file is None


def test_dependency_hints(project_builder: ProjectBuilder) -> None:
    project_builder.package_json({"devDependencies": {"rollup": "^4.0.0"}})

    assert BundlerDetector().analyze(project_builder.context()).name == "rollup"


def test_unknown_bundler_without_evidence(project_builder: ProjectBuilder) -> None:
    project_builder.write({"src/index.js": "export {}\n"})

    assert BundlerDetector().analyze(project_builder.context()).name == "unknown"


def test_tree_shaking_evidence_from_config_and_manifest(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "webpack.config.js": """
            module.exports = {
              optimization: { usedExports: true },
            };
            """
        }
    )
    project_builder.package_json({"sideEffects": ["*.css"]})

    report = TreeShakingInspector().analyze(_with_bundler(project_builder))

    assert report.enabled is True
    assert report.evidence == ["webpack.config.js: usedExports", "package.json: sideEffects"]
    assert report.confidence == "heuristic"


def test_tree_shaking_not_detected(project_builder: ProjectBuilder) -> None:
    project_builder.write({"rollup.config.js": "export default { input: 'src/main.js' };\n"})
    project_builder.package_json({"dependencies": {}})

    report = TreeShakingInspector().analyze(_with_bundler(project_builder))

    assert report.enabled is False
    assert report.evidence == []
