"""Manifest (package.json) analyzer implementation."""

from __future__ import annotations

from typing import Dict, List, Tuple

from .base import PERFORMANCE, Analyzer
from .utils import Rule, declared, first_match, package_json
from ..logging import get_logger
from ..models import AnalysisContext, DependencyFinding, ManifestReport

logger = get_logger("analyzers.manifest")

UNKNOWN_PROJECT = "unknown"
DEFAULT_PROJECT = "JavaScript"

FRAMEWORK_RULES: Tuple[Rule, ...] = (
    (lambda deps: "react" in deps, "React"),
    (lambda deps: "vue" in deps or "@vue/cli-service" in deps, "Vue"),
    (lambda deps: "@angular/core" in deps, "Angular"),
    (lambda deps: "next" in deps, "Next.js"),
    (lambda deps: "svelte" in deps, "Svelte"),
)

HEAVY_DEPENDENCIES: Dict[str, str] = {
    "lodash": "Import per-method (lodash-es or lodash/<fn>) or use native array helpers",
    "moment": "Swap for dayjs or date-fns; moment ships every locale by default",
    "jquery": "Use native DOM APIs; most jQuery helpers have direct equivalents",
    "bootstrap": "Import only the component styles and scripts actually used",
    "antd": "Enable per-component imports and drop unused icon sets",
    "material-ui": "Use path imports (e.g. @mui/material/Button) instead of the barrel",
    "@material-ui/core": "Migrate to @mui/material with path imports",
    "rxjs": "Import operators from rxjs/operators and avoid the full namespace",
}

DUPLICATE_GROUPS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("date", ("moment", "dayjs", "date-fns")),
    ("utility", ("lodash", "underscore", "ramda")),
    ("http-client", ("axios", "fetch", "superagent")),
    ("id-generator", ("uuid", "shortid", "nanoid")),
)


def detect_project_type(dependencies: Dict[str, str]) -> str:
    return first_match(FRAMEWORK_RULES, dependencies, DEFAULT_PROJECT)


def find_heavy_dependencies(dependencies: Dict[str, str]) -> List[str]:
    return [
        name
        for name in dependencies
        if any(heavy in name for heavy in HEAVY_DEPENDENCIES)
    ]


def find_duplicate_groups(dependencies: Dict[str, str]) -> List[Tuple[str, List[str]]]:
    groups: List[Tuple[str, List[str]]] = []
    for purpose, members in DUPLICATE_GROUPS:
        found = [name for name in dependencies if name in members]
        if len(found) > 1:
            groups.append((purpose, found))
    return groups


def _heavy_hint(name: str) -> str:
    if name in HEAVY_DEPENDENCIES:
        return HEAVY_DEPENDENCIES[name]
    for heavy, hint in HEAVY_DEPENDENCIES.items():
        if heavy in name:
            return hint
    return ""


class ManifestInspector(Analyzer):
    """Classifies declared dependencies and detects the project's framework."""

    name = "manifest"
    phase = PERFORMANCE

    def analyze(self, context: AnalysisContext) -> ManifestReport:
        data = package_json(context)
        if data is None:
            if not (context.root / "package.json").exists():
                logger.warning("No package.json found; dependency analysis skipped")
            return ManifestReport(present=False, project_type=UNKNOWN_PROJECT)

        dependencies = declared(data, "dependencies")
        dev_dependencies = declared(data, "devDependencies")
        combined = {**dependencies, **dev_dependencies}

        heavy = find_heavy_dependencies(dependencies)
        duplicates = find_duplicate_groups(dependencies)

        findings = [
            DependencyFinding(name=name, category="heavy", members=[name], hint=_heavy_hint(name))
            for name in heavy
        ]
        for purpose, members in duplicates:
            findings.append(
                DependencyFinding(
                    name=purpose,
                    category="duplicate-group",
                    members=members,
                    hint=f"Keep one {purpose} library instead of {len(members)}",
                )
            )

        scripts = data.get("scripts")
        report = ManifestReport(
            present=True,
            project_type=detect_project_type(combined),
            total_dependencies=len(dependencies),
            total_dev_dependencies=len(dev_dependencies),
            heavy_dependencies=heavy,
            duplicate_groups=[members for _, members in duplicates],
            findings=findings,
            scripts={str(k): str(v) for k, v in scripts.items()} if isinstance(scripts, dict) else {},
            side_effects_declared="sideEffects" in data,
        )
        logger.debug(
            "Detected %s project with %d dependencies (%d dev)",
            report.project_type,
            report.total_dependencies,
            report.total_dev_dependencies,
        )
        if heavy:
            logger.info("Heavy dependencies found: %s", ", ".join(heavy))
        return report
