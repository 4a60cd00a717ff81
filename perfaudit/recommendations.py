"""Rule evaluation and scoring over collected analyzer sections."""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Tuple

from .logging import get_logger
from .models import (
    PRIORITY_RANK,
    AnalysisContext,
    AuditSummary,
    BuildReport,
    BundlerInfo,
    CodeReport,
    CompressionReport,
    ManifestReport,
    Recommendation,
    TreeShakingReport,
)

logger = get_logger("recommendations")

BUNDLE_SOURCE = "Bundle"
PERFORMANCE_SOURCE = "Performance"

MAX_LARGE_SCRIPTS = 3

BUNDLER_SUGGESTIONS: Dict[str, Tuple[str, str, str]] = {
    "webpack": (
        "Webpack",
        "Medium",
        "Use SplitChunksPlugin, optimize chunks, enable production mode",
    ),
    "vite": (
        "Vite",
        "Low",
        "Configure build.rollupOptions for better chunking",
    ),
    "rollup": (
        "Rollup",
        "Medium",
        "Use rollup-plugin-terser for minification, configure external dependencies",
    ),
}

FRAMEWORK_SUGGESTIONS: Dict[str, str] = {
    "React": "Implement React.memo, useMemo, useCallback for expensive operations",
    "Vue": "Use v-memo, computed properties, and async components",
    "Angular": "Implement OnPush change detection, lazy loading modules",
}


def _mb(size: int) -> float:
    return round(size / 1024 / 1024, 2)


def _kb(size: int) -> float:
    return round(size / 1024, 2)


def score(recommendations: Sequence[Recommendation]) -> int:
    """100 minus each recommendation's priority penalty, never below zero."""
    total = 100 - sum(item.penalty for item in recommendations)
    return max(0, total)


def top(recommendations: Sequence[Recommendation], limit: int = 5) -> List[Recommendation]:
    """Highest-priority recommendations first; ties keep insertion order."""
    ranked = sorted(recommendations, key=lambda item: PRIORITY_RANK.get(item.priority, 0), reverse=True)
    return ranked[:limit]


def summarise(recommendations: Sequence[Recommendation]) -> AuditSummary:
    items = list(recommendations)
    return AuditSummary(
        score=score(items),
        total_issues=len(items),
        critical_issues=sum(1 for item in items if item.priority == "High"),
        recommendations=items,
    )


class RecommendationEngine:
    """Applies the fixed rule list; every applicable rule fires on every run."""

    def __init__(self) -> None:
        self._rules: List[Tuple[str, Callable[[AnalysisContext], List[Recommendation]]]] = [
            ("bundle-size", self._bundle_size),
            ("large-scripts", self._large_scripts),
            ("tree-shaking", self._tree_shaking),
            ("gzip", self._gzip),
            ("brotli", self._brotli),
            ("bundler", self._bundler),
            ("heavy-dependencies", self._heavy_dependencies),
            ("large-sources", self._large_sources),
            ("inline-styles", self._inline_styles),
            ("console-statements", self._console_statements),
            ("framework", self._framework),
        ]

    def evaluate(self, context: AnalysisContext) -> List[Recommendation]:
        recommendations: List[Recommendation] = []
        for name, rule in self._rules:
            produced = rule(context)
            if produced:
                logger.debug("Rule %s produced %d recommendation(s)", name, len(produced))
            recommendations.extend(produced)
        return recommendations

    def summarise(self, context: AnalysisContext) -> AuditSummary:
        return summarise(self.evaluate(context))

    # ------------------------------------------------------------------
    # Bundle rules

    def _bundle_size(self, context: AnalysisContext) -> List[Recommendation]:
        build = context.section("build")
        if not isinstance(build, BuildReport):
            return []
        limit = context.config.thresholds.total_build_bytes
        results: List[Recommendation] = []
        for name, summary in build.directories.items():
            if summary.total_size > limit:
                results.append(
                    Recommendation(
                        category="Bundle Size",
                        priority="High",
                        issue=f"Large bundle size in {name}",
                        solution="Implement code splitting and lazy loading",
                        source=BUNDLE_SOURCE,
                        metadata={"directory": name, "size": summary.total_size, "size_mb": _mb(summary.total_size)},
                    )
                )
        return results

    def _large_scripts(self, context: AnalysisContext) -> List[Recommendation]:
        build = context.section("build")
        if not isinstance(build, BuildReport):
            return []
        limit = context.config.thresholds.large_script_bytes
        results: List[Recommendation] = []
        for summary in build.directories.values():
            offending = [item for item in summary.script_files if item.size > limit]
            for item in offending[:MAX_LARGE_SCRIPTS]:
                results.append(
                    Recommendation(
                        category="Code Splitting",
                        priority="High",
                        issue=f"Large JavaScript file: {item.path}",
                        solution="Split this file into smaller chunks",
                        source=BUNDLE_SOURCE,
                        metadata={"file": item.path, "size": item.size, "size_kb": item.size_kb},
                    )
                )
        return results

    def _tree_shaking(self, context: AnalysisContext) -> List[Recommendation]:
        report = context.section("tree_shaking")
        if not isinstance(report, TreeShakingReport) or report.enabled:
            return []
        return [
            Recommendation(
                category="Tree Shaking",
                priority="Medium",
                issue="Tree-shaking not detected",
                solution="Enable tree-shaking to remove unused code",
                source=BUNDLE_SOURCE,
                metadata={"confidence": report.confidence},
            )
        ]

    def _gzip(self, context: AnalysisContext) -> List[Recommendation]:
        report = context.section("compression")
        if not isinstance(report, CompressionReport) or report.gzip:
            return []
        return [
            Recommendation(
                category="Compression",
                priority="Medium",
                issue="Gzip compression not enabled",
                solution="Enable gzip compression on your server",
                source=BUNDLE_SOURCE,
            )
        ]

    def _brotli(self, context: AnalysisContext) -> List[Recommendation]:
        report = context.section("compression")
        if not isinstance(report, CompressionReport) or report.brotli:
            return []
        return [
            Recommendation(
                category="Compression",
                priority="Low",
                issue="Brotli compression not enabled",
                solution="Enable Brotli compression for better compression ratios",
                source=BUNDLE_SOURCE,
            )
        ]

    def _bundler(self, context: AnalysisContext) -> List[Recommendation]:
        bundler = context.section("bundler")
        if not isinstance(bundler, BundlerInfo) or bundler.name not in BUNDLER_SUGGESTIONS:
            return []
        label, priority, solution = BUNDLER_SUGGESTIONS[bundler.name]
        return [
            Recommendation(
                category=label,
                priority=priority,
                issue=f"{label} optimizations",
                solution=solution,
                source=BUNDLE_SOURCE,
            )
        ]

    # ------------------------------------------------------------------
    # Performance rules

    def _heavy_dependencies(self, context: AnalysisContext) -> List[Recommendation]:
        manifest = context.section("manifest")
        if not isinstance(manifest, ManifestReport) or not manifest.heavy_dependencies:
            return []
        return [
            Recommendation(
                category="Dependencies",
                priority="High",
                issue="Heavy dependencies detected",
                solution="Consider lighter alternatives or tree-shaking",
                metadata={"dependencies": list(manifest.heavy_dependencies)},
            )
        ]

    def _large_sources(self, context: AnalysisContext) -> List[Recommendation]:
        code = context.section("code")
        if not isinstance(code, CodeReport) or not code.large_files:
            return []
        return [
            Recommendation(
                category="Code Splitting",
                priority="High",
                issue="Large files detected",
                solution="Implement code splitting and lazy loading",
                metadata={"files": [entry["file"] for entry in code.large_files]},
            )
        ]

    def _inline_styles(self, context: AnalysisContext) -> List[Recommendation]:
        code = context.section("code")
        if not isinstance(code, CodeReport):
            return []
        if code.inline_styles <= context.config.thresholds.inline_style_limit:
            return []
        return [
            Recommendation(
                category="Styling",
                priority="Medium",
                issue="Excessive inline styles",
                solution="Extract styles to CSS modules or styled components",
                metadata={"count": code.inline_styles},
            )
        ]

    def _console_statements(self, context: AnalysisContext) -> List[Recommendation]:
        code = context.section("code")
        if not isinstance(code, CodeReport) or code.console_statements == 0:
            return []
        return [
            Recommendation(
                category="Production",
                priority="Medium",
                issue="Console statements in code",
                solution="Remove console statements in production builds",
                metadata={"count": code.console_statements},
            )
        ]

    def _framework(self, context: AnalysisContext) -> List[Recommendation]:
        manifest = context.section("manifest")
        if not isinstance(manifest, ManifestReport):
            return []
        solution = FRAMEWORK_SUGGESTIONS.get(manifest.project_type)
        if solution is None:
            return []
        return [
            Recommendation(
                category=f"{manifest.project_type} Optimization",
                priority="Medium",
                issue=f"General {manifest.project_type} optimizations",
                solution=solution,
            )
        ]


__all__ = ["RecommendationEngine", "score", "summarise", "top"]
