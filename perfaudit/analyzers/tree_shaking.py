"""Tree-shaking signal detection."""

from __future__ import annotations

from .base import BUNDLE, Analyzer
from .utils import package_json
from ..logging import get_logger
from ..models import AnalysisContext, BundlerInfo, TreeShakingReport

logger = get_logger("analyzers.tree_shaking")

CONFIG_MARKERS = ("sideEffects", "usedExports")


class TreeShakingInspector(Analyzer):
    """Looks for tree-shaking hints in the bundler config and package.json."""

    name = "tree_shaking"
    phase = BUNDLE

    def analyze(self, context: AnalysisContext) -> TreeShakingReport:
        report = TreeShakingReport(enabled=False)

        bundler = context.section("bundler")
        if isinstance(bundler, BundlerInfo) and bundler.config_file:
            try:
                content = (context.root / bundler.config_file).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Could not read config %s: %s", bundler.config_file, exc)
            else:
                for marker in CONFIG_MARKERS:
                    if marker in content:
                        report.evidence.append(f"{bundler.config_file}: {marker}")

        data = package_json(context)
        if data is not None and "sideEffects" in data:
            report.evidence.append("package.json: sideEffects")

        report.enabled = bool(report.evidence)
        logger.debug("Tree-shaking: %s", "enabled" if report.enabled else "not detected")
        return report
