"""Build-output directory analyzer implementation."""

from __future__ import annotations

from typing import List

from .base import BUNDLE, Analyzer
from ..file_walker import FileWalker
from ..logging import get_logger
from ..models import (
    SCRIPT,
    STYLE,
    AnalysisContext,
    BuildArtifactSummary,
    BuildFile,
    BuildReport,
)

logger = get_logger("analyzers.build")


def _by_size(files: List[BuildFile]) -> List[BuildFile]:
    # sorted() is stable with reverse=True, so equal sizes keep walk order.
    return sorted(files, key=lambda item: item.size, reverse=True)


class BuildOutputInspector(Analyzer):
    """Measures conventional build directories and flags oversized files."""

    name = "build"
    phase = BUNDLE

    def __init__(self, walker: FileWalker | None = None) -> None:
        self.walker = walker or FileWalker(include_all=True)

    def analyze(self, context: AnalysisContext) -> BuildReport:
        report = BuildReport()
        found = [name for name in context.config.build_dirs if (context.root / name).is_dir()]
        if not found:
            logger.warning("No build output found. Run your build command first.")
            return report

        for name in found:
            try:
                summary = self.inspect_directory(context, name)
            except OSError as exc:
                logger.warning("Could not analyze build directory %s: %s", name, exc)
                continue
            report.directories[name] = summary
            logger.debug(
                "%s/: %d files, %d bytes", name, summary.file_count, summary.total_size
            )
        return report

    def inspect_directory(self, context: AnalysisContext, name: str) -> BuildArtifactSummary:
        """Walk one build directory and classify every file in it."""
        threshold = context.config.thresholds.oversized_bytes
        walk = self.walker.walk(context.root / name)

        summary = BuildArtifactSummary(directory=name)
        scripts: List[BuildFile] = []
        styles: List[BuildFile] = []
        assets: List[BuildFile] = []
        oversized: List[BuildFile] = []

        for record in walk.files:
            item = BuildFile(path=f"{name}/{record.path}", size=record.size)
            summary.total_size += record.size
            summary.file_count += 1
            if record.category == SCRIPT:
                scripts.append(item)
            elif record.category == STYLE:
                styles.append(item)
            else:
                assets.append(item)
            if record.size > threshold:
                oversized.append(item)

        summary.script_files = _by_size(scripts)
        summary.style_files = _by_size(styles)
        summary.asset_files = _by_size(assets)
        summary.oversized_files = _by_size(oversized)
        return summary
