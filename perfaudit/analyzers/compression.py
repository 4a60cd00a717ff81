"""Pre-compression and minification heuristics over build output."""

from __future__ import annotations

from .base import BUNDLE, Analyzer
from ..logging import get_logger
from ..models import AnalysisContext, BuildReport, CompressionReport

logger = get_logger("analyzers.compression")

SAMPLE_SIZE = 3


def average_line_length(content: str) -> float:
    return len(content) / len(content.split("\n"))


class CompressionInspector(Analyzer):
    """Looks for .gz/.br siblings and guesses whether scripts are minified."""

    name = "compression"
    phase = BUNDLE

    def analyze(self, context: AnalysisContext) -> CompressionReport:
        report = CompressionReport()
        build = context.section("build")
        if not isinstance(build, BuildReport):
            return report

        limit = context.config.thresholds.minified_line_length
        for summary in build.directories.values():
            for item in summary.all_files():
                if item.path.endswith(".gz"):
                    report.gzip = True
                elif item.path.endswith(".br"):
                    report.brotli = True

            for item in summary.script_files[:SAMPLE_SIZE]:
                try:
                    content = (context.root / item.path).read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as exc:
                    logger.warning("Could not sample %s for minification: %s", item.path, exc)
                    continue
                average = average_line_length(content)
                minified = average > limit
                report.sampled_files.append(
                    {"file": item.path, "average_line_length": round(average, 1), "minified": minified}
                )
                if minified:
                    report.minified = True

        logger.debug(
            "Compression: gzip=%s brotli=%s minified=%s",
            report.gzip,
            report.brotli,
            report.minified,
        )
        return report
