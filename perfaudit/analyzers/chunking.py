"""Code-splitting heuristics over build-output script files."""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from .base import BUNDLE, Analyzer
from ..logging import get_logger
from ..models import AnalysisContext, BuildReport, ChunkReport

logger = get_logger("analyzers.chunks")

_CHUNK_MARKERS = ("chunk", "vendor", "common")
_VENDOR_MARKERS = ("vendor", "node_modules")
_CONTENT_HASH = re.compile(r"\.[0-9a-f]{8,}\.[0-9a-z]+$")


def is_chunk(filename: str) -> bool:
    lowered = filename.lower()
    if any(marker in lowered for marker in _CHUNK_MARKERS):
        return True
    return bool(_CONTENT_HASH.search(lowered))


def is_vendor_chunk(filename: str) -> bool:
    lowered = filename.lower()
    return any(marker in lowered for marker in _VENDOR_MARKERS)


class ChunkingAnalyzer(Analyzer):
    """Infers whether code splitting is active from chunk naming conventions."""

    name = "chunks"
    phase = BUNDLE

    def supports(self, context: AnalysisContext) -> bool:
        build = context.section("build")
        return isinstance(build, BuildReport) and bool(build.directories)

    def analyze(self, context: AnalysisContext) -> ChunkReport:
        build: BuildReport = context.section("build")
        threshold = context.config.thresholds.split_candidate_bytes
        report = ChunkReport()
        chunk_paths = set()

        for summary in build.directories.values():
            for item in summary.script_files:
                filename = PurePosixPath(item.path).name
                if not is_chunk(filename):
                    continue
                report.has_code_splitting = True
                report.chunk_files.append(item.path)
                chunk_paths.add(item.path)
                if is_vendor_chunk(filename):
                    report.vendor_chunks.append(item.path)

        for summary in build.directories.values():
            for item in summary.script_files:
                if item.size > threshold and item.path not in chunk_paths:
                    report.split_candidates.append(
                        {
                            "file": item.path,
                            "size": item.size,
                            "size_kb": item.size_kb,
                            "message": "Large entry file detected - consider code splitting",
                        }
                    )

        logger.debug(
            "Code splitting: %s (%d chunk files)",
            "yes" if report.has_code_splitting else "no",
            len(report.chunk_files),
        )
        return report
