"""Line-based anti-pattern scanner for front-end source files."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Iterable, List, Sequence, Tuple

from .base import PERFORMANCE, Analyzer
from ..logging import get_logger
from ..models import AnalysisContext, CodeIssue, CodeReport, FileRecord

logger = get_logger("analyzers.code")

LARGE_FILE = "large-file"
INLINE_STYLE = "inline-style"
CONSOLE_STATEMENT = "console-statement"
DOM_QUERY = "dom-query-in-component"

# Substring matching, not parsing: hits inside comments or strings count too.
ANTI_PATTERNS: Tuple[Tuple[str, Tuple[str, ...], str], ...] = (
    (INLINE_STYLE, ("style={{", 'style="{'), "Inline style object literal"),
    (CONSOLE_STATEMENT, ("console.",), "Debug print statement"),
    (DOM_QUERY, ("document.querySelector", "getElementById"), "DOM manipulation in component"),
)


def scan_lines(path: str, lines: Iterable[str]) -> List[CodeIssue]:
    """Return one issue per anti-pattern kind present on each line."""
    issues: List[CodeIssue] = []
    for number, line in enumerate(lines, start=1):
        for kind, needles, detail in ANTI_PATTERNS:
            if any(needle in line for needle in needles):
                issues.append(CodeIssue(file=path, line=number, kind=kind, detail=detail))
    return issues


def _under(path: str, directories: Sequence[str]) -> bool:
    for directory in directories:
        directory = directory.strip("/")
        if directory and (path == directory or path.startswith(f"{directory}/")):
            return True
    return False


class CodePatternScanner(Analyzer):
    """Flags oversized sources and risky patterns line by line."""

    name = "code"
    phase = PERFORMANCE

    def select_files(self, context: AnalysisContext) -> List[FileRecord]:
        extensions = {ext.lower() for ext in context.config.source_extensions}
        build_dirs = list(context.config.build_dirs)
        return [
            record
            for record in context.walk.files
            if PurePosixPath(record.path).suffix.lower() in extensions
            and not _under(record.path, build_dirs)
        ]

    def analyze(self, context: AnalysisContext) -> CodeReport:
        threshold = context.config.thresholds.large_source_bytes
        report = CodeReport()

        for record in self.select_files(context):
            try:
                content = (context.root / record.path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Could not analyze %s: %s", record.path, exc)
                continue

            report.files_scanned += 1
            if record.size > threshold:
                report.large_files.append(
                    {"file": record.path, "size": record.size, "size_kb": round(record.size / 1024)}
                )
                report.issues.append(
                    CodeIssue(
                        file=record.path,
                        line=1,
                        kind=LARGE_FILE,
                        detail=f"File exceeds {threshold // 1024} KB",
                    )
                )

            report.issues.extend(scan_lines(record.path, content.split("\n")))

        for issue in report.issues:
            if issue.kind == INLINE_STYLE:
                report.inline_styles += 1
            elif issue.kind == CONSOLE_STATEMENT:
                report.console_statements += 1
            elif issue.kind == DOM_QUERY:
                report.dom_queries += 1

        logger.debug(
            "Scanned %d source files: %d large, %d inline styles, %d console statements",
            report.files_scanned,
            len(report.large_files),
            report.inline_styles,
            report.console_statements,
        )
        return report
