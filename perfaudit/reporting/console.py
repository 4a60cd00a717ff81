"""Plain-text console summary."""

from __future__ import annotations

from typing import List

from ..models import AuditResult, BuildReport, ChunkReport, CodeReport, ManifestReport, is_unavailable
from ..recommendations import top

BAR_LENGTH = 40
TOP_RECOMMENDATIONS = 5
RULE = "=" * 72


def rating(score: int) -> str:
    if score >= 90:
        return "excellent"
    if score >= 75:
        return "good"
    if score >= 50:
        return "fair"
    return "poor"


def score_bar(score: int, length: int = BAR_LENGTH) -> str:
    filled = round(score / 100 * length)
    return f"[{'█' * filled}{'░' * (length - filled)}] {score}% ({rating(score)})"


def render_console(result: AuditResult) -> str:
    summary = result.summary
    lines: List[str] = [RULE, "PERFORMANCE ANALYSIS SUMMARY", RULE, ""]
    lines.append(f"Project: {result.root}")
    lines.append(f"Overall performance score: {summary.score}/100")
    lines.append(score_bar(summary.score))
    lines.append("")

    lines.extend(_section_lines(result))

    lines.append("Issues found:")
    lines.append(f"  - Total issues: {summary.total_issues}")
    lines.append(f"  - Critical issues: {summary.critical_issues}")
    lines.append(f"  - Other issues: {summary.total_issues - summary.critical_issues}")
    lines.append("")

    if not summary.recommendations:
        lines.append("No issues found.")
    else:
        lines.append("Top recommendations:")
        for index, item in enumerate(top(summary.recommendations, TOP_RECOMMENDATIONS), start=1):
            lines.append(f"{index}. [{item.priority}] {item.category}: {item.issue}")
            lines.append(f"   -> {item.solution}")

    if result.warnings:
        lines.append("")
        lines.append(f"Warnings ({len(result.warnings)}):")
        lines.extend(f"  - {message}" for message in result.warnings)

    return "\n".join(lines) + "\n"


def _section_lines(result: AuditResult) -> List[str]:
    lines: List[str] = []
    for name, value in result.sections.items():
        if is_unavailable(value):
            lines.append(f"{name}: unavailable ({value.get('reason')})")
            lines.append("")

    manifest = result.sections.get("manifest")
    if isinstance(manifest, ManifestReport):
        lines.append(f"Project type: {manifest.project_type}")
        if manifest.present:
            lines.append(
                f"Dependencies: {manifest.total_dependencies} production, "
                f"{manifest.total_dev_dependencies} development"
            )
            if manifest.duplicate_groups:
                groups = "; ".join(", ".join(group) for group in manifest.duplicate_groups)
                lines.append(f"Potential duplicates: {groups}")
        lines.append("")

    code = result.sections.get("code")
    if isinstance(code, CodeReport):
        lines.append(
            f"Code: {code.files_scanned} files scanned, {len(code.large_files)} large, "
            f"{code.inline_styles} inline styles, {code.console_statements} console statements"
        )
        lines.append("")

    build = result.sections.get("build")
    if isinstance(build, BuildReport):
        for name, summary in build.directories.items():
            lines.append(
                f"{name}/: {round(summary.total_size / 1024 / 1024, 2)}MB in {summary.file_count} files "
                f"({len(summary.script_files)} scripts, {len(summary.style_files)} styles, "
                f"{len(summary.asset_files)} assets)"
            )
            for item in summary.oversized_files[:3]:
                lines.append(f"  - {item.path} ({item.size_kb}KB)")
        if build.directories:
            lines.append("")

    chunks = result.sections.get("chunks")
    if isinstance(chunks, ChunkReport):
        lines.append(
            f"Code splitting: {'yes' if chunks.has_code_splitting else 'no'} "
            f"({len(chunks.chunk_files)} chunks, {len(chunks.vendor_chunks)} vendor)"
        )
        lines.append("")
    return lines
