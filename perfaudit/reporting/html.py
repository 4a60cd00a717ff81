"""Static HTML report rendered from a Jinja2 template."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..models import AuditResult, BuildReport, ManifestReport
from ..recommendations import top
from .console import rating

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_SCORE_COLOURS = {
    "excellent": "#28a745",
    "good": "#ffc107",
    "fair": "#fd7e14",
    "poor": "#dc3545",
}


def create_environment(templates_dir: Path | None = None) -> Environment:
    loader = FileSystemLoader(str(templates_dir or TEMPLATES_DIR))
    return Environment(
        loader=loader,
        autoescape=select_autoescape(["html", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_html(result: AuditResult, *, environment: Environment | None = None) -> str:
    env = environment or create_environment()
    template = env.get_template("report.html.j2")
    summary = result.summary
    manifest = result.sections.get("manifest")
    build = result.sections.get("build")
    return template.render(
        result=result,
        summary=summary,
        colour=_SCORE_COLOURS[rating(summary.score)],
        rating=rating(summary.score),
        recommendations=top(summary.recommendations, len(summary.recommendations)),
        manifest=manifest if isinstance(manifest, ManifestReport) else None,
        build=build if isinstance(build, BuildReport) else None,
        performance_ran="manifest" in result.sections or "code" in result.sections,
        bundle_ran="build" in result.sections or "bundler" in result.sections,
    )
