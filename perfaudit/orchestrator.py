"""Pipeline orchestration: detect, collect, score, render, persist."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .analyzers import BUNDLE, PERFORMANCE, Analyzer, discover_analyzers
from .analyzers.utils import all_declared, package_json
from .config import CONFIG_FILENAME, AuditConfig, ConfigError, load_config
from .configgen import ConfigGenerator
from .file_walker import FileWalker
from .logging import collect_warnings, get_logger
from .models import (
    AnalysisContext,
    AuditResult,
    BundlerInfo,
    ManifestReport,
    unavailable,
)
from .recommendations import RecommendationEngine
from .reporting import render_html, render_json

JSON_REPORT = "performance-analysis-report.json"
HTML_REPORT = "performance-analysis-report.html"

OUTPUT_FORMATS = ("console", "json", "html")


@dataclass
class AuditOptions:
    """Switches taken from the command line or the service request."""

    run_performance: bool = True
    run_bundle: bool = True
    output_format: str = "console"
    write_report: bool = True
    emit_configs: bool = False
    output_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {self.output_format}")
        if not (self.run_performance or self.run_bundle):
            raise ValueError("At least one of the performance or bundle analyses must run")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_performance": self.run_performance,
            "run_bundle": self.run_bundle,
            "output_format": self.output_format,
            "write_report": self.write_report,
            "emit_configs": self.emit_configs,
        }


@dataclass
class ReportOutcome:
    """Files written for a run."""

    json_path: Optional[Path] = None
    html_path: Optional[Path] = None


class AuditRunner:
    """Runs every analyzer in order and scores the collected sections."""

    def __init__(
        self,
        walker: FileWalker | None = None,
        analyzers: Optional[Iterable[Analyzer]] = None,
        engine: RecommendationEngine | None = None,
        config_generator: ConfigGenerator | None = None,
    ) -> None:
        self._walker = walker
        self._analyzer_overrides = list(analyzers) if analyzers is not None else None
        self.engine = engine or RecommendationEngine()
        self.config_generator = config_generator or ConfigGenerator()
        self.logger = get_logger("orchestrator")

    def run(self, path: str | Path, options: AuditOptions | None = None) -> AuditResult:
        """Analyze the project at `path`.

        Raises FileNotFoundError, NotADirectoryError or PermissionError when the
        root cannot be walked and ConfigError for an invalid .perfaudit.yml;
        every other failure degrades a single section.
        """
        options = options or AuditOptions()
        root = Path(path).expanduser().resolve()
        self.logger.info("Starting performance analysis for %s", root)

        with collect_warnings() as collector:
            config = load_config(root / CONFIG_FILENAME)
            walker = self._walker or FileWalker(config.exclude_paths)
            walk = walker.walk(root)
            self.logger.debug("Walker discovered %d files", len(walk.files))

            context = AnalysisContext(root=root, config=config, walk=walk)
            for analyzer in self._select_analyzers(config, options):
                self._run_analyzer(analyzer, context)

            summary = self.engine.summarise(context)
            artifacts: List[str] = []
            if options.emit_configs:
                generated = self._emit_configs(context)
                if generated is not None:
                    artifacts.append(str(generated))

        self.logger.info(
            "Analysis complete: score %d/100, %d recommendation(s)",
            summary.score,
            summary.total_issues,
        )

        report_options = options.to_dict()
        report_options["output_dir"] = str(self._report_dir(root, config, options))
        return AuditResult(
            root=str(root),
            timestamp=datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            sections=dict(context.sections),
            summary=summary,
            warnings=list(collector.messages),
            options=report_options,
            artifacts=artifacts,
        )

    def write_reports(self, result: AuditResult, options: AuditOptions | None = None) -> ReportOutcome:
        """Persist the JSON report, plus HTML when that format was requested."""
        options = options or AuditOptions()
        outcome = ReportOutcome()
        if not options.write_report:
            return outcome

        output_dir = Path(result.options.get("output_dir") or result.root)
        output_dir.mkdir(parents=True, exist_ok=True)

        outcome.json_path = output_dir / JSON_REPORT
        outcome.json_path.write_text(render_json(result), encoding="utf-8")
        self.logger.info("Detailed report saved to %s", outcome.json_path)

        if options.output_format == "html":
            outcome.html_path = output_dir / HTML_REPORT
            outcome.html_path.write_text(render_html(result), encoding="utf-8")
            self.logger.info("HTML report saved to %s", outcome.html_path)
        return outcome

    # ------------------------------------------------------------------
    # Internal helpers

    def _select_analyzers(self, config: AuditConfig, options: AuditOptions) -> List[Analyzer]:
        if self._analyzer_overrides is not None:
            candidates = list(self._analyzer_overrides)
        else:
            try:
                candidates = discover_analyzers(config.analyzers.enabled or None)
            except ValueError as exc:
                raise ConfigError(str(exc)) from exc

        selected: List[Analyzer] = []
        for analyzer in candidates:
            if analyzer.phase == PERFORMANCE and not options.run_performance:
                continue
            if analyzer.phase == BUNDLE and not options.run_bundle:
                continue
            selected.append(analyzer)
        self.logger.debug("Selected analyzers: %s", ", ".join(a.name for a in selected))
        return selected

    def _run_analyzer(self, analyzer: Analyzer, context: AnalysisContext) -> None:
        try:
            if not analyzer.supports(context):
                self.logger.debug("Analyzer %s does not apply; skipping", analyzer.name)
                return
            section = analyzer.analyze(context)
        except Exception as exc:
            self.logger.warning("%s analysis unavailable: %s", analyzer.name, exc)
            self.logger.debug("Analyzer %s failed", analyzer.name, exc_info=True)
            section = unavailable(str(exc) or exc.__class__.__name__)
        context.add_section(analyzer.name, section)

    def _emit_configs(self, context: AnalysisContext) -> Optional[Path]:
        bundler = context.section("bundler")
        if not isinstance(bundler, BundlerInfo):
            self.logger.info("Bundler not analyzed; no optimized config generated")
            return None
        manifest = context.section("manifest")
        project_type = manifest.project_type if isinstance(manifest, ManifestReport) else "JavaScript"
        try:
            return self.config_generator.write(
                context.root,
                bundler.name,
                dependencies=all_declared(package_json(context) or {}),
                project_type=project_type,
                thresholds=context.config.thresholds,
            )
        except OSError as exc:
            self.logger.warning("Could not write optimized %s config: %s", bundler.name, exc)
            return None

    @staticmethod
    def _report_dir(root: Path, config: AuditConfig, options: AuditOptions) -> Path:
        if options.output_dir is not None:
            return Path(options.output_dir).expanduser().resolve()
        if config.report.output_dir is not None:
            return config.report.output_dir
        return root


__all__ = ["AuditOptions", "AuditRunner", "ReportOutcome", "HTML_REPORT", "JSON_REPORT"]
