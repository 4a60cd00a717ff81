"""Bundler detection from config files and package.json hints."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from .base import BUNDLE, Analyzer
from .utils import Rule, all_declared, first_match, package_json
from ..logging import get_logger
from ..models import AnalysisContext, BundlerInfo

logger = get_logger("analyzers.bundler")

UNKNOWN_BUNDLER = "unknown"

CONFIG_FILES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("webpack", ("webpack.config.js", "webpack.config.ts")),
    ("vite", ("vite.config.js", "vite.config.ts")),
    ("rollup", ("rollup.config.js", "rollup.config.ts")),
    ("parcel", (".parcelrc", "parcel.config.js")),
    ("esbuild", ("esbuild.config.js", "build.js")),
    ("snowpack", ("snowpack.config.js", "snowpack.config.mjs")),
)


def _build_script(data: Dict[str, Any]) -> str:
    scripts = data.get("scripts")
    if isinstance(scripts, dict):
        return str(scripts.get("build") or "")
    return ""


PACKAGE_HINTS: Tuple[Rule, ...] = (
    (lambda data: "vite" in _build_script(data), "vite"),
    (lambda data: "webpack" in _build_script(data), "webpack"),
    (lambda data: "@parcel/core" in all_declared(data) or "parcel" in all_declared(data), "parcel"),
    (lambda data: "rollup" in all_declared(data), "rollup"),
)


class BundlerDetector(Analyzer):
    """Detects the bundler in use, preferring explicit config files."""

    name = "bundler"
    phase = BUNDLE

    def analyze(self, context: AnalysisContext) -> BundlerInfo:
        for bundler, candidates in CONFIG_FILES:
            for candidate in candidates:
                if (context.root / candidate).is_file():
                    logger.debug("Detected %s via %s", bundler, candidate)
                    return BundlerInfo(name=bundler, config_file=candidate, has_config=True)

        data = package_json(context)
        if data is None:
            return BundlerInfo(name=UNKNOWN_BUNDLER)
        name = first_match(PACKAGE_HINTS, data, UNKNOWN_BUNDLER)
        logger.debug("Inferred bundler from package.json: %s", name)
        return BundlerInfo(name=name)
