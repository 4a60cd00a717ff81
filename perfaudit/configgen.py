"""Optimized bundler configuration generation."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .config import Thresholds
from .logging import get_logger

TEMPLATES_DIR = Path(__file__).with_name("templates") / "configs"

SUPPORTED_BUNDLERS = ("webpack", "vite", "rollup")

_VENDOR_PACKAGES = ("react", "react-dom", "vue", "vue-router", "@angular/core", "svelte")
_UTILITY_PACKAGES = ("lodash", "lodash-es", "underscore", "ramda", "date-fns", "dayjs", "moment")


def output_name(bundler: str) -> str:
    return f"{bundler}.config.optimized.js"


class ConfigGenerator:
    """Renders starter configs that apply the recommended bundler optimizations."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        self.logger = get_logger("configgen")

    def render(
        self,
        bundler: str,
        *,
        dependencies: Mapping[str, str] | None = None,
        project_type: str = "JavaScript",
        thresholds: Thresholds | None = None,
    ) -> str:
        if bundler not in SUPPORTED_BUNDLERS:
            raise ValueError(f"No optimized config template for bundler '{bundler}'")
        thresholds = thresholds or Thresholds()
        declared = dict(dependencies or {})
        template = self._env.get_template(f"{bundler}.config.js.j2")
        return template.render(**self._variables(declared, project_type, thresholds))

    def write(
        self,
        root: Path,
        bundler: str,
        *,
        dependencies: Mapping[str, str] | None = None,
        project_type: str = "JavaScript",
        thresholds: Thresholds | None = None,
    ) -> Optional[Path]:
        """Write `<bundler>.config.optimized.js` into `root`; unsupported bundlers are skipped."""
        if bundler not in SUPPORTED_BUNDLERS:
            self.logger.info("No optimized config available for bundler '%s'", bundler)
            return None
        content = self.render(
            bundler,
            dependencies=dependencies,
            project_type=project_type,
            thresholds=thresholds,
        )
        target = root / output_name(bundler)
        target.write_text(content, encoding="utf-8")
        self.logger.info("Generated %s", target.name)
        return target

    @staticmethod
    def _variables(
        dependencies: Dict[str, str], project_type: str, thresholds: Thresholds
    ) -> Dict[str, object]:
        vendor: List[str] = [name for name in _VENDOR_PACKAGES if name in dependencies]
        utils: List[str] = [name for name in _UTILITY_PACKAGES if name in dependencies]
        return {
            "project_type": project_type,
            "vendor_chunk": vendor,
            "utils_chunk": utils,
            "max_asset_size": thresholds.split_candidate_bytes,
            "chunk_warning_kb": thresholds.large_script_bytes // 1024,
        }


__all__ = ["ConfigGenerator", "SUPPORTED_BUNDLERS", "output_name"]
