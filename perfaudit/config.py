"""Configuration loading for perfaudit (.perfaudit.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".perfaudit.yml"

DEFAULT_BUILD_DIRS = ["dist", "build", "public", "out", ".next"]
DEFAULT_SOURCE_EXTENSIONS = [".js", ".jsx", ".ts", ".tsx", ".vue", ".svelte"]

KIB = 1024
MIB = 1024 * 1024


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class Thresholds:
    """Size and count limits used by the analyzers and recommendation rules."""

    large_source_bytes: int = 100 * KIB
    oversized_bytes: int = 100 * KIB
    split_candidate_bytes: int = 500 * KIB
    large_script_bytes: int = 1 * MIB
    total_build_bytes: int = 5 * MIB
    inline_style_limit: int = 10
    minified_line_length: int = 500


@dataclass
class AnalyzerConfig:
    """Analyzer enablement."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class ReportConfig:
    """Where report files are written."""

    output_dir: Optional[Path] = None


@dataclass
class AuditConfig:
    """Represents the settings defined in .perfaudit.yml."""

    root: Path
    thresholds: Thresholds = field(default_factory=Thresholds)
    build_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_BUILD_DIRS))
    source_extensions: List[str] = field(
        default_factory=lambda: list(DEFAULT_SOURCE_EXTENSIONS)
    )
    exclude_paths: List[str] = field(default_factory=list)
    analyzers: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    report: ReportConfig = field(default_factory=ReportConfig)


def load_config(config_path: Path) -> AuditConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AuditConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = AuditConfig(root=root)

    thresholds_data = _as_dict(data.get("thresholds"))
    for item in fields(Thresholds):
        value = _as_int(thresholds_data.get(item.name))
        if value is not None and value >= 0:
            setattr(config.thresholds, item.name, value)

    build_dirs = _as_str_list(data.get("build_dirs"))
    if build_dirs:
        config.build_dirs = [name.strip("/") for name in build_dirs if name.strip("/")]

    extensions = _as_str_list(data.get("source_extensions"))
    if extensions:
        config.source_extensions = [_normalise_extension(ext) for ext in extensions]

    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    analyzer_data = _as_dict(data.get("analyzers"))
    if analyzer_data:
        config.analyzers.enabled = _as_str_list(analyzer_data.get("enabled"))

    report_data = _as_dict(data.get("report"))
    output_dir = _as_str(report_data.get("output_dir")) if report_data else None
    if output_dir:
        config.report.output_dir = root / output_dir

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _normalise_extension(value: str) -> str:
    value = value.strip().lower()
    return value if value.startswith(".") else f".{value}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
