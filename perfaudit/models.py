"""Core data models shared across perfaudit components."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, is_dataclass
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .config import AuditConfig

SCRIPT = "script"
STYLE = "style"
ASSET = "asset"

PRIORITY_PENALTIES: Dict[str, int] = {"High": 15, "Medium": 10, "Low": 5}
PRIORITY_RANK: Dict[str, int] = {"High": 3, "Medium": 2, "Low": 1}


@dataclass(frozen=True)
class FileRecord:
    """A file discovered by the walker, relative to the walk root."""

    path: str
    size: int
    category: str


@dataclass
class WalkResult:
    """Files found under a root plus the problems met along the way."""

    files: List[FileRecord] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def total_size(self) -> int:
        return sum(record.size for record in self.files)


@dataclass
class DependencyFinding:
    """A declared dependency (or group of them) worth a second look."""

    name: str
    category: str
    members: List[str] = field(default_factory=list)
    hint: str = ""


@dataclass
class ManifestReport:
    present: bool
    project_type: str
    total_dependencies: int = 0
    total_dev_dependencies: int = 0
    heavy_dependencies: List[str] = field(default_factory=list)
    duplicate_groups: List[List[str]] = field(default_factory=list)
    findings: List[DependencyFinding] = field(default_factory=list)
    scripts: Dict[str, str] = field(default_factory=dict)
    side_effects_declared: bool = False


@dataclass
class CodeIssue:
    """An anti-pattern occurrence; `line` is 1-based."""

    file: str
    line: int
    kind: str
    detail: str = ""


@dataclass
class CodeReport:
    files_scanned: int = 0
    issues: List[CodeIssue] = field(default_factory=list)
    large_files: List[Dict[str, Any]] = field(default_factory=list)
    inline_styles: int = 0
    console_statements: int = 0
    dom_queries: int = 0


@dataclass
class BuildFile:
    path: str
    size: int

    @property
    def size_kb(self) -> float:
        return round(self.size / 1024, 2)

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "size": self.size, "size_kb": self.size_kb}


@dataclass
class BuildArtifactSummary:
    """Aggregated view of a single build-output directory."""

    directory: str
    total_size: int = 0
    file_count: int = 0
    script_files: List[BuildFile] = field(default_factory=list)
    style_files: List[BuildFile] = field(default_factory=list)
    asset_files: List[BuildFile] = field(default_factory=list)
    oversized_files: List[BuildFile] = field(default_factory=list)

    def all_files(self) -> List[BuildFile]:
        return [*self.script_files, *self.style_files, *self.asset_files]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "directory": self.directory,
            "total_size": self.total_size,
            "file_count": self.file_count,
            "script_files": [item.to_dict() for item in self.script_files],
            "style_files": [item.to_dict() for item in self.style_files],
            "asset_files": [item.to_dict() for item in self.asset_files],
            "oversized_files": [item.to_dict() for item in self.oversized_files],
        }


@dataclass
class BuildReport:
    directories: Dict[str, BuildArtifactSummary] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "directories": {
                name: summary.to_dict() for name, summary in self.directories.items()
            }
        }


@dataclass
class BundlerInfo:
    name: str
    config_file: Optional[str] = None
    has_config: bool = False


@dataclass
class TreeShakingReport:
    enabled: bool
    evidence: List[str] = field(default_factory=list)
    confidence: str = "heuristic"


@dataclass
class ChunkReport:
    has_code_splitting: bool = False
    chunk_files: List[str] = field(default_factory=list)
    vendor_chunks: List[str] = field(default_factory=list)
    split_candidates: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class CompressionReport:
    gzip: bool = False
    brotli: bool = False
    minified: bool = False
    sampled_files: List[Dict[str, Any]] = field(default_factory=list)
    confidence: str = "heuristic"


@dataclass
class Recommendation:
    """A prioritized finding with a suggested fix."""

    category: str
    priority: str
    issue: str
    solution: str
    source: str = "Performance"
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def penalty(self) -> int:
        return PRIORITY_PENALTIES.get(self.priority, 0)


@dataclass
class AuditSummary:
    score: int
    total_issues: int
    critical_issues: int
    recommendations: List[Recommendation] = field(default_factory=list)


class AnalysisContext:
    """Per-run state threaded through every analyzer.

    Sections are write-once: each analyzer adds its own key and never replaces
    another's.
    """

    def __init__(
        self,
        root: Path,
        config: "AuditConfig",
        walk: WalkResult | None = None,
    ) -> None:
        self.root = root
        self.config = config
        self.walk = walk or WalkResult()
        self._sections: Dict[str, Any] = {}
        # Parsed inputs shared between analyzers, e.g. package.json.
        self.cache: Dict[str, Any] = {}

    @property
    def sections(self) -> Mapping[str, Any]:
        return MappingProxyType(self._sections)

    def add_section(self, name: str, value: Any) -> None:
        if name in self._sections:
            raise ValueError(f"Section '{name}' was already recorded for this run")
        self._sections[name] = value

    def section(self, name: str) -> Any:
        """Return a section value, or None when it is absent or unavailable."""
        value = self._sections.get(name)
        if is_unavailable(value):
            return None
        return value


def unavailable(reason: str) -> Dict[str, str]:
    """Marker stored in place of a section whose analyzer failed."""
    return {"status": "unavailable", "reason": reason}


def is_unavailable(value: Any) -> bool:
    return isinstance(value, dict) and value.get("status") == "unavailable"


def section_to_dict(value: Any) -> Any:
    if value is None or isinstance(value, dict):
        return value
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if is_dataclass(value):
        return asdict(value)
    return value


@dataclass
class AuditResult:
    """Everything a run produced, ready to be rendered or persisted."""

    root: str
    timestamp: str
    sections: Dict[str, Any]
    summary: AuditSummary
    warnings: List[str] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)
    artifacts: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "timestamp": self.timestamp,
            "options": dict(self.options),
            "sections": {
                name: section_to_dict(value) for name, value in self.sections.items()
            },
            "summary": asdict(self.summary),
            "warnings": list(self.warnings),
            "artifacts": list(self.artifacts),
        }
