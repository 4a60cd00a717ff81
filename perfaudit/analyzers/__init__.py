"""Analyzer plugin implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Sequence, Set

from .base import BUNDLE, PERFORMANCE, Analyzer
from .build_output import BuildOutputInspector
from .bundler import BundlerDetector
from .chunking import ChunkingAnalyzer
from .code_patterns import CodePatternScanner
from .compression import CompressionInspector
from .manifest import ManifestInspector
from .tree_shaking import TreeShakingInspector

_ENTRY_POINT_GROUP = "perfaudit.analyzers"

# Pipeline order: later analyzers read sections written by earlier ones.
_BUILTIN_FACTORIES: dict[str, Callable[[], Analyzer]] = {
    "manifest": ManifestInspector,
    "code": CodePatternScanner,
    "bundler": BundlerDetector,
    "build": BuildOutputInspector,
    "chunks": ChunkingAnalyzer,
    "tree_shaking": TreeShakingInspector,
    "compression": CompressionInspector,
}


def discover_analyzers(enabled: Sequence[str] | None = None) -> List[Analyzer]:
    """Return instantiated analyzers in pipeline order, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    analyzers: List[Analyzer] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[], Analyzer]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory()
        if not isinstance(instance, Analyzer):
            raise TypeError(f"Analyzer factory for '{name}' did not return an Analyzer instance")
        if not instance.name:
            instance.name = key
        analyzers.append(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, factory in _BUILTIN_FACTORIES.items():
        _add(name, factory)

    for entry in _iter_entry_points():
        name = entry.name
        try:
            loaded = entry.load()
        except Exception as exc:
            raise RuntimeError(f"Failed to load analyzer entry point '{name}': {exc}") from exc

        def _factory(obj: object = loaded) -> Analyzer:
            return _coerce_analyzer(obj)

        _add(name, _factory)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown analyzers requested: {missing}")

    return analyzers


def _coerce_analyzer(obj: object) -> Analyzer:
    if isinstance(obj, Analyzer):
        return obj
    if isinstance(obj, type) and issubclass(obj, Analyzer):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, Analyzer):
            return instance
    raise TypeError("Analyzer entry point must be an Analyzer subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "BUNDLE",
    "PERFORMANCE",
    "Analyzer",
    "BuildOutputInspector",
    "BundlerDetector",
    "ChunkingAnalyzer",
    "CodePatternScanner",
    "CompressionInspector",
    "ManifestInspector",
    "TreeShakingInspector",
    "discover_analyzers",
]
