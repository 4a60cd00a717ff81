"""Shared helper utilities for analyzer implementations."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, TypeVar

from ..logging import get_logger

logger = get_logger("analyzers")

T = TypeVar("T")

Rule = Tuple[Callable[[T], bool], str]


def first_match(table: Sequence[Rule], value: T, default: str) -> str:
    """Evaluate an ordered (predicate, label) table; the first predicate that holds wins."""
    for predicate, label in table:
        if predicate(value):
            return label
    return default


def read_package_json(root: Path) -> Optional[Dict[str, Any]]:
    """Return the parsed package.json, or None when it is missing or malformed.

    A malformed manifest is logged as a warning; a missing one is left to the
    caller to report since only some callers care.
    """
    package_json = root / "package.json"
    if not package_json.exists():
        return None
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Could not read package.json: %s", exc)
        return None
    if not isinstance(data, dict):
        logger.warning("package.json does not contain a JSON object")
        return None
    return data


def declared(data: Dict[str, Any], key: str) -> Dict[str, str]:
    """Return the `name -> version range` map stored under `key`."""
    deps = data.get(key)
    if not isinstance(deps, dict):
        return {}
    return {str(name): str(version) for name, version in deps.items()}


def all_declared(data: Dict[str, Any]) -> Dict[str, str]:
    merged = declared(data, "dependencies")
    merged.update(declared(data, "devDependencies"))
    return merged


def package_json(context: Any) -> Optional[Dict[str, Any]]:
    """Return the run's package.json, parsing it at most once per analysis context."""
    if "package.json" not in context.cache:
        context.cache["package.json"] = read_package_json(context.root)
    return context.cache["package.json"]
