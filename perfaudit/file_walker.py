"""Directory walking and file classification utilities."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .logging import get_logger
from .models import ASSET, SCRIPT, STYLE, FileRecord, WalkResult

_DEPENDENCY_CACHE_DIRS = {"node_modules"}

SCRIPT_EXTENSIONS = {".js", ".mjs", ".cjs", ".jsx", ".ts", ".tsx"}
STYLE_EXTENSIONS = {".css", ".scss", ".sass", ".less"}

logger = get_logger("walker")


def classify(path: str) -> str:
    """Return the script/style/asset category for a file path."""
    suffix = Path(path).suffix.lower()
    if suffix in SCRIPT_EXTENSIONS:
        return SCRIPT
    if suffix in STYLE_EXTENSIONS:
        return STYLE
    return ASSET


def _matches_any(rel_path: str, patterns: Sequence[str]) -> bool:
    for raw in patterns:
        pattern = raw.strip().rstrip("/")
        if not pattern:
            continue
        if pattern.startswith("/"):
            pattern = pattern[1:]
            if fnmatchcase(rel_path, pattern) or rel_path.startswith(f"{pattern}/"):
                return True
            continue
        if "/" in pattern:
            if fnmatchcase(rel_path, pattern) or rel_path.startswith(f"{pattern}/"):
                return True
            continue
        if any(fnmatchcase(part, pattern) for part in rel_path.split("/")):
            return True
    return False


class FileWalker:
    """Enumerates files under a root, skipping hidden and dependency-cache directories.

    With `include_all=True` every subdirectory is descended into; build output
    walks use this so `.vite/` manifests and bundled `node_modules/` count too.
    """

    def __init__(
        self, exclude_paths: Sequence[str] | None = None, *, include_all: bool = False
    ) -> None:
        self.exclude_paths = list(exclude_paths or [])
        self.include_all = include_all

    def walk(self, root: Path | str) -> WalkResult:
        """Return every reachable file under `root` in a stable order.

        Raises when the root itself is missing, not a directory or unreadable;
        problems below the root are recorded as warnings instead.
        """
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")
        if not os.access(root_path, os.R_OK | os.X_OK):
            raise PermissionError(f"Project path is not readable: {root}")

        result = WalkResult()
        for path in self._iter_files(root_path, result.warnings):
            rel_path = path.relative_to(root_path).as_posix()
            try:
                size = path.stat().st_size
            except OSError as exc:
                message = f"Skipping unreadable file {rel_path}: {exc.strerror or exc}"
                logger.warning(message)
                result.warnings.append(message)
                continue
            result.files.append(FileRecord(path=rel_path, size=size, category=classify(rel_path)))
        return result

    def _iter_files(self, root: Path, warnings: List[str]) -> Iterator[Path]:
        def _on_error(error: OSError) -> None:
            target = error.filename or str(error)
            try:
                target = Path(target).relative_to(root).as_posix()
            except ValueError:
                pass
            message = f"Skipping unreadable directory {target}: {error.strerror or error}"
            logger.warning(message)
            warnings.append(message)

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept_dirs = []
            for name in sorted(dirnames):
                if not self.include_all and (
                    name.startswith(".") or name in _DEPENDENCY_CACHE_DIRS
                ):
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _matches_any(rel_path, self.exclude_paths):
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in sorted(filenames):
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _matches_any(rel_path, self.exclude_paths):
                    continue
                yield current_dir / filename


__all__ = ["FileWalker", "classify", "SCRIPT_EXTENSIONS", "STYLE_EXTENSIONS"]
