# code_canvas/sources.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Content provider reading source files from disk.

Yields (filename, content) pairs lazily, in sorted path order, so a caller
can stop a batch by simply not consuming further files.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .parsers.languages import EXTENSION_TO_LANGUAGE

logger = logging.getLogger(__name__)

IGNORED_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".venv",
        "venv",
        "node_modules",
        "__pycache__",
        ".mypy_cache",
        ".pytest_cache",
        "dist",
        "build",
        "target",
    }
)


def _is_ignored(path: Path, root: Path) -> bool:
    try:
        parts = path.relative_to(root).parts[:-1]
    except ValueError:
        parts = path.parts[:-1]
    return any(part in IGNORED_DIRS for part in parts)


def iter_source_files(
    path: Path,
    recursive: bool = True,
    extensions: Optional[Iterable[str]] = None,
) -> Iterator[Path]:
    """Iterate over source files with a known extension.

    Args:
        path: File or directory to scan.
        recursive: Whether to recurse into subdirectories.
        extensions: Only yield these extensions (default: every known one).

    Yields:
        Path objects for matching source files, sorted.
    """
    path = Path(path)
    wanted = {ext.lower() for ext in (extensions or EXTENSION_TO_LANGUAGE)}

    if not path.exists():
        logger.warning(f"Source path does not exist: {path}")
        return

    if path.is_file():
        if path.suffix.lower() in wanted:
            yield path
        else:
            logger.debug(f"Skipping file with unknown extension: {path}")
        return

    candidates = path.rglob("*") if recursive else path.glob("*")
    for file_path in sorted(candidates):
        if not file_path.is_file() or file_path.suffix.lower() not in wanted:
            continue
        if _is_ignored(file_path, path):
            continue
        yield file_path


def read_sources(paths: Iterable[Path]) -> Iterator[tuple[str, str]]:
    """Read files as (filename, content) pairs.

    Files that cannot be read or decoded are logged and skipped.
    """
    for path in paths:
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
            continue
        yield Path(path).as_posix(), content
