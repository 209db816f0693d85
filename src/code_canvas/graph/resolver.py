# code_canvas/graph/resolver.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Cross-file resolution over extracted facts.

Import strings are matched to candidate files to produce import edges, and
symbol queries collect call sites and references grouped by the function
they occur in. Nothing here parses; both operations work on FileStructures
only and never raise for a missing match.
"""

import logging
from typing import Iterable, Mapping, Optional, Sequence

from ..models import (
    EdgeKind,
    FileStructure,
    GraphEdge,
    Occurrence,
    ReferenceKind,
    Symbol,
    SymbolKind,
    UsageGroup,
)
from ..parsers.languages import LanguageId, extensions_for, to_language_id
from .symbol_table import SymbolTable

logger = logging.getLogger(__name__)

RUST_PATH_PREFIXES = ("crate", "self", "super")

# Files standing for their directory when a module path names the directory
PACKAGE_ENTRY_FILES: dict[LanguageId, tuple[str, ...]] = {
    LanguageId.JAVASCRIPT: ("/index",),
    LanguageId.TYPESCRIPT: ("/index",),
    LanguageId.TSX: ("/index",),
    LanguageId.PYTHON: ("/__init__",),
    LanguageId.RUST: ("/mod", "/lib"),
}

REFERENCE_KINDS: dict[SymbolKind, frozenset[ReferenceKind]] = {
    SymbolKind.CLASS: frozenset({ReferenceKind.INSTANTIATION, ReferenceKind.INHERITANCE}),
    SymbolKind.INTERFACE: frozenset({ReferenceKind.USAGE}),
    SymbolKind.TYPE: frozenset({ReferenceKind.USAGE}),
}


def normalize_import(import_path: str, language: LanguageId) -> list[str]:
    """Turn an import string into slash-separated module paths.

    The first entry is the full module path; for Python and Rust the
    parent module paths follow (from a.b import c may live in a/b or a).

    Examples:
        "./lib/util"               -> ["lib/util"]
        "..pkg.mod" (python)       -> ["pkg/mod", "pkg"]
        "crate::utils::helper"     -> ["utils/helper", "utils"]
        "std::collections::{A, B}" -> ["std/collections", "std"]

    Args:
        import_path: Import string as written in source
        language: Language of the importing file

    Returns:
        Module paths, most specific first. Empty if nothing remains.
    """
    path = import_path.strip()

    if language == LanguageId.RUST:
        path = path.split("{")[0].split(" as ")[0].strip()
        segments = [s for s in path.split("::") if s and s != "*"]
        while segments and segments[0] in RUST_PATH_PREFIXES:
            segments.pop(0)
        return ["/".join(segments[:i]) for i in range(len(segments), 0, -1)]

    if language == LanguageId.PYTHON:
        segments = [s for s in path.lstrip(".").split(".") if s]
        return ["/".join(segments[:i]) for i in range(len(segments), 0, -1)]

    segments = path.replace("\\", "/").split("/")
    while segments and segments[0] in (".", ".."):
        segments.pop(0)
    normalized = "/".join(s for s in segments if s)
    return [normalized] if normalized else []


class ImportResolver:
    """Matches import strings of analyzed files to candidate files.

    A candidate matches an import p when its path contains p as a substring,
    or when its path equals or ends with "/" + n + suffix for a normalized
    module path n. Suffixes are "", every known extension of the
    selection's languages, and the package entry files of those languages.
    """

    def __init__(self, candidate_files: Sequence[str], languages: Iterable[str]):
        """Initialize resolver for one selection.

        Args:
            candidate_files: Files imports may resolve to, in priority order
            languages: Languages present in the selection
        """
        self.candidate_files = list(candidate_files)
        lang_ids = {to_language_id(lang) for lang in languages}
        extensions = extensions_for(lang_ids)

        suffixes = [""]
        suffixes.extend(extensions)
        for lang_id in sorted(lang_ids, key=lambda lang: lang.value):
            for entry in PACKAGE_ENTRY_FILES.get(lang_id, ()):
                suffixes.extend(entry + ext for ext in extensions)
        self.suffixes = list(dict.fromkeys(suffixes))

    def resolve(
        self, import_path: str, language: LanguageId, source_file: Optional[str] = None
    ) -> Optional[str]:
        """Find the file an import string refers to.

        Args:
            import_path: Import string as written in source
            language: Language of the importing file
            source_file: Importing file, never returned as a match

        Returns:
            First matching candidate file, or None.
        """
        candidates = [c for c in self.candidate_files if c != source_file]
        module_paths = normalize_import(import_path, language)

        # Substring matches only make sense for imports naming something
        use_substring = any(ch.isalnum() for ch in import_path)

        first = module_paths[0] if module_paths else None
        for candidate in candidates:
            if use_substring and import_path in candidate:
                return candidate
            if first is not None and self._matches(candidate, first):
                return candidate

        for module_path in module_paths[1:]:
            for candidate in candidates:
                if self._matches(candidate, module_path):
                    return candidate
        return None

    def _matches(self, candidate: str, module_path: str) -> bool:
        path = candidate.replace("\\", "/")
        for suffix in self.suffixes:
            target = module_path + suffix
            if path == target or path.endswith("/" + target):
                return True
        return False


def resolve_import_edges(
    file_structures: Mapping[str, FileStructure], candidate_files: Sequence[str]
) -> list[GraphEdge]:
    """Connect files to the candidate files their imports refer to.

    Files are visited in mapping order and imports in source order. Each
    (source, target) pair yields at most one edge; self-imports yield none.

    Args:
        file_structures: Analyzed files keyed by path
        candidate_files: Files imports may resolve to

    Returns:
        List of imports edges with id "{source}-{target}".
    """
    languages = {structure.language for structure in file_structures.values()}
    resolver = ImportResolver(candidate_files, languages)

    edges: list[GraphEdge] = []
    seen: set[tuple[str, str]] = set()
    for source, structure in file_structures.items():
        language = to_language_id(structure.language)
        for import_path in structure.imports:
            target = resolver.resolve(import_path, language, source_file=source)
            if target is None or (source, target) in seen:
                continue
            seen.add((source, target))
            edges.append(
                GraphEdge(
                    id=f"{source}-{target}",
                    source=source,
                    target=target,
                    kind=EdgeKind.IMPORTS,
                )
            )

    logger.debug(f"Resolved {len(edges)} import edges across {len(file_structures)} files")
    return edges


def matching_occurrences(symbol: Symbol, structure: FileStructure) -> list[Occurrence]:
    """Get the occurrences in one file that refer to symbol by name and kind."""
    if symbol.kind == SymbolKind.FUNCTION:
        return [c for c in structure.call_sites if c.callee_name == symbol.name]

    reference_kinds = REFERENCE_KINDS.get(symbol.kind)
    if not reference_kinds:
        return []
    return [
        r
        for r in structure.symbol_references
        if r.symbol_name == symbol.name and r.reference_kind in reference_kinds
    ]


def resolve_symbol_usages(
    symbol: Symbol,
    file_structures: Mapping[str, FileStructure],
    candidate_files: Optional[Iterable[str]] = None,
) -> list[UsageGroup]:
    """Find where a symbol is used, grouped by caller context.

    Every occurrence is attributed to the innermost function of its file
    containing its line, or to the file itself at top level. Occurrences
    sharing (file, enclosing function) form one group.

    Args:
        symbol: Queried symbol; only its name and kind are used
        file_structures: Analyzed files keyed by path
        candidate_files: Restrict the scan to these files

    Returns:
        Usage groups in first-seen order; empty if there are no matches.
    """
    allowed = set(candidate_files) if candidate_files is not None else None
    table = SymbolTable.from_structures(file_structures)

    groups: dict[tuple[str, Optional[Symbol]], list[Occurrence]] = {}
    for path, structure in file_structures.items():
        if allowed is not None and path not in allowed:
            continue
        for occurrence in matching_occurrences(symbol, structure):
            enclosing = table.enclosing_function(path, occurrence.line)
            groups.setdefault((path, enclosing), []).append(occurrence)

    return [
        UsageGroup(file=path, enclosing=enclosing, occurrences=tuple(occurrences))
        for (path, enclosing), occurrences in groups.items()
    ]
