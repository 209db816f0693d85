# code_canvas/analyzer.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
CodeAnalyzer: the engine facade.

One analyzer owns one grammar registry and one parser session. Files are
parsed one at a time; the facts of each file are independent of every other
file, and cross-file resolution works on the collected FileStructures.
"""

import logging
from typing import Iterable, Mapping, Optional, Sequence

from .config import CanvasConfig
from .errors import CodeCanvasError, NotInitialized
from .graph.layout import layout as layout_nodes
from .graph.resolver import resolve_import_edges, resolve_symbol_usages
from .models import FileStructure, GraphEdge, GraphNode, Symbol, UsageGroup
from .parsers.languages import LanguageId, detect_language, to_language_id
from .parsers.registry import GrammarRegistry, extractor_for
from .parsers.session import ParserSession

logger = logging.getLogger(__name__)


class CodeAnalyzer:
    """Parses files into FileStructures and resolves them into a graph.

    Usage:
        analyzer = CodeAnalyzer().initialize()
        structures = analyzer.analyze_files(read_sources(paths))
        edges = analyzer.resolve_import_edges(structures, list(structures))
    """

    def __init__(
        self,
        config: Optional[CanvasConfig] = None,
        registry: Optional[GrammarRegistry] = None,
    ):
        """Initialize analyzer. Call initialize() before analyzing.

        Args:
            config: Canvas configuration (default language, layout)
            registry: Grammar registry; a fresh one per analyzer by default
        """
        self.config = config or CanvasConfig()
        self.registry = registry or GrammarRegistry()
        self.session = ParserSession(self.registry)
        self.default_language = to_language_id(self.config.default_language)

    def initialize(self) -> "CodeAnalyzer":
        """Bootstrap the parse engine. Raises InitError on failure."""
        self.session.initialize()
        return self

    @property
    def is_initialized(self) -> bool:
        return self.session.is_initialized

    def detect_language(self, filename: str) -> LanguageId:
        return detect_language(filename, self.default_language)

    def analyze_file(self, content: str, filename: str) -> FileStructure:
        """Extract the facts of one file.

        Args:
            content: Source code
            filename: Path of the file, recorded on every fact

        Returns:
            FileStructure for the file.

        Raises:
            NotInitialized: If initialize() has not been called.
            UnsupportedLanguage: If the file's grammar is unavailable.
            ParseError: If the parse engine failed.
        """
        if not self.session.is_initialized:
            raise NotInitialized()

        language = self.detect_language(filename)
        tree = self.session.parse(content, language, filename)
        facts = extractor_for(language).extract(tree.root_node, filename)

        logger.debug(
            f"Analyzed {filename} ({language.value}): {len(facts.symbols)} symbols, "
            f"{len(facts.imports)} imports, {len(facts.call_sites)} calls"
        )
        return FileStructure(
            path=filename,
            language=language.value,
            symbols=tuple(facts.symbols),
            imports=tuple(facts.imports),
            exports=tuple(facts.exports),
            call_sites=tuple(facts.call_sites),
            symbol_references=tuple(facts.symbol_references),
        )

    def analyze_files(self, files: Iterable[tuple[str, str]]) -> dict[str, FileStructure]:
        """Analyze (filename, content) pairs in order.

        A file that fails is logged and left out of the result; the batch
        continues. Only NotInitialized aborts the batch.

        Args:
            files: (filename, content) pairs, possibly a lazy iterator

        Returns:
            FileStructures keyed by filename, in input order.
        """
        results: dict[str, FileStructure] = {}
        failed = 0
        for filename, content in files:
            try:
                results[filename] = self.analyze_file(content, filename)
            except NotInitialized:
                raise
            except CodeCanvasError as e:
                failed += 1
                logger.warning(f"Skipping {filename}: {e}")
            except Exception as e:
                failed += 1
                logger.warning(f"Failed to analyze {filename}: {e}", exc_info=True)

        logger.info(f"Analyzed {len(results)} files ({failed} skipped)")
        return results

    def resolve_import_edges(
        self, file_structures: Mapping[str, FileStructure], candidate_files: Sequence[str]
    ) -> list[GraphEdge]:
        return resolve_import_edges(file_structures, candidate_files)

    def resolve_symbol_usages(
        self,
        symbol: Symbol,
        file_structures: Mapping[str, FileStructure],
        candidate_files: Optional[Iterable[str]] = None,
    ) -> list[UsageGroup]:
        return resolve_symbol_usages(symbol, file_structures, candidate_files)

    def layout(
        self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]
    ) -> list[GraphNode]:
        return layout_nodes(nodes, edges, self.config.layout)
