# code_canvas/graph/canvas.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
The canvas: file nodes, import edges and the nodes of the current usage
query, kept laid out.

Usage query nodes and edges are tagged with the query's key. Showing a new
query retracts everything tagged by the previous one first, so at most one
query is on the canvas at a time.
"""

import json
import logging
from pathlib import Path, PurePosixPath
from typing import Any, Mapping, Optional, Sequence

from ..config import CanvasConfig
from ..models import (
    EdgeKind,
    FileStructure,
    GraphEdge,
    GraphNode,
    NodeKind,
    Symbol,
    SymbolKind,
    UsageGroup,
)
from .layout import initial_grid_position, layout
from .resolver import resolve_import_edges, resolve_symbol_usages

logger = logging.getLogger(__name__)


def usage_query_key(defining_file: str, symbol: Symbol) -> str:
    """Key tagging the nodes and edges of one usage query."""
    return f"{defining_file}::{symbol.kind.value}:{symbol.name}@{symbol.start_line}"


def content_preview(content: Optional[str], limit: int) -> Optional[str]:
    """Truncate content to limit characters, marking the cut with '...'."""
    if content is None:
        return None
    if len(content) <= limit:
        return content
    return content[:limit] + "..."


class CanvasGraph:
    """Current node and edge set of the canvas.

    Nodes and edges are immutable; every change builds new lists and runs
    the layout again.
    """

    def __init__(self, config: Optional[CanvasConfig] = None):
        self.config = config or CanvasConfig()
        self.nodes: list[GraphNode] = []
        self.edges: list[GraphEdge] = []
        self.structures: dict[str, FileStructure] = {}
        self.candidate_files: list[str] = []
        self.active_query: Optional[str] = None

    def build(
        self,
        file_structures: Mapping[str, FileStructure],
        contents: Optional[Mapping[str, str]] = None,
        candidate_files: Optional[Sequence[str]] = None,
    ) -> "CanvasGraph":
        """Rebuild the canvas from analyzed files.

        Args:
            file_structures: Analyzed files keyed by path
            contents: Source text by path, for node previews
            candidate_files: Files imports may resolve to (default: all
                             analyzed files)

        Returns:
            This canvas.
        """
        contents = contents or {}
        self.structures = dict(file_structures)
        if candidate_files is None:
            self.candidate_files = list(self.structures)
        else:
            self.candidate_files = list(candidate_files)
        self.active_query = None

        nodes = [
            self._file_node(index, path, structure, contents.get(path))
            for index, (path, structure) in enumerate(self.structures.items())
        ]
        self.edges = resolve_import_edges(self.structures, self.candidate_files)
        self.nodes = layout(nodes, self.edges, self.config.layout)

        logger.info(f"Canvas built: {len(self.nodes)} files, {len(self.edges)} import edges")
        return self

    def show_usages(self, symbol: Symbol, defining_file: str) -> list[UsageGroup]:
        """Show where a symbol is used, replacing the previous query.

        Adds one usage node per caller context and one edge from it to the
        defining file.

        Args:
            symbol: Queried symbol
            defining_file: File declaring the symbol

        Returns:
            The usage groups found, possibly empty.
        """
        self.clear_usages()

        query_key = usage_query_key(defining_file, symbol)
        groups = resolve_symbol_usages(symbol, self.structures, self.candidate_files)

        if symbol.kind == SymbolKind.FUNCTION:
            edge_kind, verb = EdgeKind.CALLS, "calls"
        else:
            edge_kind, verb = EdgeKind.REFERENCES, "references"

        nodes = list(self.nodes)
        edges = list(self.edges)
        for index, group in enumerate(groups):
            node_id = f"usage:{query_key}#{index}"
            nodes.append(
                GraphNode(
                    id=node_id,
                    position=initial_grid_position(len(nodes), self.config.layout),
                    kind=NodeKind.USAGE,
                    label=group.context_name,
                    payload={"group": group},
                    query_key=query_key,
                )
            )
            edges.append(
                GraphEdge(
                    id=f"function-call-{index}-{node_id}",
                    source=node_id,
                    target=defining_file,
                    kind=edge_kind,
                    label=f"{verb} {symbol.name}",
                    query_key=query_key,
                )
            )

        self.active_query = query_key
        self.edges = edges
        self.nodes = layout(nodes, edges, self.config.layout)

        logger.info(f"Found {len(groups)} usage contexts for {symbol.name}")
        return groups

    def clear_usages(self) -> None:
        """Retract the nodes and edges of the current usage query."""
        if self.active_query is None:
            return
        query_key = self.active_query
        self.active_query = None

        nodes = [n for n in self.nodes if n.query_key != query_key]
        self.edges = [e for e in self.edges if e.query_key != query_key]
        self.nodes = layout(nodes, self.edges, self.config.layout)

    def node(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "query": self.active_query,
        }

    def save(self, output_path: Path) -> None:
        """Save the canvas as JSON.

        Args:
            output_path: File to write, parent directories are created.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def _file_node(
        self, index: int, path: str, structure: FileStructure, content: Optional[str]
    ) -> GraphNode:
        payload: dict[str, Any] = {"structure": structure}
        preview = content_preview(content, self.config.preview_chars)
        if preview is not None:
            payload["preview"] = preview
        return GraphNode(
            id=path,
            position=initial_grid_position(index, self.config.layout),
            kind=NodeKind.FILE,
            label=PurePosixPath(path.replace("\\", "/")).name,
            payload=payload,
        )
