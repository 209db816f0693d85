# code_canvas/graph/__init__.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Cross-file graph module for code_canvas.

Components:
- SymbolTable: Maps symbol names to declarations and lines to enclosing functions
- ImportResolver: Matches import strings to candidate files
- resolve_import_edges / resolve_symbol_usages: Cross-file resolution
- layout: Connected-component positioning of canvas nodes
- CanvasGraph: Current node/edge set with usage query retraction
"""

from .canvas import CanvasGraph, content_preview, usage_query_key
from .layout import build_adjacency, connected_components, initial_grid_position, layout
from .resolver import (
    ImportResolver,
    normalize_import,
    resolve_import_edges,
    resolve_symbol_usages,
)
from .symbol_table import SymbolTable

__all__ = [
    # Resolution
    "SymbolTable",
    "ImportResolver",
    "normalize_import",
    "resolve_import_edges",
    "resolve_symbol_usages",
    # Layout
    "build_adjacency",
    "connected_components",
    "layout",
    "initial_grid_position",
    # Canvas
    "CanvasGraph",
    "usage_query_key",
    "content_preview",
]
