# code_canvas/__init__.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
code_canvas: source structure extraction and cross-reference graphs.

Parses source files with tree-sitter, extracts symbols, imports, call sites
and references, resolves them across files and lays the result out as a
graph of file nodes.
"""

from .analyzer import CodeAnalyzer
from .config import CanvasConfig, LayoutConfig
from .errors import (
    CodeCanvasError,
    InitError,
    NotInitialized,
    ParseError,
    UnsupportedLanguage,
)
from .graph import CanvasGraph, SymbolTable, layout, resolve_import_edges, resolve_symbol_usages
from .models import (
    CallSite,
    EdgeKind,
    FileStructure,
    GraphEdge,
    GraphNode,
    NodeKind,
    Position,
    ReferenceKind,
    Symbol,
    SymbolKind,
    SymbolReference,
    UsageGroup,
)
from .parsers import LanguageId, detect_language

__version__ = "0.1.0"

__all__ = [
    # Engine
    "CodeAnalyzer",
    "CanvasGraph",
    "SymbolTable",
    "detect_language",
    "resolve_import_edges",
    "resolve_symbol_usages",
    "layout",
    # Config
    "CanvasConfig",
    "LayoutConfig",
    # Models
    "LanguageId",
    "Symbol",
    "SymbolKind",
    "CallSite",
    "SymbolReference",
    "ReferenceKind",
    "FileStructure",
    "GraphNode",
    "GraphEdge",
    "NodeKind",
    "EdgeKind",
    "Position",
    "UsageGroup",
    # Errors
    "CodeCanvasError",
    "UnsupportedLanguage",
    "NotInitialized",
    "InitError",
    "ParseError",
]
