# code_canvas/models.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Data models for code_canvas.

Fact models (Symbol, CallSite, SymbolReference, FileStructure) are produced
once per analyzed file and never mutated; re-analysis builds new ones. Their
sequences are tuples for that reason.

Graph models (GraphNode, GraphEdge) describe the canvas handed to the
presentation layer. Nodes and edges created by a usage query carry the
query's key so they can be retracted before the next query.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class SymbolKind(str, Enum):
    """Kind of a declaration found in a syntax tree."""

    FUNCTION = "function"
    CLASS = "class"
    VARIABLE = "variable"
    INTERFACE = "interface"
    TYPE = "type"


class ReferenceKind(str, Enum):
    """How a symbol is referenced at a use site."""

    CALL = "call"
    INSTANTIATION = "instantiation"
    USAGE = "usage"
    INHERITANCE = "inheritance"


class EdgeKind(str, Enum):
    IMPORTS = "imports"
    CALLS = "calls"
    REFERENCES = "references"


class NodeKind(str, Enum):
    FILE = "file"
    USAGE = "usage"


@dataclass(frozen=True)
class Symbol:
    """A named declaration.

    Lines are 1-indexed, columns 0-indexed. end_line/end_column are only set
    for constructs with a body (function, class, interface, type alias).
    """

    name: str
    kind: SymbolKind
    start_line: int
    start_column: int
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    def contains_line(self, line: int) -> bool:
        """Check if line falls inside this symbol's span.

        A missing end_line is treated as unbounded.
        """
        if line < self.start_line:
            return False
        return self.end_line is None or line <= self.end_line


@dataclass(frozen=True)
class CallSite:
    """A call expression attributed to a callee name."""

    callee_name: str
    line: int
    column: int
    caller_file: str


@dataclass(frozen=True)
class SymbolReference:
    """A non-call relationship: instantiation, inheritance or type usage."""

    symbol_name: str
    symbol_kind: SymbolKind
    referenced_in_file: str
    line: int
    column: int
    reference_kind: ReferenceKind


Occurrence = Union[CallSite, SymbolReference]


@dataclass(frozen=True)
class FileStructure:
    """All facts extracted from one file."""

    path: str
    language: str
    symbols: tuple[Symbol, ...] = ()
    imports: tuple[str, ...] = ()
    exports: tuple[str, ...] = ()
    call_sites: tuple[CallSite, ...] = ()
    symbol_references: tuple[SymbolReference, ...] = ()

    def functions(self) -> list[Symbol]:
        """Function-kind symbols in source order."""
        return [s for s in self.symbols if s.kind == SymbolKind.FUNCTION]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class GraphNode:
    """A node on the canvas.

    File nodes carry the file's FileStructure in payload["structure"]. Usage
    nodes represent one caller context found by a usage query.
    """

    id: str
    position: Position
    kind: NodeKind = NodeKind.FILE
    label: str = ""
    payload: dict[str, Any] = field(default_factory=dict, compare=False)
    query_key: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        payload = {}
        for key, value in self.payload.items():
            if hasattr(value, "to_dict"):
                value = value.to_dict()
            payload[key] = value
        return {
            "id": self.id,
            "position": {"x": self.position.x, "y": self.position.y},
            "kind": self.kind.value,
            "label": self.label,
            "payload": payload,
            "query_key": self.query_key,
        }


@dataclass(frozen=True)
class GraphEdge:
    id: str
    source: str
    target: str
    kind: EdgeKind
    label: Optional[str] = None
    query_key: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


@dataclass(frozen=True)
class UsageGroup:
    """Usages of a queried symbol sharing one caller context.

    enclosing is the innermost function containing the usages, or None when
    they sit at file level.
    """

    file: str
    enclosing: Optional[Symbol]
    occurrences: tuple[Occurrence, ...] = ()

    @property
    def context_name(self) -> str:
        """Name of the enclosing function, or the file path."""
        return self.enclosing.name if self.enclosing else self.file

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "context": self.context_name,
            "enclosing": asdict(self.enclosing) if self.enclosing else None,
            "occurrences": [asdict(o) for o in self.occurrences],
        }
