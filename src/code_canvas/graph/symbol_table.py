# code_canvas/graph/symbol_table.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Declared symbols indexed by name and by file.

Supports name-only lookup across files (where is a symbol defined) and
containment lookup inside one file (which function encloses a line).
"""

from collections import defaultdict
from typing import Mapping, Optional

from ..models import FileStructure, Symbol, SymbolKind

# (file_path, symbol)
SymbolRef = tuple[str, Symbol]


class SymbolTable:
    """Maps symbol names to their declarations across analyzed files.

    Provides two lookups:
    1. Name-only: name -> every (file, symbol) declaring it
    2. Enclosing: (file, line) -> innermost function containing the line
    """

    def __init__(self):
        """Initialize empty symbol table."""
        self._by_name: dict[str, list[SymbolRef]] = defaultdict(list)
        # file_path -> function symbols in source order
        self._functions: dict[str, list[Symbol]] = {}

    @classmethod
    def from_structures(cls, file_structures: Mapping[str, FileStructure]) -> "SymbolTable":
        table = cls()
        for path, structure in file_structures.items():
            table.add_file(path, structure)
        return table

    def add_file(self, file_path: str, structure: FileStructure) -> None:
        """Index every symbol of one file.

        Re-adding a file replaces its function index; name entries are
        appended, so build a fresh table after re-analysis.
        """
        for symbol in structure.symbols:
            self._by_name[symbol.name].append((file_path, symbol))
        self._functions[file_path] = structure.functions()

    def lookup_name(self, name: str, kind: Optional[SymbolKind] = None) -> list[SymbolRef]:
        """Get all declarations of a name, optionally of one kind.

        Args:
            name: Symbol name to look up
            kind: Only return symbols of this kind

        Returns:
            List of (file_path, symbol), empty list if none.
        """
        refs = self._by_name.get(name, [])
        if kind is None:
            return list(refs)
        return [ref for ref in refs if ref[1].kind == kind]

    def enclosing_function(self, file_path: str, line: int) -> Optional[Symbol]:
        """Find the innermost function of a file whose span contains line.

        Innermost is the latest-starting containing function; among those
        starting on the same line, the narrowest. A function without an end
        line is treated as extending to the end of the file.

        Args:
            file_path: Path to the file
            line: 1-indexed line number

        Returns:
            The enclosing function symbol, or None at file level.
        """
        best: Optional[Symbol] = None
        for function in self._functions.get(file_path, ()):
            if not function.contains_line(line):
                continue
            if best is None or self._is_inner(function, best):
                best = function
        return best

    @staticmethod
    def _is_inner(candidate: Symbol, current: Symbol) -> bool:
        if candidate.start_line != current.start_line:
            return candidate.start_line > current.start_line
        if candidate.end_line is None:
            return False
        return current.end_line is None or candidate.end_line < current.end_line

    def __len__(self) -> int:
        return sum(len(refs) for refs in self._by_name.values())
