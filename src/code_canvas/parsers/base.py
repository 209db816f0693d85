# code_canvas/parsers/base.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Base fact extractor for code_canvas language extractors.

An extractor walks a finished syntax tree once, in pre-order, and turns
recognized node kinds into facts: symbols, imports, exports, call sites and
symbol references. Subclasses implement _visit() for one language family.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..models import (
    CallSite,
    ReferenceKind,
    Symbol,
    SymbolKind,
    SymbolReference,
)
from .languages import LanguageId


@dataclass
class ExtractedFacts:
    """Facts collected during one walk, in pre-order source order."""

    symbols: list[Symbol] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    exports: list[str] = field(default_factory=list)
    call_sites: list[CallSite] = field(default_factory=list)
    symbol_references: list[SymbolReference] = field(default_factory=list)


class BaseExtractor(ABC):
    """Base class for syntax-tree fact extractors.

    Extractors are stateless; one instance can serve every file of its
    languages, including concurrently.
    """

    languages: tuple[LanguageId, ...] = ()

    # Callee names never reported as call sites
    BUILTIN_FUNCTIONS: frozenset[str] = frozenset()
    BUILTIN_METHODS: frozenset[str] = frozenset()

    # Pattern nodes wrapping the identifier they bind, e.g. `mut x`
    NAME_WRAPPERS: frozenset[str] = frozenset()

    def extract(self, root_node, file_path: str) -> ExtractedFacts:
        """Extract facts from a syntax tree.

        Args:
            root_node: Root node of the file's tree.
            file_path: Path recorded on call sites and references.

        Returns:
            ExtractedFacts for the file.
        """
        facts = ExtractedFacts()
        for node in self._walk_tree(root_node):
            self._visit(node, facts, file_path)
        return facts

    @abstractmethod
    def _visit(self, node, facts: ExtractedFacts, file_path: str) -> None:
        """Record the facts contributed by a single node."""
        pass

    def _walk_tree(self, node) -> Iterator:
        """Walk all nodes in pre-order without recursion.

        Nodes without a type are skipped along with their subtree. Nodes
        without children are leaves.
        """
        stack = [node]
        while stack:
            current = stack.pop()
            if current is None or not getattr(current, "type", None):
                continue
            yield current
            children = getattr(current, "children", None)
            if children:
                stack.extend(reversed(children))

    def _get_node_text(self, node) -> str:
        """Get the source text of a node."""
        text = getattr(node, "text", None)
        if text is None:
            return ""
        if isinstance(text, bytes):
            return text.decode("utf-8", errors="replace")
        return str(text)

    def _get_node_line(self, node) -> int:
        """Get the 1-indexed line number of a node."""
        return node.start_point[0] + 1

    def _get_node_column(self, node) -> int:
        return node.start_point[1]

    def _get_node_end_line(self, node) -> int:
        """Get the 1-indexed end line number of a node."""
        return node.end_point[0] + 1

    def _children(self, node) -> list:
        return list(getattr(node, "children", None) or ())

    def _field(self, node, name: str):
        """Get a named field child, or None for nodes without fields."""
        getter = getattr(node, "child_by_field_name", None)
        if getter is None:
            return None
        return getter(name)

    def _find_child(self, node, *types: str):
        """Get the first direct child whose type is one of types."""
        for child in self._children(node):
            if getattr(child, "type", None) in types:
                return child
        return None

    def _is_field_of(self, node, parent, name: str) -> bool:
        """Check if node is the named field of parent."""
        target = self._field(parent, name)
        return target is not None and self._same_node(target, node)

    def _same_node(self, a, b) -> bool:
        if a is b:
            return True
        return (
            a.type == b.type
            and getattr(a, "start_byte", None) == getattr(b, "start_byte", None)
            and getattr(a, "end_byte", None) == getattr(b, "end_byte", None)
        )

    def _string_value(self, node) -> str:
        """Get the content of a string literal without its quotes."""
        parts = [
            self._get_node_text(child)
            for child in self._children(node)
            if child.type in ("string_fragment", "string_content")
        ]
        if parts:
            return "".join(parts)
        return self._get_node_text(node).strip("'\"`")

    def _bound_name(
        self,
        node,
        binders: dict[str, tuple[str, str]],
        stop: frozenset[str] = frozenset(),
    ) -> Optional[str]:
        """Get the name an anonymous function expression is bound to.

        Climbs the ancestors up to the enclosing statement list (a type in
        stop) and returns the name of the first binder holding the function
        in its value, so `const handler = useCallback(() => ...)` names the
        arrow function "handler". binders maps a binder type to (name field,
        value field). A binder whose name is not a plain identifier, such as
        `obj.run = ...` or a destructuring pattern, is passed over.
        """
        child = node
        parent = getattr(node, "parent", None)
        while parent is not None and parent.type not in stop:
            if parent.type in binders:
                name_field, value_field = binders[parent.type]
                value = self._field(parent, value_field)
                if value is None or self._same_node(value, child):
                    name = self._binding_identifier(self._field(parent, name_field))
                    if name is not None:
                        return name
            child, parent = parent, getattr(parent, "parent", None)
        return None

    def _binding_identifier(self, node) -> Optional[str]:
        """Get the plain identifier a pattern binds, or None."""
        if node is not None and node.type in self.NAME_WRAPPERS:
            node = self._find_child(node, "identifier")
        if node is None or node.type != "identifier":
            return None
        return self._get_node_text(node)

    def _has_ancestor(
        self, node, targets: frozenset[str], stop: frozenset[str]
    ) -> bool:
        """Check if any ancestor below a stop node has a type in targets."""
        parent = getattr(node, "parent", None)
        while parent is not None and parent.type not in stop:
            if parent.type in targets:
                return True
            parent = getattr(parent, "parent", None)
        return False

    def _make_symbol(
        self, name: str, kind: SymbolKind, node, with_end: bool = True
    ) -> Symbol:
        return Symbol(
            name=name,
            kind=kind,
            start_line=self._get_node_line(node),
            start_column=self._get_node_column(node),
            end_line=self._get_node_end_line(node) if with_end else None,
            end_column=node.end_point[1] if with_end else None,
        )

    def _add_call(self, facts: ExtractedFacts, name: str, node, file_path: str) -> None:
        facts.call_sites.append(
            CallSite(
                callee_name=name,
                line=self._get_node_line(node),
                column=self._get_node_column(node),
                caller_file=file_path,
            )
        )

    def _add_reference(
        self,
        facts: ExtractedFacts,
        name: str,
        kind: SymbolKind,
        reference_kind: ReferenceKind,
        node,
        file_path: str,
    ) -> None:
        facts.symbol_references.append(
            SymbolReference(
                symbol_name=name,
                symbol_kind=kind,
                referenced_in_file=file_path,
                line=self._get_node_line(node),
                column=self._get_node_column(node),
                reference_kind=reference_kind,
            )
        )
