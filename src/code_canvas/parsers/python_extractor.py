# code_canvas/parsers/python_extractor.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Python fact extractor.

Functions, classes, module and class level assignments, imports, calls,
inheritance and names used inside type annotations.
"""

from typing import Optional

from ..models import ReferenceKind, SymbolKind
from .base import BaseExtractor, ExtractedFacts
from .languages import LanguageId


STATEMENT_BOUNDARIES = frozenset({"module", "block"})
ANNOTATION_NODES = frozenset({"type"})

FUNCTION_BINDERS = {
    "assignment": ("left", "right"),
}
BINDING_BOUNDARIES = STATEMENT_BOUNDARIES | frozenset({"lambda", "function_definition"})

BUILTIN_FUNCTIONS = frozenset(
    {
        "print", "len", "str", "int", "float", "bool", "bytes", "list", "dict",
        "set", "frozenset", "tuple", "range", "enumerate", "zip", "map",
        "filter", "sorted", "reversed", "type", "isinstance", "issubclass",
        "hasattr", "getattr", "setattr", "delattr", "super", "open", "iter",
        "next", "min", "max", "sum", "abs", "round", "any", "all", "repr",
        "hash", "id", "vars", "dir", "callable", "format", "input", "object",
        "property", "staticmethod", "classmethod",
    }
)

BUILTIN_METHODS = frozenset(
    {
        # list / dict / set
        "append", "extend", "insert", "pop", "remove", "clear", "copy",
        "update", "get", "setdefault", "items", "keys", "values", "sort",
        "add", "discard", "index", "count",
        # str / bytes
        "join", "split", "rsplit", "strip", "lstrip", "rstrip", "replace",
        "format", "startswith", "endswith", "lower", "upper", "encode",
        "decode", "find",
        # files
        "read", "write", "close",
        # logging
        "debug", "info", "warning", "warn", "error", "exception", "critical",
        "log",
    }
)

# Names inside annotations that never resolve to a project symbol
BUILTIN_TYPES = frozenset(
    {
        "None", "int", "float", "str", "bytes", "bool", "complex", "object",
        "list", "dict", "set", "frozenset", "tuple", "type",
        "Any", "Optional", "Union", "List", "Dict", "Set", "FrozenSet",
        "Tuple", "Type", "Callable", "Iterable", "Iterator", "Generator",
        "AsyncIterator", "AsyncGenerator", "Awaitable", "Coroutine",
        "Sequence", "Mapping", "MutableMapping", "MutableSequence", "Literal",
        "ClassVar", "Final", "TypeVar", "Generic", "Protocol", "Self",
        "Annotated",
    }
)


class PythonExtractor(BaseExtractor):
    """Extractor for Python trees."""

    languages = (LanguageId.PYTHON,)

    BUILTIN_FUNCTIONS = BUILTIN_FUNCTIONS
    BUILTIN_METHODS = BUILTIN_METHODS

    def _visit(self, node, facts: ExtractedFacts, file_path: str) -> None:
        node_type = node.type

        if node_type == "function_definition":
            name_node = self._field(node, "name") or self._find_child(node, "identifier")
            if name_node is not None:
                facts.symbols.append(
                    self._make_symbol(self._get_node_text(name_node), SymbolKind.FUNCTION, node)
                )

        elif node_type == "lambda":
            name = self._bound_name(node, FUNCTION_BINDERS, BINDING_BOUNDARIES)
            if name:
                facts.symbols.append(self._make_symbol(name, SymbolKind.FUNCTION, node))

        elif node_type == "class_definition":
            name_node = self._field(node, "name") or self._find_child(node, "identifier")
            if name_node is not None:
                facts.symbols.append(
                    self._make_symbol(self._get_node_text(name_node), SymbolKind.CLASS, node)
                )
            self._visit_superclasses(node, facts, file_path)

        elif node_type == "assignment":
            self._visit_assignment(node, facts)

        elif node_type == "type_alias_statement":
            name = self._type_alias_name(node)
            if name:
                facts.symbols.append(self._make_symbol(name, SymbolKind.TYPE, node))

        elif node_type == "import_statement":
            for child in self._children(node):
                if child.type == "dotted_name":
                    facts.imports.append(self._get_node_text(child))
                elif child.type == "aliased_import":
                    module = self._field(child, "name") or self._find_child(child, "dotted_name")
                    if module is not None:
                        facts.imports.append(self._get_node_text(module))

        elif node_type == "import_from_statement":
            module = self._field(node, "module_name") or self._find_child(
                node, "dotted_name", "relative_import"
            )
            if module is not None:
                facts.imports.append(self._get_node_text(module))

        elif node_type == "call":
            self._visit_call(node, facts, file_path)

        elif node_type == "identifier":
            self._visit_annotation_name(node, facts, file_path)

    def _visit_assignment(self, node, facts: ExtractedFacts) -> None:
        left = self._field(node, "left")
        if left is None or left.type != "identifier":
            return
        name = self._get_node_text(left)
        facts.symbols.append(self._make_symbol(name, SymbolKind.VARIABLE, node, with_end=False))

        if name == "__all__":
            value = self._field(node, "right")
            if value is not None and value.type in ("list", "tuple"):
                facts.exports.extend(
                    self._string_value(item)
                    for item in self._children(value)
                    if item.type == "string"
                )

    def _visit_superclasses(self, node, facts: ExtractedFacts, file_path: str) -> None:
        superclasses = self._field(node, "superclasses")
        if superclasses is None:
            return
        for base in self._children(superclasses):
            name = self._base_name(base)
            if name and name != "object":
                self._add_reference(
                    facts, name, SymbolKind.CLASS, ReferenceKind.INHERITANCE, base, file_path
                )

    def _base_name(self, node) -> Optional[str]:
        if node.type == "identifier":
            return self._get_node_text(node)
        if node.type == "attribute":
            attr = self._field(node, "attribute")
            return self._get_node_text(attr) if attr is not None else None
        return None

    def _visit_call(self, node, facts: ExtractedFacts, file_path: str) -> None:
        callee = self._field(node, "function")
        if callee is None:
            return

        if callee.type == "identifier":
            name = self._get_node_text(callee)
            if name not in self.BUILTIN_FUNCTIONS:
                self._add_call(facts, name, node, file_path)
        elif callee.type == "attribute":
            attr = self._field(callee, "attribute")
            if attr is None:
                return
            name = self._get_node_text(attr)
            if name not in self.BUILTIN_METHODS:
                self._add_call(facts, name, node, file_path)

    def _visit_annotation_name(self, node, facts: ExtractedFacts, file_path: str) -> None:
        parent = getattr(node, "parent", None)
        if parent is None:
            return
        # Only the last segment of a dotted annotation (typing.List -> List)
        if parent.type == "attribute" and not self._is_field_of(node, parent, "attribute"):
            return
        if not self._has_ancestor(node, ANNOTATION_NODES, STATEMENT_BOUNDARIES):
            return
        if self._is_alias_name(node):
            return

        name = self._get_node_text(node)
        if name in BUILTIN_TYPES:
            return
        self._add_reference(
            facts, name, SymbolKind.INTERFACE, ReferenceKind.USAGE, node, file_path
        )

    def _type_alias_name(self, node) -> Optional[str]:
        left = self._field(node, "left")
        if left is None:
            return None
        for child in self._walk_tree(left):
            if child.type == "identifier":
                return self._get_node_text(child)
        return None

    def _is_alias_name(self, node) -> bool:
        """Check if node is the name being declared by a type alias."""
        ancestor = getattr(node, "parent", None)
        while ancestor is not None and ancestor.type not in STATEMENT_BOUNDARIES:
            parent = getattr(ancestor, "parent", None)
            if (
                ancestor.type == "type"
                and parent is not None
                and parent.type == "type_alias_statement"
            ):
                return self._is_field_of(ancestor, parent, "left")
            ancestor = parent
        return False
