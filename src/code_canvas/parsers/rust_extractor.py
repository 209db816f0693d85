# code_canvas/parsers/rust_extractor.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Rust fact extractor.

Items map onto the shared symbol kinds: structs, enums and unions are
classes, traits are interfaces. use paths and body-less mod declarations are
recorded as imports; pub items as exports.
"""

from typing import Optional

from ..models import ReferenceKind, SymbolKind
from .base import BaseExtractor, ExtractedFacts
from .languages import LanguageId


CLASS_ITEMS = frozenset({"struct_item", "enum_item", "union_item"})
VARIABLE_ITEMS = frozenset({"const_item", "static_item"})
EXPORTABLE_ITEMS = frozenset(
    {
        "function_item",
        "function_signature_item",
        "struct_item",
        "enum_item",
        "union_item",
        "trait_item",
        "type_item",
        "const_item",
        "static_item",
        "mod_item",
    }
)

ANNOTATION_NODES = frozenset({"type_arguments"})
STATEMENT_BOUNDARIES = frozenset({"source_file", "block", "declaration_list"})

# Parent -> field holding a type name that is not a usage (None: any child)
NON_USAGE_POSITIONS = {
    "struct_item": "name",
    "enum_item": "name",
    "union_item": "name",
    "trait_item": "name",
    "type_item": "name",
    "type_parameters": None,
    "constrained_type_parameter": "left",
    "struct_expression": "name",
    "impl_item": "trait",
}

FUNCTION_BINDERS = {
    "let_declaration": ("pattern", "value"),
}
BINDING_BOUNDARIES = STATEMENT_BOUNDARIES | frozenset({"closure_expression", "function_item"})

# Associated functions reported as instantiation of their type
CONSTRUCTOR_NAMES = frozenset({"new"})

BUILTIN_FUNCTIONS = frozenset({"Some", "Ok", "Err", "drop", "Box"})

BUILTIN_METHODS = frozenset(
    {
        # Option / Result
        "unwrap", "expect", "unwrap_or", "unwrap_or_else", "unwrap_or_default",
        "ok", "err", "ok_or", "ok_or_else", "and_then", "or_else", "is_some",
        "is_none", "is_ok", "is_err",
        # conversions
        "clone", "cloned", "to_string", "to_owned", "into", "from", "as_ref",
        "as_mut", "as_str", "borrow", "borrow_mut", "default",
        # iterators
        "iter", "iter_mut", "into_iter", "map", "filter", "filter_map",
        "collect", "fold", "for_each", "enumerate", "zip", "rev", "sum",
        "count", "min", "max", "any", "all", "find", "take", "skip",
        # collections
        "push", "push_str", "pop", "insert", "remove", "get", "get_mut",
        "len", "is_empty", "contains", "contains_key", "extend", "sort",
        "sort_by", "dedup", "keys", "values", "entry", "or_insert",
        "with_capacity",
        # strings / io / sync
        "split", "trim", "chars", "bytes", "lines", "parse", "fmt", "lock",
        "read", "write", "join",
        # traits
        "eq", "cmp", "partial_cmp", "hash",
    }
)

BUILTIN_TYPES = frozenset(
    {
        "Self", "String", "Vec", "Option", "Result", "Box", "Rc", "Arc",
        "RefCell", "Cell", "HashMap", "HashSet", "BTreeMap", "BTreeSet",
        "VecDeque", "Mutex", "RwLock",
    }
)


class RustExtractor(BaseExtractor):
    """Extractor for Rust trees."""

    languages = (LanguageId.RUST,)

    BUILTIN_FUNCTIONS = BUILTIN_FUNCTIONS
    BUILTIN_METHODS = BUILTIN_METHODS
    NAME_WRAPPERS = frozenset({"mut_pattern"})

    def _visit(self, node, facts: ExtractedFacts, file_path: str) -> None:
        node_type = node.type

        if node_type in ("function_item", "function_signature_item"):
            self._add_named_symbol(facts, node, SymbolKind.FUNCTION)

        elif node_type == "closure_expression":
            name = self._bound_name(node, FUNCTION_BINDERS, BINDING_BOUNDARIES)
            if name:
                facts.symbols.append(self._make_symbol(name, SymbolKind.FUNCTION, node))

        elif node_type in CLASS_ITEMS:
            self._add_named_symbol(facts, node, SymbolKind.CLASS)

        elif node_type == "trait_item":
            self._add_named_symbol(facts, node, SymbolKind.INTERFACE)

        elif node_type == "type_item":
            self._add_named_symbol(facts, node, SymbolKind.TYPE)

        elif node_type in VARIABLE_ITEMS:
            self._add_named_symbol(facts, node, SymbolKind.VARIABLE, with_end=False)

        elif node_type == "let_declaration":
            name = self._binding_identifier(self._field(node, "pattern"))
            if name is not None:
                facts.symbols.append(
                    self._make_symbol(name, SymbolKind.VARIABLE, node, with_end=False)
                )

        elif node_type == "use_declaration":
            argument = self._field(node, "argument")
            if argument is not None:
                facts.imports.append(self._get_node_text(argument))

        elif node_type == "mod_item":
            name_node = self._field(node, "name")
            if name_node is not None and self._field(node, "body") is None:
                facts.imports.append(self._get_node_text(name_node))

        elif node_type == "call_expression":
            self._visit_call(node, facts, file_path)

        elif node_type == "struct_expression":
            name = self._type_name(self._field(node, "name"))
            if name and name not in BUILTIN_TYPES:
                self._add_reference(
                    facts, name, SymbolKind.CLASS, ReferenceKind.INSTANTIATION, node, file_path
                )

        elif node_type == "impl_item":
            trait = self._field(node, "trait")
            name = self._type_name(trait)
            if name:
                self._add_reference(
                    facts, name, SymbolKind.CLASS, ReferenceKind.INHERITANCE, trait, file_path
                )

        elif node_type == "type_identifier":
            self._visit_type_usage(node, facts, file_path)

        if node_type in EXPORTABLE_ITEMS and self._is_public(node):
            name_node = self._field(node, "name")
            if name_node is not None:
                facts.exports.append(self._get_node_text(name_node))

    def _add_named_symbol(
        self, facts: ExtractedFacts, node, kind: SymbolKind, with_end: bool = True
    ) -> None:
        name_node = self._field(node, "name")
        if name_node is not None:
            facts.symbols.append(
                self._make_symbol(self._get_node_text(name_node), kind, node, with_end)
            )

    def _is_public(self, node) -> bool:
        modifier = self._find_child(node, "visibility_modifier")
        return modifier is not None and self._get_node_text(modifier).startswith("pub")

    def _visit_call(self, node, facts: ExtractedFacts, file_path: str) -> None:
        callee = self._field(node, "function")
        # foo::<T>() wraps the callee
        if callee is not None and callee.type == "generic_function":
            callee = self._field(callee, "function")
        if callee is None:
            return

        if callee.type == "identifier":
            name = self._get_node_text(callee)
            if name not in self.BUILTIN_FUNCTIONS:
                self._add_call(facts, name, node, file_path)

        elif callee.type == "field_expression":
            field_node = self._field(callee, "field")
            if field_node is None:
                return
            name = self._get_node_text(field_node)
            if name not in self.BUILTIN_METHODS:
                self._add_call(facts, name, node, file_path)

        elif callee.type == "scoped_identifier":
            name_node = self._field(callee, "name")
            if name_node is None:
                return
            name = self._get_node_text(name_node)
            if name in CONSTRUCTOR_NAMES:
                type_name = self._path_tail(self._field(callee, "path"))
                if type_name and type_name not in BUILTIN_TYPES:
                    self._add_reference(
                        facts,
                        type_name,
                        SymbolKind.CLASS,
                        ReferenceKind.INSTANTIATION,
                        node,
                        file_path,
                    )
                return
            if name not in self.BUILTIN_METHODS:
                self._add_call(facts, name, node, file_path)

    def _visit_type_usage(self, node, facts: ExtractedFacts, file_path: str) -> None:
        parent = getattr(node, "parent", None)
        if parent is not None and parent.type in NON_USAGE_POSITIONS:
            field_name = NON_USAGE_POSITIONS[parent.type]
            if field_name is None or self._is_field_of(node, parent, field_name):
                return

        name = self._get_node_text(node)
        if name in BUILTIN_TYPES:
            return

        if self._has_ancestor(node, ANNOTATION_NODES, STATEMENT_BOUNDARIES):
            kind = SymbolKind.INTERFACE
        else:
            kind = SymbolKind.TYPE
        self._add_reference(facts, name, kind, ReferenceKind.USAGE, node, file_path)

    def _path_tail(self, node) -> Optional[str]:
        """Get the last segment of a path (crate::shapes::Circle -> Circle)."""
        if node is None:
            return None
        if node.type in ("identifier", "type_identifier"):
            return self._get_node_text(node)
        if node.type == "scoped_identifier":
            return self._path_tail(self._field(node, "name"))
        return None

    def _type_name(self, node) -> Optional[str]:
        if node is None:
            return None
        if node.type == "type_identifier":
            return self._get_node_text(node)
        if node.type == "scoped_type_identifier":
            name_node = self._field(node, "name")
            return self._get_node_text(name_node) if name_node is not None else None
        if node.type == "generic_type":
            return self._type_name(self._field(node, "type"))
        return None
