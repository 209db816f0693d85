# code_canvas/parsers/typescript_extractor.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
TypeScript/JavaScript fact extractor.

Handles javascript, typescript and tsx trees; the three grammars share node
kinds for everything extracted here.
"""

from typing import Optional

from ..models import ReferenceKind, SymbolKind
from .base import BaseExtractor, ExtractedFacts
from .languages import LanguageId


FUNCTION_DECLARATIONS = frozenset(
    {"function_declaration", "generator_function_declaration", "function_signature"}
)
FUNCTION_EXPRESSIONS = frozenset(
    {"function_expression", "generator_function", "arrow_function"}
)
CLASS_DECLARATIONS = frozenset({"class_declaration", "abstract_class_declaration"})
VARIABLE_DECLARATIONS = frozenset({"variable_declaration", "lexical_declaration"})

# Ancestors that make a type name an annotation use
ANNOTATION_NODES = frozenset(
    {
        "type_annotation",
        "opting_type_annotation",
        "omitting_type_annotation",
        "type_arguments",
    }
)
STATEMENT_BOUNDARIES = frozenset({"program", "statement_block", "class_body"})

# Parent types whose "name" field declares a type instead of using it
TYPE_DECLARATION_PARENTS = frozenset(
    {
        "class_declaration",
        "abstract_class_declaration",
        "class",
        "interface_declaration",
        "type_alias_declaration",
        "type_parameter",
    }
)

# Parent -> (name field, value field) binding an anonymous function
FUNCTION_BINDERS = {
    "variable_declarator": ("name", "value"),
    "assignment_expression": ("left", "right"),
}
# A function nested in another function or statement list is not named by an
# outer binder
BINDING_BOUNDARIES = (
    STATEMENT_BOUNDARIES
    | FUNCTION_DECLARATIONS
    | FUNCTION_EXPRESSIONS
    | frozenset({"method_definition"})
)

# Skip these global callees
BUILTIN_FUNCTIONS = frozenset(
    {
        "console", "require", "eval",
        "Array", "Object", "String", "Number", "Boolean", "Symbol", "BigInt",
        "Date", "RegExp", "Error", "TypeError", "RangeError", "SyntaxError",
        "Promise", "Map", "Set", "WeakMap", "WeakSet", "Proxy", "Reflect",
        "JSON", "Math",
        "parseInt", "parseFloat", "isNaN", "isFinite",
        "encodeURIComponent", "decodeURIComponent", "encodeURI", "decodeURI",
        "setTimeout", "setInterval", "clearTimeout", "clearInterval",
        "setImmediate", "clearImmediate", "queueMicrotask", "structuredClone",
        "requestAnimationFrame", "cancelAnimationFrame",
        "fetch", "alert", "confirm", "prompt",
    }
)

# Skip calls on these global objects entirely (console.foo, JSON.parse, ...)
BUILTIN_OBJECTS = frozenset(
    {
        "console", "JSON", "Math", "Object", "Array", "Promise", "Number",
        "String", "Reflect", "Symbol", "Date", "Intl",
    }
)

# Skip these method names on any receiver
BUILTIN_METHODS = frozenset(
    {
        # Array
        "push", "pop", "shift", "unshift", "slice", "splice", "concat", "join",
        "reverse", "sort", "indexOf", "lastIndexOf", "includes", "find",
        "findIndex", "findLast", "findLastIndex", "filter", "map", "forEach",
        "reduce", "reduceRight", "some", "every", "flat", "flatMap", "fill",
        "keys", "values", "entries", "at",
        # String
        "split", "replace", "replaceAll", "trim", "trimStart", "trimEnd",
        "toLowerCase", "toUpperCase", "startsWith", "endsWith", "substring",
        "substr", "charAt", "charCodeAt", "padStart", "padEnd", "repeat",
        "match", "matchAll", "search", "localeCompare", "normalize",
        "toString", "toFixed", "valueOf",
        # Promise
        "then", "catch", "finally", "all", "allSettled", "race", "any",
        "resolve", "reject",
        # Logging
        "log", "error", "warn", "info", "debug", "trace", "table", "dir",
        # Function
        "bind", "call", "apply",
    }
)


class TypeScriptExtractor(BaseExtractor):
    """Extractor for JavaScript, TypeScript and TSX trees."""

    languages = (LanguageId.JAVASCRIPT, LanguageId.TYPESCRIPT, LanguageId.TSX)

    BUILTIN_FUNCTIONS = BUILTIN_FUNCTIONS
    BUILTIN_METHODS = BUILTIN_METHODS

    def _visit(self, node, facts: ExtractedFacts, file_path: str) -> None:
        node_type = node.type

        if node_type in FUNCTION_DECLARATIONS or node_type == "method_definition":
            name = self._declared_function_name(node)
            if name:
                facts.symbols.append(self._make_symbol(name, SymbolKind.FUNCTION, node))

        elif node_type in FUNCTION_EXPRESSIONS:
            name = self._bound_name(node, FUNCTION_BINDERS, BINDING_BOUNDARIES)
            if name:
                facts.symbols.append(self._make_symbol(name, SymbolKind.FUNCTION, node))

        elif node_type in CLASS_DECLARATIONS:
            name_node = self._field(node, "name") or self._find_child(
                node, "type_identifier", "identifier"
            )
            if name_node is not None:
                facts.symbols.append(
                    self._make_symbol(self._get_node_text(name_node), SymbolKind.CLASS, node)
                )

        elif node_type in VARIABLE_DECLARATIONS:
            for name in self._declarator_names(node):
                facts.symbols.append(
                    self._make_symbol(name, SymbolKind.VARIABLE, node, with_end=False)
                )

        elif node_type == "interface_declaration":
            name_node = self._field(node, "name") or self._find_child(node, "type_identifier")
            if name_node is not None:
                facts.symbols.append(
                    self._make_symbol(
                        self._get_node_text(name_node), SymbolKind.INTERFACE, node
                    )
                )

        elif node_type == "type_alias_declaration":
            name_node = self._field(node, "name") or self._find_child(node, "type_identifier")
            if name_node is not None:
                facts.symbols.append(
                    self._make_symbol(self._get_node_text(name_node), SymbolKind.TYPE, node)
                )

        elif node_type == "import_statement":
            source = self._field(node, "source") or self._find_child(node, "string")
            if source is not None:
                facts.imports.append(self._string_value(source))

        elif node_type == "export_statement":
            facts.exports.extend(self._export_names(node))

        elif node_type == "call_expression":
            self._visit_call(node, facts, file_path)

        elif node_type == "new_expression":
            constructor = self._field(node, "constructor")
            if constructor is None:
                children = self._children(node)
                constructor = children[1] if len(children) > 1 else None
            name = self._callee_name(constructor)
            if name:
                self._add_reference(
                    facts, name, SymbolKind.CLASS, ReferenceKind.INSTANTIATION, node, file_path
                )

        elif node_type == "class_heritage":
            for target in self._heritage_targets(node):
                name = self._callee_name(target)
                if name:
                    self._add_reference(
                        facts, name, SymbolKind.CLASS, ReferenceKind.INHERITANCE, target, file_path
                    )

        elif node_type == "type_identifier":
            if self._is_type_declaration_name(node):
                return
            if self._has_ancestor(node, ANNOTATION_NODES, STATEMENT_BOUNDARIES):
                kind = SymbolKind.INTERFACE
            else:
                kind = SymbolKind.TYPE
            self._add_reference(
                facts, self._get_node_text(node), kind, ReferenceKind.USAGE, node, file_path
            )

    def _declared_function_name(self, node) -> Optional[str]:
        name_node = self._field(node, "name")
        if name_node is None:
            name_node = self._find_child(
                node, "identifier", "property_identifier", "private_property_identifier"
            )
        if name_node is None:
            return None
        return self._get_node_text(name_node)

    def _declarator_names(self, node) -> list[str]:
        """Get the plain identifier names declared by a declaration."""
        names = []
        for child in self._children(node):
            if child.type != "variable_declarator":
                continue
            name_node = self._field(child, "name") or self._find_child(child, "identifier")
            # Destructuring patterns declare no single name
            if name_node is not None and name_node.type == "identifier":
                names.append(self._get_node_text(name_node))
        return names

    def _export_names(self, node) -> list[str]:
        """Get the names a single export statement exports from this file.

        Re-exports (export ... from "x") belong to the other module.
        """
        if self._field(node, "source") is not None or self._find_child(node, "string"):
            return []

        declaration = self._field(node, "declaration")
        if declaration is not None:
            if declaration.type in VARIABLE_DECLARATIONS:
                return self._declarator_names(declaration)
            name_node = self._field(declaration, "name")
            return [self._get_node_text(name_node)] if name_node is not None else []

        names = []
        for child in self._children(node):
            if child.type == "identifier":
                names.append(self._get_node_text(child))
            elif child.type == "export_clause":
                for spec in self._children(child):
                    if spec.type != "export_specifier":
                        continue
                    exported = self._field(spec, "alias") or self._field(spec, "name")
                    if exported is not None:
                        names.append(self._string_value(exported))
        return names

    def _visit_call(self, node, facts: ExtractedFacts, file_path: str) -> None:
        callee = self._field(node, "function")
        if callee is None:
            children = self._children(node)
            callee = children[0] if children else None
        if callee is None:
            return

        if callee.type == "identifier":
            name = self._get_node_text(callee)
            if name not in self.BUILTIN_FUNCTIONS:
                self._add_call(facts, name, node, file_path)

        elif callee.type == "member_expression":
            receiver = self._field(callee, "object")
            if (
                receiver is not None
                and receiver.type == "identifier"
                and self._get_node_text(receiver) in BUILTIN_OBJECTS
            ):
                return
            name = self._member_name(callee)
            if name and name not in self.BUILTIN_METHODS:
                self._add_call(facts, name, node, file_path)

    def _member_name(self, node) -> Optional[str]:
        prop = self._field(node, "property") or self._find_child(
            node, "property_identifier", "private_property_identifier"
        )
        if prop is None:
            return None
        return self._get_node_text(prop)

    def _callee_name(self, node) -> Optional[str]:
        """Get the referenced name of an identifier or member expression."""
        if node is None:
            return None
        if node.type in ("identifier", "type_identifier"):
            return self._get_node_text(node)
        if node.type == "member_expression":
            return self._member_name(node)
        return None

    def _heritage_targets(self, node) -> list:
        """Get the superclass expressions of a class_heritage node.

        JavaScript puts the expression directly under class_heritage;
        TypeScript wraps it in an extends_clause. Implemented interfaces
        are type usages, not inheritance.
        """
        targets = []
        for child in self._children(node):
            if child.type == "extends_clause":
                targets.extend(
                    c
                    for c in self._children(child)
                    if c.type in ("identifier", "member_expression")
                )
            elif child.type in ("identifier", "member_expression"):
                targets.append(child)
        return targets

    def _is_type_declaration_name(self, node) -> bool:
        parent = getattr(node, "parent", None)
        if parent is None:
            return False
        if parent.type == "type_parameter":
            return True
        return parent.type in TYPE_DECLARATION_PARENTS and self._is_field_of(
            node, parent, "name"
        )
