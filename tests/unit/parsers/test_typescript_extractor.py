# tests/unit/parsers/test_typescript_extractor.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Unit tests for the TypeScript/JavaScript extractor.

Tests symbol extraction, anonymous function naming, imports, exports, call
site filtering and symbol references.
"""

import pytest

from code_canvas.models import ReferenceKind, SymbolKind


@pytest.fixture
def sample_functions() -> str:
    """Sample TypeScript functions in the common declaration styles."""
    return '''
function greet(name: string): string {
    return `Hello, ${name}!`;
}

async function* ticks() {
    yield 1;
}

const multiply = (a: number, b: number): number => {
    return a * b;
}

let handler;
handler = function () {};

const wrapped = (function () { return 1; });
const obj = { run: () => 1 };
[1, 2].forEach(() => undefined);

class Greeter {
    hello() {
        return greet("x");
    }
}

declare function external(x: number): void;
'''


@pytest.fixture
def sample_exports() -> str:
    return '''
export const a = 1, b = 2;
export default foo;
export { c, d as e };
export { x } from './x';
export * from './everything';
export interface Shape {}
export type Id = string;
export class Square {}
export function area() {}
'''


def names(symbols, kind=None):
    return [s.name for s in symbols if kind is None or s.kind == kind]


class TestTypeScriptSymbols:
    """Tests for symbol extraction."""

    def test_named_functions(self, analyze, sample_functions):
        structure = analyze(sample_functions)
        functions = names(structure.symbols, SymbolKind.FUNCTION)

        assert functions == [
            "greet",
            "ticks",
            "multiply",
            "handler",
            "wrapped",
            "obj",
            "hello",
            "external",
        ]

    def test_unbound_functions_are_not_recorded(self, analyze, sample_functions):
        """A function takes the name of the declaration holding it, not of its key.

        The property arrow is named after `obj`; the callback passed to
        forEach outside any declaration has no name.
        """
        structure = analyze(sample_functions)
        functions = [s for s in structure.symbols if s.kind == SymbolKind.FUNCTION]

        assert "run" not in names(functions)
        assert [s.start_line for s in functions if s.name == "obj"] == [18]
        assert not any(s.start_line == 19 for s in functions)

    def test_function_bound_through_call(self, analyze):
        structure = analyze(
            "const handler = useCallback(() => {\n  save();\n}, []);\n"
            "const memoized = memo(function () {});\n",
            "App.tsx",
        )

        assert names(structure.symbols, SymbolKind.FUNCTION) == ["handler", "memoized"]

    def test_nested_callback_not_named_by_outer_declaration(self, analyze):
        structure = analyze(
            "const total = () => {\n  [1].forEach(() => undefined);\n};\n"
            "const first = () => [1].map(() => 2);\n"
        )

        assert names(structure.symbols, SymbolKind.FUNCTION) == ["total", "first"]

    def test_function_span(self, analyze):
        structure = analyze("function f() {\n  return 1;\n}\n")
        symbol = structure.symbols[0]

        assert symbol.name == "f"
        assert symbol.start_line == 1
        assert symbol.start_column == 0
        assert symbol.end_line == 3

    def test_classes(self, analyze):
        structure = analyze("class A {}\nabstract class B {}\n")

        assert names(structure.symbols, SymbolKind.CLASS) == ["A", "B"]

    def test_variables_one_per_declarator(self, analyze):
        structure = analyze("let a = 1, b = 2;\nvar c;\nconst { d, e } = obj;\n")
        variables = [s for s in structure.symbols if s.kind == SymbolKind.VARIABLE]

        assert [v.name for v in variables] == ["a", "b", "c"]
        assert all(v.end_line is None for v in variables)

    def test_interfaces_and_type_aliases(self, analyze):
        structure = analyze("interface Shape { area(): number }\ntype Id = string;\n")

        assert names(structure.symbols, SymbolKind.INTERFACE) == ["Shape"]
        assert names(structure.symbols, SymbolKind.TYPE) == ["Id"]

    def test_javascript_file(self, analyze):
        structure = analyze("class A {}\nconst f = () => new A();\n", "lib/a.js")

        assert structure.language == "javascript"
        assert names(structure.symbols) == ["A", "f", "f"]

    def test_lines_and_spans_are_valid(self, analyze, sample_functions):
        structure = analyze(sample_functions)

        for symbol in structure.symbols:
            assert symbol.start_line >= 1
            if symbol.end_line is not None:
                assert symbol.end_line >= symbol.start_line
        for call in structure.call_sites:
            assert call.line >= 1
        for ref in structure.symbol_references:
            assert ref.line >= 1


class TestTypeScriptImportsExports:
    """Tests for import and export extraction."""

    def test_imports_in_source_order_with_duplicates(self, analyze):
        structure = analyze(
            "import { a } from './a';\n"
            "import React from \"react\";\n"
            "import './styles.css';\n"
            "import { b } from './a';\n"
        )

        assert structure.imports == ("./a", "react", "./styles.css", "./a")

    def test_exports(self, analyze, sample_exports):
        structure = analyze(sample_exports)

        assert structure.exports == (
            "a",
            "b",
            "foo",
            "c",
            "e",
            "Shape",
            "Id",
            "Square",
            "area",
        )


class TestTypeScriptCallSites:
    """Tests for call site extraction and denylists."""

    def test_builtin_calls_are_excluded(self, analyze):
        structure = analyze("console.log(x); foo(x)", "main.js")

        assert [c.callee_name for c in structure.call_sites] == ["foo"]

    def test_member_calls_use_property_name(self, analyze):
        structure = analyze(
            "api.fetchUser(1);\n"
            "this.render();\n"
            "items.map(x => x).filter(Boolean);\n"
            "JSON.parse(text);\n"
            "setTimeout(tick, 10);\n"
            "client?.send(msg);\n"
        )

        assert [c.callee_name for c in structure.call_sites] == [
            "fetchUser",
            "render",
            "send",
        ]

    def test_call_site_position_and_file(self, analyze):
        structure = analyze("\n  helper();\n", "src/main.ts")
        call = structure.call_sites[0]

        assert call.callee_name == "helper"
        assert call.line == 2
        assert call.column == 2
        assert call.caller_file == "src/main.ts"


class TestTypeScriptReferences:
    """Tests for instantiation, inheritance and type usage references."""

    @pytest.fixture
    def structure(self, analyze):
        return analyze(
            "class Dog extends Animal implements Pet {\n"
            "  bark(): Sound {\n"
            "    return new Sound('woof');\n"
            "  }\n"
            "}\n"
        )

    def test_instantiation(self, structure):
        refs = [
            r for r in structure.symbol_references
            if r.reference_kind == ReferenceKind.INSTANTIATION
        ]

        assert [(r.symbol_name, r.symbol_kind, r.line) for r in refs] == [
            ("Sound", SymbolKind.CLASS, 3)
        ]

    def test_inheritance(self, structure):
        refs = [
            r for r in structure.symbol_references
            if r.reference_kind == ReferenceKind.INHERITANCE
        ]

        assert [(r.symbol_name, r.symbol_kind) for r in refs] == [("Animal", SymbolKind.CLASS)]

    def test_javascript_inheritance(self, analyze):
        structure = analyze("class Dog extends Animal {}\n", "dog.js")
        refs = structure.symbol_references

        assert [(r.symbol_name, r.reference_kind) for r in refs] == [
            ("Animal", ReferenceKind.INHERITANCE)
        ]

    def test_declaration_names_are_not_usages(self, structure):
        usages = [
            r.symbol_name for r in structure.symbol_references
            if r.reference_kind == ReferenceKind.USAGE
        ]

        assert "Dog" not in usages
        assert usages == ["Pet", "Sound"]

    def test_annotation_usage_is_interface_kind(self, structure):
        sound = [
            r for r in structure.symbol_references
            if r.symbol_name == "Sound" and r.reference_kind == ReferenceKind.USAGE
        ]

        assert sound[0].symbol_kind == SymbolKind.INTERFACE

    def test_known_heuristic_type_kind_boundary(self, analyze):
        """Nested-in-annotation type names are 'interface', bare ones 'type'.

        A type alias used as a generic argument is therefore reported as an
        interface. This is a known heuristic boundary, kept as is.
        """
        structure = analyze(
            "type Alias = string;\n"
            "let a: Alias;\n"
            "let b: Array<Alias>;\n"
            "type Other = Alias;\n"
        )
        kinds = [
            (r.line, r.symbol_kind)
            for r in structure.symbol_references
            if r.symbol_name == "Alias"
        ]

        assert kinds == [
            (2, SymbolKind.INTERFACE),
            (3, SymbolKind.INTERFACE),
            (4, SymbolKind.TYPE),
        ]


class TestTypeScriptIdempotence:
    """Re-analysis of identical content yields identical facts."""

    def test_same_content_same_structure(self, analyze, sample_functions):
        first = analyze(sample_functions)
        second = analyze(sample_functions)

        assert first == second
        assert first.symbols == second.symbols
        assert first.call_sites == second.call_sites
