# tests/unit/parsers/test_rust_extractor.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Unit tests for the Rust extractor."""

import pytest

from code_canvas.models import ReferenceKind, SymbolKind


@pytest.fixture
def sample_crate() -> str:
    """Sample Rust module with items, an impl block and calls."""
    return '''use crate::shapes::Circle;
use std::collections::{HashMap, HashSet};
mod utils;
mod inline { fn hidden() {} }

pub struct Point { x: i32 }
pub trait Area { fn area(&self) -> f64; }
pub enum Shape { A }
type Pair = (i32, i32);
const MAX: u32 = 10;

impl Area for Point {
    fn area(&self) -> f64 { 0.0 }
}

pub fn build() -> Point {
    let p = Point { x: 1 };
    let c = Circle::new(2.0);
    let add = |a: i32| a + 1;
    helper(p.x);
    c.render();
    utils::compute();
    p.clone();
    p
}
'''


@pytest.fixture
def structure(analyze, sample_crate):
    return analyze(sample_crate, "src/lib.rs")


class TestRustSymbols:
    """Tests for item extraction."""

    def test_language(self, structure):
        assert structure.language == "rust"

    def test_symbols_in_source_order(self, structure):
        assert [(s.name, s.kind) for s in structure.symbols] == [
            ("hidden", SymbolKind.FUNCTION),
            ("Point", SymbolKind.CLASS),
            ("Area", SymbolKind.INTERFACE),
            ("area", SymbolKind.FUNCTION),
            ("Shape", SymbolKind.CLASS),
            ("Pair", SymbolKind.TYPE),
            ("MAX", SymbolKind.VARIABLE),
            ("area", SymbolKind.FUNCTION),
            ("build", SymbolKind.FUNCTION),
            ("p", SymbolKind.VARIABLE),
            ("c", SymbolKind.VARIABLE),
            ("add", SymbolKind.VARIABLE),
            ("add", SymbolKind.FUNCTION),
        ]

    def test_function_span(self, structure):
        build = next(s for s in structure.symbols if s.name == "build")

        assert build.start_line == 16
        assert build.end_line == 25

    def test_mutable_bindings(self, analyze):
        structure = analyze(
            "fn main() {\n    let mut count = 0;\n    let mut bump = || count += 1;\n}\n", "main.rs"
        )

        assert [(s.name, s.kind) for s in structure.symbols] == [
            ("main", SymbolKind.FUNCTION),
            ("count", SymbolKind.VARIABLE),
            ("bump", SymbolKind.VARIABLE),
            ("bump", SymbolKind.FUNCTION),
        ]


class TestRustImportsExports:
    """Tests for use/mod imports and pub exports."""

    def test_imports(self, structure):
        assert structure.imports == (
            "crate::shapes::Circle",
            "std::collections::{HashMap, HashSet}",
            "utils",
        )

    def test_pub_items_are_exports(self, structure):
        assert structure.exports == ("Point", "Area", "Shape", "build")


class TestRustCallsAndReferences:
    """Tests for call sites, instantiation and trait implementation."""

    def test_call_sites(self, structure):
        assert [c.callee_name for c in structure.call_sites] == [
            "helper",
            "render",
            "compute",
        ]

    def test_instantiations(self, structure):
        refs = [
            r.symbol_name
            for r in structure.symbol_references
            if r.reference_kind == ReferenceKind.INSTANTIATION
        ]

        assert refs == ["Point", "Circle"]

    def test_trait_impl_is_inheritance(self, structure):
        refs = [
            (r.symbol_name, r.line)
            for r in structure.symbol_references
            if r.reference_kind == ReferenceKind.INHERITANCE
        ]

        assert refs == [("Area", 12)]

    def test_type_usages(self, structure):
        usages = [
            (r.symbol_name, r.symbol_kind)
            for r in structure.symbol_references
            if r.reference_kind == ReferenceKind.USAGE
        ]

        assert usages == [("Point", SymbolKind.TYPE), ("Point", SymbolKind.TYPE)]

    def test_generic_argument_usage_is_interface_kind(self, analyze):
        structure = analyze("fn f(items: Vec<Item>) -> Option<Item> { None }\n", "a.rs")
        kinds = [
            r.symbol_kind for r in structure.symbol_references if r.symbol_name == "Item"
        ]

        assert kinds == [SymbolKind.INTERFACE, SymbolKind.INTERFACE]
