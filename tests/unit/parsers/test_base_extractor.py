# tests/unit/parsers/test_base_extractor.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Tests for the shared tree walk.

Uses hand-built nodes to cover shapes real grammars rarely produce: nodes
without a type, nodes without children, and very deep trees.
"""

from types import SimpleNamespace

from code_canvas.models import SymbolKind
from code_canvas.parsers.typescript_extractor import TypeScriptExtractor


def make_node(node_type=None, text=b"", children=None, start=(0, 0), end=(0, 0)):
    node = SimpleNamespace(
        text=text,
        start_point=start,
        end_point=end,
        parent=None,
    )
    if node_type is not None:
        node.type = node_type
    if children is not None:
        node.children = children
        for child in children:
            child.parent = node
    return node


class TestWalkTree:
    """Tests for the iterative pre-order walk."""

    def test_pre_order(self):
        leaf_a = make_node("a", children=[])
        leaf_b = make_node("b", children=[])
        middle = make_node("middle", children=[leaf_a])
        root = make_node("root", children=[middle, leaf_b])

        walked = [n.type for n in TypeScriptExtractor()._walk_tree(root)]

        assert walked == ["root", "middle", "a", "b"]

    def test_node_without_type_is_skipped_with_subtree(self):
        hidden = make_node("function_declaration", children=[])
        untyped = make_node(children=[hidden])
        root = make_node("program", children=[untyped])

        walked = [n.type for n in TypeScriptExtractor()._walk_tree(root)]

        assert walked == ["program"]

    def test_node_without_children_is_a_leaf(self):
        root = make_node("program", children=[make_node("call_expression")])

        facts = TypeScriptExtractor().extract(root, "fake.ts")

        assert facts.call_sites == []
        assert facts.symbols == []

    def test_deep_tree_does_not_recurse(self):
        """Nesting deeper than the recursion limit is walked iteratively."""
        node = make_node("identifier", children=[])
        for _ in range(5000):
            node = make_node("parenthesized_expression", children=[node])

        walked = list(TypeScriptExtractor()._walk_tree(node))

        assert len(walked) == 5001


class TestFakeNodeExtraction:
    """Extraction works on nodes exposing only type, text, children and points."""

    def test_function_name_from_first_identifier(self):
        name = make_node("identifier", text=b"compute", children=[], start=(2, 9))
        body = make_node("statement_block", children=[], start=(2, 20), end=(4, 1))
        function = make_node(
            "function_declaration", children=[name, body], start=(2, 0), end=(4, 1)
        )
        root = make_node("program", children=[function], end=(5, 0))

        facts = TypeScriptExtractor().extract(root, "fake.ts")

        assert len(facts.symbols) == 1
        symbol = facts.symbols[0]
        assert symbol.name == "compute"
        assert symbol.kind == SymbolKind.FUNCTION
        assert symbol.start_line == 3
        assert symbol.end_line == 5

    def test_call_with_identifier_callee(self):
        callee = make_node("identifier", text=b"run", children=[], start=(0, 0))
        args = make_node("arguments", children=[], start=(0, 3))
        call = make_node("call_expression", children=[callee, args])
        root = make_node("program", children=[call])

        facts = TypeScriptExtractor().extract(root, "fake.ts")

        assert [c.callee_name for c in facts.call_sites] == ["run"]
        assert facts.call_sites[0].line == 1
