# tests/unit/graph/test_layout.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Tests for component partitioning and layout."""

import math

import pytest

from code_canvas.config import LayoutConfig
from code_canvas.graph.layout import (
    build_adjacency,
    connected_components,
    initial_grid_position,
    layout,
)
from code_canvas.models import EdgeKind, GraphEdge, GraphNode, Position


def nodes(*ids):
    return [GraphNode(id=node_id, position=Position(0, 0)) for node_id in ids]


def edge(source, target):
    return GraphEdge(id=f"{source}-{target}", source=source, target=target, kind=EdgeKind.IMPORTS)


def positions(laid_out):
    return {n.id: (n.position.x, n.position.y) for n in laid_out}


class TestAdjacency:
    """Tests for build_adjacency."""

    def test_undirected_and_deduplicated(self):
        adjacency = build_adjacency([edge("a", "b"), edge("b", "a"), edge("a", "c")])

        assert adjacency == {"a": ["b", "c"], "b": ["a"], "c": ["a"]}


class TestConnectedComponents:
    """Tests for partitioning into components."""

    def test_isolated_nodes_are_singletons(self):
        components = connected_components(nodes("a", "b", "c"), [])

        assert components == [["a"], ["b"], ["c"]]

    def test_true_partition(self):
        graph_nodes = nodes("a", "b", "c", "d", "e")
        components = connected_components(graph_nodes, [edge("a", "b"), edge("d", "c")])

        flat = [node_id for component in components for node_id in component]
        assert sorted(flat) == ["a", "b", "c", "d", "e"]
        assert len(flat) == len(set(flat))
        assert components == [["a", "b"], ["c", "d"], ["e"]]

    def test_depth_first_visiting_order(self):
        """Order matches a recursive depth-first traversal."""
        components = connected_components(
            nodes("a", "b", "c", "d"), [edge("a", "b"), edge("a", "c"), edge("b", "d")]
        )

        assert components == [["a", "b", "d", "c"]]

    def test_long_chain_does_not_recurse(self):
        ids = [f"n{i}" for i in range(5000)]
        edges = [edge(ids[i], ids[i + 1]) for i in range(len(ids) - 1)]

        components = connected_components(nodes(*ids), edges)

        assert components == [ids]


class TestLayout:
    """Tests for component placement."""

    def test_singletons_on_top_row(self):
        laid_out = layout(nodes("a", "b"), [])

        assert positions(laid_out) == {"a": (50, 50), "b": (400, 50)}

    def test_small_component_on_circle(self):
        laid_out = layout(nodes("a", "b"), [edge("a", "b")])
        placed = positions(laid_out)

        # center (250, 200), radius max(100, 2 * 30)
        assert placed["a"] == pytest.approx((350, 200))
        assert placed["b"] == pytest.approx((150, 200))

    def test_circle_radius_grows_with_size(self):
        ids = ["a", "b", "c", "d", "e", "f"]
        edges = [edge("a", other) for other in ids[1:]]
        placed = positions(layout(nodes(*ids), edges))

        # radius max(100, 6 * 30) = 180, node 0 at angle 0
        assert placed["a"] == pytest.approx((250 + 180, 200))
        x, y = placed["b"]
        assert x == pytest.approx(250 + 180 * math.cos(2 * math.pi / 6))
        assert y == pytest.approx(200 + 180 * math.sin(2 * math.pi / 6))

    def test_large_component_on_grid(self):
        ids = [f"n{i}" for i in range(7)]
        edges = [edge(ids[i], ids[i + 1]) for i in range(6)]
        placed = positions(layout(nodes(*ids), edges))

        # ceil(sqrt(7)) = 3 columns
        assert placed["n0"] == (50, 50)
        assert placed["n2"] == (50 + 2 * 320, 50)
        assert placed["n3"] == (50, 300)
        assert placed["n6"] == (50, 550)

    def test_cursor_advances_after_component(self):
        laid_out = layout(nodes("a", "b", "c"), [edge("a", "b")])

        # 50 + max(400, 2 * 320 + 100)
        assert positions(laid_out)["c"] == (790, 50)

    def test_members_placed_in_input_order(self):
        """Position index follows node order, not traversal order."""
        laid_out = layout(nodes("b", "a"), [edge("a", "b")])
        placed = positions(laid_out)

        assert placed["b"] == pytest.approx((350, 200))

    def test_output_order_and_inputs_unchanged(self):
        original = nodes("c", "a", "b")
        laid_out = layout(original, [edge("a", "b")])

        assert [n.id for n in laid_out] == ["c", "a", "b"]
        assert all(n.position == Position(0, 0) for n in original)

    def test_dangling_edges_are_ignored(self):
        laid_out = layout(nodes("a"), [edge("a", "ghost")])

        assert positions(laid_out) == {"a": (50, 50)}

    def test_deterministic(self):
        graph_nodes = nodes(*[f"n{i}" for i in range(12)])
        edges = [edge("n0", "n3"), edge("n3", "n7"), edge("n5", "n6")]

        assert layout(graph_nodes, edges) == layout(graph_nodes, edges)
        assert positions(layout(graph_nodes, edges)) == positions(layout(graph_nodes, edges))

    def test_custom_config(self):
        config = LayoutConfig(origin_x=0, singleton_y=10, singleton_step=100)

        assert positions(layout(nodes("a", "b"), [], config)) == {"a": (0, 10), "b": (100, 10)}


class TestInitialGridPosition:
    def test_four_columns(self):
        assert initial_grid_position(0) == Position(0, 0)
        assert initial_grid_position(3) == Position(960, 0)
        assert initial_grid_position(5) == Position(320, 250)
