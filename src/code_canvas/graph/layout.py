# code_canvas/graph/layout.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Connected-component layout for canvas nodes.

Components are placed left to right. Single nodes sit on a top row, small
components on a circle, larger ones on a square-ish grid. All functions are
pure: they return new nodes and never touch their inputs.
"""

import math
from dataclasses import replace
from typing import Optional, Sequence

from ..config import LayoutConfig
from ..models import GraphEdge, GraphNode, Position


def build_adjacency(edges: Sequence[GraphEdge]) -> dict[str, list[str]]:
    """Build undirected adjacency lists.

    Neighbors keep edge insertion order and appear once each.
    """
    adjacency: dict[str, dict[str, None]] = {}
    for edge in edges:
        adjacency.setdefault(edge.source, {})[edge.target] = None
        adjacency.setdefault(edge.target, {})[edge.source] = None
    return {node_id: list(neighbors) for node_id, neighbors in adjacency.items()}


def connected_components(
    nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]
) -> list[list[str]]:
    """Partition node ids into connected components.

    Starts a depth-first traversal from each unvisited node in node order.
    The explicit stack of neighbor iterators visits nodes in the same order
    a recursive traversal would.

    Returns:
        Components in discovery order, each listing ids in visiting order.
        Ids only reachable through edges are included in their component.
    """
    adjacency = build_adjacency(edges)
    visited: set[str] = set()
    components: list[list[str]] = []

    for node in nodes:
        if node.id in visited:
            continue
        visited.add(node.id)
        component = [node.id]
        stack = [iter(adjacency.get(node.id, ()))]
        while stack:
            for neighbor in stack[-1]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    component.append(neighbor)
                    stack.append(iter(adjacency.get(neighbor, ())))
                    break
            else:
                stack.pop()
        components.append(component)

    return components


def layout(
    nodes: Sequence[GraphNode],
    edges: Sequence[GraphEdge],
    config: Optional[LayoutConfig] = None,
) -> list[GraphNode]:
    """Assign positions to nodes by connected component.

    Members of a component are arranged in node input order. The output
    has the same length and order as nodes.

    Args:
        nodes: Nodes to position
        edges: Edges defining connectivity; dangling ends are ignored
        config: Layout constants

    Returns:
        New nodes with positions set.
    """
    config = config or LayoutConfig()
    positions: list[Optional[Position]] = [None] * len(nodes)
    cursor = config.origin_x

    for component in connected_components(nodes, edges):
        members = set(component)
        indexes = [i for i, node in enumerate(nodes) if node.id in members]
        count = len(indexes)

        if count == 1:
            positions[indexes[0]] = Position(cursor, config.singleton_y)
            cursor += config.singleton_step
            continue

        columns = math.ceil(math.sqrt(count))
        if count <= config.small_component_max:
            center_x = cursor + config.circle_offset_x
            center_y = config.circle_center_y
            radius = max(config.min_radius, count * config.radius_per_node)
            for order, index in enumerate(indexes):
                angle = 2 * math.pi * order / count
                positions[index] = Position(
                    center_x + radius * math.cos(angle),
                    center_y + radius * math.sin(angle),
                )
        else:
            for order, index in enumerate(indexes):
                row, col = divmod(order, columns)
                positions[index] = Position(
                    cursor + col * config.column_pitch,
                    config.grid_top + row * config.row_pitch,
                )

        cursor += max(
            config.min_component_width,
            columns * config.column_pitch + config.component_margin,
        )

    return [replace(node, position=position) for node, position in zip(nodes, positions)]


def initial_grid_position(index: int, config: Optional[LayoutConfig] = None) -> Position:
    """Position of the index-th node before any layout has run."""
    config = config or LayoutConfig()
    row, col = divmod(index, config.initial_columns)
    return Position(col * config.column_pitch, row * config.row_pitch)
