"""Complexity scoring for workflow graphs.

Two strategies coexist because different screens show them and their numbers
are not interchangeable:

- `layout_depth`: weighted by node type, with a depth estimate taken from the
  canvas layout. Clamped to [0, 100]. Shown by the editor.
- `category_weighted`: weighted by the Flowise node category. Shown by the
  imported-workflow listing, which buckets it with `complexity_label`.
"""

import math
from collections.abc import Sequence
from enum import Enum

from flowcheck.models.workflow_graph import NodeKind, WorkflowEdge, WorkflowNode


class ComplexityStrategy(str, Enum):
    """Named complexity scoring strategies."""

    layout_depth = "layout_depth"
    category_weighted = "category_weighted"


TYPE_WEIGHTS: dict[NodeKind, int] = {
    NodeKind.agent: 15,
    NodeKind.llm: 10,
    NodeKind.condition: 8,
    NodeKind.loop: 12,
    NodeKind.tool: 6,
    NodeKind.document: 4,
    NodeKind.memory: 3,
    NodeKind.api: 8,
    NodeKind.start: 1,
}
DEFAULT_TYPE_WEIGHT = 5

CATEGORY_WEIGHTS: dict[str, float] = {
    "agents": 2.0,
    "tools": 1.5,
    "documentloaders": 1.0,
}

LAYER_HEIGHT = 100
HIGH_COMPLEXITY_THRESHOLD = 50


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def estimate_max_depth(nodes: Sequence[WorkflowNode]) -> int:
    """Layout-derived depth: one layer per 100px of vertical spread, plus one.

    Nodes without a position count as sitting at y=0. An empty graph has
    depth 0.
    """
    if not nodes:
        return 0
    ys = [node.position.y if node.position else 0.0 for node in nodes]
    return _round_half_up((max(ys) - min(ys)) / LAYER_HEIGHT) + 1


def layout_depth_complexity(
    nodes: Sequence[WorkflowNode], edges: Sequence[WorkflowEdge]
) -> int:
    score = len(nodes) * 5
    score += sum(TYPE_WEIGHTS.get(node.kind, DEFAULT_TYPE_WEIGHT) for node in nodes)
    score += len(edges) * 3
    score += estimate_max_depth(nodes) * 10
    return max(0, min(100, score))


def category_weighted_complexity(
    nodes: Sequence[WorkflowNode], edges: Sequence[WorkflowEdge]
) -> int:
    score = len(nodes) * 1.0
    score += len(edges) * 0.5
    score += sum(CATEGORY_WEIGHTS.get(node.props.category, 0.0) for node in nodes)
    return _round_half_up(score)


_STRATEGIES = {
    ComplexityStrategy.layout_depth: layout_depth_complexity,
    ComplexityStrategy.category_weighted: category_weighted_complexity,
}


def complexity_score(
    nodes: Sequence[WorkflowNode],
    edges: Sequence[WorkflowEdge],
    strategy: ComplexityStrategy = ComplexityStrategy.layout_depth,
) -> int:
    """Compute the complexity score of a graph under the given strategy."""
    return _STRATEGIES[ComplexityStrategy(strategy)](nodes, edges)


def complexity_label(score: int) -> str:
    """Bucket a category-weighted score: simple, medium or complex."""
    if score <= 5:
        return "simple"
    if score <= 15:
        return "medium"
    return "complex"


def is_high_complexity(score: int) -> bool:
    """True when a layout-depth score warrants a confirmation before editing."""
    return score > HIGH_COMPLEXITY_THRESHOLD
