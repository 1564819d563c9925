"""Tests for complexity scoring."""

import json
from pathlib import Path

import pytest

from flowcheck.analysis.complexity import (
    ComplexityStrategy,
    category_weighted_complexity,
    complexity_label,
    complexity_score,
    estimate_max_depth,
    is_high_complexity,
    layout_depth_complexity,
)
from flowcheck.models.workflow_graph import FlowData, WorkflowEdge, WorkflowNode

FIXTURES = Path(__file__).parent / "fixtures"


def _node(node_id: str, node_type: str | None = None, y: float | None = None, category: str | None = None) -> WorkflowNode:
    payload = {"id": node_id, "data": {"label": node_id, "type": node_type, "category": category}}
    if y is not None:
        payload["position"] = {"x": 0, "y": y}
    return WorkflowNode.model_validate(payload)


def _load_fixture(name: str) -> FlowData:
    with open(FIXTURES / name) as f:
        return FlowData.model_validate(json.load(f))


class TestDepthEstimate:
    """Test the layout-derived depth."""

    def test_empty(self):
        assert estimate_max_depth([]) == 0

    def test_single_row(self):
        assert estimate_max_depth([_node("a", y=0), _node("b", y=40)]) == 1

    def test_half_layer_rounds_up(self):
        assert estimate_max_depth([_node("a", y=0), _node("b", y=250)]) == 4

    def test_missing_position_sits_at_zero(self):
        assert estimate_max_depth([_node("a"), _node("b", y=-100)]) == 2


class TestLayoutDepth:
    """Test the layout_depth strategy."""

    def test_empty_graph(self):
        assert layout_depth_complexity([], []) == 0

    def test_lone_start_without_position(self):
        # 5 + 1 + depth 1 * 10
        assert layout_depth_complexity([_node("s", "Start")], []) == 16

    def test_lone_agent(self):
        assert layout_depth_complexity([_node("a", "Agent", y=0)], []) == 30

    def test_unknown_type_uses_default_weight(self):
        assert layout_depth_complexity([_node("x", "Custom", y=0)], []) == 20

    def test_two_tools(self):
        """Two Tool nodes 250px apart: 10 + 12 + 4 * 10."""
        nodes = [_node("a", "Tool", y=0), _node("b", "Tool", y=250)]
        assert layout_depth_complexity(nodes, []) == 62
        assert layout_depth_complexity(nodes, [WorkflowEdge(source="a", target="b")]) == 65

    def test_clamped_to_100(self):
        nodes = [_node(f"a{i}", "Agent", y=i * 100) for i in range(10)]
        assert layout_depth_complexity(nodes, []) == 100

    def test_fixtures(self):
        valid = _load_fixture("valid_flow.json")
        assert layout_depth_complexity(valid.nodes, valid.edges) == 93
        flowise = _load_fixture("flowise_export.json")
        assert layout_depth_complexity(flowise.nodes, flowise.edges) == 100

    def test_adding_a_node_never_lowers_the_score(self):
        nodes = [_node("a", "Tool", y=0), _node("b", "LLM", y=100)]
        before = layout_depth_complexity(nodes, [])
        after = layout_depth_complexity(nodes + [_node("c", "Memory", y=50)], [])
        assert after >= before

    def test_adding_an_edge_never_lowers_the_score(self):
        nodes = [_node("a", "Tool", y=0), _node("b", "LLM", y=100)]
        before = layout_depth_complexity(nodes, [])
        after = layout_depth_complexity(nodes, [WorkflowEdge(source="a", target="b")])
        assert after >= before


class TestCategoryWeighted:
    """Test the category_weighted strategy."""

    def test_empty_graph(self):
        assert category_weighted_complexity([], []) == 0

    def test_weights_by_category(self):
        """3 nodes + 2 * 0.5 + 2.0 + 1.5 + 1.0 = 8.5, rounded half up."""
        nodes = [
            _node("a", category="agents"),
            _node("t", category="tools"),
            _node("d", category="documentloaders"),
        ]
        edges = [WorkflowEdge(source="d", target="a"), WorkflowEdge(source="t", target="a")]
        assert category_weighted_complexity(nodes, edges) == 9

    def test_unknown_category_weighs_nothing(self):
        assert category_weighted_complexity([_node("a", category="llm")], []) == 1

    def test_not_clamped(self):
        nodes = [_node(f"a{i}", category="agents") for i in range(40)]
        assert category_weighted_complexity(nodes, []) == 120

    def test_fixtures(self):
        valid = _load_fixture("valid_flow.json")
        assert category_weighted_complexity(valid.nodes, valid.edges) == 8
        flowise = _load_fixture("flowise_export.json")
        assert category_weighted_complexity(flowise.nodes, flowise.edges) == 8


class TestDispatch:
    """Test strategy selection and score buckets."""

    def test_default_is_layout_depth(self):
        nodes = [_node("a", "Agent", y=0)]
        assert complexity_score(nodes, []) == 30

    def test_strategy_by_name(self):
        nodes = [_node("a", "Agent", y=0, category="agents")]
        assert complexity_score(nodes, [], "category_weighted") == 3
        assert complexity_score(nodes, [], ComplexityStrategy.category_weighted) == 3

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            complexity_score([], [], "bogus")

    @pytest.mark.parametrize(
        "score, label",
        [(0, "simple"), (5, "simple"), (6, "medium"), (15, "medium"), (16, "complex")],
    )
    def test_complexity_label(self, score, label):
        assert complexity_label(score) == label

    def test_high_complexity_threshold(self):
        assert not is_high_complexity(50)
        assert is_high_complexity(51)
