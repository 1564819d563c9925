"""Heuristic analysis of a workflow graph for the editor's analysis panel.

Combines the layout-depth complexity score, bottleneck detection,
optimization suggestions and rough performance estimates with a full
validation run.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from flowcheck.analysis.complexity import layout_depth_complexity
from flowcheck.analysis.graph_metrics import (
    connection_counts,
    has_error_handling,
    nodes_of_kind,
)
from flowcheck.analysis.validator import validate_workflow
from flowcheck.models.validation import ValidationResult
from flowcheck.models.workflow_graph import NodeKind, WorkflowEdge, WorkflowNode

BOTTLENECK_CONNECTIONS = 3

# kinds that call a model and dominate run time and memory
_MODEL_KINDS = (NodeKind.llm, NodeKind.agent)
_PARALLEL_KINDS = (NodeKind.llm, NodeKind.agent, NodeKind.tool)


@dataclass
class PerformanceMetrics:
    """Rough, bucketed performance estimates."""

    estimated_execution_time: str
    memory_usage: str
    parallelization_potential: int


@dataclass
class WorkflowAnalysis:
    """Everything the analysis panel shows for one graph."""

    complexity_score: int
    performance_metrics: PerformanceMetrics
    validation: ValidationResult
    bottlenecks: list[str] = field(default_factory=list)
    optimization_suggestions: list[str] = field(default_factory=list)


def _model_node_count(nodes: Sequence[WorkflowNode]) -> int:
    return sum(1 for node in nodes if node.kind in _MODEL_KINDS)


def identify_bottlenecks(
    nodes: Sequence[WorkflowNode], edges: Sequence[WorkflowEdge]
) -> list[str]:
    """Describe nodes with more than three incident edges.

    Ids that only appear on edges are skipped.
    """
    by_id = {node.id: node for node in nodes}
    bottlenecks = []
    for node_id, count in connection_counts(edges).items():
        node = by_id.get(node_id)
        if count > BOTTLENECK_CONNECTIONS and node is not None:
            bottlenecks.append(f"{node.display_name} has many connections ({count})")
    return bottlenecks


def generate_optimization_suggestions(nodes: Sequence[WorkflowNode]) -> list[str]:
    suggestions = []

    if len(nodes_of_kind(nodes, NodeKind.llm)) > 2:
        suggestions.append("Consider parallelizing sequential LLM calls")

    if not has_error_handling(nodes) and len(nodes) > 3:
        suggestions.append("Add error handling for better robustness")

    if not nodes_of_kind(nodes, NodeKind.memory) and len(nodes) > 5:
        suggestions.append("Consider adding memory nodes to keep context")

    return suggestions


def estimate_execution_time(nodes: Sequence[WorkflowNode]) -> str:
    """Bucket an estimate of 0.5s per node plus 2s per LLM/Agent node."""
    total = len(nodes) * 0.5 + _model_node_count(nodes) * 2
    if total < 5:
        return "< 5s"
    if total < 15:
        return "5-15s"
    if total < 30:
        return "15-30s"
    return "> 30s"


def estimate_memory_usage(nodes: Sequence[WorkflowNode]) -> str:
    """Bucket an estimate of 10MB per node plus 50MB per LLM/Agent node."""
    total = len(nodes) * 10 + _model_node_count(nodes) * 50
    if total < 100:
        return "< 100MB"
    if total < 500:
        return "100-500MB"
    return "> 500MB"


def parallelization_potential(nodes: Sequence[WorkflowNode]) -> int:
    """Percentage from the number of nodes that could run side by side."""
    branch_nodes = sum(1 for node in nodes if node.kind in _PARALLEL_KINDS)
    return min(100, branch_nodes * 20)


def analyze_workflow(
    nodes: Sequence[WorkflowNode], edges: Sequence[WorkflowEdge]
) -> WorkflowAnalysis:
    """Run the full heuristic analysis on a graph snapshot."""
    return WorkflowAnalysis(
        complexity_score=layout_depth_complexity(nodes, edges),
        performance_metrics=PerformanceMetrics(
            estimated_execution_time=estimate_execution_time(nodes),
            memory_usage=estimate_memory_usage(nodes),
            parallelization_potential=parallelization_potential(nodes),
        ),
        validation=validate_workflow(nodes, edges),
        bottlenecks=identify_bottlenecks(nodes, edges),
        optimization_suggestions=generate_optimization_suggestions(nodes),
    )


def analysis_to_dict(analysis: WorkflowAnalysis) -> dict:
    """Convert a WorkflowAnalysis to a JSON-serializable dict with camelCase keys."""
    return {
        "complexityScore": analysis.complexity_score,
        "bottlenecks": list(analysis.bottlenecks),
        "optimizationSuggestions": list(analysis.optimization_suggestions),
        "performanceMetrics": {
            "estimatedExecutionTime": analysis.performance_metrics.estimated_execution_time,
            "memoryUsage": analysis.performance_metrics.memory_usage,
            "parallelizationPotential": analysis.performance_metrics.parallelization_potential,
        },
        "validation": analysis.validation.model_dump(mode="json", by_alias=True),
    }
