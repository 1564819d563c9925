"""Insights and optimization suggestions for stored Flowise workflows.

These work on the Flowise `data.category` of each node (`agents`, `tools`,
`llm`, `documentloaders`, ...) rather than on the editor's node types.
"""

from collections import Counter
from dataclasses import asdict, dataclass
from enum import Enum

from flowcheck.models.validation import FindingKind, Severity
from flowcheck.models.workflow_graph import FlowData

MANY_NODES = 20
DENSE_EDGE_RATIO = 2.0
HIGH_COMPLEXITY = 15
LARGE_WORKFLOW_NODES = 10
CONNECTION_EDGE_RATIO = 1.5

_EXTERNAL_CATEGORIES = {"documentloaders", "tools"}


class InsightType(str, Enum):
    performance = "performance"
    security = "security"
    optimization = "optimization"


@dataclass
class Insight:
    """One observation from a deep analysis."""

    type: InsightType
    severity: FindingKind  # warning or info
    message: str
    suggestion: str


@dataclass
class OptimizationSuggestion:
    """A prioritized change that would simplify or speed up a workflow."""

    type: str  # complexity, structure, connections, performance
    priority: Severity
    title: str
    description: str
    impact: Severity
    effort: Severity


def _has_category(flow: FlowData, *categories: str) -> bool:
    return any(node.props.category in categories for node in flow.nodes)


def deep_analysis(
    flow: FlowData,
    include_performance: bool = True,
    include_security: bool = True,
    include_optimization: bool = True,
) -> list[Insight]:
    """Collect performance, security and optimization insights for a workflow."""
    insights: list[Insight] = []
    node_count = len(flow.nodes)
    edge_count = len(flow.edges)

    if include_performance:
        if node_count > MANY_NODES:
            insights.append(Insight(
                type=InsightType.performance,
                severity=FindingKind.warning,
                message="Workflow with many nodes may have degraded performance",
                suggestion="Consider splitting it into sub-workflows",
            ))
        if edge_count > node_count * DENSE_EDGE_RATIO:
            insights.append(Insight(
                type=InsightType.performance,
                severity=FindingKind.info,
                message="High connectivity detected",
                suggestion="Check that every connection is needed",
            ))

    if include_security and _has_category(flow, *_EXTERNAL_CATEGORIES):
        insights.append(Insight(
            type=InsightType.security,
            severity=FindingKind.warning,
            message="Workflow uses external APIs",
            suggestion="Add input validation and error handling",
        ))

    if include_optimization and _has_category(flow, "llm"):
        insights.append(Insight(
            type=InsightType.optimization,
            severity=FindingKind.info,
            message="Workflow contains LLM nodes",
            suggestion="Consider caching responses to similar requests",
        ))

    return insights


def generate_optimizations(
    flow: FlowData, current_complexity: float = 0
) -> list[OptimizationSuggestion]:
    """Suggest optimizations from the graph size and its category-weighted complexity."""
    suggestions: list[OptimizationSuggestion] = []
    node_count = len(flow.nodes)
    edge_count = len(flow.edges)

    if current_complexity > HIGH_COMPLEXITY:
        suggestions.append(OptimizationSuggestion(
            type="complexity",
            priority=Severity.high,
            title="Reduce complexity",
            description="Workflow is very complex. Split it into smaller sub-workflows.",
            impact=Severity.high,
            effort=Severity.medium,
        ))

    if node_count > LARGE_WORKFLOW_NODES:
        suggestions.append(OptimizationSuggestion(
            type="structure",
            priority=Severity.medium,
            title="Optimize structure",
            description="Group similar nodes for better organization.",
            impact=Severity.medium,
            effort=Severity.low,
        ))

    if edge_count > node_count * CONNECTION_EDGE_RATIO:
        suggestions.append(OptimizationSuggestion(
            type="connections",
            priority=Severity.low,
            title="Simplify connections",
            description="Remove unnecessary connections.",
            impact=Severity.low,
            effort=Severity.low,
        ))

    if _has_category(flow, "llm"):
        suggestions.append(OptimizationSuggestion(
            type="performance",
            priority=Severity.medium,
            title="Add LLM cache",
            description="Cache responses to similar LLM requests.",
            impact=Severity.high,
            effort=Severity.medium,
        ))

    if _has_category(flow, "documentloaders"):
        suggestions.append(OptimizationSuggestion(
            type="performance",
            priority=Severity.low,
            title="Optimize loading",
            description="Preprocess large documents.",
            impact=Severity.medium,
            effort=Severity.high,
        ))

    return suggestions


def summarize_insights(insights: list[Insight]) -> dict:
    counts = Counter(insight.type for insight in insights)
    return {
        "total_insights": len(insights),
        "performance_issues": counts[InsightType.performance],
        "security_issues": counts[InsightType.security],
        "optimization_opportunities": counts[InsightType.optimization],
    }


def summarize_optimizations(suggestions: list[OptimizationSuggestion]) -> dict:
    counts = Counter(suggestion.priority for suggestion in suggestions)
    return {
        "total_suggestions": len(suggestions),
        "high_priority": counts[Severity.high],
        "medium_priority": counts[Severity.medium],
        "low_priority": counts[Severity.low],
    }


def insight_to_dict(insight: Insight) -> dict:
    d = asdict(insight)
    d["type"] = insight.type.value
    d["severity"] = insight.severity.value
    return d


def suggestion_to_dict(suggestion: OptimizationSuggestion) -> dict:
    d = asdict(suggestion)
    for key in ("priority", "impact", "effort"):
        d[key] = d[key].value
    return d
