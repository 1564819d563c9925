"""flowcheck - validation, complexity scoring and analysis of AI agent workflow graphs."""

from flowcheck.models.workflow_graph import (
    FlowData,
    NodeData,
    NodeKind,
    NodePosition,
    WorkflowEdge,
    WorkflowNode,
)
from flowcheck.models.validation import (
    FindingKind,
    Severity,
    ValidationFinding,
    ValidationResult,
)
from flowcheck.analysis.validator import validate_flow_data, validate_workflow
from flowcheck.analysis.complexity import ComplexityStrategy, complexity_score
from flowcheck.analysis.workflow_analysis import WorkflowAnalysis, analyze_workflow
from flowcheck.utils.flow_data import FlowDataError, parse_flow_data

__all__ = [
    # Workflow graph
    "FlowData",
    "NodeData",
    "NodeKind",
    "NodePosition",
    "WorkflowEdge",
    "WorkflowNode",
    # Validation
    "FindingKind",
    "Severity",
    "ValidationFinding",
    "ValidationResult",
    # High-level APIs
    "validate_flow_data",
    "validate_workflow",
    "ComplexityStrategy",
    "complexity_score",
    "WorkflowAnalysis",
    "analyze_workflow",
    "FlowDataError",
    "parse_flow_data",
]
