"""Core data models for flowcheck."""

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
]
