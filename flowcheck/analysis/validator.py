"""Structural and semantic validation of workflow graphs.

`validate_workflow` runs four passes over a node/edge snapshot (structure,
per-node fields, connections, workflow logic) and turns every anomaly into a
finding. It never raises for well-typed input and never mutates it.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from pydantic import AnyUrl, TypeAdapter, ValidationError

from flowcheck.analysis.graph_metrics import (
    build_adjacency,
    connection_counts,
    dangling_endpoints,
    end_nodes,
    has_cycle,
    has_error_handling,
    isolated_nodes,
    nodes_of_kind,
    reachable_from,
)
from flowcheck.models.validation import (
    FindingKind,
    Severity,
    ValidationFinding,
    ValidationResult,
)
from flowcheck.models.workflow_graph import (
    FlowData,
    NodeKind,
    WorkflowEdge,
    WorkflowNode,
)

logger = logging.getLogger(__name__)

MAX_PROMPT_LENGTH = 2000
MAX_CONNECTIONS_PER_NODE = 5
MAX_LLM_NODES = 3
MIN_NODES_FOR_ERROR_HANDLING = 3

# points deducted per finding, by kind and severity
ERROR_PENALTIES = {Severity.high: 20, Severity.medium: 10, Severity.low: 5}
WARNING_PENALTIES = {Severity.high: 10, Severity.medium: 5, Severity.low: 2}
INFO_ALLOWANCE = 5
MAX_INFO_PENALTY = 5

_url_adapter = TypeAdapter(AnyUrl)


@dataclass
class _Findings:
    """Accumulates findings during one validation run."""

    errors: list[ValidationFinding] = field(default_factory=list)
    warnings: list[ValidationFinding] = field(default_factory=list)
    info: list[ValidationFinding] = field(default_factory=list)

    def add(
        self,
        kind: FindingKind,
        severity: Severity,
        message: str,
        node_id: str | None = None,
        edge_id: str | None = None,
    ) -> None:
        finding = ValidationFinding(
            kind=kind,
            message=message,
            node_id=node_id,
            edge_id=edge_id,
            severity=severity,
        )
        if kind is FindingKind.error:
            self.errors.append(finding)
        elif kind is FindingKind.warning:
            self.warnings.append(finding)
        else:
            self.info.append(finding)

    def error(self, message: str, **refs) -> None:
        self.add(FindingKind.error, Severity.high, message, **refs)

    def warning(self, message: str, severity: Severity = Severity.medium, **refs) -> None:
        self.add(FindingKind.warning, severity, message, **refs)


def _is_blank(value: str | None) -> bool:
    return not value or not value.strip()


def _is_valid_url(url: str) -> bool:
    try:
        _url_adapter.validate_python(url)
    except ValidationError:
        return False
    return True


def _edge_ref(index: int, edge: WorkflowEdge) -> str:
    return edge.id or f"edge_{index}"


# structural checks

def _check_structure(
    nodes: Sequence[WorkflowNode],
    edges: Sequence[WorkflowEdge],
    out: _Findings,
) -> None:
    if not nodes:
        out.error("Workflow has no nodes")
        return

    isolated = isolated_nodes(nodes, edges)
    for node in isolated:
        if node.kind is not NodeKind.start:
            out.warning(f'Node "{node.display_name}" is disconnected', node_id=node.id)

    if not nodes_of_kind(nodes, NodeKind.start):
        out.error("Workflow has no Start node")

    if len(isolated) > 1:
        out.warning(f"{len(isolated)} nodes are isolated")


# per-node checks

def _check_llm_node(node: WorkflowNode, out: _Findings) -> None:
    data = node.props
    if not data.model:
        out.warning(f'LLM node "{node.display_name}" has no model specified', node_id=node.id)
    if _is_blank(data.prompt):
        out.error(f'LLM node "{node.display_name}" has no prompt', node_id=node.id)
    if data.prompt and len(data.prompt) > MAX_PROMPT_LENGTH:
        out.warning(
            f'Prompt of node "{node.display_name}" is too long (>{MAX_PROMPT_LENGTH} characters)',
            severity=Severity.low,
            node_id=node.id,
        )


def _check_agent_node(node: WorkflowNode, out: _Findings) -> None:
    data = node.props
    if not data.agent_type:
        out.warning(f'Agent node "{node.display_name}" has no agent type specified', node_id=node.id)
    if _is_blank(data.instructions):
        out.error(f'Agent node "{node.display_name}" has no instructions', node_id=node.id)


def _check_api_node(node: WorkflowNode, out: _Findings) -> None:
    data = node.props
    if not data.url:
        out.error(f'API node "{node.display_name}" has no URL', node_id=node.id)
    elif not _is_valid_url(data.url):
        out.error(f'URL of node "{node.display_name}" is invalid', node_id=node.id)
    if not data.method:
        out.warning(f'API node "{node.display_name}" has no HTTP method specified', node_id=node.id)


def _check_condition_node(node: WorkflowNode, out: _Findings) -> None:
    data = node.props
    if not data.condition:
        out.error(f'Condition node "{node.display_name}" has no condition defined', node_id=node.id)
    elif not data.condition.strip():
        out.error(f'Condition of node "{node.display_name}" is invalid', node_id=node.id)


def _check_document_node(node: WorkflowNode, out: _Findings) -> None:
    data = node.props
    if not data.document_type:
        out.warning(
            f'Document node "{node.display_name}" has no document type specified',
            node_id=node.id,
        )
    if _is_blank(data.content):
        out.warning(f'Document node "{node.display_name}" has no content', node_id=node.id)


_NODE_CHECKS: dict[NodeKind, Callable[[WorkflowNode, _Findings], None]] = {
    NodeKind.llm: _check_llm_node,
    NodeKind.agent: _check_agent_node,
    NodeKind.api: _check_api_node,
    NodeKind.condition: _check_condition_node,
    NodeKind.document: _check_document_node,
}


def _check_nodes(nodes: Sequence[WorkflowNode], out: _Findings) -> None:
    for node in nodes:
        if _is_blank(node.props.label):
            out.error(f"Node {node.id} has no label", node_id=node.id)

        check = _NODE_CHECKS.get(node.kind)
        if check is not None:
            check(node, out)


# connection checks

def _check_connections(
    nodes: Sequence[WorkflowNode],
    edges: Sequence[WorkflowEdge],
    out: _Findings,
) -> None:
    seen: set[tuple[str, str]] = set()
    for index, edge in enumerate(edges):
        pair = (edge.source, edge.target)
        if pair in seen:
            out.error(
                f"Duplicate connection between {edge.source} and {edge.target}",
                edge_id=_edge_ref(index, edge),
            )
        seen.add(pair)

    for index, edge in enumerate(edges):
        if edge.source == edge.target:
            out.error(
                f"Node {edge.source} is connected to itself",
                edge_id=_edge_ref(index, edge),
            )

    if has_cycle(build_adjacency(nodes, edges)):
        out.error("Workflow contains circular dependencies")

    for node_id, count in connection_counts(edges).items():
        if count > MAX_CONNECTIONS_PER_NODE:
            out.warning(f"Node {node_id} has too many connections ({count})", node_id=node_id)


# workflow logic checks

def _check_logic(
    nodes: Sequence[WorkflowNode],
    edges: Sequence[WorkflowEdge],
    out: _Findings,
) -> None:
    start_nodes = nodes_of_kind(nodes, NodeKind.start)
    if len(start_nodes) == 1:
        start_id = start_nodes[0].id
        reachable = reachable_from(start_id, edges)
        unreachable = [n for n in nodes if n.id != start_id and n.id not in reachable]
        if unreachable:
            out.warning(f"{len(unreachable)} nodes are not reachable from the start node")

    terminals = end_nodes(nodes, edges)
    if len(terminals) > 1:
        out.add(
            FindingKind.info,
            Severity.low,
            f"Workflow has {len(terminals)} end points",
        )

    llm_count = len(nodes_of_kind(nodes, NodeKind.llm))
    if llm_count > MAX_LLM_NODES:
        out.warning(
            f"Workflow contains many LLM nodes ({llm_count}), which may impact performance"
        )

    if not has_error_handling(nodes) and len(nodes) > MIN_NODES_FOR_ERROR_HANDLING:
        out.warning("Workflow has no error handling")


def _check_dangling_edges(
    nodes: Sequence[WorkflowNode],
    edges: Sequence[WorkflowEdge],
    out: _Findings,
) -> None:
    for index, edge, missing_id in dangling_endpoints(nodes, edges):
        out.add(
            FindingKind.info,
            Severity.low,
            f"Connection references unknown node {missing_id}",
            edge_id=_edge_ref(index, edge),
        )


def calculate_score(
    errors: Sequence[ValidationFinding],
    warnings: Sequence[ValidationFinding],
    info: Sequence[ValidationFinding],
) -> int:
    """Health score in [0, 100] from the findings of one run.

    Info findings only cost points once there are more than five of them.
    """
    score = 100
    score -= sum(ERROR_PENALTIES[f.severity] for f in errors)
    score -= sum(WARNING_PENALTIES[f.severity] for f in warnings)
    if len(info) > INFO_ALLOWANCE:
        score -= min(MAX_INFO_PENALTY, len(info) - INFO_ALLOWANCE)
    return max(0, min(100, score))


def validate_workflow(
    nodes: Sequence[WorkflowNode],
    edges: Sequence[WorkflowEdge],
    *,
    report_dangling_edges: bool = False,
) -> ValidationResult:
    """Validate a workflow graph.

    Args:
        nodes: nodes of the workflow snapshot.
        edges: directed edges; ids missing from `nodes` are tolerated.
        report_dangling_edges: also emit a low info finding for every edge
            endpoint that is not in `nodes`.

    Returns:
        ValidationResult with findings bucketed by kind and a 0-100 score.
    """
    out = _Findings()

    _check_structure(nodes, edges, out)
    _check_nodes(nodes, out)
    _check_connections(nodes, edges, out)
    _check_logic(nodes, edges, out)
    if report_dangling_edges:
        _check_dangling_edges(nodes, edges, out)

    score = calculate_score(out.errors, out.warnings, out.info)
    logger.debug(
        "validated workflow: %d nodes, %d edges, %d errors, %d warnings, score=%d",
        len(nodes),
        len(edges),
        len(out.errors),
        len(out.warnings),
        score,
    )

    return ValidationResult(
        is_valid=not out.errors,
        errors=out.errors,
        warnings=out.warnings,
        info=out.info,
        score=score,
    )


def validate_flow_data(flow: FlowData, **kwargs) -> ValidationResult:
    """Validate a parsed `flowData` snapshot."""
    return validate_workflow(flow.nodes, flow.edges, **kwargs)
