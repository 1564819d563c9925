"""Graph helpers shared by the validator, the complexity scorers and the analysis.

All functions are pure and run in O(V+E). Edges may reference ids that are
not in the node list; those ids are tolerated and simply have no outgoing
edges of their own.
"""

from collections import Counter, deque
from collections.abc import Iterable, Sequence

from flowcheck.models.workflow_graph import NodeKind, WorkflowEdge, WorkflowNode

_WHITE, _GRAY, _BLACK = 0, 1, 2


def build_adjacency(
    nodes: Sequence[WorkflowNode], edges: Iterable[WorkflowEdge]
) -> dict[str, list[str]]:
    """Adjacency list keyed by the ids in the node list.

    Edges whose source is not a known node are left out. Targets are kept as
    they are, even when they are not in the node list.
    """
    adjacency: dict[str, list[str]] = {node.id: [] for node in nodes}
    for edge in edges:
        if edge.source in adjacency:
            adjacency[edge.source].append(edge.target)
    return adjacency


def has_cycle(adjacency: dict[str, list[str]]) -> bool:
    """Detect a directed cycle with an iterative white/gray/black DFS."""
    color: dict[str, int] = {}

    for root in adjacency:
        if color.get(root, _WHITE) != _WHITE:
            continue
        color[root] = _GRAY
        stack = [(root, iter(adjacency[root]))]
        while stack:
            current, neighbors = stack[-1]
            for neighbor in neighbors:
                state = color.get(neighbor, _WHITE)
                if state == _GRAY:
                    return True
                if state == _WHITE:
                    color[neighbor] = _GRAY
                    stack.append((neighbor, iter(adjacency.get(neighbor, ()))))
                    break
            else:
                color[current] = _BLACK
                stack.pop()

    return False


def reachable_from(start_id: str, edges: Iterable[WorkflowEdge]) -> set[str]:
    """Ids reachable from start_id by following edges forward (BFS).

    The start id itself is part of the returned set.
    """
    successors: dict[str, list[str]] = {}
    for edge in edges:
        successors.setdefault(edge.source, []).append(edge.target)

    visited: set[str] = set()
    queue = deque([start_id])
    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        for target in successors.get(current, ()):
            if target not in visited:
                queue.append(target)
    return visited


def connection_counts(edges: Iterable[WorkflowEdge]) -> Counter[str]:
    """Incident edge count (in + out) per id, in first-seen order."""
    counts: Counter[str] = Counter()
    for edge in edges:
        counts[edge.source] += 1
        counts[edge.target] += 1
    return counts


def isolated_nodes(
    nodes: Sequence[WorkflowNode], edges: Sequence[WorkflowEdge]
) -> list[WorkflowNode]:
    """Nodes that no edge references as source or target."""
    referenced = {edge.source for edge in edges} | {edge.target for edge in edges}
    return [node for node in nodes if node.id not in referenced]


def end_nodes(
    nodes: Sequence[WorkflowNode], edges: Sequence[WorkflowEdge]
) -> list[WorkflowNode]:
    """Nodes without outgoing edges."""
    sources = {edge.source for edge in edges}
    return [node for node in nodes if node.id not in sources]


def nodes_of_kind(nodes: Iterable[WorkflowNode], kind: NodeKind) -> list[WorkflowNode]:
    return [node for node in nodes if node.kind is kind]


def has_error_handling(nodes: Iterable[WorkflowNode]) -> bool:
    """True if some Condition node's label mentions "error"."""
    return any(
        node.kind is NodeKind.condition
        and "error" in (node.props.label or "").lower()
        for node in nodes
    )


def dangling_endpoints(
    nodes: Sequence[WorkflowNode], edges: Sequence[WorkflowEdge]
) -> list[tuple[int, WorkflowEdge, str]]:
    """(edge index, edge, missing id) for every endpoint absent from the nodes."""
    known = {node.id for node in nodes}
    dangling = []
    for index, edge in enumerate(edges):
        for endpoint in dict.fromkeys((edge.source, edge.target)):
            if endpoint not in known:
                dangling.append((index, edge, endpoint))
    return dangling
