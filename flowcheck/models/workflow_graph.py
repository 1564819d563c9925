"""Data model for workflow graphs imported from Flowise.

The editor stores a workflow as a `flowData` blob with a list of nodes and a
list of directed edges. Field names follow the editor's camelCase JSON
(`agentType`, `documentType`), and node data keeps any extra keys the
importer attached.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class NodeKind(str, Enum):
    """Node types the validator and scorers know about."""

    start = "Start"
    agent = "Agent"
    llm = "LLM"
    condition = "Condition"
    loop = "Loop"
    tool = "Tool"
    document = "Document"
    memory = "Memory"
    api = "API"


class NodePosition(BaseModel):
    """canvas coordinates of a node."""

    x: float = 0.0
    y: float = 0.0


class NodeData(BaseModel):
    """the `data` object of a node: common fields plus type-specific ones."""

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    label: str | None = None
    type: str | None = None
    category: str | None = None

    # LLM
    prompt: str | None = None
    model: str | None = None
    # Agent
    instructions: str | None = None
    agent_type: str | None = None
    # API
    url: str | None = None
    method: str | None = None
    # Condition
    condition: str | None = None
    # Document
    document_type: str | None = None
    content: str | None = None


_EMPTY_DATA = NodeData()


class WorkflowNode(BaseModel):
    """a single step in a workflow graph."""

    id: str
    data: NodeData | None = None
    position: NodePosition | None = None

    @property
    def props(self) -> NodeData:
        """node data, with a missing `data` object read as all fields absent."""
        return self.data if self.data is not None else _EMPTY_DATA

    @property
    def kind(self) -> NodeKind | None:
        """the node's known type, or None for missing and unknown types."""
        node_type = self.props.type
        if node_type is None:
            return None
        try:
            return NodeKind(node_type)
        except ValueError:
            return None

    @property
    def display_name(self) -> str:
        return self.props.label or self.id


class WorkflowEdge(BaseModel):
    """a directed connection between two nodes."""

    id: str | None = None
    source: str
    target: str


class FlowData(BaseModel):
    """the nodes and edges of one workflow snapshot."""

    nodes: list[WorkflowNode] = []
    edges: list[WorkflowEdge] = []

    @field_validator("nodes", "edges", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value
