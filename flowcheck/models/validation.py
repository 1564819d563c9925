"""Validation findings and results.

A finding is an immutable value produced only by the validator. The result
is derived from a single graph snapshot and recomputed on every call, so
nothing here is persisted.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FindingKind(str, Enum):
    """How a finding is bucketed in the result."""

    error = "error"
    warning = "warning"
    info = "info"


class Severity(str, Enum):
    """Severity levels, used for scoring and display."""

    high = "high"
    medium = "medium"
    low = "low"


class ValidationFinding(BaseModel):
    """a single validation message, optionally attached to a node or edge."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    kind: FindingKind
    message: str
    node_id: str | None = None
    edge_id: str | None = None
    severity: Severity


class ValidationResult(BaseModel):
    """the outcome of validating one workflow graph."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    is_valid: bool
    errors: list[ValidationFinding] = []
    warnings: list[ValidationFinding] = []
    info: list[ValidationFinding] = []
    score: int = Field(ge=0, le=100)

    @property
    def findings(self) -> list[ValidationFinding]:
        """all findings, errors first."""
        return [*self.errors, *self.warnings, *self.info]

    def for_node(self, node_id: str) -> list[ValidationFinding]:
        """findings attached to the given node."""
        return [f for f in self.findings if f.node_id == node_id]
