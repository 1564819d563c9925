"""Parsing of stored `flowData` blobs.

Workflow records keep their graph as a JSON string. Any failure to decode it
or to read it as nodes and edges is reported as a single FlowDataError, so
callers can show "cannot analyze workflow" without the analysis functions
ever seeing malformed input.
"""

import json
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from flowcheck.models.workflow_graph import FlowData


class FlowDataError(ValueError):
    """Raised when a flowData blob cannot be analyzed."""


def parse_flow_data(raw: str | bytes | Mapping) -> FlowData:
    """Parse a flowData blob into nodes and edges.

    Args:
        raw: JSON text, JSON bytes, or an already decoded mapping.

    Raises:
        FlowDataError: if the blob is not JSON or does not describe a graph.
    """
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise FlowDataError(f"cannot analyze workflow: invalid JSON ({exc})") from exc

    if not isinstance(raw, Mapping):
        raise FlowDataError(
            f"cannot analyze workflow: expected a JSON object, got {type(raw).__name__}"
        )

    try:
        return FlowData.model_validate(raw)
    except ValidationError as exc:
        raise FlowDataError(
            f"cannot analyze workflow: {exc.error_count()} invalid field(s)\n{exc}"
        ) from exc


def load_flow_file(path: Path | str) -> FlowData:
    """Read and parse a flowData JSON file."""
    with open(path, "rb") as f:
        return parse_flow_data(f.read())
