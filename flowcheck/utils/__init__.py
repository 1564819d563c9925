"""Utility functions for flowcheck."""

from flowcheck.utils.flow_data import (
    FlowDataError,
    load_flow_file,
    parse_flow_data,
)

__all__ = [
    "FlowDataError",
    "load_flow_file",
    "parse_flow_data",
]
