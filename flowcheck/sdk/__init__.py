"""Client SDK for the flowcheck service."""

from flowcheck.sdk.client import FlowcheckClient, RemoteResult

__all__ = [
    "FlowcheckClient",
    "RemoteResult",
]
