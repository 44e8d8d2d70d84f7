"""MIDI transport - endpoint discovery and the connection handshake."""

from .endpoints import Endpoint, list_endpoints, list_inputs, list_outputs, select_endpoint
from .negotiator import ConnectionNegotiator, NegotiationState

__all__ = [
    "ConnectionNegotiator",
    "Endpoint",
    "NegotiationState",
    "list_endpoints",
    "list_inputs",
    "list_outputs",
    "select_endpoint",
]
