"""Bundled OPNsense API client implementing the ApplianceClient protocol."""

from .client import CAPABILITY_METHODS, ControllerModule, OPNsenseClient
from .endpoints import CORE_ENDPOINTS, PLUGIN_ENDPOINTS, Endpoint

__all__ = [
    "CAPABILITY_METHODS",
    "CORE_ENDPOINTS",
    "PLUGIN_ENDPOINTS",
    "ControllerModule",
    "Endpoint",
    "OPNsenseClient",
]
