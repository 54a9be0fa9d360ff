"""
Public Protocol definitions for the OPNsense API client collaborator.

Protocols allow structural typing - the dispatch layer works with any client
that matches these shapes (the bundled curl_cffi client, or a test double).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .schemas import ModuleCapabilities


@runtime_checkable
class ApiModule(Protocol):
    """One named functional unit of the OPNsense API (a core module or a plugin)."""

    @property
    def name(self) -> str:
        """Module name as used in tool identifiers and resource URIs (e.g., 'firewall')."""
        ...

    @property
    def methods(self) -> tuple[str, ...]:
        """Names of the callable methods, in declaration order."""
        ...

    def capabilities(self) -> ModuleCapabilities:
        """
        Return the well-known capability callables this module supports.

        Used by liveness probes and resource reads; absent capabilities are None.
        """
        ...

    async def invoke(self, method: str, params: dict[str, Any] | None = None) -> Any:
        """
        Call a named method with keyword parameters.

        Raises:
            KeyError: if the module has no such method
            ApiError: on HTTP failure (carries status_code)
        """
        ...


@runtime_checkable
class ApplianceClient(Protocol):
    """Live handle to an OPNsense appliance."""

    def module(self, name: str) -> ApiModule | None:
        """Core module by name, or None if the client has no such module."""
        ...

    def plugin(self, name: str) -> ApiModule | None:
        """Plugin module by name, or None if the client has no such plugin."""
        ...
