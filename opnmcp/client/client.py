"""
OPNsense API client.

Thin async wrapper over the OPNsense REST API. Each core module and plugin is a
ControllerModule built from the static endpoint tables; the client itself only
knows how to send one authenticated request.
"""

import re
from functools import partial
from typing import Any

from curl_cffi.requests import AsyncSession, RequestsError

from opnmcp.api.schemas import ModuleCapabilities
from opnmcp.client.endpoints import CORE_ENDPOINTS, PLUGIN_ENDPOINTS, Endpoint
from opnmcp.core.config import ConnectionConfig, settings
from opnmcp.core.errors import ApiError
from opnmcp.core.logger import logger

# Capability field -> method name that provides it
CAPABILITY_METHODS: dict[str, str] = {
    "status": "get_status",
    "get": "get",
    "search": "search",
    "info": "get_info",
    "search_rule": "search_rule",
    "search_alias": "search_alias",
    "overview": "get_overview",
    "health": "get_health",
}

# Capabilities that accept (current, row_count) paging
_PAGED_CAPABILITIES = {"search", "search_rule", "search_alias"}

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def _camel(key: str) -> str:
    """row_count -> rowCount; the API expects camelCase parameter names."""
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


class ControllerModule:
    """A named OPNsense module whose methods map onto API endpoints."""

    def __init__(self, client: "OPNsenseClient", name: str, endpoints: dict[str, Endpoint]):
        self._client = client
        self._name = name
        self._endpoints = endpoints

    @property
    def name(self) -> str:
        return self._name

    @property
    def methods(self) -> tuple[str, ...]:
        return tuple(self._endpoints)

    def capabilities(self) -> ModuleCapabilities:
        fields: dict[str, Any] = {}
        for capability, method in CAPABILITY_METHODS.items():
            if method not in self._endpoints:
                continue
            if capability in _PAGED_CAPABILITIES:
                fields[capability] = partial(self._paged, method)
            else:
                fields[capability] = partial(self.invoke, method)
        return ModuleCapabilities(**fields)

    async def _paged(self, method: str, current: int = 1, row_count: int = 20) -> Any:
        return await self.invoke(method, {"current": current, "row_count": row_count})

    async def invoke(self, method: str, params: dict[str, Any] | None = None) -> Any:
        endpoint = self._endpoints.get(method)
        if endpoint is None:
            raise KeyError(f"Method '{method}' not found in module '{self._name}'")

        remaining = dict(params or {})
        missing = []

        def _fill(match: re.Match) -> str:
            key = match.group(1)
            if key not in remaining:
                missing.append(key)
                return ""
            return str(remaining.pop(key))

        path = _PLACEHOLDER.sub(_fill, endpoint.path)
        if missing:
            raise ValueError(
                f"Missing required parameter(s) for {self._name}.{method}: {', '.join(missing)}"
            )

        # 'data' carries a full record (add/set endpoints) and is sent as-is
        payload = remaining.pop("data", None)
        if payload is None:
            payload = {_camel(key): value for key, value in remaining.items()}

        return await self._client.request(endpoint.verb, path, payload)


class OPNsenseClient:
    """
    Live handle to one OPNsense appliance.

    One AsyncSession per request; there is no pooling or retry at this layer.
    """

    def __init__(self, config: ConnectionConfig, timeout: float | None = None):
        self.config = config
        self.base_url = config.host.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._modules = {
            name: ControllerModule(self, name, endpoints)
            for name, endpoints in CORE_ENDPOINTS.items()
        }
        self._plugins = {
            name: ControllerModule(self, name, endpoints)
            for name, endpoints in PLUGIN_ENDPOINTS.items()
        }

    def module(self, name: str) -> ControllerModule | None:
        return self._modules.get(name)

    def plugin(self, name: str) -> ControllerModule | None:
        return self._plugins.get(name)

    async def request(self, verb: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        """
        Send one authenticated request to /api/<path> and decode the JSON body.

        Raises:
            ApiError: on HTTP status >= 400 (status_code set) or transport failure (status_code None)
        """
        url = f"{self.base_url}/api/{path}"
        kwargs: dict[str, Any] = {}
        if payload:
            if verb == "GET":
                kwargs["params"] = payload
            else:
                kwargs["json"] = payload
        elif verb == "POST":
            kwargs["json"] = {}

        logger.debug(f"OPNsense request: {verb} {url}")
        try:
            async with AsyncSession(verify=self.config.verify_ssl, timeout=self.timeout) as session:
                response = await session.request(
                    verb,
                    url,
                    auth=(self.config.api_key, self.config.api_secret),
                    **kwargs,
                )
        except RequestsError as e:
            raise ApiError(f"Network error connecting to OPNsense: {e}", path=path) from e

        if response.status_code >= 400:
            raise ApiError(
                f"HTTP {response.status_code} from /api/{path}: {response.text[:200]}",
                status_code=response.status_code,
                path=path,
            )

        try:
            return response.json()
        except ValueError:
            return {"response": response.text}
