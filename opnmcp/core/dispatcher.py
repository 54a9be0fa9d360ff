"""
Dispatcher - route tool calls and resource reads to the appliance client.

Tool calls never raise past this layer except for unknown names: handler
failures come back as a normal ToolResult whose text starts with "Error:".
Resource reads are the opposite and raise with a contextual message.
"""

import json
from collections.abc import Awaitable, Callable
from typing import Any

from opnmcp.api.schemas import (
    PromptMetadata,
    ResourceContent,
    ResourceContents,
    ResourceMetadata,
    ToolMetadata,
    ToolResult,
    qualify,
)
from opnmcp.catalog.prompts import render_prompt
from opnmcp.catalog.tools import CONFIGURE_TOOL_NAME, CORE_TOOLS, PLUGIN_TOOLS
from opnmcp.core.catalog_filter import filter_prompts, filter_resources, filter_tools
from opnmcp.core.config import ConnectionConfig
from opnmcp.core.context import ServerContext
from opnmcp.core.errors import (
    NotConfiguredError,
    OPNMCPError,
    RemoteModuleNotFoundError,
    ResourceReadError,
    UnknownPromptError,
    UnknownResourceTypeError,
    UnknownToolError,
    error_to_text,
)
from opnmcp.core.logger import logger
from opnmcp.core.plugin_checker import validate_plugin_availability

ToolHandler = Callable[[dict[str, Any]], Awaitable[Any]]

RESOURCE_SCHEME = "opnsense://"

# Resource type -> capabilities tried in order; the first non-empty result wins
RESOLUTION_ORDER: dict[str, tuple[str, ...]] = {
    "status": ("status", "get"),
    "info": ("info",),
    "rules": ("search_rule", "search"),
    "aliases": ("search_alias",),
    "overview": ("overview",),
    "health": ("health",),
}

# Plugins expose only a status resource
PLUGIN_RESOURCE_TYPES = frozenset({"status"})

_NOT_CONFIGURED = (
    "OPNsense connection not configured. Use the configure_opnsense_connection tool first."
)


def parse_resource_uri(uri: str) -> tuple[str, str, bool]:
    """
    Split 'opnsense://[plugins/]<module>/<type>' into (module, type, is_plugin).

    Raises:
        ResourceReadError: if the URI does not have that shape
    """
    if not uri.startswith(RESOURCE_SCHEME):
        raise ResourceReadError(f"Failed to read resource: invalid URI '{uri}'")

    parts = uri[len(RESOURCE_SCHEME) :].split("/")
    is_plugin = parts[0] == "plugins"
    if is_plugin:
        parts = parts[1:]

    if len(parts) != 2 or not all(parts):
        raise ResourceReadError(f"Failed to read resource: invalid URI '{uri}'")
    return parts[0], parts[1], is_plugin


def _to_text(result: Any) -> str:
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2)


class Dispatcher:
    """Per-context handler table plus the resource read path."""

    def __init__(self, context: ServerContext):
        self.context = context
        self.handlers: dict[str, ToolHandler] = self._build_handlers()
        logger.info(
            f"Dispatcher ready: {len(self.handlers)} tool handlers "
            f"(plugins {'enabled' if context.plugins_enabled else 'disabled'})"
        )

    # --- Handler table ---

    def _build_handlers(self) -> dict[str, ToolHandler]:
        handlers: dict[str, ToolHandler] = {CONFIGURE_TOOL_NAME: self._configure}
        for tool in CORE_TOOLS:
            if tool.module is not None:
                handlers[tool.name] = self._core_handler(tool)
        if self.context.plugins_enabled:
            for tool in PLUGIN_TOOLS:
                handlers[tool.name] = self._plugin_handler(tool)
        return handlers

    async def _configure(self, arguments: dict[str, Any]) -> str:
        connection = ConnectionConfig.model_validate(arguments)
        self.context.configure(connection)
        return f"Successfully configured OPNsense connection to {connection.host}"

    def _core_handler(self, tool: ToolMetadata) -> ToolHandler:
        module_name, method = tool.module, tool.method

        async def handler(arguments: dict[str, Any]) -> Any:
            if qualify(module_name, is_plugin=False) not in self.context.available_modules:
                raise OPNMCPError(
                    f"Module '{module_name}' was not included in the build. "
                    "Please rebuild the server with this module enabled."
                )
            client = self.context.client
            if client is None:
                raise NotConfiguredError(_NOT_CONFIGURED)
            module = client.module(module_name)
            if module is None:
                raise RemoteModuleNotFoundError(module_name)
            return await module.invoke(method, arguments)

        return handler

    def _plugin_handler(self, tool: ToolMetadata) -> ToolHandler:
        plugin_name, method = tool.module, tool.method

        async def handler(arguments: dict[str, Any]) -> Any:
            # Liveness can change between listing and calling, so gate every call
            verdict = await validate_plugin_availability(plugin_name, self.context)
            if not verdict.available:
                raise OPNMCPError(verdict.reason or f"Plugin '{plugin_name}' is not available.")
            module = self.context.client.plugin(plugin_name)
            if module is None:
                raise RemoteModuleNotFoundError(plugin_name, is_plugin=True)
            return await module.invoke(method, arguments)

        return handler

    # --- Tools ---

    def list_tools(self) -> list[ToolMetadata]:
        return filter_tools(self.context)

    async def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """
        Invoke a tool by name.

        Raises:
            UnknownToolError: if no handler is registered under this name
        """
        handler = self.handlers.get(name)
        if handler is None:
            raise UnknownToolError(name)

        logger.debug(f"Calling tool {name}")
        try:
            result = await handler(arguments or {})
            text = _to_text(result)
        except Exception as e:
            return ToolResult.text(error_to_text(e, tool_name=name))
        return ToolResult.text(text)

    # --- Resources ---

    def list_resources(self) -> list[ResourceMetadata]:
        return filter_resources(self.context)

    async def read_resource(self, uri: str) -> ResourceContents:
        """
        Read a resource by URI.

        Raises:
            NotConfiguredError: no client handle is configured
            RemoteModuleNotFoundError: the client has no such module
            UnknownResourceTypeError: the resource type has no resolution order
            ResourceReadError: anything else went wrong
        """
        try:
            module_name, resource_type, is_plugin = parse_resource_uri(uri)

            client = self.context.client
            if client is None:
                raise NotConfiguredError()

            module = client.plugin(module_name) if is_plugin else client.module(module_name)
            if module is None:
                raise RemoteModuleNotFoundError(module_name, is_plugin=is_plugin)

            order = RESOLUTION_ORDER.get(resource_type)
            if order is None or (is_plugin and resource_type not in PLUGIN_RESOURCE_TYPES):
                raise UnknownResourceTypeError(resource_type)

            data = await self._resolve(module.capabilities(), order)
            text = json.dumps(data, indent=2)
        except (
            NotConfiguredError,
            RemoteModuleNotFoundError,
            UnknownResourceTypeError,
            ResourceReadError,
        ):
            raise
        except Exception as e:
            message = getattr(e, "message", None) or str(e)
            error = ResourceReadError(f"Failed to read resource: {message}")
            logger.error(
                f"Resource read failed for {uri}: {message} (trace_id={error.trace_id})",
                exc_info=True,
            )
            raise error from e

        return ResourceContents(contents=[ResourceContent(uri=uri, text=text)])

    @staticmethod
    async def _resolve(capabilities, order: tuple[str, ...]) -> Any:
        for name in order:
            capability = getattr(capabilities, name)
            if capability is None:
                continue
            result = await capability()
            if result:
                return result
        return {}

    # --- Prompts ---

    def list_prompts(self) -> list[PromptMetadata]:
        return filter_prompts(self.context)

    def get_prompt(self, name: str, arguments: dict[str, str] | None = None) -> str:
        """
        Render a prompt advertised for this build.

        Raises:
            UnknownPromptError: if the prompt does not exist or its modules are not in the build
            PromptArgumentError: if a required argument is missing
        """
        if name not in {prompt.name for prompt in self.list_prompts()}:
            raise UnknownPromptError(name)
        return render_prompt(name, arguments)
