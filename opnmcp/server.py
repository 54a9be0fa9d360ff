"""
OPNsense MCP server - wires the MCP protocol handlers to the dispatcher.

Listing goes through the catalog filter (build inclusion only). Calls and
reads go through the dispatcher, which re-checks availability every time.
"""

from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

from opnmcp.catalog.prompts import find_prompt
from opnmcp.core.build_config import BuildConfig, load_build_config, resolve_available_modules
from opnmcp.core.config import ConnectionConfig, Settings
from opnmcp.core.context import ServerContext
from opnmcp.core.dispatcher import Dispatcher
from opnmcp.core.logger import logger

SERVER_NAME = "opnsense-mcp"

INSTRUCTIONS = """OPNsense firewall management server.

Tools are named core_<module>_<method> for built-in modules and
plugin_<module>_<method> for plugins. If no connection was configured at
startup, call configure_opnsense_connection first. Plugin tools check that the
plugin is installed on the firewall before every call.
"""


def create_context(
    settings: Settings,
    build_config: BuildConfig | None = None,
    connection: ConnectionConfig | None = None,
) -> ServerContext:
    """Build the per-process context from settings and the packaged build configuration."""
    if build_config is None:
        build_config = load_build_config(settings.build_config_path)
    return ServerContext(
        available_modules=resolve_available_modules(build_config),
        connection=connection or settings.connection(),
        plugins_enabled=settings.plugins,
    )


class OPNsenseMcpServer:
    """MCP server over stdio for one OPNsense appliance."""

    def __init__(self, context: ServerContext):
        self.context = context
        self.dispatcher = Dispatcher(context)
        self.server = Server(SERVER_NAME, instructions=INSTRUCTIONS)
        self._register_handlers()
        logger.info(
            f"OPNsense MCP server initialized ({len(context.available_modules)} modules available, "
            f"connection {'configured' if context.connection else 'not configured'})"
        )

    def _register_handlers(self):
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[types.Tool]:
            logger.debug("list_tools called")
            return [
                types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
                for tool in self.dispatcher.list_tools()
            ]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
            logger.info(f"call_tool: {name}")
            result = await self.dispatcher.call_tool(name, arguments)
            return [types.TextContent(type="text", text=item.text) for item in result.content]

        @self.server.list_resources()
        async def list_resources() -> list[types.Resource]:
            return [
                types.Resource(
                    uri=AnyUrl(resource.uri),
                    name=resource.name,
                    description=resource.description,
                    mimeType=resource.mime_type,
                )
                for resource in self.dispatcher.list_resources()
            ]

        @self.server.read_resource()
        async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
            logger.info(f"read_resource: {uri}")
            result = await self.dispatcher.read_resource(str(uri))
            return [
                ReadResourceContents(content=item.text, mime_type=item.mime_type)
                for item in result.contents
            ]

        @self.server.list_prompts()
        async def list_prompts() -> list[types.Prompt]:
            return [
                types.Prompt(
                    name=prompt.name,
                    description=prompt.description,
                    arguments=[
                        types.PromptArgument(
                            name=arg.name, description=arg.description, required=arg.required
                        )
                        for arg in prompt.arguments
                    ],
                )
                for prompt in self.dispatcher.list_prompts()
            ]

        @self.server.get_prompt()
        async def get_prompt(name: str, arguments: dict[str, str] | None) -> types.GetPromptResult:
            text = self.dispatcher.get_prompt(name, arguments)
            return types.GetPromptResult(
                description=find_prompt(name).description,
                messages=[
                    types.PromptMessage(
                        role="user", content=types.TextContent(type="text", text=text)
                    )
                ],
            )

    async def run(self):
        """Run the server with stdio transport."""
        logger.info("Starting OPNsense MCP server (stdio transport)")
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )
