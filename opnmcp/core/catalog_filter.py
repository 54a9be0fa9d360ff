"""
Catalog filtering - narrow the static catalogs to what the build can serve.

Filtering is driven by build inclusion only. It never probes the appliance,
so list calls stay cheap and work before a connection is configured.
"""

from collections.abc import Iterable
from typing import Protocol, TypeVar

from opnmcp.api.schemas import PromptMetadata, ResourceMetadata, ToolMetadata
from opnmcp.catalog.prompts import PROMPT_CATALOG
from opnmcp.catalog.resources import RESOURCE_CATALOG
from opnmcp.catalog.tools import TOOL_CATALOG
from opnmcp.core.context import ServerContext


class _HasModules(Protocol):
    @property
    def required_modules(self) -> frozenset[str]: ...


EntryT = TypeVar("EntryT", bound=_HasModules)


def filter_entries(entries: Iterable[EntryT], available_modules: frozenset[str]) -> list[EntryT]:
    """Keep entries whose module dependencies are all available, in declaration order."""
    return [entry for entry in entries if entry.required_modules <= available_modules]


def filter_tools(
    context: ServerContext, catalog: Iterable[ToolMetadata] = TOOL_CATALOG
) -> list[ToolMetadata]:
    """Tools to advertise. Plugin tools are listed only when plugin support is enabled."""
    tools = filter_entries(catalog, context.available_modules)
    if not context.plugins_enabled:
        tools = [tool for tool in tools if not tool.is_plugin]
    return tools


def filter_resources(
    context: ServerContext, catalog: Iterable[ResourceMetadata] = RESOURCE_CATALOG
) -> list[ResourceMetadata]:
    return filter_entries(catalog, context.available_modules)


def filter_prompts(
    context: ServerContext, catalog: Iterable[PromptMetadata] = PROMPT_CATALOG
) -> list[PromptMetadata]:
    return filter_entries(catalog, context.available_modules)
