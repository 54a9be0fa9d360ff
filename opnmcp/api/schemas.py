"""
Public Pydantic models for the catalog, availability checks and protocol results.

These are lightweight schemas that define the contract between the catalog,
the dispatch layer and the MCP transport.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

CORE_FAMILY = "core"
PLUGIN_FAMILY = "plugins"


def qualify(module: str, is_plugin: bool) -> str:
    """Qualified module name: 'core.<name>' or 'plugins.<name>'."""
    return f"{PLUGIN_FAMILY if is_plugin else CORE_FAMILY}.{module}"


# --- Catalog Metadata ---


class ToolMetadata(BaseModel):
    """A tool definition paired with the module it calls into."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(default_factory=lambda: {"type": "object"})
    # None for tools that depend on no module (e.g. the connection tool)
    module: str | None = None
    method: str | None = None
    is_plugin: bool = False

    @property
    def required_modules(self) -> frozenset[str]:
        if self.module is None:
            return frozenset()
        return frozenset({qualify(self.module, self.is_plugin)})


class ResourceMetadata(BaseModel):
    """A readable resource definition paired with its owning module."""

    model_config = ConfigDict(frozen=True)

    uri: str
    name: str
    description: str
    mime_type: str = "application/json"
    module: str
    is_plugin: bool = False
    json_schema: dict[str, Any] | None = None

    @property
    def required_modules(self) -> frozenset[str]:
        return frozenset({qualify(self.module, self.is_plugin)})


class PromptArgument(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    required: bool = False


class PromptMetadata(BaseModel):
    """
    A guided prompt and the tools it relies on.

    Module dependencies are derived from the tool identifiers: the second
    underscore-delimited segment of 'core_firewall_search_rule' is 'firewall'.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    arguments: tuple[PromptArgument, ...] = ()
    tools: tuple[str, ...] = ()
    is_plugin: bool = False

    @property
    def required_modules(self) -> frozenset[str]:
        modules = set()
        for tool in self.tools:
            parts = tool.split("_")
            module = parts[1] if len(parts) > 1 else ""
            modules.add(qualify(module, self.is_plugin))
        return frozenset(modules)


# --- Availability ---


class AvailabilityVerdict(BaseModel):
    """Outcome of the three-stage availability gate. Computed fresh on each check."""

    available: bool
    reason: str | None = None


class ModuleCapabilities(BaseModel):
    """
    Optional capability callables exposed by one API module.

    A field is None when the module has no such endpoint. Callers try fields
    in a fixed order instead of inspecting the module object at runtime.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    status: Callable[[], Awaitable[Any]] | None = None
    get: Callable[[], Awaitable[Any]] | None = None
    # search(current, row_count)
    search: Callable[..., Awaitable[Any]] | None = None
    info: Callable[[], Awaitable[Any]] | None = None
    search_rule: Callable[..., Awaitable[Any]] | None = None
    search_alias: Callable[..., Awaitable[Any]] | None = None
    overview: Callable[[], Awaitable[Any]] | None = None
    health: Callable[[], Awaitable[Any]] | None = None


# --- Protocol Results ---


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Uniform tool-call envelope: never empty, errors travel as text."""

    content: list[TextContent] = Field(min_length=1)

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])


class ResourceContent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    uri: str
    mime_type: str = Field(default="application/json", alias="mimeType")
    text: str


class ResourceContents(BaseModel):
    contents: list[ResourceContent]
