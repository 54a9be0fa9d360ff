"""
OPNsense MCP API - catalog models, availability results and client protocols.

Usage:
    from opnmcp.api import ApiModule, ApplianceClient, ModuleCapabilities, ToolResult
"""

from .interfaces import ApiModule, ApplianceClient
from .schemas import (
    AvailabilityVerdict,
    ModuleCapabilities,
    PromptArgument,
    PromptMetadata,
    ResourceContent,
    ResourceContents,
    ResourceMetadata,
    TextContent,
    ToolMetadata,
    ToolResult,
    qualify,
)

__all__ = [
    "ApiModule",
    "ApplianceClient",
    "AvailabilityVerdict",
    "ModuleCapabilities",
    "PromptArgument",
    "PromptMetadata",
    "ResourceContent",
    "ResourceContents",
    "ResourceMetadata",
    "TextContent",
    "ToolMetadata",
    "ToolResult",
    "qualify",
]
