"""
Centralized error handling for the OPNsense MCP server.

Provides the exception hierarchy and helpers to turn failures into text.
Follows "Log Deep, Report Shallow" principle.
"""

import uuid

from opnmcp.core.logger import logger

# --- Exception Hierarchy ---


class OPNMCPError(Exception):
    """Base exception for all server errors."""

    def __init__(self, message: str, trace_id: str | None = None):
        super().__init__(message)
        self.message = message
        self.trace_id = trace_id or str(uuid.uuid4())


class BuildConfigError(OPNMCPError):
    """Build configuration file is missing, unreadable or inconsistent."""


class ApiError(OPNMCPError):
    """HTTP-level failure returned by the OPNsense API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        path: str | None = None,
        trace_id: str | None = None,
    ):
        super().__init__(message, trace_id=trace_id)
        self.status_code = status_code
        self.path = path


class ProbeError(OPNMCPError):
    """A liveness probe failed in a way that does not mean "not installed"."""

    def __init__(self, plugin_name: str, reason: str, trace_id: str | None = None):
        super().__init__(
            f"Failed to check plugin status for {plugin_name}: {reason}", trace_id=trace_id
        )
        self.plugin_name = plugin_name
        self.reason = reason


class NotConfiguredError(OPNMCPError):
    """No OPNsense connection has been configured yet."""

    def __init__(
        self,
        message: str = "OPNsense connection not configured",
        trace_id: str | None = None,
    ):
        super().__init__(message, trace_id=trace_id)


class UnknownToolError(OPNMCPError):
    """Tool name is not in the handler table."""

    def __init__(self, tool_name: str, trace_id: str | None = None):
        super().__init__(f"Unknown tool: {tool_name}", trace_id=trace_id)
        self.tool_name = tool_name


class RemoteModuleNotFoundError(OPNMCPError):
    """The client exposes no module object under the requested name."""

    def __init__(self, module_name: str, is_plugin: bool = False, trace_id: str | None = None):
        kind = "Plugin" if is_plugin else "Module"
        super().__init__(f"{kind} '{module_name}' not found", trace_id=trace_id)
        self.module_name = module_name
        self.is_plugin = is_plugin


class UnknownResourceTypeError(OPNMCPError):
    """Resource URI names a resource type with no resolution order."""

    def __init__(self, resource_type: str, trace_id: str | None = None):
        super().__init__(f"Unknown resource type: {resource_type}", trace_id=trace_id)
        self.resource_type = resource_type


class ResourceReadError(OPNMCPError):
    """Unexpected failure while resolving a resource read."""


class UnknownPromptError(OPNMCPError):
    """Prompt name is not in the prompt catalog."""

    def __init__(self, prompt_name: str, trace_id: str | None = None):
        super().__init__(f"Prompt '{prompt_name}' not found", trace_id=trace_id)
        self.prompt_name = prompt_name


class PromptArgumentError(OPNMCPError, ValueError):
    """A required prompt argument was not supplied."""


# --- Error Mapping Utilities ---


def status_code_of(e: BaseException) -> int | None:
    """
    Extract an HTTP-like status code from an exception, if it carries one.

    Understands our own ApiError as well as curl_cffi errors that hold a response.
    """
    status = getattr(e, "status_code", None)
    if isinstance(status, int):
        return status

    response = getattr(e, "response", None)
    if response is not None:
        status = getattr(response, "status_code", None)
        if isinstance(status, int):
            return status
    return None


def error_to_text(e: BaseException, tool_name: str | None = None) -> str:
    """
    Render a tool failure as the text carried by an error envelope.

    Args:
        e: The exception raised by the tool handler
        tool_name: Name of the tool that failed (for logging only)

    Returns:
        "Error: <message>" with HTTP status detail when available
    """
    message = getattr(e, "message", None) or str(e) or type(e).__name__
    status = status_code_of(e)

    if status is not None and f"HTTP {status}" not in message:
        message = f"HTTP {status}: {message}"

    if isinstance(e, OPNMCPError):
        logger.warning(f"Tool {tool_name} failed: {message} (trace_id={e.trace_id})")
    else:
        logger.error(f"Tool {tool_name} error ({type(e).__name__}): {e}", exc_info=True)

    return f"Error: {message}"
