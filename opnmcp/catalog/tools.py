"""
Static tool catalog.

One tool per (module, method) in the endpoint tables, named
'core_<module>_<method>' or 'plugin_<module>_<method>', plus the connection
tool. Descriptions and input schemas follow the method-name pattern.
"""

import re
from typing import Any

from opnmcp.api.schemas import ToolMetadata
from opnmcp.client.endpoints import CORE_ENDPOINTS, PLUGIN_ENDPOINTS

CONFIGURE_TOOL_NAME = "configure_opnsense_connection"

_PAGINATION = {
    "current": {"type": "integer", "description": "Page number", "default": 1},
    "row_count": {"type": "integer", "description": "Rows per page", "default": 20},
    "search_phrase": {"type": "string", "description": "Filter phrase"},
}
_UUID = {"uuid": {"type": "string", "description": "The UUID of the item"}}
_DATA = {"data": {"type": "object", "description": "Item definition as expected by the API"}}

# First matching pattern wins
_SCHEMA_PATTERNS: list[tuple[re.Pattern, dict[str, Any], list[str]]] = [
    (re.compile(r"^search"), _PAGINATION, []),
    (re.compile(r"^(get|list)$"), {}, []),
    (re.compile(r"^get_(status|info|overview|health|arp|routes|decisions|alerts)$"), {}, []),
    (re.compile(r"^get_changelog$"), {"version": {"type": "string"}}, ["version"]),
    (re.compile(r"^get_details$"), {"identifier": {"type": "string"}}, ["identifier"]),
    (re.compile(r"^get_"), _UUID, ["uuid"]),
    (re.compile(r"^(delete|toggle)_"), _UUID, ["uuid"]),
    (re.compile(r"^(set|update)_"), {**_UUID, **_DATA}, ["uuid", "data"]),
    (re.compile(r"^add_"), _DATA, ["data"]),
    (re.compile(r"^(start|stop|restart)$"), {"name": {"type": "string"}}, []),
    (re.compile(r"^(reload_interface|ping)$"), {"identifier": {"type": "string"}}, ["identifier"]),
]

_METHOD_DESCRIPTIONS = {
    "search": "Search {label} items",
    "get": "Get {label} configuration",
    "get_status": "Get {label} status",
    "get_info": "Get {label} information",
    "add": "Add new {label} item",
    "delete": "Delete {label} item",
    "toggle": "Toggle {label} item state",
    "set": "Update {label} configuration",
    "update": "Update {label} item",
    "reconfigure": "Apply pending {label} configuration",
    "restart": "Restart {label} service",
    "start": "Start {label} service",
    "stop": "Stop {label} service",
}


def input_schema_for(method: str) -> dict[str, Any]:
    """Derive a JSON input schema from the method name."""
    for pattern, properties, required in _SCHEMA_PATTERNS:
        if pattern.search(method):
            schema: dict[str, Any] = {"type": "object", "properties": dict(properties)}
            if required:
                schema["required"] = list(required)
            return schema
    return {"type": "object", "properties": {}, "additionalProperties": True}


def describe_method(module: str, method: str, is_plugin: bool) -> str:
    """Human-readable description for a generated tool."""
    label = module.replace("_", " ").title()
    if method in _METHOD_DESCRIPTIONS:
        return _METHOD_DESCRIPTIONS[method].format(label=label)

    verb, _, subject = method.partition("_")
    if verb in _METHOD_DESCRIPTIONS and subject:
        return f"{verb.title()} {label} {subject.replace('_', ' ')}"

    kind = "plugin" if is_plugin else "module"
    return f"Execute {method} for {label} {kind}"


def _generate(endpoints: dict[str, dict], is_plugin: bool) -> list[ToolMetadata]:
    prefix = "plugin" if is_plugin else "core"
    return [
        ToolMetadata(
            name=f"{prefix}_{module}_{method}",
            description=describe_method(module, method, is_plugin),
            input_schema=input_schema_for(method),
            module=module,
            method=method,
            is_plugin=is_plugin,
        )
        for module, methods in endpoints.items()
        for method in methods
    ]


CONFIGURE_TOOL = ToolMetadata(
    name=CONFIGURE_TOOL_NAME,
    description="Configure the OPNsense API connection (host URL, API key and secret)",
    input_schema={
        "type": "object",
        "properties": {
            "host": {"type": "string", "description": "OPNsense URL (e.g., https://192.168.1.1)"},
            "api_key": {"type": "string", "description": "API key"},
            "api_secret": {"type": "string", "description": "API secret"},
            "verify_ssl": {
                "type": "boolean",
                "description": "Verify the TLS certificate",
                "default": True,
            },
        },
        "required": ["host", "api_key", "api_secret"],
    },
)

CORE_TOOLS: tuple[ToolMetadata, ...] = (CONFIGURE_TOOL, *_generate(CORE_ENDPOINTS, False))
PLUGIN_TOOLS: tuple[ToolMetadata, ...] = tuple(_generate(PLUGIN_ENDPOINTS, True))

# Declaration order: core entries before plugin entries
TOOL_CATALOG: tuple[ToolMetadata, ...] = CORE_TOOLS + PLUGIN_TOOLS
