"""OPNsense MCP server: module availability, catalog filtering and dispatch."""

__version__ = "0.1.0"
