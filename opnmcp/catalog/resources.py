"""
Static resource catalog.

URIs follow opnsense://<module>/<type> for core modules and
opnsense://plugins/<module>/<type> for plugins. Every <type> used here has a
resolution order in the dispatcher.
"""

from opnmcp.api.schemas import ResourceMetadata

CORE_RESOURCES: tuple[ResourceMetadata, ...] = (
    ResourceMetadata(
        uri="opnsense://system/status",
        name="System Status",
        description="Current system status and information",
        module="system",
        json_schema={
            "type": "object",
            "properties": {
                "uptime": {"type": "string", "description": "System uptime"},
                "version": {"type": "string", "description": "OPNsense version"},
            },
        },
    ),
    ResourceMetadata(
        uri="opnsense://system/info",
        name="System Information",
        description="Detailed system information and version",
        module="system",
    ),
    ResourceMetadata(
        uri="opnsense://firmware/status",
        name="Firmware Status",
        description="Firmware version and pending update state",
        module="firmware",
    ),
    ResourceMetadata(
        uri="opnsense://firewall/rules",
        name="Firewall Rules",
        description="List of configured firewall rules",
        module="firewall",
        json_schema={
            "type": "object",
            "properties": {
                "rows": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "uuid": {"type": "string", "description": "Rule UUID"},
                            "action": {"type": "string", "enum": ["pass", "block", "reject"]},
                            "interface": {"type": "string"},
                            "enabled": {"type": "string"},
                        },
                    },
                },
                "total": {"type": "integer"},
            },
        },
    ),
    ResourceMetadata(
        uri="opnsense://firewall/aliases",
        name="Firewall Aliases",
        description="Configured firewall aliases",
        module="firewall",
    ),
    ResourceMetadata(
        uri="opnsense://interfaces/overview",
        name="Network Interfaces",
        description="Overview of network interfaces",
        module="interfaces",
    ),
    ResourceMetadata(
        uri="opnsense://diagnostics/health",
        name="System Health",
        description="CPU, memory and disk resource usage",
        module="diagnostics",
    ),
    ResourceMetadata(
        uri="opnsense://ipsec/status",
        name="IPsec Status",
        description="IPsec service status",
        module="ipsec",
    ),
)

PLUGIN_RESOURCES: tuple[ResourceMetadata, ...] = (
    ResourceMetadata(
        uri="opnsense://plugins/wireguard/status",
        name="WireGuard Status",
        description="WireGuard VPN status and connections",
        module="wireguard",
        is_plugin=True,
    ),
    ResourceMetadata(
        uri="opnsense://plugins/nginx/status",
        name="Nginx Status",
        description="Nginx web server status",
        module="nginx",
        is_plugin=True,
    ),
    ResourceMetadata(
        uri="opnsense://plugins/haproxy/status",
        name="HAProxy Status",
        description="HAProxy load balancer status",
        module="haproxy",
        is_plugin=True,
    ),
    ResourceMetadata(
        uri="opnsense://plugins/bind/status",
        name="BIND DNS Status",
        description="BIND DNS server status",
        module="bind",
        is_plugin=True,
    ),
)

RESOURCE_CATALOG: tuple[ResourceMetadata, ...] = CORE_RESOURCES + PLUGIN_RESOURCES
