"""Static prompt catalog and prompt text rendering."""

from opnmcp.api.schemas import PromptArgument, PromptMetadata
from opnmcp.core.errors import PromptArgumentError, UnknownPromptError

CORE_PROMPTS: tuple[PromptMetadata, ...] = (
    PromptMetadata(
        name="system_health_check",
        description="Perform a comprehensive system health check",
        arguments=(
            PromptArgument(
                name="include_services", description="Include service status check"
            ),
        ),
        tools=(
            "core_system_get_status",
            "core_diagnostics_get_health",
            "core_services_search",
        ),
    ),
    PromptMetadata(
        name="security_audit",
        description="Run a security audit on the firewall configuration",
        arguments=(
            PromptArgument(name="check_rules", description="Audit firewall rules"),
            PromptArgument(name="check_services", description="Check exposed services"),
        ),
        tools=("core_firewall_search_rule", "core_services_search", "core_system_get_info"),
    ),
    PromptMetadata(
        name="network_troubleshooting",
        description="Troubleshoot network connectivity issues",
        arguments=(
            PromptArgument(
                name="target_host", description="Target host to test connectivity", required=True
            ),
            PromptArgument(name="interface", description="Specific interface to test from"),
        ),
        tools=(
            "core_diagnostics_ping",
            "core_diagnostics_traceroute",
            "core_interfaces_get_overview",
        ),
    ),
    PromptMetadata(
        name="backup_configuration",
        description="Create a backup of the current configuration",
        tools=("core_backup_download", "core_backup_list_backups"),
    ),
    PromptMetadata(
        name="firmware_update_check",
        description="Check for available firmware updates",
        arguments=(
            PromptArgument(name="include_packages", description="Include package updates"),
        ),
        tools=("core_firmware_check", "core_firmware_get_info", "core_system_get_info"),
    ),
)

PLUGIN_PROMPTS: tuple[PromptMetadata, ...] = (
    PromptMetadata(
        name="wireguard_vpn_setup",
        description="Set up a new WireGuard VPN connection",
        arguments=(
            PromptArgument(name="peer_name", description="Name for the VPN peer", required=True),
            PromptArgument(
                name="allowed_ips", description="Allowed IP ranges for the peer", required=True
            ),
        ),
        tools=(
            "plugin_wireguard_add_client",
            "plugin_wireguard_gen_key_pair",
            "plugin_wireguard_get_status",
        ),
        is_plugin=True,
    ),
    PromptMetadata(
        name="nginx_site_setup",
        description="Configure a new Nginx website",
        arguments=(
            PromptArgument(name="domain", description="Domain name for the website", required=True),
            PromptArgument(
                name="backend_servers", description="Backend server addresses", required=True
            ),
        ),
        tools=("plugin_nginx_add_http_server", "plugin_nginx_add_upstream", "plugin_nginx_reconfigure"),
        is_plugin=True,
    ),
    PromptMetadata(
        name="haproxy_loadbalancer",
        description="Set up HAProxy load balancing",
        arguments=(
            PromptArgument(name="frontend_name", description="Name for the frontend", required=True),
            PromptArgument(
                name="backend_servers", description="List of backend servers", required=True
            ),
        ),
        tools=("plugin_haproxy_add_frontend", "plugin_haproxy_add_backend", "plugin_haproxy_add_server"),
        is_plugin=True,
    ),
)

PROMPT_CATALOG: tuple[PromptMetadata, ...] = CORE_PROMPTS + PLUGIN_PROMPTS


def find_prompt(name: str) -> PromptMetadata:
    for prompt in PROMPT_CATALOG:
        if prompt.name == name:
            return prompt
    raise UnknownPromptError(name)


def render_prompt(name: str, args: dict[str, str] | None = None) -> str:
    """
    Render the task text for a prompt.

    Raises:
        UnknownPromptError: if no prompt has this name
        PromptArgumentError: if a required argument is missing
    """
    prompt = find_prompt(name)
    args = dict(args or {})

    missing = [a.name for a in prompt.arguments if a.required and not args.get(a.name)]
    if missing:
        raise PromptArgumentError(
            f"Prompt '{name}' requires argument(s): {', '.join(missing)}"
        )

    lines = [f"# {prompt.description}", ""]

    if name == "system_health_check":
        lines += [
            "Please perform a comprehensive health check of the OPNsense system.",
            "",
            "Tasks to perform:",
            "1. Check system status and uptime",
            "2. Review system resources (CPU, memory, disk)",
        ]
        if args.get("include_services") == "true":
            lines.append("3. Check all service statuses")
        lines += ["", f"Use the following tools: {', '.join(prompt.tools)}"]

    elif name == "security_audit":
        lines += ["Conduct a security audit of the firewall configuration.", "", "Areas to review:"]
        if args.get("check_rules") != "false":
            lines += [
                "1. Analyze firewall rules for potential security issues",
                "   - Look for overly permissive rules",
                '   - Check for any "allow all" rules',
            ]
        if args.get("check_services") != "false":
            lines.append("2. Review exposed services and their security")
        lines += ["", "Provide recommendations for improving security."]

    elif name == "network_troubleshooting":
        lines += [
            f"Troubleshoot connectivity to {args['target_host']}.",
            "",
            "Steps to perform:",
            "1. Ping the target host",
            "2. Run traceroute to identify routing issues",
            "3. Check interface status",
        ]
        if args.get("interface"):
            lines += ["", f"Use interface: {args['interface']}"]

    elif name == "wireguard_vpn_setup":
        lines += [
            "Set up a new WireGuard VPN peer.",
            "",
            "Configuration:",
            f"- Peer name: {args['peer_name']}",
            f"- Allowed IPs: {args['allowed_ips']}",
            "",
            "Steps:",
            "1. Generate a new key pair for the peer",
            "2. Configure the peer with the provided settings",
            "3. Verify the configuration status",
        ]

    else:
        lines += [f"Execute the {name} workflow with the provided arguments.", "", "Arguments:"]
        lines += [f"- {key}: {value}" for key, value in args.items()]
        lines += ["", f"Use the following tools: {', '.join(prompt.tools)}"]

    return "\n".join(lines) + "\n"
