"""
Plugin availability checks.

Three questions, cheapest first:
1. Was the plugin compiled into this server (build configuration)?
2. Is an OPNsense connection configured?
3. Is the plugin actually installed on the appliance (one liveness probe)?
"""

from opnmcp.api.interfaces import ApplianceClient
from opnmcp.api.schemas import AvailabilityVerdict, qualify
from opnmcp.core.context import ServerContext
from opnmcp.core.errors import ProbeError, status_code_of
from opnmcp.core.logger import logger

# Statuses the API returns for controllers that are not installed
NOT_INSTALLED_STATUSES = frozenset({404, 500})


def is_plugin_included_in_build(plugin_name: str, context: ServerContext) -> bool:
    """Check if a plugin module was included in the build."""
    return qualify(plugin_name, is_plugin=True) in context.available_modules


async def is_plugin_installed_on_firewall(plugin_name: str, client: ApplianceClient) -> bool:
    """
    Probe the appliance to see whether a plugin is installed.

    Invokes exactly one of status / get / search(current=1, row_count=1),
    whichever the module supports first. A module with none of them is assumed
    installed.

    Returns:
        False if the client has no such plugin or the probe answers 404/500,
        True otherwise

    Raises:
        ProbeError: for any other probe failure (cannot tell absence from an outage)
    """
    module = client.plugin(plugin_name)
    if module is None:
        return False

    capabilities = module.capabilities()
    try:
        if capabilities.status is not None:
            await capabilities.status()
        elif capabilities.get is not None:
            await capabilities.get()
        elif capabilities.search is not None:
            await capabilities.search(current=1, row_count=1)
        # No standard probe method: the module object's presence is the only evidence
        return True
    except Exception as e:
        if status_code_of(e) in NOT_INSTALLED_STATUSES:
            logger.debug(f"Plugin {plugin_name} probe returned {status_code_of(e)}: not installed")
            return False
        message = getattr(e, "message", None) or str(e)
        raise ProbeError(plugin_name, message) from e


async def validate_plugin_availability(
    plugin_name: str, context: ServerContext
) -> AvailabilityVerdict:
    """
    Run the three-stage availability gate for a plugin.

    Never raises; every failure becomes a verdict with a reason naming the remedy.
    """
    if not is_plugin_included_in_build(plugin_name, context):
        return AvailabilityVerdict(
            available=False,
            reason=(
                f"Plugin '{plugin_name}' was not included in the build. "
                "Please rebuild the server with this plugin enabled."
            ),
        )

    client = context.client
    if client is None:
        return AvailabilityVerdict(
            available=False,
            reason=(
                "OPNsense connection not configured. "
                "Use the configure_opnsense_connection tool first."
            ),
        )

    try:
        installed = await is_plugin_installed_on_firewall(plugin_name, client)
    except ProbeError as e:
        logger.warning(f"Availability check for plugin {plugin_name} failed: {e.reason}")
        return AvailabilityVerdict(
            available=False,
            reason=f"Failed to verify plugin '{plugin_name}': {e.message}",
        )

    if not installed:
        return AvailabilityVerdict(
            available=False,
            reason=(
                f"Plugin '{plugin_name}' is not installed on the OPNsense firewall. "
                "Please install it via System > Firmware > Plugins."
            ),
        )

    context.record_installed(plugin_name)
    return AvailabilityVerdict(available=True)
