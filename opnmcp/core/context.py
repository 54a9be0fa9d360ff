"""Server context - per-process state shared by the catalog filter, gate and dispatcher."""

from collections.abc import Callable, Iterable

from opnmcp.api.interfaces import ApplianceClient
from opnmcp.core.config import ConnectionConfig
from opnmcp.core.logger import logger

ClientFactory = Callable[[ConnectionConfig], ApplianceClient]


def _default_client_factory(config: ConnectionConfig) -> ApplianceClient:
    # Deferred so the core layer does not import the HTTP stack at module load
    from opnmcp.client import OPNsenseClient

    return OPNsenseClient(config)


class ServerContext:
    """
    Per-process bundle of connection state and module availability.

    - available_modules: resolved from the build configuration, read-only.
    - connection / client: the client is created lazily, once, from the
      connection parameters the first time a call needs it.
    - installed_plugins: plugins a liveness probe has confirmed. Advisory only,
      may be stale, never used to skip a probe.
    """

    def __init__(
        self,
        available_modules: Iterable[str],
        connection: ConnectionConfig | None = None,
        plugins_enabled: bool = False,
        client: ApplianceClient | None = None,
        client_factory: ClientFactory | None = None,
    ):
        self.available_modules: frozenset[str] = frozenset(available_modules)
        self.connection = connection
        self.plugins_enabled = plugins_enabled
        self.installed_plugins: set[str] = set()
        self._client = client
        self._client_factory = client_factory or _default_client_factory

    @property
    def client(self) -> ApplianceClient | None:
        """The live client handle, created on first access if connection parameters exist."""
        if self._client is None and self.connection is not None:
            self._client = self._client_factory(self.connection)
            logger.info(f"OPNsense client created for {self.connection.host}")
        return self._client

    def configure(self, connection: ConnectionConfig) -> ApplianceClient:
        """
        Replace the connection parameters and create a fresh client handle.

        This is the only operation that replaces an existing client. If the
        factory raises, the previous connection and client are left untouched.
        """
        client = self._client_factory(connection)
        self.connection = connection
        self._client = client
        self.installed_plugins.clear()
        logger.info(f"OPNsense connection configured for {connection.host}")
        return self._client

    def record_installed(self, plugin_name: str) -> None:
        self.installed_plugins.add(plugin_name)
