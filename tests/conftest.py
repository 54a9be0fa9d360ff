"""Shared pytest fixtures for OPNsense MCP tests."""

import pytest
from fakes import FakeClient

from opnmcp.core.config import ConnectionConfig
from opnmcp.core.context import ServerContext


@pytest.fixture
def connection() -> ConnectionConfig:
    return ConnectionConfig(host="https://fw.example.test", api_key="key", api_secret="secret")


@pytest.fixture
def available_modules() -> frozenset[str]:
    return frozenset(
        {
            "core.system",
            "core.firewall",
            "core.interfaces",
            "core.diagnostics",
            "core.firmware",
            "core.services",
            "core.ipsec",
            "core.backup",
            "plugins.nginx",
            "plugins.wireguard",
            "plugins.haproxy",
            "plugins.bind",
        }
    )


@pytest.fixture
def make_context(available_modules, connection):
    """Factory for a ServerContext bound to a FakeClient (or to no client at all)."""

    def _make(
        client: FakeClient | None = None,
        modules: frozenset[str] | None = None,
        plugins_enabled: bool = True,
    ) -> ServerContext:
        return ServerContext(
            available_modules=available_modules if modules is None else modules,
            connection=connection if client is not None else None,
            plugins_enabled=plugins_enabled,
            client=client,
        )

    return _make


@pytest.fixture
def env_override(monkeypatch):
    """Helper fixture to override environment variables."""

    def _override(key: str, value: str | None):
        if value is None:
            monkeypatch.delenv(key, raising=False)
        else:
            monkeypatch.setenv(key, value)

    return _override
