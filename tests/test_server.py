"""Tests for server wiring and the CLI entry point."""

from unittest.mock import patch

from mcp import types

from main import build_parser, main
from opnmcp.core.build_config import BuildConfig
from opnmcp.core.config import Settings
from opnmcp.server import OPNsenseMcpServer, create_context

BUILD = BuildConfig.model_validate(
    {
        "core": {"modules": {"system": True, "firewall": False}},
        "plugins": {"includeAll": True, "modules": {"nginx": False}},
    }
)


def test_create_context_from_settings():
    settings = Settings(_env_file=None, host="https://fw", api_key="k", api_secret="s", plugins=True)

    context = create_context(settings, build_config=BUILD)

    assert context.available_modules == frozenset({"core.system", "plugins.nginx"})
    assert context.connection.host == "https://fw"
    assert context.plugins_enabled is True


def test_server_registers_protocol_handlers():
    context = create_context(Settings(_env_file=None), build_config=BUILD)

    server = OPNsenseMcpServer(context)

    for request_type in (
        types.ListToolsRequest,
        types.CallToolRequest,
        types.ListResourcesRequest,
        types.ReadResourceRequest,
        types.ListPromptsRequest,
        types.GetPromptRequest,
    ):
        assert request_type in server.server.request_handlers


def test_cli_flags():
    args = build_parser().parse_args(
        ["--host", "https://fw", "--api-key", "k", "--api-secret", "s", "--no-verify-ssl", "--plugins"]
    )

    assert args.host == "https://fw"
    assert args.no_verify_ssl is True
    assert args.plugins is True
    assert args.build_config is None


def test_main_applies_cli_overrides():
    with (
        patch("main.create_context") as create,
        patch("main.OPNsenseMcpServer") as server_cls,
        patch("main.asyncio.run") as run,
    ):
        main(["--host", "https://fw", "--api-key", "k", "--api-secret", "s", "--plugins"])

    effective = create.call_args.args[0]
    assert effective.host == "https://fw"
    assert effective.plugins is True
    assert effective.connection() is not None
    server_cls.assert_called_once_with(create.return_value)
    run.assert_called_once()
