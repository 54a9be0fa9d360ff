"""Tests for tool dispatch and resource reads."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fakes import FakeClient, FakeModule, failing, returning

from opnmcp.catalog.resources import RESOURCE_CATALOG
from opnmcp.catalog.tools import CONFIGURE_TOOL_NAME
from opnmcp.core.dispatcher import Dispatcher, parse_resource_uri
from opnmcp.core.errors import (
    NotConfiguredError,
    RemoteModuleNotFoundError,
    ResourceReadError,
    UnknownPromptError,
    UnknownResourceTypeError,
    UnknownToolError,
)

# --- Tool dispatch ---


@pytest.mark.asyncio
async def test_unknown_tool_raises(make_context):
    dispatcher = Dispatcher(make_context(client=FakeClient()))

    with pytest.raises(UnknownToolError, match="Unknown tool: no_such_tool"):
        await dispatcher.call_tool("no_such_tool", {})


@pytest.mark.asyncio
async def test_raising_handler_becomes_error_envelope(make_context):
    dispatcher = Dispatcher(make_context(client=FakeClient()))
    dispatcher.handlers["exploding"] = AsyncMock(side_effect=RuntimeError("kaboom"))

    result = await dispatcher.call_tool("exploding")

    assert len(result.content) == 1
    assert result.content[0].type == "text"
    assert "kaboom" in result.content[0].text
    assert result.content[0].text.startswith("Error:")


@pytest.mark.asyncio
async def test_arguments_default_to_empty(make_context):
    dispatcher = Dispatcher(make_context(client=FakeClient()))
    handler = AsyncMock(return_value="ok")
    dispatcher.handlers["probe"] = handler

    await dispatcher.call_tool("probe", None)

    handler.assert_awaited_once_with({})


@pytest.mark.asyncio
async def test_core_tool_invokes_module(make_context):
    firewall = FakeModule("firewall", search_rule={"rows": [{"uuid": "1"}], "total": 1})
    dispatcher = Dispatcher(make_context(client=FakeClient(modules={"firewall": firewall})))

    result = await dispatcher.call_tool("core_firewall_search_rule", {"current": 2})

    assert json.loads(result.content[0].text) == {"rows": [{"uuid": "1"}], "total": 1}
    firewall.calls["search_rule"].assert_awaited_once_with(current=2)


@pytest.mark.asyncio
async def test_core_tool_without_connection_reports_error(make_context):
    dispatcher = Dispatcher(make_context(client=None))

    result = await dispatcher.call_tool("core_system_get_status", {})

    assert result.content[0].text.startswith("Error: OPNsense connection not configured")


@pytest.mark.asyncio
async def test_core_tool_outside_build_reports_error(make_context):
    system = FakeModule("system", get_status={"status": "ok"})
    context = make_context(client=FakeClient(modules={"system": system}), modules=frozenset())
    dispatcher = Dispatcher(context)

    result = await dispatcher.call_tool("core_system_get_status", {})

    assert "was not included in the build" in result.content[0].text
    system.calls["get_status"].assert_not_awaited()


@pytest.mark.asyncio
async def test_http_error_text_carries_status(make_context):
    system = FakeModule("system")
    system.calls["get_status"] = failing(403, "Forbidden")
    dispatcher = Dispatcher(make_context(client=FakeClient(modules={"system": system})))

    result = await dispatcher.call_tool("core_system_get_status")

    assert result.content[0].text == "Error: HTTP 403: Forbidden"


def test_plugin_handlers_only_when_enabled(make_context):
    enabled = Dispatcher(make_context(client=FakeClient(), plugins_enabled=True))
    disabled = Dispatcher(make_context(client=FakeClient(), plugins_enabled=False))

    assert "plugin_nginx_get_status" in enabled.handlers
    assert "plugin_nginx_get_status" not in disabled.handlers
    assert "core_system_get_status" in disabled.handlers
    assert CONFIGURE_TOOL_NAME in disabled.handlers


@pytest.mark.asyncio
async def test_plugin_tool_runs_gate_first(make_context):
    nginx = FakeModule("nginx", {"status": failing(404)}, get_status={"status": "active"})
    dispatcher = Dispatcher(make_context(client=FakeClient(plugins={"nginx": nginx})))

    result = await dispatcher.call_tool("plugin_nginx_get_status", {})

    assert "is not installed on the OPNsense firewall" in result.content[0].text
    nginx.calls["get_status"].assert_not_awaited()


@pytest.mark.asyncio
async def test_plugin_tool_invokes_after_gate(make_context):
    nginx = FakeModule(
        "nginx", {"status": returning({"status": "active"})}, search_upstream={"rows": []}
    )
    dispatcher = Dispatcher(make_context(client=FakeClient(plugins={"nginx": nginx})))

    result = await dispatcher.call_tool("plugin_nginx_search_upstream", {"row_count": 5})

    assert json.loads(result.content[0].text) == {"rows": []}
    nginx.calls["search_upstream"].assert_awaited_once_with(row_count=5)


@pytest.mark.asyncio
async def test_configure_tool_replaces_client(make_context):
    context = make_context(client=None)
    new_client = FakeClient()
    factory = MagicMock(return_value=new_client)
    context._client_factory = factory
    context.installed_plugins.add("nginx")
    dispatcher = Dispatcher(context)

    result = await dispatcher.call_tool(
        CONFIGURE_TOOL_NAME,
        {"host": "https://10.0.0.1", "api_key": "k", "api_secret": "s", "verify_ssl": False},
    )

    assert "https://10.0.0.1" in result.content[0].text
    assert context.client is new_client
    assert context.connection.verify_ssl is False
    assert context.installed_plugins == set()
    factory.assert_called_once()


@pytest.mark.asyncio
async def test_configure_tool_rejects_missing_fields(make_context):
    context = make_context(client=None)
    dispatcher = Dispatcher(context)

    result = await dispatcher.call_tool(CONFIGURE_TOOL_NAME, {"host": "https://10.0.0.1"})

    assert result.content[0].text.startswith("Error:")
    assert context.connection is None


# --- Resource reads ---


@pytest.mark.asyncio
async def test_read_plugin_status(make_context):
    nginx = FakeModule("nginx", {"status": returning({"status": "active"})})
    dispatcher = Dispatcher(make_context(client=FakeClient(plugins={"nginx": nginx})))

    result = await dispatcher.read_resource("opnsense://plugins/nginx/status")

    content = result.contents[0]
    assert json.loads(content.text) == {"status": "active"}
    assert content.text == json.dumps({"status": "active"}, indent=2)
    assert content.mime_type == "application/json"
    assert result.model_dump(by_alias=True)["contents"][0]["mimeType"] == "application/json"
    assert content.uri == "opnsense://plugins/nginx/status"


@pytest.mark.asyncio
async def test_read_without_client(make_context):
    dispatcher = Dispatcher(make_context(client=None))

    with pytest.raises(NotConfiguredError):
        await dispatcher.read_resource("opnsense://system/status")


@pytest.mark.asyncio
async def test_read_missing_module(make_context):
    dispatcher = Dispatcher(make_context(client=FakeClient()))

    with pytest.raises(RemoteModuleNotFoundError, match="Plugin 'nginx' not found"):
        await dispatcher.read_resource("opnsense://plugins/nginx/status")
    with pytest.raises(RemoteModuleNotFoundError, match="Module 'system' not found"):
        await dispatcher.read_resource("opnsense://system/status")


@pytest.mark.asyncio
async def test_read_unknown_type(make_context):
    system = FakeModule("system", {"status": returning({"ok": True})})
    dispatcher = Dispatcher(make_context(client=FakeClient(modules={"system": system})))

    with pytest.raises(UnknownResourceTypeError, match="Unknown resource type: bogus"):
        await dispatcher.read_resource("opnsense://system/bogus")


@pytest.mark.asyncio
async def test_read_wraps_unexpected_errors(make_context):
    system = FakeModule("system", {"status": failing(502, "bad gateway")})
    dispatcher = Dispatcher(make_context(client=FakeClient(modules={"system": system})))

    with pytest.raises(ResourceReadError, match="Failed to read resource: bad gateway"):
        await dispatcher.read_resource("opnsense://system/status")


@pytest.mark.asyncio
async def test_read_invalid_uri(make_context):
    dispatcher = Dispatcher(make_context(client=FakeClient()))

    with pytest.raises(ResourceReadError):
        await dispatcher.read_resource("https://system/status")
    with pytest.raises(ResourceReadError):
        await dispatcher.read_resource("opnsense://system")


@pytest.mark.asyncio
async def test_status_falls_back_to_get_when_empty(make_context):
    status = returning({})
    get = returning({"enabled": "1"})
    bind = FakeModule("bind", {"status": status, "get": get})
    dispatcher = Dispatcher(make_context(client=FakeClient(plugins={"bind": bind})))

    result = await dispatcher.read_resource("opnsense://plugins/bind/status")

    assert json.loads(result.contents[0].text) == {"enabled": "1"}
    status.assert_awaited_once()


@pytest.mark.asyncio
async def test_rules_fall_back_to_generic_search(make_context):
    search = returning({"rows": [{"uuid": "a"}]})
    firewall = FakeModule("firewall", {"search": search})
    dispatcher = Dispatcher(make_context(client=FakeClient(modules={"firewall": firewall})))

    result = await dispatcher.read_resource("opnsense://firewall/rules")

    assert json.loads(result.contents[0].text) == {"rows": [{"uuid": "a"}]}


@pytest.mark.asyncio
async def test_no_capability_yields_empty_object(make_context):
    firewall = FakeModule("firewall")
    dispatcher = Dispatcher(make_context(client=FakeClient(modules={"firewall": firewall})))

    result = await dispatcher.read_resource("opnsense://firewall/aliases")

    assert json.loads(result.contents[0].text) == {}


@pytest.mark.asyncio
async def test_every_listed_resource_round_trips(make_context):
    """Each catalog URI is accepted by the read path for a client with the expected modules."""
    capabilities = {
        "status": returning({"status": "ok"}),
        "info": returning({"versions": []}),
        "search_rule": returning({"rows": []}),
        "search_alias": returning({"rows": []}),
        "overview": returning([{"device": "em0"}]),
        "health": returning({"memory": {}}),
    }
    modules = {}
    plugins = {}
    for resource in RESOURCE_CATALOG:
        module_name, _, is_plugin = parse_resource_uri(resource.uri)
        target = plugins if is_plugin else modules
        target[module_name] = FakeModule(module_name, capabilities)
    dispatcher = Dispatcher(make_context(client=FakeClient(modules=modules, plugins=plugins)))

    for resource in RESOURCE_CATALOG:
        result = await dispatcher.read_resource(resource.uri)
        assert result.contents[0].mime_type == resource.mime_type
        assert json.loads(result.contents[0].text)


def test_parse_resource_uri():
    assert parse_resource_uri("opnsense://firewall/rules") == ("firewall", "rules", False)
    assert parse_resource_uri("opnsense://plugins/nginx/status") == ("nginx", "status", True)


# --- Prompts ---


def test_get_prompt_unknown(make_context):
    dispatcher = Dispatcher(make_context(client=None))

    with pytest.raises(UnknownPromptError):
        dispatcher.get_prompt("nope")


def test_get_prompt_hidden_by_build(make_context):
    dispatcher = Dispatcher(make_context(client=None, modules=frozenset({"core.system"})))

    with pytest.raises(UnknownPromptError):
        dispatcher.get_prompt("network_troubleshooting", {"target_host": "8.8.8.8"})


def test_get_prompt_renders_listed_prompt(make_context):
    dispatcher = Dispatcher(make_context(client=None))

    text = dispatcher.get_prompt("network_troubleshooting", {"target_host": "8.8.8.8"})

    assert "Troubleshoot connectivity to 8.8.8.8." in text


# --- Serialization failures ---


@pytest.mark.asyncio
async def test_unserializable_tool_result_becomes_error_envelope(make_context):
    system = FakeModule("system", get_status={1, 2})
    dispatcher = Dispatcher(make_context(client=FakeClient(modules={"system": system})))

    result = await dispatcher.call_tool("core_system_get_status", {})

    assert result.content[0].text.startswith("Error:")
    assert "not JSON serializable" in result.content[0].text


@pytest.mark.asyncio
async def test_unserializable_resource_is_wrapped(make_context):
    system = FakeModule("system", {"status": returning({1, 2})})
    dispatcher = Dispatcher(make_context(client=FakeClient(modules={"system": system})))

    with pytest.raises(ResourceReadError, match="Failed to read resource: .*not JSON serializable"):
        await dispatcher.read_resource("opnsense://system/status")


@pytest.mark.asyncio
async def test_plugin_resources_only_expose_status(make_context):
    nginx = FakeModule("nginx", {"status": returning({"status": "active"}), "health": returning({"a": 1})})
    dispatcher = Dispatcher(make_context(client=FakeClient(plugins={"nginx": nginx})))

    with pytest.raises(UnknownResourceTypeError, match="Unknown resource type: health"):
        await dispatcher.read_resource("opnsense://plugins/nginx/health")


@pytest.mark.asyncio
async def test_error_log_carries_trace_id(make_context):
    dispatcher = Dispatcher(make_context(client=None))

    with patch("opnmcp.core.errors.logger") as logger:
        await dispatcher.call_tool("core_system_get_status", {})

    message = logger.warning.call_args.args[0]
    assert "core_system_get_status" in message
    assert "trace_id=" in message
