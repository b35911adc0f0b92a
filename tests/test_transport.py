from __future__ import annotations

import json

import pytest
from starlette.responses import JSONResponse
from starlette.testclient import TestClient

import templated_mcp.main as server
from templated_mcp.dispatcher import TOOL_REGISTRY, ToolDispatcher
from templated_mcp.main import app
from templated_mcp.settings import Settings, get_settings
from templated_mcp.shard.constants import CONTENT_SECURITY_POLICY, FOLDER_MANAGEMENT_TOOLS, OAUTH_METADATA
from templated_mcp.transport import McpPathMiddleware, build_http_app, request_scope

from .conftest import API_KEY


@pytest.fixture
def http_client(monkeypatch):
    monkeypatch.delenv("OPENAI_VERIFICATION_TOKEN", raising=False)
    get_settings.cache_clear()
    yield TestClient(build_http_app(app))
    get_settings.cache_clear()


def test_health(http_client):
    response = http_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "mode": "streamable-http"}
    assert response.headers["content-security-policy"] == CONTENT_SECURITY_POLICY


def test_oauth_metadata(http_client):
    response = http_client.get("/.well-known/oauth-authorization-server")

    assert response.status_code == 200
    assert response.json() == OAUTH_METADATA


def test_openai_challenge_not_configured(http_client):
    response = http_client.get("/.well-known/openai-apps-challenge")

    assert response.status_code == 404
    assert response.json() == {"error": "Not configured"}


def test_openai_challenge_serves_token(http_client, monkeypatch):
    monkeypatch.setenv("OPENAI_VERIFICATION_TOKEN", "verify-me")
    get_settings.cache_clear()

    response = http_client.get("/.well-known/openai-apps-challenge")

    assert response.status_code == 200
    assert response.text == "verify-me"
    assert response.headers["content-type"].startswith("text/plain")


def test_unknown_path_is_json_404(http_client):
    response = http_client.get("/nowhere")

    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}
    assert "content-security-policy" in response.headers


def test_options_is_answered_directly(http_client):
    response = http_client.options("/anything")

    assert response.status_code == 200
    assert response.content == b""


def test_cors_allows_any_origin(http_client):
    response = http_client.get("/health", headers={"Origin": "https://chat.example.test"})

    assert response.headers["access-control-allow-origin"] == "*"


# -- McpPathMiddleware in isolation ------------------------------------------


async def _echo_path(scope, receive, send):
    await JSONResponse({"path": scope["path"]})(scope, receive, send)


async def _boom(scope, receive, send):
    raise RuntimeError("handler exploded")


@pytest.mark.parametrize("path", ["/sse", "/", "/mcp"])
def test_aliases_reach_mcp_endpoint(path):
    client = TestClient(McpPathMiddleware(_echo_path))

    response = client.post(path, json={})

    assert response.json() == {"path": "/mcp"}


def test_mcp_fault_becomes_json_500():
    client = TestClient(McpPathMiddleware(_boom), raise_server_exceptions=False)

    response = client.post("/mcp", json={})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert response.headers["content-security-policy"] == CONTENT_SECURITY_POLICY


# -- Scope derivation ----------------------------------------------------------


def test_request_scope_outside_http_uses_environment(monkeypatch):
    monkeypatch.setenv("TEMPLATED_API_KEY", "env-key")
    monkeypatch.setenv("TEMPLATED_FOLDER_ID", "fld-env")
    monkeypatch.delenv("TEMPLATED_EXTERNAL_ID", raising=False)

    scope = request_scope(Settings())

    assert scope.api_key == "env-key"
    assert scope.folder_id == "fld-env"
    assert scope.external_id is None


# -- MCP over streamable HTTP --------------------------------------------------

_SCOPE_ENV_VARS = ("TEMPLATED_API_KEY", "TEMPLATED_FOLDER_ID", "TEMPLATED_EXTERNAL_ID")


@pytest.fixture
def mcp_http(monkeypatch, client):
    """Running HTTP app whose tools talk to the fake Templated API."""
    for name in _SCOPE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    monkeypatch.setattr(server, "dispatcher", ToolDispatcher(client))
    with TestClient(build_http_app(app)) as http:
        yield http
    get_settings.cache_clear()


def _rpc(http: TestClient, url: str, method: str, params: dict | None = None, headers: dict | None = None) -> dict:
    """POST one JSON-RPC request and return its ``result`` from the SSE reply."""
    response = http.post(
        url,
        json={"jsonrpc": "2.0", "id": 1, "method": method, "params": params or {}},
        headers={"Accept": "application/json, text/event-stream", **(headers or {})},
    )
    assert response.status_code == 200
    events = [line[len("data:") :].strip() for line in response.text.splitlines() if line.startswith("data:")]
    return json.loads(events[-1])["result"]


def _call(http: TestClient, url: str, tool: str, arguments: dict, headers: dict | None = None) -> dict:
    return _rpc(http, url, "tools/call", {"name": tool, "arguments": arguments}, headers)


def test_tools_list_without_scope_shows_every_tool(mcp_http):
    result = _rpc(mcp_http, f"/mcp?apiKey={API_KEY}", "tools/list")

    assert {tool["name"] for tool in result["tools"]} == set(TOOL_REGISTRY)


def test_tools_list_hides_folder_tools_for_folder_query(mcp_http):
    result = _rpc(mcp_http, f"/mcp?apiKey={API_KEY}&folderId=fld-1", "tools/list")

    tools = {tool["name"]: tool for tool in result["tools"]}
    assert set(tools) == set(TOOL_REGISTRY) - FOLDER_MANAGEMENT_TOOLS
    assert tools["list_templates"]["description"].startswith("List templates in the configured folder")


def test_tools_call_rejects_out_of_folder_template(mcp_http, fake_api):
    fake_api.add_template("tpl-a", folder_id="fld-2")

    result = _call(mcp_http, f"/mcp?apiKey={API_KEY}&folderId=fld-1", "get_template", {"template_id": "tpl-a"})

    assert result["isError"] is True
    assert "not found in the configured scope" in result["content"][0]["text"]


def test_tools_call_reads_in_folder_template(mcp_http, fake_api):
    fake_api.add_template("tpl-a", folder_id="fld-1")

    result = _call(mcp_http, f"/mcp?apiKey={API_KEY}&folderId=fld-1", "get_template", {"template_id": "tpl-a"})

    assert result["isError"] is False
    assert json.loads(result["content"][0]["text"])["id"] == "tpl-a"


def test_hidden_folder_tool_call_is_unknown_over_http(mcp_http, fake_api):
    result = _call(mcp_http, f"/mcp?apiKey={API_KEY}&folderId=fld-1", "delete_folder", {"folder_id": "fld-1"})

    assert result["isError"] is True
    assert "Unknown tool: delete_folder" in result["content"][0]["text"]
    assert fake_api.requests == []


def test_unknown_tool_over_http(mcp_http):
    result = _call(mcp_http, f"/mcp?apiKey={API_KEY}", "nope", {})

    assert result["isError"] is True
    assert "Unknown tool: nope" in result["content"][0]["text"]


def test_bearer_header_on_sse_alias(mcp_http, fake_api):
    result = _call(mcp_http, "/sse", "get_account", {}, headers={"Authorization": f"Bearer {API_KEY}"})

    assert result["isError"] is False
    assert fake_api.last("GET", "/v1/account").headers["authorization"] == f"Bearer {API_KEY}"


def test_query_key_wins_over_bearer_header(mcp_http, fake_api):
    result = _call(mcp_http, f"/mcp?apiKey={API_KEY}", "get_account", {}, headers={"Authorization": "Bearer wrong-key"})

    assert result["isError"] is False


def test_external_id_query_on_root_alias(mcp_http, fake_api):
    fake_api.add_template("tpl-mine", external_id="tenant-a")
    fake_api.add_template("tpl-theirs", external_id="tenant-b")

    result = _call(mcp_http, f"/?apiKey={API_KEY}&externalId=tenant-a", "list_templates", {})

    assert [t["id"] for t in json.loads(result["content"][0]["text"])] == ["tpl-mine"]
    assert fake_api.last("GET", "/v1/templates").url.params["externalId"] == "tenant-a"


def test_missing_key_over_http_is_tool_error(mcp_http, fake_api):
    result = _call(mcp_http, "/mcp", "get_account", {})

    assert result["isError"] is True
    assert "API key required" in result["content"][0]["text"]
    assert fake_api.requests == []
