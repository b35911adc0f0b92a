from __future__ import annotations

import json
import os
import re
import sys
from typing import Any

import httpx
import pytest

# Add repository root to sys.path for `import templated_mcp.*` in tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from templated_mcp.client import TemplatedClient  # noqa: E402
from templated_mcp.dispatcher import ToolDispatcher  # noqa: E402
from templated_mcp.schema import Scope  # noqa: E402

API_KEY = "test-key"
BASE_URL = "https://api.templated.test"


class FakeTemplatedApi:
    """In-memory stand-in for the Templated endpoints the tools use."""

    def __init__(self) -> None:
        self.templates: dict[str, dict[str, Any]] = {}
        self.renders: list[dict[str, Any]] = []
        self.requests: list[httpx.Request] = []
        self.failures: list[tuple[str, re.Pattern[str], int, str]] = []
        self._next_id = 0

    # -- setup helpers -------------------------------------------------
    def add_template(self, template_id: str, *, folder_id: str | None = None, external_id: str | None = None, **extra: Any) -> dict[str, Any]:
        template = {"id": template_id, "name": template_id, "folderId": folder_id, "externalId": external_id, **extra}
        self.templates[template_id] = template
        return template

    def fail(self, method: str, path_pattern: str, status: int, body: str) -> None:
        self.failures.append((method, re.compile(path_pattern), status, body))

    def calls(self, method: str | None = None) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests if method is None or r.method == method]

    def last(self, method: str, path: str) -> httpx.Request:
        return [r for r in self.requests if r.method == method and r.url.path == path][-1]

    @staticmethod
    def body(request: httpx.Request) -> dict[str, Any]:
        return json.loads(request.content) if request.content else {}

    # -- transport -------------------------------------------------------
    def _new_id(self, prefix: str) -> str:
        self._next_id += 1
        return f"{prefix}-{self._next_id}"

    def _listing(self, items: list[dict[str, Any]], request: httpx.Request, folder_id: str | None) -> list[dict[str, Any]]:
        external_id = request.url.params.get("externalId")
        return [
            item
            for item in items
            if (folder_id is None or item.get("folderId") == folder_id) and (external_id is None or item.get("externalId") == external_id)
        ]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method, path = request.method, request.url.path

        if request.headers.get("authorization") != f"Bearer {API_KEY}":
            return httpx.Response(401, text="Unauthorized")

        for fail_method, pattern, status, body in self.failures:
            if fail_method == method and pattern.fullmatch(path):
                return httpx.Response(status, text=body)

        parts = path.strip("/").split("/")[1:]  # drop "v1"

        match (method, parts):
            case ("GET", ["templates"]):
                return httpx.Response(200, json=self._listing(list(self.templates.values()), request, None))
            case ("GET", ["folder", folder_id, "templates"]):
                return httpx.Response(200, json=self._listing(list(self.templates.values()), request, folder_id))
            case ("GET", ["renders"]):
                return httpx.Response(200, json=self._listing(self.renders, request, None))
            case ("GET", ["folder", folder_id, "renders"]):
                return httpx.Response(200, json=self._listing(self.renders, request, folder_id))
            case ("POST", ["template"]):
                payload = self.body(request)
                template = self.add_template(self._new_id("tpl"), external_id=payload.pop("externalId", None), **payload)
                return httpx.Response(200, json=template)
            case ("POST", ["template", template_id, "clone"]):
                if template_id not in self.templates:
                    return httpx.Response(404, text="not found")
                source = self.templates[template_id]
                name = self.body(request).get("name", f"{source['name']} (copy)")
                clone = self.add_template(self._new_id("tpl"), name=name)
                return httpx.Response(200, json=clone)
            case ("PUT", ["folder", folder_id, "template", template_id]):
                if template_id not in self.templates:
                    return httpx.Response(404, text="not found")
                self.templates[template_id]["folderId"] = folder_id
                return httpx.Response(200, text="")
            case ("GET", ["template", template_id, *rest]):
                template = self.templates.get(template_id)
                if template is None:
                    return httpx.Response(404, text="not found")
                if rest:
                    return httpx.Response(200, json={"template": template_id, rest[0]: []})
                return httpx.Response(200, json=template)
            case ("PUT", ["template", template_id]):
                if template_id not in self.templates:
                    return httpx.Response(404, text="not found")
                self.templates[template_id].update(self.body(request))
                return httpx.Response(200, json=self.templates[template_id])
            case ("DELETE", ["template", template_id]):
                if self.templates.pop(template_id, None) is None:
                    return httpx.Response(404, text="not found")
                return httpx.Response(204)
            case ("POST", ["render"]):
                payload = self.body(request)
                template = self.templates.get(payload.get("template"), {})
                render = {"id": self._new_id("rnd"), "status": "COMPLETED", "folderId": template.get("folderId"), **payload}
                self.renders.append(render)
                return httpx.Response(200, json=render)

        return httpx.Response(200, json={"method": method, "path": path})


@pytest.fixture
def fake_api() -> FakeTemplatedApi:
    return FakeTemplatedApi()


@pytest.fixture
def client(fake_api: FakeTemplatedApi) -> TemplatedClient:
    return TemplatedClient(base_url=BASE_URL, transport=httpx.MockTransport(fake_api.handle))


@pytest.fixture
def dispatcher(client: TemplatedClient) -> ToolDispatcher:
    return ToolDispatcher(client)


@pytest.fixture
def unscoped() -> Scope:
    return Scope(api_key=API_KEY)


@pytest.fixture
def folder_scope() -> Scope:
    return Scope(api_key=API_KEY, folder_id="fld-1")


@pytest.fixture
def external_scope() -> Scope:
    return Scope(api_key=API_KEY, external_id="tenant-a")


@pytest.fixture
def both_scope() -> Scope:
    return Scope(api_key=API_KEY, folder_id="fld-1", external_id="tenant-a")
