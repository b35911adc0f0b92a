from __future__ import annotations

import pytest

from templated_mcp.exceptions import ScopePlacementError, ScopeViolationError
from templated_mcp.schema import Scope
from templated_mcp.scope import ScopedSession

from .conftest import API_KEY


def test_scope_from_request_prefers_query_api_key():
    scope = Scope.from_request({"apiKey": "from-query"}, {"authorization": "Bearer from-header"})
    assert scope.api_key == "from-query"


def test_scope_from_request_reads_bearer_header():
    scope = Scope.from_request({}, {"authorization": "Bearer from-header"})
    assert scope.api_key == "from-header"


def test_scope_from_request_ignores_non_bearer_authorization():
    scope = Scope.from_request({}, {"authorization": "Basic dXNlcjpwYXNz"})
    assert scope.api_key == ""


def test_scope_from_request_falls_back_to_environment_scope():
    fallback = Scope(api_key="env-key", folder_id="env-folder", external_id="env-tenant")

    scope = Scope.from_request({"folderId": "req-folder"}, {}, fallback=fallback)

    assert scope.api_key == "env-key"
    assert scope.folder_id == "req-folder"
    assert scope.external_id == "env-tenant"


def test_scope_is_immutable():
    scope = Scope(api_key=API_KEY)
    with pytest.raises(Exception):
        scope.folder_id = "other"  # type: ignore[misc]


def test_scope_labels():
    assert Scope(folder_id="f").label == "the configured folder"
    assert Scope(external_id="e").label == "the configured external ID"
    assert Scope(folder_id="f", external_id="e").label == "the configured folder and external ID"
    assert not Scope(api_key=API_KEY).is_scoped


@pytest.mark.asyncio
async def test_validation_is_noop_without_scope(client, fake_api, unscoped):
    session = ScopedSession(client, unscoped)

    await session.validate_template_in_folder("tpl-missing")
    await session.validate_template_by_external_id("tpl-missing")
    await session.validate_template_access("tpl-missing")

    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_folder_validation_rejects_template_in_other_folder(client, fake_api, folder_scope):
    fake_api.add_template("tpl-a", folder_id="fld-other")
    session = ScopedSession(client, folder_scope)

    with pytest.raises(ScopeViolationError) as exc_info:
        await session.validate_template_in_folder("tpl-a")

    assert "not found in the configured scope" in str(exc_info.value)
    assert "fld-other" not in str(exc_info.value)


@pytest.mark.asyncio
async def test_external_id_validation_accepts_matching_template(client, fake_api, external_scope):
    fake_api.add_template("tpl-a", external_id="tenant-a")
    session = ScopedSession(client, external_scope)

    await session.validate_template_by_external_id("tpl-a")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("folder_id", "external_id", "allowed"),
    [
        ("fld-1", "tenant-a", True),
        ("fld-1", "tenant-b", False),
        ("fld-2", "tenant-a", False),
        (None, None, False),
    ],
)
async def test_access_requires_every_configured_filter(client, fake_api, both_scope, folder_id, external_id, allowed):
    fake_api.add_template("tpl-a", folder_id=folder_id, external_id=external_id)
    session = ScopedSession(client, both_scope)

    if allowed:
        await session.validate_template_access("tpl-a")
    else:
        with pytest.raises(ScopeViolationError):
            await session.validate_template_access("tpl-a")

    # one fetch serves both checks
    assert fake_api.calls("GET") == [("GET", "/v1/template/tpl-a")]


@pytest.mark.asyncio
async def test_listing_paths_follow_folder_scope(client, folder_scope, unscoped):
    scoped = ScopedSession(client, folder_scope)
    plain = ScopedSession(client, unscoped)

    assert scoped.templates_path() == "/v1/folder/fld-1/templates"
    assert scoped.renders_path() == "/v1/folder/fld-1/renders"
    assert plain.templates_path() == "/v1/templates"
    assert plain.renders_path() == "/v1/renders"


def test_scope_params_appends_external_id(client, external_scope):
    session = ScopedSession(client, external_scope)

    assert session.scope_params({"page": "1"}) == {"page": "1", "externalId": "tenant-a"}


@pytest.mark.asyncio
async def test_place_in_scope_moves_and_tags_template(client, fake_api, both_scope):
    fake_api.add_template("tpl-new")
    session = ScopedSession(client, both_scope)

    await session.place_in_scope("tpl-new", assign_external_id=True)

    assert fake_api.templates["tpl-new"]["folderId"] == "fld-1"
    assert fake_api.templates["tpl-new"]["externalId"] == "tenant-a"


@pytest.mark.asyncio
async def test_failed_placement_deletes_new_template(client, fake_api, folder_scope):
    fake_api.add_template("tpl-new")
    fake_api.fail("PUT", "/v1/folder/.*/template/.*", 500, "boom")
    session = ScopedSession(client, folder_scope)

    with pytest.raises(ScopePlacementError) as exc_info:
        await session.place_in_scope("tpl-new")

    assert exc_info.value.rolled_back is True
    assert "tpl-new" not in fake_api.templates
    assert "The template was deleted" in str(exc_info.value)


@pytest.mark.asyncio
async def test_failed_rollback_is_reported(client, fake_api, folder_scope):
    fake_api.add_template("tpl-new")
    fake_api.fail("PUT", "/v1/folder/.*/template/.*", 500, "boom")
    fake_api.fail("DELETE", "/v1/template/.*", 500, "still boom")
    session = ScopedSession(client, folder_scope)

    with pytest.raises(ScopePlacementError) as exc_info:
        await session.place_in_scope("tpl-new")

    assert exc_info.value.rolled_back is False
    assert "may remain outside the configured scope" in str(exc_info.value)
