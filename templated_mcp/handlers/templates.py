"""Template tools.

Every call that targets an existing template checks it against the request
scope first. Creation and cloning are two-phase: the template is created, then
placed in scope (see ``ScopedSession.place_in_scope``).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..exceptions import TemplatedError
from ..scope import ScopedSession
from ..shard import constants as C
from ..shard.enums import HttpMethod
from ..utils.params import paging, pick, query_params

_LIST_FILTERS = ("query", "page", "limit", "width", "height", "tags")
_CREATE_FIELDS = ("name", "width", "height", "background", "duration", "layers")
_UPDATE_FIELDS = ("name", "description", "width", "height", "background", "duration", "layers")


def _created_id(result: Any) -> str:
    if isinstance(result, dict) and result.get("id"):
        return str(result["id"])
    raise TemplatedError("Templated API response did not include the new template id")


async def list_templates(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    params = query_params(args, _LIST_FILTERS, flags=("includeLayers",))
    return await session.request(HttpMethod.GET, session.templates_path(), params=session.scope_params(params))


async def get_template(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    template_id = args["template_id"]
    await session.validate_template_access(template_id)
    return await session.request(HttpMethod.GET, f"/v1/template/{template_id}")


async def get_template_layers(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    template_id = args["template_id"]
    await session.validate_template_access(template_id)
    return await session.request(HttpMethod.GET, f"/v1/template/{template_id}/layers")


async def get_template_pages(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    template_id = args["template_id"]
    await session.validate_template_access(template_id)
    return await session.request(HttpMethod.GET, f"/v1/template/{template_id}/pages")


async def create_template(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    body = pick(args, _CREATE_FIELDS)
    if session.scope.external_id:
        body[C.EXTERNAL_ID_FIELD] = session.scope.external_id
    result = await session.request(HttpMethod.POST, "/v1/template", body=body)
    await session.place_in_scope(_created_id(result))
    return result


async def update_template(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    template_id = args["template_id"]
    await session.validate_template_access(template_id)
    body = pick(args, _UPDATE_FIELDS)
    params = query_params(args, flags=("replaceLayers",))
    return await session.request(HttpMethod.PUT, f"/v1/template/{template_id}", body=body, params=params)


async def clone_template(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    template_id = args["template_id"]
    await session.validate_template_access(template_id)
    result = await session.request(HttpMethod.POST, f"/v1/template/{template_id}/clone", body=pick(args, ("name",)))
    await session.place_in_scope(_created_id(result), assign_external_id=True)
    return result


async def delete_template(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    template_id = args["template_id"]
    await session.validate_template_access(template_id)
    return await session.request(HttpMethod.DELETE, f"/v1/template/{template_id}")


async def list_template_renders(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    template_id = args["template_id"]
    await session.validate_template_access(template_id)
    return await session.request(HttpMethod.GET, f"/v1/template/{template_id}/renders", params=paging(args))


HANDLERS = {
    "list_templates": list_templates,
    "get_template": get_template,
    "get_template_layers": get_template_layers,
    "get_template_pages": get_template_pages,
    "create_template": create_template,
    "update_template": update_template,
    "clone_template": clone_template,
    "delete_template": delete_template,
    "list_template_renders": list_template_renders,
}

__all__ = ["HANDLERS"]
