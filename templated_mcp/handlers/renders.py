from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..scope import ScopedSession
from ..shard import constants as C
from ..shard.enums import HttpMethod
from ..utils.params import paging, pick

_RENDER_OPTIONS = (
    "format",
    "layers",
    "transparent",
    "duration",
    "fps",
    "flatten",
    "cmyk",
    "width",
    "height",
    "scale",
    "name",
    "background",
)


async def create_render(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    """Render a template; the template must be visible in the request scope."""
    template_id = args["template"]
    await session.validate_template_access(template_id)
    body = {"template": template_id, **pick(args, _RENDER_OPTIONS)}
    return await session.request(HttpMethod.POST, "/v1/render", body=body)


async def get_render(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.GET, f"/v1/render/{args['render_id']}")


async def list_renders(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.GET, session.renders_path(), params=session.scope_params(paging(args)))


async def delete_render(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.DELETE, f"/v1/render/{args['render_id']}")


async def merge_renders(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    host = args.get("host")
    body = {"ids": args["render_ids"], "host": C.DEFAULT_MERGE_HOST if host is None else host}
    return await session.request(HttpMethod.POST, "/v1/renders/merge", body=body)


HANDLERS = {
    "create_render": create_render,
    "get_render": get_render,
    "list_renders": list_renders,
    "delete_render": delete_render,
    "merge_renders": merge_renders,
}

__all__ = ["HANDLERS"]
