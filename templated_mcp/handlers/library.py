"""Folder, upload, font and account tools.

None of these touch templates, so they are not subject to scoping; folder
tools are hidden from the listing when a folder scope is active.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..scope import ScopedSession
from ..shard.enums import HttpMethod
from ..utils.params import paging, pick

# Folders


async def list_folders(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.GET, "/v1/folders", params=paging(args))


async def create_folder(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.POST, "/v1/folder", body={"name": args["name"]})


async def update_folder(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.PUT, f"/v1/folder/{args['folder_id']}", body={"name": args["name"]})


async def delete_folder(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.DELETE, f"/v1/folder/{args['folder_id']}")


# Uploads


async def list_uploads(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.GET, "/v1/uploads", params=paging(args))


async def create_upload(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.POST, "/v1/upload", body=pick(args, ("url", "name")))


async def delete_upload(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.DELETE, f"/v1/upload/{args['upload_id']}")


# Fonts


async def list_fonts(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.GET, "/v1/fonts", params=paging(args))


async def upload_font(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.POST, "/v1/font", body={"url": args["url"], "name": args["name"]})


async def delete_font(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.DELETE, f"/v1/font/{args['font_id']}")


# Account


async def get_account(session: ScopedSession, args: Mapping[str, Any]) -> Any:
    return await session.request(HttpMethod.GET, "/v1/account")


HANDLERS = {
    "list_folders": list_folders,
    "create_folder": create_folder,
    "update_folder": update_folder,
    "delete_folder": delete_folder,
    "list_uploads": list_uploads,
    "create_upload": create_upload,
    "delete_upload": delete_upload,
    "list_fonts": list_fonts,
    "upload_font": upload_font,
    "delete_font": delete_font,
    "get_account": get_account,
}

__all__ = ["HANDLERS"]
