from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
from loguru import logger

from .exceptions import MissingCredentialsError, TemplatedAPIError, TemplatedConnectionError
from .settings import Settings
from .shard import constants as C
from .shard.enums import HttpMethod


class TemplatedClient:
    """Thin async client for the Templated REST API.

    The client holds no credentials; every call receives the API key of the
    request it serves. A fresh ``httpx.AsyncClient`` is opened per call.
    """

    def __init__(
        self,
        base_url: str = C.DEFAULT_API_BASE_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> TemplatedClient:
        return cls(base_url=settings.templated_api_base_url, timeout=settings.templated_request_timeout)

    async def request(
        self,
        method: HttpMethod | str,
        path: str,
        *,
        api_key: str,
        body: Mapping[str, Any] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> Any:
        """Issue one authenticated call and return the decoded JSON response.

        Empty bodies decode to ``{"success": true}``. Non-2xx statuses raise
        ``TemplatedAPIError`` with the status and raw body text.
        """
        if not api_key:
            raise MissingCredentialsError()

        method = HttpMethod(method)
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        json_body = dict(body) if body is not None and method.has_body else None

        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport) as http:
                response = await http.request(method.value, path, headers=headers, json=json_body, params=dict(params) if params else None)
        except httpx.HTTPError as e:
            logger.warning(f"{method.value} {path} failed: {type(e).__name__}: {e}")
            raise TemplatedConnectionError(str(e) or type(e).__name__) from e

        logger.debug(f"{method.value} {path} -> {response.status_code}")

        if not response.is_success:
            raise TemplatedAPIError(response.status_code, response.text)

        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return dict(C.EMPTY_RESPONSE)
        try:
            return response.json()
        except ValueError:
            # Raw files (e.g. an unhosted PDF merge) are summarized instead of inlined.
            return {
                **C.EMPTY_RESPONSE,
                "contentType": response.headers.get("content-type", "application/octet-stream"),
                "size": len(response.content),
            }


__all__ = ["TemplatedClient"]
