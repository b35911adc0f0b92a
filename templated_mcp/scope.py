"""Folder and external-id scoping for template operations.

The downstream API has no "get template within folder" primitive, so access
checks fetch the template and compare its ``folderId``/``externalId`` with the
request scope. Creation cannot be scoped atomically either: new templates are
moved into scope after they exist, and deleted again if that fails.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from .client import TemplatedClient
from .exceptions import ScopePlacementError, ScopeViolationError, TemplatedError
from .schema import Scope
from .shard import constants as C
from .shard.enums import HttpMethod


class ScopedSession:
    """Downstream access bound to the scope of a single request.

    Handlers receive one of these per tool call; it carries the API key used
    for every call and applies the folder/external-id filters.
    """

    def __init__(self, client: TemplatedClient, scope: Scope) -> None:
        self.client = client
        self.scope = scope

    async def request(
        self,
        method: HttpMethod | str,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> Any:
        return await self.client.request(method, path, api_key=self.scope.api_key, body=body, params=params)

    # ------------------------------------------------------------------
    # Access checks
    # ------------------------------------------------------------------
    async def _fetch_template(self, template_id: str) -> dict[str, Any]:
        template = await self.request(HttpMethod.GET, f"/v1/template/{template_id}")
        return template if isinstance(template, dict) else {}

    def _check_folder(self, template_id: str, template: Mapping[str, Any]) -> None:
        if self.scope.folder_id and template.get(C.FOLDER_ID_FIELD) != self.scope.folder_id:
            raise ScopeViolationError(template_id)

    def _check_external_id(self, template_id: str, template: Mapping[str, Any]) -> None:
        if self.scope.external_id and template.get(C.EXTERNAL_ID_FIELD) != self.scope.external_id:
            raise ScopeViolationError(template_id)

    async def validate_template_in_folder(self, template_id: str) -> None:
        if not self.scope.folder_id:
            return
        self._check_folder(template_id, await self._fetch_template(template_id))

    async def validate_template_by_external_id(self, template_id: str) -> None:
        if not self.scope.external_id:
            return
        self._check_external_id(template_id, await self._fetch_template(template_id))

    async def validate_template_access(self, template_id: str) -> None:
        """Apply both filters; the template must satisfy every configured one.

        A single fetch serves both checks.
        """
        if not self.scope.is_scoped:
            return
        template = await self._fetch_template(template_id)
        self._check_folder(template_id, template)
        self._check_external_id(template_id, template)

    # ------------------------------------------------------------------
    # Placement of new templates
    # ------------------------------------------------------------------
    async def move_template_to_folder(self, template_id: str) -> None:
        if not self.scope.folder_id:
            return
        await self.request(HttpMethod.PUT, f"/v1/folder/{self.scope.folder_id}/template/{template_id}")

    async def assign_external_id(self, template_id: str) -> None:
        if not self.scope.external_id:
            return
        await self.request(HttpMethod.PUT, f"/v1/template/{template_id}", body={C.EXTERNAL_ID_FIELD: self.scope.external_id})

    async def place_in_scope(self, template_id: str, *, assign_external_id: bool = False) -> None:
        """Second phase of create/clone: move the new template into scope.

        On failure the template is deleted so nothing is left outside the
        scope, and ``ScopePlacementError`` reports what happened.
        """
        try:
            await self.move_template_to_folder(template_id)
            if assign_external_id:
                await self.assign_external_id(template_id)
        except TemplatedError as e:
            logger.warning(f"Placing template {template_id} in scope failed ({e.code}); deleting it")
            rolled_back = True
            try:
                await self.request(HttpMethod.DELETE, f"/v1/template/{template_id}")
            except TemplatedError as cleanup_error:
                logger.error(f"Could not delete template {template_id} after failed placement: {cleanup_error}")
                rolled_back = False
            raise ScopePlacementError(template_id, e, rolled_back=rolled_back) from e

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------
    def templates_path(self) -> str:
        if self.scope.folder_id:
            return f"/v1/folder/{self.scope.folder_id}/templates"
        return "/v1/templates"

    def renders_path(self) -> str:
        if self.scope.folder_id:
            return f"/v1/folder/{self.scope.folder_id}/renders"
        return "/v1/renders"

    def scope_params(self, params: Mapping[str, str] | None = None) -> dict[str, str]:
        scoped = dict(params or {})
        if self.scope.external_id:
            scoped[C.EXTERNAL_ID_FIELD] = self.scope.external_id
        return scoped


__all__ = ["ScopedSession"]
