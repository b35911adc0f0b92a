from __future__ import annotations

import json
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .shard import constants as C

# ------------------------------ Error handling ------------------------------ #


class Error(BaseModel):
    """Normalized error attached to failed tool calls.

    Use short, actionable messages and stable error codes suitable for client
    handling.
    """

    code: str = Field(description="Stable machine-readable error code, e.g. 'scope_violation'.")
    message: str = Field(description="Human-readable error message with remediation tips when possible.")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional debug details such as the HTTP status; best-effort and unstable for parsing.",
    )


# ---------------------------------- Scope ----------------------------------- #


class Scope(BaseModel):
    """Credentials and visibility filters for one request.

    ``folder_id`` and ``external_id`` are independent; when both are set a
    template must satisfy both. Instances are immutable and derived once per
    request.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(default="", description="Templated API key sent as a bearer token; empty when unknown.")
    folder_id: str | None = Field(default=None, description="Folder every template operation is restricted to.")
    external_id: str | None = Field(default=None, description="External ID every template operation is restricted to.")

    @property
    def is_scoped(self) -> bool:
        return bool(self.folder_id or self.external_id)

    @property
    def label(self) -> str:
        """Human-readable name of the active scope, used in tool descriptions."""
        if self.folder_id and self.external_id:
            return "the configured folder and external ID"
        if self.folder_id:
            return "the configured folder"
        if self.external_id:
            return "the configured external ID"
        return "the account"

    @classmethod
    def from_request(cls, query: Mapping[str, str], headers: Mapping[str, str], fallback: Scope | None = None) -> Scope:
        """Derive the scope of an HTTP request.

        The API key comes from the ``apiKey`` query parameter, then the
        ``Authorization: Bearer`` header, then ``fallback``. Folder and
        external ID come from their query parameters, then ``fallback``.
        """
        fallback = fallback or cls()

        api_key = query.get(C.API_KEY_PARAM) or ""
        if not api_key:
            authorization = headers.get("authorization") or ""
            if authorization.startswith(C.BEARER_PREFIX):
                api_key = authorization[len(C.BEARER_PREFIX) :].strip()

        return cls(
            api_key=api_key or fallback.api_key,
            folder_id=query.get(C.FOLDER_ID_PARAM) or fallback.folder_id,
            external_id=query.get(C.EXTERNAL_ID_PARAM) or fallback.external_id,
        )


# ------------------------------ Tool registry ------------------------------- #


class ToolDefinition(BaseModel):
    """A named tool: description, annotation hints, input schema and handler."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Unique tool name.")
    description: str = Field(description="Description advertised to MCP clients.")
    annotations: dict[str, bool] = Field(default_factory=dict, description="MCP tool annotation hints.")
    input_schema: dict[str, Any] = Field(description="JSON schema of the tool arguments.")
    handler: Callable[..., Awaitable[Any]] = Field(exclude=True, description="Coroutine building and issuing the REST call(s).")


# ------------------------------ Tool responses ------------------------------ #


class TextContentBlock(BaseModel):
    """Text content block of a tool response."""

    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    """Outcome of one tool call in MCP shape: text content plus an error flag."""

    content: list[TextContentBlock] = Field(default_factory=list)
    isError: bool = Field(default=False, description="True when the call failed; content holds the error message.")
    error: Error | None = Field(default=None, exclude=True, description="Structured error for logging and tests.")

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    @classmethod
    def success(cls, payload: Any) -> ToolCallResult:
        return cls(content=[TextContentBlock(text=json.dumps(payload, indent=2))])

    @classmethod
    def failure(cls, error: Error) -> ToolCallResult:
        return cls(content=[TextContentBlock(text=f"Error: {error.message}")], isError=True, error=error)


__all__ = [
    "Error",
    "Scope",
    "ToolDefinition",
    "TextContentBlock",
    "ToolCallResult",
]
