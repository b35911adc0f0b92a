"""Exception hierarchy for Templated tool calls.

Every error raised while handling a tool call derives from ``TemplatedError``
and is converted into an ``isError`` tool result at the dispatch boundary.
"""

from __future__ import annotations

from typing import Any

from .schema import Error
from .shard import constants as C
from .utils.error_helpers import augment_with_auth_tip


class TemplatedError(Exception):
    """Base exception carrying a stable code and a user-facing message."""

    code: str = C.ERROR_CODE_UNEXPECTED

    def __init__(self, message: str, *, user_message: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.user_message = user_message or message
        self.details = details

    def to_error(self) -> Error:
        return Error(code=self.code, message=self.user_message, details=self.details)


class MissingCredentialsError(TemplatedError):
    """Raised when a downstream call is attempted without an API key."""

    code = C.ERROR_CODE_MISSING_CREDENTIALS

    def __init__(self) -> None:
        super().__init__(
            "API key required. Please provide your Templated API key via ?apiKey= query parameter "
            "or Authorization header."
        )


class TemplatedAPIError(TemplatedError):
    """Raised when the Templated API answers with a non-success status."""

    code = C.ERROR_CODE_API_ERROR

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        message = f"API error ({status_code}): {body}"
        super().__init__(message, user_message=augment_with_auth_tip(message, status_code), details={"status": status_code})


class TemplatedConnectionError(TemplatedError):
    """Raised when the Templated API cannot be reached."""

    code = C.ERROR_CODE_CONNECTION_ERROR

    def __init__(self, reason: str):
        super().__init__(f"Could not reach the Templated API: {reason}")


class ScopeViolationError(TemplatedError):
    """Raised when a template lies outside the configured folder or external ID.

    The message is the same whether or not the template exists elsewhere.
    """

    code = C.ERROR_CODE_SCOPE_VIOLATION

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Template {template_id} not found in the configured scope")


class ScopePlacementError(TemplatedError):
    """Raised when a new template could not be moved into the configured scope."""

    code = C.ERROR_CODE_SCOPE_PLACEMENT

    def __init__(self, template_id: str, cause: Exception, *, rolled_back: bool):
        self.template_id = template_id
        self.rolled_back = rolled_back
        reason = getattr(cause, "user_message", None) or str(cause)
        outcome = "The template was deleted." if rolled_back else "The template may remain outside the configured scope."
        super().__init__(
            f"Template {template_id} was created but could not be placed in the configured scope: {reason}. {outcome}",
            details={"template_id": template_id, "rolled_back": rolled_back},
        )


class UnknownToolError(TemplatedError):
    code = C.ERROR_CODE_UNKNOWN_TOOL

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidArgumentsError(TemplatedError):
    code = C.ERROR_CODE_INVALID_ARGUMENTS

    def __init__(self, tool: str, reason: str):
        super().__init__(f"Invalid arguments for {tool}: {reason}")


__all__ = [
    "TemplatedError",
    "MissingCredentialsError",
    "TemplatedAPIError",
    "TemplatedConnectionError",
    "ScopeViolationError",
    "ScopePlacementError",
    "UnknownToolError",
    "InvalidArgumentsError",
]
