"""Project constants for the Templated API adapter and its HTTP surface.

Endpoint paths for individual tools live next to their handlers; this module
keeps the values shared across the client, the scope resolver and the HTTP
shell.
"""

from __future__ import annotations

from typing import Any, Final

# ----------------------------- Downstream API ------------------------------- #

DEFAULT_API_BASE_URL: Final[str] = "https://api.templated.io"

# Body returned for successful calls whose response is empty (DELETE, PUT moves).
EMPTY_RESPONSE: Final[dict[str, Any]] = {"success": True}

# Merged PDFs are hosted unless the caller asks for the raw file.
DEFAULT_MERGE_HOST: Final[bool] = True

# Query/body keys the downstream API uses for scoping.
FOLDER_ID_FIELD: Final[str] = "folderId"
EXTERNAL_ID_FIELD: Final[str] = "externalId"

# ------------------------------- Tool listing -------------------------------- #

# Folder management is meaningless once the server is pinned to one folder.
FOLDER_MANAGEMENT_TOOLS: Final[frozenset[str]] = frozenset(
    {"list_folders", "create_folder", "update_folder", "delete_folder"}
)

# ------------------------------- HTTP surface -------------------------------- #

MCP_PATH: Final[str] = "/mcp"
MCP_PATH_ALIASES: Final[frozenset[str]] = frozenset({"/sse", "/"})
HEALTH_PATH: Final[str] = "/health"
OAUTH_METADATA_PATH: Final[str] = "/.well-known/oauth-authorization-server"
OPENAI_CHALLENGE_PATH: Final[str] = "/.well-known/openai-apps-challenge"

# Query parameters carrying the per-request scope.
API_KEY_PARAM: Final[str] = "apiKey"
FOLDER_ID_PARAM: Final[str] = "folderId"
EXTERNAL_ID_PARAM: Final[str] = "externalId"

BEARER_PREFIX: Final[str] = "Bearer "

CORS_ALLOW_METHODS: Final[list[str]] = ["GET", "POST", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS: Final[list[str]] = ["Content-Type", "Authorization", "Mcp-Session-Id"]
CORS_EXPOSE_HEADERS: Final[list[str]] = ["Mcp-Session-Id"]

CONTENT_SECURITY_POLICY: Final[str] = f"default-src 'self'; connect-src 'self' {DEFAULT_API_BASE_URL}"

# RFC 8414 metadata pointing MCP clients at the Templated OAuth endpoints.
OAUTH_METADATA: Final[dict[str, Any]] = {
    "issuer": DEFAULT_API_BASE_URL,
    "authorization_endpoint": f"{DEFAULT_API_BASE_URL}/oauth/authorize",
    "token_endpoint": f"{DEFAULT_API_BASE_URL}/oauth/token",
    "response_types_supported": ["code"],
    "grant_types_supported": ["authorization_code"],
    "code_challenge_methods_supported": ["S256"],
    "token_endpoint_auth_methods_supported": ["client_secret_post", "client_secret_basic"],
}

# ------------------------------- Error codes --------------------------------- #

ERROR_CODE_MISSING_CREDENTIALS: Final[str] = "missing_credentials"
ERROR_CODE_API_ERROR: Final[str] = "api_error"
ERROR_CODE_CONNECTION_ERROR: Final[str] = "connection_error"
ERROR_CODE_SCOPE_VIOLATION: Final[str] = "scope_violation"
ERROR_CODE_SCOPE_PLACEMENT: Final[str] = "scope_placement_failed"
ERROR_CODE_UNKNOWN_TOOL: Final[str] = "unknown_tool"
ERROR_CODE_INVALID_ARGUMENTS: Final[str] = "invalid_arguments"
ERROR_CODE_UNEXPECTED: Final[str] = "unexpected_error"
