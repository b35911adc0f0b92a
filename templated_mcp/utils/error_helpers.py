from __future__ import annotations

_AUTH_TIP = (
    " Tip: Check that your Templated API key is valid and passed via the TEMPLATED_API_KEY environment "
    "variable, the ?apiKey= query parameter or an 'Authorization: Bearer' header."
)

_AUTH_STATUSES = frozenset({401, 403})


def _looks_like_auth_issue(text: str) -> bool:
    """Best-effort detection for credential problems in API error bodies."""
    if not text:
        return False
    lower = text.lower()

    keywords = [
        "api key",
        "apikey",
        "invalid key",
        "missing key",
        "unauthorized",
        "unauthenticated",
        "forbidden",
        "access denied",
        "invalid token",
    ]

    return any(k in lower for k in keywords)


def augment_with_auth_tip(message: str, status_code: int | None = None) -> str:
    """Append an API-key tip to the message when it points at a credential problem."""
    if not message:
        return message
    if _AUTH_TIP.strip() in message:
        return message
    if status_code in _AUTH_STATUSES or _looks_like_auth_issue(message):
        return message.rstrip() + _AUTH_TIP
    return message


__all__ = ["augment_with_auth_tip"]
