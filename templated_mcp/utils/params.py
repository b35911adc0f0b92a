from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def pick(args: Mapping[str, Any], keys: Iterable[str]) -> dict[str, Any]:
    """Copy the given keys from ``args``, leaving out those absent or null.

    Optional arguments the caller omitted must not reach the API as nulls.
    """
    return {key: args[key] for key in keys if args.get(key) is not None}


def _to_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def query_params(args: Mapping[str, Any], keys: Iterable[str] = (), *, flags: Iterable[str] = ()) -> dict[str, str]:
    """Build query-string values from tool arguments.

    ``keys`` are sent whenever present (``page=0`` included); ``flags`` are
    boolean switches sent as ``"true"`` only when set.
    """
    params = {key: _to_query_value(value) for key, value in pick(args, keys).items() if value != ""}
    for flag in flags:
        if args.get(flag):
            params[flag] = "true"
    return params


def paging(args: Mapping[str, Any]) -> dict[str, str]:
    return query_params(args, ("page", "limit"))


__all__ = ["pick", "query_params", "paging"]
