from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from jsonschema import Draft202012Validator
from loguru import logger

from .client import TemplatedClient
from .exceptions import InvalidArgumentsError, TemplatedError, UnknownToolError
from .handlers import ALL_HANDLERS
from .schema import Error, Scope, ToolCallResult, ToolDefinition
from .scope import ScopedSession
from .shard import constants as C
from .shard.instructions import SCOPED_TOOL_DESCRIPTIONS, TOOL_DESCRIPTIONS
from .shard.tool_schemas import TOOL_SCHEMAS


def build_registry(
    schemas: Mapping[str, Mapping[str, Any]] = TOOL_SCHEMAS,
    handlers: Mapping[str, Callable[..., Any]] = ALL_HANDLERS,
    descriptions: Mapping[str, str] = TOOL_DESCRIPTIONS,
) -> dict[str, ToolDefinition]:
    """Join the declarative schema table with its handlers, keyed by tool name."""
    missing = set(schemas) ^ set(handlers)
    if missing:
        raise ValueError(f"Tool schemas and handlers do not match: {sorted(missing)}")

    return {
        name: ToolDefinition(
            name=name,
            description=descriptions[name],
            annotations=dict(entry["annotations"]),
            input_schema=entry["input_schema"],
            handler=handlers[name],
        )
        for name, entry in schemas.items()
    }


TOOL_REGISTRY: dict[str, ToolDefinition] = build_registry()

_UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


def is_visible(name: str, scope: Scope) -> bool:
    """Whether tool ``name`` exists for callers under ``scope``."""
    return not (scope.folder_id and name in C.FOLDER_MANAGEMENT_TOOLS)


def scoped_tools(registry: Mapping[str, ToolDefinition], scope: Scope) -> list[ToolDefinition]:
    """Tools visible under ``scope``, relabeled to describe the active scope.

    Folder management is hidden while a folder scope is active. The registry
    itself is left untouched.
    """
    if not scope.is_scoped:
        return list(registry.values())

    visible: list[ToolDefinition] = []
    for name, definition in registry.items():
        if not is_visible(name, scope):
            continue
        template = SCOPED_TOOL_DESCRIPTIONS.get(name)
        if template:
            definition = definition.model_copy(update={"description": template.format(scope=scope.label)})
        visible.append(definition)
    return visible


class ToolDispatcher:
    """Looks up, validates and runs tools against the Templated API.

    ``call`` never raises: every failure becomes an ``isError`` result so one
    failing call cannot take down the server or its sibling calls.
    """

    def __init__(self, client: TemplatedClient, registry: Mapping[str, ToolDefinition] | None = None) -> None:
        self.client = client
        self.registry = dict(registry if registry is not None else TOOL_REGISTRY)
        self._validators = {name: Draft202012Validator(d.input_schema) for name, d in self.registry.items()}

    def list_tools(self, scope: Scope) -> list[ToolDefinition]:
        return scoped_tools(self.registry, scope)

    def _validate(self, name: str, arguments: Mapping[str, Any]) -> None:
        error = next(iter(self._validators[name].iter_errors(dict(arguments))), None)
        if error is not None:
            location = ".".join(str(p) for p in error.absolute_path)
            reason = f"{location}: {error.message}" if location else error.message
            raise InvalidArgumentsError(name, reason)

    async def call(self, name: str, arguments: Mapping[str, Any] | None, scope: Scope) -> ToolCallResult:
        arguments = arguments or {}
        try:
            definition = self.registry.get(name)
            if definition is None or not is_visible(name, scope):
                raise UnknownToolError(name)
            self._validate(name, arguments)
            result = await definition.handler(ScopedSession(self.client, scope), arguments)
        except TemplatedError as e:
            logger.warning(f"Tool '{name}' failed ({e.code}): {e}")
            return ToolCallResult.failure(e.to_error())
        except Exception as e:
            logger.exception(f"Unexpected error in tool '{name}': {type(e).__name__}: {e}")
            return ToolCallResult.failure(Error(code=C.ERROR_CODE_UNEXPECTED, message=_UNEXPECTED_ERROR_MESSAGE))

        return ToolCallResult.success(result)


__all__ = ["TOOL_REGISTRY", "ToolDispatcher", "build_registry", "is_visible", "scoped_tools"]
