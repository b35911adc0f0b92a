from __future__ import annotations

from enum import StrEnum


class HttpMethod(StrEnum):
    """HTTP verbs used against the Templated API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        return self in (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)


class RenderFormat(StrEnum):
    """Output formats accepted by the render endpoint."""

    JPG = "jpg"
    PNG = "png"
    WEBP = "webp"
    PDF = "pdf"
    MP4 = "mp4"


class LayerType(StrEnum):
    """Layer kinds accepted when creating or updating a template.

    Rectangles and circles are ``SHAPE`` layers carrying SVG in ``html``.
    """

    TEXT = "text"
    IMAGE = "image"
    SHAPE = "shape"
    RATING = "rating"


class HorizontalAlign(StrEnum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlign(StrEnum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class ObjectFit(StrEnum):
    COVER = "cover"
    CONTAIN = "contain"
    FILL = "fill"


class EntranceAnimation(StrEnum):
    SLIDE = "slide"
    FADE = "fade"
    ZOOM = "zoom"
    ROTATE = "rotate"


class LoopAnimation(StrEnum):
    SPIN = "spin"
    PULSE = "pulse"


class ExitAnimation(StrEnum):
    SLIDE = "slide"
    FADE = "fade"
    ZOOM = "zoom"


class AnimationDirection(StrEnum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    IN = "in"
    OUT = "out"


class WritingStyle(StrEnum):
    """Granularity of text entrance animations."""

    BLOCK = "block"
    WORD = "word"
    CHARACTER = "character"


class TransportMode(StrEnum):
    """Transport the server was started with."""

    STDIO = "stdio"
    STREAMABLE_HTTP = "streamable-http"


def enum_values(enum_cls: type[StrEnum]) -> list[str]:
    """Return the string values of an enum, for use in JSON schemas."""
    return [member.value for member in enum_cls]


__all__ = [
    "HttpMethod",
    "RenderFormat",
    "LayerType",
    "HorizontalAlign",
    "VerticalAlign",
    "ObjectFit",
    "EntranceAnimation",
    "LoopAnimation",
    "ExitAnimation",
    "AnimationDirection",
    "WritingStyle",
    "TransportMode",
    "enum_values",
]
