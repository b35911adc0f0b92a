"""Declarative input schemas and annotation hints for every Templated tool.

Each entry of ``TOOL_SCHEMAS`` maps a tool name to its MCP annotations and the
JSON schema of its arguments. Handlers are attached in ``dispatcher``.
"""

from __future__ import annotations

from typing import Any

from .enums import (
    AnimationDirection,
    EntranceAnimation,
    ExitAnimation,
    HorizontalAlign,
    LayerType,
    LoopAnimation,
    ObjectFit,
    RenderFormat,
    VerticalAlign,
    WritingStyle,
    enum_values,
)

# ------------------------------ Annotation hints ----------------------------- #

READ_ONLY: dict[str, bool] = {"readOnlyHint": True, "destructiveHint": False, "openWorldHint": True}
CREATES: dict[str, bool] = {"readOnlyHint": False, "destructiveHint": False, "openWorldHint": True}
DESTRUCTIVE: dict[str, bool] = {"readOnlyHint": False, "destructiveHint": True, "openWorldHint": True}

# ------------------------------ Shared fragments ----------------------------- #


def _object(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def _id(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def _paging(page_description: str = "Page number", limit_description: str = "Results per page") -> dict[str, Any]:
    return {
        "page": {"type": "number", "description": page_description},
        "limit": {"type": "number", "description": limit_description},
    }


_ANIMATION_FULL: dict[str, Any] = {
    "type": "object",
    "description": (
        "Animation config for video (MP4) renders. All time values are in milliseconds. "
        "Contains 'in' (entrance), 'loop', 'out' (exit), 'start' and 'end' timeline."
    ),
    "properties": {
        "in": {
            "type": "object",
            "description": "Entrance animation",
            "properties": {
                "type": {"type": "string", "enum": enum_values(EntranceAnimation), "description": "Animation type"},
                "direction": {"type": "string", "enum": enum_values(AnimationDirection), "description": "Direction"},
                "duration": {"type": "integer", "description": "Duration in milliseconds"},
                "writingStyle": {"type": "string", "enum": enum_values(WritingStyle), "description": "Text animation style"},
            },
        },
        "loop": {
            "type": "object",
            "description": "Looping animation",
            "properties": {
                "type": {"type": "string", "enum": enum_values(LoopAnimation), "description": "Animation type"},
                "duration": {"type": "integer", "description": "Duration in milliseconds per cycle"},
            },
        },
        "out": {
            "type": "object",
            "description": "Exit animation",
            "properties": {
                "type": {"type": "string", "enum": enum_values(ExitAnimation), "description": "Animation type"},
                "direction": {"type": "string", "enum": enum_values(AnimationDirection), "description": "Direction"},
                "duration": {"type": "integer", "description": "Duration in milliseconds"},
            },
        },
        "start": {"type": "integer", "description": "Time in milliseconds when layer becomes visible (default: 0)"},
        "end": {"type": "integer", "description": "Time in milliseconds when layer disappears (default: video duration)"},
    },
}

_ANIMATION_COMPACT: dict[str, Any] = {
    "type": "object",
    "description": "Animation config for video (MP4) renders. All time values in milliseconds.",
    "properties": {
        "in": {
            "type": "object",
            "properties": {
                "type": {"type": "string"},
                "direction": {"type": "string"},
                "duration": {"type": "integer"},
                "writingStyle": {"type": "string"},
            },
        },
        "loop": {"type": "object", "properties": {"type": {"type": "string"}, "duration": {"type": "integer"}}},
        "out": {
            "type": "object",
            "properties": {"type": {"type": "string"}, "direction": {"type": "string"}, "duration": {"type": "integer"}},
        },
        "start": {"type": "integer", "description": "When layer appears (ms)"},
        "end": {"type": "integer", "description": "When layer disappears (ms)"},
    },
}

_CREATE_LAYER: dict[str, Any] = _object(
    {
        "layer": {
            "type": "string",
            "description": "REQUIRED: Unique layer identifier/name (e.g., 'title', 'background', 'photo'). This is NOT 'name', use 'layer'!",
        },
        "type": {
            "type": "string",
            "enum": enum_values(LayerType),
            "description": "REQUIRED: Layer type. Use 'shape' for rectangles/circles (NOT 'rectangle'). Shapes need 'html' with SVG content.",
        },
        "x": {"type": "number", "description": "X position in pixels"},
        "y": {"type": "number", "description": "Y position in pixels"},
        "width": {"type": "number", "description": "Width in pixels"},
        "height": {"type": "number", "description": "Height in pixels"},
        "rotation": {"type": "number", "description": "Rotation in degrees"},
        # text
        "text": {"type": "string", "description": "Text content (for text layers)"},
        "color": {"type": "string", "description": "Text color (e.g., '#000000', 'rgba(0,0,0,1)')"},
        "font_family": {"type": "string", "description": "Font family (e.g., 'Inter', 'Arial')"},
        "font_size": {"type": "string", "description": "Font size with unit (e.g., '24px', '2em')"},
        "font_weight": {"type": "string", "description": "Font weight (e.g., 'normal', 'bold', '600')"},
        "letter_spacing": {"type": "string", "description": "Letter spacing (e.g., '1px', '0.05em')"},
        "line_height": {"type": "string", "description": "Line height (e.g., '1.4', '24px')"},
        "horizontal_align": {"type": "string", "enum": enum_values(HorizontalAlign), "description": "Horizontal text alignment"},
        "vertical_align": {"type": "string", "enum": enum_values(VerticalAlign), "description": "Vertical text alignment"},
        # image
        "image_url": {"type": "string", "description": "Image URL (for image layers)"},
        "object_fit": {"type": "string", "enum": enum_values(ObjectFit), "description": "How image fits in container"},
        # shape
        "html": {
            "type": "string",
            "description": "SVG content for shape layers. Example: '<rect width=\"100%\" height=\"100%\" fill=\"#ff0000\"/>'",
        },
        "fill": {"type": "string", "description": "SVG fill color"},
        "stroke": {"type": "string", "description": "SVG stroke color"},
        # common styling
        "background": {"type": "string", "description": "Background color/gradient (for shapes use this OR html with SVG)"},
        "border_width": {"type": "number", "description": "Border width in pixels"},
        "border_color": {"type": "string", "description": "Border color"},
        "border_radius": {"type": "string", "description": "Border radius (e.g., '8px', '50%')"},
        "opacity": {"type": "number", "description": "Opacity from 0 to 1"},
        "hide": {"type": "boolean", "description": "Whether layer is hidden"},
        "order": {"type": "number", "description": "Layer stacking order (lower = behind)"},
        "animation": _ANIMATION_FULL,
    },
    required=["layer", "type"],
)

_UPDATE_LAYER: dict[str, Any] = _object(
    {
        "layer": {"type": "string", "description": "REQUIRED: Unique layer identifier (NOT 'name')"},
        "type": {"type": "string", "enum": enum_values(LayerType), "description": "Layer type"},
        "x": {"type": "number"},
        "y": {"type": "number"},
        "width": {"type": "number"},
        "height": {"type": "number"},
        "text": {"type": "string"},
        "color": {"type": "string"},
        "font_family": {"type": "string"},
        "font_size": {"type": "string"},
        "image_url": {"type": "string"},
        "background": {"type": "string"},
        "html": {"type": "string", "description": "SVG content for shape layers"},
        "animation": _ANIMATION_COMPACT,
    },
    required=["layer", "type"],
)

_RENDER_LAYERS_DESCRIPTION = (
    "Layer modifications. Keys are layer names, values are objects with properties like: text, image_url, color, "
    "background, hide, animation, etc. The 'animation' property (MP4 only) is an object with: 'in' (entrance: "
    "type=slide|fade|zoom|rotate, direction, duration, writingStyle), 'loop' (type=spin|pulse, duration), 'out' "
    "(exit: type=slide|fade|zoom, direction, duration), 'start' (ms when layer appears), 'end' (ms when layer "
    "disappears). All animation durations are in milliseconds."
)

# --------------------------------- Tool table -------------------------------- #

TOOL_SCHEMAS: dict[str, dict[str, Any]] = {
    # Renders
    "create_render": {
        "annotations": CREATES,
        "input_schema": _object(
            {
                "template": _id("The template ID to render"),
                "format": {"type": "string", "enum": enum_values(RenderFormat), "description": "Output format. Default: jpg"},
                "layers": {
                    "type": "object",
                    "description": _RENDER_LAYERS_DESCRIPTION,
                    "additionalProperties": {"type": "object"},
                },
                "transparent": {"type": "boolean", "description": "Make background transparent (PNG only)"},
                "duration": {"type": "number", "description": "Video duration in milliseconds (MP4 only, max 90000)"},
                "fps": {"type": "number", "description": "Frames per second (MP4 only, 1-60)"},
                "flatten": {"type": "boolean", "description": "Flatten PDF for print-ready documents"},
                "cmyk": {"type": "boolean", "description": "Use CMYK color mode (PDF only)"},
                "width": {"type": "number", "description": "Custom width in pixels (100-5000)"},
                "height": {"type": "number", "description": "Custom height in pixels (100-5000)"},
                "scale": {"type": "number", "description": "Scale factor (0.1-2.0)"},
                "name": {"type": "string", "description": "Custom name for the render"},
                "background": {"type": "string", "description": "Background color in hex format (e.g., #FF0000)"},
            },
            required=["template"],
        ),
    },
    "get_render": {
        "annotations": READ_ONLY,
        "input_schema": _object({"render_id": _id("The render ID")}, required=["render_id"]),
    },
    "list_renders": {
        "annotations": READ_ONLY,
        "input_schema": _object(_paging("Page number (default: 0)", "Results per page (default: 25)")),
    },
    "delete_render": {
        "annotations": DESTRUCTIVE,
        "input_schema": _object({"render_id": _id("The render ID to delete")}, required=["render_id"]),
    },
    "merge_renders": {
        "annotations": CREATES,
        "input_schema": _object(
            {
                "render_ids": {"type": "array", "items": {"type": "string"}, "description": "Array of render IDs to merge"},
                "host": {"type": "boolean", "description": "If true, returns a hosted URL. If false, returns the file directly"},
            },
            required=["render_ids"],
        ),
    },
    # Templates
    "list_templates": {
        "annotations": READ_ONLY,
        "input_schema": _object(
            {
                "query": {"type": "string", "description": "Search query to filter templates by name"},
                **_paging("Page number (default: 0)", "Results per page (default: 25)"),
                "width": {"type": "number", "description": "Filter by template width"},
                "height": {"type": "number", "description": "Filter by template height"},
                "tags": {"type": "string", "description": "Filter by tags (comma-separated)"},
                "includeLayers": {"type": "boolean", "description": "Include layer information in response"},
            }
        ),
    },
    "get_template": {
        "annotations": READ_ONLY,
        "input_schema": _object({"template_id": _id("The template ID")}, required=["template_id"]),
    },
    "get_template_layers": {
        "annotations": READ_ONLY,
        "input_schema": _object({"template_id": _id("The template ID")}, required=["template_id"]),
    },
    "get_template_pages": {
        "annotations": READ_ONLY,
        "input_schema": _object({"template_id": _id("The template ID")}, required=["template_id"]),
    },
    "create_template": {
        "annotations": CREATES,
        "input_schema": _object(
            {
                "name": {"type": "string", "description": "Template name"},
                "width": {"type": "number", "description": "Template width in pixels"},
                "height": {"type": "number", "description": "Template height in pixels"},
                "background": {
                    "type": "string",
                    "description": "Template background color (e.g., '#ffffff', 'rgb(255,255,255)', 'transparent')",
                },
                "duration": {
                    "type": "number",
                    "description": (
                        "Default video duration in milliseconds for MP4 renders (e.g., 5000 for 5 seconds). "
                        "Used as fallback when no duration is specified at render time."
                    ),
                },
                "layers": {
                    "type": "array",
                    "description": "Array of layer objects. Each layer MUST have 'layer' (unique name) and 'type' fields.",
                    "items": _CREATE_LAYER,
                },
            },
            required=["name", "width", "height"],
        ),
    },
    "update_template": {
        "annotations": DESTRUCTIVE,
        "input_schema": _object(
            {
                "template_id": _id("The template ID to update"),
                "name": {"type": "string", "description": "New template name"},
                "description": {"type": "string", "description": "New template description"},
                "width": {"type": "number", "description": "New width in pixels"},
                "height": {"type": "number", "description": "New height in pixels"},
                "background": {"type": "string", "description": "Template background color"},
                "duration": {
                    "type": "number",
                    "description": "Default video duration in milliseconds for MP4 renders (e.g., 5000 for 5 seconds)",
                },
                "layers": {
                    "type": "array",
                    "description": "Layer definitions. Each must have 'layer' (unique name) and 'type' (text/image/shape/rating).",
                    "items": _UPDATE_LAYER,
                },
                "replaceLayers": {
                    "type": "boolean",
                    "description": "If true, replaces all layers. If false, merges with existing",
                },
            },
            required=["template_id"],
        ),
    },
    "clone_template": {
        "annotations": CREATES,
        "input_schema": _object(
            {
                "template_id": _id("The template ID to clone"),
                "name": {"type": "string", "description": "Name for the cloned template"},
            },
            required=["template_id"],
        ),
    },
    "delete_template": {
        "annotations": DESTRUCTIVE,
        "input_schema": _object({"template_id": _id("The template ID to delete")}, required=["template_id"]),
    },
    "list_template_renders": {
        "annotations": READ_ONLY,
        "input_schema": _object({"template_id": _id("The template ID"), **_paging()}, required=["template_id"]),
    },
    # Folders
    "list_folders": {
        "annotations": READ_ONLY,
        "input_schema": _object(_paging()),
    },
    "create_folder": {
        "annotations": CREATES,
        "input_schema": _object({"name": {"type": "string", "description": "Folder name"}}, required=["name"]),
    },
    "update_folder": {
        "annotations": DESTRUCTIVE,
        "input_schema": _object(
            {"folder_id": _id("The folder ID"), "name": {"type": "string", "description": "New folder name"}},
            required=["folder_id", "name"],
        ),
    },
    "delete_folder": {
        "annotations": DESTRUCTIVE,
        "input_schema": _object({"folder_id": _id("The folder ID to delete")}, required=["folder_id"]),
    },
    # Uploads
    "list_uploads": {
        "annotations": READ_ONLY,
        "input_schema": _object(_paging()),
    },
    "create_upload": {
        "annotations": CREATES,
        "input_schema": _object(
            {
                "url": {"type": "string", "description": "URL of the file to upload"},
                "name": {"type": "string", "description": "Optional name for the upload"},
            },
            required=["url"],
        ),
    },
    "delete_upload": {
        "annotations": DESTRUCTIVE,
        "input_schema": _object({"upload_id": _id("The upload ID to delete")}, required=["upload_id"]),
    },
    # Fonts
    "list_fonts": {
        "annotations": READ_ONLY,
        "input_schema": _object(_paging()),
    },
    "upload_font": {
        "annotations": CREATES,
        "input_schema": _object(
            {
                "url": {"type": "string", "description": "URL of the font file (TTF, OTF, WOFF, WOFF2)"},
                "name": {"type": "string", "description": "Font family name"},
            },
            required=["url", "name"],
        ),
    },
    "delete_font": {
        "annotations": DESTRUCTIVE,
        "input_schema": _object({"font_id": _id("The font ID to delete")}, required=["font_id"]),
    },
    # Account
    "get_account": {
        "annotations": READ_ONLY,
        "input_schema": _object({}),
    },
}


__all__ = ["TOOL_SCHEMAS", "READ_ONLY", "CREATES", "DESTRUCTIVE"]
