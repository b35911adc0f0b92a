from __future__ import annotations

# Tool descriptions advertised over MCP. Keep short and clear.
TOOL_DESCRIPTIONS: dict[str, str] = {
    # Renders
    "create_render": (
        "Create a render (image, video, or PDF) from a template. This is the main tool for generating content. "
        "Supports formats: jpg, png, webp, pdf, mp4."
    ),
    "get_render": "Retrieve a specific render by its ID to get the status and file URL",
    "list_renders": "List all renders in the account",
    "delete_render": "Delete a specific render",
    "merge_renders": "Merge multiple PDF renders into a single PDF document",
    # Templates
    "list_templates": "List all templates in the account. Use this to find template IDs for rendering.",
    "get_template": "Retrieve a specific template by ID",
    "get_template_layers": (
        "Get all layers of a template. Use this to understand what layers can be modified when creating a render."
    ),
    "get_template_pages": "Get all pages of a multi-page template",
    "create_template": (
        "Create a new template programmatically with layers. IMPORTANT: Each layer must have a 'layer' field "
        "(unique identifier/name), not 'name'. Valid layer types are: 'text', 'image', 'shape', 'rating'. "
        "Use 'shape' for rectangles, circles, and other shapes - shapes require an 'html' field with SVG content."
    ),
    "update_template": (
        "Update an existing template. IMPORTANT: Each layer must have a 'layer' field (unique identifier), "
        "not 'name'. Valid types: 'text', 'image', 'shape', 'rating'."
    ),
    "clone_template": "Create a copy of an existing template",
    "delete_template": "Delete a template",
    "list_template_renders": "List all renders created from a specific template",
    # Folders
    "list_folders": "List all folders in the account",
    "create_folder": "Create a new folder to organize templates",
    "update_folder": "Update a folder's name",
    "delete_folder": "Delete a folder",
    # Uploads
    "list_uploads": "List all uploaded assets (images, videos)",
    "create_upload": "Upload a file from a URL",
    "delete_upload": "Delete an uploaded asset",
    # Fonts
    "list_fonts": "List all custom fonts uploaded to the account",
    "upload_font": "Upload a custom font from a URL",
    "delete_font": "Delete a custom font",
    # Account
    "get_account": "Get account information including API usage and quota",
}

# Replacement descriptions for listing tools when a scope is active.
# ``{scope}`` is filled with ``Scope.label``.
SCOPED_TOOL_DESCRIPTIONS: dict[str, str] = {
    "list_templates": "List templates in {scope}. Use this to find template IDs for rendering.",
    "list_renders": "List renders in {scope}",
}


SERVER_INSTRUCTIONS: str = (
    "Templated MCP Server - Agent Instructions.\n"
    "Role: This server exposes the Templated API for rendering images, videos and PDFs from templates. "
    "It may be pinned to a folder and/or an external ID; templates outside that scope are reported as not found.\n\n"
    "Workflow (short):\n"
    "1) Call list_templates to find a template ID.\n"
    "2) Call get_template_layers to learn which layers can be changed.\n"
    "3) Call create_render with the template ID and a 'layers' object keyed by layer name.\n"
    "4) Call get_render to poll status and fetch the file URL when needed.\n\n"
    "Hard rules (must follow):\n"
    "- Layers in create_template/update_template use 'layer' as their unique name, never 'name'.\n"
    "- Shapes are 'shape' layers with SVG content in 'html'.\n"
    "- Animation settings only apply to mp4 renders; durations are milliseconds.\n\n"
    "Failures: tool errors are returned as text starting with 'Error:'. API errors include the HTTP status "
    "and the response body returned by Templated."
)


__all__ = ["TOOL_DESCRIPTIONS", "SCOPED_TOOL_DESCRIPTIONS", "SERVER_INSTRUCTIONS"]
