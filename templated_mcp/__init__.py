"""
Templated MCP Server

Exposes the Templated rendering API (images, videos and PDFs) as MCP tools,
built on FastMCP with folder and external-id scoping.
"""

__version__ = "0.1.0"

try:
    import importlib.metadata

    __version__ = importlib.metadata.version("templated-mcp")
except (importlib.metadata.PackageNotFoundError, ImportError):
    # Fallback for development mode
    pass

__all__ = ["__version__"]
