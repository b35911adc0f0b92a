from __future__ import annotations

from .library import HANDLERS as LIBRARY_HANDLERS
from .renders import HANDLERS as RENDER_HANDLERS
from .templates import HANDLERS as TEMPLATE_HANDLERS

ALL_HANDLERS = {**RENDER_HANDLERS, **TEMPLATE_HANDLERS, **LIBRARY_HANDLERS}

__all__ = ["ALL_HANDLERS"]
