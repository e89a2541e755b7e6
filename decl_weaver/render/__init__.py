"""Rendering declaration trees into RBI or RBS text.

@public
"""

from .dialect import Dialect
from .options import RenderOptions
from .rbi import RbiDialect
from .rbs import RbsDialect
from .renderer import DIALECTS, Renderer, get_dialect, render

__all__ = [
    "DIALECTS",
    "Dialect",
    "RbiDialect",
    "RbsDialect",
    "RenderOptions",
    "Renderer",
    "get_dialect",
    "render",
]
