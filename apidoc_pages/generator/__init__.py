"""Turn composed type pages into HTML files on disk."""

from .link_rewriter import SymbolLinkExtension
from .models import PageModel
from .page_generator import ApiPageGenerator
from .renderer import MarkdownCommentRenderer

__all__ = [
    "ApiPageGenerator",
    "MarkdownCommentRenderer",
    "PageModel",
    "SymbolLinkExtension",
]
