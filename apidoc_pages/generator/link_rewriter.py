"""Resolve symbol references used as Markdown link targets."""

from __future__ import annotations

import re
import typing as typ

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from apidoc_pages.context import RenderContext
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any
    RenderContext = typ.Any

SYMBOL_REFERENCE = re.compile(
    r"^(?:[a-z_][\w]*\.)*[A-Z][\w]*(?:\.[A-Z][\w]*)*(?:#[\w$]+(?:\([^)]*\))?)?$"
)


class SymbolLinkExtension(Extension):
    """Rewrite ``[label](pkg.Type#member)`` links to page-relative hrefs.

    Link targets that look like a symbol reference are resolved through the
    render context's index. Documented targets become relative links;
    undocumented ones lose their ``href`` and are recorded on the context as
    unresolved. Ordinary URLs and paths are left untouched.
    """

    def __init__(self, ctx: RenderContext) -> None:
        self.ctx = ctx
        super().__init__()

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the symbol-link treeprocessor on the Markdown instance."""
        processor = SymbolLinkTreeprocessor(md, self.ctx)
        md.treeprocessors.register(processor, "apidoc_symbol_links", 15)


class SymbolLinkTreeprocessor(Treeprocessor):
    """Rewrite anchors whose target is a symbol reference."""

    def __init__(self, md: Markdown, ctx: RenderContext) -> None:
        super().__init__(md)
        self.ctx = ctx

    def run(self, root: Element) -> Element:
        """Resolve symbol-reference anchors in the parsed markdown tree."""
        for element in root.iter("a"):
            href = element.get("href")
            if not href or not SYMBOL_REFERENCE.match(href):
                continue
            rewritten = self._rewrite(href)
            if rewritten is None:
                del element.attrib["href"]
            else:
                element.set("href", rewritten)
        return root

    def _rewrite(self, reference: str) -> str | None:
        """Return the href for ``reference`` or ``None`` when it is undocumented."""
        target = self.ctx.index.resolve(reference)
        if target is None:
            self.ctx.report(reference)
            return None
        return target.href_from(self.ctx.page_path)


__all__ = ["SYMBOL_REFERENCE", "SymbolLinkExtension", "SymbolLinkTreeprocessor"]
