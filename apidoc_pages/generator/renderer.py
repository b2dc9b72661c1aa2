"""Render doc comment Markdown with syntax-highlighted code blocks."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from apidoc_pages.generator.link_rewriter import SymbolLinkExtension
from apidoc_pages.markup.content import ContentNode, RawMarkup

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

    from apidoc_pages.context import RenderContext

MARKDOWN_EXTENSIONS = ("fenced_code", "codehilite", "tables", "sane_lists")
FENCE_LANGUAGE = re.compile(r"^```([\w+#.-]+)?[^\n]*$", re.MULTILINE)
FENCE_INDENT = re.compile(r"^ {1,3}(?=```|~~~)", re.MULTILINE)
HIGHLIGHT_BLOCK = '<div class="codehilite">'
SINGLE_PARAGRAPH = re.compile(r"^<p>(?P<body>(?:(?!</?p>).)*)</p>$", re.DOTALL)


def fence_languages(text: str) -> list[str]:
    """Return the language of each opening code fence in ``text``.

    Fences alternate open/close, so only every other match opens a block.

    Examples
    --------
    >>> fence_languages("```java\\nint x;\\n```\\n\\n```\\nplain\\n```")
    ['java', 'text']
    """
    return [
        match.group(1) or "text" for match in list(FENCE_LANGUAGE.finditer(text))[::2]
    ]


def label_code_blocks(html: str, languages: typ.Sequence[str]) -> str:
    """Add a ``data-language`` attribute to each highlighted block in order."""
    pieces = html.split(HIGHLIGHT_BLOCK)
    if len(pieces) == 1:
        return html
    out = [pieces[0]]
    for idx, rest in enumerate(pieces[1:]):
        lang = languages[idx] if idx < len(languages) else "text"
        out.append(f'<div class="codehilite" data-language="{escape(lang, quote=True)}">')
        out.append(rest)
    return "".join(out)


class MarkdownCommentRenderer:
    """Turn doc comment text into markup for a page's content tree.

    Instances are callable with ``(text, ctx)`` and so plug straight into
    :class:`~apidoc_pages.composer.PageComposer` as its comment renderer.
    Symbol links in the comment (``[label](pkg.Type#member)``) are resolved
    against the render context's index and made relative to its page.

    Parameters
    ----------
    pygments_style : str, optional
        Pygments style for highlighted code and for :attr:`stylesheet`.
    """

    def __init__(self, pygments_style: str = "default") -> None:
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        self._extension_configs = {
            "codehilite": {
                "css_class": "codehilite",
                "guess_lang": False,
                "linenums": False,
                "pygments_style": pygments_style,
            }
        }

    @property
    def stylesheet(self) -> str:
        """Return the CSS rules for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def __call__(self, text: str, ctx: RenderContext) -> ContentNode:
        return RawMarkup(self.markdown(text, SymbolLinkExtension(ctx)))

    def markdown(self, text: str, link_extension: Extension | None = None) -> str:
        """Return ``text`` rendered as HTML.

        A comment that renders to a single paragraph is unwrapped, so short
        comments sit inline in their enclosing block. A fresh converter is
        built per call; converters are stateful and pages may render on
        several threads.
        """
        source = FENCE_INDENT.sub("", text)
        if not source.strip():
            return ""
        extensions: list[Extension | str] = list(MARKDOWN_EXTENSIONS)
        if link_extension is not None:
            extensions.append(link_extension)
        converter = Markdown(
            extensions=extensions, extension_configs=self._extension_configs
        )
        html = label_code_blocks(converter.convert(source), fence_languages(source))
        single = SINGLE_PARAGRAPH.match(html.strip())
        return single.group("body") if single else html


__all__ = ["MarkdownCommentRenderer", "fence_languages", "label_code_blocks"]
