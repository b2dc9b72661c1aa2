"""Translate a content tree into HTML text.

The page assembly core never serializes; this module is the reference
serializer the generator (and the tests) hand finished trees to. Output is
deterministic: attributes keep insertion order, with ``class`` first, and
block-level tags are followed by a newline.

Examples
--------
>>> from apidoc_pages.markup.content import HtmlStyle, span
>>> serialize(span(HtmlStyle.MODIFIERS, "static <T>"))
'<span class="modifiers">static &lt;T&gt;</span>'
"""

from __future__ import annotations

from html import escape

from .content import Comment, Composite, ContentNode, HtmlTag, RawMarkup, Tagged, Text

BLOCK_TAGS = frozenset(
    {
        HtmlTag.CAPTION,
        HtmlTag.DD,
        HtmlTag.DIV,
        HtmlTag.DL,
        HtmlTag.DT,
        HtmlTag.H1,
        HtmlTag.H2,
        HtmlTag.H3,
        HtmlTag.LI,
        HtmlTag.SECTION,
        HtmlTag.TABLE,
        HtmlTag.TBODY,
        HtmlTag.THEAD,
        HtmlTag.TR,
        HtmlTag.UL,
    }
)


def serialize(node: ContentNode) -> str:
    """Return the HTML text for ``node``."""
    parts: list[str] = []
    _write(node, parts)
    return "".join(parts)


def _write(node: ContentNode, out: list[str]) -> None:
    match node:
        case Text(text=text):
            out.append(escape(text, quote=False))
        case Comment(text=text):
            out.append(f"<!--{text.replace('--', '- -')}-->\n")
        case RawMarkup(markup=markup):
            out.append(markup)
        case Composite(children=children):
            for child in children:
                _write(child, out)
        case Tagged():
            out.append(_open_tag(node))
            for child in node.children:
                _write(child, out)
            out.append(f"</{node.tag}>")
            if node.tag in BLOCK_TAGS:
                out.append("\n")
        case _:
            msg = f"Cannot serialize {type(node).__name__}."
            raise TypeError(msg)


def _open_tag(node: Tagged) -> str:
    attrs: list[str] = []
    if node.styles:
        classes = " ".join(str(style) for style in node.styles)
        attrs.append(f'class="{classes}"')
    attrs.extend(
        f'{name}="{escape(value, quote=True)}"' for name, value in node.attrs.items()
    )
    if not attrs:
        return f"<{node.tag}>"
    return f"<{node.tag} {' '.join(attrs)}>"


__all__ = ["BLOCK_TAGS", "serialize"]
