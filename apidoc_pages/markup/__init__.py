"""Content tree nodes and their HTML serializer."""

from .content import (
    Comment,
    Composite,
    ContentNode,
    HtmlStyle,
    HtmlTag,
    RawMarkup,
    Tagged,
    Text,
)
from .serializer import serialize

__all__ = [
    "Comment",
    "Composite",
    "ContentNode",
    "HtmlStyle",
    "HtmlTag",
    "RawMarkup",
    "Tagged",
    "Text",
    "serialize",
]
