"""Serializer-agnostic content tree used to assemble pages.

Every fragment the writers produce is a tree of these nodes. Serialization is
a pure function of the tree (see :mod:`apidoc_pages.markup.serializer`), so
two trees that compare equal always produce the same bytes.

Examples
--------
>>> node = span(HtmlStyle.MEMBER_NAME, "count")
>>> node.tag, node.styles, node.children
(<HtmlTag.SPAN: 'span'>, (<HtmlStyle.MEMBER_NAME: 'memberName'>,), [Text(text='count')])
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ


class HtmlTag(enum.StrEnum):
    """Tag styles a :class:`Tagged` node can carry."""

    A = "a"
    CAPTION = "caption"
    CODE = "code"
    DD = "dd"
    DIV = "div"
    DL = "dl"
    DT = "dt"
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    LI = "li"
    PRE = "pre"
    SECTION = "section"
    SPAN = "span"
    TABLE = "table"
    TBODY = "tbody"
    TD = "td"
    TH = "th"
    THEAD = "thead"
    TR = "tr"
    UL = "ul"


class HtmlStyle(enum.StrEnum):
    """Style classes shared by every member kind."""

    ALT_COLOR = "altColor"
    BLOCK = "block"
    COL_CONSTRUCTOR_NAME = "colConstructorName"
    COL_FIRST = "colFirst"
    COL_LAST = "colLast"
    COL_SECOND = "colSecond"
    CONSTRUCTOR_DETAILS = "constructorDetails"
    CONSTRUCTOR_SUMMARY = "constructorSummary"
    CONTENT_CONTAINER = "contentContainer"
    DEFAULT_VALUE = "defaultValue"
    DEPRECATED_LABEL = "deprecatedLabel"
    DEPRECATION_BLOCK = "deprecationBlock"
    DEPRECATION_COMMENT = "deprecationComment"
    DETAIL = "detail"
    DETAILS = "details"
    ELEMENT_DETAILS = "elementDetails"
    ELEMENT_SUMMARY = "elementSummary"
    EXCEPTIONS = "exceptions"
    FIELD_DETAILS = "fieldDetails"
    FIELD_SUMMARY = "fieldSummary"
    HEADER = "header"
    INHERITED_LIST = "inheritedList"
    MEMBER_NAME = "memberName"
    MEMBER_NAME_LINK = "memberNameLink"
    MEMBER_SIGNATURE = "memberSignature"
    MEMBER_SUMMARY = "memberSummary"
    METHOD_DETAILS = "methodDetails"
    METHOD_SUMMARY = "methodSummary"
    MODIFIERS = "modifiers"
    NESTED_CLASS_SUMMARY = "nestedClassSummary"
    NOTES = "notes"
    PACKAGE_LABEL = "packageLabelInType"
    PARAMETERS = "parameters"
    RETURN_TYPE = "returnType"
    ROW_COLOR = "rowColor"
    SUB_TITLE = "subTitle"
    SUMMARY = "summary"
    TABLE_TAB = "tableTab"
    TITLE = "title"
    TYPE_NAME_LINK = "typeNameLink"
    TYPE_SIGNATURE = "typeSignature"


@dc.dataclass(slots=True)
class Text:
    """Literal text; escaped on serialization."""

    text: str


@dc.dataclass(slots=True)
class Comment:
    """A markup comment, used for the one-time section marker comments."""

    text: str


@dc.dataclass(slots=True)
class RawMarkup:
    """Markup rendered elsewhere (doc comment bodies) and emitted verbatim."""

    markup: str


@dc.dataclass(slots=True)
class Tagged:
    """A container wrapped in a tag, with style classes and attributes."""

    tag: HtmlTag
    children: list[ContentNode] = dc.field(default_factory=list)
    styles: tuple[HtmlStyle, ...] = ()
    attrs: dict[str, str] = dc.field(default_factory=dict)

    def add(self, *nodes: ContentNode | str | None) -> Tagged:
        """Append ``nodes`` (strings become :class:`Text`; ``None`` is skipped)."""
        _extend(self.children, nodes)
        return self


@dc.dataclass(slots=True)
class Composite:
    """An ordered group of nodes with no wrapping tag."""

    children: list[ContentNode] = dc.field(default_factory=list)

    def add(self, *nodes: ContentNode | str | None) -> Composite:
        """Append ``nodes`` (strings become :class:`Text`; ``None`` is skipped)."""
        _extend(self.children, nodes)
        return self


ContentNode: typ.TypeAlias = Text | Comment | RawMarkup | Tagged | Composite


def _extend(
    children: list[ContentNode], nodes: typ.Iterable[ContentNode | str | None]
) -> None:
    for node in nodes:
        if node is None:
            continue
        children.append(Text(node) if isinstance(node, str) else node)


def is_empty(node: ContentNode | None) -> bool:
    """Return True when ``node`` would serialize to nothing visible.

    Composites are empty when all their children are; tagged nodes never are,
    since the tag itself is output.
    """
    match node:
        case None:
            return True
        case Text(text=text):
            return not text
        case RawMarkup(markup=markup):
            return not markup.strip()
        case Composite(children=children):
            return all(is_empty(child) for child in children)
        case _:
            return False


def iter_tree(node: ContentNode) -> typ.Iterator[ContentNode]:
    """Yield ``node`` and all of its descendants in document order."""
    yield node
    if isinstance(node, Tagged | Composite):
        for child in node.children:
            yield from iter_tree(child)


def text_of(node: ContentNode) -> str:
    """Return the concatenated literal text below ``node``."""
    return "".join(n.text for n in iter_tree(node) if isinstance(n, Text))


def tagged(
    tag: HtmlTag,
    *children: ContentNode | str | None,
    styles: typ.Iterable[HtmlStyle] = (),
    **attrs: str,
) -> Tagged:
    """Build a :class:`Tagged` node in one call."""
    return Tagged(tag=tag, styles=tuple(styles), attrs=dict(attrs)).add(*children)


def composite(*children: ContentNode | str | None) -> Composite:
    return Composite().add(*children)


def span(style: HtmlStyle, *children: ContentNode | str | None) -> Tagged:
    return tagged(HtmlTag.SPAN, *children, styles=(style,))


def div(style: HtmlStyle, *children: ContentNode | str | None) -> Tagged:
    return tagged(HtmlTag.DIV, *children, styles=(style,))


def section(style: HtmlStyle, *children: ContentNode | str | None) -> Tagged:
    return tagged(HtmlTag.SECTION, *children, styles=(style,))


def code(*children: ContentNode | str | None) -> Tagged:
    return tagged(HtmlTag.CODE, *children)


def heading(tag: HtmlTag, *children: ContentNode | str | None) -> Tagged:
    return tagged(tag, *children)


def anchor(anchor_id: str) -> Tagged:
    """Return an empty named anchor for ``anchor_id``."""
    return tagged(HtmlTag.A, id=anchor_id)


def link(
    href: str, *children: ContentNode | str | None, title: str | None = None
) -> Tagged:
    """Return a hyperlink; ``title`` is omitted from the attributes when unset."""
    attrs = {"href": href}
    if title:
        attrs["title"] = title
    return tagged(HtmlTag.A, *children, **attrs)


__all__ = [
    "Comment",
    "Composite",
    "ContentNode",
    "HtmlStyle",
    "HtmlTag",
    "RawMarkup",
    "Tagged",
    "Text",
    "anchor",
    "code",
    "composite",
    "div",
    "heading",
    "is_empty",
    "iter_tree",
    "link",
    "section",
    "span",
    "tagged",
    "text_of",
]
