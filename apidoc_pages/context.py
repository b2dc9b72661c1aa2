"""Per-page render state.

A :class:`RenderContext` is created for each page render and passed to every
writer call. It owns the page's anchor registry, the one-time section flags,
and the unresolved references seen so far; nothing in it is shared between
pages, so pages can be rendered by parallel workers.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import re
import typing as typ

from apidoc_pages.anchors import AnchorMode, AnchorRegistry, anchor_candidate
from apidoc_pages.errors import UnresolvedReferenceWarning
from apidoc_pages.labels import Labels
from apidoc_pages.markup.content import ContentNode, Text, code, composite, link
from apidoc_pages.model.index import SymbolIndex, page_path
from apidoc_pages.signatures import SignatureFormatter

if typ.TYPE_CHECKING:
    from apidoc_pages.config import RenderConfig
    from apidoc_pages.model.symbols import Symbol, SymbolKind, TypeDoc

SENTENCE_END = re.compile(r"^(.+?[.!?])(?:\s|$)", re.DOTALL)

CommentRenderer = typ.Callable[[str, "RenderContext"], ContentNode]


def plain_comment(text: str, ctx: RenderContext) -> ContentNode:  # noqa: ARG001
    """Render a doc comment as literal text."""
    return Text(text)


def first_sentence(text: str) -> str:
    """Return the first sentence of ``text`` with whitespace collapsed.

    Examples
    --------
    >>> first_sentence("Returns the size.  Never negative.")
    'Returns the size.'
    """
    collapsed = " ".join(text.split())
    match = SENTENCE_END.match(collapsed)
    return match.group(1) if match else collapsed


class SectionState(enum.Enum):
    """Progress of one member group through a page render."""

    NOT_STARTED = "not_started"
    SUMMARY_EMITTED = "summary_emitted"
    DETAILS_EMITTED = "details_emitted"


@dc.dataclass(slots=True)
class PageSection:
    """One-time markers for a member group, created lazily per page."""

    kind: SymbolKind
    summary_emitted: bool = False
    details_emitted: bool = False

    @property
    def state(self) -> SectionState:
        if self.details_emitted:
            return SectionState.DETAILS_EMITTED
        if self.summary_emitted:
            return SectionState.SUMMARY_EMITTED
        return SectionState.NOT_STARTED


class RenderContext:
    """State and services for rendering one type page.

    Parameters
    ----------
    page : TypeDoc
        The type being rendered.
    config : RenderConfig
        Render options.
    labels : Labels
        Label lookup.
    index : SymbolIndex
        Cross-reference lookup over the documented types.
    comment_renderer : callable, optional
        Turns doc comment text into a content node; defaults to literal text.
    """

    def __init__(
        self,
        page: TypeDoc,
        *,
        config: RenderConfig,
        labels: Labels,
        index: SymbolIndex,
        comment_renderer: CommentRenderer | None = None,
    ) -> None:
        self.page = page
        self.config = config
        self.labels = labels
        self.index = index
        self.page_path = page_path(page.symbol)
        mode = AnchorMode.STRICT if config.strict_anchors else AnchorMode.PERMISSIVE
        self.anchors = AnchorRegistry(mode)
        self.signatures = SignatureFormatter(
            config, labels, index, self.page_path, self.report
        )
        self.sections: dict[SymbolKind, PageSection] = {}
        self.warnings: list[UnresolvedReferenceWarning] = []
        self._reported: set[str] = set()
        self._member_anchors: dict[int, tuple[Symbol, str]] = {}
        self._comment_renderer = comment_renderer or plain_comment

    def section(self, kind: SymbolKind) -> PageSection:
        """Return the page section for ``kind``, creating it on first use."""
        if kind not in self.sections:
            self.sections[kind] = PageSection(kind)
        return self.sections[kind]

    def report(self, reference: str) -> None:
        """Record an unresolved reference once per page."""
        if reference in self._reported:
            return
        self._reported.add(reference)
        self.warnings.append(UnresolvedReferenceWarning(reference, self.page_path))

    def member_anchor(self, symbol: Symbol, mode: AnchorMode | None = None) -> str:
        """Return the anchor of a declared member, registering it on first use.

        The summary row link and the detail section of a member share the
        identifier returned here.
        """
        cached = self._member_anchors.get(id(symbol))
        if cached is not None:
            return cached[1]
        actual = self.anchors.register(anchor_candidate(symbol), mode=mode)
        self._member_anchors[id(symbol)] = (symbol, actual)
        return actual

    def ordered(self, symbols: typ.Iterable[Symbol]) -> list[Symbol]:
        """Return ``symbols`` in the configured canonical order."""
        if self.config.member_order == "name":
            return sorted(
                symbols, key=lambda s: (s.name.lower(), s.name, anchor_candidate(s))
            )
        return list(symbols)

    def render_comment(self, text: str) -> ContentNode:
        """Render doc comment ``text`` with the configured comment renderer."""
        return self._comment_renderer(text, self)

    def reference_link(self, reference: str, label: str | None = None) -> ContentNode:
        """Return a code-styled link for ``reference`` or plain code text."""
        target = self.index.resolve(reference)
        text = label or reference.replace("#", ".")
        if target is None:
            self.report(reference)
            return code(text)
        return link(target.href_from(self.page_path), code(text), title=target.title)

    def type_reference(self, qualified_name: str) -> ContentNode:
        """Return a link to a documented type, or its (qualified) name."""
        target = self.index.resolve(qualified_name)
        if target is None:
            self.report(qualified_name)
            return composite(self.signatures.qualify(qualified_name))
        return link(
            target.href_from(self.page_path),
            self.signatures.qualify(qualified_name),
            title=target.title,
        )


__all__ = [
    "CommentRenderer",
    "PageSection",
    "RenderContext",
    "SectionState",
    "first_sentence",
    "plain_comment",
]
