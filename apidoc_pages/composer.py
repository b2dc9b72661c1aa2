"""Assemble member writer fragments into one page tree.

The composer walks the kinds in a fixed order (fields, constructors,
methods, nested types, annotation elements), emits every non-empty summary
block, then every detail block. A kind with no members contributes nothing
at all.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from apidoc_pages.context import RenderContext
from apidoc_pages.errors import UnsupportedKindError
from apidoc_pages.markup.content import (
    ContentNode,
    HtmlStyle,
    HtmlTag,
    Tagged,
    composite,
    div,
    section,
    span,
    tagged,
)
from apidoc_pages.model.symbols import SymbolKind
from apidoc_pages.table import TableBuilder
from apidoc_pages.writers import (
    MemberWriter,
    comment_fragment,
    deprecation_fragment,
    tags_fragment,
    writer_for,
)

if typ.TYPE_CHECKING:
    from apidoc_pages.config import RenderConfig
    from apidoc_pages.context import CommentRenderer
    from apidoc_pages.errors import UnresolvedReferenceWarning
    from apidoc_pages.labels import Labels
    from apidoc_pages.model.index import SymbolIndex
    from apidoc_pages.model.symbols import Symbol, TypeDoc

KIND_ORDER: tuple[SymbolKind, ...] = (
    SymbolKind.FIELD,
    SymbolKind.CONSTRUCTOR,
    SymbolKind.METHOD,
    SymbolKind.TYPE,
    SymbolKind.ANNOTATION_ELEMENT,
)


@dc.dataclass(slots=True)
class RenderedPage:
    """A composed page and what the render recorded about it.

    Attributes
    ----------
    type_doc : TypeDoc
        The page subject.
    path : str
        Site-relative output path of the page.
    tree : ContentNode
        The composed content tree.
    anchors : list[str]
        Identifiers registered on the page, in registration order.
    warnings : list[UnresolvedReferenceWarning]
        References that did not resolve, one per distinct reference.
    """

    type_doc: TypeDoc
    path: str
    tree: ContentNode
    anchors: list[str]
    warnings: list[UnresolvedReferenceWarning]


class PageComposer:
    """Compose type pages from the per-kind writers.

    Parameters
    ----------
    config : RenderConfig
        Render options shared by every page.
    labels : Labels
        Label lookup.
    index : SymbolIndex
        Cross-reference lookup over the documented types.
    comment_renderer : callable, optional
        Doc comment renderer handed to each page's render context.

    Examples
    --------
    >>> from apidoc_pages.config import RenderConfig
    >>> from apidoc_pages.labels import Labels
    >>> from apidoc_pages.model.index import SymbolIndex
    >>> from apidoc_pages.model.symbols import Symbol, SymbolKind, TypeDoc
    >>> page = TypeDoc(Symbol(SymbolKind.TYPE, "Empty", package="demo"))
    >>> composer = PageComposer(RenderConfig(), Labels(), SymbolIndex())
    >>> composer.compose_page(page).path
    'demo/Empty.html'
    """

    def __init__(
        self,
        config: RenderConfig,
        labels: Labels,
        index: SymbolIndex,
        comment_renderer: CommentRenderer | None = None,
    ) -> None:
        self.config = config
        self.labels = labels
        self.index = index
        self.comment_renderer = comment_renderer
        self._tables = TableBuilder()

    def new_context(self, type_doc: TypeDoc) -> RenderContext:
        """Return a fresh render context for one page."""
        return RenderContext(
            type_doc,
            config=self.config,
            labels=self.labels,
            index=self.index,
            comment_renderer=self.comment_renderer,
        )

    def compose(
        self,
        type_doc: TypeDoc,
        writers: typ.Sequence[MemberWriter] | None = None,
    ) -> ContentNode:
        """Return the content tree for ``type_doc``.

        Raises
        ------
        DuplicateAnchorError
            If two elements resolve to the same anchor in strict mode.
        UnsupportedKindError
            If a member kind has no writer.
        """
        return self._compose(self.new_context(type_doc), type_doc, writers)

    def compose_page(
        self,
        type_doc: TypeDoc,
        writers: typ.Sequence[MemberWriter] | None = None,
    ) -> RenderedPage:
        """Compose ``type_doc`` and return the tree with its anchors and warnings."""
        ctx = self.new_context(type_doc)
        tree = self._compose(ctx, type_doc, writers)
        return RenderedPage(
            type_doc=type_doc,
            path=ctx.page_path,
            tree=tree,
            anchors=ctx.anchors.registered,
            warnings=list(ctx.warnings),
        )

    def _compose(
        self,
        ctx: RenderContext,
        type_doc: TypeDoc,
        writers: typ.Sequence[MemberWriter] | None,
    ) -> ContentNode:
        ordered = self._ordered_writers(type_doc, writers)

        header = self._header(ctx, type_doc)
        summary = section(HtmlStyle.SUMMARY)
        for writer in ordered:
            block = self._summary_block(ctx, type_doc, writer)
            summary.add(block)

        details = section(HtmlStyle.DETAILS)
        for writer in ordered:
            block = self._details_block(ctx, type_doc, writer)
            details.add(block)

        return composite(
            header,
            div(
                HtmlStyle.CONTENT_CONTAINER,
                summary if summary.children else None,
                details if details.children else None,
            ),
        )

    @staticmethod
    def _ordered_writers(
        type_doc: TypeDoc, writers: typ.Sequence[MemberWriter] | None
    ) -> list[MemberWriter]:
        by_kind = {writer.kind: writer for writer in writers or ()}
        if writers is None:
            by_kind = {kind: writer_for(kind) for kind in KIND_ORDER}
        for member in type_doc.members:
            if member.kind not in by_kind:
                msg = (
                    f"No member writer for {member.kind.value} '{member.name}' "
                    f"on {type_doc.qualified_name}."
                )
                raise UnsupportedKindError(msg)
        return [by_kind[kind] for kind in KIND_ORDER if kind in by_kind]

    def _members(
        self, ctx: RenderContext, type_doc: TypeDoc, kind: SymbolKind
    ) -> tuple[list[Symbol], list[Symbol]]:
        declared = ctx.ordered(type_doc.members_of(kind, inherited=False))
        inherited = ctx.ordered(type_doc.members_of(kind, inherited=True))
        return declared, inherited

    def _summary_block(
        self, ctx: RenderContext, type_doc: TypeDoc, writer: MemberWriter
    ) -> Tagged | None:
        declared, inherited = self._members(ctx, type_doc, writer.kind)
        if not declared and not inherited:
            return None
        block = section(
            writer.profile.summary_style, writer.summary_header(ctx, type_doc)
        )
        rows = [
            writer.summary_row(ctx, member).cells(writer.profile.columns)
            for member in [*declared, *inherited]
        ]
        block.add(self._tables.build(writer.summary_table_spec(ctx), rows))
        if inherited and writer.inherited_summary is not None:
            block.add(writer.inherited_summary(ctx, type_doc))
        return block

    def _details_block(
        self, ctx: RenderContext, type_doc: TypeDoc, writer: MemberWriter
    ) -> Tagged | None:
        if writer.details_header is None or writer.detail_section is None:
            return None
        declared, _inherited = self._members(ctx, type_doc, writer.kind)
        if not declared:
            return None
        style = writer.profile.details_style or HtmlStyle.DETAILS
        block = section(style, writer.details_header(ctx, type_doc))
        for member in declared:
            block.add(writer.detail_section(ctx, member))
        return block

    def _header(self, ctx: RenderContext, type_doc: TypeDoc) -> Tagged:
        """Return the page header: package line, title, and type description."""
        symbol = type_doc.symbol
        header = div(HtmlStyle.HEADER)
        if type_doc.package:
            header.add(
                div(
                    HtmlStyle.SUB_TITLE,
                    span(HtmlStyle.PACKAGE_LABEL, ctx.labels.label("package")),
                    f" {type_doc.package}",
                )
            )
        kind_label = (
            ctx.labels.label(symbol.type_kind)
            if symbol.type_kind in ctx.labels
            else symbol.type_kind.capitalize()
        )
        header.add(
            tagged(HtmlTag.H1, f"{kind_label} {symbol.name}", styles=(HtmlStyle.TITLE,)),
            ctx.signatures.format(symbol),
            deprecation_fragment(ctx, symbol),
            comment_fragment(ctx, symbol),
            tags_fragment(ctx, symbol),
        )
        return header


__all__ = ["KIND_ORDER", "PageComposer", "RenderedPage"]
