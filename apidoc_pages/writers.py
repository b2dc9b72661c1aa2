"""Per-kind member writers.

Every symbol kind is rendered through the same set of operations: summary
header, summary table shape, summary row, details header, detail section,
and inherited summary. Rather than a class hierarchy, each kind gets one
:class:`MemberWriter` record whose operations are the shared functions below
bound to that kind's :class:`KindProfile`; :func:`writer_for` selects the
record by ``symbol.kind``.

All page-level state (one-time headings, anchors) lives on the
:class:`~apidoc_pages.context.RenderContext` passed to each call, so a
writer record is shared freely across pages.

Ordering per page and kind is ``summary_header`` → ``summary_row`` ... →
``details_header`` → ``detail_section`` ...; anything else raises
:class:`~apidoc_pages.errors.OrderingViolationError`.
"""

from __future__ import annotations

import dataclasses as dc
import functools
import typing as typ

from apidoc_pages._constants import MARKERS, NBSP, SECTION_ANCHORS
from apidoc_pages.anchors import AnchorMode
from apidoc_pages.context import SectionState, first_sentence
from apidoc_pages.errors import OrderingViolationError, UnsupportedKindError
from apidoc_pages.markup.content import (
    Comment,
    Composite,
    ContentNode,
    HtmlStyle,
    HtmlTag,
    Tagged,
    anchor,
    code,
    composite,
    div,
    heading,
    link,
    section,
    span,
    tagged,
)
from apidoc_pages.model.symbols import Symbol, SymbolKind, TypeRef
from apidoc_pages.signatures import TYPE_KEYWORDS
from apidoc_pages.table import TableSpec

if typ.TYPE_CHECKING:
    from apidoc_pages.context import RenderContext
    from apidoc_pages.model.symbols import Tag, TypeDoc

SUMMARY_MODIFIERS = ("static", "abstract", "default")
TAG_GROUPS: tuple[tuple[str, str], ...] = (
    ("param", "parameters"),
    ("return", "returns"),
    ("throws", "throws_tag"),
    ("since", "since"),
    ("see", "see_also"),
    ("author", "author"),
)


@dc.dataclass(frozen=True, slots=True)
class KindProfile:
    """Static description of how one symbol kind is laid out on a page.

    Attributes
    ----------
    key : str
        Short name used for section anchors and marker comments.
    kind : SymbolKind
        The symbol kind this profile renders.
    plural_label, column_label : str
        Label keys for the table caption and the name column header.
    summary_label, details_label : str
        Label keys for the group headings; ``details_label`` is ``None`` for
        kinds without detail sections.
    summary_style, details_style : HtmlStyle
        Style classes of the wrapping summary and details sections.
    columns : tuple[str, ...]
        Which :class:`SummaryRow` cell fills each column, left to right.
    column_styles : tuple[HtmlStyle, ...]
        Style class per column.
    row_scope_column : int
        Column whose cells are row headers.
    anchor_mode : AnchorMode, optional
        Registry policy for member anchors; ``None`` uses the page default.
    inherits : bool
        Whether inherited members of this kind get an inherited summary.
    """

    key: str
    kind: SymbolKind
    plural_label: str
    column_label: str
    summary_label: str
    details_label: str | None
    summary_style: HtmlStyle
    details_style: HtmlStyle | None
    columns: tuple[str, ...]
    column_styles: tuple[HtmlStyle, ...]
    row_scope_column: int
    anchor_mode: AnchorMode | None = None
    inherits: bool = True


@dc.dataclass(slots=True)
class SummaryRow:
    """Cells of one summary table row.

    ``name`` holds the linked member name (plus parameters for executables),
    ``type`` the summary modifiers and type, ``description`` the first
    sentence or deprecation note.
    """

    name: ContentNode
    type: ContentNode
    description: ContentNode
    inherited: bool = False

    def cells(self, columns: typ.Sequence[str]) -> list[ContentNode]:
        """Return the cells for ``columns`` in order."""
        return [getattr(self, column) for column in columns]


@dc.dataclass(frozen=True, slots=True)
class MemberWriter:
    """The operation record for one symbol kind.

    ``details_header`` and ``detail_section`` are ``None`` for kinds whose
    members are documented on their own pages (nested types);
    ``inherited_summary`` is ``None`` for kinds that are never inherited.
    """

    profile: KindProfile
    summary_header: typ.Callable[[RenderContext, TypeDoc], ContentNode]
    summary_table_spec: typ.Callable[[RenderContext], TableSpec]
    summary_row: typ.Callable[[RenderContext, Symbol], SummaryRow]
    details_header: typ.Callable[[RenderContext, TypeDoc], ContentNode] | None
    detail_section: typ.Callable[[RenderContext, Symbol], ContentNode] | None
    inherited_summary: typ.Callable[[RenderContext, TypeDoc], ContentNode] | None

    @property
    def kind(self) -> SymbolKind:
        return self.profile.kind

    @property
    def has_details(self) -> bool:
        return self.detail_section is not None


_THREE_COLUMNS = (HtmlStyle.COL_FIRST, HtmlStyle.COL_SECOND, HtmlStyle.COL_LAST)

PROFILES: tuple[KindProfile, ...] = (
    KindProfile(
        key="field",
        kind=SymbolKind.FIELD,
        plural_label="fields",
        column_label="field",
        summary_label="field_summary",
        details_label="field_details",
        summary_style=HtmlStyle.FIELD_SUMMARY,
        details_style=HtmlStyle.FIELD_DETAILS,
        columns=("type", "name", "description"),
        column_styles=_THREE_COLUMNS,
        row_scope_column=1,
    ),
    KindProfile(
        key="constructor",
        kind=SymbolKind.CONSTRUCTOR,
        plural_label="constructors",
        column_label="constructor",
        summary_label="constructor_summary",
        details_label="constructor_details",
        summary_style=HtmlStyle.CONSTRUCTOR_SUMMARY,
        details_style=HtmlStyle.CONSTRUCTOR_DETAILS,
        columns=("name", "description"),
        column_styles=(HtmlStyle.COL_CONSTRUCTOR_NAME, HtmlStyle.COL_LAST),
        row_scope_column=0,
        anchor_mode=AnchorMode.PERMISSIVE,
        inherits=False,
    ),
    KindProfile(
        key="method",
        kind=SymbolKind.METHOD,
        plural_label="methods",
        column_label="method",
        summary_label="method_summary",
        details_label="method_details",
        summary_style=HtmlStyle.METHOD_SUMMARY,
        details_style=HtmlStyle.METHOD_DETAILS,
        columns=("type", "name", "description"),
        column_styles=_THREE_COLUMNS,
        row_scope_column=1,
        anchor_mode=AnchorMode.PERMISSIVE,
    ),
    KindProfile(
        key="nested",
        kind=SymbolKind.TYPE,
        plural_label="nested_classes",
        column_label="nested_class",
        summary_label="nested_class_summary",
        details_label=None,
        summary_style=HtmlStyle.NESTED_CLASS_SUMMARY,
        details_style=None,
        columns=("type", "name", "description"),
        column_styles=_THREE_COLUMNS,
        row_scope_column=1,
    ),
    KindProfile(
        key="element",
        kind=SymbolKind.ANNOTATION_ELEMENT,
        plural_label="elements",
        column_label="element",
        summary_label="element_summary",
        details_label="element_details",
        summary_style=HtmlStyle.ELEMENT_SUMMARY,
        details_style=HtmlStyle.ELEMENT_DETAILS,
        columns=("type", "name", "description"),
        column_styles=_THREE_COLUMNS,
        row_scope_column=1,
        inherits=False,
    ),
)


def _require_kind(profile: KindProfile, symbol: Symbol) -> None:
    if symbol.kind is not profile.kind:
        msg = (
            f"The {profile.key} writer cannot render {symbol.kind.value} "
            f"'{symbol.name}'."
        )
        raise UnsupportedKindError(msg)


def _summary_header(
    profile: KindProfile, ctx: RenderContext, type_doc: TypeDoc  # noqa: ARG001
) -> ContentNode:
    """Begin the summary block; the marker and heading are emitted once."""
    page_section = ctx.section(profile.kind)
    if page_section.state is SectionState.DETAILS_EMITTED:
        msg = f"{profile.key} summary requested after its details were emitted."
        raise OrderingViolationError(msg)
    if page_section.summary_emitted:
        return Composite()
    page_section.summary_emitted = True
    return composite(
        Comment(MARKERS[profile.key].summary),
        anchor(ctx.anchors.register(SECTION_ANCHORS[profile.key].summary)),
        heading(HtmlTag.H2, ctx.labels.label(profile.summary_label)),
    )


def _summary_table_spec(profile: KindProfile, ctx: RenderContext) -> TableSpec:
    header_labels = {
        "type": ctx.labels.label("modifier_and_type"),
        "name": ctx.labels.label(profile.column_label),
        "description": ctx.labels.label("description"),
    }
    return TableSpec(
        caption=ctx.labels.label(profile.plural_label),
        headers=tuple(header_labels[column] for column in profile.columns),
        column_styles=profile.column_styles,
        row_scope_column=profile.row_scope_column,
    )


def _summary_row(profile: KindProfile, ctx: RenderContext, symbol: Symbol) -> SummaryRow:
    """Return the summary table cells for ``symbol``."""
    _require_kind(profile, symbol)
    if ctx.section(profile.kind).state is SectionState.NOT_STARTED:
        msg = f"{profile.key} summary row requested before its summary header."
        raise OrderingViolationError(msg)
    if symbol.inherited:
        return _inherited_row(ctx, symbol)

    if symbol.kind is SymbolKind.TYPE:
        name_cell = code(
            span(
                HtmlStyle.TYPE_NAME_LINK,
                ctx.signatures.type_link(TypeRef(symbol.qualified_name)),
            )
        )
    else:
        anchor_id = ctx.member_anchor(symbol, profile.anchor_mode)
        name_cell = code(
            span(HtmlStyle.MEMBER_NAME_LINK, link(f"#{anchor_id}", symbol.name))
        )
        if symbol.is_executable:
            name_cell.add(ctx.signatures.parameters(symbol))
    return SummaryRow(
        name=name_cell,
        type=_summary_type(ctx, symbol),
        description=_summary_description(ctx, symbol),
    )


def _inherited_row(ctx: RenderContext, symbol: Symbol) -> SummaryRow:
    """Return a row that links to the declaring type instead of a signature."""
    declaring = ctx.type_reference(symbol.enclosing_type or "")
    return SummaryRow(
        name=code(span(HtmlStyle.MEMBER_NAME_LINK, _member_link(ctx, symbol))),
        type=_summary_type(ctx, symbol),
        description=div(
            HtmlStyle.BLOCK, f"{ctx.labels.label('inherited_row')} ", declaring
        ),
        inherited=True,
    )


def _member_link(ctx: RenderContext, member: Symbol) -> ContentNode:
    """Link an inherited member to its declaring page, or report the miss."""
    target = ctx.index.resolve_member(member)
    if target is None:
        if member.enclosing_type:
            ctx.report(ctx.index.member_reference(member))
        return composite(member.name)
    return link(target.href_from(ctx.page_path), member.name, title=target.title)


def _summary_type(ctx: RenderContext, symbol: Symbol) -> Tagged:
    modifiers = [m for m in symbol.modifiers if m in SUMMARY_MODIFIERS]
    cell = code()
    if symbol.kind is SymbolKind.TYPE:
        modifiers.append(TYPE_KEYWORDS.get(symbol.type_kind, symbol.type_kind))
        cell.add(" ".join(modifiers))
        return cell
    if modifiers:
        cell.add(" ".join(modifiers), NBSP)
    if symbol.type is not None:
        cell.add(ctx.signatures.type_link(symbol.type))
    return cell


def _summary_description(ctx: RenderContext, symbol: Symbol) -> ContentNode:
    if symbol.deprecated:
        block = div(
            HtmlStyle.BLOCK,
            span(HtmlStyle.DEPRECATED_LABEL, ctx.labels.label("deprecated")),
        )
        if symbol.deprecation_text:
            block.add(" ", ctx.render_comment(first_sentence(symbol.deprecation_text)))
        return block
    if symbol.doc_comment:
        return div(
            HtmlStyle.BLOCK, ctx.render_comment(first_sentence(symbol.doc_comment))
        )
    return Composite()


def _details_header(
    profile: KindProfile, ctx: RenderContext, type_doc: TypeDoc  # noqa: ARG001
) -> ContentNode:
    """Begin the details block; the heading is emitted once per page."""
    page_section = ctx.section(profile.kind)
    if page_section.state is SectionState.NOT_STARTED:
        msg = f"{profile.key} details requested before its summary header."
        raise OrderingViolationError(msg)
    if page_section.details_emitted:
        return Composite()
    page_section.details_emitted = True
    details = SECTION_ANCHORS[profile.key].detail
    marker = MARKERS[profile.key].detail
    return composite(
        Comment(marker) if marker else None,
        anchor(ctx.anchors.register(details)) if details else None,
        heading(HtmlTag.H2, ctx.labels.label(profile.details_label or "")),
    )


def _detail_section(profile: KindProfile, ctx: RenderContext, symbol: Symbol) -> Tagged:
    """Return the full block for one declared member.

    Children are, in order: anchor, heading, signature, deprecation, doc
    comment body, tags. The last three are present only when the symbol
    carries them.
    """
    _require_kind(profile, symbol)
    if ctx.section(profile.kind).state is not SectionState.DETAILS_EMITTED:
        msg = f"{profile.key} detail section requested before its details header."
        raise OrderingViolationError(msg)
    if symbol.inherited:
        msg = f"Inherited member '{symbol.name}' has no detail section on this page."
        raise ValueError(msg)
    anchor_id = ctx.member_anchor(symbol, profile.anchor_mode)
    return section(
        HtmlStyle.DETAIL,
        anchor(anchor_id),
        heading(HtmlTag.H3, symbol.name),
        ctx.signatures.format(symbol),
        deprecation_fragment(ctx, symbol),
        comment_fragment(ctx, symbol),
        tags_fragment(ctx, symbol),
    )


def _inherited_summary(
    profile: KindProfile, ctx: RenderContext, type_doc: TypeDoc
) -> ContentNode:
    """List inherited members as links, one line per declaring type."""
    groups: dict[str, list[Symbol]] = {}
    for member in ctx.ordered(type_doc.members_of(profile.kind, inherited=True)):
        groups.setdefault(member.enclosing_type or "", []).append(member)

    block = Composite()
    plural = ctx.labels.label(profile.plural_label)
    for declaring, members in groups.items():
        target = ctx.index.resolve(declaring)
        type_kind = target.kind if target else "class"
        title = heading(
            HtmlTag.H3,
            ctx.labels.label("inherited_from", kind=plural, type_kind=type_kind),
            " ",
            ctx.type_reference(declaring),
        )
        names = code()
        for idx, member in enumerate(members):
            if idx:
                names.add(", ")
            names.add(_member_link(ctx, member))
        block.add(div(HtmlStyle.INHERITED_LIST, title, names))
    return block


def deprecation_fragment(ctx: RenderContext, symbol: Symbol) -> Tagged | None:
    """Return the deprecation block, or ``None`` for non-deprecated symbols."""
    if not symbol.deprecated:
        return None
    block = div(
        HtmlStyle.DEPRECATION_BLOCK,
        span(HtmlStyle.DEPRECATED_LABEL, ctx.labels.label("deprecated")),
    )
    if symbol.deprecation_text:
        block.add(
            div(HtmlStyle.DEPRECATION_COMMENT, ctx.render_comment(symbol.deprecation_text))
        )
    return block


def comment_fragment(ctx: RenderContext, symbol: Symbol) -> Tagged | None:
    """Return the rendered doc comment body, or ``None`` when there is none."""
    if not symbol.doc_comment.strip():
        return None
    return div(HtmlStyle.BLOCK, ctx.render_comment(symbol.doc_comment))


def tags_fragment(ctx: RenderContext, symbol: Symbol) -> Tagged | None:
    """Return the ``dl.notes`` block for the symbol's tags, if any."""
    notes = tagged(HtmlTag.DL, styles=(HtmlStyle.NOTES,))
    for kind, label_key in TAG_GROUPS:
        tags = symbol.tags_of(kind)
        if not tags:
            continue
        notes.add(tagged(HtmlTag.DT, ctx.labels.label(label_key)))
        for tag in tags:
            notes.add(tagged(HtmlTag.DD, _tag_content(ctx, tag)))
    return notes if notes.children else None


def _tag_content(ctx: RenderContext, tag: Tag) -> ContentNode:
    match tag.kind:
        case "param":
            name, _, rest = tag.text.strip().partition(" ")
            return composite(code(name), f" - {rest.strip()}" if rest.strip() else None)
        case "throws":
            reference = tag.target or tag.text.strip().partition(" ")[0]
            rest = tag.text if tag.target else tag.text.strip().partition(" ")[2]
            label = reference.rsplit(".", 1)[-1]
            return composite(
                ctx.reference_link(reference, label),
                f" - {rest.strip()}" if rest.strip() else None,
            )
        case "see" if tag.target:
            return ctx.reference_link(tag.target, tag.text or None)
        case _:
            return composite(tag.text)


def _make_writer(profile: KindProfile) -> MemberWriter:
    has_details = profile.details_label is not None
    return MemberWriter(
        profile=profile,
        summary_header=functools.partial(_summary_header, profile),
        summary_table_spec=functools.partial(_summary_table_spec, profile),
        summary_row=functools.partial(_summary_row, profile),
        details_header=functools.partial(_details_header, profile) if has_details else None,
        detail_section=functools.partial(_detail_section, profile) if has_details else None,
        inherited_summary=(
            functools.partial(_inherited_summary, profile) if profile.inherits else None
        ),
    )


WRITERS: dict[SymbolKind, MemberWriter] = {
    profile.kind: _make_writer(profile) for profile in PROFILES
}


def writer_for(kind: SymbolKind) -> MemberWriter:
    """Return the writer record for ``kind``.

    Raises
    ------
    UnsupportedKindError
        If no writer handles ``kind``.
    """
    try:
        return WRITERS[kind]
    except KeyError:
        msg = f"No member writer for symbol kind {kind!r}."
        raise UnsupportedKindError(msg) from None


__all__ = [
    "PROFILES",
    "WRITERS",
    "KindProfile",
    "MemberWriter",
    "SummaryRow",
    "comment_fragment",
    "deprecation_fragment",
    "tags_fragment",
    "writer_for",
]
