"""Summary tables shared by every member kind.

A :class:`TableSpec` fixes the table shape for one kind; :class:`TableBuilder`
turns a spec and a list of rows into a single table node. Suppressing the
table for an empty group is the caller's job: ``build`` with no rows still
returns a caption and header.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from apidoc_pages.markup.content import (
    ContentNode,
    HtmlStyle,
    HtmlTag,
    Tagged,
    span,
    tagged,
)


@dc.dataclass(frozen=True, slots=True)
class TableSpec:
    """Static shape of a summary table.

    Attributes
    ----------
    caption : str
        Caption text shown above the table.
    headers : tuple[str, ...]
        Column labels, left to right.
    column_styles : tuple[HtmlStyle, ...]
        Style class applied to the header and body cell of each column.
    row_scope_column : int
        Index of the column whose body cells are row headers.
    table_style : HtmlStyle
        Style class of the table element.
    """

    caption: str
    headers: tuple[str, ...]
    column_styles: tuple[HtmlStyle, ...]
    row_scope_column: int
    table_style: HtmlStyle = HtmlStyle.MEMBER_SUMMARY

    def __post_init__(self) -> None:
        if len(self.headers) != len(self.column_styles):
            msg = "A table needs exactly one style per header column."
            raise ValueError(msg)
        if not 0 <= self.row_scope_column < len(self.headers):
            msg = f"Row scope column {self.row_scope_column} is out of range."
            raise ValueError(msg)

    @property
    def column_count(self) -> int:
        return len(self.headers)


class TableBuilder:
    """Assemble caption, header row, and body rows into one table node."""

    def build(
        self, spec: TableSpec, rows: typ.Sequence[typ.Sequence[ContentNode]]
    ) -> Tagged:
        """Return the table for ``rows``.

        Parameters
        ----------
        spec : TableSpec
            Table shape.
        rows : sequence of sequences of ContentNode
            One cell per column for each row, in column order.

        Raises
        ------
        ValueError
            If a row does not have one cell per column.
        """
        table = tagged(HtmlTag.TABLE, styles=(spec.table_style,))
        table.add(tagged(HtmlTag.CAPTION, span(HtmlStyle.TABLE_TAB, spec.caption)))
        table.add(tagged(HtmlTag.THEAD, self._header_row(spec)))
        body = tagged(HtmlTag.TBODY)
        for idx, cells in enumerate(rows):
            body.add(self._body_row(spec, cells, idx))
        table.add(body)
        return table

    @staticmethod
    def _header_row(spec: TableSpec) -> Tagged:
        row = tagged(HtmlTag.TR)
        for label, style in zip(spec.headers, spec.column_styles, strict=True):
            row.add(tagged(HtmlTag.TH, label, styles=(style,), scope="col"))
        return row

    @staticmethod
    def _body_row(spec: TableSpec, cells: typ.Sequence[ContentNode], idx: int) -> Tagged:
        if len(cells) != spec.column_count:
            msg = f"Expected {spec.column_count} cells per row, got {len(cells)}."
            raise ValueError(msg)
        stripe = HtmlStyle.ALT_COLOR if idx % 2 == 0 else HtmlStyle.ROW_COLOR
        row = tagged(HtmlTag.TR, styles=(stripe,))
        for column, (cell, style) in enumerate(
            zip(cells, spec.column_styles, strict=True)
        ):
            if column == spec.row_scope_column:
                row.add(tagged(HtmlTag.TH, cell, styles=(style,), scope="row"))
            else:
                row.add(tagged(HtmlTag.TD, cell, styles=(style,)))
        return row


__all__ = ["TableBuilder", "TableSpec"]
