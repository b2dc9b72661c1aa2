"""Render symbol declarations as content fragments.

:class:`SignatureFormatter` is exhaustive over the fixed symbol kind set:
constructors omit the return type, methods add parameters and a ``throws``
clause, fields show their declared type, and annotation elements add their
default value. Type names that resolve through the
:class:`~apidoc_pages.model.index.SymbolIndex` become links; anything else is
plain qualified text and is reported as unresolved.
"""

from __future__ import annotations

import re
import typing as typ

from apidoc_pages._constants import NBSP, SOURCE_DIR
from apidoc_pages.errors import UnsupportedKindError
from apidoc_pages.markup.content import (
    Composite,
    ContentNode,
    HtmlStyle,
    Tagged,
    composite,
    div,
    link,
    span,
)
from apidoc_pages.model.index import relative_href
from apidoc_pages.model.symbols import Symbol, SymbolKind, TypeRef

if typ.TYPE_CHECKING:
    from apidoc_pages.config import RenderConfig
    from apidoc_pages.labels import Labels
    from apidoc_pages.model.index import SymbolIndex

WILDCARD_PATTERN = re.compile(r"^\?\s+(extends|super)\s+(.+)$")
TYPE_KEYWORDS = {"annotation": "@interface"}

ReportFn = typ.Callable[[str], None]


def source_path(qualified_type: str) -> str:
    """Return the ``src-html`` page holding the source of ``qualified_type``.

    Nested types share the source file of their top-level type.

    Examples
    --------
    >>> source_path("linksource.Outer.Inner")
    'src-html/linksource/Outer.html'
    """
    parts = qualified_type.split(".")
    for idx, part in enumerate(parts):
        if part[:1].isupper():
            package, top = parts[:idx], part
            break
    else:
        package, top = parts[:-1], parts[-1]
    return "/".join([SOURCE_DIR, *package, f"{top}.html"])


class SignatureFormatter:
    """Build ``memberSignature`` blocks and type references for one page.

    Parameters
    ----------
    config : RenderConfig
        Supplies the *link source* and *no qualifier* options.
    labels : Labels
        Label lookup for the ``throws`` and ``default`` keywords.
    index : SymbolIndex
        Cross-reference lookup for type names.
    page_path : str
        Site-relative path of the page being rendered; links are relative to it.
    report : callable
        Called with each reference that does not resolve.
    """

    def __init__(
        self,
        config: RenderConfig,
        labels: Labels,
        index: SymbolIndex,
        page_path: str,
        report: ReportFn,
    ) -> None:
        self.config = config
        self.labels = labels
        self.index = index
        self.page_path = page_path
        self._report = report

    def format(self, symbol: Symbol) -> Tagged:
        """Return the declaration of ``symbol`` as a ``memberSignature`` block.

        Raises
        ------
        UnsupportedKindError
            If ``symbol.kind`` has no signature rule.
        """
        signature = div(HtmlStyle.MEMBER_SIGNATURE)
        self._add_modifiers(signature, symbol)
        match symbol.kind:
            case SymbolKind.CONSTRUCTOR:
                self._add_name(signature, symbol)
                self._add_parameters(signature, symbol)
                self._add_throws(signature, symbol)
            case SymbolKind.METHOD:
                self._add_type(signature, symbol)
                self._add_name(signature, symbol)
                self._add_parameters(signature, symbol)
                self._add_throws(signature, symbol)
            case SymbolKind.FIELD:
                self._add_type(signature, symbol)
                self._add_name(signature, symbol)
            case SymbolKind.ANNOTATION_ELEMENT:
                self._add_type(signature, symbol)
                self._add_name(signature, symbol)
                self._add_default(signature, symbol)
            case SymbolKind.TYPE:
                signature.styles = (HtmlStyle.TYPE_SIGNATURE,)
                keyword = TYPE_KEYWORDS.get(symbol.type_kind, symbol.type_kind)
                signature.add(f"{keyword}{NBSP}")
                self._add_name(signature, symbol)
                if symbol.type is not None:
                    signature.add(
                        f"\n{self.labels.label('extends')} ",
                        self.type_link(symbol.type),
                    )
            case _:
                msg = f"No signature rule for symbol kind {symbol.kind!r}."
                raise UnsupportedKindError(msg)
        return signature

    def type_link(self, ref: TypeRef) -> Composite:
        """Render ``ref`` with links for every documented type it mentions."""
        if ref.is_primitive:
            return composite(ref.qualified_name, ref.dimensions() or None)
        content = composite(self._type_name(ref.qualified_name))
        if ref.arguments:
            content.add("<")
            for idx, argument in enumerate(ref.arguments):
                if idx:
                    content.add(", ")
                content.add(self.type_link(argument))
            content.add(">")
        content.add(ref.dimensions() or None)
        return content

    def parameters(self, symbol: Symbol) -> Composite:
        """Return ``(Type name, ...)`` for an executable symbol."""
        content = composite("(")
        for idx, param in enumerate(symbol.parameters):
            if idx:
                content.add(", ")
            content.add(self.type_link(param.type), f"{NBSP}{param.name}")
        content.add(")")
        return content

    def qualify(self, qualified_name: str) -> str:
        """Return ``qualified_name`` shortened per the *no qualifier* option."""
        package, _, simple = qualified_name.rpartition(".")
        if package and self.config.drops_qualifier(package):
            return simple
        return qualified_name

    def _type_name(self, name: str) -> ContentNode:
        wildcard = WILDCARD_PATTERN.match(name)
        if wildcard:
            return composite(f"? {wildcard.group(1)} ", self._type_name(wildcard.group(2)))
        target = self.index.resolve(name)
        if target is not None:
            return link(
                target.href_from(self.page_path), target.label, title=target.title
            )
        if "." in name:
            self._report(name)
            return composite(self.qualify(name))
        # Type variables and the bare wildcard.
        return composite(name)

    def _add_modifiers(self, signature: Tagged, symbol: Symbol) -> None:
        if symbol.modifiers:
            signature.add(
                span(HtmlStyle.MODIFIERS, " ".join(symbol.modifiers)), NBSP
            )

    def _add_type(self, signature: Tagged, symbol: Symbol) -> None:
        if symbol.type is not None:
            signature.add(span(HtmlStyle.RETURN_TYPE, self.type_link(symbol.type)), NBSP)

    def _add_name(self, signature: Tagged, symbol: Symbol) -> None:
        href = self._source_href(symbol)
        name: ContentNode | str = link(href, symbol.name) if href else symbol.name
        signature.add(span(HtmlStyle.MEMBER_NAME, name))

    def _add_parameters(self, signature: Tagged, symbol: Symbol) -> None:
        signature.add(span(HtmlStyle.PARAMETERS, self.parameters(symbol)))

    def _add_throws(self, signature: Tagged, symbol: Symbol) -> None:
        if not symbol.throws:
            return
        exceptions = composite()
        for idx, ref in enumerate(symbol.throws):
            if idx:
                exceptions.add(",\n")
            exceptions.add(self.type_link(ref))
        signature.add(
            f"\n{self.labels.label('throws')} ",
            span(HtmlStyle.EXCEPTIONS, exceptions),
        )

    def _add_default(self, signature: Tagged, symbol: Symbol) -> None:
        if symbol.default_value is None:
            return
        signature.add(
            f" {self.labels.label('default')} ",
            span(HtmlStyle.DEFAULT_VALUE, symbol.default_value),
        )

    def _source_href(self, symbol: Symbol) -> str | None:
        """Return the source line link for ``symbol`` when link source is on."""
        if not self.config.link_source or symbol.source_line is None:
            return None
        owner = (
            symbol.qualified_name
            if symbol.kind is SymbolKind.TYPE
            else symbol.enclosing_type
        )
        if not owner:
            return None
        return relative_href(
            self.page_path, source_path(owner), f"line.{symbol.source_line}"
        )


__all__ = ["SignatureFormatter", "source_path"]
