"""Cross-reference lookup over the documented types.

The index answers "is this name documented, and where?" and nothing else. A
miss is a normal outcome: callers degrade to plain text and record an
:class:`~apidoc_pages.errors.UnresolvedReferenceWarning`.
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
import typing as typ

from apidoc_pages.anchors import anchor_candidate

from .symbols import Symbol, SymbolKind

if typ.TYPE_CHECKING:
    from .symbols import ApiModel, TypeDoc


@dc.dataclass(frozen=True, slots=True)
class LinkTarget:
    """Where a resolved reference points.

    Attributes
    ----------
    path : str
        Site-relative page path (``pkg/Foo.html``).
    anchor : str | None
        Fragment identifier on that page, if the target is a member.
    title : str
        Tooltip text (``class in pkg``).
    label : str
        Short display text (simple type name or member name).
    kind : str
        Type kind keyword of the target page (``class``, ``interface``, ...).
    """

    path: str
    anchor: str | None
    title: str
    label: str
    kind: str = "class"

    def href_from(self, page_path: str) -> str:
        """Return the href for this target relative to ``page_path``."""
        return relative_href(page_path, self.path, self.anchor)


def page_path(type_symbol: Symbol) -> str:
    """Return the site-relative HTML path for a type symbol.

    Nested types keep their enclosing type names in the file name, so
    ``pkg.Outer.Inner`` maps to ``pkg/Outer.Inner.html``.

    Examples
    --------
    >>> from apidoc_pages.model.symbols import Symbol, SymbolKind
    >>> page_path(Symbol(SymbolKind.TYPE, "Foo", package="a.b"))
    'a/b/Foo.html'
    """
    package, simple = _split_type_name(type_symbol.qualified_name)
    filename = f"{simple}.html"
    if not package:
        return filename
    return f"{package.replace('.', '/')}/{filename}"


def relative_href(from_path: str, to_path: str, anchor: str | None = None) -> str:
    """Return a page-relative href, or a bare fragment for same-page targets."""
    if from_path == to_path:
        return f"#{anchor}" if anchor else posixpath.basename(to_path)
    start = posixpath.dirname(from_path) or "."
    href = posixpath.relpath(to_path, start)
    if anchor:
        href = f"{href}#{anchor}"
    return href


def _split_type_name(qualified_name: str) -> tuple[str, str]:
    """Split ``pkg.Outer.Inner`` into ``("pkg", "Outer.Inner")``.

    Package segments are lowercase by convention; the first segment that
    starts with an uppercase letter begins the type name.
    """
    parts = qualified_name.split(".")
    for idx, part in enumerate(parts):
        if part[:1].isupper():
            return ".".join(parts[:idx]), ".".join(parts[idx:])
    return ".".join(parts[:-1]), parts[-1]


class SymbolIndex:
    """Resolve qualified type names and member references to link targets."""

    def __init__(self, targets: typ.Mapping[str, LinkTarget] | None = None) -> None:
        self._targets: dict[str, LinkTarget] = dict(targets or {})

    @classmethod
    def from_model(cls, model: ApiModel) -> SymbolIndex:
        """Index every documented type and its declared members."""
        index = cls()
        for type_doc in model:
            index.add_type(type_doc)
        return index

    def add_type(self, type_doc: TypeDoc) -> None:
        """Register ``type_doc`` and its declared members."""
        symbol = type_doc.symbol
        path = page_path(symbol)
        package = type_doc.package
        title = f"{symbol.type_kind} in {package}" if package else symbol.type_kind
        self._targets[symbol.qualified_name] = LinkTarget(
            path=path,
            anchor=None,
            title=title,
            label=symbol.name,
            kind=symbol.type_kind,
        )
        for member in type_doc.members:
            if member.inherited or member.kind is SymbolKind.TYPE:
                continue
            anchor = anchor_candidate(member)
            target = LinkTarget(
                path=path,
                anchor=anchor,
                title=title,
                label=member.name,
                kind=symbol.type_kind,
            )
            self._targets[f"{symbol.qualified_name}#{anchor}"] = target
            self._targets.setdefault(f"{symbol.qualified_name}#{member.name}", target)

    def resolve(self, reference: str) -> LinkTarget | None:
        """Return the target for ``reference`` or ``None`` when undocumented."""
        return self._targets.get(reference)

    @staticmethod
    def member_reference(member: Symbol) -> str:
        """Return the lookup key for ``member``.

        Nested types have pages of their own and are keyed by qualified name;
        other members are ``Type#anchor`` references.
        """
        if member.kind is SymbolKind.TYPE:
            return member.qualified_name
        return f"{member.enclosing_type}#{anchor_candidate(member)}"

    def resolve_member(self, member: Symbol) -> LinkTarget | None:
        """Return the target of ``member`` on its declaring type's page."""
        if member.enclosing_type is None:
            return None
        return self.resolve(self.member_reference(member))

    def __contains__(self, reference: object) -> bool:
        return reference in self._targets

    def __len__(self) -> int:
        return len(self._targets)


__all__ = ["LinkTarget", "SymbolIndex", "page_path", "relative_href"]
