"""Typed dataclasses describing the documented program symbols.

The surrounding layer discovers symbols and hands them to the page assembly
core as immutable values. Nothing in this module knows about markup; it only
carries names, modifiers, types, and relationships.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from apidoc_pages._constants import PRIMITIVE_TYPES


class SymbolKind(enum.Enum):
    """Fixed set of symbol kinds the page assembly core understands."""

    FIELD = "field"
    METHOD = "method"
    CONSTRUCTOR = "constructor"
    ANNOTATION_ELEMENT = "annotation_element"
    TYPE = "type"


@dc.dataclass(frozen=True, slots=True)
class TypeRef:
    """A reference to a type as written in a declaration.

    Attributes
    ----------
    qualified_name : str
        Fully qualified name (``java.lang.String``) or a primitive / type
        variable name (``int``, ``T``).
    arguments : tuple[TypeRef, ...]
        Type arguments, in declaration order.
    array_depth : int
        Number of ``[]`` dimensions.
    varargs : bool
        Whether the reference is the last parameter of a variadic executable.
    """

    qualified_name: str
    arguments: tuple[TypeRef, ...] = ()
    array_depth: int = 0
    varargs: bool = False

    @property
    def is_primitive(self) -> bool:
        return self.qualified_name in PRIMITIVE_TYPES

    def dimensions(self) -> str:
        """Return the array/varargs suffix (``[]``, ``...``) for this reference."""
        if self.varargs:
            return "[]" * max(self.array_depth - 1, 0) + "..."
        return "[]" * self.array_depth

    def erasure(self) -> str:
        """Return the erased form used in executable anchors."""
        return f"{self.qualified_name}{self.dimensions()}"


@dc.dataclass(frozen=True, slots=True)
class Parameter:
    """One formal parameter of a method or constructor."""

    name: str
    type: TypeRef


@dc.dataclass(frozen=True, slots=True)
class Tag:
    """A block tag attached to a doc comment (``@since``, ``@see``, ...).

    Attributes
    ----------
    kind : str
        Tag name without the ``@`` (``param``, ``return``, ``throws``,
        ``since``, ``see``, ``author``).
    text : str
        Free text of the tag.
    target : str, optional
        Symbol reference for ``see``/``throws`` tags (``pkg.Type`` or
        ``pkg.Type#member``).
    """

    kind: str
    text: str = ""
    target: str | None = None


@dc.dataclass(frozen=True, slots=True)
class Symbol:
    """A documented program element.

    Members carry the qualified name of their declaring type in
    ``enclosing_type``; inherited members keep the ancestor that declares
    them there and set ``inherited``. Top-level types use ``package``
    instead, nested types use ``enclosing_type``.
    """

    kind: SymbolKind
    name: str
    enclosing_type: str | None = None
    modifiers: tuple[str, ...] = ()
    type: TypeRef | None = None
    parameters: tuple[Parameter, ...] = ()
    throws: tuple[TypeRef, ...] = ()
    default_value: str | None = None
    inherited: bool = False
    deprecated: bool = False
    deprecation_text: str = ""
    doc_comment: str = ""
    tags: tuple[Tag, ...] = ()
    source_line: int | None = None
    type_kind: str = "class"
    package: str = ""

    @property
    def qualified_name(self) -> str:
        """Return the dotted name of a type, or ``Type#member`` for members."""
        if self.kind is SymbolKind.TYPE:
            owner = self.enclosing_type or self.package
            return f"{owner}.{self.name}" if owner else self.name
        return f"{self.enclosing_type}#{self.name}"

    @property
    def is_executable(self) -> bool:
        return self.kind in (SymbolKind.METHOD, SymbolKind.CONSTRUCTOR)

    def tags_of(self, kind: str) -> list[Tag]:
        """Return the tags of ``kind`` in declaration order."""
        return [tag for tag in self.tags if tag.kind == kind]


@dc.dataclass(frozen=True, slots=True)
class TypeDoc:
    """A type page subject: the type symbol and its ordered members."""

    symbol: Symbol
    members: tuple[Symbol, ...] = ()

    @property
    def qualified_name(self) -> str:
        return self.symbol.qualified_name

    @property
    def package(self) -> str:
        """Return the package of the type, following nested enclosures."""
        if self.symbol.package:
            return self.symbol.package
        owner = self.symbol.enclosing_type or ""
        parts = [part for part in owner.split(".") if part]
        while parts and parts[-1][:1].isupper():
            parts.pop()
        return ".".join(parts)

    def members_of(
        self, kind: SymbolKind, *, inherited: bool | None = None
    ) -> list[Symbol]:
        """Return members of ``kind``, optionally filtered by inheritance."""
        return [
            member
            for member in self.members
            if member.kind is kind
            and (inherited is None or member.inherited is inherited)
        ]


@dc.dataclass(frozen=True, slots=True)
class ApiModel:
    """Ordered collection of type pages handed over by symbol discovery."""

    types: tuple[TypeDoc, ...] = ()

    def get_type(self, qualified_name: str) -> TypeDoc:
        """Return the TypeDoc for ``qualified_name``.

        Raises
        ------
        KeyError
            If no documented type has that name.
        """
        for type_doc in self.types:
            if type_doc.qualified_name == qualified_name:
                return type_doc
        msg = f"Unknown type '{qualified_name}'."
        raise KeyError(msg)

    def __iter__(self) -> typ.Iterator[TypeDoc]:
        return iter(self.types)


__all__ = [
    "ApiModel",
    "Parameter",
    "Symbol",
    "SymbolKind",
    "Tag",
    "TypeDoc",
    "TypeRef",
]
