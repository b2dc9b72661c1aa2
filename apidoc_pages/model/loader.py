"""Load a YAML symbol model into typed dataclasses.

Symbol discovery happens outside this project; tools that extract symbols
dump them as YAML, and this loader turns that document into an
:class:`~apidoc_pages.model.symbols.ApiModel`.

Examples
--------
>>> from apidoc_pages.model.loader import parse_type
>>> ref = parse_type("java.util.Map<java.lang.String, int[]>")
>>> ref.qualified_name, [arg.erasure() for arg in ref.arguments]
('java.util.Map', ['java.lang.String', 'int[]'])
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from apidoc_pages.errors import ModelError

from .symbols import ApiModel, Parameter, Symbol, SymbolKind, Tag, TypeDoc, TypeRef

MEMBER_KINDS: dict[str, SymbolKind] = {
    "field": SymbolKind.FIELD,
    "method": SymbolKind.METHOD,
    "constructor": SymbolKind.CONSTRUCTOR,
    "element": SymbolKind.ANNOTATION_ELEMENT,
    "annotation_element": SymbolKind.ANNOTATION_ELEMENT,
    "type": SymbolKind.TYPE,
}
_DELIMITERS = "<>,[]"


class _TypeParser:
    """Recursive-descent parser for declaration type expressions."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def parse(self) -> TypeRef:
        ref = self._parse_ref()
        self._skip_ws()
        if self.pos != len(self.text):
            msg = f"Unexpected '{self.text[self.pos:]}' in type '{self.text}'."
            raise ModelError(msg)
        return ref

    def _skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _peek(self, token: str) -> bool:
        self._skip_ws()
        return self.text.startswith(token, self.pos)

    def _parse_ref(self) -> TypeRef:
        self._skip_ws()
        start = self.pos
        while (
            self.pos < len(self.text)
            and self.text[self.pos] not in _DELIMITERS
            and not self.text.startswith("...", self.pos)
        ):
            self.pos += 1
        name = self.text[start : self.pos].strip()
        if not name:
            msg = f"Missing type name at offset {start} in '{self.text}'."
            raise ModelError(msg)

        arguments: list[TypeRef] = []
        if self._peek("<"):
            self.pos += 1
            arguments.append(self._parse_ref())
            while self._peek(","):
                self.pos += 1
                arguments.append(self._parse_ref())
            if not self._peek(">"):
                msg = f"Unclosed type arguments in '{self.text}'."
                raise ModelError(msg)
            self.pos += 1

        depth = 0
        while self._peek("[]"):
            self.pos += 2
            depth += 1
        varargs = False
        if self._peek("..."):
            self.pos += 3
            depth += 1
            varargs = True
        return TypeRef(
            qualified_name=name,
            arguments=tuple(arguments),
            array_depth=depth,
            varargs=varargs,
        )


def parse_type(text: str) -> TypeRef:
    """Parse ``text`` such as ``java.util.List<T>[]`` into a :class:`TypeRef`.

    Raises
    ------
    ModelError
        If the expression is empty or its brackets are unbalanced.
    """
    return _TypeParser(str(text)).parse()


def load_model(path: Path) -> ApiModel:
    """Load the YAML symbol model at ``path``.

    Parameters
    ----------
    path : Path
        YAML document with a top-level ``types`` list.

    Returns
    -------
    ApiModel
        Types in document order, each with its members in document order.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    ModelError
        If a type or member entry is malformed.
    """
    if not path.exists():
        msg = f"Symbol model '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return build_model(loaded)


def build_model(payload: typ.Mapping[str, typ.Any]) -> ApiModel:
    """Build an ApiModel from an already parsed mapping."""
    types_raw = payload.get("types") or []
    if not isinstance(types_raw, list):
        msg = "'types' must be a list of type entries."
        raise ModelError(msg)
    return ApiModel(types=tuple(_build_type_doc(entry) for entry in types_raw))


def _build_type_doc(entry: typ.Any) -> TypeDoc:
    if not isinstance(entry, dict) or not entry.get("name"):
        msg = f"Type entry must be a mapping with a 'name': {entry!r}"
        raise ModelError(msg)
    deprecated, deprecation_text = _parse_deprecation(entry.get("deprecated"))
    symbol = Symbol(
        kind=SymbolKind.TYPE,
        name=str(entry["name"]),
        enclosing_type=_optional_str(entry.get("enclosing")),
        modifiers=_str_tuple(entry.get("modifiers")),
        type=_optional_type(entry.get("extends")),
        deprecated=deprecated,
        deprecation_text=deprecation_text,
        doc_comment=str(entry.get("doc") or ""),
        tags=_build_tags(entry.get("tags")),
        source_line=entry.get("line"),
        type_kind=str(entry.get("kind") or "class"),
        package=str(entry.get("package") or ""),
    )
    members_raw = entry.get("members") or []
    if not isinstance(members_raw, list):
        msg = f"'members' of type '{symbol.name}' must be a list."
        raise ModelError(msg)
    members = tuple(_build_member(symbol, member) for member in members_raw)
    return TypeDoc(symbol=symbol, members=members)


def _build_member(owner: Symbol, entry: typ.Any) -> Symbol:
    if not isinstance(entry, dict):
        msg = f"Member entry of '{owner.name}' must be a mapping: {entry!r}"
        raise ModelError(msg)
    kind_name = str(entry.get("kind", "")).lower()
    kind = MEMBER_KINDS.get(kind_name)
    if kind is None:
        msg = f"Unknown member kind '{kind_name}' in type '{owner.name}'."
        raise ModelError(msg)

    name = entry.get("name")
    if kind is SymbolKind.CONSTRUCTOR and not name:
        name = owner.name
    if not name:
        msg = f"A {kind.value} of '{owner.name}' is missing its 'name'."
        raise ModelError(msg)

    inherited_from = _optional_str(entry.get("inherited_from"))
    deprecated, deprecation_text = _parse_deprecation(entry.get("deprecated"))
    declared_type = entry.get("type", entry.get("returns"))
    if kind in (SymbolKind.METHOD, SymbolKind.ANNOTATION_ELEMENT, SymbolKind.FIELD):
        if declared_type is None:
            msg = f"{kind.value} '{name}' of '{owner.name}' needs a 'type'."
            raise ModelError(msg)

    default_value = entry.get("default")
    return Symbol(
        kind=kind,
        name=str(name),
        enclosing_type=inherited_from or owner.qualified_name,
        modifiers=_str_tuple(entry.get("modifiers")),
        type=_optional_type(declared_type),
        parameters=tuple(_build_parameter(p) for p in entry.get("parameters") or []),
        throws=tuple(parse_type(t) for t in entry.get("throws") or []),
        default_value=None if default_value is None else str(default_value),
        inherited=inherited_from is not None,
        deprecated=deprecated,
        deprecation_text=deprecation_text,
        doc_comment=str(entry.get("doc") or ""),
        tags=_build_tags(entry.get("tags")),
        source_line=entry.get("line"),
        type_kind=str(entry.get("type_kind") or "class"),
    )


def _build_parameter(entry: typ.Any) -> Parameter:
    match entry:
        case {"name": name, "type": type_text}:
            return Parameter(name=str(name), type=parse_type(type_text))
        case _:
            msg = f"Parameter must be a mapping with 'name' and 'type': {entry!r}"
            raise ModelError(msg)


def _build_tags(value: typ.Any) -> tuple[Tag, ...]:
    if not value:
        return ()
    if not isinstance(value, list):
        msg = f"'tags' must be a list: {value!r}"
        raise ModelError(msg)
    tags: list[Tag] = []
    for entry in value:
        if not isinstance(entry, dict) or not entry.get("kind"):
            msg = f"Tag must be a mapping with a 'kind': {entry!r}"
            raise ModelError(msg)
        tags.append(
            Tag(
                kind=str(entry["kind"]).lstrip("@"),
                text=str(entry.get("text") or ""),
                target=_optional_str(entry.get("target")),
            )
        )
    return tuple(tags)


def _parse_deprecation(value: typ.Any) -> tuple[bool, str]:
    """Return ``(deprecated, text)`` from a bool or explanatory string."""
    match value:
        case None | False:
            return False, ""
        case True:
            return True, ""
        case str() as text:
            return True, text.strip()
        case _:
            msg = f"'deprecated' must be a bool or text: {value!r}"
            raise ModelError(msg)


def _optional_type(value: typ.Any) -> TypeRef | None:
    if value is None:
        return None
    return parse_type(value)


def _optional_str(value: object | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _str_tuple(value: typ.Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(segment for segment in value.split() if segment)
    if isinstance(value, list):
        return tuple(str(item).strip() for item in value if str(item).strip())
    return ()


__all__ = ["MEMBER_KINDS", "build_model", "load_model", "parse_type"]
