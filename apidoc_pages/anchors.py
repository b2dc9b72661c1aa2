"""Page-scoped anchor identifiers.

Anchor candidates are derived only from a symbol's signature, so rerunning on
unchanged input reproduces the same identifiers. The registry guarantees that
no two addressable elements on one page share an identifier.

Examples
--------
>>> registry = AnchorRegistry()
>>> registry.register("get(int)")
'get(int)'
>>> registry.register("get(int)", mode=AnchorMode.PERMISSIVE)
'get(int)-2'
>>> registry.exists("get(int)-2")
True
"""

from __future__ import annotations

import enum
import typing as typ

from apidoc_pages.errors import DuplicateAnchorError, UnsupportedKindError
from apidoc_pages.model.symbols import SymbolKind

if typ.TYPE_CHECKING:
    from apidoc_pages.model.symbols import Symbol


class AnchorMode(enum.Enum):
    """How the registry treats an identifier that is already in use."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


def anchor_candidate(symbol: Symbol) -> str:
    """Return the deterministic anchor candidate for ``symbol``.

    Fields and nested types use their simple name, annotation elements add
    ``()``, and executables list their erased parameter types so overloads
    get distinct identifiers.

    Raises
    ------
    UnsupportedKindError
        If ``symbol.kind`` is outside the fixed kind set.
    """
    match symbol.kind:
        case SymbolKind.FIELD | SymbolKind.TYPE:
            return symbol.name
        case SymbolKind.ANNOTATION_ELEMENT:
            return f"{symbol.name}()"
        case SymbolKind.METHOD | SymbolKind.CONSTRUCTOR:
            erased = ",".join(param.type.erasure() for param in symbol.parameters)
            return f"{symbol.name}({erased})"
        case _:
            msg = f"No anchor rule for symbol kind {symbol.kind!r}."
            raise UnsupportedKindError(msg)


class AnchorRegistry:
    """Assign and deduplicate identifiers for one page render.

    Parameters
    ----------
    mode : AnchorMode, optional
        Default policy for :meth:`register`; ``STRICT`` raises on reuse,
        ``PERMISSIVE`` appends ``-2``, ``-3``, ... to the base identifier.
    """

    def __init__(self, mode: AnchorMode = AnchorMode.STRICT) -> None:
        self.mode = mode
        self._used: dict[str, None] = {}
        self._counters: dict[str, int] = {}

    def register(self, candidate: str, *, mode: AnchorMode | None = None) -> str:
        """Mark an identifier as used on this page and return it.

        Parameters
        ----------
        candidate : str
            Preferred identifier.
        mode : AnchorMode, optional
            Override of the registry's default policy for this call.

        Returns
        -------
        str
            ``candidate`` when unused, otherwise (permissive mode) the base
            identifier with the next free numeric suffix.

        Raises
        ------
        DuplicateAnchorError
            If ``candidate`` is already used and the effective mode is strict.
        """
        effective = mode or self.mode
        if candidate not in self._used:
            self._used[candidate] = None
            return candidate
        if effective is AnchorMode.STRICT:
            raise DuplicateAnchorError(candidate)

        suffix = self._counters.get(candidate, 1)
        actual = candidate
        while actual in self._used:
            suffix += 1
            actual = f"{candidate}-{suffix}"
        self._counters[candidate] = suffix
        self._used[actual] = None
        return actual

    def exists(self, anchor_id: str) -> bool:
        """Return whether ``anchor_id`` is registered; never mutates."""
        return anchor_id in self._used

    @property
    def registered(self) -> list[str]:
        """Return identifiers in registration order."""
        return list(self._used)

    def __len__(self) -> int:
        return len(self._used)


__all__ = ["AnchorMode", "AnchorRegistry", "anchor_candidate"]
