"""Symbol model consumed by the page assembly core.

The cross-reference index and the YAML loader live in
:mod:`apidoc_pages.model.index` and :mod:`apidoc_pages.model.loader`; they
are imported from there directly.
"""

from .symbols import ApiModel, Parameter, Symbol, SymbolKind, Tag, TypeDoc, TypeRef

__all__ = [
    "ApiModel",
    "Parameter",
    "Symbol",
    "SymbolKind",
    "Tag",
    "TypeDoc",
    "TypeRef",
]
