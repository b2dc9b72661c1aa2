"""Error taxonomy for page assembly.

Structural problems (duplicate anchors, out-of-order writer calls, symbol
kinds without a writer) are contract violations: they are raised and abort
the page being rendered. Unresolved references are not raised; they are
collected as :class:`UnresolvedReferenceWarning` values on the render
context and reported by the generator.
"""

from __future__ import annotations


class ApiDocError(Exception):
    """Base class for fatal page assembly errors."""


class DuplicateAnchorError(ApiDocError):
    """Raised when two addressable elements on one page share an identifier."""

    def __init__(self, anchor: str) -> None:
        self.anchor = anchor
        super().__init__(f"Anchor '{anchor}' is already registered on this page.")


class OrderingViolationError(ApiDocError):
    """Raised when writer operations are invoked out of the required sequence."""


class UnsupportedKindError(ApiDocError):
    """Raised when a symbol kind has no matching writer or signature rule."""


class UnresolvedReferenceWarning(UserWarning):
    """A type or symbol reference that does not resolve to a documented page.

    Attributes
    ----------
    reference : str
        The qualified name (or ``Type#member`` reference) that failed to
        resolve.
    page : str
        Path of the page being rendered when the reference was seen.
    """

    def __init__(self, reference: str, page: str) -> None:
        self.reference = reference
        self.page = page
        super().__init__(f"{page}: reference not found: {reference}")


class ConfigError(ValueError):
    """Raised when the render configuration is invalid or incomplete."""


class ModelError(ValueError):
    """Raised when a symbol model document cannot be turned into symbols."""


__all__ = [
    "ApiDocError",
    "ConfigError",
    "DuplicateAnchorError",
    "ModelError",
    "OrderingViolationError",
    "UnresolvedReferenceWarning",
    "UnsupportedKindError",
]
