"""Common literal values used across apidoc_pages.

Marker comments, section anchor names, and the metadata file name live here
so writers, the generator, and tests import the same values without
drifting. Intended for internal use within the apidoc_pages package.

Examples
--------
>>> from apidoc_pages import _constants
>>> _constants.SECTION_ANCHORS["field"].summary
'field.summary'
>>> _constants.PAGE_META_FILENAME
'.apidoc-pages-meta.json'
"""

from __future__ import annotations

import typing as typ

PAGE_META_FILENAME = ".apidoc-pages-meta.json"
SOURCE_DIR = "src-html"
NBSP = "\u00a0"


class SectionAnchors(typ.NamedTuple):
    """Anchor names for the summary and detail blocks of one member group."""

    summary: str
    detail: str | None


class MarkerComments(typ.NamedTuple):
    """Comment text emitted once at the start of a member group block."""

    summary: str
    detail: str | None


SECTION_ANCHORS: dict[str, SectionAnchors] = {
    "field": SectionAnchors("field.summary", "field.detail"),
    "constructor": SectionAnchors("constructor.summary", "constructor.detail"),
    "method": SectionAnchors("method.summary", "method.detail"),
    "nested": SectionAnchors("nested.class.summary", None),
    "element": SectionAnchors(
        "annotation.type.element.summary", "annotation.type.element.detail"
    ),
}

MARKERS: dict[str, MarkerComments] = {
    "field": MarkerComments(
        " =========== FIELD SUMMARY =========== ",
        " ============ FIELD DETAIL =========== ",
    ),
    "constructor": MarkerComments(
        " ======== CONSTRUCTOR SUMMARY ======== ",
        " ========= CONSTRUCTOR DETAIL ======== ",
    ),
    "method": MarkerComments(
        " ========== METHOD SUMMARY =========== ",
        " ============ METHOD DETAIL ========== ",
    ),
    "nested": MarkerComments(" ======== NESTED CLASS SUMMARY ======== ", None),
    "element": MarkerComments(
        " =========== ANNOTATION TYPE ELEMENT SUMMARY =========== ",
        " ============ ANNOTATION TYPE ELEMENT DETAIL =========== ",
    ),
}

PRIMITIVE_TYPES = frozenset(
    {"boolean", "byte", "char", "short", "int", "long", "float", "double", "void"}
)

__all__ = [
    "MARKERS",
    "NBSP",
    "PAGE_META_FILENAME",
    "PRIMITIVE_TYPES",
    "SECTION_ANCHORS",
    "SOURCE_DIR",
    "MarkerComments",
    "SectionAnchors",
]
