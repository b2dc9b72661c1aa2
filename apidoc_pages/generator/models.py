"""Shared dataclasses used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(slots=True)
class PageModel:
    """Structured data passed to the type page template.

    Attributes
    ----------
    title : str
        Full HTML ``<title>`` text.
    qualified_name : str
        Qualified name of the documented type.
    body_html : str
        Serialized content tree of the page.
    stylesheets : list[str]
        Stylesheet hrefs relative to the page.
    pygments_css : str
        CSS for highlighted code blocks in doc comments.
    header : str
        Text placed above the page content.
    footer : str
        Text placed below the page content.
    bottom : str
        Fine print at the very bottom of the page.
    """

    title: str
    qualified_name: str
    body_html: str
    stylesheets: list[str]
    pygments_css: str
    header: str
    footer: str
    bottom: str


__all__ = ["PageModel"]
