"""Typed dataclasses describing render configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from apidoc_pages.errors import ConfigError

MEMBER_ORDERS = ("declaration", "name")


@dc.dataclass(slots=True)
class RenderConfig:
    """Options that shape every generated type page.

    Attributes
    ----------
    strict_anchors : bool
        Raise on duplicate anchors outside overload sets; when False every
        duplicate gets a numeric suffix.
    link_source : bool
        Link member and type names to ``src-html`` source pages.
    no_qualifier : tuple[str, ...]
        Packages whose qualifiers are dropped from unresolved type names;
        ``("all",)`` drops every qualifier.
    member_order : str
        ``"declaration"`` keeps the model order, ``"name"`` sorts by name.
    pygments_style : str
        Pygments style for code blocks in doc comments.
    output_dir : Path
        Directory the generator writes pages into.
    window_title : str
        Suffix for the HTML ``<title>``.
    header, footer, bottom : str
        Optional text placed above and below the page content.
    stylesheet : str | None
        Site-relative path of the main stylesheet.
    additional_stylesheets : tuple[str, ...]
        Further site-relative stylesheets linked after the main one.
    labels : dict[str, str]
        Label overrides keyed like :data:`~apidoc_pages.labels.DEFAULT_LABELS`.
    """

    strict_anchors: bool = True
    link_source: bool = False
    no_qualifier: tuple[str, ...] = ()
    member_order: str = "declaration"
    pygments_style: str = "default"
    output_dir: Path = dc.field(default_factory=lambda: Path("public/api"))
    window_title: str = "API"
    header: str = ""
    footer: str = ""
    bottom: str = ""
    stylesheet: str | None = "stylesheet.css"
    additional_stylesheets: tuple[str, ...] = ()
    labels: dict[str, str] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.member_order not in MEMBER_ORDERS:
            msg = (
                f"member_order must be one of {', '.join(MEMBER_ORDERS)}; "
                f"got '{self.member_order}'."
            )
            raise ConfigError(msg)

    @property
    def stylesheets(self) -> list[str]:
        """Return every stylesheet path in link order."""
        sheets = [self.stylesheet] if self.stylesheet else []
        return [*sheets, *self.additional_stylesheets]

    def drops_qualifier(self, package: str) -> bool:
        """Return whether names in ``package`` are shown unqualified."""
        return "all" in self.no_qualifier or package in self.no_qualifier


__all__ = ["MEMBER_ORDERS", "RenderConfig"]
