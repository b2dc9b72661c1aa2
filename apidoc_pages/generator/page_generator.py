"""High-level orchestration for type page generation.

This module ties the page assembly core to the file system: it builds the
symbol index for a model, composes every type page with
:class:`~apidoc_pages.composer.PageComposer`, renders each serialized tree
into the shared ``type_page.jinja`` template, and writes the HTML plus a
metadata file recording the anchors of every page.

Example
-------
>>> from pathlib import Path
>>> from apidoc_pages.config import load_render_config
>>> from apidoc_pages.generator import ApiPageGenerator
>>> from apidoc_pages.model.loader import load_model
>>> model = load_model(Path("api.yaml"))  # doctest: +SKIP
>>> config = load_render_config(Path("apidoc.yaml"))  # doctest: +SKIP
>>> ApiPageGenerator(model, config).run()  # doctest: +SKIP
[PosixPath('public/api/demo/Widget.html'), ...]
"""

from __future__ import annotations

import json
import logging
import typing as typ
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from apidoc_pages._constants import PAGE_META_FILENAME
from apidoc_pages.composer import PageComposer, RenderedPage
from apidoc_pages.generator.models import PageModel
from apidoc_pages.generator.renderer import MarkdownCommentRenderer
from apidoc_pages.labels import Labels
from apidoc_pages.markup.serializer import serialize
from apidoc_pages.model.index import SymbolIndex, relative_href

if typ.TYPE_CHECKING:
    from apidoc_pages.config import RenderConfig
    from apidoc_pages.model.symbols import ApiModel, TypeDoc

logger = logging.getLogger(__name__)


class ApiPageGenerator:
    """Compose type pages for a symbol model and write them as HTML."""

    def __init__(
        self,
        model: ApiModel,
        config: RenderConfig,
        *,
        templates_dir: Path | None = None,
        output_dir: Path | None = None,
        jobs: int = 1,
    ) -> None:
        """Initialize the generator with a model, options, and template context.

        Parameters
        ----------
        model : ApiModel
            Documented types; every type gets one page.
        config : RenderConfig
            Render options, including the default output directory.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package templates.
        output_dir : Path, optional
            Override for the HTML output directory.
        jobs : int, optional
            Number of worker threads composing pages. Defaults to ``1``.

        Raises
        ------
        ValueError
            If ``jobs`` is less than one.
        """
        if jobs < 1:
            msg = f"jobs must be at least 1; got {jobs}."
            raise ValueError(msg)
        self.model = model
        self.config = config
        self.jobs = jobs
        self.output_dir = output_dir or config.output_dir
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.index = SymbolIndex.from_model(model)
        self.renderer = MarkdownCommentRenderer(config.pygments_style)
        self.composer = PageComposer(
            config, Labels(config.labels), self.index, comment_renderer=self.renderer
        )
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("type_page.jinja")

    def run(self, only: typ.Sequence[str] | None = None) -> list[Path]:
        """Render type pages into HTML files on disk.

        Parameters
        ----------
        only : sequence of str, optional
            Qualified names of the types to render; all types when omitted.

        Returns
        -------
        list[Path]
            Paths to the generated HTML documents, in model order.

        Raises
        ------
        KeyError
            If a name in ``only`` is not a documented type.
        ApiDocError
            If a page violates a structural rule (duplicate anchor in strict
            mode, writer ordering, unsupported symbol kind).

        Notes
        -----
        Side effects include writing HTML files and the metadata JSON into the
        output directory.
        """
        if only:
            type_docs = [self.model.get_type(name) for name in only]
        else:
            type_docs = list(self.model)

        if self.jobs > 1 and len(type_docs) > 1:
            with ThreadPoolExecutor(max_workers=self.jobs) as pool:
                pages = list(pool.map(self.composer.compose_page, type_docs))
        else:
            pages = [self.composer.compose_page(type_doc) for type_doc in type_docs]

        self.output_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for page in pages:
            for warning in page.warnings:
                logger.warning(
                    "%s: unresolved reference %s", warning.page, warning.reference
                )
            written.append(self._write_page(page))
        self._write_metadata(pages)
        return written

    def render_html(self, page: RenderedPage) -> str:
        """Return the full HTML document for a composed page."""
        return self.template.render(page=self._page_model(page))

    def _page_model(self, page: RenderedPage) -> PageModel:
        type_doc: TypeDoc = page.type_doc
        return PageModel(
            title=f"{type_doc.symbol.name} ({self.config.window_title})",
            qualified_name=type_doc.qualified_name,
            body_html=serialize(page.tree),
            stylesheets=[
                relative_href(page.path, sheet) for sheet in self.config.stylesheets
            ],
            pygments_css=self.renderer.stylesheet,
            header=self.config.header,
            footer=self.config.footer,
            bottom=self.config.bottom,
        )

    def _write_page(self, page: RenderedPage) -> Path:
        output_path = self.output_dir / page.path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render_html(page), encoding="utf-8")
        logger.info("wrote %s (%d anchors)", output_path, len(page.anchors))
        return output_path

    def _metadata_path(self) -> Path:
        """Return the path to the metadata JSON file for this run."""
        return self.output_dir / PAGE_META_FILENAME

    def _write_metadata(self, pages: list[RenderedPage]) -> None:
        """Persist the anchors and unresolved references of every page."""
        metadata = {
            "pages": {
                page.path: {
                    "type": page.type_doc.qualified_name,
                    "anchors": page.anchors,
                    "unresolved": [warning.reference for warning in page.warnings],
                }
                for page in pages
            }
        }
        path = self._metadata_path()
        try:
            path.write_text(json.dumps(metadata, indent=2), encoding="utf-8")
        except OSError:  # pragma: no cover - IO issues
            logger.warning("could not write page metadata to %s", path)


__all__ = ["ApiPageGenerator"]
