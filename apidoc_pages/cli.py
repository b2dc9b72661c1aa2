"""Cyclopts CLI entrypoint for generating API type pages.

The ``apidoc`` console script defined here loads a symbol model and an
optional render configuration, composes one HTML page per documented type,
and reports each written file. Every option can also be supplied through an
``APIDOC_*`` environment variable, which suits CI jobs.

Examples
--------
Generate every page for a model:

>>> from apidoc_pages.cli import main
>>> main()  # doctest: +SKIP

Regenerate a single type into a custom directory:

>>> from apidoc_pages.cli import app
>>> app.run(
...     ["generate", "--model", "api.yaml", "--type", "demo.Widget",
...      "--output-dir", "dist"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import RenderConfig, load_render_config
from .generator import ApiPageGenerator
from .model.loader import load_model

DEFAULT_MODEL = Path("api.yaml")
DEFAULT_CONFIG = Path("apidoc.yaml")

app = App(name="apidoc", config=cyclopts.config.Env("APIDOC_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Generate HTML type pages from a symbol model.")
def generate(
    *,
    model: typ.Annotated[
        Path, Parameter(help="Path to the symbol model YAML", env_var="APIDOC_MODEL")
    ] = DEFAULT_MODEL,
    config: typ.Annotated[
        Path, Parameter(help="Path to render config", env_var="APIDOC_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="APIDOC_OUTPUT_DIR"),
    ] = None,
    type_name: typ.Annotated[
        list[str] | None,
        Parameter(
            name="--type",
            help="Qualified name of a type to render (repeatable)",
            env_var="APIDOC_TYPE",
        ),
    ] = None,
    jobs: typ.Annotated[
        int, Parameter(help="Worker threads composing pages", env_var="APIDOC_JOBS")
    ] = 1,
) -> None:
    """Generate type pages for the requested symbol model.

    Parameters
    ----------
    model : Path, optional
        Path to the symbol model YAML file (overridable via ``APIDOC_MODEL``).
    config : Path, optional
        Path to the ``apidoc.yaml`` render configuration. A missing file at
        the default location means built-in defaults; an explicitly named
        missing file is an error.
    output_dir : Path or None, optional
        Override the configured output directory.
    type_name : list[str] or None, optional
        Qualified names of the types to render; all types when omitted.
    jobs : int, optional
        Number of worker threads composing pages.

    Returns
    -------
    None
        Writes rendered pages and prints the generated paths.

    Raises
    ------
    FileNotFoundError
        If the model file, or an explicitly requested config file, is missing.
    """
    if config.exists() or config != DEFAULT_CONFIG:
        render_config = load_render_config(config)
    else:
        render_config = RenderConfig()
    api_model = load_model(model)
    generator = ApiPageGenerator(
        api_model, render_config, output_dir=output_dir, jobs=jobs
    )
    for path in generator.run(type_name):
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `apidoc` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
