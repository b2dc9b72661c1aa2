"""Assemble javadoc-style API reference pages from a symbol model.

The page assembly core turns documented types into content trees: the
anchor registry, signature formatter, table builder, per-kind member
writers, and the page composer. The generator and CLI around it load a
YAML symbol model, serialize the trees to HTML, and write them to disk.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from apidoc_pages import main
>>> main()  # doctest: +SKIP
>>> from apidoc_pages import app
>>> app.name
('apidoc',)
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
