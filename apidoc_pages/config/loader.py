"""Load render configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _as_bool,
    _normalize_labels,
    _normalize_packages,
    _optional_str,
    _resolve_path,
)
from .models import RenderConfig


def load_render_config(path: Path) -> RenderConfig:
    """Load the YAML file describing how API pages are rendered.

    Parameters
    ----------
    path : Path
        Filesystem path to the configuration file (for example,
        ``apidoc.yaml``). Relative ``output_dir`` values are resolved against
        the file's directory.

    Returns
    -------
    RenderConfig
        Parsed configuration with defaults applied for missing keys.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ConfigError
        If a value has the wrong shape (for example a non-boolean
        ``strict_anchors`` or an unknown ``member_order``).

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_render_config(Path("apidoc.yaml"))  # doctest: +SKIP
    >>> config.member_order  # doctest: +SKIP
    'declaration'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return build_render_config(loaded, base_dir=path.parent)


def build_render_config(
    raw: typ.Mapping[str, typ.Any], *, base_dir: Path | None = None
) -> RenderConfig:
    """Build a RenderConfig from an already parsed mapping."""
    defaults = RenderConfig()
    base = base_dir or Path.cwd()
    additional = raw.get("additional_stylesheets") or []
    if isinstance(additional, str):
        additional = [additional]
    return RenderConfig(
        strict_anchors=_as_bool(
            "strict_anchors", raw.get("strict_anchors"), defaults.strict_anchors
        ),
        link_source=_as_bool("link_source", raw.get("link_source"), defaults.link_source),
        no_qualifier=_normalize_packages(raw.get("no_qualifier")),
        member_order=str(raw.get("member_order", defaults.member_order)),
        pygments_style=str(raw.get("pygments_style", defaults.pygments_style)),
        output_dir=_resolve_path(raw.get("output_dir"), base, defaults.output_dir),
        window_title=str(raw.get("window_title", defaults.window_title)),
        header=_optional_str(raw.get("header")) or "",
        footer=_optional_str(raw.get("footer")) or "",
        bottom=_optional_str(raw.get("bottom")) or "",
        stylesheet=_optional_str(raw.get("stylesheet", defaults.stylesheet)),
        additional_stylesheets=tuple(
            text for text in (_optional_str(item) for item in additional) if text
        ),
        labels=_normalize_labels(raw.get("labels")),
    )


__all__ = ["build_render_config", "load_render_config"]
