"""Load and validate render configuration for API page builds.

This subpackage parses an ``apidoc.yaml`` file, applies defaults, and returns
a :class:`RenderConfig` that the composer and generator consume. The primary
entry point is :func:`load_render_config`.

Examples
--------
>>> from pathlib import Path
>>> from apidoc_pages.config import load_render_config
>>> config = load_render_config(Path("apidoc.yaml"))  # doctest: +SKIP
>>> config.strict_anchors  # doctest: +SKIP
True
"""

from apidoc_pages.errors import ConfigError

from .loader import build_render_config, load_render_config
from .models import MEMBER_ORDERS, RenderConfig

__all__ = [
    "MEMBER_ORDERS",
    "ConfigError",
    "RenderConfig",
    "build_render_config",
    "load_render_config",
]
