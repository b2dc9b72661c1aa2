"""Shared fixtures for building per-page render contexts."""

from __future__ import annotations

import typing as typ

import pytest

from apidoc_pages.config import RenderConfig
from apidoc_pages.context import CommentRenderer, RenderContext
from apidoc_pages.labels import Labels
from apidoc_pages.model.index import SymbolIndex
from apidoc_pages.model.symbols import ApiModel, TypeDoc


@pytest.fixture
def render_config() -> RenderConfig:
    """Return default render options."""
    return RenderConfig()


@pytest.fixture
def make_context(
    render_config: RenderConfig,
) -> typ.Callable[..., RenderContext]:
    """Return a factory building a fresh render context for one page.

    ``documented`` lists further types that the page may link to;
    ``comment_renderer`` replaces the literal-text doc comment renderer.
    """

    def _make(
        page: TypeDoc,
        *,
        config: RenderConfig | None = None,
        documented: typ.Sequence[TypeDoc] = (),
        comment_renderer: CommentRenderer | None = None,
    ) -> RenderContext:
        effective = config or render_config
        index = SymbolIndex.from_model(ApiModel(types=(page, *documented)))
        return RenderContext(
            page,
            config=effective,
            labels=Labels(effective.labels),
            index=index,
            comment_renderer=comment_renderer,
        )

    return _make
