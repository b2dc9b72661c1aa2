"""Tests for member signatures and type reference rendering."""

from __future__ import annotations

import typing as typ
from types import SimpleNamespace

import pytest
from bs4 import BeautifulSoup
from pytest_mock import MockerFixture

from apidoc_pages.config import RenderConfig
from apidoc_pages.errors import UnsupportedKindError
from apidoc_pages.markup import serialize
from apidoc_pages.model.loader import parse_type
from apidoc_pages.model.symbols import SymbolKind
from apidoc_pages.signatures import source_path

from builders import member, type_doc

if typ.TYPE_CHECKING:
    from apidoc_pages.context import RenderContext

MakeContext = typ.Callable[..., "RenderContext"]


def _signature_soup(ctx: RenderContext, symbol: object) -> BeautifulSoup:
    return BeautifulSoup(serialize(ctx.signatures.format(symbol)), "html.parser")  # type: ignore[arg-type]


def _span_classes(soup: BeautifulSoup) -> list[str]:
    signature = soup.select_one("div.memberSignature, div.typeSignature")
    assert signature is not None, "expected a signature block"
    return [span["class"][0] for span in signature.find_all("span", recursive=False)]


def test_method_signature_parts_in_order(make_context: MakeContext) -> None:
    method = member(
        SymbolKind.METHOD,
        "parse",
        "java.util.List<java.lang.String>",
        params=(("text", "java.lang.String"), ("flags", "int...")),
        modifiers=("public", "static"),
        throws=(parse_type("java.io.IOException"),),
    )
    ctx = make_context(type_doc("Widget", method))
    soup = _signature_soup(ctx, method)

    assert _span_classes(soup) == [
        "modifiers",
        "returnType",
        "memberName",
        "parameters",
        "exceptions",
    ]
    assert soup.select_one(".returnType").get_text() == "java.util.List<java.lang.String>"
    assert soup.select_one(".parameters").get_text() == (
        "(java.lang.String\u00a0text, int...\u00a0flags)"
    )
    assert "\nthrows " in soup.get_text(), "throws clause must follow the parameters"
    assert {w.reference for w in ctx.warnings} == {
        "java.util.List",
        "java.lang.String",
        "java.io.IOException",
    }, "each unresolved type is reported once"


def test_constructor_omits_return_type(make_context: MakeContext) -> None:
    ctor = member(
        SymbolKind.CONSTRUCTOR, "Widget", params=(("size", "int"),), modifiers=("public",)
    )
    ctx = make_context(type_doc("Widget", ctor))
    soup = _signature_soup(ctx, ctor)
    assert _span_classes(soup) == ["modifiers", "memberName", "parameters"]
    assert ctx.warnings == [], "primitives never produce warnings"


def test_documented_types_become_links(make_context: MakeContext) -> None:
    field = member(SymbolKind.FIELD, "gadget", "demo.Gadget", modifiers=("private",))
    gadget = type_doc("Gadget")
    ctx = make_context(type_doc("Widget", field), documented=[gadget])
    soup = _signature_soup(ctx, field)
    link = soup.select_one(".returnType a")
    assert link is not None
    assert link["href"] == "Gadget.html"
    assert link["title"] == "class in demo"
    assert link.get_text() == "Gadget"
    assert ctx.warnings == []


def test_cross_package_links_are_relative(make_context: MakeContext) -> None:
    field = member(SymbolKind.FIELD, "codec", "other.io.Codec")
    codec = type_doc("Codec", package="other.io", type_kind="interface")
    ctx = make_context(type_doc("Widget", field), documented=[codec])
    link = _signature_soup(ctx, field).select_one(".returnType a")
    assert link["href"] == "../other/io/Codec.html"
    assert link["title"] == "interface in other.io"


def test_annotation_element_renders_default(make_context: MakeContext) -> None:
    element = member(
        SymbolKind.ANNOTATION_ELEMENT, "value", "java.lang.String", default_value='"none"'
    )
    ctx = make_context(type_doc("Marker", element, type_kind="annotation"))
    soup = _signature_soup(ctx, element)
    assert _span_classes(soup) == ["returnType", "memberName", "defaultValue"]
    assert soup.select_one(".defaultValue").get_text() == '"none"'
    assert " default " in soup.get_text()


def test_link_source_links_member_name(make_context: MakeContext) -> None:
    field = member(SymbolKind.FIELD, "count", "int", source_line=42)
    ctx = make_context(type_doc("Widget", field), config=RenderConfig(link_source=True))
    link = _signature_soup(ctx, field).select_one(".memberName a")
    assert link is not None, "member names link to source when enabled"
    assert link["href"] == "../src-html/demo/Widget.html#line.42"


def test_link_source_off_keeps_plain_name(make_context: MakeContext) -> None:
    field = member(SymbolKind.FIELD, "count", "int", source_line=42)
    ctx = make_context(type_doc("Widget", field))
    assert _signature_soup(ctx, field).select_one(".memberName a") is None


def test_no_qualifier_shortens_unresolved_names(make_context: MakeContext) -> None:
    method = member(
        SymbolKind.METHOD,
        "names",
        "java.util.List<java.lang.String>",
    )
    config = RenderConfig(no_qualifier=("java.lang",))
    ctx = make_context(type_doc("Widget", method), config=config)
    text = _signature_soup(ctx, method).select_one(".returnType").get_text()
    assert text == "java.util.List<String>"


def test_wildcards_keep_their_bounds(make_context: MakeContext) -> None:
    method = member(
        SymbolKind.METHOD, "copy", "void", params=(("src", "java.util.List<? extends T>"),)
    )
    ctx = make_context(type_doc("Widget", method))
    text = _signature_soup(ctx, method).select_one(".parameters").get_text()
    assert text == "(java.util.List<? extends T>\u00a0src)"


def test_type_signature_uses_kind_keyword(make_context: MakeContext) -> None:
    page = type_doc("Marker", type_kind="annotation", modifiers=("public",))
    ctx = make_context(page)
    soup = _signature_soup(ctx, page.symbol)
    assert soup.select_one("div.typeSignature") is not None
    assert "@interface\u00a0Marker" in soup.get_text()


def test_unknown_kind_is_fatal(make_context: MakeContext) -> None:
    ctx = make_context(type_doc("Widget"))
    bogus = SimpleNamespace(kind="bogus", modifiers=(), name="x")
    with pytest.raises(UnsupportedKindError):
        ctx.signatures.format(bogus)  # type: ignore[arg-type]


def test_nested_types_share_top_level_source_page() -> None:
    assert source_path("demo.Outer.Inner") == "src-html/demo/Outer.html"


def test_superclass_keyword_comes_from_labels(make_context: MakeContext) -> None:
    page = type_doc("Widget", type=parse_type("demo.Base"))
    config = RenderConfig(labels={"extends": "erweitert"})
    ctx = make_context(page, config=config)
    text = _signature_soup(ctx, page.symbol).get_text()
    assert "\nerweitert demo.Base" in text, "the extends keyword is a label"


def test_primitive_types_skip_the_index(
    make_context: MakeContext, mocker: MockerFixture
) -> None:
    ctx = make_context(type_doc("Widget"))
    resolve = mocker.spy(ctx.index, "resolve")
    html = serialize(ctx.signatures.type_link(parse_type("int[]")))
    assert html == "int[]"
    resolve.assert_not_called()
    assert ctx.warnings == []
