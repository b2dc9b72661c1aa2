"""Tests for page composition across every member kind."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from apidoc_pages.composer import KIND_ORDER, PageComposer
from apidoc_pages.config import RenderConfig
from apidoc_pages.errors import DuplicateAnchorError, UnsupportedKindError
from apidoc_pages.labels import Labels
from apidoc_pages.markup import serialize
from apidoc_pages.model.index import SymbolIndex
from apidoc_pages.model.symbols import ApiModel, SymbolKind, TypeDoc
from apidoc_pages.writers import writer_for

from builders import BASE, member, type_doc


def _composer(*pages: TypeDoc, config: RenderConfig | None = None) -> PageComposer:
    effective = config or RenderConfig()
    index = SymbolIndex.from_model(ApiModel(types=pages))
    return PageComposer(effective, Labels(effective.labels), index)


def _soup(composer: PageComposer, page: TypeDoc) -> BeautifulSoup:
    return BeautifulSoup(serialize(composer.compose(page)), "html.parser")


@pytest.fixture
def full_page() -> TypeDoc:
    """Return a page with members of every kind, including an inherited one."""
    return type_doc(
        "Widget",
        member(SymbolKind.ANNOTATION_ELEMENT, "level", "int", default_value="1"),
        member(SymbolKind.METHOD, "size", "int", doc_comment="Returns the size."),
        member(SymbolKind.TYPE, "Mode", type_kind="enum"),
        member(SymbolKind.CONSTRUCTOR, "Widget"),
        member(SymbolKind.FIELD, "count", "int"),
        member(SymbolKind.METHOD, "describe", "java.lang.String", owner=BASE, inherited=True),
        member(SymbolKind.METHOD, "reset", "void"),
        doc_comment="A widget.",
    )


def test_compose_is_deterministic(full_page: TypeDoc) -> None:
    composer = _composer(full_page)
    first = composer.compose(full_page)
    second = composer.compose(full_page)
    assert first == second, "composing the same page twice must give equal trees"
    assert serialize(first) == serialize(second)


def test_summary_blocks_follow_fixed_kind_order(full_page: TypeDoc) -> None:
    soup = _soup(_composer(full_page), full_page)
    summary = soup.select_one("section.summary")
    order = [block["class"][0] for block in summary.find_all("section", recursive=False)]
    assert order == [
        "fieldSummary",
        "constructorSummary",
        "methodSummary",
        "nestedClassSummary",
        "elementSummary",
    ]
    details = soup.select_one("section.details")
    detail_order = [
        block["class"][0] for block in details.find_all("section", recursive=False)
    ]
    assert detail_order == [
        "fieldDetails",
        "constructorDetails",
        "methodDetails",
        "elementDetails",
    ], "nested types never get detail blocks"


def test_row_count_matches_symbols(full_page: TypeDoc) -> None:
    soup = _soup(_composer(full_page), full_page)
    method_rows = soup.select("section.methodSummary table tbody tr")
    assert len(method_rows) == 3, "declared and inherited methods each get a row"
    method_details = soup.select("section.methodDetails section.detail")
    assert len(method_details) == 2, "only declared methods get detail sections"
    inherited = soup.select("section.methodSummary div.inheritedList")
    assert len(inherited) == 1


def test_empty_kinds_produce_no_output() -> None:
    page = type_doc("Widget", member(SymbolKind.METHOD, "run", "void"))
    html = serialize(_composer(page).compose(page))
    assert "FIELD SUMMARY" not in html
    assert "fieldSummary" not in html
    assert "constructorDetails" not in html
    assert html.count("METHOD SUMMARY") == 1


def test_page_without_members_has_only_a_header() -> None:
    page = type_doc("Empty")
    soup = _soup(_composer(page), page)
    assert soup.select_one("div.header h1.title").get_text() == "Class Empty"
    assert soup.select_one("section.summary") is None
    assert soup.select_one("section.details") is None


def test_header_shows_package_and_signature() -> None:
    page = type_doc(
        "Codec",
        type_kind="interface",
        modifiers=("public",),
        deprecated=True,
        doc_comment="Encodes values.",
    )
    soup = _soup(_composer(page), page)
    header = soup.select_one("div.header")
    assert header.select_one(".subTitle").get_text() == "Package demo"
    assert header.select_one("h1.title").get_text() == "Interface Codec"
    assert header.select_one("div.typeSignature") is not None
    assert header.select_one(".deprecatedLabel").get_text() == "Deprecated."
    assert header.select_one("div.block").get_text() == "Encodes values."


def test_compose_page_records_anchors_in_order() -> None:
    page = type_doc(
        "Widget",
        member(SymbolKind.FIELD, "count", "int"),
        member(SymbolKind.METHOD, "run", "void"),
    )
    rendered = _composer(page).compose_page(page)
    assert rendered.path == "demo/Widget.html"
    assert rendered.anchors == [
        "field.summary",
        "count",
        "method.summary",
        "run()",
        "field.detail",
        "method.detail",
    ]
    assert len(set(rendered.anchors)) == len(rendered.anchors)


def test_overloads_with_same_erasure_are_disambiguated() -> None:
    page = type_doc(
        "Widget",
        member(SymbolKind.METHOD, "get", "int", params=(("i", "int"),)),
        member(SymbolKind.METHOD, "get", "int", params=(("l", "long"),)),
        member(SymbolKind.METHOD, "put", "void", params=(("v", "java.util.List<T>"),)),
        member(SymbolKind.METHOD, "put", "void", params=(("v", "java.util.List<U>"),)),
    )
    anchors = _composer(page).compose_page(page).anchors
    assert "get(int)" in anchors
    assert "get(long)" in anchors
    assert "put(java.util.List)" in anchors
    assert "put(java.util.List)-2" in anchors


def test_strict_mode_duplicate_aborts_page() -> None:
    page = type_doc(
        "Widget",
        member(SymbolKind.FIELD, "count", "int"),
        member(SymbolKind.FIELD, "count", "long"),
    )
    with pytest.raises(DuplicateAnchorError):
        _composer(page).compose(page)


def test_permissive_mode_suffixes_duplicate_fields() -> None:
    page = type_doc(
        "Widget",
        member(SymbolKind.FIELD, "count", "int"),
        member(SymbolKind.FIELD, "count", "long"),
    )
    config = RenderConfig(strict_anchors=False)
    anchors = _composer(page, config=config).compose_page(page).anchors
    assert "count" in anchors
    assert "count-2" in anchors


def test_member_order_by_name() -> None:
    page = type_doc(
        "Widget",
        member(SymbolKind.METHOD, "zeta", "void"),
        member(SymbolKind.METHOD, "alpha", "void"),
    )
    config = RenderConfig(member_order="name")
    soup = _soup(_composer(page, config=config), page)
    names = [h3.get_text() for h3 in soup.select("section.methodDetails h3")]
    assert names == ["alpha", "zeta"]


def test_supplied_writers_are_reordered_by_kind() -> None:
    page = type_doc(
        "Widget",
        member(SymbolKind.METHOD, "run", "void"),
        member(SymbolKind.FIELD, "count", "int"),
    )
    writers = [writer_for(SymbolKind.METHOD), writer_for(SymbolKind.FIELD)]
    soup = BeautifulSoup(serialize(_composer(page).compose(page, writers)), "html.parser")
    blocks = soup.select_one("section.summary").find_all("section", recursive=False)
    assert [block["class"][0] for block in blocks] == ["fieldSummary", "methodSummary"]


def test_missing_writer_for_member_kind_is_fatal() -> None:
    page = type_doc("Widget", member(SymbolKind.FIELD, "count", "int"))
    with pytest.raises(UnsupportedKindError):
        _composer(page).compose(page, [writer_for(SymbolKind.METHOD)])


def test_unresolved_references_become_warnings() -> None:
    page = type_doc(
        "Widget",
        member(SymbolKind.FIELD, "name", "java.lang.String"),
        member(SymbolKind.METHOD, "label", "java.lang.String"),
    )
    rendered = _composer(page).compose_page(page)
    assert [w.reference for w in rendered.warnings] == ["java.lang.String"]
    assert all(w.page == "demo/Widget.html" for w in rendered.warnings)


def test_kind_order_is_fixed() -> None:
    assert KIND_ORDER == (
        SymbolKind.FIELD,
        SymbolKind.CONSTRUCTOR,
        SymbolKind.METHOD,
        SymbolKind.TYPE,
        SymbolKind.ANNOTATION_ELEMENT,
    )
