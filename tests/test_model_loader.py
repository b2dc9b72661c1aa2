"""Tests for the YAML symbol model loader and type expression parser."""

from __future__ import annotations

from pathlib import Path

import pytest

from apidoc_pages.errors import ModelError
from apidoc_pages.model.loader import build_model, load_model, parse_type
from apidoc_pages.model.symbols import ApiModel, SymbolKind

MODEL_YAML = """
types:
  - name: Widget
    package: demo
    kind: class
    modifiers: public
    extends: demo.Base
    doc: A widget.
    line: 3
    members:
      - kind: field
        name: count
        type: int
        modifiers: [public, static]
      - kind: constructor
        parameters:
          - {name: size, type: int}
      - kind: method
        name: parse
        returns: java.util.List<java.lang.String>
        parameters:
          - {name: args, type: "java.lang.String..."}
        throws: [java.io.IOException]
        deprecated: Use load instead.
        tags:
          - {kind: "@since", text: "1.1"}
          - {kind: see, target: demo.Base}
      - kind: method
        name: describe
        returns: java.lang.String
        inherited_from: demo.Base
  - name: Mode
    enclosing: demo.Widget
    kind: enum
"""


def _load(tmp_path: Path, text: str = MODEL_YAML) -> ApiModel:
    path = tmp_path / "api.yaml"
    path.write_text(text, encoding="utf-8")
    return load_model(path)


def test_types_and_members_load_in_order(tmp_path: Path) -> None:
    model = _load(tmp_path)
    assert [t.qualified_name for t in model] == ["demo.Widget", "demo.Widget.Mode"]
    widget = model.get_type("demo.Widget")
    assert widget.symbol.modifiers == ("public",)
    assert widget.symbol.type is not None
    assert widget.symbol.type.qualified_name == "demo.Base"
    assert widget.symbol.source_line == 3
    assert [m.kind for m in widget.members] == [
        SymbolKind.FIELD,
        SymbolKind.CONSTRUCTOR,
        SymbolKind.METHOD,
        SymbolKind.METHOD,
    ]


def test_member_details(tmp_path: Path) -> None:
    widget = _load(tmp_path).get_type("demo.Widget")
    field, ctor, parse, describe = widget.members
    assert field.modifiers == ("public", "static")
    assert ctor.name == "Widget", "constructors default to the owner's name"
    assert parse.parameters[0].type.varargs
    assert parse.throws[0].qualified_name == "java.io.IOException"
    assert parse.deprecated
    assert parse.deprecation_text == "Use load instead."
    assert [tag.kind for tag in parse.tags] == ["since", "see"]
    assert parse.tags[1].target == "demo.Base"
    assert describe.inherited
    assert describe.enclosing_type == "demo.Base"
    assert field.enclosing_type == "demo.Widget"


def test_nested_type_package_follows_enclosure(tmp_path: Path) -> None:
    mode = _load(tmp_path).get_type("demo.Widget.Mode")
    assert mode.package == "demo"
    assert mode.symbol.type_kind == "enum"


def test_unknown_type_lookup_raises(tmp_path: Path) -> None:
    with pytest.raises(KeyError):
        _load(tmp_path).get_type("demo.Missing")


def test_missing_model_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_model(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "payload",
    [
        {"types": {"name": "Widget"}},
        {"types": [{"package": "demo"}]},
        {"types": [{"name": "W", "members": [{"kind": "property", "name": "x"}]}]},
        {"types": [{"name": "W", "members": [{"kind": "field", "name": "x"}]}]},
        {"types": [{"name": "W", "members": [{"kind": "method", "type": "int"}]}]},
        {"types": [{"name": "W", "deprecated": 3}]},
        {"types": [{"name": "W", "tags": [{"text": "no kind"}]}]},
    ],
)
def test_malformed_entries_raise_model_error(payload: dict[str, object]) -> None:
    with pytest.raises(ModelError):
        build_model(payload)


@pytest.mark.parametrize(
    ("text", "erasure", "argument_count"),
    [
        ("int", "int", 0),
        ("java.lang.String[][]", "java.lang.String[][]", 0),
        ("java.util.Map<K, java.util.List<V>>", "java.util.Map", 2),
        ("T...", "T...", 0),
    ],
)
def test_parse_type(text: str, erasure: str, argument_count: int) -> None:
    ref = parse_type(text)
    assert ref.erasure() == erasure
    assert len(ref.arguments) == argument_count


@pytest.mark.parametrize("text", ["", "java.util.List<T", "Map<K,>", "int]"])
def test_parse_type_rejects_malformed_text(text: str) -> None:
    with pytest.raises(ModelError):
        parse_type(text)
