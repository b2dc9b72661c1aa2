"""Tests for the ``apidoc generate`` command."""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from apidoc_pages.cli import app, generate

MODEL_YAML = """
types:
  - name: Widget
    package: demo
    members:
      - {kind: field, name: count, type: int}
  - name: Base
    package: demo
"""


@pytest.fixture
def model_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Write the fixture model and run from its directory."""
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "api.yaml"
    path.write_text(MODEL_YAML, encoding="utf-8")
    return path


def test_generate_prints_written_paths(
    model_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    generate(model=model_path, output_dir=tmp_path / "site")
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["wrote site/demo/Widget.html", "wrote site/demo/Base.html"]


def test_generate_reads_config_file(
    model_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "apidoc.yaml").write_text("output_dir: docs/api\n", encoding="utf-8")
    generate(model=model_path, type_name=["demo.Base"])
    assert capsys.readouterr().out.splitlines() == ["wrote docs/api/demo/Base.html"]
    assert (tmp_path / "docs" / "api" / "demo" / "Base.html").exists()


def test_explicit_missing_config_is_an_error(model_path: Path, tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        generate(model=model_path, config=tmp_path / "missing.yaml")


def test_missing_model_is_an_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        generate(model=tmp_path / "absent.yaml")


def test_options_parse_from_command_line() -> None:
    command, bound, *_ = app.parse_args(
        [
            "generate",
            "--model",
            "m.yaml",
            "--type",
            "demo.Widget",
            "--type",
            "demo.Base",
            "--jobs",
            "2",
        ]
    )
    assert command is generate
    assert bound.arguments["model"] == Path("m.yaml")
    assert bound.arguments["type_name"] == ["demo.Widget", "demo.Base"]
    assert bound.arguments["jobs"] == 2


def test_options_fall_back_to_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APIDOC_OUTPUT_DIR", "out")
    monkeypatch.setenv("APIDOC_JOBS", "4")
    _command, bound, *_ = app.parse_args(["generate"])
    assert bound.arguments["output_dir"] == Path("out")
    assert bound.arguments["jobs"] == 4


def test_generate_forwards_options_to_generator(
    model_path: Path, tmp_path: Path, mocker: MockerFixture
) -> None:
    generator_cls = mocker.patch("apidoc_pages.cli.ApiPageGenerator")
    generator_cls.return_value.run.return_value = []
    generate(model=model_path, output_dir=tmp_path / "out", type_name=["demo.Base"], jobs=3)
    _args, kwargs = generator_cls.call_args
    assert kwargs == {"output_dir": tmp_path / "out", "jobs": 3}
    generator_cls.return_value.run.assert_called_once_with(["demo.Base"])
