from __future__ import annotations

import sys
from pathlib import Path
from urllib.parse import unquote

import pytest

from chart_helpers import FakeMeasurer
from resources_timeline import ExportError, TimelineBuilder, save_png, save_svg, to_data_uri, to_svg_string
from resources_timeline.export import DEFAULT_FILENAME, to_svg_bytes


def _document():
    return (
        TimelineBuilder(
            [((0, 10, 50), None)],
            size=(0, 0, 800, 102),
            margin=(35, 10, 50, 10),
            measurer=FakeMeasurer(),
        )
        .finalize()
        .bars()
        .stripes()
        .document()
    )


def test_save_into_directory_uses_default_name(tmp_path: Path) -> None:
    target = save_svg(_document(), tmp_path)
    assert target == tmp_path / DEFAULT_FILENAME
    assert "<svg" in target.read_text()


def test_save_to_explicit_path_creates_parents(tmp_path: Path) -> None:
    target = save_svg(_document(), tmp_path / "out" / "chart.svg")
    assert target.exists()


def test_data_uri_round_trips_document() -> None:
    document = _document()
    uri = to_data_uri(document)
    assert uri.startswith("data:image/svg+xml,")
    assert unquote(uri.split(",", 1)[1]) == to_svg_string(document)


def test_bytes_are_utf8_document() -> None:
    document = _document()
    assert to_svg_bytes(document).decode("utf-8") == to_svg_string(document)


def test_png_export_without_cairosvg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "cairosvg", None)
    with pytest.raises(ExportError) as excinfo:
        save_png(_document(), tmp_path)
    assert excinfo.value.code == "E3500_EXPORT_FAILED"
