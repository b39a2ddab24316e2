from __future__ import annotations

from pathlib import Path

import pytest

from validators import validate_timeline_svg
from validators.validate import (
    E1000_PARSE_ERROR,
    E2020_SIZE_MISMATCH,
    E2021_LAYER_ORDER,
    E2022_MEASUREMENT_ARTIFACT,
    E2023_STRIPE_ROW,
    E2024_NEGATIVE_WIDTH,
)


def _svg(body: str, width: str = "800", view_box: str = "0 0 800 102") -> str:
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="102" viewBox="{view_box}">
  <defs />
{body}
</svg>
"""


ROWS = """  <g id="g_bars" transform="translate(10,35)">
    <g id="g_row_0"><rect x="0" y="1.7" width="78" height="13.6" /></g>
    <g id="g_row_1"><rect x="0" y="18.7" width="78" height="13.6" /></g>
    <g id="g_row_2"><rect x="0" y="35.7" width="78" height="13.6" /></g>
  </g>"""

STRIPES = """  <g id="g_stripes">
    <rect x="0" y="35" width="800" height="17" />
    <rect x="0" y="69" width="800" height="17" />
  </g>"""


def _codes(svg_text: str) -> set[str]:
    return {issue.code for issue in validate_timeline_svg(svg_text).errors}


def test_well_formed_document_passes() -> None:
    report = validate_timeline_svg(_svg(STRIPES + '\n  <text id="txt_header">T</text>\n' + ROWS))
    assert report.status == "pass"
    assert report.stats["rows"] == 3
    assert report.stats["stripes"] == 2


def test_size_must_match_view_box() -> None:
    assert E2020_SIZE_MISMATCH in _codes(_svg(STRIPES + ROWS, width="640"))
    assert E2020_SIZE_MISMATCH in _codes(_svg(STRIPES + ROWS, view_box="0 0 800"))


@pytest.mark.parametrize("view_box", ["0 0 800 102", "0,0,800,102", "0, 0, 800, 102"])
def test_view_box_separators_are_accepted(view_box: str) -> None:
    report = validate_timeline_svg(_svg(STRIPES + ROWS, view_box=view_box))
    assert report.error_codes == []


def test_size_mismatch_with_comma_view_box() -> None:
    report = validate_timeline_svg(_svg(STRIPES + ROWS, view_box="0,0,640,102"))
    assert report.error_codes == [E2020_SIZE_MISMATCH]


def test_stripes_above_bars_are_out_of_order() -> None:
    assert E2021_LAYER_ORDER in _codes(_svg(ROWS + STRIPES))


def test_marks_below_bars_are_out_of_order() -> None:
    marks = '  <g id="g_mark_lines"><path d="M 10 35 V 67" /></g>'
    assert E2021_LAYER_ORDER in _codes(_svg(marks + ROWS))


def test_invisible_helper_is_reported() -> None:
    helper = '  <text opacity="0">measure me</text>'
    assert E2022_MEASUREMENT_ARTIFACT in _codes(_svg(STRIPES + ROWS + helper))


def test_stripe_on_every_row_is_reported() -> None:
    stripes = STRIPES.replace("</g>", '  <rect x="0" y="52" width="800" height="17" />\n  </g>')
    assert E2023_STRIPE_ROW in _codes(_svg(stripes + ROWS))


def test_negative_width_is_reported() -> None:
    rows = ROWS.replace('width="78"', 'width="-4"', 1)
    assert E2024_NEGATIVE_WIDTH in _codes(_svg(STRIPES + rows))


def test_unparseable_file(tmp_path: Path) -> None:
    path = tmp_path / "broken.svg"
    path.write_text("<svg")
    report = validate_timeline_svg(path)
    assert report.status == "fail"
    assert [issue.code for issue in report.errors] == [E1000_PARSE_ERROR]
