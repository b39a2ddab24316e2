from __future__ import annotations

import pytest

from chart_helpers import FakeMeasurer, find_all, group, number, svg_root
from resources_timeline import InvalidInputError, Mark, TimelineBuilder
from validators import validate_timeline_svg


def _builder(measurer: FakeMeasurer, rows: list | None = None) -> TimelineBuilder:
    return TimelineBuilder(
        rows if rows is not None else [((0, 10, 50), None), ((20, 30, 80), None)],
        size=(0, 0, 800, 119),
        margin=(35, 10, 50, 10),
        extremes=(0, 100),
        measurer=measurer,
    )


def test_first_phase_cannot_draw_bars() -> None:
    builder = _builder(FakeMeasurer())
    assert not hasattr(builder, "bars")
    assert not hasattr(builder, "mark")


def test_finalize_recomputes_scale_after_label_columns() -> None:
    measurer = FakeMeasurer(char_width=6)
    timeline = _builder(measurer).label_column(["abcdefghij", "b"]).finalize()
    chart = timeline.chart
    assert chart.margin.left == 80
    assert not chart.scale_is_stale
    assert chart.scale.time_to_x == pytest.approx(7.1)

    document = timeline.bars().marks([Mark(10, "DOM Complete: 10ms", "#0000ff")]).stripes().document()
    root = svg_root(document)
    active = find_all(root, "rect", lambda node: node.get("class") == "active")
    assert [number(rect, "x") for rect in active] == pytest.approx([71, 213])
    assert find_all(group(root, "g_mark_labels"), "text")[0].text == "DOM Complete: 10ms"
    assert validate_timeline_svg(document.tostring()).status == "pass"
    assert measurer.closed == 1


def test_header_is_optional() -> None:
    document = _builder(FakeMeasurer()).without_header().finalize().document()
    assert find_all(svg_root(document), "text", lambda node: node.get("id") == "txt_header") == []


def test_document_releases_measurer_once() -> None:
    measurer = FakeMeasurer()
    timeline = _builder(measurer).finalize()
    with timeline:
        timeline.bars()
    timeline.document()
    assert measurer.closed == 1


def test_failed_data_releases_measurer() -> None:
    measurer = FakeMeasurer()
    with pytest.raises(InvalidInputError):
        _builder(measurer, rows=[])
    assert measurer.closed == 1


@pytest.mark.parametrize(
    "draw",
    [
        lambda timeline: timeline.bars(),
        lambda timeline: timeline.mark(10, "Loaded: 10ms", "#ff0000"),
        lambda timeline: timeline.stripes(),
    ],
    ids=["bars", "mark", "stripes"],
)
def test_drawing_after_document_is_rejected(draw) -> None:
    measurer = FakeMeasurer()
    timeline = _builder(measurer).finalize()
    timeline.document()
    with pytest.raises(InvalidInputError) as excinfo:
        draw(timeline)
    assert excinfo.value.code == "E3105_TIMELINE_CLOSED"
    assert measurer.measured == []
    assert measurer.closed == 1
