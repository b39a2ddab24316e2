from __future__ import annotations

import pytest

from chart_helpers import FakeMeasurer, find_all, group, svg_root, view_box
from resources_timeline import render_resources_timeline
from resources_timeline.timeline import NO_ENTRIES_MESSAGE, NOT_SUPPORTED_MESSAGE
from resources_timeline.timing import parse_timing
from validators import validate_timeline_svg

EXPORT = {
    "timing": {
        "navigationStart": 1000,
        "domInteractive": 1850,
        "loadEventStart": 2400,
        "loadEventEnd": 2410,
    },
    "resources": [
        {
            "name": "https://example.com/static/js/application.bundle.min.js",
            "initiatorType": "script",
            "startTime": 120,
            "responseStart": 180,
            "responseEnd": 640,
            "duration": 520,
        },
        {
            "name": "https://fonts.example.net/",
            "initiatorType": "link",
            "startTime": 200,
            "responseStart": 0,
            "responseEnd": 300,
        },
        {
            "name": "https://example.com/img/hero.jpg",
            "initiatorType": "img",
            "startTime": 900,
            "responseStart": 1100,
            "responseEnd": 1390.5,
        },
    ],
}


def _render(data: dict = EXPORT, measurer: FakeMeasurer | None = None):
    return render_resources_timeline(parse_timing(data), measurer=measurer or FakeMeasurer())


def test_canvas_grows_with_rows() -> None:
    root = svg_root(_render())
    assert (root.get("width"), root.get("height")) == ("800", "146")
    assert view_box(root) == [0, 0, 800, 146]


def test_name_and_initiator_columns() -> None:
    root = svg_root(_render())
    names = [text.text for text in find_all(group(root, "g_labels_0"), "text")]
    initiators = [text.text for text in find_all(group(root, "g_labels_1"), "text")]
    assert names == ["application.bundle.m", "fonts.example.net", "hero.jpg"]
    assert initiators == ["script", "link", "img"]


def test_duration_labels_report_entry_duration() -> None:
    root = svg_root(_render())
    labels = [text.text for text in find_all(group(root, "g_durations"), "text")]
    # fetch duration from startTime, not the response phase alone
    assert labels == ["520.00ms", "100.00ms", "490.50ms"]


def test_navigation_marks() -> None:
    root = svg_root(_render())
    labels = [text.text for text in find_all(group(root, "g_mark_labels"), "text")]
    assert labels == ["Navigation start: 0ms", "DOM Complete: 850ms", "Loaded: 1400ms"]
    strokes = [path.get("stroke") for path in find_all(group(root, "g_mark_lines"), "path")]
    assert strokes == ["#00ff00", "#0000ff", "#ff0000"]


def test_document_passes_checks_and_releases_measurer() -> None:
    measurer = FakeMeasurer()
    document = _render(measurer=measurer)
    report = validate_timeline_svg(document.tostring())
    assert report.status == "pass", report.to_dict()
    assert report.stats == {"rows": 3, "label_columns": 2, "marks": 3, "stripes": 2}
    assert measurer.closed == 1


def test_output_is_deterministic() -> None:
    assert _render().tostring() == _render().tostring()


@pytest.mark.parametrize(
    "data, message",
    [
        ({"timing": EXPORT["timing"]}, NOT_SUPPORTED_MESSAGE),
        ({"timing": EXPORT["timing"], "resources": []}, NO_ENTRIES_MESSAGE),
    ],
)
def test_fallback_message_without_entries(data: dict, message: str) -> None:
    measurer = FakeMeasurer()
    document = _render(data, measurer)
    texts = [text.text for text in find_all(svg_root(document), "text")]
    assert texts == [message]
    assert measurer.measured == []
    report = validate_timeline_svg(document.tostring())
    assert [issue.code for issue in report.warnings] == ["W2120_NO_ROWS"]
