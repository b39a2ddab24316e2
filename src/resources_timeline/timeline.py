from __future__ import annotations

import logging

from common.svg_builder import SvgBuilder
from resources_timeline.builder import TimelineBuilder
from resources_timeline.config import ChartStyle
from resources_timeline.model import Mark
from resources_timeline.text_measure import TextMeasurer
from resources_timeline.timing import TimingSnapshot, short_name

logger = logging.getLogger(__name__)

CHART_WIDTH = 800
ROW_HEIGHT = 22
CHROME_HEIGHT = 80
CHART_MARGIN = (35, 10, 50, 10)
NOT_SUPPORTED_MESSAGE = "This browser doesn't support Resource Timing API :("
NO_ENTRIES_MESSAGE = "No resource entries were recorded."

NAVIGATION_COLOR = "#00ff00"
DOM_COMPLETE_COLOR = "#0000ff"
LOADED_COLOR = "#ff0000"


def _format_ms(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value)}ms"
    return f"{value}ms"


def timeline_marks(snapshot: TimingSnapshot) -> list[Mark]:
    return [
        Mark(0, "Navigation start: 0ms", NAVIGATION_COLOR),
        Mark(
            snapshot.dom_complete,
            f"DOM Complete: {_format_ms(snapshot.dom_complete)}",
            DOM_COMPLETE_COLOR,
        ),
        Mark(snapshot.loaded, f"Loaded: {_format_ms(snapshot.loaded)}", LOADED_COLOR),
    ]


def render_message(message: str, style: ChartStyle | None = None) -> SvgBuilder:
    style = style or ChartStyle()
    builder = SvgBuilder.create(0, 0, CHART_WIDTH, CHROME_HEIGHT)
    builder.drawing.add(
        builder.text(
            message,
            style.header_x,
            style.header_y,
            font_size=style.font.size,
            font_family=style.font.family,
            id="txt_message",
        )
    )
    return builder


def render_resources_timeline(
    snapshot: TimingSnapshot,
    style: ChartStyle | None = None,
    measurer: TextMeasurer | None = None,
) -> SvgBuilder:
    """Build the resources loading timeline for one page load.

    Falls back to a plain message when the snapshot has no resource entries;
    the chart itself is never built without rows.
    """
    if not snapshot.supported:
        return render_message(NOT_SUPPORTED_MESSAGE, style)
    if not snapshot.resources:
        return render_message(NO_ENTRIES_MESSAGE, style)

    rows = snapshot.rows()
    names = [short_name(entry.name) for entry in snapshot.resources]
    initiators = [short_name(entry.initiator_type) for entry in snapshot.resources]
    logger.debug("rendering %d resource rows", len(rows))

    timeline = (
        TimelineBuilder(
            rows,
            size=(0, 0, CHART_WIDTH, len(rows) * ROW_HEIGHT + CHROME_HEIGHT),
            margin=CHART_MARGIN,
            extremes=(0, snapshot.load_end),
            style=style,
            measurer=measurer,
        )
        .label_column(names)
        .label_column(initiators)
        .finalize()
    )
    with timeline:
        timeline.bars().marks(timeline_marks(snapshot)).stripes()
    return timeline.document()
