from __future__ import annotations

from typing import Any, Sequence

from common.svg_builder import SvgBuilder
from resources_timeline.config import ChartStyle
from resources_timeline.errors import InvalidInputError
from resources_timeline.gantt import GanttChart
from resources_timeline.model import Mark
from resources_timeline.text_measure import TextMeasurer


class TimelineBuilder:
    """Two-phase front end for ``GanttChart``.

    Label columns are declared first; ``finalize`` draws them, recomputes the
    scale and hands back a ``FinalizedTimeline``, the only object that can
    draw bars, marks and stripes.
    """

    def __init__(
        self,
        rows: Sequence[Any],
        size: tuple[float, float, float, float],
        margin: tuple[float, float, float, float],
        extremes: tuple[float | None, float | None] = (None, None),
        style: ChartStyle | None = None,
        measurer: TextMeasurer | None = None,
    ) -> None:
        self._chart = GanttChart(style=style, measurer=measurer)
        self._columns: list[list[str]] = []
        self._header = True
        self._chart.set_extremes(*extremes)
        self._chart.set_size(*size)
        self._chart.set_margin(*margin)
        try:
            self._chart.set_data(rows)
        except Exception:
            self._chart.clean_up()
            raise

    def label_column(self, labels: Sequence[str]) -> "TimelineBuilder":
        self._columns.append([str(label) for label in labels])
        return self

    def without_header(self) -> "TimelineBuilder":
        self._header = False
        return self

    def finalize(self) -> "FinalizedTimeline":
        chart = self._chart
        try:
            if self._header:
                chart.render_header()
            for labels in self._columns:
                chart.render_labels(labels)
            chart.update_scale()
        except Exception:
            chart.clean_up()
            raise
        return FinalizedTimeline(chart)


class FinalizedTimeline:
    def __init__(self, chart: GanttChart) -> None:
        self.chart = chart
        self._closed = False

    def _require_open(self) -> GanttChart:
        if self._closed:
            raise InvalidInputError(
                code="E3105_TIMELINE_CLOSED",
                message="Timeline is closed; its measurer has been released.",
                hint="Draw bars, marks and stripes before calling document() or close().",
            )
        return self.chart

    def bars(self) -> "FinalizedTimeline":
        self._require_open().render()
        return self

    def mark(self, value: float, label: str, color: str) -> "FinalizedTimeline":
        self._require_open().render_mark(value, label, color)
        return self

    def marks(self, marks: Sequence[Mark]) -> "FinalizedTimeline":
        for mark in marks:
            self.mark(mark.value, mark.label, mark.color)
        return self

    def stripes(self) -> "FinalizedTimeline":
        self._require_open().render_stripes()
        return self

    def close(self) -> None:
        if not self._closed:
            self.chart.clean_up()
            self._closed = True

    def document(self) -> SvgBuilder:
        self.close()
        return self.chart.builder

    def __enter__(self) -> "FinalizedTimeline":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()
