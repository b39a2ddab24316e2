from __future__ import annotations

import logging
import warnings
from typing import Any, Sequence

import svgwrite

from common.svg_builder import DEFAULT_TEXT_ANCHOR, SvgBuilder
from resources_timeline.config import ChartStyle
from resources_timeline.errors import InvalidInputError, StaleScaleWarning
from resources_timeline.extremes import Extremes, coerce_row, resolve_extremes
from resources_timeline.layout import LayoutEngine, Margin, PlotBox
from resources_timeline.model import Row, RowMetadata
from resources_timeline.scale import Scale, compute_scale
from resources_timeline.text_measure import PillowTextMeasurer, TextMeasurer

logger = logging.getLogger(__name__)


class GanttChart:
    """Humble SVG gantt chart.

    Call order matters: ``set_size`` -> ``set_margin`` -> ``set_data`` ->
    ``render_header`` / ``render_labels`` (grows the left margin) ->
    ``update_scale`` -> ``render`` -> ``render_mark`` -> ``render_stripes`` ->
    ``clean_up``. Nothing enforces it; rendering bars after a label column
    without ``update_scale`` draws them against the old plot box.
    """

    def __init__(
        self,
        style: ChartStyle | None = None,
        measurer: TextMeasurer | None = None,
    ) -> None:
        self.style = style or ChartStyle()
        self.measurer: TextMeasurer = measurer or PillowTextMeasurer(self.style.font)
        self.layout = LayoutEngine()
        self.builder: SvgBuilder | None = None
        self.rows: list[Row] = []
        self.extremes: Extremes | None = None
        self.scale: Scale | None = None
        self.mark_spacing = 0.0
        self._min: float | None = None
        self._max: float | None = None
        self._scaled_plot_box: PlotBox | None = None
        self._label_columns = 0
        self._marks = 0

    def __enter__(self) -> "GanttChart":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.clean_up()

    @property
    def margin(self) -> Margin:
        return self.layout.margin

    @property
    def plot_box(self) -> PlotBox | None:
        return self.layout.plot_box

    @property
    def scale_is_stale(self) -> bool:
        if self.scale is None or self.layout.box is None:
            return False
        return self.layout.derive_plot_box() != self._scaled_plot_box

    def _require_builder(self) -> SvgBuilder:
        if self.builder is None:
            raise InvalidInputError(
                code="E3202_SCALE_INPUT_MISSING",
                message="Chart size is not set.",
                hint="Call set_size before rendering.",
            )
        return self.builder

    def _require_scale(self) -> Scale:
        if self.scale is None:
            raise InvalidInputError(
                code="E3202_SCALE_INPUT_MISSING",
                message="Chart scale is not computed.",
                hint="Call set_data before rendering bars, marks or stripes.",
            )
        return self.scale

    def _warn_if_stale(self, what: str) -> None:
        if self.scale_is_stale:
            warnings.warn(
                f"{what} rendered with a scale computed before the last margin change; "
                "call update_scale() first.",
                StaleScaleWarning,
                stacklevel=3,
            )

    # Set SVG size; the viewBox gets the same box.
    def set_size(self, x: float, y: float, width: float, height: float) -> None:
        self.layout.set_size(x, y, width, height)
        self.builder = SvgBuilder.create(x, y, width, height)

    def set_margin(self, top: float, right: float, bottom: float, left: float) -> None:
        self.layout.set_margin(top, right, bottom, left)

    def set_extremes(self, minimum: float | None = None, maximum: float | None = None) -> None:
        """Extend the data range; each bound is kept only when given."""
        if minimum is not None:
            self._min = minimum
        if maximum is not None:
            self._max = maximum

    def set_data(self, rows: Sequence[Any]) -> None:
        self.rows = [coerce_row(row, index) for index, row in enumerate(rows)]
        self.extremes = resolve_extremes(self.rows, self._min, self._max)
        self.update_scale()

    def update_scale(self) -> Scale:
        plot_box = self.layout.update_plot_box()
        maximum = self.extremes.maximum if self.extremes is not None else None
        self.scale = compute_scale(plot_box, maximum, len(self.rows))
        self._scaled_plot_box = plot_box
        logger.debug(
            "scale updated: time_to_x=%.4f row_to_y=%.4f plot=%s",
            self.scale.time_to_x,
            self.scale.row_to_y,
            plot_box,
        )
        return self.scale

    def render_header(self) -> None:
        builder = self._require_builder()
        style = self.style
        builder.drawing.add(
            builder.text(
                style.header_text,
                style.header_x,
                style.header_y,
                font_size=style.header_font_size,
                font_family=style.font.family,
                id="txt_header",
            )
        )

    def _label(
        self, x: float, y: float, content: str, anchor: str = DEFAULT_TEXT_ANCHOR
    ) -> svgwrite.text.Text:
        builder = self._require_builder()
        return builder.text(
            content,
            x,
            y,
            font_size=self.style.font.size,
            font_family=self.style.font.family,
            anchor=anchor,
            dy=self.style.label_dy,
        )

    def render_labels(self, labels: Sequence[str]) -> float:
        """Draw one label per row left of the plot and widen the left margin to fit them."""
        builder = self._require_builder()
        scale = self._require_scale()
        margin = self.layout.margin
        margin_left = margin.left
        group = builder.add_group(f"g_labels_{self._label_columns}")
        self._label_columns += 1

        widest = 0.0
        for n, label in enumerate(labels):
            content = str(label)[: self.style.label_max_chars]
            label_y = scale.row_to_y * (n + 0.5) + margin.top
            group.add(self._label(margin_left, label_y, content))
            width, _ = self.measurer.measure(content)
            widest = max(widest, width)

        self.layout.grow_left(widest + self.style.label_gap)
        return self.layout.margin.left

    def duration_text(self, row: Row) -> str:
        if isinstance(row.metadata, RowMetadata):
            duration = row.metadata.duration
        else:
            duration = row.interval.duration
        return f"{float(duration):.2f}{self.style.duration_unit}"

    def render_column(self, row: Row, n: int) -> svgwrite.container.Group:
        builder = self._require_builder()
        scale = self._require_scale()
        drawing = builder.drawing
        style = self.style
        interval = row.interval
        top = scale.row_to_y * (n + style.padding)
        height = scale.row_to_y * (1 - 2 * style.padding)

        column = drawing.g(id=f"g_row_{n}")
        column.add(
            drawing.rect(
                insert=(scale.x(interval.queue_start), top),
                size=(scale.x(interval.active_start - interval.queue_start), height),
                rx=style.column_rx,
                fill=style.queued_fill,
                class_="queued",
            )
        )
        column.add(
            drawing.rect(
                insert=(scale.x(interval.active_start), top),
                size=(scale.x(interval.end - interval.active_start), height),
                rx=style.column_rx,
                fill=style.column_fill,
                class_="active",
            )
        )
        return column

    def render(self) -> None:
        """Draw the bars and their duration labels inside the plot box."""
        builder = self._require_builder()
        scale = self._require_scale()
        self._warn_if_stale("Bars")
        plot_box = self.layout.plot_box
        width = plot_box.width

        bars = builder.add_group("g_bars", translate=(plot_box.x, plot_box.y))
        labels = builder.add_group("g_durations", translate=(plot_box.x, plot_box.y))
        for n, row in enumerate(self.rows):
            bars.add(self.render_column(row, n))

            text = self.duration_text(row)
            label_x = scale.x(row.interval.end) + self.style.duration_offset
            label_y = scale.row_to_y * (n + 0.5)
            text_width, _ = self.measurer.measure(text)
            if width < label_x + text_width:
                logger.debug("duration label %d flipped inside its bar", n)
                label = self._label(
                    label_x - self.style.duration_flip_offset,
                    label_y,
                    text,
                    anchor="end",
                )
            else:
                label = self._label(label_x, label_y, text)
            labels.add(label)

    def render_mark(self, value: float, label: str, color: str) -> None:
        """Vertical line at ``value`` with its label stacked below the previous mark's."""
        builder = self._require_builder()
        scale = self._require_scale()
        self._warn_if_stale("Mark")
        drawing = builder.drawing
        style = self.style
        margin = self.layout.margin
        x_pos = margin.left + scale.x(value)
        y_pos = margin.top + self.layout.plot_box.height

        lines = builder.groups.get("g_mark_lines") or builder.add_group("g_mark_lines")
        texts = builder.groups.get("g_mark_labels") or builder.add_group("g_mark_labels")
        lines.add(
            drawing.path(
                d=f"M {x_pos} {margin.top} V {y_pos + self.mark_spacing + style.mark_spacing}",
                stroke=color,
                stroke_width=style.mark_stroke_width,
                stroke_opacity=style.mark_opacity,
                id=f"mark_{self._marks}",
            )
        )
        texts.add(
            builder.text(
                label,
                x_pos - 5,
                y_pos + 2 + self.mark_spacing,
                font_size=style.mark_font_size,
                font_family=style.font.family,
                anchor="end",
                dy=style.mark_dy,
                id=f"txt_mark_{self._marks}",
            )
        )
        self._marks += 1
        self.mark_spacing += style.mark_spacing

    def render_stripes(self) -> None:
        """Shade every other row across the full canvas, below everything else."""
        builder = self._require_builder()
        scale = self._require_scale()
        self._warn_if_stale("Stripes")
        box = self.layout.box
        top = self.layout.margin.top
        stripes = builder.add_group("g_stripes", bottom=True)
        for i in range(0, len(self.rows), 2):
            stripes.add(
                builder.drawing.rect(
                    insert=(box.x, top + scale.row_to_y * i),
                    size=(box.width, scale.row_to_y),
                    fill=self.style.stripe_fill,
                )
            )

    def clean_up(self) -> None:
        self.measurer.close()
