from __future__ import annotations

from dataclasses import dataclass

from resources_timeline.errors import DegenerateScaleError, InvalidInputError
from resources_timeline.layout import PlotBox


@dataclass(frozen=True)
class Scale:
    """Pixels per unit on each axis.

    ``time_to_x`` maps a time value (from origin 0) to a horizontal offset,
    ``row_to_y`` maps a row index to a vertical offset. Both are relative to
    the plot box they were computed from.
    """

    time_to_x: float
    row_to_y: float

    def x(self, value: float) -> float:
        return value * self.time_to_x


def compute_scale(plot_box: PlotBox | None, maximum: float | None, row_count: int | None) -> Scale:
    if plot_box is None or maximum is None or row_count is None:
        raise InvalidInputError(
            code="E3202_SCALE_INPUT_MISSING",
            message="Scale needs a plot box, a resolved maximum and a row count.",
            hint="Call set_size, set_margin and set_data before rendering.",
        )
    if row_count == 0:
        raise DegenerateScaleError(
            code="E3200_SCALE_ROWS_ZERO",
            message="Cannot scale rows for a chart without rows.",
            hint="Guard against empty data before building the chart.",
        )
    if maximum == 0:
        raise DegenerateScaleError(
            code="E3201_SCALE_MAX_ZERO",
            message="Cannot scale time values when the resolved maximum is 0.",
            hint="Provide data or a max override greater than 0.",
        )
    return Scale(
        time_to_x=plot_box.width / maximum,
        row_to_y=plot_box.height / row_count,
    )
