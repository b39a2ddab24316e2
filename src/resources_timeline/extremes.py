from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from resources_timeline.errors import InvalidInputError
from resources_timeline.model import Interval, Row

ROUND_STEP = 100


@dataclass(frozen=True)
class Extremes:
    minimum: float
    maximum: float


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def round_up(value: float, step: int = ROUND_STEP) -> float:
    return math.ceil(value / step) * step


def coerce_row(value: Any, index: int) -> Row:
    if isinstance(value, Row):
        return value
    try:
        interval, metadata = value
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(
            code="E3101_ROW_INVALID",
            message=f"Row {index} must be an (interval, metadata) pair.",
            hint="Pass Row objects or two-item tuples.",
        ) from exc
    if not isinstance(interval, Interval):
        try:
            interval = Interval(*interval)
        except TypeError as exc:
            raise InvalidInputError(
                code="E3101_ROW_INVALID",
                message=f"Row {index} interval must have three bounds.",
                hint="Use (queue_start, active_start, end).",
            ) from exc
    return Row(interval=interval, metadata=metadata)


def validate_interval(interval: Interval, index: int) -> None:
    bounds = interval.bounds()
    if not all(_is_number(value) for value in bounds):
        raise InvalidInputError(
            code="E3101_ROW_INVALID",
            message=f"Row {index} has a non-numeric bound: {bounds}",
            hint="Interval bounds must be finite numbers.",
        )
    if not interval.queue_start <= interval.active_start <= interval.end:
        raise InvalidInputError(
            code="E3102_ROW_ORDER",
            message=f"Row {index} bounds are out of order: {bounds}",
            hint="Expected queue_start <= active_start <= end.",
        )


def _override(value: float | None, label: str) -> list[float]:
    if value is None:
        return []
    if not _is_number(value):
        raise InvalidInputError(
            code="E3103_OVERRIDE_INVALID",
            message=f"Extremes override {label} must be numeric, got {value!r}.",
            hint="Pass a number or leave the override unset.",
        )
    return [value]


def resolve_extremes(
    rows: Sequence[Row] | Iterable[Row],
    minimum: float | None = None,
    maximum: float | None = None,
) -> Extremes:
    """Fold the bounds of every row together with the overrides.

    Overrides only widen the range. The upper extreme is rounded up to the
    next multiple of 100; the lower one is kept as is.
    """
    rows = list(rows)
    if not rows:
        raise InvalidInputError(
            code="E3100_ROWS_EMPTY",
            message="Cannot derive extremes from an empty row sequence.",
            hint="Render the not-supported message instead of an empty chart.",
        )
    overrides = _override(minimum, "min") + _override(maximum, "max")
    low = min(overrides) if overrides else math.inf
    high = max(overrides) if overrides else -math.inf
    for index, row in enumerate(rows):
        validate_interval(row.interval, index)
        bounds = row.interval.bounds()
        low = min(low, *bounds)
        high = max(high, *bounds)
    return Extremes(minimum=low, maximum=round_up(high))
