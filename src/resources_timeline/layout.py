from __future__ import annotations

import logging
from dataclasses import dataclass

from resources_timeline.errors import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float


@dataclass
class Margin:
    """CSS ordering: top, right, bottom, left."""

    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0


@dataclass(frozen=True)
class PlotBox:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


class LayoutEngine:
    """Owns the canvas box and its margin; the plot box is derived from both.

    ``plot_box`` is a snapshot taken by ``update_plot_box`` and goes stale
    whenever the size or margins change afterwards.
    """

    def __init__(self) -> None:
        self.box: Box | None = None
        self.margin = Margin()
        self.plot_box: PlotBox | None = None

    def set_size(self, x: float, y: float, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise InvalidInputError(
                code="E3104_SIZE_RANGE",
                message=f"Chart size must be positive, got {width}x{height}.",
                hint="Provide a positive width and height.",
            )
        self.box = Box(x=x, y=y, width=width, height=height)

    def set_margin(self, top: float, right: float, bottom: float, left: float) -> None:
        self.margin = Margin(top=top, right=right, bottom=bottom, left=left)

    def grow_left(self, amount: float) -> float:
        if amount > 0:
            self.margin.left += amount
            logger.debug("left margin grown by %.2f to %.2f", amount, self.margin.left)
        return self.margin.left

    def derive_plot_box(self) -> PlotBox:
        if self.box is None:
            raise InvalidInputError(
                code="E3202_SCALE_INPUT_MISSING",
                message="Chart size is not set.",
                hint="Call set_size before deriving the plot box.",
            )
        margin = self.margin
        return PlotBox(
            x=margin.left,
            y=margin.top,
            width=self.box.width - (margin.right + margin.left),
            height=self.box.height - (margin.top + margin.bottom),
        )

    def update_plot_box(self) -> PlotBox:
        self.plot_box = self.derive_plot_box()
        return self.plot_box
