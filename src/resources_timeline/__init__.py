"""resources_timeline library package."""

from .builder import FinalizedTimeline, TimelineBuilder
from .config import ChartStyle, load_style
from .errors import (
    DegenerateScaleError,
    ExportError,
    InvalidInputError,
    StaleScaleWarning,
    TimelineError,
)
from .export import save_png, save_svg, to_data_uri, to_svg_string
from .extremes import Extremes, resolve_extremes
from .gantt import GanttChart
from .layout import Box, LayoutEngine, Margin, PlotBox
from .model import Interval, Mark, Row, RowMetadata
from .scale import Scale, compute_scale
from .text_measure import PillowTextMeasurer, TextMeasurer, measuring
from .timeline import render_resources_timeline
from .timing import ResourceEntry, TimingSnapshot, load_timing, short_name

__all__ = [
    "Box",
    "ChartStyle",
    "DegenerateScaleError",
    "ExportError",
    "Extremes",
    "FinalizedTimeline",
    "GanttChart",
    "Interval",
    "InvalidInputError",
    "LayoutEngine",
    "Margin",
    "Mark",
    "PillowTextMeasurer",
    "PlotBox",
    "ResourceEntry",
    "Row",
    "RowMetadata",
    "Scale",
    "StaleScaleWarning",
    "TextMeasurer",
    "TimelineBuilder",
    "TimelineError",
    "TimingSnapshot",
    "compute_scale",
    "load_style",
    "load_timing",
    "measuring",
    "render_resources_timeline",
    "resolve_extremes",
    "save_png",
    "save_svg",
    "short_name",
    "to_data_uri",
    "to_svg_string",
]
