from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from resources_timeline.errors import InvalidInputError

DEFAULT_STYLE_PATH = Path(__file__).resolve().parents[2] / "config" / "chart_style.v1.yaml"


@dataclass(frozen=True)
class FontStyle:
    family: str = "Helvetica"
    size: float = 14
    path: str | None = None


@dataclass(frozen=True)
class ChartStyle:
    font: FontStyle = field(default_factory=FontStyle)
    header_text: str = "Resources loading timeline"
    header_x: float = 10
    header_y: float = 25
    header_font_size: float = 20
    column_fill: str = "#B891DB"
    queued_fill: str = "#E0CEF0"
    column_rx: float = 8
    padding: float = 0.1
    label_max_chars: int = 20
    label_gap: float = 10
    label_dy: str = "0.5ex"
    duration_offset: float = 5
    duration_flip_offset: float = 10
    duration_unit: str = "ms"
    mark_font_size: float = 12
    mark_spacing: float = 15
    mark_stroke_width: float = 2
    mark_opacity: float = 0.7
    mark_dy: str = "1.5ex"
    stripe_fill: str = "#eeeeee"


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInputError(
            code="E3400_STYLE_INVALID",
            message=f"Expected mapping at top of YAML: {path}",
            hint="Start the style file with sections like font/header/column.",
        )
    return data


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {}) or {}
    if not isinstance(value, dict):
        raise InvalidInputError(
            code="E3400_STYLE_INVALID",
            message=f"Style section '{key}' must be a mapping.",
            hint="Check the indentation of the style YAML.",
        )
    return value


def style_from_dict(data: dict[str, Any]) -> ChartStyle:
    defaults = ChartStyle()
    font = _section(data, "font")
    header = _section(data, "header")
    column = _section(data, "column")
    label = _section(data, "label")
    duration = _section(data, "duration")
    mark = _section(data, "mark")
    stripe = _section(data, "stripe")
    try:
        font_path = font.get("path")
        return ChartStyle(
            font=FontStyle(
                family=str(font.get("family", defaults.font.family)),
                size=float(font.get("size", defaults.font.size)),
                path=str(font_path) if font_path else None,
            ),
            header_text=str(header.get("text", defaults.header_text)),
            header_x=float(header.get("x", defaults.header_x)),
            header_y=float(header.get("y", defaults.header_y)),
            header_font_size=float(header.get("font_size", defaults.header_font_size)),
            column_fill=str(column.get("fill", defaults.column_fill)),
            queued_fill=str(column.get("queued_fill", defaults.queued_fill)),
            column_rx=float(column.get("rx", defaults.column_rx)),
            padding=float(column.get("padding", defaults.padding)),
            label_max_chars=int(label.get("max_chars", defaults.label_max_chars)),
            label_gap=float(label.get("gap", defaults.label_gap)),
            label_dy=str(label.get("dy", defaults.label_dy)),
            duration_offset=float(duration.get("offset", defaults.duration_offset)),
            duration_flip_offset=float(duration.get("flip_offset", defaults.duration_flip_offset)),
            duration_unit=str(duration.get("unit", defaults.duration_unit)),
            mark_font_size=float(mark.get("font_size", defaults.mark_font_size)),
            mark_spacing=float(mark.get("spacing", defaults.mark_spacing)),
            mark_stroke_width=float(mark.get("stroke_width", defaults.mark_stroke_width)),
            mark_opacity=float(mark.get("opacity", defaults.mark_opacity)),
            mark_dy=str(mark.get("dy", defaults.mark_dy)),
            stripe_fill=str(stripe.get("fill", defaults.stripe_fill)),
        )
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(
            code="E3400_STYLE_INVALID",
            message=f"Invalid style value: {exc}",
            hint="Numeric style keys (sizes, offsets, padding) must be numbers.",
        ) from exc


def load_style(path: Path | None = None) -> ChartStyle:
    resolved = path or DEFAULT_STYLE_PATH
    if not resolved.exists():
        if path is not None:
            raise InvalidInputError(
                code="E3400_STYLE_INVALID",
                message=f"Style file not found: {resolved}",
                hint="Pass an existing YAML file to --style.",
            )
        return ChartStyle()
    return style_from_dict(_load_yaml(resolved))
