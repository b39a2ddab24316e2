from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from .report import ValidationIssue, ValidationReport

E1000_PARSE_ERROR = "E1000_PARSE_ERROR"
E2020_SIZE_MISMATCH = "E2020_SIZE_MISMATCH"
E2021_LAYER_ORDER = "E2021_LAYER_ORDER"
E2022_MEASUREMENT_ARTIFACT = "E2022_MEASUREMENT_ARTIFACT"
E2023_STRIPE_ROW = "E2023_STRIPE_ROW"
E2024_NEGATIVE_WIDTH = "E2024_NEGATIVE_WIDTH"
W2120_NO_ROWS = "W2120_NO_ROWS"

LAYER_ORDER = ["g_stripes", "txt_header", "g_labels", "g_bars", "g_durations", "g_mark_lines", "g_mark_labels"]
VIEWBOX_SPLIT_RE = re.compile(r"[\s,]+")
NUMBER_RE = re.compile(r"^\s*([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)")


def local_name(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def parse_number(value: str | None) -> float | None:
    if value is None:
        return None
    match = NUMBER_RE.match(value)
    if not match:
        return None
    return float(match.group(1))


def _parse_svg(svg: Path | str) -> ET.Element:
    if isinstance(svg, str) and svg.lstrip().startswith("<"):
        return ET.fromstring(svg)
    return ET.parse(svg).getroot()


def _layer_key(node_id: str) -> str:
    if node_id.startswith("g_labels_"):
        return "g_labels"
    return node_id


def _check_size(root: ET.Element) -> list[ValidationIssue]:
    width = parse_number(root.get("width"))
    height = parse_number(root.get("height"))
    view_box = [item for item in VIEWBOX_SPLIT_RE.split(root.get("viewBox") or "") if item]
    if len(view_box) != 4:
        return [
            ValidationIssue(
                code=E2020_SIZE_MISMATCH,
                message="Document has no four-value viewBox.",
                hint="Set the chart size before rendering.",
            )
        ]
    box_width, box_height = float(view_box[2]), float(view_box[3])
    if width != box_width or height != box_height:
        return [
            ValidationIssue(
                code=E2020_SIZE_MISMATCH,
                message=f"Size {width}x{height} differs from viewBox {box_width}x{box_height}.",
                hint="width/height and viewBox must describe the same box.",
                context={"width": width, "height": height, "viewBox": view_box},
            )
        ]
    return []


def _check_layer_order(root: ET.Element) -> list[ValidationIssue]:
    seen: list[str] = []
    for child in root:
        key = _layer_key(child.get("id") or "")
        if key in LAYER_ORDER and (not seen or seen[-1] != key):
            seen.append(key)
    ranks = [LAYER_ORDER.index(key) for key in seen]
    if ranks != sorted(ranks):
        return [
            ValidationIssue(
                code=E2021_LAYER_ORDER,
                message=f"Layers out of order: {seen}",
                hint=f"Expected bottom-to-top order {LAYER_ORDER}.",
                context={"layers": seen},
            )
        ]
    return []


def _check_artifacts(elements: list[ET.Element]) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for node in elements:
        if parse_number(node.get("opacity")) == 0:
            issues.append(
                ValidationIssue(
                    code=E2022_MEASUREMENT_ARTIFACT,
                    message="Invisible element left in the document.",
                    hint="Measurement helpers must be released before saving.",
                    context={"tag": local_name(node.tag), "id": node.get("id")},
                )
            )
    return issues


def _check_widths(elements: list[ET.Element]) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for node in elements:
        if local_name(node.tag) != "rect":
            continue
        width = parse_number(node.get("width"))
        if width is not None and width < 0:
            issues.append(
                ValidationIssue(
                    code=E2024_NEGATIVE_WIDTH,
                    message=f"Rectangle with negative width {width}.",
                    hint="Interval bounds must be ordered.",
                    context={"x": node.get("x"), "y": node.get("y")},
                )
            )
    return issues


def _check_stripes(root: ET.Element, rows: int) -> tuple[list[ValidationIssue], int]:
    stripes_group = next((child for child in root if child.get("id") == "g_stripes"), None)
    if stripes_group is None:
        return [], 0
    stripes = [node for node in stripes_group if local_name(node.tag) == "rect"]
    expected = (rows + 1) // 2
    if len(stripes) != expected:
        return [
            ValidationIssue(
                code=E2023_STRIPE_ROW,
                message=f"Found {len(stripes)} stripes for {rows} rows, expected {expected}.",
                hint="Stripes belong behind even rows only.",
            )
        ], len(stripes)
    return [], len(stripes)


def validate_timeline_svg(svg: Path | str) -> ValidationReport:
    """Check a rendered timeline document for structural problems."""
    issues: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []
    stats: dict[str, Any] = {}

    try:
        root = _parse_svg(svg)
    except (ET.ParseError, OSError) as exc:
        issues.append(
            ValidationIssue(
                code=E1000_PARSE_ERROR,
                message=f"Failed to parse SVG: {exc}",
                hint="Ensure the SVG is well-formed XML.",
                context={"tag": "svg"},
            )
        )
        return ValidationReport(status="fail", errors=issues, stats=stats)

    elements = list(root.iter())
    rows = sum(1 for node in elements if (node.get("id") or "").startswith("g_row_"))
    stats["rows"] = rows
    stats["label_columns"] = sum(
        1 for child in root if (child.get("id") or "").startswith("g_labels_")
    )
    stats["marks"] = sum(1 for node in elements if (node.get("id") or "").startswith("mark_"))

    issues.extend(_check_size(root))
    issues.extend(_check_layer_order(root))
    issues.extend(_check_artifacts(elements))
    issues.extend(_check_widths(elements))
    stripe_issues, stripe_count = _check_stripes(root, rows)
    issues.extend(stripe_issues)
    stats["stripes"] = stripe_count
    if rows == 0:
        warnings.append(
            ValidationIssue(
                code=W2120_NO_ROWS,
                message="Document contains no chart rows.",
                hint="Expected for the not-supported message only.",
            )
        )

    status = "fail" if issues else "pass"
    return ValidationReport(status=status, errors=issues, warnings=warnings, stats=stats)
