from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from resources_timeline.errors import InvalidInputError
from resources_timeline.model import Interval, Row

NAVIGATION_KEYS = ("navigationStart", "domInteractive", "loadEventStart", "loadEventEnd")


def short_name(url: str) -> str:
    """Shorten a URL to something that fits a label column.

    - http://github.com => github.com
    - http://underscorejs.org/underscore.js => underscore.js
    - https://www.google.com/images/srpr/logo11w.png => logo11w.png
    """
    parts = urlsplit(url)
    path = parts.path
    if path in {"", "/"}:
        return parts.hostname or url
    return path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class ResourceEntry:
    name: str
    initiator_type: str
    start_time: float
    response_start: float
    response_end: float
    duration: float

    @property
    def interval(self) -> Interval:
        return Interval(self.start_time, self.response_start, self.response_end)


@dataclass(frozen=True)
class TimingSnapshot:
    navigation_start: float
    dom_interactive: float
    load_event_start: float
    load_event_end: float
    resources: list[ResourceEntry] | None

    @property
    def supported(self) -> bool:
        return self.resources is not None

    @property
    def dom_complete(self) -> float:
        return self.dom_interactive - self.navigation_start

    @property
    def loaded(self) -> float:
        return self.load_event_start - self.navigation_start

    @property
    def load_end(self) -> float:
        return self.load_event_end - self.navigation_start

    def rows(self) -> list[Row]:
        return [Row(interval=entry.interval, metadata=entry) for entry in self.resources or []]


def _number(entry: dict[str, Any], key: str, default: float | None = None) -> float:
    value = entry.get(key, default)
    if value is None:
        raise InvalidInputError(
            code="E3300_TIMING_INVALID",
            message=f"Timing entry is missing '{key}'.",
            hint="Export entries with performance.getEntriesByType('resource').",
        )
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(
            code="E3300_TIMING_INVALID",
            message=f"Timing value '{key}' must be numeric, got {value!r}.",
            hint="Check the exported timing JSON.",
        ) from exc


def parse_resource(entry: Any) -> ResourceEntry:
    if not isinstance(entry, dict):
        raise InvalidInputError(
            code="E3301_TIMING_TYPE",
            message="Each resource entry must be a JSON object.",
            hint="Export entries with their name/startTime/responseEnd fields.",
        )
    start = _number(entry, "startTime")
    # responseStart is 0 for cross-origin entries without Timing-Allow-Origin
    response_start = _number(entry, "responseStart", 0.0) or start
    response_end = _number(entry, "responseEnd")
    duration = _number(entry, "duration", response_end - start)
    return ResourceEntry(
        name=str(entry.get("name", "")),
        initiator_type=str(entry.get("initiatorType", "")),
        start_time=start,
        response_start=response_start,
        response_end=response_end,
        duration=duration,
    )


def parse_timing(data: Any) -> TimingSnapshot:
    if not isinstance(data, dict):
        raise InvalidInputError(
            code="E3301_TIMING_TYPE",
            message="Timing JSON must contain an object at the top level.",
            hint="Wrap the export as {\"timing\": {...}, \"resources\": [...]}.",
        )
    timing = data.get("timing")
    if timing is None:
        timing = {}
    if not isinstance(timing, dict):
        raise InvalidInputError(
            code="E3301_TIMING_TYPE",
            message="'timing' must be an object.",
            hint="Export performance.timing as a JSON object.",
        )
    navigation = {key: _number(timing, key, 0.0) for key in NAVIGATION_KEYS}
    raw_resources = data.get("resources")
    resources: list[ResourceEntry] | None = None
    if raw_resources is not None:
        if not isinstance(raw_resources, list):
            raise InvalidInputError(
                code="E3301_TIMING_TYPE",
                message="'resources' must be a list of entries.",
                hint="Export performance.getEntriesByType('resource') as a list.",
            )
        resources = [parse_resource(entry) for entry in raw_resources]
    return TimingSnapshot(
        navigation_start=navigation["navigationStart"],
        dom_interactive=navigation["domInteractive"],
        load_event_start=navigation["loadEventStart"],
        load_event_end=navigation["loadEventEnd"],
        resources=resources,
    )


def load_timing(path: Path) -> TimingSnapshot:
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise InvalidInputError(
            code="E3300_TIMING_INVALID",
            message=f"Failed to parse timing JSON: {exc}",
            hint="Ensure the timing export is valid JSON.",
        ) from exc
    return parse_timing(data)
