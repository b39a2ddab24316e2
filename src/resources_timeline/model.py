from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RowMetadata(Protocol):
    """Anything that can describe a chart row: a numeric duration and a display name."""

    duration: float
    name: str


@dataclass(frozen=True)
class Interval:
    queue_start: float
    active_start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.active_start

    def bounds(self) -> tuple[float, float, float]:
        return (self.queue_start, self.active_start, self.end)


@dataclass(frozen=True)
class Row:
    interval: Interval
    metadata: Any


@dataclass(frozen=True)
class Mark:
    value: float
    label: str
    color: str
