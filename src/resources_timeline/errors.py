from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TimelineError(Exception):
    code: str
    message: str
    hint: str

    def __str__(self) -> str:
        return self.message


class InvalidInputError(TimelineError):
    """Extremes or scaling inputs cannot be derived from the data."""


class DegenerateScaleError(TimelineError):
    """A scale factor would divide by zero."""


class ExportError(TimelineError):
    pass


class StaleScaleWarning(UserWarning):
    """Bars or marks rendered with a scale computed before the last margin change."""
