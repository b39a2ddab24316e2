from __future__ import annotations

import pytest

from resources_timeline import PillowTextMeasurer, measuring
from resources_timeline.config import FontStyle


def test_surface_is_created_lazily_and_released() -> None:
    measurer = PillowTextMeasurer(FontStyle(size=14))
    assert not measurer.is_open
    width, height = measurer.measure("underscore.js")
    assert measurer.is_open
    assert width > 0
    assert height > 0
    measurer.close()
    assert not measurer.is_open


def test_longer_text_measures_wider() -> None:
    with PillowTextMeasurer(FontStyle(size=14)) as measurer:
        short_width, _ = measurer.measure("abc")
        long_width, _ = measurer.measure("abcabcabcabc")
    assert long_width > short_width


def test_font_size_changes_measurement() -> None:
    with PillowTextMeasurer(FontStyle(size=12)) as small, PillowTextMeasurer(FontStyle(size=28)) as big:
        assert big.measure("Loaded: 1200ms")[0] > small.measure("Loaded: 1200ms")[0]


def test_measuring_releases_on_error() -> None:
    measurer = PillowTextMeasurer(FontStyle())
    with pytest.raises(RuntimeError):
        with measuring(measurer):
            measurer.measure("logo11w.png")
            raise RuntimeError("render failed")
    assert not measurer.is_open


def test_close_is_safe_without_measurement() -> None:
    measurer = PillowTextMeasurer(FontStyle())
    measurer.close()
    measurer.close()
    assert not measurer.is_open
