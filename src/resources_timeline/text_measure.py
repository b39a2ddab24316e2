from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Protocol

from PIL import Image, ImageDraw, ImageFont

from resources_timeline.config import FontStyle

logger = logging.getLogger(__name__)

FALLBACK_FONTS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/Library/Fonts/Arial.ttf",
    "C:/Windows/Fonts/arial.ttf",
]


class TextMeasurer(Protocol):
    def measure(self, text: str) -> tuple[float, float]:
        ...

    def close(self) -> None:
        ...


def _load_font(font: FontStyle) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(int(round(font.size)), 1)
    candidates: list[str] = []
    if font.path:
        candidates.append(font.path)
    candidates.append(f"{font.family}.ttf")
    candidates.extend(path for path in FALLBACK_FONTS if Path(path).exists())
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    logger.debug("no TrueType font for %s, using Pillow default", font.family)
    return ImageFont.load_default(size=size)


class PillowTextMeasurer:
    """Measures label text on a scratch Pillow surface.

    The surface and the font are created on the first ``measure`` call and
    dropped by ``close``; nothing measured here ends up in the SVG.
    """

    def __init__(self, font: FontStyle) -> None:
        self.font_style = font
        self._image: Image.Image | None = None
        self._draw: ImageDraw.ImageDraw | None = None
        self._font: ImageFont.FreeTypeFont | ImageFont.ImageFont | None = None

    @property
    def is_open(self) -> bool:
        return self._image is not None

    def _open(self) -> ImageDraw.ImageDraw:
        if self._draw is None:
            self._image = Image.new("L", (1, 1))
            self._draw = ImageDraw.Draw(self._image)
            self._font = _load_font(self.font_style)
        return self._draw

    def measure(self, text: str) -> tuple[float, float]:
        draw = self._open()
        left, top, right, bottom = draw.textbbox((0, 0), text, font=self._font)
        return float(right - left), float(bottom - top)

    def close(self) -> None:
        if self._image is not None:
            self._image.close()
        self._image = None
        self._draw = None
        self._font = None

    def __enter__(self) -> "PillowTextMeasurer":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()


@contextmanager
def measuring(measurer: TextMeasurer) -> Iterator[TextMeasurer]:
    try:
        yield measurer
    finally:
        measurer.close()
