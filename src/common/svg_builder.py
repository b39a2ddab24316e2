from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import svgwrite

DEFAULT_FONT_FAMILY = "Helvetica"
DEFAULT_TEXT_ANCHOR = "start"


@dataclass
class SvgBuilder:
    drawing: svgwrite.Drawing
    x: float
    y: float
    width: float
    height: float
    groups: dict[str, svgwrite.container.Group] = field(default_factory=dict)

    @classmethod
    def create(cls, x: float, y: float, width: float, height: float) -> "SvgBuilder":
        drawing = svgwrite.Drawing(size=(width, height), profile="full")
        drawing.viewbox(x, y, width, height)
        return cls(drawing=drawing, x=x, y=y, width=width, height=height)

    def add_group(
        self,
        group_id: str,
        translate: tuple[float, float] | None = None,
        bottom: bool = False,
    ) -> svgwrite.container.Group:
        group = self.drawing.g(id=group_id)
        if translate is not None:
            group.translate(*translate)
        if bottom:
            # keep <defs> first, everything else above the new group
            elements = self.drawing.elements
            defs = getattr(self.drawing, "defs", None)
            index = elements.index(defs) + 1 if defs in elements else 0
            elements.insert(index, group)
        else:
            self.drawing.add(group)
        self.groups[group_id] = group
        return group

    def text(
        self,
        content: str,
        x: float,
        y: float,
        font_size: float | None = None,
        font_family: str = DEFAULT_FONT_FAMILY,
        anchor: str = DEFAULT_TEXT_ANCHOR,
        dy: str | None = None,
        **extra: Any,
    ) -> svgwrite.text.Text:
        kwargs: dict[str, Any] = {
            "insert": (x, y),
            "font_family": font_family,
            "text_anchor": anchor,
        }
        if font_size is not None:
            kwargs["font_size"] = float(font_size)
        if dy:
            kwargs["dy"] = [dy]
        kwargs.update(extra)
        return self.drawing.text(content, **kwargs)

    def tostring(self) -> str:
        return self.drawing.tostring()

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.drawing.saveas(str(path))
