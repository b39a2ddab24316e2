from __future__ import annotations

from pathlib import Path
from urllib.parse import quote

from common.svg_builder import SvgBuilder
from resources_timeline.errors import ExportError

DEFAULT_FILENAME = "Resources loading timeline.svg"


def to_svg_string(builder: SvgBuilder) -> str:
    return builder.tostring()


def to_svg_bytes(builder: SvgBuilder) -> bytes:
    return to_svg_string(builder).encode("utf-8")


def to_data_uri(builder: SvgBuilder) -> str:
    return "data:image/svg+xml," + quote(to_svg_string(builder))


def resolve_output(path: Path, filename: str = DEFAULT_FILENAME) -> Path:
    if path.is_dir():
        return path / filename
    return path


def save_svg(builder: SvgBuilder, path: Path) -> Path:
    """Write the document; a directory gets the default file name."""
    target = resolve_output(path)
    builder.save(target)
    return target


def save_png(builder: SvgBuilder, path: Path) -> Path:
    target = resolve_output(path, Path(DEFAULT_FILENAME).with_suffix(".png").name)
    try:
        import cairosvg
    except ImportError as exc:  # pragma: no cover - depends on env
        raise ExportError(
            code="E3500_EXPORT_FAILED",
            message="cairosvg is not installed.",
            hint="Install the 'png' extra to rasterize timelines.",
        ) from exc
    target.parent.mkdir(parents=True, exist_ok=True)
    try:
        cairosvg.svg2png(bytestring=to_svg_bytes(builder), write_to=str(target))
    except Exception as exc:  # noqa: BLE001
        raise ExportError(
            code="E3500_EXPORT_FAILED",
            message=f"cairosvg failed: {exc}",
            hint="Check that the rendered SVG is well-formed.",
        ) from exc
    return target
