#!/usr/bin/env python3
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from resources_timeline import (  # noqa: E402
    TimelineError,
    load_style,
    load_timing,
    render_resources_timeline,
    save_png,
    save_svg,
)
from resources_timeline.export import DEFAULT_FILENAME  # noqa: E402
from validators import validate_timeline_svg  # noqa: E402

app = typer.Typer(
    add_completion=False,
    help="Render resource timing exports as SVG gantt charts, or check rendered charts.",
)


def _fail(exc: TimelineError) -> None:
    typer.echo(f"ERROR {exc.code}: {exc.message}", err=True)
    typer.echo(f"HINT: {exc.hint}", err=True)
    raise typer.Exit(code=1)


@app.command("render")
def render(
    timing_json: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON export with 'timing' and 'resources'.",
    ),
    out: Path = typer.Option(
        Path(DEFAULT_FILENAME),
        "--out",
        "-o",
        help="Output SVG path, or a directory for the default file name.",
    ),
    style: Path | None = typer.Option(
        None,
        "--style",
        dir_okay=False,
        help="Optional chart style YAML.",
    ),
    png: Path | None = typer.Option(
        None,
        "--png",
        help="Also rasterize the chart to this PNG path (needs cairosvg).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log layout decisions to stderr.",
    ),
) -> None:
    """Render a resources loading timeline."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        snapshot = load_timing(timing_json)
        document = render_resources_timeline(snapshot, style=load_style(style))
        target = save_svg(document, out)
        if png is not None:
            save_png(document, png)
    except TimelineError as exc:
        _fail(exc)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"ERROR E3999_UNEXPECTED: {exc}", err=True)
        typer.echo("HINT: Check input paths and the timing JSON content.", err=True)
        raise typer.Exit(code=1)
    typer.echo(str(target))


@app.command()
def check(
    svg: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Rendered timeline SVG.",
    ),
) -> None:
    """Check a rendered timeline for layer order, size and leftovers."""
    report = validate_timeline_svg(svg)
    typer.echo(json.dumps(report.to_dict(), indent=2, sort_keys=True))
    if report.status != "pass":
        raise typer.Exit(code=1)


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] not in {"render", "check", "-h", "--help"}:
        sys.argv.insert(1, "render")
    app(prog_name="timeline")
