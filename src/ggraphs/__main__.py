"""CLI entry point: render charts from JSON series or HTML tables to SVG/PNG."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from . import settings
from .charting.registry import chart_registry
from .engine import GGraphs
from .options import LEGEND_POSITIONS
from .services.container_host import Document, StaticContainer

_CONTAINER_ID = "ggraphs-cli"


def _load_json(path: str) -> tuple[Any, dict]:
    """Return (series, extra options) from a JSON file.

    Accepts either a bare list of series or ``{"data": [...], "options": {...}}``.
    """
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        return payload.get("data"), dict(payload.get("options") or {})
    return payload, {}


def cmd_render(args: argparse.Namespace) -> int:
    options: dict[str, Any] = {}
    if args.table_file:
        document = Document(Path(args.table_file).read_text(encoding="utf-8"))
        options["table"] = args.table_id
    else:
        document = Document()
        data, extra = _load_json(args.data)
        options.update(extra)
        options["data"] = data
    options["type"] = args.type
    if args.no_animation:
        options["animation"] = False
    if args.legend == "none":
        options["show_legend"] = False
    else:
        options["show_legend"] = True
        options["legend_position"] = args.legend

    document.add_container(StaticContainer(_CONTAINER_ID, args.width, args.height))
    chart = GGraphs(_CONTAINER_ID, options, document=document)
    if chart.last_error is not None:
        print(f"render failed: {chart.last_error}", file=sys.stderr)
        chart.destroy()
        return 1
    try:
        out = chart.export(args.out, args.format, scale=args.scale)
    finally:
        chart.destroy()
    print(
        json.dumps(
            {
                "out": str(out),
                "type": chart.chart_type,
                "width": chart.width,
                "height": chart.height,
                "series": len(chart.series),
            },
            indent=2,
            ensure_ascii=False,
        )
    )
    return 0


def cmd_types(args: argparse.Namespace) -> int:
    print(json.dumps(chart_registry.list_types(), indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ggraphs")
    p.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level (default from GGRAPHS_LOG_LEVEL)")
    sub = p.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a chart to SVG or PNG")
    source = render.add_mutually_exclusive_group(required=True)
    source.add_argument("--data", help="JSON file with a list of series")
    source.add_argument("--table-file", help="HTML file containing the data table")
    render.add_argument("--table-id", help="Id of the <table> inside --table-file")
    render.add_argument("--type", default="line", help="Chart type (line, bar, pie, donut, gauge)")
    render.add_argument("--width", type=float, default=800, help="Surface width in px")
    render.add_argument("--height", type=float, default=500, help="Surface height in px")
    render.add_argument("--no-animation", action="store_true", help="Emit the final state only")
    render.add_argument("--legend", choices=[*LEGEND_POSITIONS, "none"], default="bottom")
    render.add_argument("--format", choices=["svg", "png"], help="Output format (default: from --out suffix)")
    render.add_argument("--scale", type=float, default=1.0, help="Raster scale for PNG")
    render.add_argument("--out", required=True, help="Output file path")
    render.set_defaults(func=cmd_render)

    types = sub.add_parser("types", help="List supported chart types")
    types.set_defaults(func=cmd_types)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "table_file", None) and not args.table_id:
        parser.error("--table-id is required with --table-file")
    logging.basicConfig(level=str(args.log_level).upper(), format="%(levelname)s %(name)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
