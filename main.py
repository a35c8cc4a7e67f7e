from __future__ import annotations

import argparse
import logging
from pathlib import Path

from linechart import LineChart, LineChartError, load_chart_config
from linechart.raster import RasterBackend


def _parse_series(raw: str) -> list[float]:
    try:
        return [float(part) for part in raw.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"series must be comma-separated numbers: {raw!r}") from exc


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="linechart")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render one or more series to a PNG file.")
    render.add_argument(
        "--series",
        type=_parse_series,
        action="append",
        required=True,
        help="Comma-separated values; repeat for multiple series.",
    )
    render.add_argument("--width", type=int, default=320)
    render.add_argument("--height", type=int, default=200)
    render.add_argument("--inset", type=float, default=None)
    render.add_argument("--config", type=Path, default=None, help="TOML chart config.")
    render.add_argument("--pointer", type=float, default=None, help="Simulate a pointer event at this pixel x.")
    render.add_argument("--out", type=Path, required=True)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        try:
            config = load_chart_config(args.config) if args.config is not None else None
            chart = LineChart(args.width, args.height, config=config)
            if args.inset is not None:
                chart.set_inset(args.inset)
            for values in args.series:
                chart.add_series(values)
            chart.on_data_point_selected(
                lambda index, values: print(f"x: {index}  " + "  ".join(f"y{i}: {v:g}" for i, v in enumerate(values)))
            )
            if args.pointer is not None:
                chart.handle_pointer(args.pointer)
            backend = RasterBackend(args.width, args.height)
            chart.render(backend)
            backend.save_png(args.out)
        except LineChartError as exc:
            parser.error(str(exc))
        print(f"wrote {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
