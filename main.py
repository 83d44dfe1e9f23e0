from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path

from PIL import Image

from scrollgraph import (
    DistanceMarkerDecorator,
    GestureEvent,
    Graph,
    LineSeriesRenderer,
    Series,
    SeriesStyle,
    points_from_xy,
    validate_graph_style,
)
from scrollgraph.raster import paint_frame
from scrollgraph.renderers import SeriesRenderer


LOGGER = logging.getLogger("scrollgraph.cli")


def main() -> None:
    parser = argparse.ArgumentParser(prog="scrollgraph")
    parser.add_argument("--log-level", default="WARNING", help="Root logging level (DEBUG, INFO, ...).")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a sample graph into a PNG file.")
    render.add_argument("--out", type=Path, default=Path("chart.png"))
    render.add_argument("--width", type=int, default=960)
    render.add_argument("--height", type=int, default=540)
    render.add_argument("--samples", type=int, default=200, help="Number of sample points.")
    render.add_argument("--title", default="scrollgraph")
    render.add_argument("--viewport", type=float, nargs=2, metavar=("START", "SIZE"), default=None)
    render.add_argument("--pan", type=float, default=0.0, help="Drag distance in pixels applied before drawing.")
    render.add_argument("--zoom", type=float, default=1.0, help="Pinch factor applied before drawing.")
    render.add_argument("--background", action="store_true", help="Shade the area under the line.")
    render.add_argument("--markers", choices=["none", "metric", "imperial"], default="none")
    render.add_argument("--labels-on-right", action="store_true")
    render.add_argument("--text-size", type=float, default=20.0)
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))

    if args.command == "render":
        _run_render(args)
        return
    raise RuntimeError(f"unsupported command: {args.command}")


def _run_render(args: argparse.Namespace) -> None:
    if args.width <= 0 or args.height <= 0:
        raise ValueError("width/height must be > 0")
    if args.samples < 2:
        raise ValueError("samples must be >= 2")

    style = validate_graph_style({"text_size": args.text_size})
    renderer: SeriesRenderer = LineSeriesRenderer(draw_background=args.background)
    if args.markers != "none":
        renderer = DistanceMarkerDecorator(base=renderer, metric=args.markers == "metric")
    graph = Graph(args.title, style=style, renderer=renderer, labels_on_right=args.labels_on_right)
    graph.add_series(Series(_sample_points(args.samples), style=SeriesStyle(thickness=2.0), description="sample"))

    if args.viewport is not None:
        start, size = args.viewport
        graph.set_viewport(start, size)
        graph.set_scalable(True)
        # The first pass sizes the layout the gesture mapper converts pixels against.
        graph.draw(args.width, args.height)
        if args.zoom != 1.0:
            graph.handle_gesture(GestureEvent("scale_update", scale_factor=args.zoom))
            graph.handle_gesture(GestureEvent("scale_end"))
        if args.pan:
            anchor = args.width / 2
            graph.handle_gesture(GestureEvent("pan_start", x=anchor))
            graph.handle_gesture(GestureEvent("pan_move", x=anchor + args.pan))
            graph.handle_gesture(GestureEvent("pan_end"))
        vp = graph.viewport
        LOGGER.info("viewport after gestures: start=%s size=%s", vp.start, vp.size)

    frame = graph.draw(args.width, args.height)
    pixels = paint_frame(frame, font_family=style.font_family)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(pixels).save(args.out)
    print(f"wrote {args.out} ({len(frame.commands())} draw commands)")


def _sample_points(samples: int):
    # Distance in meters against a slowly varying pace curve.
    xs = [i * 25.0 for i in range(samples)]
    ys = [5.0 + math.sin(i / 12.0) + 0.3 * math.cos(i / 3.0) for i in range(samples)]
    return points_from_xy(ys, x=xs)


if __name__ == "__main__":
    main()
