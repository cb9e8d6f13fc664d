from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from textplot.chart import Chart
from textplot.config import AxisStyle, ChartConfig
from textplot.errors import ConfigurationError, ExpressionError
from textplot.expression import compile_formula
from textplot.shapes import Continuous


LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FORMULA = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="textplot", description="Plot a formula of x in the terminal.")
    parser.add_argument("formula", metavar="FORMULA", help="Formula to plot, e.g. 'sin(x) / x'.")
    parser.add_argument("--xmin", type=float, default=-10.0, help="X-axis start value.")
    parser.add_argument("--xmax", type=float, default=10.0, help="X-axis end value.")
    parser.add_argument("--ymin", type=float, default=None, help="Y-axis start value (requires --ymax).")
    parser.add_argument("--ymax", type=float, default=None, help="Y-axis end value (requires --ymin).")
    parser.add_argument("-W", "--width", type=int, default=90, help="Chart width in character columns.")
    parser.add_argument("-H", "--height", type=int, default=15, help="Chart height in character rows.")
    parser.add_argument(
        "--axis",
        choices=[style.value for style in AxisStyle],
        default=AxisStyle.SOLID.value,
        help="How the x=0 and y=0 axis lines are drawn.",
    )
    parser.add_argument("--border", action="store_true", help="Draw a dotted frame around the plot.")
    parser.add_argument("--color", default=None, help="Line color as #rrggbb; enables ANSI color output.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        func = compile_formula(args.formula)
    except ExpressionError as exc:
        print(exc, file=sys.stderr)
        return EXIT_FORMULA

    if (args.ymin is None) != (args.ymax is None):
        print("both ymin and ymax must be specified", file=sys.stderr)
        return EXIT_CONFIG

    try:
        config = ChartConfig(
            width=args.width,
            height=args.height,
            color=args.color,
            x_axis_style=AxisStyle(args.axis),
            y_axis_style=AxisStyle(args.axis),
            borders=args.border,
        )
        chart = Chart(xmin=args.xmin, xmax=args.xmax, ymin=args.ymin, ymax=args.ymax, config=config)
        print(f"y = {args.formula}")
        chart.plot(Continuous(func)).display(sys.stdout, color=True if args.color else None)
    except ConfigurationError as exc:
        print(exc, file=sys.stderr)
        return EXIT_CONFIG
    LOGGER.debug("rendered %s", chart)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
